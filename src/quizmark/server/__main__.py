"""quizmark JSON-lines server entry point.

Usage: python -m quizmark.server

Reads JSON requests from stdin (one per line), writes JSON responses to stdout.
All logging goes to stderr to keep the protocol clean.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from quizmark.config.logging_setup import configure_logging
from quizmark.config.settings import Settings

from .handler import ServerHandler
from .protocol import Notification, Request, Response

logger = logging.getLogger("quizmark.server")


async def handle_line(handler: ServerHandler, line: str) -> Response:
    """Decode one request line, dispatch it and wrap the outcome."""
    try:
        request = Request.from_json_line(line)
    except ValueError as e:
        logger.warning("quizmark-server: bad request: %s", e)
        return Response(id=0, error=str(e))

    try:
        result = await handler.dispatch(request.to_dict())
    except Exception as e:
        logger.error("quizmark-server: %s failed: %s", request.method, e)
        return Response(id=request.id, error=str(e))
    return Response(id=request.id, result=result)


async def main(settings: Settings | None = None) -> None:
    settings = settings or Settings.load()
    configure_logging(settings.get_log_level())
    loop = asyncio.get_running_loop()

    def write_line(text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    def write_notification(notification: Notification) -> None:
        write_line(notification.to_json_line())

    handler = ServerHandler(settings=settings, write_notification=write_notification)

    logger.info("quizmark-server: ready")

    reader = asyncio.StreamReader()
    protocol = asyncio.StreamReaderProtocol(reader)
    await loop.connect_read_pipe(lambda: protocol, sys.stdin)

    while True:
        line = await reader.readline()
        if not line:
            break  # stdin closed

        line_str = line.decode("utf-8", errors="replace").strip()
        if not line_str:
            continue

        response = await handle_line(handler, line_str)
        write_line(response.to_json_line())


if __name__ == "__main__":
    asyncio.run(main())
