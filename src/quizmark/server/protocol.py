"""JSON-lines messages exchanged with the chat front end.

One JSON object per line. Requests carry an ``id``, a ``method`` and optional
``params``; every request gets exactly one response with the same ``id``.
Notifications are pushed by the server without an ``id``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class Request:
    id: int
    method: str
    params: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Request:
        if not isinstance(data, dict):
            raise ValueError("Request must be a JSON object")
        method = data.get("method")
        if not isinstance(method, str) or not method:
            raise ValueError("Request has no method")
        params = data.get("params") or {}
        if not isinstance(params, dict):
            raise ValueError("Request params must be an object")
        return cls(id=data.get("id", 0), method=method, params=params)

    @classmethod
    def from_json_line(cls, line: str) -> Request:
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}") from e
        return cls.from_dict(data)

    def to_dict(self) -> dict:
        return {"id": self.id, "method": self.method, "params": self.params}


@dataclass
class Response:
    id: int
    result: Optional[dict] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_json_line(self) -> str:
        body: dict[str, Any] = {"id": self.id}
        if self.ok:
            body["result"] = self.result
        else:
            body["error"] = self.error
        return json.dumps(body, ensure_ascii=False) + "\n"


@dataclass
class Notification:
    method: str
    params: dict = field(default_factory=dict)

    def to_json_line(self) -> str:
        return json.dumps({"method": self.method, "params": self.params}, ensure_ascii=False) + "\n"
