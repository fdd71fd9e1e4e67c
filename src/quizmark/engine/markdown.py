"""Generic markdown cleanup and code-block splitting.

Cleanup is line-oriented and idempotent:
- single space after heading markers
- canonical table separator rows, synthesized when a header lacks one
- exactly one space after list markers
- no trailing whitespace, at most one blank line in a row

Lines inside fenced code blocks are left alone.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

FENCE_RE = re.compile(r"^\s*```")
HEADING_RE = re.compile(r"^(#{1,6})(?!#)[ \t]*(\S.*)$")
BULLET_RE = re.compile(r"^(\s*[-*])[ \t]+(?=\S)")
NUMBERED_RE = re.compile(r"^(\s*\d+\.)[ \t]+(?=\S)")
TABLE_ROW_RE = re.compile(r"^\s*\|.*\|\s*$")
SEPARATOR_CELL_RE = re.compile(r"^\s*:?-+:?\s*$")
BLANK_RUN_RE = re.compile(r"\n{3,}")


def _split_cells(row: str) -> list[str]:
    return row.strip()[1:-1].split("|")


def _is_table_row(line: str) -> bool:
    return bool(TABLE_ROW_RE.match(line)) and len(line.strip()) > 1


def _is_separator_row(line: str) -> bool:
    if not _is_table_row(line):
        return False
    return all(SEPARATOR_CELL_RE.match(cell) for cell in _split_cells(line))


def _separator_cell(cell: str) -> str:
    cell = cell.strip()
    left = ":" if cell.startswith(":") else ""
    right = ":" if cell.endswith(":") and len(cell) > 1 else ""
    return f"{left}---{right}"


def _separator_row(columns: int, template: Optional[str] = None) -> str:
    cells = _split_cells(template) if template else []
    rendered = [
        _separator_cell(cells[i]) if i < len(cells) else "---"
        for i in range(columns)
    ]
    return "| " + " | ".join(rendered) + " |"


def _fix_tables(lines: list[str]) -> list[str]:
    """Canonicalize separator rows and add missing ones under header rows."""
    out: list[str] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        starts_table = _is_table_row(line) and (not out or not _is_table_row(out[-1]))
        if starts_table and not _is_separator_row(line):
            columns = len(_split_cells(line))
            out.append(line)
            nxt = lines[i + 1] if i + 1 < len(lines) else None
            if nxt is not None and _is_separator_row(nxt):
                out.append(_separator_row(columns, nxt))
                i += 2
            else:
                out.append(_separator_row(columns))
                i += 1
            continue
        out.append(line)
        i += 1
    return out


def _fix_line(line: str) -> str:
    heading = HEADING_RE.match(line)
    if heading:
        return f"{heading.group(1)} {heading.group(2)}"
    line = BULLET_RE.sub(r"\1 ", line, count=1)
    return NUMBERED_RE.sub(r"\1 ", line, count=1)


def cleanup_markdown(text: str) -> str:
    """Apply the generic markdown cleanup rules to ``text``."""
    if not text:
        return ""

    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    lines = [line.rstrip() for line in lines]

    # Fenced code is copied verbatim; everything else gets the line rules.
    result: list[str] = []
    chunk: list[str] = []
    in_fence = False
    for line in lines:
        if FENCE_RE.match(line):
            if not in_fence:
                result.extend(_fix_tables([_fix_line(l) for l in chunk]))
                chunk = []
            result.append(line)
            in_fence = not in_fence
            continue
        if in_fence:
            result.append(line)
        else:
            chunk.append(line)
    result.extend(_fix_tables([_fix_line(l) for l in chunk]))

    return BLANK_RUN_RE.sub("\n\n", "\n".join(result)).strip()


@dataclass
class Segment:
    kind: str  # "text" or "code"
    content: str
    language: Optional[str] = None

    def to_dict(self) -> dict:
        return {"kind": self.kind, "content": self.content, "language": self.language}


def split_code_blocks(text: str) -> list[Segment]:
    """Split text at ``` fences into alternating text and code segments.

    The first line of a code part names its language (may be empty).
    Empty text parts are dropped.
    """
    segments: list[Segment] = []
    for index, part in enumerate((text or "").split("```")):
        if index % 2 == 0:
            if part.strip():
                segments.append(Segment(kind="text", content=part))
            continue
        first, _, rest = part.partition("\n")
        language = first.strip() or None
        segments.append(Segment(kind="code", content=rest.rstrip("\n"), language=language))
    return segments
