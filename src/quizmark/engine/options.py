"""Option entries and option-prefix stripping."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional


class Marker(str, Enum):
    CORRECT = "correct"
    USER_INCORRECT = "user_incorrect"
    USER_CORRECT = "user_correct"


SUFFIXES: dict[Marker, str] = {
    Marker.CORRECT: "✓ (Correct answer)",
    Marker.USER_INCORRECT: "❌ (Your answer - Incorrect)",
    Marker.USER_CORRECT: "✓ (Your answer - Correct)",
}

# Applied in order, one pass each, until the text stops changing.
PREFIX_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"^([A-Da-d])[.):]\s*\1[.):]\s*"),  # "A. A:" / "D) D:"
    re.compile(r"^[A-D][.):]\s*"),  # "A." / "A)" / "A:"
    re.compile(r"^[A-D]\s+"),  # "A text"
    re.compile(r"^[a-d][.):]\s*"),
    re.compile(r"^[a-d]\s+"),
    re.compile(r"^[1-9][.):](?!\d)\s*"),  # "1." but not "3.14"
]


@dataclass
class OptionEntry:
    label: str
    text: str
    marker: Optional[Marker] = None

    @property
    def is_correct(self) -> bool:
        return self.marker in (Marker.CORRECT, Marker.USER_CORRECT)

    @property
    def is_user_choice(self) -> bool:
        return self.marker in (Marker.USER_CORRECT, Marker.USER_INCORRECT)

    def render(self) -> str:
        """Render as a canonical ``- A. text`` markdown line."""
        parts = [f"- {self.label}."]
        if self.text:
            parts.append(self.text)
        if self.marker is not None:
            parts.append(SUFFIXES[self.marker])
        return " ".join(parts)

    def to_dict(self) -> dict:
        return {"label": self.label, "text": self.text}


def strip_option_prefix(text: str) -> str:
    """Remove every redundant letter/number prefix from option text.

    >>> strip_option_prefix("D) D: Dictionary")
    'Dictionary'
    """
    if not text:
        return ""
    current = text.strip()
    while True:
        stripped = current
        for pattern in PREFIX_PATTERNS:
            stripped = pattern.sub("", stripped, count=1)
        stripped = stripped.strip()
        if stripped == current:
            return current
        current = stripped


def option_label(index: int) -> str:
    """Positional label: 0 -> A, 1 -> B, ..."""
    return chr(ord("A") + index)


def option_text(value: Any) -> str:
    """Coerce a raw option (string or ``{"text": ...}`` mapping) to its text."""
    if value is None:
        return ""
    if isinstance(value, dict):
        return str(value.get("text") or "")
    return str(value)


def build_options(raw_options: Iterable[Any]) -> list[OptionEntry]:
    """Build positionally-labelled, prefix-stripped entries from raw options."""
    return [
        OptionEntry(label=option_label(i), text=strip_option_prefix(option_text(raw)))
        for i, raw in enumerate(raw_options or [])
    ]
