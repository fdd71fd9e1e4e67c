"""Chat message helpers for the assistant view."""

from __future__ import annotations

from dataclasses import dataclass

from quizmark.engine.normalizer import normalize

DEDUPE_PREFIX_CHARS = 100


@dataclass
class ChatMessage:
    role: str  # "user" or "assistant"
    content: str

    @classmethod
    def from_dict(cls, data: dict) -> ChatMessage:
        return cls(role=str(data.get("role", "user")), content=str(data.get("content") or ""))

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


def organize_messages(messages: list[ChatMessage]) -> list[ChatMessage]:
    """Drop repeated messages and trim content.

    Two messages are duplicates when they share a role and the first 100
    characters of content; the first one is kept.
    """
    seen: set[tuple[str, str]] = set()
    organized: list[ChatMessage] = []
    for message in messages:
        key = (message.role, message.content[:DEDUPE_PREFIX_CHARS])
        if key in seen:
            continue
        seen.add(key)
        organized.append(ChatMessage(role=message.role, content=message.content.strip()))
    return organized


def render_message(message: ChatMessage) -> str:
    """Display text for a message: assistant replies are normalized."""
    if message.role == "assistant":
        return normalize(message.content)
    return message.content.strip()
