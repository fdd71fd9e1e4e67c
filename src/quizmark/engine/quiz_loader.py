"""Quiz data loading (YAML or JSON) into normalized question objects."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from quizmark.engine.options import OptionEntry, build_options, strip_option_prefix

logger = logging.getLogger(__name__)

FALLBACK_ANSWER = "A"
LABEL_PREFIX_RE = re.compile(r"^([A-Za-z])[.):](?:\s|$)")


@dataclass
class QuizQuestion:
    question: str
    options: list[OptionEntry]
    correct_answer: str
    user_answer: Optional[str] = None

    def option(self, label: str) -> Optional[OptionEntry]:
        label = label.strip().upper()
        for entry in self.options:
            if entry.label == label:
                return entry
        return None


@dataclass
class QuizData:
    course_name: str
    difficulty: str
    questions: list[QuizQuestion] = field(default_factory=list)
    time_per_question: int = 30
    score: Optional[int] = None  # stored score, when the quiz was already taken

    @property
    def total_questions(self) -> int:
        return len(self.questions)


def resolve_correct_answer(raw: Any, options: list[OptionEntry]) -> str:
    """Turn a stored correct answer into one of the option labels.

    Accepts a label ("b"), a prefixed label ("B) Paris") or the answer text
    itself. Anything else falls back to ``A``.
    """
    value = str(raw or "").strip()
    labels = {o.label for o in options}

    if value.upper() in labels:
        return value.upper()

    prefixed = LABEL_PREFIX_RE.match(value)
    if prefixed and prefixed.group(1).upper() in labels:
        return prefixed.group(1).upper()

    text = strip_option_prefix(value).lower()
    if text:
        for entry in options:
            if entry.text.lower() == text:
                return entry.label

    logger.warning("invalid correct answer %r, using %s", value, FALLBACK_ANSWER)
    return FALLBACK_ANSWER


def parse_question(raw: dict) -> QuizQuestion:
    options = build_options(raw.get("options") or [])
    user_answer = raw.get("userAnswer")
    return QuizQuestion(
        question=str(raw.get("question", "")).strip(),
        options=options,
        correct_answer=resolve_correct_answer(raw.get("correctAnswer"), options),
        user_answer=str(user_answer).strip().upper() if user_answer else None,
    )


def parse_quiz(
    data: dict,
    difficulty: str = "Medium",
    time_per_question: int = 30,
) -> QuizData:
    """Build QuizData from a mapping shaped like the quiz API payloads.

    ``difficulty`` and ``time_per_question`` fill in keys that are missing
    or null in ``data``.
    """
    if not isinstance(data, dict):
        raise ValueError("Quiz data must be a mapping")
    questions = data.get("questions")
    if not isinstance(questions, list):
        raise ValueError("Quiz data has no 'questions' list")

    try:
        time_limit = int(data.get("timePerQuestion") or time_per_question)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid timePerQuestion: {data.get('timePerQuestion')!r}")

    return QuizData(
        course_name=str(data.get("courseName") or ""),
        difficulty=str(data.get("difficulty") or difficulty),
        questions=[parse_question(q) for q in questions if isinstance(q, dict)],
        time_per_question=time_limit,
        score=data.get("score"),
    )


def load_quiz(path: Path, **defaults: Any) -> QuizData:
    """Load a quiz file; ``.json`` is read as JSON, anything else as YAML.

    ``defaults`` are passed on to ``parse_quiz``.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Quiz file not found: {path}")

    with open(path, encoding="utf-8") as f:
        if path.suffix == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    return parse_quiz(data, **defaults)
