"""Answer correctness classification."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from quizmark.engine.quiz_loader import QuizQuestion


@dataclass
class AnswerState:
    selected_label: Optional[str]
    is_correct: bool


def _norm(value: Optional[str]) -> str:
    return (value or "").strip().upper()


def classify(
    selected_label: Optional[str],
    option_text: Optional[str],
    correct_label: Optional[str],
) -> bool:
    """Decide whether a selected option is the correct answer.

    Matches on the option label first, then on the option text, since some
    generated quizzes store the answer text in the correct-answer field.
    Case and surrounding whitespace are ignored. An empty correct answer is
    never matched.
    """
    correct = _norm(correct_label)
    if not correct:
        return False
    if _norm(selected_label) == correct:
        return True
    return _norm(option_text) == correct


def answer_state(question: "QuizQuestion", selected_label: Optional[str]) -> AnswerState:
    """Classify a selection against a loaded question."""
    label = _norm(selected_label) or None
    option = question.option(label) if label else None
    text = option.text if option else ""
    return AnswerState(
        selected_label=label,
        is_correct=classify(label, text, question.correct_answer),
    )
