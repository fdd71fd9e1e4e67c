"""Markdown review summaries of finished quizzes."""

from __future__ import annotations

import hashlib
import logging
from collections import OrderedDict
from typing import Optional

from quizmark.engine.classifier import answer_state
from quizmark.engine.markdown import cleanup_markdown
from quizmark.engine.options import Marker, OptionEntry
from quizmark.engine.quiz_loader import QuizData, QuizQuestion

logger = logging.getLogger(__name__)


class SummaryCache:
    """Small LRU of rendered summaries.

    Quiz data never changes once generated, so entries are never invalidated;
    the oldest ones are simply evicted past ``max_size``.
    """

    def __init__(self, max_size: int = 32):
        self.max_size = max_size
        self._entries: OrderedDict[str, str] = OrderedDict()

    @staticmethod
    def key_for(quiz: QuizData, score: int) -> str:
        digest = hashlib.sha256(
            "\n".join(q.question for q in quiz.questions).encode("utf-8")
        ).hexdigest()
        return f"{digest}-{score}-{quiz.total_questions}"

    def get(self, key: str) -> Optional[str]:
        if key not in self._entries:
            return None
        self._entries.move_to_end(key)
        return self._entries[key]

    def put(self, key: str, summary: str) -> None:
        self._entries[key] = summary
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)

    def __len__(self) -> int:
        return len(self._entries)


def quiz_score(quiz: QuizData) -> int:
    """Stored score if present, otherwise recomputed from the user's answers."""
    if quiz.score is not None:
        return int(quiz.score)
    return sum(1 for q in quiz.questions if answer_state(q, q.user_answer).is_correct)


def _encouragement(rate: int) -> str:
    if rate >= 80:
        return "Excellent work! Let's review the questions to strengthen your understanding."
    if rate >= 60:
        return "Good effort! Let's review the questions to help clarify any areas of confusion."
    return "Let's review the questions to help improve your understanding of this topic."


def _marked_options(question: QuizQuestion) -> list[OptionEntry]:
    user = question.user_answer
    correct = question.correct_answer
    marked = []
    for option in question.options:
        marker = None
        if option.label == user:
            marker = Marker.USER_CORRECT if option.label == correct else Marker.USER_INCORRECT
        elif option.label == correct:
            marker = Marker.CORRECT
        marked.append(OptionEntry(label=option.label, text=option.text, marker=marker))
    return marked


def quiz_summary(quiz: QuizData, cache: Optional[SummaryCache] = None) -> str:
    """Build the review markdown the assistant chat opens with."""
    score = quiz_score(quiz)
    key = SummaryCache.key_for(quiz, score)
    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            logger.debug("quiz summary cache hit")
            return cached

    total = quiz.total_questions
    rate = round(score / total * 100) if total else 0

    parts = [
        f"# Quiz Review: {quiz.course_name}",
        f"## Score: {score}/{total} ({rate}%)",
        _encouragement(rate),
    ]
    for number, question in enumerate(quiz.questions, start=1):
        if number > 1:
            parts.append("---")
        parts.append(f"#### {number}. {question.question}")
        parts.append("\n".join(o.render() for o in _marked_options(question)))

    summary = cleanup_markdown("\n\n".join(parts))
    if cache is not None:
        cache.put(key, summary)
    return summary
