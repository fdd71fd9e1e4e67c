"""Quiz session state machine: unanswered → viewed, with scoring and timers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from quizmark.engine.classifier import AnswerState, answer_state
from quizmark.engine.quiz_loader import QuizData, QuizQuestion

logger = logging.getLogger(__name__)


class QuestionStatus(str, Enum):
    UNANSWERED = "unanswered"
    VIEWED = "viewed"  # answered or timed out; terminal for scoring


@dataclass
class QuestionState:
    time_left: int
    status: QuestionStatus = QuestionStatus.UNANSWERED
    selected_label: Optional[str] = None
    is_correct: bool = False
    time_expired: bool = False

    @property
    def viewed(self) -> bool:
        return self.status == QuestionStatus.VIEWED

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "userAnswer": self.selected_label,
            "isCorrect": self.is_correct,
            "timeExpired": self.time_expired,
            "timeLeft": self.time_left,
        }


RESULT_MESSAGES: list[tuple[int, str]] = [
    (90, "Excellent! You've mastered this topic!"),
    (80, "Great job! You have a strong understanding!"),
    (70, "Good work! Keep practicing to improve further."),
    (60, "Not bad! A bit more study will help."),
]
DEFAULT_RESULT_MESSAGE = "You might want to review this topic and try again."


def result_message(score: int, total: int) -> str:
    """Encouragement line for a finished quiz, banded by percentage."""
    percentage = (score / total) * 100 if total else 0
    for threshold, message in RESULT_MESSAGES:
        if percentage >= threshold:
            return message
    return DEFAULT_RESULT_MESSAGE


class QuizSession:
    """Drives one quiz attempt: answers, timers, navigation and scoring."""

    def __init__(self, quiz: QuizData, time_per_question: Optional[int] = None):
        self.quiz = quiz
        self.time_per_question = time_per_question or quiz.time_per_question
        self.states = [
            QuestionState(time_left=self.time_per_question) for _ in quiz.questions
        ]
        self.current_index = 0
        self.score = 0
        self.started_at = datetime.now(timezone.utc)
        self.finished_at: Optional[datetime] = None

    @property
    def current_question(self) -> Optional[QuizQuestion]:
        if 0 <= self.current_index < len(self.quiz.questions):
            return self.quiz.questions[self.current_index]
        return None

    @property
    def current_state(self) -> Optional[QuestionState]:
        if 0 <= self.current_index < len(self.states):
            return self.states[self.current_index]
        return None

    @property
    def is_last_question(self) -> bool:
        return self.current_index >= len(self.states) - 1

    def select(self, label: str) -> Optional[AnswerState]:
        """Answer the current question.

        Only the first selection counts; selecting again once the question
        has been viewed returns the stored result unchanged.
        """
        question = self.current_question
        state = self.current_state
        if question is None or state is None:
            return None

        if state.viewed:
            return AnswerState(selected_label=state.selected_label, is_correct=state.is_correct)

        result = answer_state(question, label)
        state.status = QuestionStatus.VIEWED
        state.selected_label = result.selected_label
        state.is_correct = result.is_correct
        if result.is_correct:
            self.score += 1

        logger.debug(
            "question %d answered %s (correct=%s)",
            self.current_index, result.selected_label, result.is_correct,
        )
        return result

    def expire(self) -> Optional[QuestionState]:
        """Time ran out on the current question: viewed, unanswered, wrong."""
        state = self.current_state
        if state is None or state.viewed:
            return state
        state.status = QuestionStatus.VIEWED
        state.selected_label = None
        state.is_correct = False
        state.time_expired = True
        state.time_left = 0
        return state

    def tick(self, seconds: int = 1) -> Optional[QuestionState]:
        """Advance the current question's countdown, expiring it at zero."""
        state = self.current_state
        if state is None or state.viewed:
            return state
        state.time_left = max(0, state.time_left - seconds)
        if state.time_left == 0:
            return self.expire()
        return state

    def next_question(self) -> Optional[QuizQuestion]:
        if self.is_last_question:
            return None
        self.current_index += 1
        state = self.states[self.current_index]
        if not state.viewed:
            state.time_left = self.time_per_question
        return self.current_question

    def previous_question(self) -> Optional[QuizQuestion]:
        if self.current_index <= 0:
            return None
        self.current_index -= 1
        return self.current_question

    def final_score(self) -> int:
        return sum(1 for s in self.states if s.is_correct)

    def finish(self) -> dict:
        """Stop the quiz and return the result payload for saving."""
        self.finished_at = datetime.now(timezone.utc)
        return self.result_payload()

    def result_payload(self) -> dict:
        """Quiz-result document in the shape the results API stores."""
        final = self.final_score()
        end = self.finished_at or datetime.now(timezone.utc)
        time_spent_ms = int((end - self.started_at).total_seconds() * 1000)
        return {
            "courseName": self.quiz.course_name,
            "difficulty": self.quiz.difficulty,
            "questions": [
                {
                    "question": q.question,
                    "options": [o.to_dict() for o in q.options],
                    "userAnswer": state.selected_label,
                    "correctAnswer": q.correct_answer,
                    "isCorrect": state.is_correct,
                }
                for q, state in zip(self.quiz.questions, self.states)
            ],
            "score": final,
            "correctAnswers": final,
            "totalQuestions": self.quiz.total_questions,
            "timePerQuestion": self.time_per_question,
            "timeSpent": time_spent_ms,
            "message": result_message(final, self.quiz.total_questions),
            "date": end.isoformat(),
        }
