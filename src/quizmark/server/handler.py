"""Server handler: dispatches JSON-lines requests to engine components."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from quizmark.config.settings import Settings
from quizmark.engine.chat import ChatMessage, organize_messages, render_message
from quizmark.engine.classifier import classify
from quizmark.engine.markdown import split_code_blocks
from quizmark.engine.normalizer import normalize
from quizmark.engine.options import strip_option_prefix
from quizmark.engine.quiz_loader import QuizData, QuizQuestion, parse_quiz
from quizmark.engine.review import SummaryCache, quiz_summary
from quizmark.engine.session import QuizSession

from .protocol import Notification

logger = logging.getLogger(__name__)


def _question_to_dict(question: Optional[QuizQuestion]) -> dict:
    """Serialize a QuizQuestion to a JSON-friendly dict."""
    if question is None:
        return {}
    return {
        "question": question.question,
        "options": [o.to_dict() for o in question.options],
    }


class ServerHandler:
    """Routes incoming requests to engine functions and returns result dicts."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        write_notification: Optional[Callable[[Notification], None]] = None,
    ):
        self.settings = settings or Settings.load()
        self._write_notification = write_notification or (lambda n: None)

        self.summaries = SummaryCache(max_size=self.settings.summary_cache_size)
        self._session: Optional[QuizSession] = None

    async def dispatch(self, msg: dict) -> dict:
        """Route a request message to the appropriate handler method."""
        method = msg.get("method", "")
        params = msg.get("params", {})

        handler_map = {
            "normalize": self._normalize,
            "classify": self._classify,
            "stripOptionPrefix": self._strip_option_prefix,
            "splitCodeBlocks": self._split_code_blocks,
            "quizSummary": self._quiz_summary,
            "organizeMessages": self._organize_messages,
            "startQuiz": self._start_quiz,
            "selectAnswer": self._select_answer,
            "tick": self._tick,
            "expireQuestion": self._expire_question,
            "nextQuestion": self._next_question,
            "previousQuestion": self._previous_question,
            "finishQuiz": self._finish_quiz,
        }

        handler = handler_map.get(method)
        if handler is None:
            raise ValueError(f"Unknown method: {method}")

        logger.debug("dispatch %s", method)
        return await handler(params)

    # --- Text pipeline ---

    async def _normalize(self, params: dict) -> dict:
        return {"text": normalize(params.get("text", ""))}

    async def _classify(self, params: dict) -> dict:
        return {
            "isCorrect": classify(
                params.get("selectedLabel"),
                params.get("optionText"),
                params.get("correctAnswer"),
            )
        }

    async def _strip_option_prefix(self, params: dict) -> dict:
        return {"text": strip_option_prefix(params.get("text", ""))}

    async def _split_code_blocks(self, params: dict) -> dict:
        text = normalize(params.get("text", ""))
        return {"segments": [s.to_dict() for s in split_code_blocks(text)]}

    def _parse_quiz(self, params: dict) -> QuizData:
        return parse_quiz(
            params["quiz"],
            difficulty=self.settings.difficulty.value,
            time_per_question=self.settings.time_per_question,
        )

    async def _quiz_summary(self, params: dict) -> dict:
        quiz = self._parse_quiz(params)
        return {"summary": quiz_summary(quiz, cache=self.summaries)}

    async def _organize_messages(self, params: dict) -> dict:
        messages = [ChatMessage.from_dict(m) for m in params.get("messages", [])]
        return {
            "messages": [
                {**m.to_dict(), "rendered": render_message(m)}
                for m in organize_messages(messages)
            ]
        }

    # --- Quiz session ---

    def _require_session(self) -> QuizSession:
        if self._session is None:
            raise ValueError("No quiz started")
        return self._session

    def _position(self) -> dict:
        session = self._require_session()
        state = session.current_state
        return {
            "question": _question_to_dict(session.current_question),
            "state": state.to_dict() if state else {},
            "currentIndex": session.current_index,
            "totalQuestions": len(session.states),
            "score": session.score,
        }

    async def _start_quiz(self, params: dict) -> dict:
        quiz = self._parse_quiz(params)
        if not quiz.questions:
            raise ValueError("Quiz has no questions")
        self._session = QuizSession(quiz, time_per_question=params.get("timePerQuestion"))
        return self._position()

    async def _select_answer(self, params: dict) -> dict:
        session = self._require_session()
        result = session.select(params["label"])
        return {
            "selectedLabel": result.selected_label if result else None,
            "isCorrect": result.is_correct if result else False,
            "score": session.score,
        }

    async def _tick(self, params: dict) -> dict:
        session = self._require_session()
        state = session.current_state
        was_viewed = state.viewed if state else True
        session.tick(int(params.get("seconds", 1)))
        if not was_viewed and state is not None and state.time_expired:
            self._write_notification(Notification(
                "questionExpired", {"currentIndex": session.current_index}
            ))
        return self._position()

    async def _expire_question(self, params: dict) -> dict:
        self._require_session().expire()
        return self._position()

    async def _next_question(self, params: dict) -> dict:
        session = self._require_session()
        if session.next_question() is None:
            return {"atEnd": True, **self._position()}
        return {"atEnd": False, **self._position()}

    async def _previous_question(self, params: dict) -> dict:
        session = self._require_session()
        if session.previous_question() is None:
            return {"atStart": True, **self._position()}
        return {"atStart": False, **self._position()}

    async def _finish_quiz(self, params: dict) -> dict:
        session = self._require_session()
        payload = session.finish()
        self._session = None
        return payload
