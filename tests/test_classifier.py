"""Tests for answer classification."""

import pytest

from quizmark.engine.classifier import AnswerState, answer_state, classify
from quizmark.engine.quiz_loader import parse_question


class TestClassify:
    def test_label_match(self):
        assert classify("A", "Paris", "A")

    def test_label_mismatch(self):
        assert not classify("b", "Paris", "A")

    def test_text_as_correct_answer(self):
        assert classify("A", "Paris", "Paris")

    def test_text_match_ignores_case_and_space(self):
        assert classify("C", "  paris ", "PARIS")

    @pytest.mark.parametrize(
        "label,option,correct",
        [("a", "Paris", "A"), ("b", "Lyon", "a"), ("c", "Nice", "nice"), ("d", "x", "B")],
    )
    def test_case_symmetry(self, label, option, correct):
        assert classify(label.lower(), option, correct.upper()) == classify(
            label.upper(), option, correct.lower()
        )

    @pytest.mark.parametrize("selected", ["A", "", "b", "Paris"])
    @pytest.mark.parametrize("option", ["", "Paris", "A"])
    def test_empty_correct_answer_never_matches(self, selected, option):
        assert classify(selected, option, "") is False
        assert classify(selected, option, None) is False
        assert classify(selected, option, "   ") is False

    def test_no_selection(self):
        assert not classify(None, "", "A")
        assert not classify("", "", "A")

    def test_whitespace_trimmed(self):
        assert classify(" a ", "", "A\n")


class TestAnswerState:
    @pytest.fixture
    def question(self):
        return parse_question({
            "question": "What is the capital of France?",
            "options": ["Paris", "Lyon", "Nice", "Lille"],
            "correctAnswer": "A",
        })

    def test_correct(self, question):
        assert answer_state(question, "a") == AnswerState(selected_label="A", is_correct=True)

    def test_incorrect(self, question):
        assert answer_state(question, "C") == AnswerState(selected_label="C", is_correct=False)

    def test_unknown_label(self, question):
        assert answer_state(question, "Z").is_correct is False

    def test_timed_out(self, question):
        assert answer_state(question, None) == AnswerState(selected_label=None, is_correct=False)
