"""Tests for quiz-aware markdown normalization."""

import pytest

from quizmark.engine.normalizer import (
    extract_annotations,
    is_quiz_shaped,
    normalize,
    parse_question,
)
from quizmark.engine.options import Marker


INIT_QUIZ = (
    "What is the purpose of the __init__ method in a Python class? Options: A. To destroy an object\n"
    "B. To initialize an object's attributes ✅ 👉 C. To define the class's name\n"
    "D. To call the parent class's methods\n"
    "Your Answer: C ❌ Wrong\n"
    "Correct answer was B"
)
ONE_LINE_QUIZ = (
    "How do you declare a constant in JavaScript? "
    "A. const myVar = 10 ✓ B. let myVar = 10 C. var myVar = 10 D. constant myVar = 10"
)
DASHED_QUIZ = (
    "What command is used to create a new Git repository?\n"
    "- A. git init (Correct answer)\n"
    "- B. git start\n"
    "- C. git create\n"
    "- D. git new (Your answer - Incorrect)"
)


class TestDetection:
    def test_trailing_question_mark_alone(self):
        assert not is_quiz_shaped("Hello, how can I help you today?")

    def test_question_without_hints(self):
        assert not is_quiz_shaped("What is Python? It is a programming language.")

    def test_options_marker(self):
        assert is_quiz_shaped("Which one? Options: pick")

    def test_correctness_marker(self):
        assert is_quiz_shaped("Which one is right? Paris ✅")

    def test_plain_letters(self, paren_quiz_text):
        assert is_quiz_shaped(paren_quiz_text)

    def test_empty(self):
        assert not is_quiz_shaped("")


class TestQuizShapes:
    def test_bold_dash_options(self, bold_quiz_text):
        result = normalize(bold_quiz_text)
        assert result == (
            "Which data structure is best suited for storing unique, unordered elements?\n\n"
            "- A. List ❌ (Your answer - Incorrect)\n"
            "- B. Tuple\n"
            "- C. Set ✓ (Correct answer)\n"
            "- D. Dictionary"
        )
        assert "Your Answer: A ❌ Wrong" not in result

    def test_bold_dash_option_lines(self, bold_quiz_text):
        lines = [l for l in normalize(bold_quiz_text).splitlines() if l.startswith("- ")]
        assert [l[2] for l in lines] == ["A", "B", "C", "D"]
        assert lines[2].endswith("✓ (Correct answer)")
        assert lines[0].endswith("❌ (Your answer - Incorrect)")

    def test_parenthesis_options(self, paren_quiz_text):
        assert normalize(paren_quiz_text) == (
            "When was Python first released?\n\n"
            "- A. 1991 ✓ (Correct answer)\n"
            "- B. 1995\n"
            "- C. 2000 ❌ (Your answer - Incorrect)\n"
            "- D. 2005"
        )

    def test_trailing_answer_sentences_back_applied(self):
        assert normalize(INIT_QUIZ) == (
            "What is the purpose of the __init__ method in a Python class?\n\n"
            "- A. To destroy an object\n"
            "- B. To initialize an object's attributes ✓ (Correct answer)\n"
            "- C. To define the class's name ❌ (Your answer - Incorrect)\n"
            "- D. To call the parent class's methods"
        )

    def test_options_on_one_line(self):
        assert normalize(ONE_LINE_QUIZ) == (
            "How do you declare a constant in JavaScript?\n\n"
            "- A. const myVar = 10 ✓ (Correct answer)\n"
            "- B. let myVar = 10\n"
            "- C. var myVar = 10\n"
            "- D. constant myVar = 10"
        )

    def test_already_dashed_options(self):
        assert normalize(DASHED_QUIZ) == (
            "What command is used to create a new Git repository?\n\n"
            "- A. git init ✓ (Correct answer)\n"
            "- B. git start\n"
            "- C. git create\n"
            "- D. git new ❌ (Your answer - Incorrect)"
        )

    def test_bold_without_dash(self):
        text = "Which is a tuple? **A. ** (1, 2) ✅\n**B. ** [1, 2]"
        assert normalize(text) == "Which is a tuple?\n\n- A. (1, 2) ✓ (Correct answer)\n- B. [1, 2]"

    def test_doubled_prefixes_in_options(self):
        text = "Which city is the capital of France? A. A: Paris ✓\nB. B) Lyon\nC. Nice\nD. D: Lille"
        result = normalize(text)
        assert "- A. Paris ✓ (Correct answer)" in result
        assert "- B. Lyon" in result
        assert "- D. Lille" in result

    def test_text_before_question_discarded(self):
        text = "Here is your quiz!\n\nWhich is mutable? A. tuple B. list ✓"
        assert normalize(text) == "Which is mutable?\n\n- A. tuple\n- B. list ✓ (Correct answer)"

    def test_trailing_note_kept(self):
        text = "Which is mutable? A. tuple\nB. list ✓\n\nLists can change after creation."
        assert normalize(text) == (
            "Which is mutable?\n\n- A. tuple\n- B. list ✓ (Correct answer)\n\n"
            "Lists can change after creation."
        )

    def test_user_picked_correct_option(self):
        text = "Which is mutable? A. tuple\nB. list ✓\nYour Answer: B ✅ Correct"
        assert normalize(text) == "Which is mutable?\n\n- A. tuple\n- B. list ✓ (Your answer - Correct)"

    def test_cross_without_user_evidence_is_dropped(self):
        text = "Which is mutable? A. tuple ❌\nB. list ✓"
        assert normalize(text) == "Which is mutable?\n\n- A. tuple\n- B. list ✓ (Correct answer)"

    def test_single_option_is_not_a_quiz(self):
        text = "What is your name? I am A. Smith"
        assert normalize(text) == text


class TestParseQuestion:
    def test_markers(self, paren_quiz_text):
        question = parse_question(paren_quiz_text)
        assert question is not None
        assert question.text == "When was Python first released?"
        markers = {o.label: o.marker for o in question.options}
        assert markers == {
            "A": Marker.CORRECT,
            "B": None,
            "C": Marker.USER_INCORRECT,
            "D": None,
        }

    def test_single_correct_marker(self):
        question = parse_question("Which? A. one ✓ B. two ✓ C. three")
        assert [o.label for o in question.options if o.is_correct] == ["A"]

    def test_correct_answer_sentence_wins(self):
        question = parse_question("Which? A. one ✓ B. two\nCorrect answer was B")
        assert [o.label for o in question.options if o.is_correct] == ["B"]

    def test_no_question(self):
        assert parse_question("A. one B. two") is None


def test_extract_annotations():
    block, notes = extract_annotations("A. x\nB. y\nYour Answer: B ❌ Wrong\nCorrect answer was A")
    assert notes.user_letter == "B"
    assert notes.user_wrong is True
    assert notes.correct_letter == "A"
    assert "Your Answer" not in block
    assert "Correct answer was" not in block


def test_annotation_phrases_ignore_case():
    _, notes = extract_annotations("your answer: C ❌\nthe CORRECT answer was B.")
    assert notes.user_letter == "C"
    assert notes.user_wrong is True
    assert notes.correct_letter == "B"


def test_lowercase_article_is_not_an_answer_letter():
    text = (
        "Which data structure stores unique items? A. List\nB. Tuple\nC. Set ✓\nD. Dict\n"
        "The correct answer is a Set because sets drop duplicates."
    )
    assert normalize(text) == (
        "Which data structure stores unique items?\n\n"
        "- A. List\n- B. Tuple\n- C. Set ✓ (Correct answer)\n- D. Dict\n\n"
        "The correct answer is a Set because sets drop duplicates."
    )


def test_your_answer_prose_is_not_a_pick():
    text = "Which is mutable? A. tuple\nB. list ✓\nYour answer: a good guess, but no."
    assert normalize(text) == (
        "Which is mutable?\n\n- A. tuple\n- B. list ✓ (Correct answer)\n\n"
        "Your answer: a good guess, but no."
    )


def test_answer_letter_must_stand_alone():
    _, notes = extract_annotations("Correct answer is Beta, not Alpha.")
    assert notes.correct_letter is None


def test_plain_text_unchanged():
    assert normalize("Hello, how can I help you today?") == "Hello, how can I help you today?"
    assert normalize("  Hello, how can I help you today?  \n") == "Hello, how can I help you today?"


def test_empty_and_none():
    assert normalize("") == ""
    assert normalize(None) == ""


def test_generic_cleanup_applied():
    text = "##Results\n\n\n\n-   first\n-  second   "
    assert normalize(text) == "## Results\n\n- first\n- second"


@pytest.mark.parametrize(
    "text",
    [
        "Hello, how can I help you today?",
        "##Results\n\n\n\n*   first\n| a | b |\n| 1 | 2 |",
        INIT_QUIZ,
        ONE_LINE_QUIZ,
        DASHED_QUIZ,
        "Which is mutable? A. tuple\nB. list ✓\n\nLists can change after creation.",
        "Which is mutable? A. A. tuple\nB. list\nYour Answer: A",
        "```python\n#comment   \n```\n\n\n\nWhat now?",
        "What is it?\n#A. x\nB. y",
    ],
)
def test_idempotent(text):
    once = normalize(text)
    assert normalize(once) == once


def test_idempotent_fixtures(bold_quiz_text, paren_quiz_text):
    for text in (bold_quiz_text, paren_quiz_text):
        once = normalize(text)
        assert normalize(once) == once


def test_marker_exposed_by_cleanup_is_parsed():
    assert normalize("What is it?\n#A. x\nB. y") == "What is it?\n\n- A. x\n- B. y"
