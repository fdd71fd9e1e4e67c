"""Shared fixtures for quizmark tests."""

from __future__ import annotations

import json

import pytest
import yaml


QUIZ_DATA = {
    "courseName": "Python Basics",
    "difficulty": "Easy",
    "timePerQuestion": 20,
    "questions": [
        {
            "question": "Which data structure stores unique, unordered elements?",
            "options": ["A. List", "B. Tuple", "C. C: Set", "D) D: Dictionary"],
            "correctAnswer": "c",
            "userAnswer": "A",
        },
        {
            "question": "What is the capital of France?",
            "options": [{"text": "Paris"}, {"text": "Lyon"}, {"text": "Nice"}, {"text": "Lille"}],
            "correctAnswer": "A",
            "userAnswer": "a",
        },
        {
            "question": "When was Python first released?",
            "options": ["1991", "1995", "2000", "2005"],
            "correctAnswer": "1991",
            "userAnswer": None,
        },
    ],
}


@pytest.fixture
def quiz_data():
    return json.loads(json.dumps(QUIZ_DATA))


@pytest.fixture
def quiz_yaml(tmp_path, quiz_data):
    path = tmp_path / "quiz.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(quiz_data, f, allow_unicode=True)
    return path


@pytest.fixture
def quiz_json(tmp_path, quiz_data):
    path = tmp_path / "quiz.json"
    path.write_text(json.dumps(quiz_data), encoding="utf-8")
    return path


@pytest.fixture
def bold_quiz_text():
    return (
        "Which data structure is best suited for storing unique, unordered elements? "
        "Options: **- A. ** List\n\n"
        "**- B. ** Tuple\n\n"
        "**- C. ** Set ✓ (Correct answer)\n\n"
        "**- D. ** Dictionary\n\n"
        "Your Answer: A ❌ Wrong"
    )


@pytest.fixture
def paren_quiz_text():
    return (
        "When was Python first released? \n"
        "A) 1991 ✓\n"
        "B) 1995\n"
        "C) 2000 \n"
        "D) 2005\n"
        "Your Answer: C ❌"
    )
