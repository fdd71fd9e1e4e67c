"""Tests for the click command line."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from quizmark.cli import main


@pytest.fixture
def runner(tmp_path, monkeypatch):
    # Keep Settings.load() away from the real ~/.quizmark/config.yaml.
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("QUIZMARK_LOG_LEVEL", raising=False)
    return CliRunner()


def test_normalize_stdin(runner, paren_quiz_text):
    result = runner.invoke(main, ["normalize"], input=paren_quiz_text)
    assert result.exit_code == 0
    assert "- A. 1991 ✓ (Correct answer)" in result.output
    assert "Your Answer" not in result.output


def test_normalize_file(runner, tmp_path):
    source = tmp_path / "reply.md"
    source.write_text("##Heading\n\n\n\ntext", encoding="utf-8")
    result = runner.invoke(main, ["normalize", str(source)])
    assert result.exit_code == 0
    assert result.output == "## Heading\n\ntext\n"


def test_classify_correct(runner):
    result = runner.invoke(main, ["classify", "a", "Paris", "Paris"])
    assert result.exit_code == 0
    assert result.output.strip() == "correct"


def test_classify_incorrect(runner):
    result = runner.invoke(main, ["classify", "B", "Lyon", "A"])
    assert result.exit_code == 1
    assert result.output.strip() == "incorrect"


def test_strip(runner):
    result = runner.invoke(main, ["strip", "C. C: Set"])
    assert result.exit_code == 0
    assert result.output == "Set\n"


def test_review(runner, quiz_yaml):
    result = runner.invoke(main, ["review", str(quiz_yaml)])
    assert result.exit_code == 0
    assert result.output.startswith("# Quiz Review: Python Basics")
    assert "## Score: 1/3 (33%)" in result.output


def test_review_missing_file(runner, tmp_path):
    result = runner.invoke(main, ["review", str(tmp_path / "missing.yaml")])
    assert result.exit_code != 0
    assert "Quiz file not found" in result.output


def test_config(runner):
    result = runner.invoke(main, ["config"])
    assert result.exit_code == 0
    assert "  log_level: WARNING" in result.output
    assert "  time_per_question: 30" in result.output


def test_bad_log_level(runner):
    result = runner.invoke(main, ["--log-level", "LOUD", "strip", "A. x"])
    assert result.exit_code == 2
    assert "Invalid log level" in result.output
