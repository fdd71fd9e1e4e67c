"""Quiz-aware normalization of assistant-generated markdown.

LLM replies and stored chat messages carry quiz questions in many loose
shapes: bold-dash options, ``A)`` lines, everything on one line, answer
markers as emoji or as a trailing "Your Answer: A ❌ Wrong" sentence.
``normalize`` parses such text into a ``ParsedQuestion`` and re-renders it in
one canonical form, so ``normalize(normalize(x)) == normalize(x)``.

Text that is not quiz-shaped only gets the generic markdown cleanup.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from quizmark.engine.markdown import cleanup_markdown
from quizmark.engine.options import Marker, OptionEntry, strip_option_prefix

logger = logging.getLogger(__name__)

QUESTION_RE = re.compile(r"\b(?:Which|What|How|Why|When|Where|Who)\b[^?\n]*\?")

# Any one of these (plus a question) makes the text quiz-shaped.
QUIZ_HINTS: list[re.Pattern[str]] = [
    re.compile(r"Options:"),
    re.compile(r"\*\*-\s*[A-D]\.\s*\*\*"),
    re.compile(r"(?:^|(?<=\s))[A-D][.)]\s*\S", re.MULTILINE),
    re.compile(r"✓|✅|❌|\(Correct answer\)|\(Your answer", re.IGNORECASE),
]

OPTION_MARKER_RE = re.compile(
    r"\*\*-\s*(?P<bold_dash>[A-D])\.\s*\*\*"
    r"|\*\*(?P<bold>[A-D])\.\s*\*\*"
    r"|(?:^|(?<=\s))-\s+\*\*(?P<dash_bold>[A-D])\.\*\*"
    r"|(?:^|(?<=\s))-\s+(?P<dash>[A-D])\.(?=\s|$)"
    r"|(?:^|(?<=\s))(?P<plain>[A-D])[.)](?=\s|$)",
    re.MULTILINE,
)

# Phrases match in any case; the letter must be a capital standing alone so
# prose like "the correct answer is a set" is left alone.
YOUR_ANSWER_RE = re.compile(
    r"(?i:Your Answer):\s*(?P<letter>[A-D])(?![\w'])[ \t]*(?P<symbol>❌|✅|✓)?[ \t]*"
    r"(?:(?P<word>(?i:Wrong|Incorrect|Correct|Right))\b(?!\s+(?i:answer)))?[ \t]*[.!]?"
)
CORRECT_WAS_RE = re.compile(
    r"(?i:(?:The\s+)?Correct answer (?:was|is)):?\s*(?P<letter>[A-D])(?![\w'])[.!]?"
)

USER_CORRECT_RE = re.compile(r"(?:[✓✅]\s*)?\(Your answer\s*-\s*Correct\)", re.IGNORECASE)
USER_INCORRECT_RE = re.compile(r"(?:❌\s*)?\(Your answer\s*-\s*Incorrect\)", re.IGNORECASE)
CORRECT_RE = re.compile(r"\(Correct answer\)|\(Correct\)|✓|✅|👉")
INCORRECT_RE = re.compile(r"\(Incorrect\)|❌")

MIN_OPTIONS = 2


@dataclass
class Annotations:
    """Trailing "Your Answer: X" / "Correct answer was Y" sentences."""
    user_letter: Optional[str] = None
    user_wrong: Optional[bool] = None  # None when the sentence gives no verdict
    correct_letter: Optional[str] = None


@dataclass
class ParsedQuestion:
    text: str
    options: list[OptionEntry] = field(default_factory=list)
    note: str = ""

    def render(self) -> str:
        body = f"{self.text}\n\n" + "\n".join(o.render() for o in self.options)
        if self.note:
            body += f"\n\n{self.note}"
        return body


def is_quiz_shaped(text: str) -> bool:
    """True when text has an interrogative question and any option/answer hint."""
    if not text or not QUESTION_RE.search(text):
        return False
    return any(hint.search(text) for hint in QUIZ_HINTS)


def _verdict(match: re.Match[str]) -> Optional[bool]:
    """Return True when the user's answer is flagged wrong, False when right."""
    symbol = match.group("symbol")
    word = (match.group("word") or "").lower()
    if symbol == "❌" or word in ("wrong", "incorrect"):
        return True
    if symbol in ("✅", "✓") or word in ("correct", "right"):
        return False
    return None


def extract_annotations(block: str) -> tuple[str, Annotations]:
    """Pull answer annotations out of ``block``; return the remaining text."""
    notes = Annotations()

    answer = YOUR_ANSWER_RE.search(block)
    if answer:
        notes.user_letter = answer.group("letter").upper()
        notes.user_wrong = _verdict(answer)
        block = YOUR_ANSWER_RE.sub("", block)

    correct = CORRECT_WAS_RE.search(block)
    if correct:
        notes.correct_letter = correct.group("letter").upper()
        block = CORRECT_WAS_RE.sub("", block)

    return block, notes


def _option_spans(block: str) -> tuple[list[tuple[str, str]], str]:
    """Split an options block into (letter, raw text) spans plus a trailing note.

    Markers are accepted strictly in sequence starting at ``A``; any other
    lettered token stays part of the surrounding option text. The last option
    ends with its line.
    """
    accepted: list[re.Match[str]] = []
    expected = "A"
    for match in OPTION_MARKER_RE.finditer(block):
        if match.group(match.lastgroup) != expected:
            continue
        accepted.append(match)
        if expected == "D":
            break
        expected = chr(ord(expected) + 1)

    spans: list[tuple[str, str]] = []
    note = ""
    for i, match in enumerate(accepted):
        start = match.end()
        if i + 1 < len(accepted):
            end = accepted[i + 1].start()
        else:
            end = block.find("\n", start)
            if end == -1:
                end = len(block)
            note = block[end:].strip()
        spans.append((match.group(match.lastgroup), block[start:end]))
    return spans, note


def _read_option(label: str, span: str, user_letter: Optional[str]) -> OptionEntry:
    """Strip inline markers from one option span and record the strongest."""
    marker: Optional[Marker] = None

    text, found = USER_CORRECT_RE.subn("", span)
    if found:
        marker = Marker.USER_CORRECT
    text, found = USER_INCORRECT_RE.subn("", text)
    if found and marker is None:
        marker = Marker.USER_INCORRECT
    text, found = CORRECT_RE.subn("", text)
    if found and marker is None:
        marker = Marker.CORRECT
    text, found = INCORRECT_RE.subn("", text)
    # A bare ❌ only counts when the user's answer names this option.
    if found and marker is None and label == user_letter:
        marker = Marker.USER_INCORRECT

    text = strip_option_prefix(" ".join(text.split()))
    return OptionEntry(label=label, text=text, marker=marker)


def _resolve_markers(options: list[OptionEntry], notes: Annotations) -> None:
    """Reduce markers to one correct option and one user choice.

    Inline markers are first-wins; trailing annotations override them.
    """
    labels = {o.label for o in options}
    correct = next((o.label for o in options if o.is_correct), None)
    chosen = next((o for o in options if o.is_user_choice), None)
    user = chosen.label if chosen else None
    user_wrong: Optional[bool] = None
    if chosen is not None:
        user_wrong = chosen.marker == Marker.USER_INCORRECT

    if notes.correct_letter in labels:
        correct = notes.correct_letter
    if notes.user_letter in labels:
        if notes.user_letter != user:
            user, user_wrong = notes.user_letter, None
        if notes.user_wrong is not None:
            user_wrong = notes.user_wrong

    if user is not None and user_wrong is None and correct is not None:
        user_wrong = user != correct
    if user_wrong is False:
        correct = user
    elif user_wrong and correct == user:
        correct = None

    for option in options:
        if option.label == user and user_wrong is not None:
            option.marker = Marker.USER_INCORRECT if user_wrong else Marker.USER_CORRECT
        elif option.label == correct:
            option.marker = Marker.CORRECT
        else:
            option.marker = None


def parse_question(text: str) -> Optional[ParsedQuestion]:
    """Parse quiz-shaped text; None when no question with 2+ options is found."""
    match = QUESTION_RE.search(text)
    if match is None:
        return None

    block, notes = extract_annotations(text[match.end():])
    spans, note = _option_spans(block)
    if len(spans) < MIN_OPTIONS:
        return None

    options = [_read_option(label, span, notes.user_letter) for label, span in spans]
    _resolve_markers(options, notes)
    return ParsedQuestion(text=match.group(0).strip(), options=options, note=note)


def normalize(raw: Optional[str]) -> str:
    """Return the canonical markdown form of ``raw``. Never raises."""
    if not raw:
        return ""

    # Cleanup first too: it can expose option markers (e.g. "#A." -> "# A.").
    text = cleanup_markdown(raw)
    if is_quiz_shaped(text):
        question = parse_question(text)
        if question is not None:
            logger.debug(
                "normalized quiz question with %d options", len(question.options)
            )
            return cleanup_markdown(question.render())
    return cleanup_markdown(text)
