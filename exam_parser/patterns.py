"""
Pattern Tables
==============
Line-level regex tables used to segment exam-paper text:

    - Page-break heuristics (P.T.O., "Page N", bare page numbers)
    - Question markers, ordered most specific first
    - Marks allocations ("5 marks", "(5)", "[5]", "Marks: 5")

Each table is evaluated in order and the first match wins.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .models import Confidence

# ─── Page-Break Heuristics ────────────────────────────────────────────────────

PAGE_BREAK_PATTERNS = [
    # "P.T.O.", "P. T. O.", "PTO" (Please Turn Over)
    re.compile(r"\bP\.?\s*T\.?\s*O\b\.?", re.IGNORECASE),
    # "Page 2", "Page 2 of 12", "- Page 2 -"
    re.compile(r"^[\W_]*Page\s+\d+\b", re.IGNORECASE),
    # Bare page number
    re.compile(r"^\d+$"),
    # "[2]"
    re.compile(r"^\[\s*\d+\s*\]$"),
]

# ─── Question Markers ─────────────────────────────────────────────────────────

# A marker must be followed by whitespace or end the line, so "1.5" and
# "Q1a" are not markers.
_END = r"(?:\s+|$)"


@dataclass(frozen=True)
class QuestionPattern:
    """A marker regex, the canonical id it produces and its confidence."""
    name: str
    regex: re.Pattern
    build_id: Callable[..., str]
    confidence: Confidence


@dataclass(frozen=True)
class MarkerMatch:
    """Result of matching one line against the marker table."""
    question_number: str
    question_text: Optional[str]
    confidence: Confidence
    pattern: str


QUESTION_PATTERNS = [
    # "1(a)", "2 (b).", "3(c)"
    QuestionPattern(
        name="numbered_sub_part",
        regex=re.compile(r"^(\d+)\s*\(([a-z])\)\.?" + _END, re.IGNORECASE),
        build_id=lambda num, sub: f"{num}({sub.lower()})",
        confidence=Confidence.HIGH,
    ),
    # "1.", "12."
    QuestionPattern(
        name="numbered",
        regex=re.compile(r"^(\d+)\." + _END),
        build_id=lambda num: f"{num}",
        confidence=Confidence.HIGH,
    ),
    # "Question 1", "QUESTION 2."
    QuestionPattern(
        name="question_word",
        regex=re.compile(r"^Question\s+(\d+)\.?" + _END, re.IGNORECASE),
        build_id=lambda num: f"Question {num}",
        confidence=Confidence.HIGH,
    ),
    # "Q1", "Q.2", "Q 3."
    QuestionPattern(
        name="q_prefix",
        regex=re.compile(r"^Q\.?\s*(\d+)\.?" + _END, re.IGNORECASE),
        build_id=lambda num: f"Q{num}",
        confidence=Confidence.MEDIUM,
    ),
    # "(a)" without a restated main number
    QuestionPattern(
        name="bare_sub_part",
        regex=re.compile(r"^\(([a-z])\)\.?" + _END, re.IGNORECASE),
        build_id=lambda sub: f"({sub.lower()})",
        confidence=Confidence.MEDIUM,
    ),
]

# ─── Marks Allocations ────────────────────────────────────────────────────────

MARKS_PATTERNS = [
    re.compile(r"(\d+)\s*marks?", re.IGNORECASE),
    re.compile(r"\((\d+)\s*marks?\)", re.IGNORECASE),
    re.compile(r"\[(\d+)\s*marks?\]", re.IGNORECASE),
    re.compile(r"marks?\s*:?\s*(\d+)", re.IGNORECASE),
    re.compile(r"\((\d+)\)"),
    re.compile(r"\[(\d+)\]"),
]

MIN_QUESTION_MARKS = 1
MAX_QUESTION_MARKS = 100


def is_page_break(line: str) -> bool:
    """Return True if a (stripped) line looks like a page boundary."""
    return any(p.search(line) for p in PAGE_BREAK_PATTERNS)


def match_question_marker(line: str) -> Optional[MarkerMatch]:
    """
    Match a stripped line against QUESTION_PATTERNS.

    Only the first matching pattern is used. The text left on the line
    after the marker becomes the question text (None when empty).
    """
    for pattern in QUESTION_PATTERNS:
        match = pattern.regex.match(line)
        if not match:
            continue

        remainder = line[match.end():].strip()
        return MarkerMatch(
            question_number=pattern.build_id(*match.groups()),
            question_text=remainder or None,
            confidence=pattern.confidence,
            pattern=pattern.name,
        )

    return None


def extract_marks(lines: Iterable[str]) -> Optional[int]:
    """
    Find a marks allocation in a window of lines.

    The lines are searched jointly. Each pattern contributes its first
    capture; a capture outside (0, 100] falls through to the next pattern.
    """
    text = " ".join(lines)

    for pattern in MARKS_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        marks = int(match.group(1))
        if MIN_QUESTION_MARKS <= marks <= MAX_QUESTION_MARKS:
            return marks

    return None
