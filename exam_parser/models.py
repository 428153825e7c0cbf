"""
Data Models
===========
Pydantic models for question-structure extraction output.
All models are serializable to JSON for the paper editor and persistence layer.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field

_DIGITS_RE = re.compile(r"\d+")
_SUB_PART_RE = re.compile(r"\(([a-z])\)", re.IGNORECASE)


# ─── Enums ────────────────────────────────────────────────────────────────────


class Confidence(str, Enum):
    """How specific the marker pattern that produced a question was."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# ─── Question Model ──────────────────────────────────────────────────────────


class DetectedQuestion(BaseModel):
    """
    A single question unit recovered from the paper text.

    `question_number` is the canonical marker id ("1", "1(a)", "Q1",
    "Question 1", "(a)") and is the dedup and sort key.
    """
    question_number: str
    question_text: Optional[str] = None
    marks: Optional[int] = Field(default=None, ge=1, le=100)
    page_number: int = Field(default=1, ge=1)
    confidence: Confidence = Confidence.HIGH

    @property
    def numeric_key(self) -> int:
        """First run of digits in the question number, 0 when there is none."""
        match = _DIGITS_RE.search(self.question_number)
        return int(match.group(0)) if match else 0

    @property
    def sub_part(self) -> Optional[str]:
        match = _SUB_PART_RE.search(self.question_number)
        return match.group(1).lower() if match else None


# ─── Result Models ───────────────────────────────────────────────────────────


class ParseResult(BaseModel):
    """Segmenter output: questions in discovery order plus the source text."""
    questions: list[DetectedQuestion] = Field(default_factory=list)
    total_pages: int = Field(default=1, ge=1)
    text: str = ""

    @computed_field
    @property
    def total_questions(self) -> int:
        return len(self.questions)


class CurationReport(BaseModel):
    """Curated question list and what the curation pass removed."""
    questions: list[DetectedQuestion] = Field(default_factory=list)
    duplicates_removed: int = 0
    false_positives_removed: int = 0

    @computed_field
    @property
    def total_questions(self) -> int:
        return len(self.questions)


class DocumentMetadata(BaseModel):
    """Paper-level scalars recovered from the full text."""
    total_marks: Optional[int] = Field(default=None, ge=10, le=500)
    duration_minutes: Optional[int] = Field(default=None, ge=60, le=480)


class ExtractedDocument(BaseModel):
    """Linear text and page count produced by the text extractor."""
    text: str = ""
    page_count: int = Field(default=0, ge=0)


class PaperAnalysis(BaseModel):
    """
    Complete output of an analysis run.
    This is the top-level JSON structure returned to the paper editor.
    """
    questions: list[DetectedQuestion] = Field(default_factory=list)
    total_pages: int = Field(default=1, ge=1)
    total_marks: Optional[int] = None
    duration_minutes: Optional[int] = None
    text: Optional[str] = None
    parser_version: str = "1.0.0"
    parse_timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    @computed_field
    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @computed_field
    @property
    def marks_allocated(self) -> int:
        """Sum of per-question marks that were detected."""
        return sum(q.marks for q in self.questions if q.marks is not None)
