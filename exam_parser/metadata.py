"""
Metadata Extractor
==================
Recovers paper-level scalars (total marks, exam duration) from the full
extracted text. Independent of the question segmenter.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from .models import DocumentMetadata

logger = logging.getLogger(__name__)

# Checked in priority order against the whole text
TOTAL_MARKS_PATTERNS = [
    re.compile(r"Maximum\s+Marks?\s*:?\s*(\d+)", re.IGNORECASE),
    re.compile(r"Total\s+Marks?\s*:?\s*(\d+)", re.IGNORECASE),
    re.compile(r"Marks?\s*:?\s*(\d+)", re.IGNORECASE),
]

DURATION_PATTERNS = [
    re.compile(r"Time\s*:?\s*(\d+)\s*Hours?", re.IGNORECASE),
    re.compile(r"Duration\s*:?\s*(\d+)\s*Hours?", re.IGNORECASE),
]

TOTAL_MARKS_RANGE = (10, 500)
DURATION_HOURS_RANGE = (1, 8)


def _first_in_range(
    patterns: list[re.Pattern],
    text: str,
    bounds: tuple[int, int],
) -> Optional[int]:
    low, high = bounds
    for pattern in patterns:
        match = pattern.search(text)
        if not match:
            continue
        value = int(match.group(1))
        if low <= value <= high:
            return value
        logger.debug(
            f"Ignoring out-of-range capture {value} for {pattern.pattern!r}"
        )
    return None


def extract_total_marks(text: str) -> Optional[int]:
    """Total marks for the paper, e.g. "Maximum Marks: 80"."""
    return _first_in_range(TOTAL_MARKS_PATTERNS, text, TOTAL_MARKS_RANGE)


def extract_duration(text: str) -> Optional[int]:
    """Exam duration in minutes, e.g. "Time: 3 Hours" -> 180."""
    hours = _first_in_range(DURATION_PATTERNS, text, DURATION_HOURS_RANGE)
    return hours * 60 if hours is not None else None


def extract_metadata(text: str) -> DocumentMetadata:
    return DocumentMetadata(
        total_marks=extract_total_marks(text),
        duration_minutes=extract_duration(text),
    )
