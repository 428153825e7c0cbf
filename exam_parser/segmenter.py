"""
Question Segmenter
==================
Line-walking segmenter that recovers question markers, marks allocations
and approximate page numbers from the linear text of an exam paper.

The walk keeps a page counter and an insertion-ordered map of questions
keyed by canonical id. Both are local to a single call, so one segmenter
instance can serve concurrent parses.
"""

from __future__ import annotations

import logging
import re

from .models import DetectedQuestion, ParseResult
from .patterns import extract_marks, is_page_break, match_question_marker

logger = logging.getLogger(__name__)

# Marks are searched on the marker line plus this many following lines.
MARKS_LOOKAHEAD = 2

_NEWLINE_RE = re.compile(r"\r?\n")


class QuestionSegmenter:
    """
    Transforms the lines of an extracted paper into DetectedQuestion
    records, in the order their markers were first seen.
    """

    def __init__(self, marks_lookahead: int = MARKS_LOOKAHEAD):
        self.marks_lookahead = marks_lookahead

    def parse(self, text: str) -> ParseResult:
        """Segment the full extracted text of a paper."""
        lines = _NEWLINE_RE.split(text) if text else []
        questions, total_pages = self.segment(lines)

        logger.info(
            f"Segmented {len(lines)} lines: "
            f"{len(questions)} questions across {total_pages} page(s)"
        )

        return ParseResult(
            questions=questions,
            total_pages=total_pages,
            text=text,
        )

    def segment(
        self, lines: list[str]
    ) -> tuple[list[DetectedQuestion], int]:
        """
        Walk the lines once.

        Returns:
            (questions in discovery order, page count)
        """
        current_page = 1
        discovered: dict[str, DetectedQuestion] = {}

        for index, raw_line in enumerate(lines):
            line = raw_line.strip()
            if not line:
                continue

            # Page markers are consumed and never inspected for questions
            if is_page_break(line):
                current_page += 1
                logger.debug(f"Page break at line {index + 1}: {line!r}")
                continue

            marker = match_question_marker(line)
            if marker is None:
                continue

            if marker.question_number in discovered:
                logger.debug(
                    f"Ignoring repeated marker {marker.question_number} "
                    f"at line {index + 1}"
                )
                continue

            window = lines[index:index + 1 + self.marks_lookahead]
            question = DetectedQuestion(
                question_number=marker.question_number,
                question_text=marker.question_text,
                marks=extract_marks(window),
                page_number=current_page,
                confidence=marker.confidence,
            )
            discovered[question.question_number] = question

            logger.debug(
                f"Detected {question.question_number} on page {current_page} "
                f"({marker.pattern}, {marker.confidence.value})"
            )

        return list(discovered.values()), current_page


def parse(text: str) -> ParseResult:
    """Segment a paper's text with the default segmenter."""
    return QuestionSegmenter().parse(text)
