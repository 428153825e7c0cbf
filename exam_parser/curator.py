"""
Question Curator
================
Post-detection curation of question lists:

    - Deduplicate by exact question number (first occurrence wins)
    - Drop false positives (stray markers, out-of-range numbers)
    - Order by question number, bare numbers before lettered sub-parts

Curation is pure and idempotent, so callers may re-curate a list after
manual edits in the paper editor.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .models import CurationReport, DetectedQuestion

logger = logging.getLogger(__name__)

MIN_QUESTION_TEXT_LENGTH = 3
MIN_QUESTION_NUMBER = 1
MAX_QUESTION_NUMBER = 100


def deduplicate(
    questions: Iterable[DetectedQuestion],
) -> list[DetectedQuestion]:
    """Collapse records sharing a question number, keeping the first."""
    unique: dict[str, DetectedQuestion] = {}
    for q in questions:
        unique.setdefault(q.question_number, q)
    return list(unique.values())


def is_false_positive(question: DetectedQuestion) -> bool:
    # Records without any text are kept; only short non-empty text is noise
    if (
        question.question_text
        and len(question.question_text) < MIN_QUESTION_TEXT_LENGTH
    ):
        return True

    return not (
        MIN_QUESTION_NUMBER <= question.numeric_key <= MAX_QUESTION_NUMBER
    )


def filter_false_positives(
    questions: Iterable[DetectedQuestion],
) -> list[DetectedQuestion]:
    return [q for q in questions if not is_false_positive(q)]


def question_sort_key(question: DetectedQuestion) -> tuple[int, int, str]:
    """(number, has sub-part, sub-part letter)."""
    sub_part = question.sub_part
    return (
        question.numeric_key,
        0 if sub_part is None else 1,
        sub_part or "",
    )


def sort_questions(
    questions: Iterable[DetectedQuestion],
) -> list[DetectedQuestion]:
    # sorted() is stable, so full ties keep their input order
    return sorted(questions, key=question_sort_key)


class QuestionCurator:
    """
    Deduplicates, filters and orders detected questions, reporting
    how many records each step removed.
    """

    def curate_with_report(
        self,
        questions: list[DetectedQuestion],
    ) -> CurationReport:
        """
        Run the full curation pass.

        Args:
            questions: Detected questions, in discovery or edit order.

        Returns:
            CurationReport with the final ordered list.
        """
        unique = deduplicate(questions)
        kept = filter_false_positives(unique)
        ordered = sort_questions(kept)

        report = CurationReport(
            questions=ordered,
            duplicates_removed=len(questions) - len(unique),
            false_positives_removed=len(unique) - len(kept),
        )

        logger.info(
            f"Curated {len(questions)} detected questions: "
            f"{report.total_questions} kept, "
            f"{report.duplicates_removed} duplicates, "
            f"{report.false_positives_removed} false positives"
        )

        return report

    def curate(
        self,
        questions: list[DetectedQuestion],
    ) -> list[DetectedQuestion]:
        return self.curate_with_report(questions).questions


def curate(questions: list[DetectedQuestion]) -> list[DetectedQuestion]:
    """Curate a question list with the default curator."""
    return QuestionCurator().curate(list(questions))
