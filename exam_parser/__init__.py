"""
Exam Parser
===========
Question-structure extraction for exam-paper PDFs.

Architecture:
    - Text Extractor: Pulls linear text and page count from the PDF
    - Segmenter: Detects question markers, marks and page numbers per line
    - Curator: Deduplicates, filters false positives and orders questions
    - Metadata Extractor: Recovers total marks and exam duration
    - Engine: Runs the pipeline and produces JSON for the paper editor

Version: 1.0.0
"""

__version__ = "1.0.0"

from .curator import curate  # noqa: E402
from .metadata import extract_duration, extract_total_marks  # noqa: E402
from .segmenter import parse  # noqa: E402
from .text_extractor import ParseFailed  # noqa: E402

__all__ = [
    "ParseFailed",
    "curate",
    "extract_duration",
    "extract_total_marks",
    "parse",
]
