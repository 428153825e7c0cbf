"""
Exam Parser Engine
==================
Main orchestrator that combines text extraction, question segmentation,
curation and metadata extraction into a complete paper analysis.

Usage:
    engine = ParserEngine(config)
    analysis = engine.analyze_pdf("path/to/paper.pdf")
    # analysis is a PaperAnalysis with structured JSON output

Architecture:
    PDF → TextExtractor → text → QuestionSegmenter → DetectedQuestions →
    QuestionCurator → metadata extractor → PaperAnalysis (JSON)
"""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from . import __version__
from .curator import QuestionCurator
from .metadata import extract_metadata
from .models import PaperAnalysis
from .segmenter import QuestionSegmenter
from .text_extractor import TextExtractor

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class ParserConfig:
    """Configuration for the parser engine."""

    # Output settings
    output_dir: Optional[str] = None
    include_text: bool = False

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None


class ParserEngine:
    """
    Main paper analysis engine.

    Orchestrates the full pipeline:
        1. Text extraction (PDF only)
        2. Question segmentation
        3. Curation (dedup, false positives, ordering)
        4. Paper metadata (total marks, duration)

    Holds no per-parse state, so one engine may serve parallel callers.
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self.extractor = TextExtractor()
        self.segmenter = QuestionSegmenter()
        self.curator = QuestionCurator()
        self._setup_logging()

    def _setup_logging(self):
        """Configure logging based on config."""
        log_level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        package_logger = logging.getLogger("exam_parser")
        package_logger.setLevel(log_level)

        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        if not package_logger.handlers:
            console = logging.StreamHandler()
            console.setLevel(log_level)
            console.setFormatter(formatter)
            package_logger.addHandler(console)

        if self.config.log_file:
            log_path = os.path.abspath(self.config.log_file)
            if any(
                isinstance(h, logging.FileHandler)
                and h.baseFilename == log_path
                for h in package_logger.handlers
            ):
                return

            log_dir = Path(log_path).parent
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(
                self.config.log_file, encoding="utf-8"
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)

    def analyze_pdf(
        self,
        source: Union[str, Path, bytes, bytearray, memoryview],
    ) -> PaperAnalysis:
        """
        Analyze a PDF given as a path or raw bytes.

        Raises:
            FileNotFoundError: If a PDF path doesn't exist.
            ParseFailed: If the PDF cannot be read.
        """
        if isinstance(source, (bytes, bytearray, memoryview)):
            document = self.extractor.extract_bytes(bytes(source))
            name = "upload"
        else:
            document = self.extractor.extract_file(source)
            name = Path(source).stem

        return self.analyze_text(
            document.text,
            page_count=document.page_count,
            name=name,
        )

    def analyze_text(
        self,
        text: str,
        page_count: Optional[int] = None,
        name: str = "paper",
    ) -> PaperAnalysis:
        """
        Analyze already-extracted paper text.

        Args:
            text: Linear text of the paper.
            page_count: Real page count from the extractor. Overrides the
                page-break estimate when given.
            name: Used for the output file name.

        Returns:
            PaperAnalysis with curated questions and paper metadata.
        """
        start_time = time.time()

        logger.info("Phase 1: Question segmentation")
        parsed = self.segmenter.parse(text)

        logger.info("Phase 2: Curation")
        report = self.curator.curate_with_report(parsed.questions)

        logger.info("Phase 3: Paper metadata")
        metadata = extract_metadata(text)

        total_pages = parsed.total_pages
        if page_count:
            total_pages = page_count

        analysis = PaperAnalysis(
            questions=report.questions,
            total_pages=total_pages,
            total_marks=metadata.total_marks,
            duration_minutes=metadata.duration_minutes,
            text=text if self.config.include_text else None,
            parser_version=__version__,
        )

        elapsed = time.time() - start_time
        logger.info(
            f"Analysis complete in {elapsed:.2f}s, "
            f"{analysis.total_questions} questions extracted"
        )

        if analysis.total_questions == 0:
            logger.warning("No question markers found; manual entry needed")

        if self.config.output_dir:
            output_dir = Path(self.config.output_dir)
            output_dir.mkdir(parents=True, exist_ok=True)
            self._save_json(analysis, output_dir / f"{name}_questions.json")

        return analysis

    def _save_json(self, analysis: PaperAnalysis, filepath: Path):
        """Save PaperAnalysis to JSON file."""
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(
                    analysis.model_dump(mode="json"),
                    f,
                    indent=2,
                    ensure_ascii=False,
                )
            logger.info(f"Saved JSON output: {filepath}")
        except OSError as e:
            logger.error(f"Failed to save JSON: {e}")
