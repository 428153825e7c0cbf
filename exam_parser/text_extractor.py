"""
Text Extractor
==============
Extracts linear text and the page count from PDF files using PyMuPDF (fitz).

This is the upstream collaborator of the segmenter: it is the only part of
the package that touches raw PDF bytes. Any failure to read the document is
surfaced as a single ParseFailed error, with no retry or partial recovery.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import fitz  # PyMuPDF

from .models import ExtractedDocument

logger = logging.getLogger(__name__)


class ParseFailed(RuntimeError):
    """The document could not be turned into text (corrupt, encrypted, empty)."""


class TextExtractor:
    """
    Handles PDF ingestion and plain-text extraction.

    Page texts are joined with a newline in page order, which is the
    linear text the segmenter expects.
    """

    def __init__(self, sort_blocks: bool = True):
        # Reading order within a page (top-to-bottom, left-to-right)
        self.sort_blocks = sort_blocks

    def extract_file(self, pdf_path: Union[str, Path]) -> ExtractedDocument:
        """
        Extract text from a PDF on disk.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ParseFailed: If the file is not a readable PDF.
        """
        path = Path(pdf_path)
        if not path.exists():
            raise FileNotFoundError(f"PDF not found: {path}")

        logger.info(f"Extracting text from {path}")
        return self.extract_bytes(path.read_bytes())

    def extract_bytes(self, data: bytes) -> ExtractedDocument:
        """
        Extract text from in-memory PDF bytes.

        Raises:
            ParseFailed: If the bytes are not a readable PDF.
        """
        if not data:
            raise ParseFailed("Failed to parse PDF file: empty document")

        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            logger.error(f"Could not open PDF: {e}")
            raise ParseFailed("Failed to parse PDF file") from e

        with doc:
            if doc.needs_pass and not doc.authenticate(""):
                logger.error("PDF is encrypted and requires a password")
                raise ParseFailed("Failed to parse PDF file: document is encrypted")

            if doc.page_count == 0:
                raise ParseFailed("Failed to parse PDF file: document has no pages")

            try:
                page_texts = [
                    page.get_text("text", sort=self.sort_blocks)
                    for page in doc
                ]
            except Exception as e:
                logger.error(f"Could not read PDF text: {e}")
                raise ParseFailed("Failed to parse PDF file") from e

            page_count = doc.page_count

        text = "\n".join(t.rstrip("\n") for t in page_texts)
        logger.info(
            f"Extracted {len(text)} characters from {page_count} page(s)"
        )

        return ExtractedDocument(text=text, page_count=page_count)
