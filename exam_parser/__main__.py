"""
Module entry point for: python -m exam_parser

Allows running the parser directly as a module:
    python -m exam_parser parse <pdf_path> [options]
    python -m exam_parser text <text_path> [options]
    python -m exam_parser curate <json_path> [options]
"""

from .cli import cli


def main():
    cli()


if __name__ == "__main__":
    main()
