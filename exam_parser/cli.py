"""
CLI Interface
=============
Command-line interface for the exam parser engine.

Usage:
    python -m exam_parser.cli parse <pdf_path> [options]
    python -m exam_parser.cli text <text_path> [options]
    python -m exam_parser.cli curate <json_path> [options]
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from . import __version__
from .curator import QuestionCurator
from .engine import ParserConfig, ParserEngine
from .models import DetectedQuestion, PaperAnalysis
from .text_extractor import ParseFailed

console = Console()

_question_list = TypeAdapter(list[DetectedQuestion])


@click.group()
@click.version_option(version=__version__, prog_name="exam-parser")
def cli():
    """Exam Parser: question structure extractor for exam-paper PDFs."""
    pass


def _analysis_options(func):
    """Options shared by the parse and text commands."""
    options = [
        click.option(
            "--output", "-o",
            default=None,
            help="Directory to save the analysis JSON",
        ),
        click.option(
            "--include-text",
            is_flag=True,
            default=False,
            help="Keep the full extracted text in the output",
        ),
        click.option(
            "--log-level",
            default="INFO",
            type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
            help="Logging level",
        ),
        click.option(
            "--log-file",
            default=None,
            help="Path to log file",
        ),
        click.option(
            "--json-output",
            is_flag=True,
            default=False,
            help="Output only JSON result to stdout (for programmatic use)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@cli.command()
@click.argument("pdf_path", type=click.Path(exists=True, dir_okay=False))
@_analysis_options
def parse(
    pdf_path: str,
    output: str,
    include_text: bool,
    log_level: str,
    log_file: str,
    json_output: bool,
):
    """Parse an exam-paper PDF into a structured question list."""
    _run_analysis(
        pdf_path,
        lambda engine: engine.analyze_pdf(pdf_path),
        output=output,
        include_text=include_text,
        log_level=log_level,
        log_file=log_file,
        json_output=json_output,
    )


@cli.command()
@click.argument("text_path", type=click.Path(exists=True, dir_okay=False))
@_analysis_options
def text(
    text_path: str,
    output: str,
    include_text: bool,
    log_level: str,
    log_file: str,
    json_output: bool,
):
    """Parse already-extracted paper text (UTF-8 file)."""
    try:
        content = Path(text_path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        console.print(
            f"[red]Error:[/] {escape(text_path)} is not UTF-8 text ({e.reason})"
        )
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(1)

    _run_analysis(
        text_path,
        lambda engine: engine.analyze_text(
            content, name=Path(text_path).stem
        ),
        output=output,
        include_text=include_text,
        log_level=log_level,
        log_file=log_file,
        json_output=json_output,
    )


@cli.command()
@click.argument("json_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output only the curated JSON list to stdout",
)
def curate(json_path: str, json_output: bool):
    """Re-curate a hand-edited question list (JSON)."""

    try:
        with open(json_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("questions", [])
        questions = _question_list.validate_python(data)
    except (json.JSONDecodeError, ValidationError) as e:
        console.print(f"[red]Invalid question list:[/] {escape(str(e))}")
        sys.exit(1)

    report = QuestionCurator().curate_with_report(questions)

    if json_output:
        print(json.dumps(
            [q.model_dump(mode="json") for q in report.questions],
            indent=2,
            ensure_ascii=False,
        ))
        return

    console.print()
    _display_questions(report.questions)
    console.print(
        f"[bold]Kept:[/] {report.total_questions} | "
        f"[bold]Duplicates removed:[/] {report.duplicates_removed} | "
        f"[bold]False positives removed:[/] {report.false_positives_removed}"
    )
    console.print()


# ─── Helpers ──────────────────────────────────────────────────────────────────


def _run_analysis(
    source_path: str,
    run,
    output: str,
    include_text: bool,
    log_level: str,
    log_file: str,
    json_output: bool,
):
    if json_output:
        # Suppress console output for JSON mode
        log_level = "ERROR"

    config = ParserConfig(
        output_dir=output,
        include_text=include_text,
        log_level=log_level,
        log_file=log_file,
    )

    if not json_output:
        console.print()
        console.print(
            Panel.fit(
                f"[bold cyan]Exam Parser v{__version__}[/]\n"
                f"[dim]Parsing: {escape(os.path.basename(source_path))}[/]",
                border_style="cyan",
            )
        )
        console.print()

    try:
        engine = ParserEngine(config)
        analysis = run(engine)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(1)
    except ParseFailed as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(1)

    if json_output:
        print(json.dumps(
            analysis.model_dump(mode="json"),
            indent=2,
            ensure_ascii=False,
        ))
        return

    _display_analysis(analysis)


def _display_analysis(analysis: PaperAnalysis):
    """Display paper metadata and the question table."""
    table = Table(title="Paper Information", border_style="cyan")
    table.add_column("Property", style="bold")
    table.add_column("Value")
    table.add_row("Total Pages", str(analysis.total_pages))
    table.add_row("Questions", str(analysis.total_questions))
    table.add_row(
        "Total Marks",
        str(analysis.total_marks) if analysis.total_marks else "(not found)",
    )
    table.add_row("Marks Allocated", str(analysis.marks_allocated))
    table.add_row(
        "Duration",
        f"{analysis.duration_minutes} min"
        if analysis.duration_minutes else "(not found)",
    )
    console.print(table)
    console.print()

    if not analysis.questions:
        console.print(
            "[yellow]No questions detected. Add them manually in the editor.[/]"
        )
        console.print()
        return

    _display_questions(analysis.questions)

    if analysis.total_marks and analysis.marks_allocated not in (
        0, analysis.total_marks
    ):
        console.print(
            f"[yellow]⚠ Detected marks ({analysis.marks_allocated}) "
            f"differ from total marks ({analysis.total_marks})[/]"
        )
        console.print()


def _display_questions(questions: list[DetectedQuestion]):
    table = Table(title="Detected Questions", border_style="green")
    table.add_column("Number", style="bold")
    table.add_column("Text")
    table.add_column("Marks", justify="right")
    table.add_column("Page", justify="right")
    table.add_column("Confidence", justify="center")

    colors = {"high": "green", "medium": "yellow", "low": "red"}
    for q in questions:
        level = q.confidence.value
        # Question text is literal; brackets are common in maths papers
        table.add_row(
            Text(q.question_number),
            Text(q.question_text) if q.question_text else Text("-", style="dim"),
            str(q.marks) if q.marks is not None else "-",
            str(q.page_number),
            f"[{colors[level]}]{level}[/]",
        )

    console.print(table)
    console.print()


# ─── Entry point (for python -m exam_parser.cli) ──────────────────────────────


if __name__ == "__main__":
    cli()
