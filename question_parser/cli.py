"""
CLI Interface
=============
Command-line interface for the question parser.

Usage:
    python -m question_parser parse <file|-> [options]
    python -m question_parser batch <file|-> [options]
    python -m question_parser validate <json_path>
    python -m question_parser format
    python -m question_parser serve [options]
"""

from __future__ import annotations

import json
import sys

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from . import __version__
from .engine import ParserConfig, ParserEngine
from .exceptions import QuestionParserError
from .guide import format_guide
from .models import ImportReport, ParsedQuestion, QuestionKind
from .validator import ValidationEngine

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="question-parser")
def cli():
    """Question Parser — turns pasted exam text into structured questions."""
    pass


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--min-alternatives",
    default=2,
    type=int,
    help="Alternatives required before a multiple-choice draft is complete",
)
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level",
)
@click.option(
    "--log-file",
    default=None,
    help="Path to log file",
)
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output only JSON result to stdout (for programmatic use)",
)
def parse(
    source,
    min_alternatives: int,
    log_level: str,
    log_file: str,
    json_output: bool,
):
    """Parse one pasted question (file path, or - for stdin)."""

    if json_output:
        # Suppress console output for JSON mode
        log_level = "ERROR"

    config = ParserConfig(
        min_alternatives=min_alternatives,
        log_level=log_level,
        log_file=log_file,
    )

    try:
        question = ParserEngine(config).parse(source.read())
    except QuestionParserError as e:
        if json_output:
            print(json.dumps({"error": str(e)}, ensure_ascii=False))
        else:
            console.print(f"[red]Error:[/] {e}")
        sys.exit(1)

    if json_output:
        print(json.dumps(
            question.model_dump(mode="json"),
            indent=2,
            ensure_ascii=False,
        ))
        return

    _display_question(question)


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--parallel", "-j",
    default=1,
    type=int,
    help="Number of parallel parse workers (1 = sequential)",
)
@click.option(
    "--blank-lines",
    default=2,
    type=int,
    help="Blank lines separating one question from the next",
)
@click.option("--log-level", default="WARNING", help="Logging level")
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output only JSON result to stdout (for programmatic use)",
)
def batch(
    source,
    parallel: int,
    blank_lines: int,
    log_level: str,
    json_output: bool,
):
    """Parse a transcript holding several questions."""

    if json_output:
        log_level = "ERROR"

    config = ParserConfig(
        block_blank_lines=blank_lines,
        workers=parallel,
        log_level=log_level,
    )
    report = ParserEngine(config).parse_batch(source.read())

    if json_output:
        print(json.dumps(
            report.model_dump(mode="json"),
            indent=2,
            ensure_ascii=False,
        ))
        return

    if not report.items:
        console.print("[yellow]No questions found in input[/]")
        return

    console.print()
    console.print(
        Panel.fit(
            f"[bold cyan]Batch Import[/]\n"
            f"[dim]Found {len(report.items)} question blocks[/]",
            border_style="cyan",
        )
    )
    _display_batch_summary(report)
    _display_validation_table(report.validation.model_dump())


@cli.command()
@click.argument("json_path", type=click.Path(exists=True))
def validate(json_path: str):
    """Validate a previously generated question or batch JSON."""

    with open(json_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if "items" in data:
        questions = ImportReport.model_validate(data).questions
    else:
        questions = [ParsedQuestion.model_validate(data)]

    console.print()
    console.print(
        Panel.fit(
            f"[bold cyan]Validation Report[/]\n"
            f"[dim]File: {json_path}[/]",
            border_style="cyan",
        )
    )

    validator = ValidationEngine()
    for index, question in enumerate(questions, start=1):
        issues = validator.validate_question(question)
        if issues:
            console.print(f"[red]✗[/] Question {index}:")
            for issue in issues:
                console.print(f"    • {issue.message}")
        else:
            console.print(f"[green]✓[/] Question {index}: ready to save")

    _display_validation_table(validator.validate(questions).model_dump())


@cli.command(name="format")
def format_():
    """Show the paste format the parser understands."""
    console.print(Text(format_guide()), soft_wrap=True)


@cli.command()
@click.option("--host", default="0.0.0.0", help="Server host")
@click.option("--port", default=5000, type=int, help="Server port")
@click.option("--debug", is_flag=True, default=False, help="Debug mode")
def serve(host: str, port: int, debug: bool):
    """Start the HTTP service used by the import screen."""
    from .server import run_server

    console.print()
    console.print(
        Panel.fit(
            f"[bold cyan]Question Parser Service[/]\n"
            f"[dim]Starting on {host}:{port}[/]",
            border_style="cyan",
        )
    )
    console.print()

    run_server(host=host, port=port, debug=debug)


# ─── Display Helpers ──────────────────────────────────────────────────────────


def _answer_label(question: ParsedQuestion) -> str:
    if question.kind == QuestionKind.TRUE_FALSE:
        return question.true_false_answer.value
    if question.correct_index is None:
        return "unresolved"
    return "abcde"[question.correct_index]


def _display_question(question: ParsedQuestion):
    """Display a parsed question as rich tables."""
    console.print()

    table = Table(title="Parsed Question", border_style="cyan")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Kind", question.kind.value)
    table.add_row("Statement", Text(question.statement or "(empty)"))
    table.add_row("Explanation", Text(question.explanation or "(none)"))
    table.add_row("Answer", _answer_label(question))
    console.print(table)

    if question.alternatives:
        alt_table = Table(title="Alternatives", border_style="green")
        alt_table.add_column("Letter", justify="center")
        alt_table.add_column("Text")
        alt_table.add_column("Correct", justify="center")
        for letter, alt in zip("abcde", question.alternatives):
            alt_table.add_row(
                letter,
                Text(alt.text),
                "[green]✓[/]" if alt.is_correct else "",
            )
        console.print(alt_table)

    if question.review_flags:
        console.print(
            "[yellow]⚠ Needs manual confirmation:[/] "
            + ", ".join(flag.value for flag in question.review_flags)
        )
    console.print()


def _display_batch_summary(report: ImportReport):
    """Display batch processing summary."""
    console.print()

    table = Table(title="Batch Import Summary", border_style="cyan")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Alternatives", justify="right")
    table.add_column("Answer", justify="center")
    table.add_column("Status", justify="center")

    for item in report.items:
        if item.question is None:
            table.add_row(
                str(item.index + 1), "-", "-", "-", "[red]✗ FAILED[/]"
            )
            continue

        question = item.question
        status = "[yellow]⚠ REVIEW[/]" if question.needs_review else "[green]✓[/]"
        table.add_row(
            str(item.index + 1),
            question.kind.value,
            str(len(question.alternatives)),
            _answer_label(question),
            status,
        )

    console.print(table)
    console.print()


def _display_validation_table(validation: dict):
    """Display validation report as a rich table."""
    table = Table(title="Validation Report", border_style="green")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Status", justify="center")

    def status_icon(count, threshold=0):
        if count <= threshold:
            return "[green]✓[/]"
        return "[red]✗[/]"

    total = validation.get("total_questions", 0)
    storable = validation.get("storable", 0)
    rate = validation.get("success_rate", 0)

    table.add_row(
        "Total Questions",
        str(total),
        "[green]✓[/]" if total > 0 else "[red]✗[/]",
    )
    table.add_row(
        "Ready To Save",
        f"{storable} ({rate}%)",
        "[green]✓[/]" if rate >= 90 else "[yellow]⚠[/]",
    )

    missing_ans = validation.get("questions_missing_answer", [])
    table.add_row(
        "Questions Missing Answer",
        str(len(missing_ans)),
        status_icon(len(missing_ans)),
    )

    few_alts = validation.get("questions_insufficient_alternatives", [])
    table.add_row(
        "Insufficient Alternatives",
        str(len(few_alts)),
        status_icon(len(few_alts)),
    )

    missing_stmt = validation.get("questions_missing_statement", [])
    table.add_row(
        "Missing Statement",
        str(len(missing_stmt)),
        status_icon(len(missing_stmt)),
    )

    console.print(table)
    console.print()

    breakdown = validation.get("flag_breakdown", {})
    if breakdown:
        flag_table = Table(title="Review Flags", border_style="yellow")
        flag_table.add_column("Flag", style="bold")
        flag_table.add_column("Count", justify="right")

        for flag, count in sorted(breakdown.items()):
            flag_table.add_row(flag, str(count))

        console.print(flag_table)
        console.print()


# ─── Entry point (for python -m question_parser.cli) ──────────────────────────


if __name__ == "__main__":
    cli()
