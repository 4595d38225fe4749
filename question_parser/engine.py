"""
Question Parser Engine
======================
Main orchestrator that combines line normalization, kind classification,
section segmentation, alternative extraction and answer-key resolution into
a complete text-to-question pipeline.

Usage:
    engine = ParserEngine(config)
    question = engine.parse(pasted_text)
    report = engine.parse_batch(transcript)

Architecture:
    Text → normalize_lines → classify_kind → SectionSegmenter →
    (alternatives, commentary) → answer_key → ParsedQuestion
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import __version__
from .answer_key import resolve_multiple_choice, resolve_true_false
from .classifier import classify_kind
from .exceptions import EmptyInputError
from .models import (
    BatchItem,
    ImportReport,
    ItemStatus,
    ParsedQuestion,
    QuestionKind,
    ReviewFlag,
    TrueFalseAnswer,
)
from .normalizer import normalize_lines, split_blocks
from .state_machine import SectionSegmenter
from .validator import ValidationEngine

logger = logging.getLogger(__name__)

# Statements asking for the option that does NOT apply
EXCEPT_MARKER = "EXCETO"


def parse_question(text: str, min_alternatives: int = 2) -> ParsedQuestion:
    """
    Parse one pasted question into a ParsedQuestion draft.

    Args:
        text: Raw pasted text of a single question.
        min_alternatives: Alternatives below which a multiple-choice draft
            is flagged as insufficient.

    Returns:
        The assembled question. Soft problems are listed in
        ``review_flags``; they never abort parsing.

    Raises:
        EmptyInputError: If the text contains no non-blank line.
    """
    lines = normalize_lines(text)
    if not lines:
        raise EmptyInputError()

    kind = classify_kind(lines)
    sections = SectionSegmenter().segment(lines, kind)
    commentary = sections.commentary
    flags: list[ReviewFlag] = []

    if not sections.statement:
        flags.append(ReviewFlag.MISSING_STATEMENT)

    if kind == QuestionKind.TRUE_FALSE:
        answer = resolve_true_false(commentary)
        alternatives = []
        if answer == TrueFalseAnswer.UNRESOLVED:
            flags.append(ReviewFlag.UNRESOLVED_ANSWER)
    else:
        answer = None
        alternatives = resolve_multiple_choice(sections.alternatives, commentary)
        filled = [alt for alt in alternatives if alt.text.strip()]
        if len(filled) < min_alternatives:
            flags.append(ReviewFlag.INSUFFICIENT_ALTERNATIVES)
        if not any(alt.is_correct for alt in alternatives):
            flags.append(ReviewFlag.UNRESOLVED_ANSWER)
            if EXCEPT_MARKER in sections.statement:
                flags.append(ReviewFlag.EXCEPT_CLAUSE)

    return ParsedQuestion(
        statement=sections.statement,
        kind=kind,
        alternatives=alternatives,
        explanation=commentary,
        true_false_answer=answer,
        review_flags=flags,
    )


@dataclass
class ParserConfig:
    """Configuration for the parser engine."""

    # Batch import
    block_blank_lines: int = 2
    workers: int = 1

    # Validation
    min_alternatives: int = 2

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None


class ParserEngine:
    """
    Main question parsing engine.

    Orchestrates the full pipeline:
        1. Line normalization
        2. Kind classification
        3. Section segmentation (state machine)
        4. Answer-key resolution
        5. Validation (batch imports)

    Thread-safe: every parse builds its own segmenter.
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self._setup_logging()

    def _setup_logging(self):
        """Configure logging based on config."""
        log_level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        # Configure root logger for the parser package
        package_logger = logging.getLogger("question_parser")
        package_logger.setLevel(log_level)

        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        # Console handler
        if not package_logger.handlers:
            console = logging.StreamHandler()
            console.setLevel(log_level)
            console.setFormatter(formatter)
            package_logger.addHandler(console)

        # File handler
        if self.config.log_file:
            log_dir = Path(self.config.log_file).parent
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(
                self.config.log_file, encoding="utf-8"
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)

    def parse(self, text: str) -> ParsedQuestion:
        """
        Parse one pasted question.

        Raises:
            EmptyInputError: If the text is empty or whitespace-only.
        """
        try:
            question = parse_question(
                text, min_alternatives=self.config.min_alternatives
            )
        except EmptyInputError:
            logger.warning("Rejected empty input")
            raise

        if question.kind == QuestionKind.MULTIPLE_CHOICE:
            logger.info(
                f"Parsed multiple-choice question: "
                f"{len(question.alternatives)} alternatives, "
                f"correct index {question.correct_index}"
            )
        else:
            logger.info(
                f"Parsed true/false question: "
                f"answer {question.true_false_answer.value}"
            )

        if question.review_flags:
            logger.warning(
                f"Question needs manual confirmation: "
                f"{', '.join(flag.value for flag in question.review_flags)}"
            )

        return question

    def parse_batch(
        self,
        text: str,
        workers: Optional[int] = None,
    ) -> ImportReport:
        """
        Parse a transcript holding several questions.

        Blocks are separated by ``config.block_blank_lines`` blank lines and
        parsed independently; a failing block is recorded, not raised.

        Args:
            text: Full transcript.
            workers: Parallel parse workers (defaults to ``config.workers``).

        Returns:
            ImportReport with one item per block, in transcript order.
        """
        start_time = time.time()
        blocks = split_blocks(text, self.config.block_blank_lines)
        workers = workers or self.config.workers

        logger.info(f"Batch import: {len(blocks)} blocks, {workers} worker(s)")

        if workers > 1 and len(blocks) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                items = list(pool.map(self._parse_item, range(len(blocks)), blocks))
        else:
            items = [self._parse_item(i, block) for i, block in enumerate(blocks)]

        validator = ValidationEngine(min_alternatives=self.config.min_alternatives)
        report = ImportReport(
            parser_version=__version__,
            items=items,
        )
        report.validation = validator.validate(report.questions)

        elapsed = time.time() - start_time
        logger.info(
            f"Batch complete in {elapsed:.2f}s — "
            f"{len(report.questions)} parsed, {len(report.errors)} failed"
        )
        return report

    def _parse_item(self, index: int, block: str) -> BatchItem:
        try:
            question = self.parse(block)
        except ValueError as e:
            logger.error(f"Block {index + 1} could not be parsed: {e}")
            return BatchItem(
                index=index,
                source_text=block,
                status=ItemStatus.ERROR,
                error=str(e),
            )
        return BatchItem(
            index=index,
            source_text=block,
            status=ItemStatus.PARSED,
            question=question,
        )
