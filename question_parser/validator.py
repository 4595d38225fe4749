"""
Validation Engine
=================
Pre-persistence validation and reporting.

The parser always returns a best-effort draft. Before a draft is stored,
the persistence side checks the same rules the question edit form enforces:
    - Statement is required
    - Multiple choice: at least two non-empty alternatives, one marked correct
    - True/false: the answer must be confirmed as true or false

Never silently ignores failures.
"""

from __future__ import annotations

import logging
from collections import Counter

from .models import (
    ParsedQuestion,
    QuestionKind,
    TrueFalseAnswer,
    ValidationIssue,
    ValidationReport,
)

logger = logging.getLogger(__name__)

MISSING_STATEMENT = "missing_statement"
INSUFFICIENT_ALTERNATIVES = "insufficient_alternatives"
MISSING_ANSWER = "missing_answer"


class ValidationEngine:
    """
    Validates parsed questions against the storage contract and produces
    a report over a batch.
    """

    def __init__(self, min_alternatives: int = 2):
        self.min_alternatives = min_alternatives

    def validate_question(
        self,
        question: ParsedQuestion,
    ) -> list[ValidationIssue]:
        """
        List every reason ``question`` cannot be stored as-is.

        Args:
            question: Parsed (possibly hand-corrected) question.

        Returns:
            Issues found; empty when the question is storable.
        """
        issues: list[ValidationIssue] = []

        if not question.statement.strip():
            issues.append(ValidationIssue(
                code=MISSING_STATEMENT,
                message="Statement is required",
            ))

        if question.kind == QuestionKind.MULTIPLE_CHOICE:
            filled = [alt for alt in question.alternatives if alt.text.strip()]
            if len(filled) < self.min_alternatives:
                issues.append(ValidationIssue(
                    code=INSUFFICIENT_ALTERNATIVES,
                    message=(
                        f"At least {self.min_alternatives} alternatives "
                        f"are required ({len(filled)} found)"
                    ),
                ))
            if not any(alt.is_correct for alt in filled):
                issues.append(ValidationIssue(
                    code=MISSING_ANSWER,
                    message="Mark one alternative as correct",
                ))
        elif question.true_false_answer not in (
            TrueFalseAnswer.TRUE, TrueFalseAnswer.FALSE
        ):
            issues.append(ValidationIssue(
                code=MISSING_ANSWER,
                message="Select whether the answer is true or false",
            ))

        return issues

    def is_storable(self, question: ParsedQuestion) -> bool:
        return not self.validate_question(question)

    def validate(
        self,
        questions: list[ParsedQuestion],
    ) -> ValidationReport:
        """
        Run full validation on a batch of parsed questions.

        Args:
            questions: Parsed questions to validate, in import order.

        Returns:
            ValidationReport indexing problems by position in ``questions``.
        """
        report = ValidationReport()

        if not questions:
            logger.warning("No questions to validate")
            return report

        report.total_questions = len(questions)
        flag_counts: Counter = Counter()

        for index, question in enumerate(questions):
            issues = self.validate_question(question)
            codes = {issue.code for issue in issues}

            if not issues:
                report.storable += 1
            if MISSING_ANSWER in codes:
                report.questions_missing_answer.append(index)
            if INSUFFICIENT_ALTERNATIVES in codes:
                report.questions_insufficient_alternatives.append(index)
            if MISSING_STATEMENT in codes:
                report.questions_missing_statement.append(index)

            flag_counts.update(flag.value for flag in question.review_flags)

        report.flag_breakdown = dict(flag_counts)

        # Log summary
        logger.info(
            f"Validation: {report.storable}/{report.total_questions} "
            f"storable ({report.success_rate}%)"
        )
        if report.questions_missing_answer:
            logger.info(
                f"Questions missing answer: "
                f"{len(report.questions_missing_answer)}"
            )
        if report.questions_insufficient_alternatives:
            logger.info(
                f"Questions with insufficient alternatives: "
                f"{len(report.questions_insufficient_alternatives)}"
            )
        for flag, count in sorted(report.flag_breakdown.items()):
            logger.debug(f"  • {flag}: {count}")

        return report
