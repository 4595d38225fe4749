"""
Persistence Hand-off
====================
Interface to the storage collaborator. The parser never stores anything
itself; whoever owns the database implements ``QuestionRepository`` and
receives only questions that passed pre-persistence validation.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from .exceptions import QuestionRejectedError
from .models import ParsedQuestion
from .validator import ValidationEngine

logger = logging.getLogger(__name__)


class QuestionRepository(Protocol):
    """Storage collaborator for parsed questions."""

    def save(self, question: ParsedQuestion) -> str:
        """Persist ``question`` and return its identifier."""
        ...


def submit_question(
    question: ParsedQuestion,
    repository: QuestionRepository,
    validator: Optional[ValidationEngine] = None,
) -> str:
    """
    Validate ``question`` and hand it to ``repository``.

    Raises:
        QuestionRejectedError: If the question still needs manual fixes.
    """
    validator = validator or ValidationEngine()
    issues = validator.validate_question(question)
    if issues:
        logger.warning(
            f"Rejected question: {', '.join(i.code for i in issues)}"
        )
        raise QuestionRejectedError(issues)

    question_id = repository.save(question)
    logger.info(f"Stored question {question_id}")
    return question_id
