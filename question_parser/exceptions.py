"""
Exceptions
==========
Hard failures of the parsing pipeline and of the persistence hand-off.
Soft conditions (unresolved answers, missing alternatives) are never raised;
they travel as ``ReviewFlag`` values on the parsed question.
"""

from __future__ import annotations


class QuestionParserError(ValueError):
    """Base class for parser errors."""


class EmptyInputError(QuestionParserError):
    """Raw text normalizes to zero lines; no record can be produced."""

    def __init__(self, message: str = "Input text is empty"):
        super().__init__(message)


class QuestionRejectedError(QuestionParserError):
    """A parsed question failed pre-persistence validation."""

    def __init__(self, issues):
        self.issues = list(issues)
        summary = "; ".join(issue.message for issue in self.issues)
        super().__init__(f"Question cannot be saved: {summary}")
