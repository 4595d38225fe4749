"""
Data Models
===========
Pydantic models for structured question parsing output.
All models are serializable to JSON for the quiz application's import flow.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


# ─── Enums ────────────────────────────────────────────────────────────────────


class QuestionKind(str, Enum):
    """Supported question formats."""
    TRUE_FALSE = "true_false"
    MULTIPLE_CHOICE = "multiple_choice"


class TrueFalseAnswer(str, Enum):
    """Tri-state answer of a true/false ("certo/errado") question."""
    TRUE = "true"
    FALSE = "false"
    UNRESOLVED = "unresolved"


class ReviewFlag(str, Enum):
    """Soft conditions that require manual confirmation before saving."""
    UNRESOLVED_ANSWER = "unresolved_answer"
    INSUFFICIENT_ALTERNATIVES = "insufficient_alternatives"
    EXCEPT_CLAUSE = "except_clause"
    MISSING_STATEMENT = "missing_statement"


class ItemStatus(str, Enum):
    """Outcome of one block in a batch import."""
    PARSED = "parsed"
    ERROR = "error"


# ─── Question Models ──────────────────────────────────────────────────────────


class Alternative(BaseModel):
    """One lettered option of a multiple-choice question."""
    model_config = ConfigDict(frozen=True)

    text: str
    is_correct: bool = False


class ParsedQuestion(BaseModel):
    """
    A fully parsed question draft.

    Immutable once assembled; callers apply manual corrections with
    ``model_copy(update=...)``.
    """
    model_config = ConfigDict(frozen=True)

    statement: str
    kind: QuestionKind
    alternatives: list[Alternative] = Field(default_factory=list)
    explanation: Optional[str] = None
    true_false_answer: Optional[TrueFalseAnswer] = None
    review_flags: list[ReviewFlag] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_answer_matches_kind(self) -> "ParsedQuestion":
        if self.kind == QuestionKind.TRUE_FALSE:
            if self.alternatives:
                raise ValueError(
                    "true/false questions cannot carry alternatives"
                )
        elif self.true_false_answer is not None:
            raise ValueError(
                "multiple-choice questions cannot carry a true/false answer"
            )

        if sum(1 for alt in self.alternatives if alt.is_correct) > 1:
            raise ValueError("at most one alternative may be correct")
        return self

    @computed_field
    @property
    def correct_index(self) -> Optional[int]:
        """Zero-based index of the correct alternative, if any."""
        for index, alt in enumerate(self.alternatives):
            if alt.is_correct:
                return index
        return None

    @computed_field
    @property
    def is_answer_resolved(self) -> bool:
        if self.kind == QuestionKind.TRUE_FALSE:
            return self.true_false_answer in (
                TrueFalseAnswer.TRUE, TrueFalseAnswer.FALSE
            )
        return self.correct_index is not None

    @computed_field
    @property
    def needs_review(self) -> bool:
        return bool(self.review_flags)


# ─── Validation / Batch Models ────────────────────────────────────────────────


class ValidationIssue(BaseModel):
    """A reason why a parsed question cannot be persisted as-is."""
    code: str
    message: str


class ValidationReport(BaseModel):
    """Pre-persistence validation report over a set of questions."""
    total_questions: int = 0
    storable: int = 0
    questions_missing_answer: list[int] = Field(default_factory=list)
    questions_insufficient_alternatives: list[int] = Field(default_factory=list)
    questions_missing_statement: list[int] = Field(default_factory=list)
    flag_breakdown: dict[str, int] = Field(default_factory=dict)

    @computed_field
    @property
    def success_rate(self) -> float:
        if self.total_questions == 0:
            return 0.0
        return round(self.storable / self.total_questions * 100, 2)


class BatchItem(BaseModel):
    """One question block of a batch transcript and its parse outcome."""
    index: int = Field(ge=0)
    source_text: str
    status: ItemStatus
    question: Optional[ParsedQuestion] = None
    error: Optional[str] = None


class ImportReport(BaseModel):
    """
    Complete output of a batch import.
    This is the top-level JSON structure returned to the import screen.
    """
    parser_version: str = "1.0.0"
    parse_timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    items: list[BatchItem] = Field(default_factory=list)
    validation: ValidationReport = Field(default_factory=ValidationReport)

    @property
    def questions(self) -> list[ParsedQuestion]:
        return [item.question for item in self.items if item.question is not None]

    @property
    def errors(self) -> list[BatchItem]:
        return [item for item in self.items if item.status == ItemStatus.ERROR]
