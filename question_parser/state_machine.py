"""
Section Segmenter
=================
Deterministic state machine that walks normalized lines and buckets them
into the statement, alternatives and commentary regions of a question.

    STATEMENT ──(a) ...)──> ALTERNATIVES ──(marker / other line)──> COMMENTARY
        └──────────────(Comentários: / Explicação:)──────────────────┘

Regions are visited in a single forward pass; once in COMMENTARY every
remaining line is commentary.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .alternatives import ALTERNATIVE_PATTERN, extract_alternative
from .models import Alternative, QuestionKind

logger = logging.getLogger(__name__)

# ─── Anchor Patterns ──────────────────────────────────────────────────────────

# Matches "Comentários:", "EXPLICAÇÃO:" at start of line
COMMENTARY_PATTERN = re.compile(
    r"^(?:comentários|explicação):\s*", re.IGNORECASE
)


def is_commentary_marker(line: str) -> bool:
    return bool(COMMENTARY_PATTERN.match(line))


class Segment(Enum):
    """Regions of a pasted question, in the only order they may appear."""
    STATEMENT = "STATEMENT"
    ALTERNATIVES = "ALTERNATIVES"
    COMMENTARY = "COMMENTARY"


def next_segment(current: Segment, line: str, kind: QuestionKind) -> Segment:
    """Transition function of the segmenter."""
    if current == Segment.COMMENTARY:
        return Segment.COMMENTARY

    if is_commentary_marker(line):
        return Segment.COMMENTARY

    if (
        kind == QuestionKind.MULTIPLE_CHOICE
        and ALTERNATIVE_PATTERN.match(line)
    ):
        return Segment.ALTERNATIVES

    # Alternatives are single-line; anything else ends the region
    if current == Segment.ALTERNATIVES:
        return Segment.COMMENTARY

    return Segment.STATEMENT


@dataclass
class Sections:
    """Lines of one question bucketed by region."""
    statement_lines: list[str] = field(default_factory=list)
    alternatives: list[Alternative] = field(default_factory=list)
    commentary_lines: list[str] = field(default_factory=list)

    @property
    def statement(self) -> str:
        return " ".join(self.statement_lines)

    @property
    def commentary(self) -> Optional[str]:
        if not self.commentary_lines:
            return None
        return " ".join(self.commentary_lines)


class SectionSegmenter:
    """
    Finite state machine that transforms normalized lines into Sections.

    Not shared between calls: the engine builds one per parse.
    """

    def __init__(self):
        self.state = Segment.STATEMENT
        self.sections = Sections()

    def reset(self):
        """Reset the state machine for a fresh run."""
        self.state = Segment.STATEMENT
        self.sections = Sections()

    def segment(self, lines: list[str], kind: QuestionKind) -> Sections:
        """Walk ``lines`` once and return the bucketed sections."""
        self.reset()

        for line in lines:
            self._process_line(line, kind)

        logger.debug(
            f"Segmented into {len(self.sections.statement_lines)} statement "
            f"lines, {len(self.sections.alternatives)} alternatives, "
            f"{len(self.sections.commentary_lines)} commentary lines"
        )
        return self.sections

    def _process_line(self, line: str, kind: QuestionKind):
        previous = self.state
        self.state = next_segment(previous, line, kind)

        if self.state != previous:
            logger.debug(f"{previous.value} -> {self.state.value}: {line[:40]!r}")

        if self.state == Segment.STATEMENT:
            self.sections.statement_lines.append(line)

        elif self.state == Segment.ALTERNATIVES:
            self.sections.alternatives.append(extract_alternative(line))

        elif previous != Segment.COMMENTARY and is_commentary_marker(line):
            # Entering commentary through a marker: keep only the remainder
            remainder = COMMENTARY_PATTERN.sub("", line, count=1).strip()
            if remainder:
                self.sections.commentary_lines.append(remainder)

        else:
            self.sections.commentary_lines.append(line)
