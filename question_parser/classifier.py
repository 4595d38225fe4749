"""
Kind Classifier
===============
Decides whether pasted text is a true/false ("certo/errado") question or a
multiple-choice one.

The scan is global: a lettered marker on any line is taken as evidence of an
alternatives region. A statement that happens to start a line with an
"a)"-shaped token is therefore classified as multiple choice; this is a
known limitation of the heuristic.
"""

from __future__ import annotations

import logging
import re

from .models import QuestionKind

logger = logging.getLogger(__name__)

# "a)" .. "e)" (any case) at line start, followed by at least one character
LETTERED_MARKER_PATTERN = re.compile(r"^[a-eA-E]\).+")


def is_lettered_marker(line: str) -> bool:
    return bool(LETTERED_MARKER_PATTERN.match(line))


def classify_kind(lines: list[str]) -> QuestionKind:
    """Classify normalized lines by the presence of a lettered marker."""
    if any(is_lettered_marker(line) for line in lines):
        kind = QuestionKind.MULTIPLE_CHOICE
    else:
        kind = QuestionKind.TRUE_FALSE

    logger.debug(f"Classified {len(lines)} lines as {kind.value}")
    return kind
