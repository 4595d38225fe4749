"""
Answer-Key Resolver
===================
Infers the correct answer from the commentary region.

    - True/false: polarity keywords ("Correto.", "Errado.") in the commentary.
    - Multiple choice: an explicit "Gabarito: X" marker.

Resolution is conservative: mixed or missing evidence leaves the answer
unresolved for a human to confirm.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from .alternatives import letter_to_index
from .models import Alternative, TrueFalseAnswer

logger = logging.getLogger(__name__)

# ─── Keyword Sets ─────────────────────────────────────────────────────────────

AFFIRMATIVE_KEYWORDS = frozenset({
    "certo",
    "correto",
    "verdadeiro",
    "correta",
    "verdadeira",
})

NEGATIVE_KEYWORDS = frozenset({
    "errado",
    "incorreto",
    "falso",
    "errada",
    "incorreta",
    "falsa",
})


def _keyword_pattern(keywords) -> re.Pattern:
    # Longest first so "incorreta" wins over any shorter overlap
    alternation = "|".join(
        re.escape(word) for word in sorted(keywords, key=len, reverse=True)
    )
    return re.compile(alternation, re.IGNORECASE)


AFFIRMATIVE_PATTERN = _keyword_pattern(AFFIRMATIVE_KEYWORDS)
NEGATIVE_PATTERN = _keyword_pattern(NEGATIVE_KEYWORDS)

# "Gabarito: B", "GABARITO:d"
GABARITO_PATTERN = re.compile(r"gabarito:\s*([a-eA-E])", re.IGNORECASE)


# ─── True/False ───────────────────────────────────────────────────────────────


def resolve_true_false(commentary: Optional[str]) -> TrueFalseAnswer:
    """
    Infer a certo/errado answer from keyword polarity.

    Affirmative only -> TRUE, negative only -> FALSE, otherwise UNRESOLVED.
    Negative keywords are masked before the affirmative scan, since
    "incorreto" and "incorreta" contain "correto" and "correta".
    """
    if not commentary:
        return TrueFalseAnswer.UNRESOLVED

    has_negative = bool(NEGATIVE_PATTERN.search(commentary))
    masked = NEGATIVE_PATTERN.sub(" ", commentary)
    has_affirmative = bool(AFFIRMATIVE_PATTERN.search(masked))

    if has_affirmative and not has_negative:
        return TrueFalseAnswer.TRUE
    if has_negative and not has_affirmative:
        return TrueFalseAnswer.FALSE

    if has_affirmative and has_negative:
        logger.debug("Commentary has both polarities; answer left unresolved")
    return TrueFalseAnswer.UNRESOLVED


# ─── Multiple Choice ──────────────────────────────────────────────────────────


def find_answer_key(commentary: Optional[str]) -> Optional[int]:
    """Zero-based index named by the first "Gabarito:" marker, or None."""
    if not commentary:
        return None

    match = GABARITO_PATTERN.search(commentary)
    if not match:
        return None
    return letter_to_index(match.group(1))


def resolve_multiple_choice(
    alternatives: list[Alternative],
    commentary: Optional[str],
) -> list[Alternative]:
    """
    Return ``alternatives`` with the gabarito alternative marked correct.

    An absent marker, or one pointing past the last alternative, leaves
    every alternative incorrect.
    """
    index = find_answer_key(commentary)

    if index is not None and index >= len(alternatives):
        logger.debug(
            f"Gabarito index {index} out of bounds for "
            f"{len(alternatives)} alternatives"
        )
        index = None

    return [
        alt.model_copy(update={"is_correct": i == index})
        for i, alt in enumerate(alternatives)
    ]
