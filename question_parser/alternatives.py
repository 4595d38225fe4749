"""
Alternative Extractor
=====================
Recognizes single-line lettered options ("a) ...", "B) ...") and turns them
into ``Alternative`` entries. Correctness is never decided here; every
extracted alternative starts out incorrect.
"""

from __future__ import annotations

import re
from typing import Optional

from .models import Alternative

# Matches "a) Texto", "C)Texto"; group 1 is the letter, group 2 the text
ALTERNATIVE_PATTERN = re.compile(r"^([a-eA-E])\)\s*(.+)$")

ALTERNATIVE_LETTERS = "abcde"


def extract_alternative(line: str) -> Optional[Alternative]:
    """Return the alternative encoded by ``line``, or None."""
    match = ALTERNATIVE_PATTERN.match(line)
    if not match:
        return None
    return Alternative(text=match.group(2).strip(), is_correct=False)


def letter_to_index(letter: str) -> int:
    """Map an option letter to its zero-based position ("a" -> 0)."""
    return ALTERNATIVE_LETTERS.index(letter.lower())
