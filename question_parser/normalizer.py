"""
Line Normalizer
===============
Turns pasted text into the line sequence every later stage consumes,
and splits batch transcripts into one text block per question.
"""

from __future__ import annotations

import logging
import re
import unicodedata

logger = logging.getLogger(__name__)

# Any line ending: "\r\n", "\r" or "\n"
LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")


def normalize_lines(text: str) -> list[str]:
    """
    Split text into trimmed, non-empty lines, preserving order.

    Blank lines carry no section-boundary meaning and are dropped.
    Returns an empty list when the input is empty or whitespace-only.
    """
    if not text:
        return []

    # PDF copies often carry decomposed accents ("a" + U+0301)
    text = unicodedata.normalize("NFC", text)
    lines = [line.strip() for line in LINE_BREAK_PATTERN.split(text)]
    lines = [line for line in lines if line]

    logger.debug(f"Normalized input into {len(lines)} lines")
    return lines


def block_separator(blank_lines: int = 2) -> re.Pattern:
    """Pattern matching a run of at least ``blank_lines`` blank lines."""
    if blank_lines < 1:
        raise ValueError("blank_lines must be at least 1")
    return re.compile(r"\n" + r"\s*\n" * blank_lines)


def split_blocks(text: str, blank_lines: int = 2) -> list[str]:
    """
    Split a batch transcript into question blocks.

    Questions are separated by ``blank_lines`` or more consecutive blank
    lines; a single blank line inside a question does not split it.
    Blocks are trimmed and empty blocks are dropped.
    """
    if not text:
        return []

    unified = LINE_BREAK_PATTERN.sub("\n", text)
    blocks = [
        block.strip()
        for block in block_separator(blank_lines).split(unified)
    ]
    blocks = [block for block in blocks if block]

    logger.debug(f"Split transcript into {len(blocks)} blocks")
    return blocks
