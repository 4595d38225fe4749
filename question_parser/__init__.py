"""
Question Parser
===============
Turns exam questions pasted from PDFs, documents or question banks into
structured drafts for a quiz application.

Architecture:
    - Line Normalizer: Trims and splits raw text into non-empty lines
    - Kind Classifier: True/false ("certo/errado") vs multiple choice
    - Section Segmenter: Statement → alternatives → commentary state machine
    - Alternative Extractor: Lettered "a)".."e)" options
    - Answer-Key Resolver: Keyword polarity and "Gabarito: X" markers
    - Validation Engine: Pre-persistence checks for the storage collaborator

Version: 1.0.0
"""

__version__ = "1.0.0"

from .engine import ParserConfig, ParserEngine, parse_question  # noqa: E402
from .exceptions import (  # noqa: E402
    EmptyInputError,
    QuestionParserError,
    QuestionRejectedError,
)
from .models import (  # noqa: E402
    Alternative,
    ParsedQuestion,
    QuestionKind,
    ReviewFlag,
    TrueFalseAnswer,
)

__all__ = [
    "Alternative",
    "EmptyInputError",
    "ParsedQuestion",
    "ParserConfig",
    "ParserEngine",
    "QuestionKind",
    "QuestionParserError",
    "QuestionRejectedError",
    "ReviewFlag",
    "TrueFalseAnswer",
    "parse_question",
]
