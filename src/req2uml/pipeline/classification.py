"""Classify requirement text by length."""

from __future__ import annotations

from enum import Enum

SHORT_MAX_CHARS = 200
SHORT_MAX_WORDS = 50
MEDIUM_MAX_CHARS = 1000
MEDIUM_MAX_WORDS = 200


class TextClassification(str, Enum):
    """Size class of a requirement text."""

    SHORT_TEXT = "SHORT_TEXT"
    MEDIUM_TEXT = "MEDIUM_TEXT"
    LONG_TEXT = "LONG_TEXT"


def classify_text(text: str) -> TextClassification:
    """Classify *text* by character and whitespace-separated word count.

    A text is short or medium only if it is within both limits.
    """
    char_count = len(text)
    word_count = len(text.split())

    if char_count <= SHORT_MAX_CHARS and word_count <= SHORT_MAX_WORDS:
        return TextClassification.SHORT_TEXT
    if char_count <= MEDIUM_MAX_CHARS and word_count <= MEDIUM_MAX_WORDS:
        return TextClassification.MEDIUM_TEXT
    return TextClassification.LONG_TEXT
