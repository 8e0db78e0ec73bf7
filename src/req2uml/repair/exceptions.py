"""Custom exceptions for the text repair module."""

from __future__ import annotations


class RepairFailure(Exception):
    """Raised when generator text cannot be coerced into structured data.

    The original parse error is chained as ``__cause__``.

    Attributes:
        preview: The first characters of the offending text.
    """

    def __init__(self, message: str, preview: str = "") -> None:
        self.preview = preview
        if preview:
            message = f"{message}\nResponse preview: {preview}"
        super().__init__(message)
