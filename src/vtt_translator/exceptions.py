"""Custom exceptions for the VTT translator."""

from __future__ import annotations


class VttTranslatorError(Exception):
    """Base class for exceptions in this package."""
    pass


class ConfigurationError(VttTranslatorError):
    """Raised for invalid or incomplete configuration."""
    pass


class TranslationError(VttTranslatorError):
    """Raised when a sentence group could not be translated."""

    def __init__(self, group_index: int, message: str):
        self.group_index = group_index
        self.message = message
        super().__init__(f"Translation failed for group #{group_index}: {message}")
