"""
Error types for tokenbridge loading, conversion, and export.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class TokenBridgeError(Exception):
    """Base exception for all tokenbridge errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class SettingsError(TokenBridgeError):
    """
    Raised when an export settings file cannot be read.

    Examples:
    - Malformed YAML
    - Unknown keys
    - Wrong value types (e.g. a list where a flag is expected)
    """

    pass


class InputDocumentError(TokenBridgeError):
    """
    Raised when a variable/collection dump cannot be loaded.

    Examples:
    - Malformed JSON
    - Top-level value is not an object
    - Records that do not match the variable or collection shape
    """

    pass


class AliasResolutionError(TokenBridgeError):
    """
    Raised while following an alias chain.

    Examples:
    - Alias target id not present in the export
    - Circular alias chain
    """

    pass


@dataclass
class ErrorContext:
    """
    Where an error came from.

    Attributes:
        file: Source document, when the error came from a file
        pointer: Location within the document (e.g. "variables[3]")
    """

    file: Path | None = None
    pointer: str | None = None

    def format(self) -> str:
        """Format as "file#pointer", "file", or "pointer"."""
        if self.file and self.pointer:
            return f"{self.file}#{self.pointer}"
        if self.file:
            return str(self.file)
        return self.pointer or ""


def make_input_error(
    message: str,
    file: Path | None = None,
    pointer: str | None = None,
) -> InputDocumentError:
    """
    Helper to create an InputDocumentError with optional context.

    Args:
        message: Error description
        file: Optional source document path
        pointer: Optional location inside the document

    Returns:
        InputDocumentError with context if a location was provided
    """
    if file or pointer:
        return InputDocumentError(message, ErrorContext(file=file, pointer=pointer))
    return InputDocumentError(message)


def make_settings_error(message: str, file: Path | None = None) -> SettingsError:
    """Helper to create a SettingsError, attaching the file when known."""
    if file:
        return SettingsError(message, ErrorContext(file=file))
    return SettingsError(message)
