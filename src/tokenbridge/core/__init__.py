"""
tokenbridge core: classification, validation, conversion and export.
"""

from .assembler import ConversionResult, TokenAssembler, convert_tokens
from .classifier import classify
from .coordinator import ExportCoordinator, export_tokens, format_summary
from .platforms import transform_for_platform
from .token_validator import (
    ValidationIssue,
    ValidationReport,
    format_validation_report,
    validate_export_settings,
    validate_token,
    validate_tokens,
)

__all__ = [
    "ConversionResult",
    "ExportCoordinator",
    "TokenAssembler",
    "ValidationIssue",
    "ValidationReport",
    "classify",
    "convert_tokens",
    "export_tokens",
    "format_summary",
    "format_validation_report",
    "transform_for_platform",
    "validate_export_settings",
    "validate_token",
    "validate_tokens",
]
