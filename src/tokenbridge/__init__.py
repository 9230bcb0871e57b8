"""
tokenbridge - design variables to design tokens.

Classifies typed design variables into semantic token types and exports
them as vendor-neutral tokens, extended tokens with stable identifiers,
and platform code literals.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.coordinator import ExportCoordinator, export_tokens, format_summary
from .core.errors import AliasResolutionError, InputDocumentError, SettingsError, TokenBridgeError

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "ExportCoordinator",
    "export_tokens",
    "format_summary",
    "TokenBridgeError",
    "SettingsError",
    "InputDocumentError",
    "AliasResolutionError",
]
