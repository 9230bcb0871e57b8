"""
Stable identifiers for extended tokens.
"""

from __future__ import annotations

import uuid

from .ir.settings import IdentifierMode

TOKEN_NAMESPACE = uuid.UUID("550e8400-e29b-41d4-a716-446655440000")


def identifier_key(variable_id: str, mode_key: str | None = None) -> str:
    """Seed for the deterministic id: the variable id, plus the mode when exporting sets."""
    return f"{variable_id}-{mode_key}" if mode_key else variable_id


def make_identifier(
    variable_id: str,
    mode_key: str | None = None,
    identifier_mode: str = IdentifierMode.DETERMINISTIC,
) -> str | None:
    """Return a UUID string for a token, or None when identifiers are disabled.

    Deterministic ids are UUIDv5 over a fixed namespace, so re-exporting the
    same variable always yields the same id.
    """
    if identifier_mode == IdentifierMode.NONE:
        return None
    if identifier_mode == IdentifierMode.RANDOM:
        return str(uuid.uuid4())
    return str(uuid.uuid5(TOKEN_NAMESPACE, identifier_key(variable_id, mode_key)))
