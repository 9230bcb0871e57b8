"""
Input IR types: design variables and the collections that group them.

These models describe the records produced by the host design tool's
adapter. They are read-only inputs to the export pipeline. Field aliases
follow the host tool's camelCase JSON so an adapter dump can be loaded
with ``Variable.model_validate(raw)`` directly.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Enums
# =============================================================================


class ResolvedPrimitive(StrEnum):
    """Primitive kind declared by the host tool for a variable."""

    COLOR = "COLOR"
    FLOAT = "FLOAT"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"


class VariableScope(StrEnum):
    """Scope hints the host tool attaches to variables."""

    ALL_SCOPES = "ALL_SCOPES"
    TEXT_CONTENT = "TEXT_CONTENT"
    CORNER_RADIUS = "CORNER_RADIUS"
    WIDTH_HEIGHT = "WIDTH_HEIGHT"
    GAP = "GAP"
    STROKE_COLOR = "STROKE_COLOR"
    FILL_COLOR = "FILL_COLOR"
    EFFECT_COLOR = "EFFECT_COLOR"


# =============================================================================
# Resolved values
# =============================================================================


class ColorComponents(BaseModel):
    """An sRGB color with 0-1 components and optional alpha."""

    model_config = ConfigDict(frozen=True)

    r: float
    g: float
    b: float
    a: float | None = None


class AliasReference(BaseModel):
    """A pointer to another variable. Not a value; must be resolved."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["VARIABLE_ALIAS"] = "VARIABLE_ALIAS"
    target_variable_id: str = Field(alias="id")


ResolvedValue = AliasReference | ColorComponents | bool | int | float | str


def is_alias(value: Any) -> bool:
    """Return True when *value* is an alias reference rather than data."""
    return isinstance(value, AliasReference)


# =============================================================================
# Variables and collections
# =============================================================================


class Variable(BaseModel):
    """A single design variable with one resolved value per mode."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""
    name: str = ""
    # Plain str so an unknown kind reaches validation instead of failing here
    resolved_type: str = Field(default="", alias="resolvedType")
    values_by_mode: dict[str, ResolvedValue | None] = Field(default_factory=dict, alias="valuesByMode")
    description: str = ""
    scope_hints: frozenset[str] = Field(default_factory=frozenset, alias="scopes")
    hidden: bool = Field(default=False, alias="hiddenFromPublishing")

    @field_validator("description", "name", "id", "resolved_type", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("scope_hints", mode="before")
    @classmethod
    def _scopes_as_set(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        return value

    @field_validator("values_by_mode", mode="before")
    @classmethod
    def _values_as_dict(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def is_deprecated(self) -> bool:
        """Deprecation is signalled through the description text."""
        return "deprecated" in self.description.lower()


class Mode(BaseModel):
    """A named mode (e.g. light/dark) within a collection."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    mode_id: str = Field(alias="modeId")
    name: str


class Collection(BaseModel):
    """A group of variables sharing a set of modes."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""
    name: str = ""
    modes: list[Mode] = Field(default_factory=list)
    default_mode_id: str = Field(default="", alias="defaultModeId")
    variable_ids: list[str] = Field(default_factory=list, alias="variableIds")

    def get_mode(self, mode_id: str) -> Mode | None:
        for mode in self.modes:
            if mode.mode_id == mode_id:
                return mode
        return None

    def mode_name(self, mode_id: str) -> str:
        """Display name for *mode_id*, falling back to the id itself."""
        mode = self.get_mode(mode_id)
        return mode.name if mode else mode_id
