"""
Export settings IR.

Enumerated options are declared as string enums, but the settings model
stores plain strings: an unknown value must survive construction so that
``validate_export_settings`` can reject it with a specific code.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SCHEMA_BASE_URL = "https://opensource.adobe.com/spectrum-tokens/schemas/token-types"


class OutputFormat(StrEnum):
    CANONICAL = "canonical"
    EXTENDED = "extended"
    BOTH = "both"
    PLATFORM_CODE = "platform-code"


class TreeStructure(StrEnum):
    FLAT = "flat"
    NESTED = "nested"


class NamingConvention(StrEnum):
    KEBAB = "kebab"
    CAMEL = "camel"
    SNAKE = "snake"
    ORIGINAL = "original"


class DefaultUnit(StrEnum):
    PX = "px"
    REM = "rem"


class IdentifierMode(StrEnum):
    DETERMINISTIC = "deterministic"
    RANDOM = "random"
    NONE = "none"


class Platform(StrEnum):
    IOS = "ios"
    ANDROID = "android"
    COMPOSE = "compose"
    WEB = "web"


class ModeSelection(StrEnum):
    DEFAULT = "default"
    ALL = "all"


class ExportSettings(BaseModel):
    """User-facing configuration for one export run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    format: str = Field(default=OutputFormat.BOTH, description="Which artifacts to emit")
    structure: str = Field(default=TreeStructure.NESTED, description="Flat keys or nested groups")
    naming_convention: str = Field(
        default=NamingConvention.KEBAB, description="Case applied to token path segments"
    )
    default_unit: str = Field(default=DefaultUnit.PX, description="Unit for unitless dimensions")
    identifier_mode: str = Field(
        default=IdentifierMode.DETERMINISTIC, description="How extended-token ids are produced"
    )
    platform: str = Field(default=Platform.WEB, description="Target for platform-code output")
    modes: str = Field(default=ModeSelection.DEFAULT, description="Export default mode or all")
    include_private: bool = Field(default=False, description="Export hidden variables")
    include_deprecated: bool = Field(default=False, description="Export deprecated variables")
    include_metadata: bool = Field(default=True, description="Attach source metadata extensions")
    schema_base_url: str = Field(
        default=DEFAULT_SCHEMA_BASE_URL, description="Prefix for extended-schema URLs"
    )

    @property
    def wants_canonical(self) -> bool:
        return self.format in (
            OutputFormat.CANONICAL,
            OutputFormat.BOTH,
            OutputFormat.PLATFORM_CODE,
        )

    @property
    def wants_extended(self) -> bool:
        return self.format in (OutputFormat.EXTENDED, OutputFormat.BOTH)

    def effective(self, field_name: str, allowed: type[StrEnum]) -> str:
        """Return the field value, or its default when not a member of *allowed*."""
        value = getattr(self, field_name)
        if value in {member.value for member in allowed}:
            return str(value)
        return str(type(self).model_fields[field_name].default)
