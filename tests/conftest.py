"""Shared pytest fixtures for tokenbridge tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from tokenbridge.core.ir import (
    AliasReference,
    Collection,
    ColorComponents,
    ExportSettings,
    Mode,
    Variable,
)


def _variable(
    id: str = "v1",
    name: str = "token",
    resolved_type: str = "FLOAT",
    values: dict[str, Any] | None = None,
    **kwargs: Any,
) -> Variable:
    return Variable(
        id=id,
        name=name,
        resolved_type=resolved_type,
        values_by_mode=values if values is not None else {"m1": 0},
        **kwargs,
    )


@pytest.fixture
def make_variable() -> Callable[..., Variable]:
    """Factory for variables; a single "m1" mode unless values are given."""
    return _variable


@pytest.fixture
def theme_collection() -> Collection:
    """Collection with light (default) and dark modes holding v1-v3."""
    return Collection(
        id="c1",
        name="Theme",
        modes=[Mode(mode_id="m1", name="Light"), Mode(mode_id="m2", name="Dark")],
        default_mode_id="m1",
        variable_ids=["v1", "v2", "v3"],
    )


@pytest.fixture
def theme_variables() -> list[Variable]:
    """A color, a corner radius, and an alias to the color."""
    to_primary = AliasReference(target_variable_id="v1")
    return [
        _variable(
            "v1",
            "color/brand/primary",
            "COLOR",
            {"m1": ColorComponents(r=1, g=0, b=0), "m2": ColorComponents(r=0, g=0, b=1)},
        ),
        _variable("v2", "corner-radius-100", "FLOAT", {"m1": 4, "m2": 4}),
        _variable("v3", "color/button/background", "COLOR", {"m1": to_primary, "m2": to_primary}),
    ]


@pytest.fixture
def default_settings() -> ExportSettings:
    return ExportSettings()


@pytest.fixture
def adapter_dump() -> dict[str, Any]:
    """Raw JSON dump in the host tool's camelCase shape."""
    return {
        "collections": [
            {
                "id": "c1",
                "name": "Theme",
                "modes": [{"modeId": "m1", "name": "Light"}, {"modeId": "m2", "name": "Dark"}],
                "defaultModeId": "m1",
                "variableIds": ["v1", "v2", "v3"],
            }
        ],
        "variables": [
            {
                "id": "v1",
                "name": "color/brand/primary",
                "resolvedType": "COLOR",
                "valuesByMode": {"m1": {"r": 1, "g": 0, "b": 0}, "m2": {"r": 0, "g": 0, "b": 1}},
            },
            {
                "id": "v2",
                "name": "corner-radius-100",
                "resolvedType": "FLOAT",
                "valuesByMode": {"m1": 4, "m2": 4},
                "scopes": ["CORNER_RADIUS"],
            },
            {
                "id": "v3",
                "name": "color/button/background",
                "resolvedType": "COLOR",
                "valuesByMode": {
                    "m1": {"type": "VARIABLE_ALIAS", "id": "v1"},
                    "m2": {"type": "VARIABLE_ALIAS", "id": "v1"},
                },
            },
        ],
    }
