"""
Token assembler: converts variables into canonical and extended token maps.

Traversal order is collection order, then each collection's member order,
then variables that belong to no collection. Output insertion order
follows that traversal, so identical inputs give identical documents.

Failures are per token. A variable that cannot be converted adds an
error and is left out of every map; the rest of the export continues.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from .classifier import classify
from .errors import AliasResolutionError
from .identifiers import make_identifier
from .ir.settings import (
    DefaultUnit,
    ExportSettings,
    IdentifierMode,
    ModeSelection,
    NamingConvention,
    TreeStructure,
)
from .ir.tokens import (
    EXTENSION_NAMESPACE,
    ClassificationResult,
    Confidence,
    SchemaKind,
    SemanticType,
)
from .ir.variables import Collection, Variable, is_alias
from .naming import apply_convention, dotted_path, extract_component, flat_key, token_segments
from .schemas import schema_for, set_schema_for
from .token_validator import (
    ValidationReport,
    validate_token,
    validate_variable,
    validate_variable_value,
)
from .values import ConvertedValue, to_canonical_value, to_extended_value

logger = logging.getLogger(__name__)


# Semantic type -> canonical $type
CANONICAL_TYPE_NAMES: dict[str, str] = {
    SemanticType.COLOR: "color",
    SemanticType.DIMENSION: "dimension",
    SemanticType.OPACITY: "number",
    SemanticType.FONT_WEIGHT: "fontWeight",
    SemanticType.DURATION: "duration",
    SemanticType.MULTIPLIER: "number",
    SemanticType.FONT_FAMILY: "fontFamily",
    SemanticType.NUMBER: "number",
    SemanticType.STRING: "string",
}


# =============================================================================
# Result
# =============================================================================


@dataclass
class ConversionResult:
    """Token maps plus everything reported while building them."""

    canonical: dict[str, Any] = field(default_factory=dict)
    extended: dict[str, Any] = field(default_factory=dict)
    canonical_count: int = 0
    extended_count: int = 0
    collection_count: int = 0
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def token_count(self) -> int:
        return max(self.canonical_count, self.extended_count)

    @property
    def success(self) -> bool:
        return not self.errors


@dataclass
class _ModeSelection:
    """One (mode id, output key, display name) triple selected for export."""

    mode_id: str
    key: str
    name: str


@dataclass
class _BuiltMode:
    mode: _ModeSelection
    canonical: dict[str, Any] | None
    extended: dict[str, Any] | None
    terminal_type: SemanticType


# =============================================================================
# Assembler
# =============================================================================


class TokenAssembler:
    """Build token maps for one export run.

    An assembler holds per-run state (claimed paths, accumulated messages),
    so create a new one for every conversion.
    """

    def __init__(self, settings: ExportSettings):
        self.settings = settings
        self.naming = settings.effective("naming_convention", NamingConvention)
        self.unit = settings.effective("default_unit", DefaultUnit)
        self.identifier_mode = settings.effective("identifier_mode", IdentifierMode)
        self.mode_selection = settings.effective("modes", ModeSelection)
        self.nested = settings.structure == TreeStructure.NESTED
        self.build_canonical = settings.wants_canonical
        self.build_extended = settings.wants_extended

        self._variables: dict[str, Variable] = {}
        self._collection_of: dict[str, Collection] = {}
        self._leaf_paths: set[tuple[str, ...]] = set()
        self._group_paths: set[tuple[str, ...]] = set()
        self._extended_keys: set[str] = set()
        self.result = ConversionResult()

    # -------------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------------

    def convert(
        self, collections: Sequence[Collection], variables: Sequence[Variable]
    ) -> ConversionResult:
        self.result.collection_count = len(collections)
        self._variables = {v.id: v for v in variables if v.id}
        for collection in collections:
            for variable_id in collection.variable_ids:
                self._collection_of.setdefault(variable_id, collection)

        for variable, collection in self._traverse(collections, variables):
            self._convert_variable(variable, collection)

        logger.debug(
            "Converted %d canonical / %d extended tokens with %d error(s)",
            self.result.canonical_count,
            self.result.extended_count,
            len(self.result.errors),
        )
        return self.result

    def _traverse(
        self, collections: Sequence[Collection], variables: Sequence[Variable]
    ) -> Iterator[tuple[Variable, Collection | None]]:
        seen: set[str] = set()
        for collection in collections:
            for variable_id in collection.variable_ids:
                variable = self._variables.get(variable_id)
                if variable is None or variable_id in seen:
                    continue
                seen.add(variable_id)
                yield variable, collection
        for variable in variables:
            if variable.id and variable.id in seen:
                continue
            if variable.id:
                seen.add(variable.id)
            yield variable, None

    # -------------------------------------------------------------------------
    # Messages
    # -------------------------------------------------------------------------

    def _warn(self, message: str) -> None:
        self.result.warnings.append(message)

    def _error(self, message: str) -> None:
        self.result.errors.append(message)

    def _absorb(self, report: ValidationReport) -> None:
        self.result.errors.extend(str(issue) for issue in report.errors)
        self.result.warnings.extend(str(issue) for issue in report.warnings)

    # -------------------------------------------------------------------------
    # Per-variable conversion
    # -------------------------------------------------------------------------

    def _is_excluded(self, variable: Variable) -> bool:
        if variable.hidden and not self.settings.include_private:
            return True
        return variable.is_deprecated and not self.settings.include_deprecated

    def _convert_variable(self, variable: Variable, collection: Collection | None) -> None:
        report = validate_variable(variable)
        self._absorb(report)
        if not report.valid or not variable.values_by_mode:
            return

        if self._is_excluded(variable):
            logger.debug("Skipping excluded variable %r", variable.name)
            return

        segments = token_segments(variable.name, self.naming)
        if not segments:
            self._error(f'[INVALID_NAME] Variable "{variable.name}" has no usable path segments')
            return

        path = tuple(segments) if self.nested else (flat_key(segments, self.naming),)
        ext_key = flat_key(segments, self.naming)
        if not self._claim_is_free(variable, path, ext_key):
            return

        modes = self._select_modes(variable, collection)
        built: list[_BuiltMode] = []
        for mode in modes:
            value = variable.values_by_mode.get(mode.mode_id)
            value_report = validate_variable_value(variable, mode.mode_id, value)
            self._absorb(value_report)
            if not value_report.valid or value is None:
                continue
            try:
                built.append(self._build_mode(variable, collection, mode, value, path, ext_key))
            except AliasResolutionError as e:
                logger.warning(
                    "Alias resolution failed for %r (%s)", variable.name, mode.name, exc_info=True
                )
                self._error(f'[ALIAS_RESOLUTION] Variable "{variable.name}": {e.message}')

        if not built:
            return

        self._claim(path, ext_key)
        multi_mode = self.mode_selection == ModeSelection.ALL
        if self.build_canonical:
            self._place_canonical(path, self._canonical_entry(built, multi_mode))
            self.result.canonical_count += 1
        if self.build_extended:
            self.result.extended[ext_key] = self._extended_entry(variable, built, multi_mode)
            self.result.extended_count += 1

    def _select_modes(
        self, variable: Variable, collection: Collection | None
    ) -> list[_ModeSelection]:
        if collection is not None and collection.modes:
            candidates = [(mode.mode_id, mode.name) for mode in collection.modes]
            default_id = collection.default_mode_id or collection.modes[0].mode_id
        else:
            candidates = [(mode_id, mode_id) for mode_id in variable.values_by_mode]
            default_id = candidates[0][0] if candidates else ""

        if self.mode_selection == ModeSelection.ALL:
            return [self._mode(mode_id, name) for mode_id, name in candidates]
        names = dict(candidates)
        return [self._mode(default_id, names.get(default_id, default_id))]

    def _mode(self, mode_id: str, name: str) -> _ModeSelection:
        return _ModeSelection(
            mode_id=mode_id, key=apply_convention(name, self.naming) or mode_id, name=name
        )

    # -------------------------------------------------------------------------
    # Path bookkeeping
    # -------------------------------------------------------------------------

    def _claim_is_free(self, variable: Variable, path: tuple[str, ...], ext_key: str) -> bool:
        display = ".".join(path)
        if path in self._leaf_paths or ext_key in self._extended_keys:
            self._error(
                f'[DUPLICATE_TOKEN] Token "{display}" from variable "{variable.name}" '
                "duplicates an earlier token and was skipped"
            )
            return False
        prefixes = {path[:i] for i in range(1, len(path))}
        if path in self._group_paths or prefixes & self._leaf_paths:
            self._error(
                f'[PATH_CONFLICT] Token "{display}" from variable "{variable.name}" '
                "conflicts with an existing token group and was skipped"
            )
            return False
        return True

    def _claim(self, path: tuple[str, ...], ext_key: str) -> None:
        self._leaf_paths.add(path)
        self._group_paths.update(path[:i] for i in range(1, len(path)))
        self._extended_keys.add(ext_key)

    def _place_canonical(self, path: tuple[str, ...], entry: dict[str, Any]) -> None:
        node = self.result.canonical
        for segment in path[:-1]:
            node = node.setdefault(segment, {})
        node[path[-1]] = entry

    # -------------------------------------------------------------------------
    # Alias resolution
    # -------------------------------------------------------------------------

    def _target_mode(self, target: Variable, mode_id: str) -> str:
        """Pick the mode of *target* that corresponds to *mode_id*."""
        if mode_id in target.values_by_mode:
            return mode_id
        collection = self._collection_of.get(target.id)
        if collection is not None and collection.default_mode_id in target.values_by_mode:
            return collection.default_mode_id
        return next(iter(target.values_by_mode), mode_id)

    def resolve_alias_chain(self, variable: Variable, mode_id: str) -> tuple[Variable, Any]:
        """Follow aliases from *variable* to the first concrete value.

        Raises:
            AliasResolutionError: A target is missing, has no value, or the
                chain loops back on itself.
        """
        chain = [variable.name]
        seen = {variable.id}
        current, current_mode = variable, mode_id
        value = variable.values_by_mode.get(mode_id)
        while is_alias(value):
            target = self._variables.get(value.target_variable_id)
            if target is None:
                raise AliasResolutionError(f"Alias target not found: {value.target_variable_id}")
            chain.append(target.name)
            if target.id in seen:
                raise AliasResolutionError(f"Circular alias chain: {' -> '.join(chain)}")
            seen.add(target.id)
            current_mode = self._target_mode(target, current_mode)
            current, value = target, target.values_by_mode.get(current_mode)
        if value is None:
            raise AliasResolutionError(f'Alias target "{current.name}" has no value')
        return current, value

    def _reference(self, target: Variable, mode_id: str) -> tuple[str, str]:
        """Canonical and extended reference strings pointing at *target*."""
        segments = token_segments(target.name, self.naming)
        canonical = dotted_path(segments) if self.nested else flat_key(segments, self.naming)
        if self.mode_selection == ModeSelection.ALL:
            collection = self._collection_of.get(target.id)
            target_mode = self._target_mode(target, mode_id)
            name = collection.mode_name(target_mode) if collection else target_mode
            canonical = f"{canonical}.{apply_convention(name, self.naming) or target_mode}"
        if self._is_excluded(target):
            self._warn(
                f'[ALIAS_TARGET_EXCLUDED] Alias target "{target.name}" is not part of this export'
            )
        return f"{{{canonical}}}", f"{{{flat_key(segments, self.naming)}}}"

    # -------------------------------------------------------------------------
    # Token construction
    # -------------------------------------------------------------------------

    def _build_mode(
        self,
        variable: Variable,
        collection: Collection | None,
        mode: _ModeSelection,
        value: Any,
        path: tuple[str, ...],
        ext_key: str,
    ) -> _BuiltMode:
        classification = classify(variable, value)
        if is_alias(value):
            terminal_variable, terminal_value = self.resolve_alias_chain(variable, mode.mode_id)
            terminal = classify(terminal_variable, terminal_value)
            target = self._variables[value.target_variable_id]
            canonical_value, extended_value = self._reference(target, mode.mode_id)
        else:
            terminal = classification
            canonical_value = self._convert(variable, to_canonical_value, value, terminal)
            extended_value = self._convert(variable, to_extended_value, value, terminal)

        if classification.confidence == Confidence.LOW:
            self._warn(
                f'[LOW_CONFIDENCE] Variable "{variable.name}" classified as '
                f"{classification.semantic_type} with low confidence: {classification.reason}"
            )

        name = ".".join(path)
        canonical = None
        if self.build_canonical:
            canonical = self._canonical_token(
                variable, collection, mode, classification, terminal, canonical_value
            )
            self._absorb(validate_token(name, canonical, SchemaKind.CANONICAL))

        extended = None
        if self.build_extended:
            extended = self._extended_token(variable, mode, classification, extended_value)
            self._absorb(
                validate_token(
                    ext_key,
                    extended,
                    SchemaKind.EXTENDED,
                    schema_base_url=self.settings.schema_base_url,
                    require_identifier=self.identifier_mode != IdentifierMode.NONE,
                )
            )
        return _BuiltMode(mode, canonical, extended, terminal.semantic_type)

    def _convert(
        self,
        variable: Variable,
        converter: Callable[[Any, SemanticType, str], ConvertedValue],
        value: Any,
        terminal: ClassificationResult,
    ) -> Any:
        converted = converter(value, terminal.semantic_type, self.unit)
        for note in converted.notes:
            self._warn(f'[VALUE_ADJUSTED] Variable "{variable.name}": {note}')
        return converted.value

    def _canonical_token(
        self,
        variable: Variable,
        collection: Collection | None,
        mode: _ModeSelection,
        classification: ClassificationResult,
        terminal: ClassificationResult,
        value: Any,
    ) -> dict[str, Any]:
        token: dict[str, Any] = {
            "$value": value,
            "$type": CANONICAL_TYPE_NAMES.get(terminal.semantic_type, "string"),
        }
        if variable.description:
            token["$description"] = variable.description
        if variable.is_deprecated:
            token["$deprecated"] = True

        extension: dict[str, Any] = {}
        if classification.target_schema_hint:
            extension["schemaHint"] = str(classification.target_schema_hint)
        if self.settings.include_metadata:
            extension.update(
                {
                    "variableId": variable.id,
                    "collectionId": collection.id if collection else None,
                    "collectionName": collection.name if collection else None,
                    "mode": mode.name,
                    "scopes": sorted(variable.scope_hints),
                    "originalType": variable.resolved_type,
                    "confidence": str(classification.confidence),
                }
            )
        if extension:
            token["$extensions"] = {EXTENSION_NAMESPACE: extension}
        return token

    def _extended_token(
        self,
        variable: Variable,
        mode: _ModeSelection,
        classification: ClassificationResult,
        value: Any,
    ) -> dict[str, Any]:
        token: dict[str, Any] = {
            "$schema": schema_for(classification, self.settings.schema_base_url),
            "value": value,
        }
        mode_key = mode.key if self.mode_selection == ModeSelection.ALL else None
        identifier = make_identifier(variable.id, mode_key, self.identifier_mode)
        if identifier is not None:
            token["uuid"] = identifier
        return token

    def _canonical_entry(self, built: list[_BuiltMode], multi_mode: bool) -> dict[str, Any]:
        if not multi_mode:
            return built[0].canonical or {}
        return {item.mode.key: item.canonical for item in built}

    def _extended_entry(
        self, variable: Variable, built: list[_BuiltMode], multi_mode: bool
    ) -> dict[str, Any]:
        if multi_mode:
            entry: dict[str, Any] = {
                "$schema": set_schema_for(built[0].terminal_type, self.settings.schema_base_url),
                "sets": {item.mode.key: item.extended for item in built},
            }
        else:
            entry = dict(built[0].extended or {})

        component = extract_component(variable.name)
        if component:
            entry["component"] = component
        if variable.hidden:
            entry["private"] = True
        if variable.is_deprecated:
            entry["deprecated"] = True
        return entry


def convert_tokens(
    collections: Sequence[Collection],
    variables: Sequence[Variable],
    settings: ExportSettings,
) -> ConversionResult:
    """Convert variables into token maps with a fresh assembler."""
    return TokenAssembler(settings).convert(collections, variables)
