"""
Export coordinator: the top-level pipeline.

Stages run strictly in order: scanning -> converting -> generating ->
complete. Each transition is reported to an optional progress callback.
The coordinator never raises: invalid settings and unexpected faults both
come back as an ``ExportResult`` with ``success=False``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from .assembler import convert_tokens
from .files import (
    build_canonical_file,
    build_extended_file,
    build_manifest_file,
    build_platform_file,
    build_summary_file,
    format_file_size,
)
from .ir.export import (
    ExportFile,
    ExportProgress,
    ExportResult,
    ExportStage,
    ExportStatistics,
    ProgressCallback,
)
from .ir.settings import ExportSettings, OutputFormat
from .ir.variables import Collection, Variable
from .platforms import transform_for_platform
from .token_validator import validate_export_settings

logger = logging.getLogger(__name__)

# Generating-stage steps: token documents, summary, manifest
_GENERATING_STEPS = 4


def _utc_now() -> datetime:
    return datetime.now(UTC)


class ExportCoordinator:
    """Runs one export per ``export()`` call.

    All accumulated state lives in locals of ``export()``, so one instance
    may be reused for sequential exports.
    """

    def __init__(
        self,
        on_progress: ProgressCallback | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.on_progress = on_progress
        self.clock = clock

    def _report(
        self, stage: ExportStage, message: str, current: int, total: int, percentage: int
    ) -> None:
        logger.debug("[%s %d%%] %s", stage, percentage, message)
        if self.on_progress is not None:
            self.on_progress(ExportProgress(stage, message, current, total, percentage))

    def export(
        self,
        collections: Sequence[Collection],
        variables: Sequence[Variable],
        settings: ExportSettings,
    ) -> ExportResult:
        """Validate settings, convert, and build the output files.

        Returns:
            ExportResult. ``success`` is True iff no error was accumulated.
        """
        warnings: list[str] = []
        errors: list[str] = []
        try:
            return self._run(collections, variables, settings, warnings, errors)
        except Exception as e:
            logger.exception("Export failed")
            errors.append(f"Export failed: {e}")
            return ExportResult(
                success=False,
                files=[],
                statistics=ExportStatistics(warning_count=len(warnings), error_count=len(errors)),
                warnings=warnings,
                errors=errors,
            )

    def _run(
        self,
        collections: Sequence[Collection],
        variables: Sequence[Variable],
        settings: ExportSettings,
        warnings: list[str],
        errors: list[str],
    ) -> ExportResult:
        settings_report = validate_export_settings(settings)
        warnings.extend(str(issue) for issue in settings_report.warnings)
        if not settings_report.valid:
            errors.extend(
                f"Export settings error: [{issue.code}] {issue.message}"
                for issue in settings_report.errors
            )
            logger.debug("Aborting export: %d settings error(s)", len(errors))
            return ExportResult(
                success=False,
                files=[],
                statistics=ExportStatistics(warning_count=len(warnings), error_count=len(errors)),
                warnings=warnings,
                errors=errors,
            )

        if not collections:
            warnings.append("No collections provided for export")
        if not variables:
            warnings.append("No variables provided for export")

        total = len(variables)
        self._report(ExportStage.SCANNING, "Scanning variables...", 0, total, 0)
        self._report(ExportStage.CONVERTING, "Converting tokens...", 0, total, 25)

        conversion = convert_tokens(collections, variables, settings)
        warnings.extend(conversion.warnings)
        errors.extend(conversion.errors)

        if (
            settings.wants_canonical
            and settings.wants_extended
            and conversion.canonical_count != conversion.extended_count
        ):
            errors.append(
                f"[TOKEN_COUNT_MISMATCH] Canonical map has {conversion.canonical_count} tokens "
                f"but extended map has {conversion.extended_count}"
            )

        self._report(ExportStage.GENERATING, "Generating files...", 0, _GENERATING_STEPS, 50)
        files: list[ExportFile] = []

        if settings.format in (OutputFormat.CANONICAL, OutputFormat.BOTH):
            files.append(build_canonical_file(conversion.canonical))
            self._report(
                ExportStage.GENERATING, "Generated canonical tokens file", 1, _GENERATING_STEPS, 60
            )
        if settings.wants_extended:
            files.append(build_extended_file(conversion.extended))
            self._report(
                ExportStage.GENERATING, "Generated extended tokens file", 2, _GENERATING_STEPS, 70
            )
        if settings.format == OutputFormat.PLATFORM_CODE:
            platform_tree = transform_for_platform(conversion.canonical, settings.platform)
            files.append(build_platform_file(platform_tree, settings.platform))
            self._report(
                ExportStage.GENERATING,
                f"Generated platform tokens file ({settings.platform})",
                2,
                _GENERATING_STEPS,
                70,
            )

        exported_at = self.clock()
        files.append(
            build_summary_file(
                token_count=conversion.token_count,
                collection_count=len(collections),
                warning_count=len(warnings),
                error_count=len(errors),
                files=list(files),
                exported_at=exported_at,
            )
        )
        self._report(ExportStage.GENERATING, "Generated summary", 3, _GENERATING_STEPS, 80)

        files.append(
            build_manifest_file(
                files=list(files),
                settings=settings,
                token_count=conversion.token_count,
                collection_count=len(collections),
                warnings=warnings,
                errors=errors,
                exported_at=exported_at,
            )
        )
        self._report(ExportStage.GENERATING, "Generated manifest", 4, _GENERATING_STEPS, 90)
        self._report(ExportStage.COMPLETE, "Export complete", len(files), len(files), 100)

        return ExportResult(
            success=not errors,
            files=files,
            statistics=ExportStatistics(
                token_count=conversion.token_count,
                file_count=len(files),
                total_bytes=sum(f.byte_size for f in files),
                collection_count=len(collections),
                warning_count=len(warnings),
                error_count=len(errors),
            ),
            warnings=warnings,
            errors=errors,
        )


def export_tokens(
    collections: Sequence[Collection],
    variables: Sequence[Variable],
    settings: ExportSettings | None = None,
    on_progress: ProgressCallback | None = None,
) -> ExportResult:
    """Run one export with a fresh coordinator."""
    return ExportCoordinator(on_progress).export(collections, variables, settings or ExportSettings())


def format_summary(result: ExportResult) -> str:
    """Plain-text report of an export result."""
    rule = "=" * 50
    stats = result.statistics
    lines = [
        rule,
        "EXPORT SUMMARY",
        rule,
        "",
        "Export completed successfully" if result.success else "Export completed with errors",
        "",
        "STATISTICS:",
        f"  Tokens exported: {stats.token_count}",
        f"  Files generated: {stats.file_count}",
        f"  Total size: {format_file_size(stats.total_bytes)}",
        f"  Collections: {stats.collection_count}",
        f"  Warnings: {stats.warning_count}",
        f"  Errors: {stats.error_count}",
    ]

    if result.files:
        lines.extend(["", "FILES:"])
        lines.extend(
            f"  {f.filename} ({format_file_size(f.byte_size)})" for f in result.files
        )
    if result.warnings:
        lines.extend(["", "WARNINGS:"])
        lines.extend(f"  - {warning}" for warning in result.warnings)
    if result.errors:
        lines.extend(["", "ERRORS:"])
        lines.extend(f"  - {error}" for error in result.errors)

    lines.extend(["", rule])
    return "\n".join(lines)
