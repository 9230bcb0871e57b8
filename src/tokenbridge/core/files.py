"""
Export file builders.

Each builder returns an immutable ``ExportFile``; nothing here touches the
filesystem. Writing files is left to the caller (the CLI, or any other
storage collaborator).
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from .ir.export import ExportFile, FileFormat
from .ir.settings import ExportSettings

CANONICAL_FILENAME = "design-tokens.json"
EXTENDED_FILENAME = "extended-tokens.json"
SUMMARY_FILENAME = "README.md"
MANIFEST_FILENAME = "export-manifest.json"
MANIFEST_VERSION = "1.0.0"


def platform_filename(platform: str) -> str:
    return f"platform-tokens-{platform}.json"


def to_json(data: Any) -> str:
    """Serialize with two-space indentation, preserving key order and non-ASCII text."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_file_size(size: int) -> str:
    """Human-readable size: 512 B, 1.5 KB, 2.25 MB."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.2f}".rstrip("0").rstrip(".") + " KB"
    return f"{size / (1024 * 1024):.2f}".rstrip("0").rstrip(".") + " MB"


# =============================================================================
# Token documents
# =============================================================================


def build_canonical_file(tokens: dict[str, Any]) -> ExportFile:
    return ExportFile.from_content(CANONICAL_FILENAME, to_json(tokens), FileFormat.CANONICAL)


def build_extended_file(tokens: dict[str, Any]) -> ExportFile:
    return ExportFile.from_content(EXTENDED_FILENAME, to_json(tokens), FileFormat.EXTENDED)


def build_platform_file(tokens: dict[str, Any], platform: str) -> ExportFile:
    return ExportFile.from_content(
        platform_filename(platform), to_json(tokens), FileFormat.PLATFORM_CODE
    )


# =============================================================================
# Summary and manifest
# =============================================================================


_FORMAT_NOTES: dict[str, str] = {
    FileFormat.CANONICAL: "vendor-neutral tokens (`$value`, `$type`, `{path}` references)",
    FileFormat.EXTENDED: "extended tokens with `$schema`, `value`, `uuid` and `component`",
    FileFormat.PLATFORM_CODE: "platform literals with the original value kept under `original`",
}


def build_summary_file(
    *,
    token_count: int,
    collection_count: int,
    warning_count: int,
    error_count: int,
    files: Sequence[ExportFile],
    exported_at: datetime,
) -> ExportFile:
    """Markdown overview of the export run."""
    lines = [
        "# Exported Design Tokens",
        "",
        f"- **Export date:** {exported_at.isoformat()}",
        f"- **Tokens:** {token_count}",
        f"- **Collections:** {collection_count}",
        f"- **Warnings:** {warning_count}",
        f"- **Errors:** {error_count}",
        "",
        "## Files",
        "",
    ]
    if files:
        for export_file in files:
            note = _FORMAT_NOTES.get(export_file.format_tag, "")
            lines.append(
                f"- `{export_file.filename}` ({format_file_size(export_file.byte_size)}): {note}"
            )
    else:
        lines.append("No token files were generated for this export.")
    lines.extend(
        [
            f"- `{SUMMARY_FILENAME}`: this summary",
            f"- `{MANIFEST_FILENAME}`: machine-readable file list, statistics and messages",
            "",
        ]
    )
    return ExportFile.from_content(SUMMARY_FILENAME, "\n".join(lines), FileFormat.SUMMARY)


def build_manifest_file(
    *,
    files: Sequence[ExportFile],
    settings: ExportSettings,
    token_count: int,
    collection_count: int,
    warnings: Sequence[str],
    errors: Sequence[str],
    exported_at: datetime,
) -> ExportFile:
    """JSON manifest listing every file emitted before it."""
    manifest = {
        "version": MANIFEST_VERSION,
        "exportDate": exported_at.isoformat(),
        "settings": {
            "format": settings.format,
            "structure": settings.structure,
            "namingConvention": settings.naming_convention,
            "defaultUnit": settings.default_unit,
            "identifierMode": settings.identifier_mode,
            "platform": settings.platform,
            "modes": settings.modes,
        },
        "statistics": {
            "tokenCount": token_count,
            "collectionCount": collection_count,
            "fileCount": len(files),
            "warningCount": len(warnings),
            "errorCount": len(errors),
        },
        "files": [
            {
                "filename": export_file.filename,
                "format": export_file.format_tag.value,
                "size": export_file.byte_size,
            }
            for export_file in files
        ],
        "warnings": list(warnings),
        "errors": list(errors),
    }
    return ExportFile.from_content(MANIFEST_FILENAME, to_json(manifest), FileFormat.MANIFEST)
