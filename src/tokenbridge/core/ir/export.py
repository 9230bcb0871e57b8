"""
Data models for export runs.

These models describe progress events, the emitted files, and the final
result returned by the export coordinator.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ExportStage(StrEnum):
    """Sequential stages of an export run."""

    SCANNING = "scanning"
    CONVERTING = "converting"
    GENERATING = "generating"
    COMPLETE = "complete"


class FileFormat(StrEnum):
    """Format tag attached to each emitted file."""

    CANONICAL = "canonical"
    EXTENDED = "extended"
    PLATFORM_CODE = "platform-code"
    SUMMARY = "summary"
    MANIFEST = "manifest"


@dataclass(frozen=True)
class ExportProgress:
    """A single progress notification."""

    stage: ExportStage
    message: str
    current: int
    total: int
    percentage: int


ProgressCallback = Callable[[ExportProgress], None]


@dataclass(frozen=True)
class ExportFile:
    """An in-memory output artifact. Never mutated after creation."""

    filename: str
    content: str
    format_tag: FileFormat
    byte_size: int

    @classmethod
    def from_content(cls, filename: str, content: str, format_tag: FileFormat) -> ExportFile:
        """Build a file, measuring its UTF-8 encoded size."""
        return cls(
            filename=filename,
            content=content,
            format_tag=format_tag,
            byte_size=len(content.encode("utf-8")),
        )


@dataclass
class ExportStatistics:
    """Aggregate counts for an export run."""

    token_count: int = 0
    file_count: int = 0
    total_bytes: int = 0
    collection_count: int = 0
    warning_count: int = 0
    error_count: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "tokenCount": self.token_count,
            "fileCount": self.file_count,
            "totalBytes": self.total_bytes,
            "collectionCount": self.collection_count,
            "warningCount": self.warning_count,
            "errorCount": self.error_count,
        }


@dataclass
class ExportResult:
    """Outcome of one export run."""

    success: bool
    files: list[ExportFile] = field(default_factory=list)
    statistics: ExportStatistics = field(default_factory=ExportStatistics)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def get_file(self, filename: str) -> ExportFile | None:
        for export_file in self.files:
            if export_file.filename == filename:
                return export_file
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict (file contents omitted)."""
        return {
            "success": self.success,
            "files": [
                {"filename": f.filename, "format": f.format_tag.value, "size": f.byte_size}
                for f in self.files
            ],
            "statistics": self.statistics.to_dict(),
            "warnings": list(self.warnings),
            "errors": list(self.errors),
        }
