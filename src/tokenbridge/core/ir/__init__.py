"""
tokenbridge Intermediate Representation (IR) types.

Types are organized into submodules and re-exported here.
"""

# Export runs
from .export import (
    ExportFile,
    ExportProgress,
    ExportResult,
    ExportStage,
    ExportStatistics,
    FileFormat,
    ProgressCallback,
)

# Settings
from .settings import (
    DEFAULT_SCHEMA_BASE_URL,
    DefaultUnit,
    ExportSettings,
    IdentifierMode,
    ModeSelection,
    NamingConvention,
    OutputFormat,
    Platform,
    TreeStructure,
)

# Classification
from .tokens import (
    EXTENSION_NAMESPACE,
    ClassificationResult,
    Confidence,
    SchemaHint,
    SchemaKind,
    SemanticType,
)

# Input records
from .variables import (
    AliasReference,
    Collection,
    ColorComponents,
    Mode,
    ResolvedPrimitive,
    ResolvedValue,
    Variable,
    VariableScope,
    is_alias,
)

__all__ = [
    # Input records
    "AliasReference",
    "Collection",
    "ColorComponents",
    "Mode",
    "ResolvedPrimitive",
    "ResolvedValue",
    "Variable",
    "VariableScope",
    "is_alias",
    # Classification
    "EXTENSION_NAMESPACE",
    "ClassificationResult",
    "Confidence",
    "SchemaHint",
    "SchemaKind",
    "SemanticType",
    # Settings
    "DEFAULT_SCHEMA_BASE_URL",
    "DefaultUnit",
    "ExportSettings",
    "IdentifierMode",
    "ModeSelection",
    "NamingConvention",
    "OutputFormat",
    "Platform",
    "TreeStructure",
    # Export runs
    "ExportFile",
    "ExportProgress",
    "ExportResult",
    "ExportStage",
    "ExportStatistics",
    "FileFormat",
    "ProgressCallback",
]
