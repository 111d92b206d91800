"""complens - structural analysis of UI component sources."""

from .analyzer import ComponentAnalyzer
from .complexity import score_complexity
from .config import AnalysisConfig, ComplensError, ConfigError
from .models import (
    AnalysisResult,
    Binding,
    BindingKind,
    ComplexityMetrics,
    ComponentMethod,
    ComponentProp,
    ComponentStructure,
    Composition,
    ErrorKind,
    ExportSurface,
    ImportSurface,
    LifecycleFlags,
    MethodParameter,
)
from .source_loader import FileTooLargeError, load_source
from .structure_extractor import StructureExtractor
from .tree_parser import Dialect, ParseError, TreeParser

__all__ = [
    # Pipeline
    "ComponentAnalyzer",
    "AnalysisConfig",
    "load_source",
    "TreeParser",
    "Dialect",
    "StructureExtractor",
    "score_complexity",
    # Results
    "AnalysisResult",
    "ComponentStructure",
    "ComponentProp",
    "Binding",
    "BindingKind",
    "ComponentMethod",
    "MethodParameter",
    "LifecycleFlags",
    "Composition",
    "ExportSurface",
    "ImportSurface",
    "ComplexityMetrics",
    # Errors
    "ErrorKind",
    "ComplensError",
    "ConfigError",
    "FileTooLargeError",
    "ParseError",
]
