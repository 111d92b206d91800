"""
Result records for component structure analysis.

Every record serializes through ``to_dict()`` into plain JSON-compatible data
so results can be handed to report writers or shipped across processes.
"""

import json
from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(str, Enum):
    """Fault categories reported in ``AnalysisResult.errors``/``warnings``."""

    FILE_TOO_LARGE = "file-too-large"
    FILE_UNREADABLE = "file-unreadable"
    PARSE_FAILURE = "parse-failure"
    EXTRACTION_FAULT = "extraction-fault"
    INVALID_ITEM = "invalid-item"

    def message(self, text: str) -> str:
        return f"{self.value}: {text}"


class BindingKind(str, Enum):
    STATE = "state"
    EFFECT = "effect"
    CONTEXT = "context"
    REF = "ref"
    MEMOIZED = "memoized"
    DERIVED_CALLBACK = "derived-callback"
    OTHER = "other"


@dataclass
class ComponentProp:
    """One declared input of a component."""

    name: str
    type: str
    required: bool
    default_value: str | None = None
    description: str | None = None

    def to_dict(self) -> dict:
        d = {"name": self.name, "type": self.type, "required": self.required}
        if self.default_value is not None:
            d["defaultValue"] = self.default_value
        if self.description is not None:
            d["description"] = self.description
        return d


@dataclass
class Binding:
    """A ``use*`` call tied to the component lifecycle."""

    name: str
    kind: BindingKind
    dependencies: list[str] | None = None
    initial_value: str | None = None

    def to_dict(self) -> dict:
        d = {"name": self.name, "kind": self.kind.value}
        if self.dependencies is not None:
            d["dependencies"] = list(self.dependencies)
        if self.initial_value is not None:
            d["initialValue"] = self.initial_value
        return d


@dataclass
class MethodParameter:
    name: str
    type: str
    optional: bool

    def to_dict(self) -> dict:
        return {"name": self.name, "type": self.type, "optional": self.optional}


@dataclass
class ComponentMethod:
    name: str
    parameters: list[MethodParameter] = field(default_factory=list)
    return_type: str = "unknown"
    is_async: bool = False
    visibility: str = "public"  # "public" or "private"

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "parameters": [p.to_dict() for p in self.parameters],
            "returnType": self.return_type,
            "isAsync": self.is_async,
            "visibility": self.visibility,
        }


@dataclass
class LifecycleFlags:
    """Lifecycle callbacks found on a class-style component."""

    has_constructor: bool = False
    has_mount: bool = False
    has_update: bool = False
    has_unmount: bool = False
    has_derived_state: bool = False
    has_error_capture: bool = False

    def to_dict(self) -> dict:
        return {
            "hasConstructor": self.has_constructor,
            "hasMount": self.has_mount,
            "hasUpdate": self.has_update,
            "hasUnmount": self.has_unmount,
            "hasDerivedState": self.has_derived_state,
            "hasErrorCapture": self.has_error_capture,
        }


@dataclass
class Composition:
    """
    How the component relates to other components.

    ``child_components`` is a dict used as an insertion-ordered set, which
    keeps serialized output stable between runs.
    """

    child_components: dict[str, None] = field(default_factory=dict)
    render_prop_names: list[str] = field(default_factory=list)
    wrapper_names: list[str] = field(default_factory=list)
    is_ref_forwarding: bool = False
    is_memoized: bool = False

    def add_child(self, name: str) -> None:
        self.child_components.setdefault(name, None)

    def to_dict(self) -> dict:
        return {
            "childComponents": list(self.child_components),
            "renderPropNames": list(self.render_prop_names),
            "wrapperNames": list(self.wrapper_names),
            "isRefForwarding": self.is_ref_forwarding,
            "isMemoized": self.is_memoized,
        }


@dataclass
class ExportSurface:
    has_default: bool = False
    named: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"hasDefault": self.has_default, "named": list(self.named)}


@dataclass
class ImportSurface:
    external: list[str] = field(default_factory=list)
    internal: list[str] = field(default_factory=list)
    type_only: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "external": list(self.external),
            "internal": list(self.internal),
            "typeOnly": list(self.type_only),
        }


@dataclass
class ComponentStructure:
    """
    Normalized semantic model of one component file.

    All collections start empty, so a structure is always fully shaped even
    when some extractors faulted.
    """

    props: list[ComponentProp] = field(default_factory=list)
    bindings: list[Binding] = field(default_factory=list)
    methods: list[ComponentMethod] = field(default_factory=list)
    lifecycle: LifecycleFlags = field(default_factory=LifecycleFlags)
    composition: Composition = field(default_factory=Composition)
    exports: ExportSurface = field(default_factory=ExportSurface)
    imports: ImportSurface = field(default_factory=ImportSurface)
    component_name: str | None = None
    component_kind: str | None = None  # "function", "class" or "hook"

    def to_dict(self) -> dict:
        return {
            "componentName": self.component_name,
            "componentKind": self.component_kind,
            "props": [p.to_dict() for p in self.props],
            "bindings": [b.to_dict() for b in self.bindings],
            "methods": [m.to_dict() for m in self.methods],
            "lifecycle": self.lifecycle.to_dict(),
            "composition": self.composition.to_dict(),
            "exports": self.exports.to_dict(),
            "imports": self.imports.to_dict(),
        }


@dataclass(frozen=True)
class ComplexityMetrics:
    cyclomatic: int
    cognitive: int
    maintainability_index: int

    @classmethod
    def empty(cls) -> "ComplexityMetrics":
        """Sentinel for files that were never scored."""
        return cls(cyclomatic=0, cognitive=0, maintainability_index=0)

    def to_dict(self) -> dict:
        return {
            "cyclomatic": self.cyclomatic,
            "cognitive": self.cognitive,
            "maintainabilityIndex": self.maintainability_index,
        }


@dataclass
class AnalysisResult:
    """Outcome of analyzing one source file. Independent of every other file."""

    success: bool
    metrics: ComplexityMetrics = field(default_factory=ComplexityMetrics.empty)
    structure: ComponentStructure | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def failure(
        cls, errors: list[str], warnings: list[str] | None = None
    ) -> "AnalysisResult":
        return cls(success=False, errors=list(errors), warnings=list(warnings or []))

    def to_dict(self) -> dict:
        d = {
            "success": self.success,
            "metrics": self.metrics.to_dict(),
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }
        if self.structure is not None:
            d["structure"] = self.structure.to_dict()
        return d

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)
