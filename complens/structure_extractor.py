"""
Structural extraction for UI component sources.

One pre-order walk over the tree; each node is classified by NodeKind and
handed to the matching extractor, which adds to a shared ComponentStructure.
An extractor that raises on one node is recorded as an extraction fault and
the walk carries on with the next node.

Recognized patterns:
- Imports/exports: internal vs external sources, type-only imports, default
  and named exports, re-exports
- Function components: uppercase names, props from the first parameter
  (type annotation or destructuring)
- Props interfaces/types: declarations named *Props / *Properties
- Binding calls: ``use`` + capitalized word (useState, useEffect, ...)
- Composition: child elements, render props, wrapper calls (with*, connect,
  memo, forwardRef)
- Class components: lifecycle methods on Component/PureComponent subclasses
"""

import logging
from dataclasses import dataclass, field as dataclass_field
from pathlib import Path
from typing import Any

from .config import AnalysisConfig
from .models import (
    Binding,
    BindingKind,
    ComponentMethod,
    ComponentProp,
    ComponentStructure,
    ErrorKind,
    MethodParameter,
)
from .type_resolver import (
    UNKNOWN,
    object_shape,
    object_type_members,
    referenced_type_name,
    resolve_type,
)
from .walker import (
    NodeKind,
    field,
    has_token,
    named_children,
    node_kind,
    node_text,
    walk,
)

logger = logging.getLogger(__name__)

PROPS_SUFFIXES = ("Props", "Properties")
WRAPPER_PREFIXES = ("with", "connect", "memo", "forwardRef")
COMPONENT_BASES = {"Component", "PureComponent"}

BINDING_KINDS = {
    "useState": BindingKind.STATE,
    "useEffect": BindingKind.EFFECT,
    "useLayoutEffect": BindingKind.EFFECT,
    "useContext": BindingKind.CONTEXT,
    "useRef": BindingKind.REF,
    "useMemo": BindingKind.MEMOIZED,
    "useCallback": BindingKind.DERIVED_CALLBACK,
}

# Bindings whose second argument is a dependency list
DEPENDENCY_KINDS = {BindingKind.EFFECT, BindingKind.MEMOIZED, BindingKind.DERIVED_CALLBACK}

LIFECYCLE_FLAGS = {
    "constructor": "has_constructor",
    "componentDidMount": "has_mount",
    "componentDidUpdate": "has_update",
    "componentWillUnmount": "has_unmount",
    "componentDidCatch": "has_error_capture",
}
DERIVED_STATE_METHOD = "getDerivedStateFromProps"

_SCALAR_LITERALS = {"number", "true", "false", "null", "regex"}
_INLINE_FUNCTIONS = {"arrow_function", "function_expression", "function"}
_VARIABLE_DECLARATIONS = {"lexical_declaration", "variable_declaration"}
_NAMED_DECLARATIONS = {
    "function_declaration",
    "generator_function_declaration",
    "class_declaration",
    "abstract_class_declaration",
}


def is_capitalized(name: str) -> bool:
    return bool(name) and "A" <= name[0] <= "Z"


def is_binding_call(name: str) -> bool:
    """``use`` followed immediately by an uppercase letter."""
    return len(name) > 3 and name.startswith("use") and is_capitalized(name[3])


def is_wrapper_call(name: str) -> bool:
    return name.startswith(WRAPPER_PREFIXES)


def is_props_name(name: str) -> bool:
    return name.endswith(PROPS_SUFFIXES)


def visibility_of(name: str) -> str:
    return "private" if name.startswith("_") else "public"


def parse_jsdoc(comment: str) -> str:
    """Turn a ``/** ... */`` block into a single line of text."""
    cleaned = []
    for line in comment.split("\n"):
        line = line.strip()
        if line.startswith("/**"):
            line = line[3:].strip()
        if line.endswith("*/"):
            line = line[:-2].strip()
        if line.startswith("*"):
            line = line[1:].strip()
        if line:
            cleaned.append(line)
    return " ".join(cleaned)


def string_value(node: Any) -> str:
    """Contents of a string literal without its quotes."""
    text = node_text(node)
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"`":
        return text[1:-1]
    return text


@dataclass
class _ExtractionContext:
    structure: ComponentStructure
    # Object-shaped interfaces/type aliases declared in the file, by name
    type_shapes: dict[str, Any] = dataclass_field(default_factory=dict)
    class_names: set[str] = dataclass_field(default_factory=set)
    faults: list[str] = dataclass_field(default_factory=list)


class StructureExtractor:
    """Builds a ComponentStructure from a parsed tree."""

    def __init__(self, config: AnalysisConfig, log: logging.Logger | None = None):
        self.config = config
        self._log = log or logger
        self._handlers = {
            NodeKind.IMPORT: self._on_import,
            NodeKind.EXPORT: self._on_export,
            NodeKind.FUNCTION_DECLARATION: self._on_function,
            NodeKind.ARROW_FUNCTION: self._on_function,
            NodeKind.FUNCTION_EXPRESSION: self._on_function,
            NodeKind.CLASS_DECLARATION: self._on_class,
            NodeKind.CALL: self._on_call,
            NodeKind.MARKUP_ELEMENT: self._on_markup,
            NodeKind.MARKUP_SELF_CLOSING: self._on_markup,
            NodeKind.INTERFACE_DECLARATION: self._on_type_declaration,
            NodeKind.TYPE_ALIAS_DECLARATION: self._on_type_declaration,
        }

    def extract(self, root: Any, file_path: str | Path = "") -> tuple[ComponentStructure, list[str]]:
        """Walk ``root`` and collect the component structure.

        Returns:
            The structure plus a list of extraction-fault messages, one per
            node whose extractor raised.
        """
        ctx = _ExtractionContext(structure=ComponentStructure())
        ctx.type_shapes = self._index_type_shapes(root)

        for node in walk(root):
            handler = self._handlers.get(node_kind(node))
            if handler is None:
                continue
            try:
                handler(node, ctx)
            except Exception as e:
                line = node.start_point[0] + 1
                message = ErrorKind.EXTRACTION_FAULT.message(f"{node.type} at line {line}: {e}")
                self._log.warning(f"Extraction fault in {file_path}: {message}")
                ctx.faults.append(message)

        self._identify_component(root, ctx, Path(file_path))
        return ctx.structure, ctx.faults

    # -- pre-pass --------------------------------------------------------

    def _index_type_shapes(self, root: Any) -> dict[str, Any]:
        shapes: dict[str, Any] = {}
        for node in walk(root):
            kind = node_kind(node)
            if kind is NodeKind.INTERFACE_DECLARATION:
                shape = field(node, "body")
            elif kind is NodeKind.TYPE_ALIAS_DECLARATION:
                shape = object_shape(field(node, "value"))
            else:
                continue
            name = field(node, "name")
            if name is not None and shape is not None:
                shapes[node_text(name)] = shape
        return shapes

    # -- imports / exports ------------------------------------------------

    def _on_import(self, node: Any, ctx: _ExtractionContext) -> None:
        source_node = field(node, "source")
        if source_node is None:
            return
        source = string_value(source_node)
        imports = ctx.structure.imports

        if source.startswith("."):
            imports.internal.append(source)
        else:
            imports.external.append(source)

        if has_token(node, "type"):
            imports.type_only.append(source)

        for clause in named_children(node):
            if clause.type != "import_clause":
                continue
            for part in named_children(clause):
                if part.type != "named_imports":
                    continue
                for spec in named_children(part):
                    name = field(spec, "name")
                    if spec.type != "import_specifier" or name is None:
                        continue
                    imported = node_text(name)
                    if imported == "forwardRef":
                        ctx.structure.composition.is_ref_forwarding = True
                    elif imported == "memo":
                        ctx.structure.composition.is_memoized = True

    def _on_export(self, node: Any, ctx: _ExtractionContext) -> None:
        exports = ctx.structure.exports
        if has_token(node, "default"):
            exports.has_default = True
            return

        declaration = field(node, "declaration")
        if declaration is not None:
            if declaration.type in _VARIABLE_DECLARATIONS:
                for declarator in named_children(declaration):
                    name = field(declarator, "name")
                    if name is not None and name.type == "identifier":
                        exports.named.append(node_text(name))
            elif declaration.type in _NAMED_DECLARATIONS:
                name = field(declaration, "name")
                if name is not None:
                    exports.named.append(node_text(name))

        for clause in named_children(node):
            if clause.type != "export_clause":
                continue
            for spec in named_children(clause):
                if spec.type != "export_specifier":
                    continue
                exported = field(spec, "alias") or field(spec, "name")
                if exported is not None:
                    exports.named.append(string_value(exported))

    # -- functions ---------------------------------------------------------

    def _function_name(self, node: Any) -> str | None:
        own = field(node, "name")
        if own is not None:
            return node_text(own)
        if node_kind(node) is NodeKind.FUNCTION_DECLARATION:
            return None

        # const Card = (...) => ... ; const Card = memo((...) => ...)
        parent = node.parent
        if parent is not None and parent.type == "arguments":
            call = parent.parent
            callee = field(call, "function") if call is not None else None
            if callee is None or callee.type != "identifier" or not is_wrapper_call(node_text(callee)):
                return None
            parent = call.parent
        if parent is not None and parent.type == "variable_declarator":
            name = field(parent, "name")
            if name is not None and name.type == "identifier":
                return node_text(name)
        return None

    def _on_function(self, node: Any, ctx: _ExtractionContext) -> None:
        name = self._function_name(node)
        if not name:
            return

        if is_capitalized(name):
            self._extract_props_from_function(node, ctx)

        method = ComponentMethod(
            name=name,
            parameters=self._parameters(node),
            return_type=resolve_type(field(node, "return_type")),
            is_async=has_token(node, "async"),
            visibility=visibility_of(name),
        )
        if self.config.include_private_methods or method.visibility == "public":
            ctx.structure.methods.append(method)

    def _first_parameter(self, node: Any) -> tuple[Any, Any]:
        """Return (pattern, type annotation) of a function's first parameter."""
        single = field(node, "parameter")
        if single is not None:
            return single, None
        params = field(node, "parameters")
        if params is None:
            return None, None
        children = named_children(params)
        if not children:
            return None, None

        first = children[0]
        if first.type in ("required_parameter", "optional_parameter"):
            pattern, annotation = field(first, "pattern"), field(first, "type")
        else:
            pattern, annotation = first, None
        if pattern is not None and pattern.type == "assignment_pattern":
            pattern = field(pattern, "left")
        return pattern, annotation

    def _extract_props_from_function(self, node: Any, ctx: _ExtractionContext) -> None:
        pattern, annotation = self._first_parameter(node)
        if pattern is None:
            return

        if pattern.type == "identifier":
            if annotation is not None:
                self._props_from_annotation(annotation, ctx)
        elif pattern.type == "object_pattern":
            if annotation is None or not self._props_from_annotation(annotation, ctx):
                self._props_from_destructuring(pattern, ctx)

    def _props_from_annotation(self, annotation: Any, ctx: _ExtractionContext) -> bool:
        """Add props described by a parameter annotation.

        Returns True when the annotation named a shape this file declares,
        whether or not it was added here.
        """
        shape = object_shape(annotation)
        if shape is not None:
            self._add_member_props(shape, ctx)
            return True

        ref = referenced_type_name(annotation)
        if ref is None or ref not in ctx.type_shapes:
            return False
        # *Props declarations are picked up by _on_type_declaration already
        if not is_props_name(ref):
            self._add_member_props(ctx.type_shapes[ref], ctx)
        return True

    def _props_from_destructuring(self, pattern: Any, ctx: _ExtractionContext) -> None:
        # Type and optionality are not inferred; every key counts as required
        for element in named_children(pattern):
            key = None
            default_value = None
            if element.type == "shorthand_property_identifier_pattern":
                key = element
            elif element.type == "pair_pattern":
                key = field(element, "key")
            elif element.type == "object_assignment_pattern":
                key = field(element, "left")
                right = field(element, "right")
                default_value = node_text(right) if right is not None else None
            if key is None or key.type not in ("shorthand_property_identifier_pattern", "property_identifier"):
                continue
            ctx.structure.props.append(
                ComponentProp(
                    name=node_text(key),
                    type=UNKNOWN,
                    required=True,
                    default_value=default_value,
                )
            )

    def _add_member_props(self, shape: Any, ctx: _ExtractionContext) -> None:
        for member in object_type_members(shape):
            ctx.structure.props.append(
                ComponentProp(
                    name=member.name,
                    type=member.type,
                    required=not member.optional,
                    description=self._description(member.node),
                )
            )

    def _description(self, node: Any) -> str | None:
        if not self.config.extract_descriptions:
            return None
        comment = node.prev_named_sibling
        if comment is None or comment.type != "comment":
            return None
        text = node_text(comment)
        if not text.startswith("/**"):
            return None
        return parse_jsdoc(text) or None

    def _parameters(self, node: Any) -> list[MethodParameter]:
        single = field(node, "parameter")
        if single is not None:
            return [self._parameter(single)]
        params = field(node, "parameters")
        if params is None:
            return []
        return [self._parameter(p) for p in named_children(params)]

    def _parameter(self, param: Any) -> MethodParameter:
        if param.type in ("required_parameter", "optional_parameter"):
            pattern = field(param, "pattern")
            if pattern is not None and pattern.type == "identifier":
                optional = param.type == "optional_parameter" or field(param, "value") is not None
                return MethodParameter(
                    name=node_text(pattern),
                    type=resolve_type(field(param, "type")),
                    optional=optional,
                )
        elif param.type == "identifier":
            return MethodParameter(name=node_text(param), type=UNKNOWN, optional=False)
        elif param.type == "assignment_pattern":
            left = field(param, "left")
            if left is not None and left.type == "identifier":
                return MethodParameter(name=node_text(left), type=UNKNOWN, optional=True)
        return MethodParameter(name=UNKNOWN, type=UNKNOWN, optional=False)

    # -- classes -------------------------------------------------------------

    def _superclass(self, node: Any) -> Any:
        for child in named_children(node):
            if child.type != "class_heritage":
                continue
            for clause in named_children(child):
                if clause.type == "extends_clause":
                    value = field(clause, "value")
                    if value is None:
                        values = named_children(clause)
                        value = values[0] if values else None
                    return value
                if clause.type != "implements_clause":
                    # javascript grammar: class_heritage holds the expression
                    return clause
        return None

    def _extends_component(self, node: Any) -> bool:
        base = self._superclass(node)
        if base is None:
            return False
        if base.type == "identifier":
            return node_text(base) in COMPONENT_BASES
        if base.type == "member_expression":
            prop = field(base, "property")
            return prop is not None and node_text(prop) in COMPONENT_BASES
        return False

    def _on_class(self, node: Any, ctx: _ExtractionContext) -> None:
        name = field(node, "name")
        if name is None:
            return
        ctx.class_names.add(node_text(name))
        if not self._extends_component(node):
            return

        body = field(node, "body")
        if body is None:
            return
        for member in named_children(body):
            if member.type == "method_definition":
                self._class_method(member, ctx)

    def _class_method(self, member: Any, ctx: _ExtractionContext) -> None:
        key = field(member, "name")
        if key is None or key.type != "property_identifier":
            return
        name = node_text(key)
        lifecycle = ctx.structure.lifecycle

        flag = LIFECYCLE_FLAGS.get(name)
        if flag:
            setattr(lifecycle, flag, True)
        if name == DERIVED_STATE_METHOD and has_token(member, "static"):
            lifecycle.has_derived_state = True

        visibility = visibility_of(name)
        if self.config.include_private_methods or visibility == "public":
            ctx.structure.methods.append(
                ComponentMethod(
                    name=name,
                    parameters=self._parameters(member),
                    return_type=resolve_type(field(member, "return_type")),
                    is_async=has_token(member, "async"),
                    visibility=visibility,
                )
            )

    # -- calls -----------------------------------------------------------------

    def _on_call(self, node: Any, ctx: _ExtractionContext) -> None:
        callee = field(node, "function")
        if callee is None or callee.type != "identifier":
            return
        name = node_text(callee)

        if is_binding_call(name):
            ctx.structure.bindings.append(self._binding(name, node))
        if is_wrapper_call(name):
            ctx.structure.composition.wrapper_names.append(name)

    def _binding(self, name: str, node: Any) -> Binding:
        kind = BINDING_KINDS.get(name, BindingKind.OTHER)
        args_node = field(node, "arguments")
        args = named_children(args_node) if args_node is not None and args_node.type == "arguments" else []

        binding = Binding(name=name, kind=kind)
        if kind in DEPENDENCY_KINDS and len(args) > 1 and args[1].type == "array":
            binding.dependencies = [
                node_text(el) for el in named_children(args[1]) if el.type == "identifier"
            ]
        if kind is BindingKind.STATE and args:
            # Empty strings carry no initial value
            binding.initial_value = self._literal_text(args[0]) or None
        return binding

    def _literal_text(self, node: Any) -> str | None:
        if node.type == "string":
            return string_value(node)
        if node.type in _SCALAR_LITERALS:
            return node_text(node)
        if node.type == "array":
            return "[]"
        if node.type == "object":
            return "{}"
        return None

    # -- markup ----------------------------------------------------------------

    def _on_markup(self, node: Any, ctx: _ExtractionContext) -> None:
        if node_kind(node) is NodeKind.MARKUP_ELEMENT:
            tag = field(node, "open_tag")
            if tag is None:
                tag = next((c for c in named_children(node) if c.type == "jsx_opening_element"), None)
            if tag is None:
                return
        else:
            tag = node

        name = field(tag, "name")
        if name is not None and name.type == "identifier":
            tag_name = node_text(name)
            if is_capitalized(tag_name):
                ctx.structure.composition.add_child(tag_name)

        for attribute in named_children(tag):
            if attribute.type != "jsx_attribute":
                continue
            parts = named_children(attribute)
            if not parts:
                continue
            attr_name = node_text(parts[0])
            if attr_name == "render":
                ctx.structure.composition.render_prop_names.append("render")
            elif len(parts) > 1 and parts[1].type == "jsx_expression":
                inner = named_children(parts[1])
                if inner and inner[0].type in _INLINE_FUNCTIONS:
                    ctx.structure.composition.render_prop_names.append(attr_name)

    # -- type declarations -------------------------------------------------------

    def _on_type_declaration(self, node: Any, ctx: _ExtractionContext) -> None:
        name = field(node, "name")
        if name is None or not is_props_name(node_text(name)):
            return
        if node_kind(node) is NodeKind.INTERFACE_DECLARATION:
            shape = field(node, "body")
        else:
            shape = object_shape(field(node, "value"))
        if shape is not None:
            self._add_member_props(shape, ctx)

    # -- component identity --------------------------------------------------------

    def _default_export_name(self, root: Any) -> str | None:
        for statement in named_children(root):
            if statement.type != "export_statement" or not has_token(statement, "default"):
                continue
            declaration = field(statement, "declaration")
            if declaration is not None:
                name = field(declaration, "name")
                return node_text(name) if name is not None else None
            value = field(statement, "value")
            if value is None:
                return None
            if value.type == "identifier":
                return node_text(value)
            own = field(value, "name")
            if own is not None:
                return node_text(own)
            if value.type == "call_expression":
                # export default memo(Card)
                args = field(value, "arguments")
                first = named_children(args)[:1] if args is not None else []
                if first and first[0].type == "identifier":
                    return node_text(first[0])
            return None
        return None

    def _identify_component(self, root: Any, ctx: _ExtractionContext, file_path: Path) -> None:
        name = self._default_export_name(root) or file_path.stem or None
        ctx.structure.component_name = name
        if name in ctx.class_names:
            ctx.structure.component_kind = "class"
        elif name and name.startswith("use"):
            ctx.structure.component_kind = "hook"
        else:
            ctx.structure.component_kind = "function"
