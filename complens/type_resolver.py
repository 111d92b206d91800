"""Minimal mapping from TypeScript type nodes to display strings."""

from collections.abc import Iterator
from typing import Any, NamedTuple

from .walker import field, has_token, named_children, node_text

UNKNOWN = "unknown"

# Deeper type nesting than this resolves to UNKNOWN
MAX_TYPE_DEPTH = 32

_KEYWORD_TYPES = {"string", "number", "boolean", "void"}

OBJECT_SHAPE_TYPES = {"object_type", "interface_body"}


class TypeMember(NamedTuple):
    name: str
    type: str
    optional: bool
    node: Any


def _unwrap_annotation(node: Any) -> Any:
    if node is not None and node.type == "type_annotation":
        inner = named_children(node)
        return inner[0] if inner else None
    return node


def resolve_type(node: Any, depth: int = 0) -> str:
    """Resolve a type annotation or type node to a string.

    Keyword types map to their canonical names, references to their
    identifier, unions to ``a | b`` and arrays to ``elem[]``. Everything else,
    including nesting beyond MAX_TYPE_DEPTH, is ``unknown``.
    """
    node = _unwrap_annotation(node)
    if node is None or depth > MAX_TYPE_DEPTH:
        return UNKNOWN

    kind = node.type
    if kind == "predefined_type":
        text = node_text(node)
        return text if text in _KEYWORD_TYPES else UNKNOWN
    if kind == "type_identifier":
        return node_text(node)
    if kind == "generic_type":
        name = field(node, "name")
        if name is not None and name.type == "type_identifier":
            return node_text(name)
        return UNKNOWN
    if kind == "union_type":
        return " | ".join(resolve_type(member, depth + 1) for member in _union_members(node, depth))
    if kind == "array_type":
        element = named_children(node)
        return f"{resolve_type(element[0], depth + 1) if element else UNKNOWN}[]"
    if kind == "parenthesized_type":
        inner = named_children(node)
        return resolve_type(inner[0], depth + 1) if inner else UNKNOWN
    return UNKNOWN


def _union_members(node: Any, depth: int) -> list[Any]:
    # The grammar nests unions to the left: (a | b) | c
    members: list[Any] = []
    for child in named_children(node):
        if child.type == "union_type" and depth < MAX_TYPE_DEPTH:
            members.extend(_union_members(child, depth + 1))
        else:
            members.append(child)
    return members


def object_shape(node: Any) -> Any:
    """Return the object-type node behind an annotation, or None."""
    node = _unwrap_annotation(node)
    if node is not None and node.type in OBJECT_SHAPE_TYPES:
        return node
    return None


def object_type_members(shape: Any) -> Iterator[TypeMember]:
    """Yield property signatures with plain identifier names."""
    for member in named_children(shape):
        if member.type != "property_signature":
            continue
        name = field(member, "name")
        if name is None or name.type != "property_identifier":
            continue
        yield TypeMember(
            name=node_text(name),
            type=resolve_type(field(member, "type")),
            optional=has_token(member, "?"),
            node=member,
        )


def referenced_type_name(node: Any) -> str | None:
    """Name of a plain type reference (``Props`` or ``Props<T>``), else None."""
    node = _unwrap_annotation(node)
    if node is None:
        return None
    if node.type == "type_identifier":
        return node_text(node)
    if node.type == "generic_type":
        name = field(node, "name")
        if name is not None and name.type == "type_identifier":
            return node_text(name)
    return None
