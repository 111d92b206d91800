"""
Node kinds and depth-first traversal over tree-sitter trees.

Grammar type strings are mapped onto the closed ``NodeKind`` enumeration once,
here, so the extractors and the scorer dispatch on enum members rather than
on raw strings. Anything the engine does not reason about maps to
``NodeKind.OTHER``.
"""

from collections.abc import Callable, Iterator
from enum import Enum
from typing import Any


class NodeKind(Enum):
    # Module surface
    IMPORT = "import"
    EXPORT = "export"
    # Declarations
    FUNCTION_DECLARATION = "function_declaration"
    ARROW_FUNCTION = "arrow_function"
    FUNCTION_EXPRESSION = "function_expression"
    CLASS_DECLARATION = "class_declaration"
    INTERFACE_DECLARATION = "interface_declaration"
    TYPE_ALIAS_DECLARATION = "type_alias_declaration"
    # Expressions
    CALL = "call"
    BINARY = "binary"
    UNARY = "unary"
    ASSIGNMENT = "assignment"
    UPDATE = "update"
    TERNARY = "ternary"
    IDENTIFIER = "identifier"
    LITERAL = "literal"
    THIS = "this"
    # Markup
    MARKUP_ELEMENT = "markup_element"
    MARKUP_SELF_CLOSING = "markup_self_closing"
    # Control flow
    IF = "if"
    SWITCH = "switch"
    SWITCH_CASE = "switch_case"
    WHILE = "while"
    FOR = "for"
    FOR_IN = "for_in"
    DO_WHILE = "do_while"
    CATCH = "catch"
    BREAK = "break"
    CONTINUE = "continue"
    # Trivia
    COMMENT = "comment"
    OTHER = "other"


_KIND_BY_TYPE: dict[str, NodeKind] = {
    "import_statement": NodeKind.IMPORT,
    "export_statement": NodeKind.EXPORT,
    "function_declaration": NodeKind.FUNCTION_DECLARATION,
    "generator_function_declaration": NodeKind.FUNCTION_DECLARATION,
    "arrow_function": NodeKind.ARROW_FUNCTION,
    "function_expression": NodeKind.FUNCTION_EXPRESSION,
    "function": NodeKind.FUNCTION_EXPRESSION,  # name used by older grammars
    "generator_function": NodeKind.FUNCTION_EXPRESSION,
    "class_declaration": NodeKind.CLASS_DECLARATION,
    "interface_declaration": NodeKind.INTERFACE_DECLARATION,
    "type_alias_declaration": NodeKind.TYPE_ALIAS_DECLARATION,
    "call_expression": NodeKind.CALL,
    "binary_expression": NodeKind.BINARY,
    "unary_expression": NodeKind.UNARY,
    "assignment_expression": NodeKind.ASSIGNMENT,
    "augmented_assignment_expression": NodeKind.ASSIGNMENT,
    "update_expression": NodeKind.UPDATE,
    "ternary_expression": NodeKind.TERNARY,
    "identifier": NodeKind.IDENTIFIER,
    "property_identifier": NodeKind.IDENTIFIER,
    "shorthand_property_identifier": NodeKind.IDENTIFIER,
    "shorthand_property_identifier_pattern": NodeKind.IDENTIFIER,
    "private_property_identifier": NodeKind.IDENTIFIER,
    "type_identifier": NodeKind.IDENTIFIER,
    "string": NodeKind.LITERAL,
    "number": NodeKind.LITERAL,
    "true": NodeKind.LITERAL,
    "false": NodeKind.LITERAL,
    "null": NodeKind.LITERAL,
    "undefined": NodeKind.LITERAL,
    "regex": NodeKind.LITERAL,
    "this": NodeKind.THIS,
    "jsx_element": NodeKind.MARKUP_ELEMENT,
    "jsx_self_closing_element": NodeKind.MARKUP_SELF_CLOSING,
    "if_statement": NodeKind.IF,
    "switch_statement": NodeKind.SWITCH,
    "switch_case": NodeKind.SWITCH_CASE,
    "switch_default": NodeKind.SWITCH_CASE,
    "while_statement": NodeKind.WHILE,
    "for_statement": NodeKind.FOR,
    "for_in_statement": NodeKind.FOR_IN,  # covers for...of as well
    "do_statement": NodeKind.DO_WHILE,
    "catch_clause": NodeKind.CATCH,
    "break_statement": NodeKind.BREAK,
    "continue_statement": NodeKind.CONTINUE,
    "comment": NodeKind.COMMENT,
}

FUNCTION_KINDS = frozenset(
    {NodeKind.FUNCTION_DECLARATION, NodeKind.ARROW_FUNCTION, NodeKind.FUNCTION_EXPRESSION}
)


def node_kind(node: Any) -> NodeKind:
    """Map a tree-sitter node onto its NodeKind. Anonymous tokens are OTHER."""
    if not node.is_named:
        return NodeKind.OTHER
    return _KIND_BY_TYPE.get(node.type, NodeKind.OTHER)


def node_text(node: Any) -> str:
    return node.text.decode("utf-8", errors="replace")


def field(node: Any, name: str) -> Any:
    """Child stored under grammar field ``name``, or None."""
    return node.child_by_field_name(name)


def named_children(node: Any) -> list[Any]:
    """Named children in source order, comments excluded."""
    return [child for child in node.named_children if child.type != "comment"]


def has_token(node: Any, token: str) -> bool:
    """True if ``node`` has a direct anonymous child spelled ``token``."""
    return any(not child.is_named and child.type == token for child in node.children)


def walk(root: Any) -> Iterator[Any]:
    """Yield ``root`` and every named descendant in pre-order.

    Children come out in source order. An explicit stack replaces recursion,
    so deeply nested markup cannot exhaust the interpreter stack.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.named_children))


def visit(root: Any, callback: Callable[[Any], None]) -> None:
    """Invoke ``callback`` on every node ``walk`` yields."""
    for node in walk(root):
        callback(node)
