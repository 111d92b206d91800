"""
Complexity scoring over a parsed component.

Independent of structural extraction: a second walk over the same tree
counting decision points, reader-effort constructs and Halstead
operators/operands.

- Cyclomatic: decision points + 1. Branches, loops, case clauses, catch
  clauses and each ``&&``/``||``.
- Cognitive: a flat count of branches, loops, switches and break/continue.
  No nesting weights.
- Maintainability index: 171 - 5.2 ln(V) - 0.23 G - 16.2 ln(V/1000), clamped
  below at 0, where V is the Halstead volume and G the cyclomatic score.
"""

import math
from typing import Any

from .models import ComplexityMetrics
from .walker import NodeKind, field, node_kind, node_text, walk

CYCLOMATIC_KINDS = frozenset(
    {
        NodeKind.IF,
        NodeKind.TERNARY,
        NodeKind.SWITCH_CASE,
        NodeKind.WHILE,
        NodeKind.FOR,
        NodeKind.FOR_IN,
        NodeKind.DO_WHILE,
        NodeKind.CATCH,
    }
)

COGNITIVE_KINDS = frozenset(
    {
        NodeKind.IF,
        NodeKind.TERNARY,
        NodeKind.SWITCH,
        NodeKind.WHILE,
        NodeKind.FOR,
        NodeKind.FOR_IN,
        NodeKind.DO_WHILE,
        NodeKind.BREAK,
        NodeKind.CONTINUE,
    }
)

OPERATOR_KINDS = frozenset(
    {NodeKind.BINARY, NodeKind.UNARY, NodeKind.ASSIGNMENT, NodeKind.UPDATE}
)
OPERAND_KINDS = frozenset({NodeKind.IDENTIFIER, NodeKind.LITERAL, NodeKind.THIS})

SHORT_CIRCUIT_OPERATORS = {"&&", "||"}

MI_BASE = 171.0


def _is_short_circuit(node: Any) -> bool:
    operator = field(node, "operator")
    return operator is not None and node_text(operator) in SHORT_CIRCUIT_OPERATORS


def halstead_volume(operators: int, operands: int) -> float:
    """N * log2(N), falling back to 1 where that is 0 or undefined."""
    total = operators + operands
    if total <= 1:
        return 1.0
    return total * math.log2(total)


def maintainability_index(volume: float, cyclomatic: int) -> int:
    # Lower clamp only; tiny volumes can push the score above MI_BASE
    raw = MI_BASE - 5.2 * math.log(volume) - 0.23 * cyclomatic - 16.2 * math.log(volume / 1000)
    return math.floor(max(0.0, raw) + 0.5)


def score_complexity(root: Any) -> ComplexityMetrics:
    """Compute cyclomatic, cognitive and maintainability scores for a tree."""
    cyclomatic = 1
    cognitive = 0
    operators = 0
    operands = 0

    for node in walk(root):
        kind = node_kind(node)
        if kind is NodeKind.OTHER:
            continue

        if kind in CYCLOMATIC_KINDS:
            cyclomatic += 1
        elif kind is NodeKind.BINARY and _is_short_circuit(node):
            cyclomatic += 1

        if kind in COGNITIVE_KINDS:
            cognitive += 1

        if kind in OPERATOR_KINDS:
            operators += 1
        elif kind in OPERAND_KINDS:
            operands += 1

    volume = halstead_volume(operators, operands)
    return ComplexityMetrics(
        cyclomatic=cyclomatic,
        cognitive=cognitive,
        maintainability_index=maintainability_index(volume, cyclomatic),
    )
