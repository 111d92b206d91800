"""Tests for dialect selection, parsing diagnostics and tree traversal."""

import pytest


# =============================================================================
# Dialect
# =============================================================================


@pytest.mark.parametrize(
    "path,markup,typed,grammar",
    [
        ("Card.tsx", True, True, "tsx"),
        ("util.ts", False, True, "typescript"),
        ("util.mts", False, True, "typescript"),
        ("Card.jsx", True, False, "javascript"),
        ("util.js", False, False, "javascript"),
        ("CARD.TSX", True, True, "tsx"),
    ],
)
def test_dialect_for_path(path, markup, typed, grammar):
    from complens import Dialect

    dialect = Dialect.for_path(path)

    assert dialect.markup is markup
    assert dialect.typed is typed
    assert dialect.grammar == grammar


# =============================================================================
# Parsing
# =============================================================================


def test_parse_valid_typed_markup():
    from complens import TreeParser

    outcome = TreeParser().parse("const x: number = 1;\nexport const A = () => <B />;", "A.tsx")

    assert outcome.ok
    assert outcome.grammar == "tsx"
    assert outcome.diagnostics == []
    assert outcome.tree.root_node.type == "program"


def test_type_annotations_rejected_in_plain_javascript():
    from complens import TreeParser

    outcome = TreeParser().parse("const x: number = 1;", "util.js")

    assert not outcome.ok
    assert outcome.tree is None
    assert outcome.diagnostics


def test_malformed_source_reports_locations():
    from complens import TreeParser

    outcome = TreeParser().parse("function f( {\n  return 1;\n", "f.ts")

    assert not outcome.ok
    assert outcome.diagnostics
    assert all(" at line " in d for d in outcome.diagnostics)


def test_diagnostics_are_capped():
    from complens.tree_parser import MAX_DIAGNOSTICS, TreeParser

    source = "\n".join("const = ;" for _ in range(200))
    outcome = TreeParser().parse(source, "many.ts")

    assert not outcome.ok
    assert 0 < len(outcome.diagnostics) <= MAX_DIAGNOSTICS


def test_parser_failure_becomes_diagnostic(monkeypatch):
    from complens.tree_parser import TreeParser

    parser = TreeParser()

    def _explode(grammar):
        raise RuntimeError("binding crashed")

    monkeypatch.setattr(parser, "_get_parser", _explode)
    outcome = parser.parse("const a = 1;", "a.ts")

    assert not outcome.ok
    assert "binding crashed" in outcome.diagnostics[0]


# =============================================================================
# Walker
# =============================================================================


def _root(source: str, path: str = "module.ts"):
    from complens import TreeParser

    outcome = TreeParser().parse(source, path)
    assert outcome.ok, outcome.diagnostics
    return outcome.tree.root_node


def test_walk_is_preorder_in_source_order():
    from complens.walker import NodeKind, node_kind, node_text, walk

    root = _root("const a = 1; const b = f(c);")

    identifiers = [node_text(n) for n in walk(root) if node_kind(n) is NodeKind.IDENTIFIER]
    assert identifiers == ["a", "b", "f", "c"]

    nodes = list(walk(root))
    assert nodes[0].type == "program"
    assert [n.type for n in nodes[1:4]] == ["lexical_declaration", "variable_declarator", "identifier"]


def test_walk_handles_deep_nesting():
    from complens.walker import walk

    depth = 1200
    root = _root("const x = " + "f(" * depth + "1" + ")" * depth + ";")

    calls = sum(1 for n in walk(root) if n.type == "call_expression")
    assert calls == depth


def test_visit_calls_back_for_every_node():
    from complens.walker import visit, walk

    root = _root("if (a) { b(); }")
    seen = []

    visit(root, seen.append)

    assert len(seen) == len(list(walk(root)))


def test_unmapped_node_types_are_other():
    from complens.walker import NodeKind, node_kind

    root = _root("const a = 1;")

    assert node_kind(root) is NodeKind.OTHER
    assert node_kind(root.children[0]) is NodeKind.OTHER
    anonymous = next(c for c in root.children[0].children if not c.is_named)
    assert node_kind(anonymous) is NodeKind.OTHER
