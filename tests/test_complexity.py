"""Tests for complexity scoring."""

import pytest


def _metrics(source: str, path: str = "module.ts"):
    from complens import TreeParser, score_complexity

    outcome = TreeParser().parse(source, path)
    assert outcome.ok, outcome.diagnostics
    return score_complexity(outcome.tree.root_node)


# =============================================================================
# Cyclomatic
# =============================================================================


def test_straight_line_code_has_baseline_one():
    metrics = _metrics("function f(a) { return a; }")

    assert metrics.cyclomatic == 1
    assert metrics.cognitive == 0


def test_if_adds_one_branch():
    assert _metrics("function f(a) { if (a) { return 1; } return 0; }").cyclomatic == 2


def test_logical_operators_add_decision_points():
    metrics = _metrics("function f(a, b, c) { if (a && b || c) { return 1; } return 0; }")

    assert metrics.cyclomatic == 4
    assert metrics.cognitive == 1


def test_nullish_coalescing_is_not_a_decision_point():
    assert _metrics("const c = a ?? b;").cyclomatic == 1


def test_ternary_counts_for_both_scores():
    metrics = _metrics("const y = a ? 1 : 2;")

    assert metrics.cyclomatic == 2
    assert metrics.cognitive == 1


def test_switch_cases_and_default():
    metrics = _metrics(
        """
        function f(x) {
          switch (x) {
            case 1:
              return 'a';
            case 2:
              break;
            default:
              return 'c';
          }
        }
        """
    )

    assert metrics.cyclomatic == 4
    # switch + break
    assert metrics.cognitive == 2


def test_loops_and_catch():
    metrics = _metrics(
        """
        function f(xs) {
          for (let i = 0; i < xs.length; i++) {}
          for (const x of xs) { if (!x) continue; }
          for (const k in xs) {}
          while (xs.length) { xs.pop(); }
          do { xs.push(1); } while (false);
          try { f(xs); } catch (e) {}
        }
        """
    )

    assert metrics.cyclomatic == 8
    assert metrics.cognitive == 7


def test_markup_source_is_scored():
    metrics = _metrics(
        "export const Flag = ({ on }) => (on ? <Yes /> : <No />);",
        path="Flag.tsx",
    )

    assert metrics.cyclomatic == 2


# =============================================================================
# Maintainability index
# =============================================================================


def test_halstead_volume_fallback():
    from complens.complexity import halstead_volume

    assert halstead_volume(0, 0) == 1.0
    assert halstead_volume(1, 0) == 1.0
    assert halstead_volume(2, 2) == pytest.approx(8.0)


def test_maintainability_index_formula():
    from complens.complexity import maintainability_index

    # 171 - 5.2 ln 8 - 0.23 - 16.2 ln 0.008 = 238.175...
    assert maintainability_index(8.0, 1) == 238


def test_maintainability_index_never_negative():
    from complens.complexity import maintainability_index

    assert maintainability_index(1e30, 1000) == 0


def test_tiny_source_exceeds_base_score():
    # Operands: A, null. V = 2 log2 2 = 2
    metrics = _metrics("export const A = () => null;")

    assert metrics.maintainability_index == 268


def test_larger_source_scores_lower():
    small = _metrics("const a = 1;")
    body = "\n".join(f"const v{i} = a{i} + b{i} * c{i};" for i in range(200))
    large = _metrics(body)

    assert 0 <= large.maintainability_index < small.maintainability_index


def test_scores_are_deterministic():
    source = "function f(a) { while (a > 0) { a--; } return a || 0; }"

    assert _metrics(source) == _metrics(source)
