"""Pytest configuration and fixtures."""

import textwrap

import pytest


@pytest.fixture
def write_source(tmp_path):
    """Write a dedented source file under tmp_path and return its path."""

    def _write(name: str, content: str):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def analyzer():
    from complens import ComponentAnalyzer

    return ComponentAnalyzer()


@pytest.fixture
def extract(write_source):
    """Analyze a snippet and return its ComponentStructure."""
    from complens import AnalysisConfig, ComponentAnalyzer

    def _extract(content: str, name: str = "Component.tsx", **config):
        result = ComponentAnalyzer(AnalysisConfig(**config)).analyze(write_source(name, content))
        assert result.success, result.errors
        return result.structure

    return _extract
