"""Tests for AnalysisConfig and its environment overrides."""

import pytest


def test_defaults():
    from complens import AnalysisConfig
    from complens.config import DEFAULT_MAX_FILE_SIZE

    config = AnalysisConfig()

    assert config.include_private_methods is False
    assert config.extract_descriptions is True
    assert config.compute_complexity is True
    assert config.max_file_size_bytes == DEFAULT_MAX_FILE_SIZE == 1024 * 1024


def test_from_env_reads_overrides(monkeypatch):
    from complens import AnalysisConfig

    monkeypatch.setenv("COMPLENS_INCLUDE_PRIVATE", "yes")
    monkeypatch.setenv("COMPLENS_EXTRACT_DESCRIPTIONS", "0")
    monkeypatch.setenv("COMPLENS_COMPUTE_COMPLEXITY", "False")
    monkeypatch.setenv("COMPLENS_MAX_FILE_SIZE", "2_048")

    config = AnalysisConfig.from_env()

    assert config.include_private_methods is True
    assert config.extract_descriptions is False
    assert config.compute_complexity is False
    assert config.max_file_size_bytes == 2048


def test_from_env_ignores_blank_values(monkeypatch):
    from complens import AnalysisConfig

    monkeypatch.setenv("COMPLENS_INCLUDE_PRIVATE", "  ")
    monkeypatch.delenv("COMPLENS_MAX_FILE_SIZE", raising=False)

    assert AnalysisConfig.from_env() == AnalysisConfig()


@pytest.mark.parametrize(
    "name,value",
    [
        ("COMPLENS_INCLUDE_PRIVATE", "maybe"),
        ("COMPLENS_MAX_FILE_SIZE", "big"),
        ("COMPLENS_MAX_FILE_SIZE", "0"),
    ],
)
def test_from_env_rejects_bad_values(monkeypatch, name, value):
    from complens import AnalysisConfig, ConfigError

    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigError) as exc_info:
        AnalysisConfig.from_env()

    assert exc_info.value.name == name
    assert isinstance(exc_info.value, ValueError)


def test_config_is_immutable():
    from dataclasses import FrozenInstanceError

    from complens import AnalysisConfig

    config = AnalysisConfig()
    with pytest.raises(FrozenInstanceError):
        config.compute_complexity = False

    changed = config.with_overrides(compute_complexity=False)
    assert changed.compute_complexity is False
    assert config.compute_complexity is True
