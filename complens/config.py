"""Analyzer configuration and environment overrides."""

import os
from dataclasses import dataclass, replace

# Default limit on source size; override with COMPLENS_MAX_FILE_SIZE
DEFAULT_MAX_FILE_SIZE = 1024 * 1024  # 1MB

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ComplensError(Exception):
    """Base class for errors raised inside complens."""


class ConfigError(ComplensError, ValueError):
    """Raised when a configuration value cannot be interpreted."""

    def __init__(self, name: str, value: str, expected: str):
        self.name = name
        self.value = value
        super().__init__(f"Invalid value {value!r} for {name}: expected {expected}")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(name, raw, "a boolean (1/0, true/false, yes/no, on/off)")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw.replace("_", ""))
    except ValueError:
        raise ConfigError(name, raw, "an integer") from None
    if value <= 0:
        raise ConfigError(name, raw, "a positive integer")
    return value


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Options for a ComponentAnalyzer.

    Frozen so one instance can be shared by every call and every worker.
    """

    include_private_methods: bool = False
    extract_descriptions: bool = True
    compute_complexity: bool = True
    max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE

    @classmethod
    def from_env(cls) -> "AnalysisConfig":
        """Build a config from COMPLENS_* environment variables.

        Raises:
            ConfigError: If a variable is set to something unparseable.
        """
        return cls(
            include_private_methods=_env_bool("COMPLENS_INCLUDE_PRIVATE", False),
            extract_descriptions=_env_bool("COMPLENS_EXTRACT_DESCRIPTIONS", True),
            compute_complexity=_env_bool("COMPLENS_COMPUTE_COMPLEXITY", True),
            max_file_size_bytes=_env_int("COMPLENS_MAX_FILE_SIZE", DEFAULT_MAX_FILE_SIZE),
        )

    def with_overrides(self, **changes) -> "AnalysisConfig":
        return replace(self, **changes)
