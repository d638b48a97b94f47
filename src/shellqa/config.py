"""Configuration loading and management for shellqa.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig / ThresholdConfig)
    2. Global config (~/.shellqa.toml)
    3. Project config (./shellqa.toml)
    4. Explicit config file
    5. Environment variables (SHELLQA_* prefix)
    6. Keyword overrides (CLI flags, API callers)

A config file looks like::

    include_patterns = ["*.sh", "*.bash"]
    exclude_patterns = [".legacy", "vendor/"]
    ignore_name_patterns = ["^test_"]

    [checks]
    duplication = true
    trivial_wrappers = true

    [thresholds]
    similarity_threshold = 0.85
    max_lines = 2

    [annotations]
    markers = ["@@PUBLIC_API@@", "@@ALLOW_TRIVIAL_WRAPPER_FOR_ERGONOMICS@@"]
    window = 10

Example:
    >>> config = load_config(verbose=True, max_lines=3)
    >>> config.verbosity
    'verbose'
    >>> config.thresholds.max_lines
    3
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

DEFAULT_ANNOTATION_MARKERS = [
    "@@PUBLIC_API@@",
    "@@ALLOW_TRIVIAL_WRAPPER_FOR_ERGONOMICS@@",
]

# Annotations are only looked for this close to a function definition
MAX_ANNOTATION_WINDOW = 10

CONFIG_FILE_NAME = "shellqa.toml"
ENV_PREFIX = "SHELLQA_"


@dataclass(frozen=True)
class ThresholdConfig:
    """Numeric cutoffs for both checks.

    The defaults were tuned against real shell libraries; changing how
    tokens or usages are counted would shift what these numbers mean.

    Attributes:
        Function duplication:
            min_name_length: Names (full or stripped) shorter than this are not compared
            similarity_threshold: Full-name similarity that raises a warning
            full_fail_threshold: Full-name similarity that fails the run
            strip_warn_threshold: Stripped-name similarity that raises a warning

        Trivial wrappers:
            max_lines: Functions with more meaningful lines are never wrappers
            local_usage_threshold: Usages in the defining file that justify a wrapper
            global_usage_threshold: Usages across the corpus that justify a wrapper
            min_vars_for_ergonomic: Distinct variables that justify a wrapper
            token_complexity_warn: Token count that downgrades a failure to a warning
            token_complexity_pass: Token count that counts as real logic
    """

    # === Function Duplication ===
    min_name_length: int = 4
    similarity_threshold: float = 0.85
    full_fail_threshold: float = 0.95
    strip_warn_threshold: float = 0.90

    # === Trivial Wrappers ===
    max_lines: int = 2
    local_usage_threshold: int = 4
    global_usage_threshold: int = 6
    min_vars_for_ergonomic: int = 2
    token_complexity_warn: int = 3
    token_complexity_pass: int = 4

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        for field_name in (
            "similarity_threshold",
            "full_fail_threshold",
            "strip_warn_threshold",
        ):
            value = getattr(self, field_name)
            if not 0.0 <= value <= 1.0:
                raise InvalidConfigError(field_name, value, "must be between 0.0 and 1.0")

        for field_name in (
            "min_name_length",
            "max_lines",
            "local_usage_threshold",
            "global_usage_threshold",
            "min_vars_for_ergonomic",
            "token_complexity_warn",
            "token_complexity_pass",
        ):
            value = getattr(self, field_name)
            if value < 0:
                raise InvalidConfigError(field_name, value, "must be non-negative")

        if self.similarity_threshold > self.full_fail_threshold:
            raise InvalidConfigError(
                "similarity_threshold",
                self.similarity_threshold,
                f"warn threshold exceeds full_fail_threshold ({self.full_fail_threshold})",
            )
        if self.token_complexity_warn > self.token_complexity_pass:
            raise InvalidConfigError(
                "token_complexity_warn",
                self.token_complexity_warn,
                f"warn threshold exceeds token_complexity_pass ({self.token_complexity_pass})",
            )


DEFAULT_THRESHOLDS = ThresholdConfig()

THRESHOLD_FIELDS = frozenset(f.name for f in fields(ThresholdConfig))

LIST_FIELDS = (
    "include_patterns",
    "exclude_patterns",
    "ignore_name_patterns",
    "annotation_markers",
)
BOOL_FIELDS = ("allow_hidden_files", "check_duplication", "check_trivial_wrappers")

# Sub-tables of a config file and the AnalysisConfig field each key maps to
_TABLE_KEYS = {
    "annotations": {"markers": "annotation_markers", "window": "annotation_window"},
    "checks": {"duplication": "check_duplication", "trivial_wrappers": "check_trivial_wrappers"},
}


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for a QA run.

    Attributes:
        File selection:
            include_patterns: Glob patterns matched against file names
            exclude_patterns: Substrings; a file whose relative path contains one is skipped
            max_file_size_mb: Larger files are skipped
            allow_hidden_files: Descend into hidden directories and read hidden files

        Checks:
            check_duplication: Run function-duplication detection
            check_trivial_wrappers: Run trivial-wrapper detection
            ignore_name_patterns: Regexes; matching function names are not compared

        Annotations:
            annotation_markers: Comment markers that exempt a function from the wrapper check
            annotation_window: Lines above a definition searched for markers

        Execution:
            workers: Parallel workers (None = auto-detect)
            verbosity: Logging verbosity level (quiet, normal, verbose)
            log_file: Also append log records to this file

        thresholds: Numeric cutoffs (nested config)
    """

    include_patterns: list[str] = field(default_factory=lambda: ["*.sh"])
    exclude_patterns: list[str] = field(default_factory=list)
    max_file_size_mb: float = 10.0
    allow_hidden_files: bool = False

    check_duplication: bool = True
    check_trivial_wrappers: bool = True
    ignore_name_patterns: list[str] = field(default_factory=list)

    annotation_markers: list[str] = field(
        default_factory=lambda: list(DEFAULT_ANNOTATION_MARKERS)
    )
    annotation_window: int = MAX_ANNOTATION_WINDOW

    workers: Optional[int] = None
    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        for field_name in LIST_FIELDS:
            value = getattr(self, field_name)
            if not isinstance(value, (list, tuple)) or not all(
                isinstance(item, str) for item in value
            ):
                raise InvalidConfigError(field_name, value, "must be a list of strings")
        for field_name in BOOL_FIELDS:
            value = getattr(self, field_name)
            if not isinstance(value, bool):
                raise InvalidConfigError(field_name, value, "must be true or false")

        if not self.include_patterns:
            raise InvalidConfigError("include_patterns", self.include_patterns, "must not be empty")
        if self.max_file_size_mb <= 0:
            raise InvalidConfigError("max_file_size_mb", self.max_file_size_mb, "must be positive")
        if not 0 <= self.annotation_window <= MAX_ANNOTATION_WINDOW:
            raise InvalidConfigError(
                "annotation_window",
                self.annotation_window,
                f"must be between 0 and {MAX_ANNOTATION_WINDOW}",
            )
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "must be quiet, normal or verbose")
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise InvalidConfigError("log_file", self.log_file, "must be a path string")
        for pattern in self.ignore_name_patterns:
            try:
                re.compile(pattern)
            except re.error as e:
                raise InvalidConfigError("ignore_name_patterns", pattern, f"bad regex: {e}")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


default_config = AnalysisConfig()


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). Threshold
            names (e.g. ``max_lines=3``) are routed into ``thresholds``.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is missing or unparseable, or a
            key is unknown
        InvalidConfigError: If a value is out of range
    """
    merged: dict[str, Any] = {}
    threshold_values: dict[str, Any] = {}

    candidates = [Path.home() / f".{CONFIG_FILE_NAME}", Path.cwd() / CONFIG_FILE_NAME]
    for candidate in candidates:
        if candidate.is_file():
            _merge_file(candidate, merged, threshold_values)

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        _merge_file(config_file, merged, threshold_values)

    env_config, env_thresholds = _load_env_vars()
    merged.update(env_config)
    threshold_values.update(env_thresholds)

    # Convert verbosity boolean flags to string
    overrides = dict(overrides)
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    explicit_thresholds = overrides.pop("thresholds", None)
    if isinstance(explicit_thresholds, ThresholdConfig):
        threshold_values = {
            f.name: getattr(explicit_thresholds, f.name) for f in fields(ThresholdConfig)
        }
    elif isinstance(explicit_thresholds, dict):
        threshold_values.update(explicit_thresholds)

    for key in list(overrides):
        if key in THRESHOLD_FIELDS:
            threshold_values[key] = overrides.pop(key)
    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        merged["thresholds"] = ThresholdConfig(**threshold_values)
    except TypeError as e:
        raise ConfigurationError(f"Invalid [thresholds] config: {e}")

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _merge_file(path: Path, merged: dict[str, Any], threshold_values: dict[str, Any]) -> None:
    """Fold one TOML file into the running merge."""
    try:
        data = _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")

    thresholds = data.pop("thresholds", None)
    if thresholds is not None:
        if not isinstance(thresholds, dict):
            raise ConfigurationError(f"[thresholds] in '{path}' must be a table")
        threshold_values.update(thresholds)

    for table, key_map in _TABLE_KEYS.items():
        values = data.pop(table, None)
        if values is None:
            continue
        if not isinstance(values, dict):
            raise InvalidConfigError(table, values, f"[{table}] in '{path}' must be a table")
        for key, value in values.items():
            if key not in key_map:
                raise InvalidConfigError(
                    f"{table}.{key}", value, f"unknown key in [{table}] of '{path}'"
                )
            merged[key_map[key]] = value

    merged.update(data)


def _load_env_vars() -> tuple[dict[str, Any], dict[str, Any]]:
    """Load configuration from SHELLQA_* environment variables.

    Every scalar field of AnalysisConfig and ThresholdConfig can be set, e.g.
    SHELLQA_WORKERS=4, SHELLQA_CHECK_DUPLICATION=false,
    SHELLQA_SIMILARITY_THRESHOLD=0.9. List fields are not read from the
    environment.

    Returns:
        Tuple of (config values, threshold values).
    """
    config_values: dict[str, Any] = {}
    threshold_values: dict[str, Any] = {}

    for cls, target in ((AnalysisConfig, config_values), (ThresholdConfig, threshold_values)):
        type_hints = get_type_hints(cls)
        for field_name in cls.__dataclass_fields__:
            env_key = f"{ENV_PREFIX}{field_name.upper()}"
            env_value = os.environ.get(env_key)
            if env_value is None:
                continue

            type_hint = type_hints.get(field_name)
            if type_hint is None:
                continue

            try:
                parsed = _parse_env_value(env_value, type_hint)
            except ValueError as e:
                raise ConfigurationError(f"Invalid {env_key}: {e}")
            if parsed is not None:
                target[field_name] = parsed

    return config_values, threshold_values


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns:
        Parsed value or None if the type is not settable from the environment

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is list or type_hint is list:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
