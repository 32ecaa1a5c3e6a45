"""Configuration management for trf-hos-finder."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Optional, Dict, Any
import yaml

from trfhos.constants import (
    DEFAULT_FRAC_HIGH,
    DEFAULT_FRAC_LOW,
    DEFAULT_IDENTITY_THRESHOLD,
    DEFAULT_LENGTH_SOURCE,
    DEFAULT_MIN_RATIO,
    DEFAULT_OFFSET,
    DEFAULT_SCORE_THRESHOLD,
    LENGTH_SOURCES,
)
from trfhos.exceptions import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class RuntimeConfig:
    """Runtime configuration."""

    log_level: str = "WARNING"
    log_file: Optional[Path] = None


@dataclass
class MatchingConfig:
    """Criteria for pairing two repeats of the same sequence."""

    offset: int = DEFAULT_OFFSET
    frac_low: float = DEFAULT_FRAC_LOW
    frac_high: float = DEFAULT_FRAC_HIGH
    min_ratio: float = DEFAULT_MIN_RATIO
    # 'period' (3rd .dat column) or 'consensus_size' (5th .dat column)
    length_source: str = DEFAULT_LENGTH_SOURCE


@dataclass
class ClassificationConfig:
    """Thresholds for tagging a paired repeat as hos/HOS."""

    score_threshold: float = DEFAULT_SCORE_THRESHOLD
    identity_threshold: float = DEFAULT_IDENTITY_THRESHOLD


@dataclass
class Config:
    """Main configuration class."""

    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    matching: MatchingConfig = field(default_factory=MatchingConfig)
    classification: ClassificationConfig = field(default_factory=ClassificationConfig)

    # Convenience properties
    @property
    def offset(self) -> int:
        return self.matching.offset

    @offset.setter
    def offset(self, value: int):
        self.matching.offset = value

    def validate(self) -> None:
        """Validate configuration."""
        m = self.matching
        if m.offset < 0:
            raise ConfigurationError("matching.offset must be >= 0")
        if not 0.0 <= m.frac_low <= m.frac_high <= 1.0:
            raise ConfigurationError(
                "matching.frac_low and matching.frac_high must satisfy "
                "0 <= frac_low <= frac_high <= 1"
            )
        if m.min_ratio < 1.0:
            raise ConfigurationError("matching.min_ratio must be >= 1")
        if m.length_source not in LENGTH_SOURCES:
            raise ConfigurationError(
                f"matching.length_source must be one of {', '.join(LENGTH_SOURCES)}; "
                f"got {m.length_source!r}"
            )
        if self.classification.score_threshold <= 0:
            raise ConfigurationError("classification.score_threshold must be > 0")
        if str(self.runtime.log_level).upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"runtime.log_level must be one of {', '.join(LOG_LEVELS)}; "
                f"got {self.runtime.log_level!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""

        def path_to_str(obj):
            if isinstance(obj, Path):
                return str(obj)
            elif isinstance(obj, dict):
                return {k: path_to_str(v) for k, v in obj.items()}
            return obj

        return path_to_str(asdict(self))


def _coerce_option(section: str, key: str, kind: str, value: Any) -> Any:
    """Check a YAML value against the dataclass field type ``kind``."""
    name = f"{section}.{key}"
    # bool is an int subclass; 'yes'/'true' in YAML is never a number here
    if kind == "int":
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"{name} must be an integer; got {value!r}")
        return value
    if kind == "float":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigurationError(f"{name} must be a number; got {value!r}")
        return float(value)
    if kind == "str":
        if not isinstance(value, str):
            raise ConfigurationError(f"{name} must be a string; got {value!r}")
        return value
    if kind == "Optional[Path]":
        if value is None or value == "":
            return None
        if not isinstance(value, str):
            raise ConfigurationError(f"{name} must be a path; got {value!r}")
        return Path(value)
    return value


def _apply_section(target: Any, section: str, values: Any) -> None:
    if values is None:
        return
    if not isinstance(values, dict):
        raise ConfigurationError(f"Config section '{section}' must be a mapping")
    kinds = {f.name: f.type for f in fields(target)}
    unknown = sorted(set(values) - set(kinds))
    if unknown:
        raise ConfigurationError(
            f"Unsupported option(s) in '{section}': " + ", ".join(unknown)
        )
    for key, value in values.items():
        setattr(target, key, _coerce_option(section, key, kinds[key], value))


def load_config(path: Path) -> Config:
    """Load configuration from YAML file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    cfg = Config()
    sections = {
        "runtime": cfg.runtime,
        "matching": cfg.matching,
        "classification": cfg.classification,
    }
    unknown = sorted(set(data) - set(sections))
    if unknown:
        raise ConfigurationError("Unsupported config section(s): " + ", ".join(unknown))

    for name, target in sections.items():
        if name in data:
            _apply_section(target, name, data[name])

    cfg.validate()
    return cfg


def save_config(cfg: Config, path: Path) -> None:
    """Save configuration to YAML file."""
    data = cfg.to_dict()
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
