"""Load and merge configuration from .aca.toml and ACA_* environment variables."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from acautils.config.schema import (
    AcaConfig,
    FlipConfig,
    OutputConfig,
    ScanConfig,
    StoreConfig,
)
from acautils.output import OUTPUT_MODES, parse_mode
from acautils.scanner.selector import split_csv

CONFIG_FILENAME = ".aca.toml"

_FORMATS = OUTPUT_MODES


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(base_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = base_dir / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: AcaConfig) -> None:
    for name in ("format", "flip_format"):
        value = getattr(cfg.output, name)
        if value not in _FORMATS:
            raise ConfigError(f"[output] {name} must be one of {', '.join(_FORMATS)}: {value!r}")
    if cfg.output.flip_format == "csv":
        raise ConfigError("[output] flip_format must be table or json")
    for name in ("include", "exclude"):
        value = getattr(cfg.scan, name)
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"[scan] {name} must be a list of glob strings")
    for name in ("properties_path", "branch_template"):
        template = getattr(cfg.flip, name)
        if not isinstance(template, str):
            raise ConfigError(f"[flip] {name} must be a string")
        try:
            template.format(env="dev")
        except (KeyError, IndexError, ValueError) as exc:
            raise ConfigError(f"[flip] {name} may only use the {{env}} placeholder: {template!r}") from exc
    if "{env}" not in cfg.flip.properties_path:
        raise ConfigError("[flip] properties_path must contain {env}")


def _merge_env_overrides(cfg: AcaConfig) -> None:
    """Apply ACA_* environment variable overrides."""
    if val := os.environ.get("ACA_OUTPUT"):
        cfg.output.format = parse_mode(val, cfg.output.format)
    if val := os.environ.get("ACA_INCLUDE"):
        cfg.scan.include = split_csv(val, cfg.scan.include)
    if val := os.environ.get("ACA_EXCLUDE"):
        cfg.scan.exclude = split_csv(val, cfg.scan.exclude)
    if val := os.environ.get("ACA_STORE_PATH"):
        cfg.store.path = val


def load_config(
    base_dir: Path,
    config_override: Optional[str] = None,
) -> AcaConfig:
    """Load, validate, and return an AcaConfig."""
    config_path = find_config_file(base_dir, config_override)

    if config_path is None:
        cfg = AcaConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = AcaConfig(
            version=str(raw.get("version", "1.0")),
            scan=_build_section(raw, ScanConfig, "scan"),
            output=_build_section(raw, OutputConfig, "output"),
            flip=_build_section(raw, FlipConfig, "flip"),
            store=_build_section(raw, StoreConfig, "store"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
