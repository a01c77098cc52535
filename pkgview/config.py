"""Configuration loading for pkgview (.pkgview.yml)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

import yaml

from .models import OutputFormat, SortOrder

CONFIG_FILENAME = ".pkgview.yml"

_ChoiceT = TypeVar("_ChoiceT", bound=Enum)


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ViewerConfig:
    """Default output settings, overridable from the command line."""

    output_format: OutputFormat = OutputFormat.TABLE
    sort_order: SortOrder = SortOrder.BY_TYPE
    split_parent: bool = True
    source: Optional[Path] = None


def load_config(config_path: Path) -> ViewerConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)

    if not config_file.exists():
        return ViewerConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    output_data = _as_dict(data.get("output"))
    config = ViewerConfig(source=config_file)

    format_value = _as_str(output_data.get("format"))
    if format_value is not None:
        config.output_format = _parse_choice(OutputFormat, format_value, "output.format")

    sort_value = _as_str(output_data.get("sort"))
    if sort_value is not None:
        config.sort_order = _parse_choice(SortOrder, sort_value, "output.sort")

    if "split_parent" in output_data:
        split_parent = _as_bool(output_data.get("split_parent"))
        if split_parent is None:
            raise ConfigError("output.split_parent must be a boolean")
        config.split_parent = split_parent

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _parse_choice(enum_type: Type[_ChoiceT], value: str, key: str) -> _ChoiceT:
    normalised = value.strip().lower().replace("_", "-")
    try:
        return enum_type(normalised)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise ConfigError(f"{key} must be one of: {allowed} (got {value!r})") from None


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = ["CONFIG_FILENAME", "ConfigError", "ViewerConfig", "load_config"]
