"""Search configuration with YAML support."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from shodh_core.schemas import SearchConfig


def load_config(yaml_path: str | Path) -> dict[str, Any]:
    """Load search defaults from a YAML file.

    The file may set any ``SearchConfig`` field, including ``query``.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        Mapping of field name to value, as written in the file

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is invalid, not a mapping, or names unknown fields
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    try:
        with open(yaml_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {yaml_path}: {e}") from e

    if not data:
        raise ValueError(f"Empty or invalid YAML file: {yaml_path}")
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {yaml_path}")

    unknown = sorted(set(data) - set(SearchConfig.model_fields))
    if unknown:
        raise ValueError(f"Unknown config keys in {yaml_path}: {', '.join(unknown)}")

    return data


def build_config(
    overrides: Mapping[str, Any],
    file_values: Mapping[str, Any] | None = None,
) -> SearchConfig:
    """Merge file values with command-line overrides and validate.

    ``None`` in ``overrides`` means "not given on the command line", so the
    file value (or the field default) applies.

    Raises:
        ValueError: If the merged values do not form a valid configuration
    """
    merged: dict[str, Any] = dict(file_values or {})
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value

    try:
        return SearchConfig.from_dict(merged)
    except Exception as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def save_config(config: SearchConfig, yaml_path: str | Path) -> None:
    """Save a search configuration to YAML so it can be replayed.

    Args:
        config: SearchConfig to save
        yaml_path: Path where to save YAML file
    """
    yaml_path = Path(yaml_path)
    yaml_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json")

    with open(yaml_path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
