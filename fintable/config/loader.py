from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import RollupConfig, SlotBindings, SnapshotPeriod, SummaryConfig

"""Config loader.

Responsibilities:
- Load YAML config (config/summary.yml by default)
- Validate against the JSON schema shipped next to this module
- Apply defaults (output_directory=./out, output_format=xlsx, language=en, ...)
- Apply environment overrides (FINTABLE_LANGUAGE, FINTABLE_OUTPUT_DIR)
"""

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "ConfigError",
    "load_config",
    "apply_env_overrides",
]

DEFAULT_CONFIG_PATH = Path("config/summary.yml")
SCHEMA_PATH = Path(__file__).parent / "config_schema.json"

ENV_LANGUAGE = "FINTABLE_LANGUAGE"
ENV_OUTPUT_DIR = "FINTABLE_OUTPUT_DIR"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: the schema file is missing or unreadable, or the data
            violates it (missing required keys, wrong types, extra keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _rollup_from(data: Mapping[str, Any] | None) -> RollupConfig:
    defaults = RollupConfig()
    data = data or {}
    boundary = data.get("boundary_labels")
    opening = data.get("opening_labels")
    return RollupConfig(
        boundary_labels=frozenset(boundary) if boundary is not None else defaults.boundary_labels,
        opening_labels=frozenset(opening) if opening is not None else defaults.opening_labels,
        cross_cutting_label=data.get("cross_cutting_label", defaults.cross_cutting_label),
        grand_total_label=data.get("grand_total_label", defaults.grand_total_label),
        boundary_snapshot=SnapshotPeriod(data.get("boundary_snapshot", defaults.boundary_snapshot.value)),
        include_cumul=data.get("include_cumul", defaults.include_cumul),
    )


def load_config(path: Path) -> SummaryConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top level must be a mapping")

    _validate_config_schema(data)

    defaults = SummaryConfig(source_directory="", slots=SlotBindings())
    return SummaryConfig(
        source_directory=data["source_directory"],
        slots=SlotBindings.from_mapping(data["slots"]),
        output_directory=data.get("output_directory", defaults.output_directory),
        output_format=data.get("output_format", defaults.output_format),
        language=data.get("language", defaults.language),
        separator=data.get("separator", defaults.separator),
        period_format=data.get("period_format", defaults.period_format),
        header_row=data.get("header_row", defaults.header_row),
        rollup=_rollup_from(data.get("rollup")),
    )


def apply_env_overrides(
    config: SummaryConfig, environ: Mapping[str, str] | None = None
) -> SummaryConfig:
    """Environment (already populated from .env by the CLI) wins over the file."""
    environ = os.environ if environ is None else environ
    changes: dict[str, Any] = {}
    if environ.get(ENV_LANGUAGE):
        changes["language"] = environ[ENV_LANGUAGE]
    if environ.get(ENV_OUTPUT_DIR):
        changes["output_directory"] = environ[ENV_OUTPUT_DIR]
    return replace(config, **changes) if changes else config
