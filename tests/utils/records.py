# tests/utils/records.py
"""Factories for config records and config files used across tests."""

import json
from pathlib import Path
from typing import Any

import yaml
from apathetic_utils import cast_hint

import buildbake.config.config_types as mod_types
import buildbake.config.config_validate as mod_validate


def make_target(**fields: Any) -> mod_types.TargetRecord:
    """Build a TargetRecord from keyword fields; only given keys are set."""
    return cast_hint(mod_types.TargetRecord, dict(fields))


def make_config(
    targets: dict[str, dict[str, Any]] | None = None,
    groups: dict[str, list[str]] | None = None,
    *,
    origin: str | None = None,
) -> mod_types.ConfigRecord:
    """Build a ConfigRecord.

    Examples:
        >>> make_config({"app": {"tags": ["app:1"]}}, {"default": ["app"]})
    """
    config: mod_types.ConfigRecord = {
        "group": {
            name: {"targets": list(members)}
            for name, members in (groups or {}).items()
        },
        "target": {
            name: make_target(**fields) for name, fields in (targets or {}).items()
        },
    }
    if origin is not None:
        config["__meta__"] = {"origin": origin, "format": "bake"}
    return config


def write_config_file(path: Path, data: dict[str, Any] | str) -> Path:
    """Write `data` to `path`, as YAML or JSON depending on the suffix.

    Strings are written verbatim.
    """
    if isinstance(data, str):
        text = data
    elif path.suffix in {".yml", ".yaml"}:
        text = yaml.safe_dump(data, sort_keys=False)
    else:
        text = json.dumps(data, indent=2)
    path.write_text(text, encoding="utf-8")
    return path


def make_summary(
    *,
    valid: bool = True,
    errors: list[str] | None = None,
    strict_warnings: list[str] | None = None,
    warnings: list[str] | None = None,
    strict: bool = False,
) -> mod_validate.ValidationSummary:
    """Helper to create a clean ValidationSummary."""
    return mod_validate.ValidationSummary(
        valid=valid,
        errors=errors or [],
        strict_warnings=strict_warnings or [],
        warnings=warnings or [],
        strict=strict,
    )
