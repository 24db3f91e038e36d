# src/buildbake/config/config_validate.py


from difflib import get_close_matches
from typing import Any

from apathetic_schema import (
    DEFAULT_HINT_CUTOFF,
    ApatheticSchema_ValidationSummary,
    collect_msg,
)
from apathetic_utils import cast_hint, safe_isinstance, schema_from_typeddict

from buildbake.constants import DEFAULT_STRICT_CONFIG
from buildbake.logs import get_app_logger

from .config_types import FILE_KEYS, MAPPING_FIELDS, SourceFormat, TargetRecord


# --- constants ------------------------------------------------------

ValidationSummary = ApatheticSchema_ValidationSummary

ArgValue = str | int | float | bool | None


# bake file key (or record key) -> expected type
def _target_field_types() -> dict[str, Any]:
    field_types: dict[str, Any] = {}
    for field, expected in schema_from_typeddict(TargetRecord).items():
        # args/labels are stringified after validation
        hint = dict[str, ArgValue] if field in MAPPING_FIELDS else expected
        field_types[field] = hint
        field_types[FILE_KEYS[field]] = hint
    return field_types


TARGET_FIELD_TYPES: dict[str, Any] = _target_field_types()

GROUP_FIELD_TYPES: dict[str, Any] = {
    "targets": list[str],
}

BAKE_ROOT_KEYS = {"group", "target"}

COMPOSE_BUILD_TYPES: dict[str, Any] = {
    "context": str,
    "dockerfile": str,
    "args": dict[str, ArgValue] | list[str],
    "labels": dict[str, ArgValue] | list[str],
    "target": str,
    "cache_from": list[str],
}

# Field-specific examples for type errors
FIELD_EXAMPLES: dict[str, str] = {
    "inherits": '["base"]',
    "args": '{"VERSION": "1.0"}',
    "labels": '{"org.opencontainers.image.source": "..."}',
    "tags": '["repo/app:latest"]',
    "platforms": '["linux/amd64", "linux/arm64"]',
    "targets": '["app", "db"]',
    "no-cache": "true",
    "pull": "true",
}


# --- helpers --------------------------------------------------------


def _type_name(expected: Any) -> str:
    return getattr(expected, "__name__", None) or str(expected)


def _check_fields(
    record: dict[str, Any],
    field_types: dict[str, Any],
    context: str,
    *,
    summary: ValidationSummary,
) -> None:
    """Type-check known keys and report unknown ones, with close-match hints."""
    for key, value in record.items():
        expected = field_types.get(key)
        if expected is None:
            hint = ""
            close = get_close_matches(
                key, list(field_types), n=1, cutoff=DEFAULT_HINT_CUTOFF
            )
            if close:
                hint = f" (did you mean '{close[0]}'?)"
            collect_msg(
                f"Unknown key '{key}' {context}{hint}",
                strict=summary.strict,
                summary=summary,
            )
            continue

        if not safe_isinstance(value, expected):
            example = FIELD_EXAMPLES.get(key)
            example_msg = f", e.g. {example}" if example else ""
            collect_msg(
                f"'{key}' {context} must be {_type_name(expected)},"
                f" got {type(value).__name__}{example_msg}",
                strict=True,
                summary=summary,
                is_error=True,
            )


def _check_mapping_of_records(
    raw: dict[str, Any],
    section: str,
    field_types: dict[str, Any],
    *,
    summary: ValidationSummary,
) -> None:
    entries = raw.get(section, {})
    if not isinstance(entries, dict):
        collect_msg(
            f"`{section}` must be an object keyed by name.",
            strict=True,
            summary=summary,
            is_error=True,
        )
        return

    for name, record in cast_hint(dict[str, Any], entries).items():
        if not isinstance(record, dict):
            collect_msg(
                f"{section} '{name}' must be an object with named keys",
                strict=True,
                summary=summary,
                is_error=True,
            )
            continue
        _check_fields(
            cast_hint(dict[str, Any], record),
            field_types,
            f"in {section} '{name}'",
            summary=summary,
        )


def _validate_bake(raw: dict[str, Any], *, summary: ValidationSummary) -> None:
    for key in raw:
        if key not in BAKE_ROOT_KEYS:
            collect_msg(
                f"Unknown top-level key '{key}' ignored",
                strict=summary.strict,
                summary=summary,
            )
    _check_mapping_of_records(raw, "group", GROUP_FIELD_TYPES, summary=summary)
    _check_mapping_of_records(raw, "target", TARGET_FIELD_TYPES, summary=summary)


def _validate_compose(raw: dict[str, Any], *, summary: ValidationSummary) -> None:
    services = raw.get("services")
    if not isinstance(services, dict):
        collect_msg(
            "`services` must be a mapping of service names.",
            strict=True,
            summary=summary,
            is_error=True,
        )
        return

    for name, service in cast_hint(dict[str, Any], services).items():
        if service is None:
            continue
        if not isinstance(service, dict):
            collect_msg(
                f"service '{name}' must be a mapping",
                strict=True,
                summary=summary,
                is_error=True,
            )
            continue
        build = cast_hint(dict[str, Any], service).get("build")
        if build is None or isinstance(build, str):
            continue
        if not isinstance(build, dict):
            collect_msg(
                f"'build' in service '{name}' must be a path or a mapping,"
                f" got {type(build).__name__}",
                strict=True,
                summary=summary,
                is_error=True,
            )
            continue
        # compose files carry many build keys this tool does not use
        for key, value in cast_hint(dict[str, Any], build).items():
            expected = COMPOSE_BUILD_TYPES.get(key)
            if expected is not None and not safe_isinstance(value, expected):
                collect_msg(
                    f"'{key}' in service '{name}' build must be"
                    f" {_type_name(expected)}, got {type(value).__name__}",
                    strict=True,
                    summary=summary,
                    is_error=True,
                )


# ---------------------------------------------------------------------------
# main validator
# ---------------------------------------------------------------------------


def validate_config(
    raw: Any,
    fmt: SourceFormat = "bake",
    *,
    strict: bool | None = None,
) -> ValidationSummary:
    """Validate a raw (unparsed) config document.

    Type mismatches are always errors. Unknown keys are warnings, or
    strict warnings (fatal) when strict is enabled.
    """
    logger = get_app_logger()
    logger.trace(f"[validate_config] Validating {fmt} config (strict={strict})")

    summary = ValidationSummary(
        valid=True,
        errors=[],
        strict_warnings=[],
        warnings=[],
        strict=DEFAULT_STRICT_CONFIG if strict is None else strict,
    )

    if not isinstance(raw, dict):
        collect_msg(
            f"Invalid top-level value: {type(raw).__name__} (expected object)",
            strict=True,
            summary=summary,
            is_error=True,
        )
    elif fmt == "compose":
        _validate_compose(cast_hint(dict[str, Any], raw), summary=summary)
    else:
        _validate_bake(cast_hint(dict[str, Any], raw), summary=summary)

    summary.valid = not summary.errors and not summary.strict_warnings
    return summary
