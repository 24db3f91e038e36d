# src/buildbake/config/config_loader.py


from collections.abc import Iterable
from pathlib import Path
from typing import Any

from apathetic_utils import cast_hint, plural, remove_path_in_error_message

from buildbake.constants import DEFAULT_FILENAMES, DEFAULT_GROUP
from buildbake.logs import get_app_logger
from buildbake.utils import load_hcl, load_jsonc, load_yaml

from .config_types import (
    FILE_KEYS,
    ConfigRecord,
    GroupRecord,
    SourceFormat,
    TargetRecord,
)
from .config_validate import ValidationSummary, validate_config


# bake file key -> record key (record spellings accepted too)
BAKE_KEYS: dict[str, str] = {
    **{field: field for field in FILE_KEYS},
    **{file_key: field for field, file_key in FILE_KEYS.items()},
}

JSON_SUFFIXES = {".json", ".jsonc"}
HCL_SUFFIXES = {".hcl"}
YAML_SUFFIXES = {".yml", ".yaml"}


def find_config_files(
    explicit: Iterable[str] | None,
    cwd: Path,
    *,
    missing_level: str = "error",
) -> list[Path]:
    """Locate the configuration files to load, in load order.

    missing_level: log-level for failing to find any configuration file.

    Search order:
      1. Explicit paths from the CLI (-f/--file), all of them, as given
      2. Otherwise every default candidate present in `cwd`
    """
    logger = get_app_logger()

    # --- 1. Explicit config paths ---
    paths = list(explicit or [])
    if paths:
        found: list[Path] = []
        for raw in paths:
            config = Path(raw).expanduser()
            if not config.is_absolute():
                config = cwd / config
            logger.trace(f"[find_config_files] Checking explicit path: {config}")
            if not config.exists():
                xmsg = f"Specified config file not found: {config}"
                raise FileNotFoundError(xmsg)
            if config.is_dir():
                xmsg = f"Specified config path is a directory, not a file: {config}"
                raise ValueError(xmsg)
            found.append(config)
        return found

    # --- 2. Default candidates in the working directory ---
    found = [cwd / name for name in DEFAULT_FILENAMES if (cwd / name).is_file()]
    if not found:
        logger.logDynamic(missing_level, f"No config file found in {cwd}")
        return []

    logger.debug(
        "Using config file%s: %s",
        plural(found),
        ", ".join(p.name for p in found),
    )
    return found


def _detect_format(raw: dict[str, Any], suffix: str) -> SourceFormat:
    if suffix in YAML_SUFFIXES or "services" in raw:
        return "compose"
    return "bake"


def _load_unknown_suffix(path: Path) -> dict[str, Any] | list[Any] | None:
    """Try YAML, then JSONC, then HCL; report every failure if none fits."""
    logger = get_app_logger()
    errors: list[str] = []
    for loader in (load_yaml, load_jsonc, load_hcl):
        try:
            return loader(path)
        except ValueError as e:
            logger.trace(f"[load_config_file] {loader.__name__} failed: {e}")
            errors.append(str(e))
    xmsg = "; ".join(errors)
    raise ValueError(xmsg)


def load_config_file(
    path: Path,
) -> tuple[dict[str, Any] | list[Any] | None, SourceFormat]:
    """Load raw data from a config file and tell which format it is in.

    .json/.jsonc files are read as JSONC, .hcl as HCL, .yml/.yaml as YAML.
    Anything else is tried as YAML, then JSONC, then HCL. Compose is
    recognized by its `services` key or a YAML suffix.
    """
    logger = get_app_logger()
    suffix = path.suffix.lower()
    logger.trace(f"[load_config_file] Loading from {path} ({suffix})")

    try:
        if suffix in JSON_SUFFIXES:
            data = load_jsonc(path)
        elif suffix in HCL_SUFFIXES:
            data = load_hcl(path)
        elif suffix in YAML_SUFFIXES:
            data = load_yaml(path)
        else:
            data = _load_unknown_suffix(path)
    except ValueError as e:
        clean_msg = remove_path_in_error_message(str(e), path)
        xmsg = f"Error while loading configuration file '{path.name}': {clean_msg}"
        raise ValueError(xmsg) from e

    fmt: SourceFormat = "bake"
    if isinstance(data, dict):
        fmt = _detect_format(data, suffix)
    elif suffix in YAML_SUFFIXES:
        fmt = "compose"
    return data, fmt


# --- parsing ----------------------------------------------------------------


def _stringify(value: Any) -> str:
    # YAML and JSON scalars; booleans keep their file spelling
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _string_map(raw: dict[str, Any] | list[Any]) -> dict[str, str]:
    """Turn a mapping or a KEY=VALUE list into a string map.

    Null values and bare KEY entries are dropped.
    """
    out: dict[str, str] = {}
    if isinstance(raw, list):
        for item in cast_hint(list[str], raw):
            key, sep, value = str(item).partition("=")
            if sep:
                out[key] = value
        return out

    for key, value in raw.items():
        if value is not None:
            out[str(key)] = _stringify(value)
    return out


def _parse_bake_target(raw: dict[str, Any]) -> TargetRecord:
    record: dict[str, Any] = {}
    for key, value in raw.items():
        field = BAKE_KEYS.get(key)
        if field is None:
            # validation already reported it
            continue
        if field in {"args", "labels"}:
            record[field] = _string_map(value)
        elif isinstance(value, list):
            record[field] = [str(v) for v in cast_hint(list[Any], value)]
        else:
            record[field] = value
    return cast_hint(TargetRecord, record)


def _parse_bake(raw: dict[str, Any]) -> ConfigRecord:
    groups: dict[str, GroupRecord] = {}
    for name, group in cast_hint(dict[str, Any], raw.get("group") or {}).items():
        targets = cast_hint(dict[str, Any], group).get("targets") or []
        groups[name] = {"targets": [str(t) for t in targets]}

    targets: dict[str, TargetRecord] = {}
    for name, target in cast_hint(dict[str, Any], raw.get("target") or {}).items():
        targets[name] = _parse_bake_target(cast_hint(dict[str, Any], target))

    return {"group": groups, "target": targets}


def _parse_compose_build(
    build: str | dict[str, Any], image: Any
) -> TargetRecord:
    record: TargetRecord = {}
    if isinstance(build, str):
        record["context"] = build
    else:
        if "context" in build:
            record["context"] = str(build["context"])
        if "dockerfile" in build:
            record["dockerfile"] = str(build["dockerfile"])
        if build.get("args") is not None:
            record["args"] = _string_map(build["args"])
        if build.get("labels") is not None:
            record["labels"] = _string_map(build["labels"])
        if "target" in build:
            record["target"] = str(build["target"])
        if build.get("cache_from") is not None:
            record["cache_from"] = [str(c) for c in build["cache_from"]]
    if isinstance(image, str) and image:
        record["tags"] = [image]
    return record


def _parse_compose(raw: dict[str, Any]) -> ConfigRecord:
    logger = get_app_logger()
    services = cast_hint(dict[str, Any], raw.get("services") or {})

    targets: dict[str, TargetRecord] = {}
    for name, service in services.items():
        spec = cast_hint(dict[str, Any], service or {})
        build = spec.get("build")
        if build is None:
            logger.trace(f"[parse_config] service {name!r} has no build, skipping")
            continue
        targets[str(name)] = _parse_compose_build(build, spec.get("image"))

    # every buildable service, in file order
    groups: dict[str, GroupRecord] = {DEFAULT_GROUP: {"targets": list(targets)}}
    return {"group": groups, "target": targets}


def parse_config(
    raw_config: dict[str, Any] | list[Any] | None,
    fmt: SourceFormat = "bake",
    *,
    origin: str | None = None,
) -> ConfigRecord:
    """Normalize a raw config document into a ConfigRecord (no filesystem work).

    Accepted forms:
      - bake:    {"group": {name: {"targets": [...]}}, "target": {name: {...}}}
      - compose: {"services": {name: {"build": "dir" | {...}, "image": ...}}}

    Bake file keys (cache-from, secret, output, no-cache, ...) are mapped to
    record keys and args/labels values are turned into strings. Compose
    services become targets; a `default` group lists them all.
    Empty documents give an empty config.
    """
    logger = get_app_logger()
    logger.trace(f"[parse_config] Parsing {fmt} ({type(raw_config).__name__})")

    if not raw_config:
        config: ConfigRecord = {"group": {}, "target": {}}
    elif not isinstance(raw_config, dict):
        xmsg = (
            f"Invalid top-level value: {type(raw_config).__name__} (expected object)"
        )
        raise TypeError(xmsg)
    elif fmt == "compose":
        config = _parse_compose(raw_config)
    else:
        config = _parse_bake(raw_config)

    if origin is not None:
        config["__meta__"] = {"origin": origin, "format": fmt}
    return config


# --- loading ----------------------------------------------------------------


def _validation_summary(summary: ValidationSummary, config_path: Path) -> None:
    """Pretty-print a validation summary using the standard log() interface."""
    logger = get_app_logger()
    mode = "strict mode" if summary.strict else "lenient mode"

    counts: list[str] = []
    if summary.errors:
        counts.append(f"{len(summary.errors)} error{plural(summary.errors)}")
    if summary.strict_warnings:
        counts.append(
            f"{len(summary.strict_warnings)} strict warning"
            f"{plural(summary.strict_warnings)}",
        )
    if summary.warnings:
        counts.append(f"{len(summary.warnings)} warning{plural(summary.warnings)}")
    counts_msg = f"\nFound {', '.join(counts)}." if counts else ""

    if not summary.valid:
        logger.error(
            "Failed to validate configuration file %s (%s).%s",
            config_path.name,
            mode,
            counts_msg,
        )
    elif counts:
        logger.warning(
            "Validated configuration file %s (%s) with warnings.%s",
            config_path.name,
            mode,
            counts_msg,
        )
    else:
        logger.debug("Validated %s (%s) successfully.", config_path.name, mode)

    if summary.errors:
        logger.error("\nErrors:\n  • %s", "\n  • ".join(summary.errors))
    if summary.strict_warnings:
        logger.error(
            "\nStrict warnings (treated as errors):\n  • %s",
            "\n  • ".join(summary.strict_warnings),
        )
    if summary.warnings:
        logger.warning(
            "\nWarnings (non-fatal):\n  • %s", "\n  • ".join(summary.warnings)
        )


def load_config(path: Path, *, strict: bool | None = None) -> ConfigRecord:
    """Load, validate and parse a single config file.

    Raises:
        FileNotFoundError: The file does not exist.
        ValueError: The file cannot be read, or fails validation.
    """
    raw, fmt = load_config_file(path)
    if raw is not None:
        summary = validate_config(raw, fmt, strict=strict)
        _validation_summary(summary, path)
        if not summary.valid:
            xmsg = f"Invalid configuration file: {path.name}"
            raise ValueError(xmsg)
    return parse_config(raw, fmt, origin=str(path))


def load_configs(
    paths: Iterable[Path],
    *,
    strict: bool | None = None,
) -> list[ConfigRecord]:
    """Load every file in `paths`, keeping their order (later files win)."""
    return [load_config(path, strict=strict) for path in paths]
