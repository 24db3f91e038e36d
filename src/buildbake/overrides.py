# src/buildbake/overrides.py
"""Parse `--set` style overrides into a per-target override table.

Grammar: ``<pattern>.<field>[.<subkey>][=<value>]``

The pattern is either an exact target name or a glob matched against every
known target name.
"""

import os
from collections.abc import Callable, Iterable

from apathetic_utils import cast_hint

from .config.config_types import ConfigRecord, OverrideTable, TargetRecord
from .constants import FALSE_VALUES, TRUE_VALUES
from .errors import (
    InvalidBooleanValueError,
    InvalidGlobPatternError,
    InvalidOverrideKeyError,
    PatternNoMatchError,
    UnknownOverrideFieldError,
)
from .logs import get_app_logger
from .utils import glob_match


# override field -> record key, for fields that accumulate one entry per --set
LIST_OVERRIDES: dict[str, str] = {
    "tags": "tags",
    "cache-from": "cache_from",
    "cache-to": "cache_to",
    "secrets": "secrets",
    "secret": "secrets",
    "ssh": "ssh",
    "platforms": "platforms",
    "platform": "platforms",
    "output": "outputs",
    "outputs": "outputs",
}

SCALAR_OVERRIDES: dict[str, str] = {
    "context": "context",
    "dockerfile": "dockerfile",
    "target": "target",
}

BOOL_OVERRIDES: dict[str, str] = {
    "no-cache": "no_cache",
    "pull": "pull",
}


def parse_bool(field: str, value: str) -> bool:
    """Parse a boolean override value; accepts 1/0, t/f and true/false."""
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise InvalidBooleanValueError(field, value)


def expand_targets(config: ConfigRecord, pattern: str) -> list[str]:
    """Return the target names addressed by `pattern`, sorted.

    An exact target name addresses only itself. Anything else is matched
    as a glob. An empty result is returned as-is; callers decide whether
    that is an error.

    Raises:
        InvalidGlobPatternError: If the glob is malformed.
    """
    if pattern in config["target"]:
        return [pattern]

    try:
        return sorted(name for name in config["target"] if glob_match(name, pattern))
    except ValueError as e:
        raise InvalidGlobPatternError(pattern, str(e)) from e


def _require_subkey(key_part: str, field: str, subkey: str | None) -> str:
    if subkey is None:
        msg = f"invalid key {key_part}, {field} requires name"
        raise InvalidOverrideKeyError(key_part, msg)
    return subkey


def _apply_override(  # noqa: PLR0911
    entry: TargetRecord,
    key_part: str,
    field: str,
    subkey: str | None,
    value: str | None,
    getenv: Callable[[str], str | None],
) -> None:
    record = cast_hint(dict[str, object], entry)

    if field == "args":
        name = _require_subkey(key_part, field, subkey)
        if value is None:
            # valueless form pulls from the environment, if set there
            value = getenv(name)
            if value is None:
                return
        args = cast_hint(dict[str, str], record.setdefault("args", {}))
        args[name] = value
        return

    # every other field needs a value; parse_overrides checks this up front
    assert value is not None  # noqa: S101

    if field == "labels":
        name = _require_subkey(key_part, field, subkey)
        labels = cast_hint(dict[str, str], record.setdefault("labels", {}))
        labels[name] = value
        return

    if field in SCALAR_OVERRIDES:
        record[SCALAR_OVERRIDES[field]] = value
        return

    if field in LIST_OVERRIDES:
        items = cast_hint(list[str], record.setdefault(LIST_OVERRIDES[field], []))
        items.append(value)
        return

    if field in BOOL_OVERRIDES:
        record[BOOL_OVERRIDES[field]] = parse_bool(field, value)
        return

    raise UnknownOverrideFieldError(field)


def parse_overrides(
    config: ConfigRecord,
    raw_overrides: Iterable[str],
    *,
    allow_unmatched: bool = False,
    getenv: Callable[[str], str | None] = os.getenv,
) -> OverrideTable:
    """Build the override table for `raw_overrides`, in order.

    Repeated overrides for the same target compose: scalars are replaced,
    list fields gain one entry each, args/labels gain one key each.

    Args:
        config: Merged config; supplies the target names patterns match.
        raw_overrides: Strings of the form pattern.field[.subkey][=value].
        allow_unmatched: Skip (with a warning) patterns that match no
            target instead of failing.
        getenv: Environment lookup for valueless `args` overrides.

    Raises:
        InvalidOverrideKeyError: Too few key components, or a missing value
            or subkey where one is required.
        UnknownOverrideFieldError: The field is not overridable.
        InvalidBooleanValueError: no-cache/pull got a non-boolean value.
        PatternNoMatchError: The pattern matched nothing (unless allowed).
        InvalidGlobPatternError: The pattern is not a valid glob.
    """
    logger = get_app_logger()
    table: OverrideTable = {}

    for raw in raw_overrides:
        key_part, sep, raw_value = raw.partition("=")
        value = raw_value if sep else None

        keys = key_part.split(".", 2)
        if len(keys) < 2:  # noqa: PLR2004
            msg = f"invalid override key {key_part}, expected target.name"
            raise InvalidOverrideKeyError(key_part, msg)

        pattern, field = keys[0], keys[1]
        subkey = keys[2] if len(keys) > 2 else None  # noqa: PLR2004
        if value is None and field != "args":
            msg = f"invalid override {raw}, expected target.name=value"
            raise InvalidOverrideKeyError(key_part, msg)

        names = expand_targets(config, pattern)
        if not names:
            if not allow_unmatched:
                raise PatternNoMatchError(pattern)
            logger.warning(
                "Override %r ignored: no target matches '%s'.", raw, pattern
            )
            continue

        logger.trace(f"[parse_overrides] {raw!r} → {names}")
        for name in names:
            entry = table.setdefault(name, {})
            _apply_override(entry, key_part, field, subkey, value, getenv)

    return table
