# src/buildbake/targets.py

from collections.abc import Mapping

from .config.config_types import ConfigRecord, TargetRecord
from .constants import DEFAULT_CONTEXT, DEFAULT_DOCKERFILE
from .errors import TargetNotFoundError
from .logs import get_app_logger
from .merge import merge_targets
from .normalize import normalize_target


def default_target() -> TargetRecord:
    """Starting point of every resolution: nothing set."""
    return {}


def _resolve(
    config: ConfigRecord,
    name: str,
    visited: set[str],
    overrides: Mapping[str, TargetRecord],
) -> TargetRecord | None:
    logger = get_app_logger()
    if name in visited:
        # Cycles and diamonds stop here; whatever was gathered before the
        # repeat is what the caller gets.
        logger.trace(f"[resolve_target] {name!r} already visited, skipping")
        return None
    visited.add(name)

    own = config["target"].get(name)
    if own is None:
        raise TargetNotFoundError(name)

    inherited = default_target()
    for parent in own.get("inherits", []):
        resolved = _resolve(config, parent, visited, overrides)
        if resolved is not None:
            inherited = merge_targets(inherited, resolved)

    own_fields: TargetRecord = {k: v for k, v in own.items() if k != "inherits"}  # type: ignore[assignment]
    result = merge_targets(default_target(), inherited)
    result = merge_targets(result, own_fields)
    result = merge_targets(result, overrides.get(name, {}))
    return normalize_target(result)


def resolve_target(
    config: ConfigRecord,
    name: str,
    overrides: Mapping[str, TargetRecord] | None = None,
) -> TargetRecord:
    """Resolve one target through its inherits chain.

    Precedence, lowest to highest: defaults, inherited targets (later
    entries in `inherits` win), the target's own fields, its overrides.
    Ancestors are resolved the same way, so an override addressed at an
    ancestor shows through wherever a descendant does not set the field
    itself. context and dockerfile fall back to "." and "Dockerfile".

    Raises:
        TargetNotFoundError: If `name` or any ancestor is not defined.
    """
    result = _resolve(config, name, set(), overrides or {})
    # a fresh visited set means the top level is never a repeat
    assert result is not None  # noqa: S101

    result.setdefault("context", DEFAULT_CONTEXT)
    result.setdefault("dockerfile", DEFAULT_DOCKERFILE)
    get_app_logger().trace(f"[resolve_target] {name!r} → {result}")
    return result
