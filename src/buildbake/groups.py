# src/buildbake/groups.py

from .config.config_types import ConfigRecord
from .logs import get_app_logger


def _expand(config: ConfigRecord, name: str, visited: set[str]) -> list[str]:
    logger = get_app_logger()
    if name in visited:
        # cycles (and repeated subgroups) are cut off silently
        logger.trace(f"[resolve_group] {name!r} already expanded, skipping")
        return []

    group = config["group"].get(name)
    if group is None:
        return [name]

    visited.add(name)
    names: list[str] = []
    for member in group["targets"]:
        names.extend(_expand(config, member, visited))
    return names


def resolve_group(config: ConfigRecord, name: str) -> list[str]:
    """Expand a group (or a plain target name) into target names.

    Nested groups are unrolled depth-first in declared order. A name that is
    not a group is returned as-is, whether or not a target exists for it.
    """
    names = _expand(config, name, set())
    get_app_logger().trace(f"[resolve_group] {name!r} → {names}")
    return names
