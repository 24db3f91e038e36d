# src/buildbake/resolve.py

from collections.abc import Iterable

from apathetic_utils import plural

from .config.config_types import ConfigRecord, TargetRecord
from .groups import resolve_group
from .logs import get_app_logger
from .merge import fold_configs
from .overrides import parse_overrides
from .targets import resolve_target


def read_targets(
    configs: Iterable[ConfigRecord],
    names: Iterable[str],
    overrides: Iterable[str] = (),
    *,
    allow_unmatched: bool = False,
) -> dict[str, TargetRecord]:
    """Resolve the requested targets and groups against parsed config files.

    `configs` are merged left to right, so later files win. Each name in
    `names` is expanded through the groups; every resulting target is
    resolved once, in first-requested order.

    Nothing is returned on failure: the first error propagates.
    """
    logger = get_app_logger()
    config = fold_configs(configs)
    table = parse_overrides(config, overrides, allow_unmatched=allow_unmatched)

    resolved: dict[str, TargetRecord] = {}
    for requested in names:
        for name in resolve_group(config, requested):
            if name in resolved:
                continue
            resolved[name] = resolve_target(config, name, table)

    logger.debug(
        "Resolved %d target%s: %s",
        len(resolved),
        plural(resolved),
        ", ".join(f"'{name}'" for name in resolved),
    )
    return resolved
