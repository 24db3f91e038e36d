# src/buildbake/merge.py
"""Field-level merge rules shared by the config merger and the resolver."""

from collections.abc import Iterable

from apathetic_utils import cast_hint

from .config.config_types import (
    APPEND_LIST_FIELDS,
    BOOL_FIELDS,
    MAPPING_FIELDS,
    REPLACE_LIST_FIELDS,
    SCALAR_FIELDS,
    ConfigRecord,
    GroupRecord,
    TargetRecord,
)
from .logs import get_app_logger


def copy_target(target: TargetRecord) -> TargetRecord:
    """Return a copy whose lists and dicts are not shared with `target`."""
    copied: dict[str, object] = {}
    for key, value in target.items():
        if isinstance(value, list):
            copied[key] = list(value)
        elif isinstance(value, dict):
            copied[key] = dict(value)
        else:
            copied[key] = value
    return cast_hint(TargetRecord, copied)


def merge_targets(base: TargetRecord, incoming: TargetRecord) -> TargetRecord:
    """Merge `incoming` over `base`; neither input is modified.

    A field missing from `incoming` keeps the base value. When present:
      - context, dockerfile, target: replace
      - args, labels: key-wise union, incoming wins per key
      - tags, platforms, outputs, cache_to: replace wholesale
      - secrets, ssh, cache_from: append
      - no_cache, pull: replace (only when incoming sets them)
      - inherits: concatenate
    """
    result = copy_target(base)
    merged = cast_hint(dict[str, object], result)

    for key in SCALAR_FIELDS + BOOL_FIELDS:
        if key in incoming:
            merged[key] = incoming[key]  # type: ignore[literal-required]

    for key in MAPPING_FIELDS:
        if key in incoming:
            mapping = dict(cast_hint(dict[str, str], merged.get(key, {})))
            mapping.update(incoming[key])  # type: ignore[literal-required]
            merged[key] = mapping

    for key in REPLACE_LIST_FIELDS:
        if key in incoming:
            merged[key] = list(incoming[key])  # type: ignore[literal-required]

    for key in (*APPEND_LIST_FIELDS, "inherits"):
        if key in incoming:
            existing = cast_hint(list[str], merged.get(key, []))
            merged[key] = [*existing, *incoming[key]]  # type: ignore[literal-required]

    return result


def empty_config() -> ConfigRecord:
    return {"group": {}, "target": {}}


def merge_configs(c1: ConfigRecord, c2: ConfigRecord) -> ConfigRecord:
    """Merge the config parsed from a later file (`c2`) into `c1`.

    Groups present in both keep c1's members and gain c2's missing ones, in
    order. Targets present in both are combined with merge_targets().
    Returns a new record; provenance metadata is not carried over.
    """
    groups: dict[str, GroupRecord] = {
        name: {"targets": list(group["targets"])}
        for name, group in c1["group"].items()
    }
    for name, group in c2["group"].items():
        if name not in groups:
            groups[name] = {"targets": list(group["targets"])}
            continue
        members = groups[name]["targets"]
        for member in group["targets"]:
            if member not in members:
                members.append(member)

    targets: dict[str, TargetRecord] = {
        name: copy_target(target) for name, target in c1["target"].items()
    }
    for name, target in c2["target"].items():
        if name in targets:
            targets[name] = merge_targets(targets[name], target)
        else:
            targets[name] = copy_target(target)

    return {"group": groups, "target": targets}


def fold_configs(configs: Iterable[ConfigRecord]) -> ConfigRecord:
    """Left-fold every parsed file into one config snapshot."""
    logger = get_app_logger()
    acc = empty_config()
    for idx, cfg in enumerate(configs, start=1):
        origin = cfg.get("__meta__", {}).get("origin", f"config #{idx}")
        logger.trace(
            f"[fold_configs] Merging {origin}: {len(cfg['group'])} group(s),"
            f" {len(cfg['target'])} target(s)"
        )
        acc = merge_configs(acc, cfg)
    return acc
