# src/buildbake/normalize.py

from collections.abc import Iterable

from apathetic_utils import cast_hint

from .config.config_types import LIST_FIELDS, TargetRecord


def remove_dupes(items: Iterable[str]) -> list[str]:
    """Drop repeated entries, keeping the first occurrence of each."""
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


def normalize_target(target: TargetRecord) -> TargetRecord:
    """Return a copy of `target` with every list field deduplicated.

    Unset fields stay unset. Applying it twice changes nothing.
    """
    result = cast_hint(dict[str, object], dict(target))
    for key in LIST_FIELDS:
        if key in result:
            result[key] = remove_dupes(cast_hint(list[str], result[key]))
    return cast_hint(TargetRecord, result)
