# tests/5_core/test_merge_targets.py

import buildbake.merge as mod_merge
from tests.utils import make_target


def test_unset_fields_keep_base_values() -> None:
    # --- setup ---
    base = make_target(context="./app", tags=["app:1"], no_cache=True)
    incoming = make_target(dockerfile="Dockerfile.dev")

    # --- execute ---
    result = mod_merge.merge_targets(base, incoming)

    # --- verify ---
    assert result == {
        "context": "./app",
        "dockerfile": "Dockerfile.dev",
        "tags": ["app:1"],
        "no_cache": True,
    }


def test_scalars_and_replace_lists_are_replaced() -> None:
    # --- setup ---
    base = make_target(
        context="a",
        target="build",
        tags=["t1"],
        platforms=["linux/amd64"],
        outputs=["type=docker"],
        cache_to=["type=inline"],
    )
    incoming = make_target(
        context="b",
        target="final",
        tags=["t2"],
        platforms=["linux/arm64"],
        outputs=["type=local,dest=out"],
        cache_to=["type=registry"],
    )

    # --- execute ---
    result = mod_merge.merge_targets(base, incoming)

    # --- verify ---
    assert result == incoming


def test_append_lists_are_concatenated() -> None:
    # --- setup ---
    base = make_target(secrets=["id=a"], ssh=["default"], cache_from=["c1"])
    incoming = make_target(secrets=["id=b"], ssh=["other"], cache_from=["c2"])

    # --- execute ---
    result = mod_merge.merge_targets(base, incoming)

    # --- verify ---
    assert result["secrets"] == ["id=a", "id=b"]
    assert result["ssh"] == ["default", "other"]
    assert result["cache_from"] == ["c1", "c2"]


def test_mappings_union_with_incoming_winning() -> None:
    # --- setup ---
    base = make_target(args={"A": "1", "B": "2"}, labels={"x": "base"})
    incoming = make_target(args={"B": "20", "C": "3"}, labels={"x": "new"})

    # --- execute ---
    result = mod_merge.merge_targets(base, incoming)

    # --- verify ---
    assert result["args"] == {"A": "1", "B": "20", "C": "3"}
    assert result["labels"] == {"x": "new"}


def test_explicit_empty_values_still_replace() -> None:
    """An empty list or empty string is a value, not 'unset'."""
    # --- setup ---
    base = make_target(tags=["t1"], context="./app", args={"A": "1"})
    incoming = make_target(tags=[], context="", args={"A": ""})

    # --- execute ---
    result = mod_merge.merge_targets(base, incoming)

    # --- verify ---
    assert result["tags"] == []
    assert result["context"] == ""
    assert result["args"] == {"A": ""}


def test_booleans_only_replace_when_set() -> None:
    # --- setup ---
    base = make_target(no_cache=True, pull=True)

    # --- execute ---
    kept = mod_merge.merge_targets(base, make_target())
    cleared = mod_merge.merge_targets(base, make_target(no_cache=False))

    # --- verify ---
    assert kept == {"no_cache": True, "pull": True}
    assert cleared == {"no_cache": False, "pull": True}


def test_inherits_are_concatenated() -> None:
    # --- execute ---
    result = mod_merge.merge_targets(
        make_target(inherits=["a"]), make_target(inherits=["b"])
    )

    # --- verify ---
    assert result["inherits"] == ["a", "b"]


def test_inputs_are_not_mutated() -> None:
    # --- setup ---
    base = make_target(tags=["t1"], args={"A": "1"}, secrets=["s1"])
    incoming = make_target(args={"B": "2"}, secrets=["s2"])

    # --- execute ---
    result = mod_merge.merge_targets(base, incoming)
    result["tags"].append("mutated")
    result["args"]["Z"] = "z"

    # --- verify ---
    assert base == {"tags": ["t1"], "args": {"A": "1"}, "secrets": ["s1"]}
    assert incoming == {"args": {"B": "2"}, "secrets": ["s2"]}
