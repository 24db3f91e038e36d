# tests/5_core/test_merge_configs.py

import buildbake.merge as mod_merge
from tests.utils import make_config


def test_groups_keep_order_and_gain_new_members() -> None:
    # --- setup ---
    c1 = make_config(groups={"default": ["db", "webapp"]})
    c2 = make_config(groups={"default": ["webapp", "newservice"], "extra": ["x"]})

    # --- execute ---
    result = mod_merge.merge_configs(c1, c2)

    # --- verify ---
    assert result["group"] == {
        "default": {"targets": ["db", "webapp", "newservice"]},
        "extra": {"targets": ["x"]},
    }


def test_targets_in_both_are_merged_field_by_field() -> None:
    # --- setup ---
    c1 = make_config({"webapp": {"context": "./dir", "args": {"buildno": "1"}}})
    c2 = make_config(
        {
            "webapp": {"args": {"buildno2": "12"}},
            "newservice": {"context": "."},
        }
    )

    # --- execute ---
    result = mod_merge.merge_configs(c1, c2)

    # --- verify ---
    assert result["target"] == {
        "webapp": {"context": "./dir", "args": {"buildno": "1", "buildno2": "12"}},
        "newservice": {"context": "."},
    }


def test_merge_configs_drops_meta_and_does_not_mutate() -> None:
    # --- setup ---
    c1 = make_config({"app": {"tags": ["a"]}}, {"g": ["app"]}, origin="one.json")
    c2 = make_config({"app": {"tags": ["b"]}}, {"g": ["other"]}, origin="two.json")

    # --- execute ---
    result = mod_merge.merge_configs(c1, c2)

    # --- verify ---
    assert "__meta__" not in result
    assert c1["group"]["g"]["targets"] == ["app"]
    assert c1["target"]["app"]["tags"] == ["a"]
    assert result["target"]["app"]["tags"] == ["b"]


def test_fold_configs_later_files_win() -> None:
    # --- setup ---
    configs = [
        make_config({"app": {"dockerfile": "one"}}),
        make_config({"app": {"dockerfile": "two"}}),
        make_config({"app": {"dockerfile": "three"}}),
    ]

    # --- execute ---
    result = mod_merge.fold_configs(configs)

    # --- verify ---
    assert result["target"]["app"]["dockerfile"] == "three"


def test_fold_configs_of_nothing_is_empty() -> None:
    assert mod_merge.fold_configs([]) == {"group": {}, "target": {}}
