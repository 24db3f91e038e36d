# tests/5_core/test_resolve_target.py

import pytest

import buildbake.errors as mod_errors
import buildbake.targets as mod_targets
from tests.utils import make_config


def test_defaults_fill_context_and_dockerfile() -> None:
    # --- execute ---
    result = mod_targets.resolve_target(make_config({"app": {}}), "app")

    # --- verify ---
    assert result == {"context": ".", "dockerfile": "Dockerfile"}


def test_explicit_empty_context_is_not_defaulted() -> None:
    result = mod_targets.resolve_target(make_config({"app": {"context": ""}}), "app")
    assert result["context"] == ""


def test_own_fields_beat_inherited_and_later_parents_win() -> None:
    # --- setup ---
    config = make_config(
        {
            "base": {"dockerfile": "base.Dockerfile", "args": {"A": "base", "B": "base"}},
            "extra": {"args": {"B": "extra"}, "tags": ["extra:1"]},
            "app": {"inherits": ["base", "extra"], "args": {"A": "app"}},
        }
    )

    # --- execute ---
    result = mod_targets.resolve_target(config, "app")

    # --- verify ---
    assert result == {
        "context": ".",
        "dockerfile": "base.Dockerfile",
        "args": {"A": "app", "B": "extra"},
        "tags": ["extra:1"],
    }
    assert "inherits" not in result


def test_overrides_beat_everything() -> None:
    # --- setup ---
    config = make_config(
        {
            "base": {"dockerfile": "base.Dockerfile"},
            "app": {"inherits": ["base"], "dockerfile": "app.Dockerfile"},
        }
    )
    overrides = {"app": {"dockerfile": "override.Dockerfile"}}

    # --- execute ---
    result = mod_targets.resolve_target(config, "app", overrides)

    # --- verify ---
    assert result["dockerfile"] == "override.Dockerfile"


def test_ancestor_override_shows_through_unless_child_sets_field() -> None:
    # --- setup ---
    config = make_config(
        {
            "webDEP": {"context": "./dep", "args": {"VAR_INHERITED": "webDEP"}},
            "webapp": {"inherits": ["webDEP"], "dockerfile": "Dockerfile.webapp"},
        }
    )
    overrides = {"webDEP": {"args": {"VAR_INHERITED": "override"}, "dockerfile": "x"}}

    # --- execute ---
    result = mod_targets.resolve_target(config, "webapp", overrides)

    # --- verify ---
    assert result["args"] == {"VAR_INHERITED": "override"}
    assert result["context"] == "./dep"
    # webapp sets dockerfile itself, so the ancestor's override is hidden
    assert result["dockerfile"] == "Dockerfile.webapp"


def test_append_fields_accumulate_down_the_chain() -> None:
    # --- setup ---
    config = make_config(
        {
            "base": {"secrets": ["id=a"], "tags": ["base"]},
            "app": {"inherits": ["base"], "secrets": ["id=b", "id=a"], "tags": ["app"]},
        }
    )

    # --- execute ---
    result = mod_targets.resolve_target(config, "app")

    # --- verify ---
    assert result["secrets"] == ["id=a", "id=b"]
    assert result["tags"] == ["app"]


def test_missing_target_raises() -> None:
    with pytest.raises(mod_errors.TargetNotFoundError, match="failed to find target x"):
        mod_targets.resolve_target(make_config({"app": {}}), "x")


def test_missing_parent_raises() -> None:
    # --- setup ---
    config = make_config({"app": {"inherits": ["ghost"]}})

    # --- execute and verify ---
    with pytest.raises(mod_errors.TargetNotFoundError) as exc_info:
        mod_targets.resolve_target(config, "app")
    assert exc_info.value.name == "ghost"


def test_inherits_cycle_terminates() -> None:
    # --- setup ---
    config = make_config(
        {
            "a": {"inherits": ["b"], "tags": ["a"], "args": {"FROM_A": "1"}},
            "b": {"inherits": ["a"], "args": {"FROM_B": "1"}, "platforms": ["p"]},
        }
    )

    # --- execute ---
    result = mod_targets.resolve_target(config, "a")

    # --- verify ---
    assert result == {
        "context": ".",
        "dockerfile": "Dockerfile",
        "tags": ["a"],
        "args": {"FROM_A": "1", "FROM_B": "1"},
        "platforms": ["p"],
    }


def test_self_inheritance_terminates() -> None:
    config = make_config({"a": {"inherits": ["a"], "target": "stage"}})
    result = mod_targets.resolve_target(config, "a")
    assert result["target"] == "stage"


def test_diamond_ancestor_contributes_once() -> None:
    """The second path to a shared ancestor is cut off."""
    # --- setup ---
    config = make_config(
        {
            "root": {"secrets": ["id=root"], "args": {"R": "root"}},
            "left": {"inherits": ["root"], "args": {"L": "left"}},
            "right": {"inherits": ["root"], "args": {"R": "right"}},
            "leaf": {"inherits": ["left", "right"]},
        }
    )

    # --- execute ---
    result = mod_targets.resolve_target(config, "leaf")

    # --- verify ---
    assert result["secrets"] == ["id=root"]
    assert result["args"] == {"R": "right", "L": "left"}


def test_resolution_does_not_mutate_config() -> None:
    # --- setup ---
    config = make_config(
        {
            "base": {"tags": ["base"], "args": {"A": "1"}},
            "app": {"inherits": ["base"], "args": {"B": "2"}},
        }
    )
    overrides = {"app": {"tags": ["o"]}}

    # --- execute ---
    mod_targets.resolve_target(config, "app", overrides)

    # --- verify ---
    assert config["target"]["base"] == {"tags": ["base"], "args": {"A": "1"}}
    assert config["target"]["app"] == {"inherits": ["base"], "args": {"B": "2"}}
    assert overrides == {"app": {"tags": ["o"]}}
