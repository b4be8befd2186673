import pytest
from pydantic import ValidationError

from harvestplan.config import (
    DEFAULT_MAX_EXPANSIONS,
    ENV_GROUP_ACTIONS,
    ENV_MAX_EXPANSIONS,
    ENV_TIME_LIMIT,
    PlannerConfig,
    load_planner_config,
)


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (ENV_MAX_EXPANSIONS, ENV_TIME_LIMIT, ENV_GROUP_ACTIONS):
        monkeypatch.delenv(name, raising=False)
    config = load_planner_config()

    assert config == PlannerConfig()
    assert config.max_expansions == DEFAULT_MAX_EXPANSIONS
    assert config.time_limit is None
    assert not config.group_actions
    assert config.workers_weight < 0


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_MAX_EXPANSIONS, "50")
    monkeypatch.setenv(ENV_TIME_LIMIT, "2.5")
    monkeypatch.setenv(ENV_GROUP_ACTIONS, "yes")
    config = load_planner_config()

    assert config.max_expansions == 50
    assert config.time_limit == 2.5
    assert config.group_actions


def test_explicit_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_MAX_EXPANSIONS, "50")
    config = load_planner_config({"max_expansions": 7, "time_limit": None})

    assert config.max_expansions == 7
    assert config.time_limit is None


def test_invalid_values_are_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_MAX_EXPANSIONS, "lots")
    with pytest.raises(ValidationError):
        load_planner_config()

    monkeypatch.delenv(ENV_MAX_EXPANSIONS)
    with pytest.raises(ValidationError):
        load_planner_config({"carry_capacity": 0})
    with pytest.raises(ValidationError):
        load_planner_config({"heuristic": "fast"})
