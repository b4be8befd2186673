"""Planner configuration with environment overrides."""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MAX_EXPANSIONS = 100_000

ENV_MAX_EXPANSIONS = "HARVESTPLAN_MAX_EXPANSIONS"
ENV_TIME_LIMIT = "HARVESTPLAN_TIME_LIMIT"
ENV_GROUP_ACTIONS = "HARVESTPLAN_GROUP_ACTIONS"

_TRUTHY = {"1", "true", "yes", "on"}


class PlannerConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    resources_weight: float = 2.0
    capacity_weight: float = 0.5
    # Negative so that states with a larger workforce are preferred.
    workers_weight: float = -10_000.0
    carry_capacity: int = Field(default=100, gt=0)
    worker_gold_cost: int = Field(default=400, ge=0)
    max_expansions: int = Field(default=DEFAULT_MAX_EXPANSIONS, gt=0)
    time_limit: float | None = Field(default=None, gt=0)
    group_actions: bool = False


def load_planner_config(overrides: dict[str, Any] | None = None) -> PlannerConfig:
    """Build a config from environment variables, then explicit overrides."""
    values: dict[str, Any] = {}
    max_expansions = os.getenv(ENV_MAX_EXPANSIONS)
    if max_expansions:
        values["max_expansions"] = max_expansions
    time_limit = os.getenv(ENV_TIME_LIMIT)
    if time_limit:
        values["time_limit"] = time_limit
    group_actions = os.getenv(ENV_GROUP_ACTIONS)
    if group_actions:
        values["group_actions"] = group_actions.lower() in _TRUTHY
    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value
    return PlannerConfig.model_validate(values)
