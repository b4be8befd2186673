"""Application entry for planning a scenario."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from harvestplan.config import load_planner_config
from harvestplan.db.plan_log import new_run_dir, write_plan_log
from harvestplan.sim.planner import PlanResult, Planner
from harvestplan.sim.scenario_loader import load_root_state
from harvestplan.sim.world_state import WorldState

logger = logging.getLogger(__name__)


def plan_scenario(
    scenario_path: Path, *, overrides: dict[str, Any] | None = None
) -> tuple[WorldState, PlanResult]:
    config = load_planner_config(overrides)
    root = load_root_state(scenario_path, config)
    result = Planner(config).plan(root)
    return root, result


def run_planning(
    scenario_path: Path,
    base_dir: Path,
    *,
    overrides: dict[str, Any] | None = None,
) -> tuple[Path, WorldState, PlanResult]:
    root, result = plan_scenario(scenario_path, overrides=overrides)
    run_dir = new_run_dir(base_dir, scenario_path.stem)
    log_path = write_plan_log(
        run_dir,
        result,
        metadata={
            "run_id": run_dir.name,
            "scenario": str(scenario_path),
            "required_gold": root.goal.required_gold,
            "required_wood": root.goal.required_wood,
            "workers": len(root.workers),
            "config": root.config.model_dump(),
        },
    )
    logger.info("Plan log written to %s", log_path)
    return run_dir, root, result
