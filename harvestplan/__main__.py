"""Module entry point for `python -m harvestplan`."""

from __future__ import annotations

import argparse
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console

from harvestplan.app import run_planning
from harvestplan.db.plan_log import PLAN_LOG_NAME
from harvestplan.errors import ScenarioError
from harvestplan.logging_config import DEFAULT_LOG_LEVEL, setup_logging
from harvestplan.render.plan_player import run_plan_player
from harvestplan.render.plan_reader import read_plan_log
from harvestplan.render.plan_view import render_logged_plan, render_result
from harvestplan.sim.scenario_loader import ScenarioPaths, list_scenarios

DEFAULT_LOG_DIR = Path("plans")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    console = Console()

    if args.replay is not None:
        log_path = args.replay / PLAN_LOG_NAME
        if not log_path.exists():
            raise SystemExit(f"No plan log found in {args.replay}.")
        console.print(render_logged_plan(read_plan_log(log_path)))
        return 0

    if args.scenario is None:
        parser.error("a scenario is required unless --replay is given")

    paths = ScenarioPaths(base_dir=args.scenario_dir)
    scenario_path = paths.scenario(args.scenario)
    overrides = {
        "max_expansions": args.max_expansions,
        "time_limit": args.time_limit,
        "group_actions": True if args.group_actions else None,
    }
    try:
        run_dir, root, result = run_planning(
            scenario_path, args.log_dir, overrides=overrides
        )
    except FileNotFoundError as exc:
        raise SystemExit(_missing_scenario_message(exc, paths)) from exc
    except ScenarioError as exc:
        raise SystemExit(str(exc)) from exc
    except ValidationError as exc:
        raise SystemExit(f"Invalid planner configuration: {exc}") from exc

    console.print(render_result(result))
    console.print(f"Plan saved to {run_dir}")
    if args.view and result.found:
        run_plan_player(root, result.actions, scenario_name=scenario_path.stem)
    return 0 if result.found else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Plan resource gathering for a scenario snapshot."
    )
    parser.add_argument(
        "scenario",
        nargs="?",
        default=None,
        help="Scenario JSON file or name inside --scenario-dir.",
    )
    parser.add_argument(
        "--scenario-dir",
        type=Path,
        default=ScenarioPaths().base_dir,
        help="Directory searched for scenario names.",
    )
    parser.add_argument(
        "--max-expansions",
        type=int,
        default=None,
        help="Expansion budget before the search gives up.",
    )
    parser.add_argument(
        "--time-limit",
        type=float,
        default=None,
        help="Wall-clock budget in seconds before the search gives up.",
    )
    parser.add_argument(
        "--group-actions",
        action="store_true",
        help="Let co-located workers move, harvest and deposit together.",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=DEFAULT_LOG_DIR,
        help="Base directory for plan logs.",
    )
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level.",
    )
    parser.add_argument(
        "--replay",
        type=Path,
        default=None,
        help="Render a saved plan run folder instead of planning.",
    )
    parser.add_argument(
        "--view",
        action="store_true",
        help="Step through the plan in the interactive viewer.",
    )
    return parser


def _missing_scenario_message(exc: FileNotFoundError, paths: ScenarioPaths) -> str:
    available = [path.stem for path in list_scenarios(paths=paths)]
    if not available:
        return f"{exc}. No scenarios found in {paths.base_dir}."
    return f"{exc}. Available scenarios: {', '.join(available)}"


if __name__ == "__main__":
    raise SystemExit(main())
