"""Plan logs: one JSONL file per planning run."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from harvestplan.sim.actions import StripsAction, action_to_dict
from harvestplan.sim.planner import PlanResult

SCHEMA_VERSION = 1
PLAN_LOG_NAME = "plan.jsonl"
RUN_ID_FORMAT = "%Y%m%d-%H%M%S"


def new_run_dir(
    base_dir: Path, scenario_name: str, *, started: datetime | None = None
) -> Path:
    """Create ``<base_dir>/<utc start>-<scenario>`` for one run."""
    started = started or datetime.now(timezone.utc)
    run_dir = base_dir / f"{started.strftime(RUN_ID_FORMAT)}-{scenario_name}"
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def write_plan_log(
    run_dir: Path, result: PlanResult, metadata: dict[str, Any] | None = None
) -> Path:
    """Write the header, every planned action and the search result.

    The log is rewritten as a whole; a run folder holds a single plan.
    """
    records = [
        _record("header", metadata=metadata or {}),
        *(
            _action_record(index, action)
            for index, action in enumerate(result.actions)
        ),
        _record("result", **result.to_dict()),
    ]
    log_path = run_dir / PLAN_LOG_NAME
    with log_path.open("w", encoding="utf-8") as handle:
        for record in records:
            handle.write(json.dumps(record))
            handle.write("\n")
    return log_path


def _action_record(index: int, action: StripsAction) -> dict[str, Any]:
    return _record("action", index=index, action=action_to_dict(action))


def _record(kind: str, **fields: Any) -> dict[str, Any]:
    return {"type": kind, "schema_version": SCHEMA_VERSION, **fields}
