"""Read plan logs back into actions and a summary."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from harvestplan.sim.actions import StripsAction, action_from_dict


@dataclass
class LoggedPlan:
    metadata: dict[str, Any] = field(default_factory=dict)
    actions: list[StripsAction] = field(default_factory=list)
    status: str | None = None
    cost: float | None = None
    stats: dict[str, Any] = field(default_factory=dict)


def read_plan_log(path: Path) -> LoggedPlan:
    logged = LoggedPlan()
    indexed: list[tuple[int, StripsAction]] = []
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            record = _parse_record(line)
            if not record:
                continue
            kind = record.get("type")
            if kind == "header":
                logged.metadata = record.get("metadata", {})
            elif kind == "action":
                payload = record.get("action")
                if payload is None:
                    continue
                action = _parse_action(payload)
                if action is None:
                    continue
                indexed.append((record.get("index", len(indexed)), action))
            elif kind == "result":
                logged.status = record.get("status")
                logged.cost = record.get("cost")
                logged.stats = record.get("stats", {})
    logged.actions = [
        action for _, action in sorted(indexed, key=lambda item: item[0])
    ]
    return logged


def _parse_record(line: str) -> dict | None:
    try:
        return json.loads(line)
    except json.JSONDecodeError:
        return None


def _parse_action(payload: dict) -> StripsAction | None:
    try:
        return action_from_dict(payload)
    except (KeyError, TypeError, ValueError):
        return None
