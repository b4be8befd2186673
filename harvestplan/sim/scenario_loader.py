"""Load planning snapshots from JSON scenario files."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from harvestplan.config import PlannerConfig
from harvestplan.errors import ScenarioError
from harvestplan.sim.snapshot import Snapshot, build_root_state
from harvestplan.sim.world_state import WorldState


@dataclass(frozen=True)
class ScenarioPaths:
    base_dir: Path = Path("scenarios")

    def scenario(self, name: str) -> Path:
        path = Path(name)
        if path.suffix != ".json":
            path = path.with_suffix(".json")
        if path.is_absolute() or path.exists():
            return path
        return self.base_dir / path


def list_scenarios(*, paths: ScenarioPaths | None = None) -> list[Path]:
    paths = paths or ScenarioPaths()
    if not paths.base_dir.exists():
        return []
    return sorted(paths.base_dir.glob("*.json"))


def load_scenario(path: Path) -> Snapshot:
    data = _load_json(path)
    try:
        return Snapshot.model_validate(data)
    except ValidationError as exc:
        raise ScenarioError(path, str(exc)) from exc


def load_root_state(path: Path, config: PlannerConfig | None = None) -> WorldState:
    return build_root_state(load_scenario(path), config)


def _load_json(path: Path) -> dict:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Missing scenario file: {path}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ScenarioError(path, f"malformed JSON ({exc.msg})") from exc
    if not isinstance(data, dict):
        raise ScenarioError(path, "top-level value must be an object")
    return data
