import json
from datetime import datetime, timezone
from pathlib import Path

from harvestplan.db.plan_log import PLAN_LOG_NAME, new_run_dir, write_plan_log
from harvestplan.render.plan_reader import read_plan_log
from harvestplan.sim.planner import Planner
from harvestplan.sim.snapshot import Snapshot, build_root_state

STARTED = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


def test_run_dir_is_named_after_start_and_scenario(tmp_path: Path) -> None:
    run_dir = new_run_dir(tmp_path / "plans", "small", started=STARTED)

    assert run_dir == tmp_path / "plans" / "20261019-120000-small"
    assert run_dir.is_dir()


def test_plan_log_records(tmp_path: Path) -> None:
    run_dir = new_run_dir(tmp_path, "single", started=STARTED)
    result = Planner().plan(_root(required_gold=100))
    log_path = write_plan_log(run_dir, result, metadata={"run_id": run_dir.name})

    with log_path.open("r", encoding="utf-8") as handle:
        records = [json.loads(line) for line in handle]

    assert log_path == run_dir / PLAN_LOG_NAME
    assert [record["type"] for record in records] == [
        "header",
        "action",
        "action",
        "action",
        "action",
        "result",
    ]
    assert records[0]["metadata"] == {"run_id": "20261019-120000-single"}
    assert records[1]["action"]["kind"] == "MOVE"
    assert records[-1]["status"] == "found"
    assert records[-1]["cost"] == 4.0
    assert records[-1]["steps"] == 4
    assert records[-1]["stats"] == result.stats.to_dict()


def test_plan_log_reads_back(tmp_path: Path) -> None:
    run_dir = new_run_dir(tmp_path, "single", started=STARTED)
    result = Planner().plan(_root(required_gold=100))
    log_path = write_plan_log(run_dir, result, metadata={"run_id": "run"})
    with log_path.open("a", encoding="utf-8") as handle:
        handle.write("not json\n")

    logged = read_plan_log(log_path)

    assert logged.metadata == {"run_id": "run"}
    assert logged.actions == result.actions
    assert logged.status == "found"
    assert logged.cost == 4.0
    assert logged.stats["expanded"] == result.stats.expanded


def test_incomplete_action_records_are_skipped(tmp_path: Path) -> None:
    run_dir = new_run_dir(tmp_path, "single", started=STARTED)
    result = Planner().plan(_root(required_gold=100))
    log_path = write_plan_log(run_dir, result)
    with log_path.open("a", encoding="utf-8") as handle:
        for payload in (
            {"kind": "MOVE", "worker_id": 2},
            {"kind": "TELEPORT"},
            {"kind": "MOVE", "worker_id": 2, "origin": 7, "target": 8},
        ):
            record = {"type": "action", "index": 9, "action": payload}
            handle.write(json.dumps(record) + "\n")

    logged = read_plan_log(log_path)

    assert logged.actions == result.actions


def test_failed_plan_logs_no_actions(tmp_path: Path) -> None:
    run_dir = new_run_dir(tmp_path, "single", started=STARTED)
    log_path = write_plan_log(run_dir, Planner().plan(_root(required_gold=300)))

    logged = read_plan_log(log_path)
    assert logged.actions == []
    assert logged.status == "unreachable"
    assert logged.metadata == {}


def _root(*, required_gold: int):
    return build_root_state(
        Snapshot.model_validate(
            {
                "units": [
                    {"id": 1, "kind": "townhall", "x": 0, "y": 0},
                    {"id": 2, "kind": "worker", "x": 0, "y": 0},
                ],
                "resources": [
                    {"id": 10, "kind": "gold", "x": 2, "y": 0, "amount": 100}
                ],
                "required_gold": required_gold,
            }
        )
    )
