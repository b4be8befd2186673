"""Planning core: world snapshots, STRIPS actions and the search driver."""

from harvestplan.sim.actions import (
    ActionKind,
    BuildWorkerAction,
    DepositAction,
    GroupDepositAction,
    GroupHarvestAction,
    GroupMoveAction,
    HarvestAction,
    MoveAction,
    StripsAction,
    action_cost,
    apply_action,
    describe,
    preconditions_met,
    to_commands,
)
from harvestplan.sim.commands import Command, CommandKind
from harvestplan.sim.planner import (
    PlanResult,
    PlanStatus,
    Planner,
    simulate_plan,
    validate_plan,
)
from harvestplan.sim.position import Direction, Position
from harvestplan.sim.resources import Resource, ResourceKind
from harvestplan.sim.snapshot import Snapshot, build_root_state
from harvestplan.sim.worker import Worker
from harvestplan.sim.world_state import Goal, Townhall, WorldState

__all__ = [
    "ActionKind",
    "BuildWorkerAction",
    "Command",
    "CommandKind",
    "DepositAction",
    "Direction",
    "Goal",
    "GroupDepositAction",
    "GroupHarvestAction",
    "GroupMoveAction",
    "HarvestAction",
    "MoveAction",
    "PlanResult",
    "PlanStatus",
    "Planner",
    "Position",
    "Resource",
    "ResourceKind",
    "Snapshot",
    "StripsAction",
    "Townhall",
    "Worker",
    "WorldState",
    "action_cost",
    "apply_action",
    "build_root_state",
    "describe",
    "preconditions_met",
    "simulate_plan",
    "to_commands",
    "validate_plan",
]
