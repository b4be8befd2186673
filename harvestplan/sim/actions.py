"""STRIPS actions: preconditions, effects, costs and command translation.

The family is closed. Every operation below dispatches over the same set of
action types, so adding a variant means extending each function here.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

from harvestplan.sim.commands import Command, compound_move, deposit, gather, produce
from harvestplan.sim.position import Position
from harvestplan.sim.resources import ResourceKind
from harvestplan.sim.worker import Worker

if TYPE_CHECKING:
    from harvestplan.sim.world_state import WorldState


class ActionKind(str, Enum):
    MOVE = "MOVE"
    HARVEST = "HARVEST"
    DEPOSIT = "DEPOSIT"
    BUILD_WORKER = "BUILD_WORKER"
    GROUP_MOVE = "GROUP_MOVE"
    GROUP_HARVEST = "GROUP_HARVEST"
    GROUP_DEPOSIT = "GROUP_DEPOSIT"


@dataclass(frozen=True)
class MoveAction:
    kind: ClassVar[ActionKind] = ActionKind.MOVE

    worker_id: int
    origin: Position
    target: Position


@dataclass(frozen=True)
class HarvestAction:
    kind: ClassVar[ActionKind] = ActionKind.HARVEST

    worker_id: int
    resource_id: int
    resource_kind: ResourceKind
    resource_position: Position


@dataclass(frozen=True)
class DepositAction:
    kind: ClassVar[ActionKind] = ActionKind.DEPOSIT

    worker_id: int
    townhall_position: Position


@dataclass(frozen=True)
class BuildWorkerAction:
    kind: ClassVar[ActionKind] = ActionKind.BUILD_WORKER

    townhall_id: int
    template_id: int


@dataclass(frozen=True)
class GroupMoveAction:
    kind: ClassVar[ActionKind] = ActionKind.GROUP_MOVE

    worker_ids: tuple[int, ...]
    origin: Position
    target: Position


@dataclass(frozen=True)
class GroupHarvestAction:
    kind: ClassVar[ActionKind] = ActionKind.GROUP_HARVEST

    worker_ids: tuple[int, ...]
    resource_id: int
    resource_kind: ResourceKind
    resource_position: Position


@dataclass(frozen=True)
class GroupDepositAction:
    kind: ClassVar[ActionKind] = ActionKind.GROUP_DEPOSIT

    worker_ids: tuple[int, ...]
    townhall_position: Position


StripsAction = (
    MoveAction
    | HarvestAction
    | DepositAction
    | BuildWorkerAction
    | GroupMoveAction
    | GroupHarvestAction
    | GroupDepositAction
)

ACTION_TYPES: dict[ActionKind, type] = {
    ActionKind.MOVE: MoveAction,
    ActionKind.HARVEST: HarvestAction,
    ActionKind.DEPOSIT: DepositAction,
    ActionKind.BUILD_WORKER: BuildWorkerAction,
    ActionKind.GROUP_MOVE: GroupMoveAction,
    ActionKind.GROUP_HARVEST: GroupHarvestAction,
    ActionKind.GROUP_DEPOSIT: GroupDepositAction,
}


def preconditions_met(action: StripsAction, state: WorldState) -> bool:
    """Return True if ``action`` may be applied to ``state``."""
    if isinstance(action, MoveAction):
        return _can_move(state, action.worker_id, action.origin, action.target)
    if isinstance(action, HarvestAction):
        return _can_harvest(state, action.worker_id, action.resource_id)
    if isinstance(action, DepositAction):
        return _can_deposit(state, action.worker_id)
    if isinstance(action, BuildWorkerAction):
        return (
            state.stockpile_gold >= state.config.worker_gold_cost
            and state.remaining_food > 0
        )
    if isinstance(action, GroupMoveAction):
        return _is_group(action.worker_ids) and all(
            _can_move(state, worker_id, action.origin, action.target)
            for worker_id in action.worker_ids
        )
    if isinstance(action, GroupHarvestAction):
        return _is_group(action.worker_ids) and all(
            _can_harvest(state, worker_id, action.resource_id)
            for worker_id in action.worker_ids
        )
    if isinstance(action, GroupDepositAction):
        return _is_group(action.worker_ids) and all(
            _can_deposit(state, worker_id) for worker_id in action.worker_ids
        )
    raise TypeError(f"Unknown action type: {type(action).__name__}")


def apply_action(action: StripsAction, state: WorldState) -> None:
    """Apply ``action`` to ``state`` in place and record it in the plan.

    ``state`` must be a fresh clone whose preconditions were already checked.
    """
    if isinstance(action, MoveAction):
        state.workers[action.worker_id].position = action.target
    elif isinstance(action, HarvestAction):
        _harvest(state, action.worker_id, action.resource_id)
    elif isinstance(action, DepositAction):
        _deposit(state, action.worker_id)
    elif isinstance(action, BuildWorkerAction):
        state.stockpile_gold -= state.config.worker_gold_cost
        state.remaining_food -= 1
        worker_id = state.next_worker_id()
        state.workers[worker_id] = Worker(
            worker_id=worker_id, position=state.townhall.position
        )
    elif isinstance(action, GroupMoveAction):
        for worker_id in action.worker_ids:
            state.workers[worker_id].position = action.target
    elif isinstance(action, GroupHarvestAction):
        for worker_id in sorted(action.worker_ids):
            _harvest(state, worker_id, action.resource_id)
    elif isinstance(action, GroupDepositAction):
        for worker_id in action.worker_ids:
            _deposit(state, worker_id)
    else:
        raise TypeError(f"Unknown action type: {type(action).__name__}")
    state.record(action)


def action_cost(action: StripsAction) -> float:
    if isinstance(action, (MoveAction, GroupMoveAction)):
        return action.origin.distance_to(action.target)
    return 0.0


def to_commands(
    action: StripsAction, live_positions: dict[int, Position]
) -> list[Command]:
    """Translate a planned action into simulation commands.

    Gather and deposit commands are direction based, so they use the live
    position of each worker rather than the planned one.
    """
    if isinstance(action, MoveAction):
        return [compound_move(action.worker_id, action.target.x, action.target.y)]
    if isinstance(action, HarvestAction):
        live = live_positions[action.worker_id]
        return [gather(action.worker_id, live.direction_to(action.resource_position))]
    if isinstance(action, DepositAction):
        live = live_positions[action.worker_id]
        return [deposit(action.worker_id, live.direction_to(action.townhall_position))]
    if isinstance(action, BuildWorkerAction):
        return [produce(action.townhall_id, action.template_id)]
    if isinstance(action, GroupMoveAction):
        return [
            compound_move(worker_id, action.target.x, action.target.y)
            for worker_id in action.worker_ids
        ]
    if isinstance(action, GroupHarvestAction):
        return [
            gather(
                worker_id,
                live_positions[worker_id].direction_to(action.resource_position),
            )
            for worker_id in action.worker_ids
        ]
    if isinstance(action, GroupDepositAction):
        return [
            deposit(
                worker_id,
                live_positions[worker_id].direction_to(action.townhall_position),
            )
            for worker_id in action.worker_ids
        ]
    raise TypeError(f"Unknown action type: {type(action).__name__}")


def acting_units(action: StripsAction) -> tuple[int, ...]:
    """Unit ids that receive commands for ``action``."""
    if isinstance(action, BuildWorkerAction):
        return (action.townhall_id,)
    if isinstance(action, (GroupMoveAction, GroupHarvestAction, GroupDepositAction)):
        return action.worker_ids
    return (action.worker_id,)


def describe(action: StripsAction) -> str:
    if isinstance(action, MoveAction):
        return f"Move worker {action.worker_id} {action.origin} -> {action.target}"
    if isinstance(action, HarvestAction):
        return (
            f"Harvest {action.resource_kind.value} {action.resource_id} "
            f"with worker {action.worker_id}"
        )
    if isinstance(action, DepositAction):
        return f"Deposit with worker {action.worker_id}"
    if isinstance(action, BuildWorkerAction):
        return f"Build worker at townhall {action.townhall_id}"
    if isinstance(action, GroupMoveAction):
        return (
            f"Move workers {_format_ids(action.worker_ids)} "
            f"{action.origin} -> {action.target}"
        )
    if isinstance(action, GroupHarvestAction):
        return (
            f"Harvest {action.resource_kind.value} {action.resource_id} "
            f"with workers {_format_ids(action.worker_ids)}"
        )
    if isinstance(action, GroupDepositAction):
        return f"Deposit with workers {_format_ids(action.worker_ids)}"
    raise TypeError(f"Unknown action type: {type(action).__name__}")


def action_to_dict(action: StripsAction) -> dict[str, Any]:
    payload: dict[str, Any] = {"kind": action.kind.value}
    for item in fields(action):
        payload[item.name] = _encode(getattr(action, item.name))
    return payload


def action_from_dict(payload: dict[str, Any]) -> StripsAction:
    try:
        action_type = ACTION_TYPES[ActionKind(payload["kind"])]
    except (KeyError, ValueError) as exc:
        raise ValueError(f"Unknown action kind: {payload.get('kind')!r}") from exc
    values = {
        item.name: _decode(item.name, payload[item.name])
        for item in fields(action_type)
    }
    return action_type(**values)


def _can_move(
    state: WorldState, worker_id: int, origin: Position, target: Position
) -> bool:
    worker = state.workers.get(worker_id)
    if worker is None:
        return False
    return worker.position == origin and origin != target


def _can_harvest(state: WorldState, worker_id: int, resource_id: int) -> bool:
    worker = state.workers.get(worker_id)
    resource = state.resources.get(resource_id)
    if worker is None or resource is None:
        return False
    return (
        resource.amount > 0
        and not worker.has_resource
        and worker.position == resource.position
    )


def _can_deposit(state: WorldState, worker_id: int) -> bool:
    worker = state.workers.get(worker_id)
    if worker is None:
        return False
    return worker.has_resource and worker.position == state.townhall.position


def _is_group(worker_ids: tuple[int, ...]) -> bool:
    return len(worker_ids) >= 2 and len(set(worker_ids)) == len(worker_ids)


def _harvest(state: WorldState, worker_id: int, resource_id: int) -> None:
    resource = state.resources[resource_id]
    collected = min(resource.amount, state.config.carry_capacity)
    state.workers[worker_id].load(resource.kind, collected)
    state.resources[resource_id] = resource.collect(collected)


def _deposit(state: WorldState, worker_id: int) -> None:
    carried_gold, carried_wood = state.workers[worker_id].unload()
    state.stockpile_gold += carried_gold
    state.stockpile_wood += carried_wood


def _format_ids(worker_ids: tuple[int, ...]) -> str:
    return ", ".join(str(worker_id) for worker_id in worker_ids)


def _encode(value: Any) -> Any:
    if isinstance(value, Position):
        return {"x": value.x, "y": value.y}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple):
        return list(value)
    return value


def _decode(name: str, value: Any) -> Any:
    if name in {"origin", "target", "resource_position", "townhall_position"}:
        return Position(x=value["x"], y=value["y"])
    if name == "resource_kind":
        return ResourceKind(value)
    if name == "worker_ids":
        return tuple(value)
    return value
