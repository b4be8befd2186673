"""World snapshots used as search nodes by the planner."""

from __future__ import annotations

from dataclasses import dataclass, field

from harvestplan.config import PlannerConfig
from harvestplan.sim.actions import (
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
    preconditions_met,
)
from harvestplan.sim.position import Position
from harvestplan.sim.resources import Resource, ResourceKind
from harvestplan.sim.worker import Worker

DEFAULT_WORKER_TEMPLATE_ID = 26


@dataclass(frozen=True)
class Townhall:
    townhall_id: int
    position: Position
    worker_template_id: int = DEFAULT_WORKER_TEMPLATE_ID


@dataclass(frozen=True)
class Goal:
    required_gold: int
    required_wood: int


StateKey = tuple[
    int,
    int,
    int,
    tuple[tuple[int, int, int, int, int], ...],
    tuple[tuple[int, int], ...],
]


@dataclass(eq=False)
class WorldState:
    """One node of the planning search.

    Children are produced by cloning and applying exactly one action. The
    clone copies the worker map and the resource table; Resource values are
    immutable, so a harvest in one branch never leaks into a sibling.
    Equality only looks at physical state, never at cost, plan or heuristic.
    """

    townhall: Townhall
    goal: Goal
    workers: dict[int, Worker]
    resources: dict[int, Resource]
    config: PlannerConfig = field(default_factory=PlannerConfig)
    stockpile_gold: int = 0
    stockpile_wood: int = 0
    remaining_food: int = 0
    cost: float = 0.0
    plan: tuple[StripsAction, ...] = ()

    def clone(self) -> WorldState:
        return WorldState(
            townhall=self.townhall,
            goal=self.goal,
            workers={
                worker_id: worker.copy() for worker_id, worker in self.workers.items()
            },
            resources=dict(self.resources),
            config=self.config,
            stockpile_gold=self.stockpile_gold,
            stockpile_wood=self.stockpile_wood,
            remaining_food=self.remaining_food,
            cost=self.cost,
            plan=self.plan,
        )

    def record(self, action: StripsAction) -> None:
        self.cost += action_cost(action)
        self.plan = self.plan + (action,)

    def successor(self, action: StripsAction) -> WorldState:
        child = self.clone()
        apply_action(action, child)
        return child

    def next_worker_id(self) -> int:
        if not self.workers:
            return self.townhall.townhall_id + 1
        return max(self.workers) + 1

    def plan_so_far(self) -> list[StripsAction]:
        return list(self.plan)

    def is_goal(self) -> bool:
        return (
            self.stockpile_gold == self.goal.required_gold
            and self.stockpile_wood == self.goal.required_wood
        )

    def heuristic(self) -> float:
        config = self.config
        gold_left = (self.goal.required_gold - self.stockpile_gold) * (
            config.resources_weight
        )
        wood_left = (self.goal.required_wood - self.stockpile_wood) * (
            config.resources_weight
        )
        headroom = sum(
            config.carry_capacity - worker.carried_total
            for worker in self.workers.values()
        )
        return (
            gold_left
            + wood_left
            + headroom * config.capacity_weight
            + len(self.workers) * config.workers_weight
        )

    def priority(self) -> float:
        return self.cost + self.heuristic()

    def resource_at(self, position: Position) -> Resource | None:
        for resource_id in sorted(self.resources):
            resource = self.resources[resource_id]
            if resource.position == position and resource.amount > 0:
                return resource
        return None

    def still_needed(self, kind: ResourceKind) -> bool:
        if kind == ResourceKind.GOLD:
            return self.stockpile_gold < self.goal.required_gold
        return self.stockpile_wood < self.goal.required_wood

    def candidate_actions(self) -> list[StripsAction]:
        townhall_position = self.townhall.position
        actions: list[StripsAction] = [
            BuildWorkerAction(
                townhall_id=self.townhall.townhall_id,
                template_id=self.townhall.worker_template_id,
            )
        ]
        for worker_id in sorted(self.workers):
            worker = self.workers[worker_id]
            if worker.has_resource:
                if worker.position == townhall_position:
                    actions.append(DepositAction(worker_id, townhall_position))
                else:
                    actions.append(
                        MoveAction(worker_id, worker.position, townhall_position)
                    )
                continue
            resource = self.resource_at(worker.position)
            if resource is not None:
                actions.append(
                    HarvestAction(
                        worker_id,
                        resource.resource_id,
                        resource.kind,
                        resource.position,
                    )
                )
                continue
            for target in self._wanted_resources():
                actions.append(MoveAction(worker_id, worker.position, target.position))
        if self.config.group_actions:
            actions.extend(self._group_actions())
        return actions

    def generate_children(self) -> list[WorldState]:
        return [
            self.successor(action)
            for action in self.candidate_actions()
            if preconditions_met(action, self)
        ]

    def key(self) -> StateKey:
        return (
            self.stockpile_gold,
            self.stockpile_wood,
            self.remaining_food,
            tuple(sorted(worker.key() for worker in self.workers.values())),
            tuple(
                sorted(
                    (resource_id, resource.amount)
                    for resource_id, resource in self.resources.items()
                )
            ),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WorldState):
            return NotImplemented
        return self.key() == other.key()

    def __hash__(self) -> int:
        return hash(self.key())

    def _wanted_resources(self) -> list[Resource]:
        return [
            self.resources[resource_id]
            for resource_id in sorted(self.resources)
            if self.resources[resource_id].amount > 0
            and self.still_needed(self.resources[resource_id].kind)
        ]

    def _group_actions(self) -> list[StripsAction]:
        townhall_position = self.townhall.position
        groups: dict[tuple[Position, bool], list[int]] = {}
        for worker_id in sorted(self.workers):
            worker = self.workers[worker_id]
            groups.setdefault((worker.position, worker.has_resource), []).append(
                worker_id
            )

        actions: list[StripsAction] = []
        for (position, carrying), members in groups.items():
            if len(members) < 2:
                continue
            worker_ids = tuple(members)
            if carrying:
                if position == townhall_position:
                    actions.append(GroupDepositAction(worker_ids, townhall_position))
                else:
                    actions.append(
                        GroupMoveAction(worker_ids, position, townhall_position)
                    )
                continue
            resource = self.resource_at(position)
            if resource is not None:
                actions.append(
                    GroupHarvestAction(
                        worker_ids,
                        resource.resource_id,
                        resource.kind,
                        resource.position,
                    )
                )
                continue
            for target in self._wanted_resources():
                actions.append(GroupMoveAction(worker_ids, position, target.position))
        return actions
