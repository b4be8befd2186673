"""Input snapshot contracts read from the simulation at planning time."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from harvestplan.config import PlannerConfig
from harvestplan.sim.position import Position
from harvestplan.sim.resources import Resource, ResourceKind
from harvestplan.sim.worker import Worker
from harvestplan.sim.world_state import (
    DEFAULT_WORKER_TEMPLATE_ID,
    Goal,
    Townhall,
    WorldState,
)


class UnitKind(str, Enum):
    TOWNHALL = "townhall"
    WORKER = "worker"


class ResourceNodeView(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: int
    kind: ResourceKind
    x: int
    y: int
    amount: int = Field(ge=0)


class UnitView(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: int
    kind: UnitKind
    x: int
    y: int


class Snapshot(BaseModel):
    model_config = ConfigDict(extra="forbid")

    resources: list[ResourceNodeView] = Field(default_factory=list)
    units: list[UnitView]
    population_headroom: int = Field(default=0, ge=0)
    required_gold: int = Field(default=0, ge=0)
    required_wood: int = Field(default=0, ge=0)
    worker_template_id: int = DEFAULT_WORKER_TEMPLATE_ID

    @model_validator(mode="after")
    def validate_snapshot(self) -> "Snapshot":
        townhalls = [unit for unit in self.units if unit.kind == UnitKind.TOWNHALL]
        if len(townhalls) != 1:
            raise ValueError("snapshot must contain exactly one townhall")
        if not any(unit.kind == UnitKind.WORKER for unit in self.units):
            raise ValueError("snapshot must contain at least one worker")
        unit_ids = [unit.id for unit in self.units]
        if len(set(unit_ids)) != len(unit_ids):
            raise ValueError("unit ids must be unique")
        resource_ids = [resource.id for resource in self.resources]
        if len(set(resource_ids)) != len(resource_ids):
            raise ValueError("resource ids must be unique")
        return self

    @property
    def townhall(self) -> UnitView:
        return next(unit for unit in self.units if unit.kind == UnitKind.TOWNHALL)

    @property
    def workers(self) -> list[UnitView]:
        return [unit for unit in self.units if unit.kind == UnitKind.WORKER]


def build_root_state(
    snapshot: Snapshot, config: PlannerConfig | None = None
) -> WorldState:
    townhall_view = snapshot.townhall
    townhall = Townhall(
        townhall_id=townhall_view.id,
        position=Position(townhall_view.x, townhall_view.y),
        worker_template_id=snapshot.worker_template_id,
    )
    workers = {
        unit.id: Worker(worker_id=unit.id, position=Position(unit.x, unit.y))
        for unit in snapshot.workers
    }
    resources = {
        node.id: Resource(
            resource_id=node.id,
            kind=node.kind,
            amount=node.amount,
            position=Position(node.x, node.y),
        )
        for node in snapshot.resources
    }
    return WorldState(
        townhall=townhall,
        goal=Goal(
            required_gold=snapshot.required_gold,
            required_wood=snapshot.required_wood,
        ),
        workers=workers,
        resources=resources,
        config=config or PlannerConfig(),
        remaining_food=snapshot.population_headroom,
    )
