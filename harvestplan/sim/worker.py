"""Worker units that carry resources between nodes and the townhall."""

from __future__ import annotations

from dataclasses import dataclass

from harvestplan.sim.position import Position
from harvestplan.sim.resources import ResourceKind


@dataclass
class Worker:
    worker_id: int
    position: Position
    carried_gold: int = 0
    carried_wood: int = 0

    @property
    def has_resource(self) -> bool:
        return self.carried_gold != 0 or self.carried_wood != 0

    @property
    def carried_total(self) -> int:
        return self.carried_gold + self.carried_wood

    def load(self, kind: ResourceKind, amount: int) -> None:
        if kind == ResourceKind.GOLD:
            self.carried_gold += amount
        else:
            self.carried_wood += amount

    def unload(self) -> tuple[int, int]:
        carried = (self.carried_gold, self.carried_wood)
        self.carried_gold = 0
        self.carried_wood = 0
        return carried

    def copy(self) -> Worker:
        return Worker(
            worker_id=self.worker_id,
            position=self.position,
            carried_gold=self.carried_gold,
            carried_wood=self.carried_wood,
        )

    def key(self) -> tuple[int, int, int, int, int]:
        return (
            self.worker_id,
            self.position.x,
            self.position.y,
            self.carried_gold,
            self.carried_wood,
        )
