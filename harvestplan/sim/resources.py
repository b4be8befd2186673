"""Harvestable resource nodes (gold mines and trees)."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from harvestplan.sim.position import Position


class ResourceKind(str, Enum):
    GOLD = "gold"
    WOOD = "wood"


@dataclass(frozen=True)
class Resource:
    """Immutable view of one resource node.

    Harvesting produces a new Resource through ``collect`` so that every
    WorldState can own its resource table without deep copies.
    """

    resource_id: int
    kind: ResourceKind
    amount: int
    position: Position

    @property
    def is_gold(self) -> bool:
        return self.kind == ResourceKind.GOLD

    @property
    def is_wood(self) -> bool:
        return self.kind == ResourceKind.WOOD

    @property
    def exhausted(self) -> bool:
        return self.amount <= 0

    def collect(self, amount: int) -> Resource:
        if amount < 0:
            raise ValueError("Cannot collect a negative amount.")
        if amount > self.amount:
            raise ValueError(
                f"Resource {self.resource_id} has {self.amount} left, "
                f"cannot collect {amount}."
            )
        return replace(self, amount=self.amount - amount)


def gold(resource_id: int, amount: int, position: Position) -> Resource:
    return Resource(resource_id, ResourceKind.GOLD, amount, position)


def wood(resource_id: int, amount: int, position: Position) -> Resource:
    return Resource(resource_id, ResourceKind.WOOD, amount, position)
