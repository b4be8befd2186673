"""Low-level simulation commands produced from planned actions."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator

from harvestplan.sim.position import Direction


class CommandKind(str, Enum):
    COMPOUND_MOVE = "COMPOUND_MOVE"
    GATHER = "GATHER"
    DEPOSIT = "DEPOSIT"
    PRODUCE = "PRODUCE"


class Command(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    unit_id: int
    kind: CommandKind
    x: int | None = None
    y: int | None = None
    direction: Direction | None = None
    template_id: int | None = None

    @model_validator(mode="after")
    def validate_command(self) -> "Command":
        if self.kind == CommandKind.COMPOUND_MOVE:
            if self.x is None or self.y is None:
                raise ValueError("COMPOUND_MOVE requires x and y")
            if self.direction is not None or self.template_id is not None:
                raise ValueError("COMPOUND_MOVE takes coordinates only")
        elif self.kind == CommandKind.PRODUCE:
            if self.template_id is None:
                raise ValueError("PRODUCE requires template_id")
            if self.x is not None or self.y is not None:
                raise ValueError("PRODUCE takes template_id only")
            if self.direction is not None:
                raise ValueError("PRODUCE takes template_id only")
        else:
            if self.x is not None or self.y is not None:
                raise ValueError(f"{self.kind.value} takes a direction only")
            if self.template_id is not None:
                raise ValueError(f"{self.kind.value} takes a direction only")
        return self


def compound_move(unit_id: int, x: int, y: int) -> Command:
    return Command(unit_id=unit_id, kind=CommandKind.COMPOUND_MOVE, x=x, y=y)


def gather(unit_id: int, direction: Direction | None) -> Command:
    return Command(unit_id=unit_id, kind=CommandKind.GATHER, direction=direction)


def deposit(unit_id: int, direction: Direction | None) -> Command:
    return Command(unit_id=unit_id, kind=CommandKind.DEPOSIT, direction=direction)


def produce(townhall_id: int, template_id: int) -> Command:
    return Command(
        unit_id=townhall_id, kind=CommandKind.PRODUCE, template_id=template_id
    )
