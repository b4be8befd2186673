"""Rich rendering for plans, plan results and world states."""

from __future__ import annotations

from typing import Any, Iterable

from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from harvestplan.render.plan_reader import LoggedPlan
from harvestplan.sim.actions import StripsAction, action_cost, describe
from harvestplan.sim.planner import PlanResult
from harvestplan.sim.world_state import WorldState

_STATUS_STYLES = {
    "found": "bold green",
    "unreachable": "bold red",
    "exhausted": "bold yellow",
}


def render_result(result: PlanResult) -> RenderableType:
    summary = _render_summary(
        status=result.status.value,
        cost=result.cost,
        stats=result.stats.to_dict(),
        steps=len(result.actions),
    )
    return Group(summary, render_plan(result.actions))


def render_logged_plan(logged: LoggedPlan) -> RenderableType:
    summary = _render_summary(
        status=logged.status or "unknown",
        cost=logged.cost,
        stats=logged.stats,
        steps=len(logged.actions),
    )
    metadata = _render_metadata(logged.metadata)
    return Group(Columns([summary, metadata]), render_plan(logged.actions))


def render_plan(
    actions: Iterable[StripsAction], *, highlight: int | None = None
) -> RenderableType:
    table = Table(title="Plan", show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Action")
    table.add_column("Cost", justify="right")
    table.add_column("Total", justify="right")

    total = 0.0
    rows = 0
    for index, action in enumerate(actions):
        step_cost = action_cost(action)
        total += step_cost
        style = "reverse" if index == highlight else None
        table.add_row(
            str(index + 1),
            describe(action),
            f"{step_cost:.2f}",
            f"{total:.2f}",
            style=style,
        )
        rows += 1
    if not rows:
        table.add_row("-", "No actions", "-", "-")
    return table


def render_state(state: WorldState, *, title: str = "World") -> RenderableType:
    stock = Table(show_header=False)
    stock.add_column("Field")
    stock.add_column("Value")
    stock.add_row("Gold", f"{state.stockpile_gold} / {state.goal.required_gold}")
    stock.add_row("Wood", f"{state.stockpile_wood} / {state.goal.required_wood}")
    stock.add_row("Food", str(state.remaining_food))
    stock.add_row("Cost", f"{state.cost:.2f}")
    stock.add_row("Goal", "yes" if state.is_goal() else "no")

    workers = Table(title="Workers", show_header=True, header_style="bold")
    workers.add_column("Id", justify="right")
    workers.add_column("Position")
    workers.add_column("Gold", justify="right")
    workers.add_column("Wood", justify="right")
    for worker_id in sorted(state.workers):
        worker = state.workers[worker_id]
        workers.add_row(
            str(worker_id),
            str(worker.position),
            str(worker.carried_gold),
            str(worker.carried_wood),
        )

    resources = Table(title="Resources", show_header=True, header_style="bold")
    resources.add_column("Id", justify="right")
    resources.add_column("Kind")
    resources.add_column("Position")
    resources.add_column("Amount", justify="right")
    for resource_id in sorted(state.resources):
        resource = state.resources[resource_id]
        resources.add_row(
            str(resource_id),
            resource.kind.value,
            str(resource.position),
            str(resource.amount),
        )
    if not state.resources:
        resources.add_row("-", "None", "-", "-")

    return Panel(Group(stock, workers, resources), title=title)


def _render_summary(
    *, status: str, cost: float | None, stats: dict[str, Any], steps: int
) -> RenderableType:
    table = Table(show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Status", Text(status, style=_STATUS_STYLES.get(status, "bold")))
    table.add_row("Steps", str(steps))
    table.add_row("Cost", "-" if cost is None else f"{cost:.2f}")
    for key in ("expanded", "generated", "duplicates", "elapsed"):
        if key in stats:
            table.add_row(key.capitalize(), str(stats[key]))
    return Panel(table, title="Search")


def _render_metadata(metadata: dict[str, Any]) -> RenderableType:
    if not metadata:
        return Panel(Text("No metadata."), title="Run")
    table = Table(show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    for key, value in metadata.items():
        table.add_row(str(key), str(value))
    return Panel(table, title="Run")
