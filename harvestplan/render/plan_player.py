"""Step through a plan state by state (Textual)."""

from __future__ import annotations

from rich.columns import Columns
from rich.console import RenderableType
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Footer, Static

from harvestplan.render.plan_view import render_plan, render_state
from harvestplan.sim.actions import StripsAction, action_cost
from harvestplan.sim.planner import simulate_plan
from harvestplan.sim.world_state import WorldState


class PlanPlayerScreen(Screen):
    CSS = """
    Screen {
        layout: vertical;
    }
    #plan-view {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("n", "step(1)", "Next"),
        Binding("p", "step(-1)", "Previous"),
        Binding("r", "restart", "Restart"),
        Binding("q", "app.quit", "Quit"),
    ]

    def __init__(self, root: WorldState, actions: list[StripsAction]) -> None:
        super().__init__()
        self._plan_actions = actions
        self._plan_states = simulate_plan(root, actions)
        self._step = 0
        self._frame_view: Static | None = None

    @property
    def step_index(self) -> int:
        return self._step

    def compose(self) -> ComposeResult:
        with Vertical(id="root"):
            yield Static(id="plan-view")
        yield Footer()

    def on_mount(self) -> None:
        self._frame_view = self.query_one("#plan-view", Static)
        self._show_frame()

    def action_step(self, delta: int) -> None:
        self._step = max(0, min(self._step + delta, len(self._plan_states) - 1))
        self._show_frame()

    def action_restart(self) -> None:
        self._step = 0
        self._show_frame()

    def render_frame(self) -> RenderableType:
        state = self._plan_states[self._step]
        title = f"Step {self._step} / {len(self._plan_actions)}"
        highlight = self._step - 1 if self._step > 0 else None
        return Columns(
            [
                render_state(state, title=title),
                render_plan(self._plan_actions, highlight=highlight),
            ]
        )

    def _show_frame(self) -> None:
        if self._frame_view:
            self._frame_view.update(self.render_frame())


class PlanPlayerApp(App):
    """Steps through one planned scenario, titled after it."""

    def __init__(
        self,
        root: WorldState,
        actions: list[StripsAction],
        *,
        scenario_name: str,
    ) -> None:
        super().__init__()
        self._plan_root = root
        self._plan_actions = actions
        total = sum(action_cost(action) for action in actions)
        self.title = f"harvestplan: {scenario_name}"
        self.sub_title = f"{len(actions)} action(s), cost {total:.2f}"

    def on_mount(self) -> None:
        self.push_screen(PlanPlayerScreen(self._plan_root, self._plan_actions))


def run_plan_player(
    root: WorldState, actions: list[StripsAction], *, scenario_name: str
) -> None:
    PlanPlayerApp(root, actions, scenario_name=scenario_name).run()
