"""Best-first forward search over WorldStates."""

from __future__ import annotations

import heapq
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from itertools import count
from typing import Any

from harvestplan.config import PlannerConfig
from harvestplan.sim.actions import StripsAction, describe, preconditions_met
from harvestplan.sim.world_state import StateKey, WorldState

logger = logging.getLogger(__name__)

# Only these fields may be overridden per search.
_BUDGET_FIELDS = {"max_expansions", "time_limit"}


class PlanStatus(str, Enum):
    FOUND = "found"
    UNREACHABLE = "unreachable"
    EXHAUSTED = "exhausted"


@dataclass
class SearchStats:
    expanded: int = 0
    generated: int = 0
    duplicates: int = 0
    elapsed: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "expanded": self.expanded,
            "generated": self.generated,
            "duplicates": self.duplicates,
            "elapsed": round(self.elapsed, 6),
        }


@dataclass(frozen=True)
class PlanResult:
    status: PlanStatus
    actions: list[StripsAction]
    cost: float
    stats: SearchStats
    final_state: WorldState | None = None

    @property
    def found(self) -> bool:
        return self.status == PlanStatus.FOUND

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "cost": self.cost,
            "steps": len(self.actions),
            "stats": self.stats.to_dict(),
        }


@dataclass(order=True)
class _OpenEntry:
    priority: float
    sequence: int
    state: WorldState = field(compare=False)


class Planner:
    """Pops the state with the lowest cost + heuristic until a goal appears.

    Duplicate suppression is best effort: a state already in the closed set
    is skipped even if it was reached more cheaply the second time.
    """

    def __init__(self, config: PlannerConfig | None = None) -> None:
        self._config = config

    def plan(self, root: WorldState) -> PlanResult:
        config = self._search_config(root)
        stats = SearchStats()
        started = time.monotonic()
        sequence = count()

        open_heap: list[_OpenEntry] = []
        heapq.heappush(open_heap, _OpenEntry(root.priority(), next(sequence), root))
        closed: set[StateKey] = set()

        logger.info(
            "Planning for gold=%d wood=%d with %d worker(s), budget=%d expansions",
            root.goal.required_gold,
            root.goal.required_wood,
            len(root.workers),
            config.max_expansions,
        )

        while open_heap:
            current = heapq.heappop(open_heap).state

            if current.is_goal():
                stats.elapsed = time.monotonic() - started
                logger.info(
                    "Plan found: %d action(s), cost %.2f, %d expansion(s)",
                    len(current.plan),
                    current.cost,
                    stats.expanded,
                )
                return PlanResult(
                    status=PlanStatus.FOUND,
                    actions=current.plan_so_far(),
                    cost=current.cost,
                    stats=stats,
                    final_state=current,
                )

            key = current.key()
            if key in closed:
                stats.duplicates += 1
                continue

            if self._over_budget(config, stats, started):
                stats.elapsed = time.monotonic() - started
                logger.warning(
                    "Search exhausted after %d expansion(s) in %.2fs",
                    stats.expanded,
                    stats.elapsed,
                )
                return PlanResult(
                    status=PlanStatus.EXHAUSTED,
                    actions=[],
                    cost=0.0,
                    stats=stats,
                )

            closed.add(key)
            stats.expanded += 1
            for child in current.generate_children():
                if child.key() in closed:
                    stats.duplicates += 1
                    continue
                heapq.heappush(
                    open_heap, _OpenEntry(child.priority(), next(sequence), child)
                )
                stats.generated += 1
            logger.debug(
                "Expanded state cost=%.2f gold=%d wood=%d, open=%d",
                current.cost,
                current.stockpile_gold,
                current.stockpile_wood,
                len(open_heap),
            )

        stats.elapsed = time.monotonic() - started
        logger.warning("No plan found after %d expansion(s)", stats.expanded)
        return PlanResult(
            status=PlanStatus.UNREACHABLE,
            actions=[],
            cost=0.0,
            stats=stats,
        )

    def _search_config(self, root: WorldState) -> PlannerConfig:
        """The budget may differ from the root's config; nothing else may."""
        if self._config is None:
            return root.config
        ours = self._config.model_dump(exclude=_BUDGET_FIELDS)
        theirs = root.config.model_dump(exclude=_BUDGET_FIELDS)
        if ours != theirs:
            changed = sorted(name for name in ours if ours[name] != theirs[name])
            raise ValueError(
                "Planner config differs from the root state config in: "
                + ", ".join(changed)
            )
        return self._config

    @staticmethod
    def _over_budget(
        config: PlannerConfig, stats: SearchStats, started: float
    ) -> bool:
        if stats.expanded >= config.max_expansions:
            return True
        if config.time_limit is None:
            return False
        return time.monotonic() - started >= config.time_limit


def validate_plan(
    root: WorldState, actions: list[StripsAction]
) -> tuple[bool, str | None]:
    """Replay ``actions`` from ``root`` and check every precondition and the goal."""
    state = root
    for index, action in enumerate(actions):
        if not preconditions_met(action, state):
            return False, f"Action {index} ({describe(action)}) is not applicable"
        state = state.successor(action)
    if not state.is_goal():
        return False, "Final state does not satisfy the goal"
    return True, None


def simulate_plan(root: WorldState, actions: list[StripsAction]) -> list[WorldState]:
    """Return the trajectory of states visited by ``actions``, root included."""
    states = [root]
    state = root
    for index, action in enumerate(actions):
        if not preconditions_met(action, state):
            raise ValueError(
                f"Action {index} ({describe(action)}) is not applicable"
            )
        state = state.successor(action)
        states.append(state)
    return states
