from harvestplan.config import PlannerConfig
from harvestplan.sim.actions import (
    BuildWorkerAction,
    DepositAction,
    GroupHarvestAction,
    GroupMoveAction,
    HarvestAction,
    MoveAction,
)
from harvestplan.sim.position import Position
from harvestplan.sim.resources import Resource, ResourceKind
from harvestplan.sim.worker import Worker
from harvestplan.sim.world_state import Goal, Townhall, WorldState

TOWNHALL = Position(0, 0)
MINE = Position(2, 0)
FOREST = Position(0, 3)


def test_idle_worker_moves_to_every_needed_resource() -> None:
    state = _state(
        workers=[Worker(2, TOWNHALL)],
        resources=[
            Resource(10, ResourceKind.GOLD, 100, MINE),
            Resource(11, ResourceKind.WOOD, 100, FOREST),
            Resource(12, ResourceKind.GOLD, 0, Position(5, 5)),
        ],
        goal=Goal(required_gold=100, required_wood=100),
    )
    children = state.generate_children()

    assert [child.plan[-1] for child in children] == [
        MoveAction(2, TOWNHALL, MINE),
        MoveAction(2, TOWNHALL, FOREST),
    ]
    assert children[0].cost == 2.0
    assert children[1].cost == 3.0


def test_resources_of_a_satisfied_kind_are_skipped() -> None:
    state = _state(
        workers=[Worker(2, TOWNHALL)],
        resources=[
            Resource(10, ResourceKind.GOLD, 100, MINE),
            Resource(11, ResourceKind.WOOD, 100, FOREST),
        ],
        goal=Goal(required_gold=100, required_wood=100),
        stockpile_gold=100,
    )
    children = state.generate_children()

    assert [child.plan[-1] for child in children] == [MoveAction(2, TOWNHALL, FOREST)]


def test_worker_branches_follow_its_load() -> None:
    at_mine = _state(
        workers=[Worker(2, MINE)],
        resources=[Resource(10, ResourceKind.GOLD, 100, MINE)],
    )
    assert [child.plan[-1] for child in at_mine.generate_children()] == [
        HarvestAction(2, 10, ResourceKind.GOLD, MINE)
    ]

    carrying = _state(workers=[Worker(2, MINE, carried_gold=100)])
    assert [child.plan[-1] for child in carrying.generate_children()] == [
        MoveAction(2, MINE, TOWNHALL)
    ]

    home = _state(workers=[Worker(2, TOWNHALL, carried_gold=100)])
    assert [child.plan[-1] for child in home.generate_children()] == [
        DepositAction(2, TOWNHALL)
    ]


def test_build_worker_child_depends_on_gold_and_food() -> None:
    poor = _state(workers=[Worker(2, TOWNHALL)], stockpile_gold=399, food=2)
    assert not any(
        isinstance(child.plan[-1], BuildWorkerAction)
        for child in poor.generate_children()
    )

    rich = _state(workers=[Worker(2, TOWNHALL)], stockpile_gold=400, food=2)
    children = rich.generate_children()
    assert isinstance(children[0].plan[-1], BuildWorkerAction)
    assert len(children[0].workers) == 2
    assert children[0].remaining_food == 1

    full = _state(workers=[Worker(2, TOWNHALL)], stockpile_gold=400, food=0)
    assert not any(
        isinstance(child.plan[-1], BuildWorkerAction)
        for child in full.generate_children()
    )


def test_siblings_do_not_share_resource_tables() -> None:
    state = _state(
        workers=[Worker(2, MINE), Worker(3, MINE)],
        resources=[Resource(10, ResourceKind.GOLD, 150, MINE)],
    )
    first, second = state.generate_children()

    assert first.workers[2].carried_gold == 100
    assert first.workers[3].carried_gold == 0
    assert second.workers[3].carried_gold == 100
    assert second.workers[2].carried_gold == 0
    assert first.resources[10].amount == 50
    assert second.resources[10].amount == 50
    assert state.resources[10].amount == 150


def test_equality_ignores_cost_and_plan() -> None:
    state = _state(
        workers=[Worker(2, TOWNHALL)],
        resources=[Resource(10, ResourceKind.GOLD, 100, MINE)],
    )
    there = state.successor(MoveAction(2, TOWNHALL, MINE))
    back = there.successor(MoveAction(2, MINE, TOWNHALL))

    assert back == state
    assert hash(back) == hash(state)
    assert back.cost == 4.0
    assert back.plan != state.plan
    assert there != state


def test_equality_sees_resource_amounts() -> None:
    full = _state(resources=[Resource(10, ResourceKind.GOLD, 100, MINE)])
    drained = _state(resources=[Resource(10, ResourceKind.GOLD, 0, MINE)])

    assert full != drained


def test_goal_requires_exact_stockpiles() -> None:
    goal = Goal(required_gold=100, required_wood=0)

    assert _state(goal=goal, stockpile_gold=100).is_goal()
    assert not _state(goal=goal, stockpile_gold=200).is_goal()
    assert not _state(goal=goal, stockpile_gold=0).is_goal()


def test_heuristic_weights() -> None:
    state = _state(
        workers=[Worker(2, TOWNHALL, carried_gold=40)],
        goal=Goal(required_gold=100, required_wood=50),
    )
    # 100 * 2 + 50 * 2 + 60 * 0.5 - 10000
    assert state.heuristic() == -9670.0

    flat = _state(
        workers=[Worker(2, TOWNHALL)],
        goal=Goal(required_gold=100, required_wood=0),
        config=PlannerConfig(workers_weight=0.0, capacity_weight=0.0),
    )
    assert flat.heuristic() == 200.0


def test_group_actions_are_generated_when_enabled() -> None:
    workers = [Worker(2, TOWNHALL), Worker(3, TOWNHALL)]
    resources = [Resource(10, ResourceKind.GOLD, 200, MINE)]
    goal = Goal(required_gold=200, required_wood=0)

    plain = _state(workers=workers, resources=resources, goal=goal)
    assert not any(
        isinstance(child.plan[-1], GroupMoveAction)
        for child in plain.generate_children()
    )

    grouped = _state(
        workers=[worker.copy() for worker in workers],
        resources=resources,
        goal=goal,
        config=PlannerConfig(group_actions=True),
    )
    actions = [child.plan[-1] for child in grouped.generate_children()]
    assert GroupMoveAction((2, 3), TOWNHALL, MINE) in actions

    at_mine = grouped.successor(GroupMoveAction((2, 3), TOWNHALL, MINE))
    actions = [child.plan[-1] for child in at_mine.generate_children()]
    assert GroupHarvestAction((2, 3), 10, ResourceKind.GOLD, MINE) in actions


def _state(
    *,
    workers: list[Worker] | None = None,
    resources: list[Resource] | None = None,
    goal: Goal | None = None,
    stockpile_gold: int = 0,
    food: int = 0,
    config: PlannerConfig | None = None,
) -> WorldState:
    return WorldState(
        townhall=Townhall(townhall_id=1, position=TOWNHALL),
        goal=goal or Goal(required_gold=1000, required_wood=1000),
        workers={worker.worker_id: worker for worker in workers or []},
        resources={resource.resource_id: resource for resource in resources or []},
        config=config or PlannerConfig(),
        stockpile_gold=stockpile_gold,
        remaining_food=food,
    )
