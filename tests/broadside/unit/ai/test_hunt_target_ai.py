import random

from broadside.ai.hunt_target import HuntTargetAI, sort_targets
from broadside.ai.memory import create_memory
from broadside.core.board import create_empty_board, fire_at
from broadside.core.models import Coord


def test_hunt_target_ai_drains_queue_first() -> None:
    memory = create_memory(target_queue=[Coord(4, 4)])

    choice = HuntTargetAI().choose_shot(create_empty_board(), memory, random.Random(1))

    assert choice.coord == Coord(4, 4)
    assert choice.memory.target_queue == ()
    assert choice.memory.has_attempted(Coord(4, 4))


def test_hunt_target_ai_skips_stale_queue_entries() -> None:
    board, _ = fire_at(create_empty_board(), Coord(2, 2))
    memory = create_memory(
        attempted={"3,3"},
        target_queue=[Coord(2, 2), Coord(3, 3), Coord(2, 3), Coord(1, 2)],
    )

    choice = HuntTargetAI().choose_shot(board, memory, random.Random(1))

    assert choice.coord == Coord(2, 3)
    assert choice.memory.target_queue == (Coord(1, 2),)


def test_hunt_target_ai_hunts_on_parity_when_queue_is_empty() -> None:
    ai = HuntTargetAI()
    rng = random.Random(5)
    memory = create_memory()
    board = create_empty_board()
    for _ in range(20):
        choice = ai.choose_shot(board, memory, rng)
        assert (choice.coord.x + choice.coord.y) % 2 == 0
        memory = choice.memory


def test_hunt_target_ai_falls_back_to_any_cell_when_parity_exhausted() -> None:
    attempted = {Coord(x, y).key for y in range(10) for x in range(10) if (x + y) % 2 == 0}
    memory = create_memory(attempted=attempted, target_queue=[Coord(0, 0)])

    choice = HuntTargetAI().choose_shot(create_empty_board(), memory, random.Random(2))

    assert (choice.coord.x + choice.coord.y) % 2 == 1
    assert choice.memory.target_queue == ()


def test_sort_targets_follows_axis_of_last_two_hits() -> None:
    queue = [Coord(2, 4), Coord(6, 4), Coord(7, 4)]
    hits = (Coord(4, 4), Coord(5, 4))
    assert sort_targets(queue, hits) == [Coord(6, 4), Coord(7, 4), Coord(2, 4)]

    vertical = [Coord(3, 0), Coord(3, 4)]
    assert sort_targets(vertical, (Coord(3, 2), Coord(3, 3))) == [Coord(3, 4), Coord(3, 0)]


def test_sort_targets_keeps_order_without_axis() -> None:
    queue = [Coord(9, 9), Coord(0, 0)]
    assert sort_targets(queue, (Coord(1, 1),)) == queue
    assert sort_targets(queue, (Coord(1, 1), Coord(2, 2))) == queue
