from broadside.ai.feedback import apply_shot_feedback, update_memory_on_hit, update_memory_on_miss
from broadside.ai.memory import create_memory
from broadside.core.models import Coord, ShipKind, ShotHit, ShotMiss


def test_first_hit_queues_unattempted_neighbours() -> None:
    memory = create_memory(attempted={"4,4", "4,3"})

    updated = update_memory_on_hit(memory, Coord(4, 4), sunk=False, board_size=10)

    assert updated.last_hits == (Coord(4, 4),)
    assert updated.target_queue == (Coord(5, 4), Coord(3, 4), Coord(4, 5))


def test_hit_on_edge_only_queues_in_bounds_cells() -> None:
    updated = update_memory_on_hit(create_memory(attempted={"0,0"}), Coord(0, 0), False, 10)
    assert updated.target_queue == (Coord(1, 0), Coord(0, 1))


def test_follow_up_hit_merges_queue_without_duplicates() -> None:
    memory = create_memory(
        attempted={"4,4", "5,4"},
        target_queue=[Coord(3, 4), Coord(6, 4)],
        last_hits=[Coord(4, 4)],
    )

    updated = update_memory_on_hit(memory, Coord(5, 4), sunk=False, board_size=10)

    assert updated.last_hits == (Coord(4, 4), Coord(5, 4))
    keys = [coord.key for coord in updated.target_queue]
    assert len(keys) == len(set(keys))
    assert set(updated.target_queue) == {
        Coord(3, 4),
        Coord(6, 4),
        Coord(5, 5),
        Coord(5, 3),
    }
    assert Coord(4, 4) not in updated.target_queue


def test_sunk_ends_pursuit() -> None:
    memory = create_memory(
        attempted={"4,4", "5,4"},
        target_queue=[Coord(3, 4)],
        last_hits=[Coord(4, 4)],
    )
    updated = update_memory_on_hit(memory, Coord(5, 4), sunk=True, board_size=10)
    assert updated.target_queue == ()
    assert updated.last_hits == ()
    assert updated.attempted == memory.attempted


def test_miss_leaves_memory_unchanged() -> None:
    memory = create_memory(attempted={"1,1"}, target_queue=[Coord(2, 1)])
    assert update_memory_on_miss(memory) is memory
    assert apply_shot_feedback(memory, Coord(1, 1), ShotMiss(), 10) is memory


def test_apply_shot_feedback_dispatches_hits() -> None:
    memory = create_memory(attempted={"2,2"})
    updated = apply_shot_feedback(memory, Coord(2, 2), ShotHit(ShipKind.CRUISER, sunk=False), 10)
    assert updated.last_hits == (Coord(2, 2),)
    assert len(updated.target_queue) == 4
