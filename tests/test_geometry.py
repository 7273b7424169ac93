from filler_ai.geometry import (
    DIAMOND_OFFSETS_2,
    are_adjacent_4,
    are_adjacent_8,
    border_distance,
    chebyshev_distance,
    is_border,
    is_corner,
    manhattan_distance,
    neighbors_4,
)


def test_diamond_has_twelve_cells():
    assert len(DIAMOND_OFFSETS_2) == 12
    assert (0, 0) not in DIAMOND_OFFSETS_2
    assert all(1 <= abs(dx) + abs(dy) <= 2 for dx, dy in DIAMOND_OFFSETS_2)


def test_distances():
    assert manhattan_distance((0, 0), (3, 4)) == 7
    assert chebyshev_distance((0, 0), (3, 4)) == 4


def test_adjacency():
    assert are_adjacent_4((1, 1), (1, 2))
    assert not are_adjacent_4((1, 1), (2, 2))
    assert are_adjacent_8((1, 1), (2, 2))
    assert not are_adjacent_8((1, 1), (1, 1))


def test_neighbors_4_clipped_at_corner():
    assert sorted(neighbors_4(0, 0, 5, 5)) == [(0, 1), (1, 0)]
    assert len(neighbors_4(2, 2, 5, 5)) == 4


def test_border_helpers():
    assert is_corner(4, 0, 5, 5)
    assert not is_corner(2, 0, 5, 5)
    assert is_border(2, 0, 5, 5)
    assert not is_border(2, 2, 5, 5)
    assert border_distance(2, 2, 5, 5) == 2
    assert border_distance(1, 3, 5, 5) == 1
