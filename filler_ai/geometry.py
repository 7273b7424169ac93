"""Grid geometry helpers shared by the validator and the heuristics.

All helpers work on raw ``(x, y)`` tuples rather than :class:`Position`
models so that the hot loops (flood fill, density counting) avoid Pydantic
overhead.
"""

from __future__ import annotations

# Type alias for clarity
Coord = tuple[int, int]

# 4-connected neighbour offsets: right, left, down, up
NEIGHBOR_OFFSETS_4: tuple[Coord, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))

NEIGHBOR_OFFSETS_8: tuple[Coord, ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)


def _build_diamond(radius: int) -> tuple[Coord, ...]:
    return tuple(
        (dx, dy)
        for dy in range(-radius, radius + 1)
        for dx in range(-radius, radius + 1)
        if 0 < abs(dx) + abs(dy) <= radius
    )


# Offsets at Manhattan distance 1..2 (12 cells, centre excluded)
DIAMOND_OFFSETS_2: tuple[Coord, ...] = _build_diamond(2)


def in_bounds(x: int, y: int, width: int, height: int) -> bool:
    return 0 <= x < width and 0 <= y < height


def neighbors_4(x: int, y: int, width: int, height: int) -> list[Coord]:
    """Return the in-bounds 4-connected neighbours of ``(x, y)``."""
    return [
        (x + dx, y + dy)
        for dx, dy in NEIGHBOR_OFFSETS_4
        if in_bounds(x + dx, y + dy, width, height)
    ]


def manhattan_distance(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def chebyshev_distance(a: Coord, b: Coord) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def are_adjacent_4(a: Coord, b: Coord) -> bool:
    return manhattan_distance(a, b) == 1


def are_adjacent_8(a: Coord, b: Coord) -> bool:
    return chebyshev_distance(a, b) == 1


def is_corner(x: int, y: int, width: int, height: int) -> bool:
    return x in (0, width - 1) and y in (0, height - 1)


def is_border(x: int, y: int, width: int, height: int) -> bool:
    return x in (0, width - 1) or y in (0, height - 1)


def border_distance(x: int, y: int, width: int, height: int) -> int:
    """Distance from ``(x, y)`` to the nearest board edge (0 on the border)."""
    return min(x, y, width - 1 - x, height - 1 - y)
