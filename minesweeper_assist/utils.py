"""Utility functions for the Minesweeper assistant."""

import random
from typing import Dict, List, Tuple

Coord = Tuple[int, int]

# Module-level cache: (rows, cols) -> {(r,c): ((nr,nc), ...), ...}
_NEIGHBORHOODS_CACHE: Dict[
    Tuple[int, int],
    Dict[Coord, Tuple[Coord, ...]]
] = {}


def get_neighborhoods(rows: int, cols: int) -> Dict[Coord, Tuple[Coord, ...]]:
    """
    Precompute and cache 8-connected neighbor coordinates for every cell in a grid.

    Neighbors are listed in row-major order of the 3x3 window around the cell,
    skipping the center, so downstream scans see them in a stable order.

    Args:
        rows: Grid height (number of rows). Must be non-negative.
        cols: Grid width (number of columns). Must be non-negative.

    Returns:
        Mapping from each cell (r, c) to a tuple of valid neighboring
        coordinates (nr, nc) under 8-connectivity. Empty for a 0x0 grid.

    Raises:
        ValueError: If rows or cols is negative.
    """
    if rows < 0 or cols < 0:
        raise ValueError("rows and cols must be non-negative.")

    key = (rows, cols)
    cached = _NEIGHBORHOODS_CACHE.get(key)
    if cached is not None:
        return cached

    neighborhoods: Dict[Coord, Tuple[Coord, ...]] = {}
    for r in range(rows):
        for c in range(cols):
            nbrs: List[Coord] = []
            for dr in (-1, 0, 1):
                for dc in (-1, 0, 1):
                    if dr == 0 and dc == 0:
                        continue
                    nr, nc = r + dr, c + dc
                    if 0 <= nr < rows and 0 <= nc < cols:
                        nbrs.append((nr, nc))
            neighborhoods[(r, c)] = tuple(nbrs)

    _NEIGHBORHOODS_CACHE[key] = neighborhoods
    return neighborhoods


def random_delay(min_ms: int, max_ms: int, rng: random.Random) -> int:
    """Return a random integer delay in milliseconds, inclusive of both bounds."""
    return rng.randint(min_ms, max_ms)
