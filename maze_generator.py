"""Perfect maze generation (randomized DFS recursive backtracker)."""

import logging
import random

from maze_grid import Grid, LEFT, RIGHT

logger = logging.getLogger(__name__)

MIN_SIZE = 4
SEED_CELL = (1, 1)


def exit_cell(width):
    return (width - 2, 1)


def _check_size(width, height):
    if width < MIN_SIZE or height < MIN_SIZE:
        raise ValueError(f"maze must be at least {MIN_SIZE}x{MIN_SIZE}, got {width}x{height}")


def _unvisited_neighbors(grid, pos, rng):
    neigh = [(n, d) for (n, d) in grid.neighbors_in_bounds(pos) if not grid.cell(n).visited]
    rng.shuffle(neigh)
    return neigh


def carve_maze(width, height, rng=None, start=SEED_CELL):
    """Carve a spanning tree over a fresh grid, starting from `start`.

    Same visiting order as the recursive backtracker: each cell shuffles its
    unvisited neighbors once, then walks that list, skipping any neighbor a
    deeper branch already reached. The recursion is kept on an explicit
    stack of (cell, remaining candidates) frames.
    """
    _check_size(width, height)
    rng = rng if rng is not None else random
    grid = Grid(width, height)
    grid.cell(start).visited = True
    stack = [(start, iter(_unvisited_neighbors(grid, start, rng)))]
    while stack:
        pos, candidates = stack[-1]
        nxt = next(candidates, None)
        if nxt is None:
            stack.pop()
            continue
        n, d = nxt
        if grid.cell(n).visited:
            continue
        grid.carve(pos, d)
        grid.cell(n).visited = True
        stack.append((n, iter(_unvisited_neighbors(grid, n, rng))))
    return grid


def open_boundaries(grid):
    """Open the entrance left of the seed cell and the exit corridor right of the exit cell."""
    grid.carve(SEED_CELL, LEFT)
    grid.carve(exit_cell(grid.width), RIGHT)


def generate_maze(width, height, rng=None):
    grid = carve_maze(width, height, rng)
    open_boundaries(grid)
    grid.reset_visited()
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("generated %dx%d maze with %d open edges", width, height, len(grid.open_edges()))
    return grid
