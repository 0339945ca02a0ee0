"""Per-decision movement of the minotaur: chase along the shortest path or wander."""

import logging
import random
from collections import namedtuple

from maze_grid import DIRECTIONS
from pathfinder import find_path

logger = logging.getLogger(__name__)

DEFAULT_PROXIMITY_STEPS = 3

# position: where the pursuer ends up; path: shortest path it saw (may be empty)
PursuitMove = namedtuple('PursuitMove', ['position', 'path', 'chased', 'proximity'])


def wander_step(grid, pos, rng):
    dirs = list(DIRECTIONS)
    rng.shuffle(dirs)
    for d in dirs:
        candidate = grid.step(pos, d)
        if grid.can_move(pos, candidate):
            return candidate
    return pos


def decide_pursuer_move(grid, pursuer, player, aggressiveness, rng=None,
                        proximity_steps=DEFAULT_PROXIMITY_STEPS):
    rng = rng if rng is not None else random
    pursuer = tuple(pursuer)
    path = find_path(grid, pursuer, player)
    if not path:
        return PursuitMove(pursuer, path, False, False)
    if rng.random() < aggressiveness:
        logger.debug("pursuer chases %s -> %s (%d steps left)", pursuer, path[0], len(path))
        return PursuitMove(path[0], path, True, len(path) < proximity_steps)
    nxt = wander_step(grid, pursuer, rng)
    logger.debug("pursuer wanders %s -> %s", pursuer, nxt)
    return PursuitMove(nxt, path, False, False)
