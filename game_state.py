"""Live game: player, minotaur, exit, cadence timers and win/lose detection."""

import logging
import random

from maze_config import GameConfig
from maze_generator import SEED_CELL, exit_cell, generate_maze
from maze_grid import DIRECTIONS
from pursuit import decide_pursuer_move

logger = logging.getLogger(__name__)

PLAYING = 'playing'
ESCAPED = 'escaped'
CAUGHT = 'caught'

# events returned by GameState.tick
PURSUER_MOVED = 'pursuer_moved'
PROXIMITY = 'proximity'
GROWL = 'growl'


class GameState:
    def __init__(self, grid, player, pursuer, exit_pos, config=None, rng=None):
        self.config = (config if config is not None else GameConfig()).validate()
        self.rng = rng if rng is not None else random
        self.grid = grid
        for name, pos in (('player', player), ('pursuer', pursuer), ('exit', exit_pos)):
            if not grid.in_bounds(pos):
                raise ValueError(f"{name} position {pos} is outside the {grid.width}x{grid.height} grid")
        self.player = tuple(player)
        self.pursuer = tuple(pursuer)
        self.exit = tuple(exit_pos)
        self.status = PLAYING
        self.elapsed_ms = 0
        self.since_pursuit_ms = 0
        self.since_growl_ms = 0

    @classmethod
    def new_game(cls, config=None, rng=None):
        config = (config if config is not None else GameConfig()).validate()
        w, h = config.width, config.height
        grid = generate_maze(w, h, rng)
        state = cls(grid, SEED_CELL, (w - 2, h - 2), exit_cell(w), config=config, rng=rng)
        logger.info("new game: %dx%d maze, aggressiveness %.2f", w, h, config.aggressiveness)
        return state

    @property
    def is_over(self):
        return self.status != PLAYING

    # ---------- input ----------
    def apply_player_intent(self, direction):
        """Move the player one cell if no wall is in the way. Returns True when moved."""
        if direction not in DIRECTIONS:
            raise ValueError(f"unknown direction {direction!r}")
        if self.is_over:
            return False
        candidate = self.grid.step(self.player, direction)
        if not self.grid.can_move(self.player, candidate):
            return False
        self.player = candidate
        # walking into the minotaur is caught at once, not on the next tick;
        # a shared exit cell is left to tick so escape still wins there
        if self.player == self.pursuer and self.player != self.exit:
            self.status = CAUGHT
            logger.info("game over: %s after %.1fs", self.status, self.elapsed_ms / 1000)
        return True

    # ---------- clock ----------
    def tick(self, elapsed_ms):
        """Advance the clock by elapsed_ms and return the events of this tick."""
        if self.is_over:
            return []
        events = []
        cfg = self.config
        self.elapsed_ms += elapsed_ms
        self.since_pursuit_ms += elapsed_ms
        self.since_growl_ms += elapsed_ms

        if self.since_pursuit_ms >= cfg.pursuit_interval_ms:
            # carry the overshoot into the next interval
            self.since_pursuit_ms -= cfg.pursuit_interval_ms
            move = decide_pursuer_move(self.grid, self.pursuer, self.player, cfg.aggressiveness,
                                       rng=self.rng, proximity_steps=cfg.proximity_steps)
            if move.position != self.pursuer:
                self.pursuer = move.position
                events.append(PURSUER_MOVED)
            if move.proximity:
                events.append(PROXIMITY)

        if self.since_growl_ms > cfg.growl_interval_ms and self.rng.random() < cfg.growl_chance:
            self.since_growl_ms = 0
            events.append(GROWL)

        # escape wins when the player steps onto the exit as the minotaur arrives
        if self.player == self.exit:
            self.status = ESCAPED
        elif self.player == self.pursuer:
            self.status = CAUGHT
        if self.is_over:
            logger.info("game over: %s after %.1fs", self.status, self.elapsed_ms / 1000)
            events.append(self.status)
        return events

    # ---------- observation ----------
    def snapshot(self):
        return {
            'grid': self.grid,
            'player': self.player,
            'pursuer': self.pursuer,
            'exit': self.exit,
            'status': self.status,
            'elapsed_ms': self.elapsed_ms,
        }
