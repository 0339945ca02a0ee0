import random
import unittest

from maze_fixtures import ScriptedRandom, open_path
from maze_grid import Grid
from pursuit import decide_pursuer_move, wander_step


def branching_grid():
    # (0,0)-(1,0)-(2,0) with a spur (1,0)-(1,1)
    grid = open_path(Grid(4, 4), [(0, 0), (1, 0), (2, 0)])
    return open_path(grid, [(1, 0), (1, 1)])


class DecidePursuerMoveTests(unittest.TestCase):
    def test_chase_takes_first_step_of_shortest_path(self) -> None:
        move = decide_pursuer_move(branching_grid(), (1, 0), (1, 1), 0.5, rng=ScriptedRandom([0.2]))
        self.assertEqual(move.position, (1, 1))
        self.assertTrue(move.chased)
        self.assertEqual(move.path, [(1, 1)])

    def test_wander_takes_first_legal_direction(self) -> None:
        move = decide_pursuer_move(branching_grid(), (1, 0), (1, 1), 0.5, rng=ScriptedRandom([0.7]))
        # up is off the grid, right is open
        self.assertEqual(move.position, (2, 0))
        self.assertFalse(move.chased)
        self.assertFalse(move.proximity)

    def test_zero_aggressiveness_never_chases(self) -> None:
        move = decide_pursuer_move(branching_grid(), (1, 0), (1, 1), 0.0, rng=ScriptedRandom([0.0]))
        self.assertFalse(move.chased)

    def test_full_aggressiveness_always_chases(self) -> None:
        move = decide_pursuer_move(branching_grid(), (0, 0), (1, 1), 1.0, rng=ScriptedRandom([0.999]))
        self.assertEqual(move.position, (1, 0))
        self.assertTrue(move.chased)

    def test_no_path_means_no_move_and_no_draw(self) -> None:
        rng = ScriptedRandom([])
        same = decide_pursuer_move(branching_grid(), (1, 1), (1, 1), 1.0, rng=rng)
        self.assertEqual(same.position, (1, 1))
        self.assertEqual(same.path, [])
        cut_off = decide_pursuer_move(branching_grid(), (0, 0), (3, 3), 1.0, rng=rng)
        self.assertEqual(cut_off.position, (0, 0))
        self.assertFalse(cut_off.chased)

    def test_proximity_only_when_close_and_chasing(self) -> None:
        grid = branching_grid()
        close = decide_pursuer_move(grid, (1, 0), (2, 0), 1.0, rng=ScriptedRandom([0.0]))
        self.assertTrue(close.proximity)
        far = decide_pursuer_move(grid, (0, 0), (1, 1), 1.0, rng=ScriptedRandom([0.0]), proximity_steps=2)
        self.assertFalse(far.proximity)
        wandering = decide_pursuer_move(grid, (1, 0), (2, 0), 0.0, rng=ScriptedRandom([0.5]))
        self.assertFalse(wandering.proximity)


class WanderStepTests(unittest.TestCase):
    def test_walled_in_stays_put(self) -> None:
        self.assertEqual(wander_step(Grid(4, 4), (2, 2), ScriptedRandom([])), (2, 2))

    def test_direction_order_is_shuffled(self) -> None:
        grid = open_path(Grid(5, 5), [(2, 1), (2, 2), (2, 3)])
        open_path(grid, [(1, 2), (2, 2), (3, 2)])
        rng = random.Random(11)
        seen = set()
        for _ in range(40):
            nxt = wander_step(grid, (2, 2), rng)
            self.assertTrue(grid.can_move((2, 2), nxt))
            seen.add(nxt)
        self.assertGreaterEqual(len(seen), 2)

    def test_only_exit_is_taken(self) -> None:
        grid = open_path(Grid(4, 4), [(2, 2), (1, 2)])
        self.assertEqual(wander_step(grid, (2, 2), ScriptedRandom([])), (1, 2))


if __name__ == "__main__":
    unittest.main()
