import os
import unittest
from unittest import mock

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame

from game_state import CAUGHT, ESCAPED
from maze_config import GameConfig
from maze_game import MOVE_KEYS, MUSIC_VOLUME, MazeGame, build_parser, config_from_args, format_time
from maze_grid import DIRECTIONS, LEFT, UP


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


class FakeSound:
    def __init__(self):
        self.plays = 0

    def play(self):
        self.plays += 1


class HelperTests(unittest.TestCase):
    def test_format_time(self) -> None:
        self.assertEqual(format_time(0), "00:00")
        self.assertEqual(format_time(75), "01:15")
        self.assertEqual(format_time(3599.9), "59:59")

    def test_move_keys_cover_all_directions(self) -> None:
        self.assertEqual(set(MOVE_KEYS.values()), set(DIRECTIONS))
        self.assertEqual(MOVE_KEYS[pygame.K_w], UP)
        self.assertEqual(MOVE_KEYS[pygame.K_LEFT], LEFT)

    def test_cli_config(self) -> None:
        parser = build_parser()
        args = parser.parse_args(['--width', '9', '--height', '7', '--difficulty', 'Hard'])
        cfg = config_from_args(args, parser)
        self.assertEqual((cfg.width, cfg.height, cfg.aggressiveness), (9, 7, 0.9))
        args = parser.parse_args(['--aggressiveness', '0.2'])
        self.assertEqual(config_from_args(args, parser).aggressiveness, 0.2)

    def test_cli_rejects_bad_config(self) -> None:
        parser = build_parser()
        args = parser.parse_args(['--width', '2'])
        with self.assertRaises(SystemExit):
            config_from_args(args, parser)


class MazeGameTests(unittest.TestCase):
    def setUp(self) -> None:
        self.app = MazeGame(GameConfig(width=9, height=9), seed=3)

    def tearDown(self) -> None:
        pygame.quit()

    def test_menu_to_playing(self) -> None:
        self.assertEqual(self.app.state, 'menu')
        self.app.draw()
        self.app.handle_event(key(pygame.K_RETURN))
        self.assertEqual(self.app.state, 'playing')
        self.assertEqual(self.app.game.player, (1, 1))
        self.app.draw()

    def test_arrow_keys_move_player_through_open_walls(self) -> None:
        self.app.start_play()
        game = self.app.game
        for k, d in MOVE_KEYS.items():
            old = game.player
            expected = game.grid.step(old, d) if game.grid.can_move(old, game.grid.step(old, d)) else old
            self.app.handle_event(key(k))
            self.assertEqual(game.player, expected)

    def test_pause_stops_the_clock(self) -> None:
        self.app.start_play()
        self.app.handle_event(key(pygame.K_ESCAPE))
        self.assertEqual(self.app.state, 'pause')
        self.app.update(10000)
        self.assertEqual(self.app.game.elapsed_ms, 0)
        self.app.draw()
        self.app.handle_event(key(pygame.K_ESCAPE))
        self.assertEqual(self.app.state, 'playing')

    def test_escape_shows_game_over_and_restart_makes_new_game(self) -> None:
        self.app.start_play()
        first = self.app.game
        first.player = first.exit
        self.app.update(16)
        self.assertEqual(first.status, ESCAPED)
        self.assertEqual(self.app.state, 'game_over')
        self.app.draw()
        self.app.handle_event(key(pygame.K_RETURN))
        self.assertEqual(self.app.state, 'playing')
        self.assertIsNot(self.app.game, first)

    def test_capture_shows_game_over(self) -> None:
        self.app.start_play()
        self.app.game.pursuer = self.app.game.player
        self.app.update(16)
        self.assertEqual(self.app.game.status, CAUGHT)
        self.assertEqual(self.app.state, 'game_over')
        self.app.draw()

    def test_toggle_difficulty_cycles_presets(self) -> None:
        self.assertEqual(self.app.difficulty, 'Normal')
        self.app.toggle_difficulty()
        self.assertEqual(self.app.difficulty, 'Hard')
        self.assertEqual(self.app.config.aggressiveness, 0.9)
        self.app.toggle_difficulty()
        self.assertEqual(self.app.difficulty, 'Easy')

    def test_toggle_difficulty_leaves_caller_config_alone(self) -> None:
        cfg = GameConfig(width=9, height=9)
        app = MazeGame(cfg, seed=1)
        app.toggle_difficulty()
        self.assertEqual(app.config.aggressiveness, 0.9)
        self.assertEqual(cfg.aggressiveness, 0.7)

    def test_walking_into_minotaur_ends_game_at_once(self) -> None:
        self.app.start_play()
        game = self.app.game
        k, d = next((k, d) for k, d in MOVE_KEYS.items()
                    if game.grid.can_move(game.player, game.grid.step(game.player, d)))
        game.pursuer = game.grid.step(game.player, d)
        self.app.handle_event(key(k))
        self.assertEqual(game.status, CAUGHT)
        self.assertEqual(self.app.state, 'game_over')

    def test_mute_key_silences_sound_effects(self) -> None:
        move = FakeSound()
        self.app.sounds = {'move': move}
        self.app.play_sound('move')
        self.assertEqual(move.plays, 1)
        self.app.handle_event(key(pygame.K_m))
        self.assertTrue(self.app.muted)
        self.app.play_sound('move')
        self.assertEqual(move.plays, 1)
        self.app.handle_event(key(pygame.K_m))
        self.assertFalse(self.app.muted)

    def test_background_music_loops_until_game_over(self) -> None:
        self.app.music_path = 'background.mp3'
        with mock.patch.object(pygame.mixer, 'music') as music, \
                mock.patch.object(pygame.mixer, 'get_init', return_value=(44100, -16, 2)):
            self.app.start_play()
            music.load.assert_called_once_with('background.mp3')
            music.set_volume.assert_called_with(MUSIC_VOLUME)
            music.play.assert_called_once_with(-1)

            self.app.handle_event(key(pygame.K_m))
            music.set_volume.assert_called_with(0.0)
            self.app.draw()

            self.app.game.player = self.app.game.exit
            self.app.update(16)
            self.assertEqual(self.app.state, 'game_over')
            music.stop.assert_called_once_with()
            self.assertFalse(self.app.music_playing)

    def test_no_music_file_means_no_music(self) -> None:
        self.app.music_path = None
        with mock.patch.object(pygame.mixer, 'music') as music:
            self.app.start_play()
            music.play.assert_not_called()

    def test_quit_event_stops_loop(self) -> None:
        self.app.handle_event(pygame.event.Event(pygame.QUIT))
        self.assertFalse(self.app.running)


if __name__ == "__main__":
    unittest.main()
