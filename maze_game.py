import argparse
import copy
import logging
import os
import random
import sys

import pygame

from game_state import CAUGHT, ESCAPED, GROWL, PROXIMITY, GameState
from maze_config import DEFAULT_DIFFICULTY, DEFAULT_HEIGHT, DEFAULT_WIDTH, DIFFICULTIES, GameConfig
from maze_grid import DOWN, LEFT, RIGHT, UP

logger = logging.getLogger(__name__)

# ---------- Config ----------
FPS = 60
SCREEN_WIDTH = 900
SCREEN_HEIGHT = 760
TITLE = "Minotaur Maze"

WHITE = (255,255,255)
YELLOW = (220,200,60)
BG = (10, 10, 10)
WALL_COLOR = (74, 4, 4)
PLAYER_COLOR = (80,180,255)
MINOTAUR_COLOR = (170, 40, 30)
EXIT_COLOR = (50,200,80)

SOUND_FILES = {
    'growl': 'growl.wav',
    'move': 'move.wav',
    'win': 'win.wav',
    'lose': 'lose.wav',
}
MUSIC_FILE = 'background.mp3'
MUSIC_VOLUME = 0.3

# controls: arrow keys and WASD
MOVE_KEYS = {
    pygame.K_UP: UP, pygame.K_w: UP,
    pygame.K_DOWN: DOWN, pygame.K_s: DOWN,
    pygame.K_LEFT: LEFT, pygame.K_a: LEFT,
    pygame.K_RIGHT: RIGHT, pygame.K_d: RIGHT,
}


def format_time(seconds):
    seconds = int(seconds)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def load_sounds(sound_dir='.'):
    """Load whichever sound files exist; missing audio never stops the game."""
    sounds = {}
    if not pygame.mixer.get_init():
        return sounds
    for name, filename in SOUND_FILES.items():
        path = os.path.join(sound_dir, filename)
        if not os.path.isfile(path):
            continue
        try:
            sounds[name] = pygame.mixer.Sound(path)
        except pygame.error as exc:
            logger.warning("could not load sound %s: %s", path, exc)
    return sounds


# ---------- UI Button ----------
class Button:
    def __init__(self, rect, text, action=None, font=None):
        self.rect = pygame.Rect(rect)
        self.text = text
        self.action = action
        self.font = font
    def draw(self, surf, selected=False):
        pygame.draw.rect(surf, (48,52,70), self.rect, border_radius=8)
        pygame.draw.rect(surf, WHITE, self.rect, 2, border_radius=8)
        txt = self.font.render(self.text, True, WHITE)
        surf.blit(txt, txt.get_rect(center=self.rect.center))
        if selected:
            arrow = self.font.render(">", True, YELLOW)
            ar = arrow.get_rect()
            ar.centery = self.rect.centery
            ar.right = self.rect.left - 12
            surf.blit(arrow, ar)
    def handle_event(self, ev):
        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self.rect.collidepoint(ev.pos) and self.action:
                self.action()


# ---------- Main Game ----------
class MazeGame:
    def __init__(self, config=None, seed=None):
        pygame.init()
        try:
            pygame.mixer.init()
        except pygame.error as exc:
            logger.warning("audio unavailable: %s", exc)
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont('Arial', 20)
        self.title_font = pygame.font.SysFont('Arial', 36, bold=True)
        self.running = True

        # own copy, the difficulty toggle edits it
        self.config = copy.copy(config if config is not None else GameConfig()).validate()
        self.difficulty = self._difficulty_name(self.config.aggressiveness)
        self.rng = random.Random(seed)
        self.game = None

        self.state = 'menu'  # menu, instructions, playing, pause, game_over
        self.selection_index = 0
        self.buttons = []
        self.create_menu_buttons()
        self.pause_buttons = []
        self.gameover_buttons = []

        self.cell_size = 40
        self.margin_x = 0
        self.margin_y = 80
        self.sounds = load_sounds()
        self.music_path = MUSIC_FILE if os.path.isfile(MUSIC_FILE) else None
        self.music_playing = False
        self.muted = False

    @staticmethod
    def _difficulty_name(aggressiveness):
        for name, preset in DIFFICULTIES.items():
            if preset['aggressiveness'] == aggressiveness:
                return name
        return f"Custom ({aggressiveness:.2f})"

    def play_sound(self, name):
        if self.muted:
            return
        snd = self.sounds.get(name)
        if snd:
            snd.play()

    def start_music(self):
        if not self.music_path or not pygame.mixer.get_init():
            return
        try:
            pygame.mixer.music.load(self.music_path)
            pygame.mixer.music.set_volume(0.0 if self.muted else MUSIC_VOLUME)
            pygame.mixer.music.play(-1)
            self.music_playing = True
        except pygame.error as exc:
            logger.warning("could not play music %s: %s", self.music_path, exc)

    def stop_music(self):
        if self.music_playing:
            pygame.mixer.music.stop()
            self.music_playing = False

    def toggle_mute(self):
        self.muted = not self.muted
        if self.music_playing:
            pygame.mixer.music.set_volume(0.0 if self.muted else MUSIC_VOLUME)

    # ---------- menu / button creators ----------
    def create_menu_buttons(self):
        bfont = pygame.font.SysFont('Arial', 24)
        w = 220; h = 52; sx = SCREEN_WIDTH//2 - w//2; sy = 220; spacing = 74
        labels = [('Play', self.start_play), ('Difficulty', self.toggle_difficulty),
                  ('Instructions', self.open_instructions), ('Quit', self.quit_game)]
        self.buttons = [Button((sx, sy + i*spacing, w, h), lab, action=act, font=bfont)
                        for i, (lab, act) in enumerate(labels)]

    def _popup_buttons(self, labels, top):
        bfont = pygame.font.SysFont('Arial', 24)
        w = 280; h = 56; sx = SCREEN_WIDTH//2 - w//2
        return [Button((sx, top + i*80, w, h), lab, action=act, font=bfont)
                for i, (lab, act) in enumerate(labels)]

    def start_play(self):
        self.new_game()
        self.state = 'playing'

    def toggle_difficulty(self):
        keys = list(DIFFICULTIES.keys())
        idx = keys.index(self.difficulty) if self.difficulty in keys else -1
        self.difficulty = keys[(idx + 1) % len(keys)]
        self.config.aggressiveness = DIFFICULTIES[self.difficulty]['aggressiveness']

    def open_instructions(self):
        self.state = 'instructions'

    def quit_game(self):
        self.running = False

    def new_game(self):
        # a finished game is thrown away, never resumed
        self.game = GameState.new_game(self.config, rng=self.rng)
        grid = self.game.grid
        max_w = SCREEN_WIDTH - 80
        max_h = SCREEN_HEIGHT - self.margin_y - 40
        self.cell_size = max(6, min(45, max_w // grid.width, max_h // grid.height))
        self.margin_x = (SCREEN_WIDTH - self.cell_size * grid.width) // 2
        self.selection_index = 0
        self.pause_buttons = []
        self.gameover_buttons = []
        self.stop_music()
        self.start_music()

    # ---------- drawing ----------
    def draw_menu(self):
        self.screen.fill(BG)
        title = self.title_font.render(TITLE, True, WHITE)
        self.screen.blit(title, (SCREEN_WIDTH//2 - title.get_width()//2, 80))
        for btn in self.buttons:
            btn.draw(self.screen)
        diff_txt = self.font.render(f"Difficulty: {self.difficulty}", True, WHITE)
        self.screen.blit(diff_txt, (SCREEN_WIDTH - diff_txt.get_width() - 20, 20))

    def draw_instructions(self):
        self.screen.fill(BG)
        lines = [
            "Instructions:",
            "- Use arrow keys or WASD to reach the green exit.",
            "- The minotaur hunts you through the maze. Don't let it catch you.",
            "- Harder difficulties make the minotaur follow you more closely.",
            "- Press ESC to pause during play, M to mute.",
        ]
        y = 80
        for i,l in enumerate(lines):
            f = self.title_font if i==0 else self.font
            self.screen.blit(f.render(l, True, WHITE), (40, y))
            y += 50 if i==0 else 34

    def _cell_rect(self, pos, inset=0):
        x = self.margin_x + pos[0]*self.cell_size
        y = self.margin_y + pos[1]*self.cell_size
        return pygame.Rect(x+inset, y+inset, self.cell_size-2*inset, self.cell_size-2*inset)

    def draw_playing(self):
        self.screen.fill(BG)
        snap = self.game.snapshot()
        grid = snap['grid']
        cs = self.cell_size
        t = max(1, cs//8)
        for (cx, cy) in grid.positions():
            x = self.margin_x + cx*cs
            y = self.margin_y + cy*cs
            walls = grid.cells[cy][cx].walls
            if walls[0]: pygame.draw.line(self.screen, WALL_COLOR, (x,y),(x+cs,y), t)
            if walls[1]: pygame.draw.line(self.screen, WALL_COLOR, (x+cs,y),(x+cs,y+cs), t)
            if walls[2]: pygame.draw.line(self.screen, WALL_COLOR, (x,y+cs),(x+cs,y+cs), t)
            if walls[3]: pygame.draw.line(self.screen, WALL_COLOR, (x,y),(x,y+cs), t)

        pygame.draw.rect(self.screen, EXIT_COLOR, self._cell_rect(snap['exit'], 3), border_radius=4)
        pygame.draw.rect(self.screen, MINOTAUR_COLOR, self._cell_rect(snap['pursuer'], 5), border_radius=6)
        pc = self._cell_rect(snap['player']).center
        pygame.draw.circle(self.screen, PLAYER_COLOR, pc, max(4, cs//3))

        # HUD
        elapsed = format_time(snap['elapsed_ms'] // 1000)
        self.screen.blit(self.font.render(f"Difficulty: {self.difficulty}", True, WHITE), (20,20))
        self.screen.blit(self.font.render(f"Time: {elapsed}", True, WHITE), (SCREEN_WIDTH-160,20))
        if self.muted:
            self.screen.blit(self.font.render("Muted", True, YELLOW), (SCREEN_WIDTH//2 - 30,20))

    def draw_pause(self):
        overlay = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.SRCALPHA)
        overlay.fill((0,0,0,180))
        self.screen.blit(overlay, (0,0))
        msg = self.title_font.render("Paused", True, WHITE)
        self.screen.blit(msg, (SCREEN_WIDTH//2 - msg.get_width()//2, 120))
        if not self.pause_buttons:
            self.pause_buttons = self._popup_buttons(
                [("Resume", self._action_resume), ("Restart", self._action_restart),
                 ("Main Menu", self._action_mainmenu)], 220)
        for i,btn in enumerate(self.pause_buttons):
            btn.draw(self.screen, selected=(i == self.selection_index))

    def draw_game_over(self):
        overlay = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.SRCALPHA)
        overlay.fill((0,0,0,200))
        self.screen.blit(overlay, (0,0))
        elapsed = format_time(self.game.elapsed_ms // 1000)
        if self.game.status == ESCAPED:
            title, sub, again = "Freedom at Last!", f"You escaped the labyrinth in {elapsed}!", "Challenge Again"
        else:
            title, sub, again = ("The Minotaur Claims Another Victim",
                                 f"You survived for {elapsed} before being caught.", "Try Again")
        msg = self.title_font.render(title, True, WHITE)
        self.screen.blit(msg, (SCREEN_WIDTH//2 - msg.get_width()//2, 110))
        txt = self.font.render(sub, True, YELLOW)
        self.screen.blit(txt, (SCREEN_WIDTH//2 - txt.get_width()//2, 170))
        if not self.gameover_buttons:
            self.gameover_buttons = self._popup_buttons(
                [(again, self._action_restart), ("Main Menu", self._action_mainmenu)], 240)
        for i,btn in enumerate(self.gameover_buttons):
            btn.draw(self.screen, selected=(i == self.selection_index))

    # ---------- actions ----------
    def _action_resume(self):
        self.state = 'playing'
        self.selection_index = 0

    def _action_restart(self):
        self.new_game()
        self.state = 'playing'

    def _action_mainmenu(self):
        self.state = 'menu'
        self.stop_music()
        self.selection_index = 0
        self.pause_buttons = []
        self.gameover_buttons = []

    # ---------- event handling ----------
    def _handle_popup(self, ev, buttons):
        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            for b in buttons:
                b.handle_event(ev)
        if ev.type != pygame.KEYDOWN or not buttons:
            return
        if ev.key in (pygame.K_UP, pygame.K_w):
            self.selection_index = (self.selection_index - 1) % len(buttons)
        elif ev.key in (pygame.K_DOWN, pygame.K_s):
            self.selection_index = (self.selection_index + 1) % len(buttons)
        elif ev.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            if 0 <= self.selection_index < len(buttons):
                action = buttons[self.selection_index].action
                if action: action()

    def handle_event(self, ev):
        if ev.type == pygame.QUIT:
            self.running = False
            return
        if ev.type == pygame.KEYDOWN and ev.key == pygame.K_m:
            self.toggle_mute()
            return

        if self.state == 'menu':
            for b in self.buttons:
                b.handle_event(ev)
            if ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_ESCAPE:
                    self.running = False
                elif ev.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                    self.start_play()

        elif self.state == 'instructions':
            if ev.type == pygame.KEYDOWN and ev.key == pygame.K_ESCAPE:
                self.state = 'menu'
            if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
                self.state = 'menu'

        elif self.state == 'playing':
            if ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_ESCAPE:
                    self.state = 'pause'
                    self.selection_index = 0
                elif ev.key in MOVE_KEYS:
                    if self.game.apply_player_intent(MOVE_KEYS[ev.key]):
                        self.play_sound('move')
                    if self.game.is_over:
                        self.finish_game()

        elif self.state == 'pause':
            if ev.type == pygame.KEYDOWN and ev.key == pygame.K_ESCAPE:
                self.state = 'playing'
            else:
                self._handle_popup(ev, self.pause_buttons)

        elif self.state == 'game_over':
            self._handle_popup(ev, self.gameover_buttons)

    def handle_events(self):
        for ev in pygame.event.get():
            self.handle_event(ev)

    # ---------- update ----------
    def update(self, dt_ms):
        if self.state != 'playing':
            return
        events = self.game.tick(dt_ms)
        if PROXIMITY in events or GROWL in events:
            self.play_sound('growl')
        if ESCAPED in events or CAUGHT in events:
            self.finish_game()

    def finish_game(self):
        self.stop_music()
        self.play_sound('win' if self.game.status == ESCAPED else 'lose')
        self.state = 'game_over'
        self.selection_index = 0
        self.gameover_buttons = []

    def draw(self):
        if self.state == 'menu':
            self.draw_menu()
        elif self.state == 'instructions':
            self.draw_instructions()
        elif self.state == 'playing':
            self.draw_playing()
        elif self.state == 'pause':
            self.draw_playing()
            self.draw_pause()
        elif self.state == 'game_over':
            self.draw_playing()
            self.draw_game_over()

    # ---------- main loop ----------
    def run(self):
        dt = 0
        while self.running:
            self.handle_events()
            self.update(dt)
            self.draw()
            pygame.display.flip()
            dt = self.clock.tick(FPS)
        pygame.quit()


# ---------- run ----------
def build_parser():
    parser = argparse.ArgumentParser(description="Escape the maze before the minotaur catches you.")
    parser.add_argument('--width', type=int, default=DEFAULT_WIDTH, help="maze width in cells")
    parser.add_argument('--height', type=int, default=DEFAULT_HEIGHT, help="maze height in cells")
    parser.add_argument('--difficulty', choices=list(DIFFICULTIES), default=DEFAULT_DIFFICULTY)
    parser.add_argument('--aggressiveness', type=float, default=None,
                        help="chance (0-1) that the minotaur takes the shortest path; overrides --difficulty")
    parser.add_argument('--seed', type=int, default=None, help="seed for reproducible mazes")
    parser.add_argument('--log-level', default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser


def config_from_args(args, parser):
    overrides = {'width': args.width, 'height': args.height}
    if args.aggressiveness is not None:
        overrides['aggressiveness'] = args.aggressiveness
    try:
        return GameConfig.for_difficulty(args.difficulty, **overrides).validate()
    except ValueError as exc:
        parser.error(str(exc))


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format='%(asctime)s - %(levelname)s - %(message)s')
    config = config_from_args(args, parser)
    MazeGame(config, seed=args.seed).run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
