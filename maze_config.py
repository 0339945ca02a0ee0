"""Game settings and difficulty presets."""

from maze_generator import MIN_SIZE

DEFAULT_WIDTH = 15
DEFAULT_HEIGHT = 15

# aggressiveness: 0 = always wander, 1 = perfect pathfinding
DIFFICULTIES = {
    'Easy': {'aggressiveness': 0.5},
    'Normal': {'aggressiveness': 0.7},
    'Hard': {'aggressiveness': 0.9},
}
DEFAULT_DIFFICULTY = 'Normal'


class GameConfig:
    def __init__(self, width=DEFAULT_WIDTH, height=DEFAULT_HEIGHT,
                 aggressiveness=DIFFICULTIES[DEFAULT_DIFFICULTY]['aggressiveness'],
                 pursuit_interval_ms=500, proximity_steps=3,
                 growl_interval_ms=5000, growl_chance=0.3):
        self.width = width
        self.height = height
        self.aggressiveness = aggressiveness
        self.pursuit_interval_ms = pursuit_interval_ms
        self.proximity_steps = proximity_steps
        self.growl_interval_ms = growl_interval_ms
        self.growl_chance = growl_chance

    @classmethod
    def for_difficulty(cls, name, **overrides):
        if name not in DIFFICULTIES:
            raise ValueError(f"unknown difficulty {name!r}, expected one of {', '.join(DIFFICULTIES)}")
        settings = dict(DIFFICULTIES[name])
        settings.update(overrides)
        return cls(**settings)

    def validate(self):
        if self.width < MIN_SIZE or self.height < MIN_SIZE:
            raise ValueError(f"width and height must be at least {MIN_SIZE}")
        if not 0.0 <= self.aggressiveness <= 1.0:
            raise ValueError("aggressiveness must be between 0 and 1")
        if not 0.0 <= self.growl_chance <= 1.0:
            raise ValueError("growl_chance must be between 0 and 1")
        if self.pursuit_interval_ms <= 0 or self.growl_interval_ms <= 0:
            raise ValueError("intervals must be positive")
        if self.proximity_steps < 1:
            raise ValueError("proximity_steps must be at least 1")
        return self

    def __repr__(self):
        return (f"GameConfig({self.width}x{self.height}, aggressiveness={self.aggressiveness}, "
                f"pursuit_interval_ms={self.pursuit_interval_ms})")
