"""Cell/wall grid shared by the generator, the pathfinder and the game state."""

# ---------- Directions ----------
# wall index order matches Cell.walls: top, right, bottom, left
UP, RIGHT, DOWN, LEFT = 0, 1, 2, 3
DIRECTIONS = (UP, RIGHT, DOWN, LEFT)
DIRECTION_NAMES = {UP: 'up', RIGHT: 'right', DOWN: 'down', LEFT: 'left'}

# (dx, dy) with y growing downwards
OFFSETS = {
    UP: (0, -1),
    RIGHT: (1, 0),
    DOWN: (0, 1),
    LEFT: (-1, 0),
}


def opposite(direction):
    return (direction + 2) % 4


# ---------- Cell ----------
class Cell:
    __slots__ = ('walls', 'visited')

    def __init__(self):
        self.walls = [True, True, True, True]
        self.visited = False

    def __repr__(self):
        return f"Cell(walls={self.walls}, visited={self.visited})"


# ---------- Grid ----------
class Grid:
    """A width x height block of cells addressed by (x, y) positions."""

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells = [[Cell() for _ in range(width)] for _ in range(height)]

    def __repr__(self):
        return f"Grid({self.width}x{self.height})"

    def in_bounds(self, pos) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, pos) -> Cell:
        x, y = pos
        return self.cells[y][x]

    @staticmethod
    def step(pos, direction):
        dx, dy = OFFSETS[direction]
        return (pos[0] + dx, pos[1] + dy)

    @staticmethod
    def direction_between(src, dst):
        """Direction leading from src to an adjacent dst, or None."""
        offset = (dst[0] - src[0], dst[1] - src[1])
        for d, off in OFFSETS.items():
            if off == offset:
                return d
        return None

    def neighbors_in_bounds(self, pos):
        res = []
        for d in DIRECTIONS:
            n = self.step(pos, d)
            if self.in_bounds(n):
                res.append((n, d))
        return res

    def is_open(self, pos, direction) -> bool:
        return not self.cell(pos).walls[direction]

    def can_move(self, src, dst) -> bool:
        if not (self.in_bounds(src) and self.in_bounds(dst)):
            return False
        d = self.direction_between(src, dst)
        if d is None:
            return False
        return self.is_open(src, d)

    def carve(self, pos, direction):
        """Remove the wall on `direction` of pos and the matching wall of its neighbor."""
        self.cell(pos).walls[direction] = False
        n = self.step(pos, direction)
        if self.in_bounds(n):
            self.cell(n).walls[opposite(direction)] = False

    def reset_visited(self):
        for row in self.cells:
            for c in row:
                c.visited = False

    def positions(self):
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def open_edges(self):
        """Every open edge between two in-bounds cells, as frozensets of positions."""
        edges = set()
        for pos in self.positions():
            # right and down are enough to see each edge once
            for d in (RIGHT, DOWN):
                n = self.step(pos, d)
                if self.in_bounds(n) and self.is_open(pos, d):
                    edges.add(frozenset((pos, n)))
        return edges
