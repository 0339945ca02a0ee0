"""Breadth-first shortest path over a maze grid."""

from collections import deque

from maze_grid import DIRECTIONS


def find_path(grid, source, target):
    """Shortest path from source to target, excluding source and including target.

    Returns [] when source == target or when target can't be reached.
    """
    source, target = tuple(source), tuple(target)
    if source == target:
        return []
    came_from = {source: None}
    queue = deque([source])
    while queue:
        cur = queue.popleft()
        if cur == target:
            path = []
            while cur != source:
                path.append(cur)
                cur = came_from[cur]
            path.reverse()
            return path
        for d in DIRECTIONS:
            nxt = grid.step(cur, d)
            # marked on enqueue so a cell is never queued twice
            if nxt not in came_from and grid.can_move(cur, nxt):
                came_from[nxt] = cur
                queue.append(nxt)
    return []
