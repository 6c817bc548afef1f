from dataclasses import dataclass
from typing import Callable, Tuple

MapPos = Tuple[int, int]  # (column, row) in odd-q offset coordinates
DistanceFn = Callable[[MapPos, MapPos], int]

def _offset_to_cube(pos: MapPos) -> Tuple[int, int, int]:
    col, row = pos
    x = col
    z = row - ((col - (col & 1)) >> 1)
    return x, -x - z, z

def hex_distance(pos1: MapPos, pos2: MapPos) -> int:
    """Calculate hex distance between two offset positions using cube coordinates."""
    x1, y1, z1 = _offset_to_cube(pos1)
    x2, y2, z2 = _offset_to_cube(pos2)
    return max(abs(x1 - x2), abs(y1 - y2), abs(z1 - z2))

@dataclass(frozen=True)
class MapPath:
    """Ordered waypoints produced by pathfinding, origin first."""
    nodes: Tuple[MapPos, ...]

    def __post_init__(self):
        object.__setattr__(self, "nodes", tuple(tuple(p) for p in self.nodes))

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def origin(self) -> MapPos:
        return self.nodes[0]

    @property
    def destination(self) -> MapPos:
        return self.nodes[-1]

    def truncated(self, index: int) -> "MapPath":
        """Prefix of the path ending at waypoint `index` (inclusive)."""
        return MapPath(self.nodes[:index + 1])
