"""The game map: a grid of cells with walls, sprites and one player."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterable

from .errors import MapError

PLAYER_CHARS = "NSWE"
VALID_CHARS = "NSWE012"
_OPEN_CHARS = "02"

# Starting direction and camera plane for each facing.
_FACINGS = {
    "N": (0.0, -1.0, 0.66, 0.0),
    "S": (0.0, 1.001, -0.66, 0.0),
    "E": (1.001, 0.0, 0.0, 0.66),
    "W": (-1.0, 0.0, 0.0, -0.66),
}


@dataclass
class Camera:
    """Player position, view direction and camera plane, in map units."""

    pos_x: float
    pos_y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float


@dataclass(frozen=True)
class GameMap:
    """A rectangular map stored row by row in ``cells``."""

    width: int
    height: int
    cells: str

    def __post_init__(self) -> None:
        if len(self.cells) != self.width * self.height:
            raise MapError("map size does not match its cells")

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> GameMap:
        """Build a map from its text rows; spaces are dropped."""
        cleaned = [row.replace(" ", "") for row in rows]
        if not cleaned:
            raise MapError("Map absente")
        width = len(cleaned[0])
        if any(len(row) != width for row in cleaned):
            raise MapError("Largeur de ligne inegales")
        return cls(width, len(cleaned), "".join(cleaned))

    def cell(self, x: int, y: int) -> str:
        """Return the cell at ``x + y * width`` in the row-by-row layout."""
        index = x + y * self.width
        if not 0 <= index < len(self.cells):
            raise IndexError(f"cell ({x}, {y}) outside the map")
        return self.cells[index]

    def count_players(self) -> int:
        """Return how many player start cells the map holds."""
        return sum(self.cells.count(ch) for ch in PLAYER_CHARS)

    def check_chars(self) -> None:
        """Raise MapError if a cell holds an unknown character."""
        if any(ch not in VALID_CHARS for ch in self.cells):
            raise MapError("Charactere non valide")

    def check_closed(self) -> None:
        """Raise MapError if the player can reach the edge of the map."""
        reached = {
            divmod(i, self.width)[::-1]
            for i, ch in enumerate(self.cells)
            if ch in PLAYER_CHARS
        }
        pending = deque(reached)
        while pending:
            x, y = pending.popleft()
            for nx, ny in ((x - 1, y), (x, y - 1), (x + 1, y), (x, y + 1)):
                if (
                    0 <= nx < self.width
                    and 0 <= ny < self.height
                    and (nx, ny) not in reached
                    and self.cells[nx + ny * self.width] in _OPEN_CHARS
                ):
                    reached.add((nx, ny))
                    pending.append((nx, ny))
        last_x, last_y = self.width - 1, self.height - 1
        if any(x in (0, last_x) or y in (0, last_y) for x, y in reached):
            raise MapError("Map ouverte")

    def validate(self) -> None:
        """Run every map check, raising MapError on the first failure."""
        self.check_chars()
        if self.count_players() != 1:
            raise MapError("Il y a trop ou pas de joueurs sur la map")
        self.check_closed()

    def initial_camera(self) -> Camera:
        """Return the camera placed on the player start, facing its letter."""
        chosen: tuple[int, str] | None = None
        for priority in ("SE", "NW"):
            for index, ch in enumerate(self.cells):
                if ch in priority:
                    chosen = (index, ch)
        if chosen is None:
            raise MapError("Il y a trop ou pas de joueurs sur la map")
        index, ch = chosen
        dir_x, dir_y, plane_x, plane_y = _FACINGS[ch]
        return Camera(
            pos_x=index % self.width + 0.5,
            pos_y=index // self.width + 0.5,
            dir_x=dir_x,
            dir_y=dir_y,
            plane_x=plane_x,
            plane_y=plane_y,
        )