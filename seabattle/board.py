"""Game boards: positions, grids, fleet files and the end-of-game check."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .conversions import split_words

SIZE = 8
COLUMNS = "ABCDEFGH"
ROWS = "12345678"
WATER = "."
MISS = "o"
HIT = "x"
FLEET_CELLS = 14
SHIP_COUNT = 4
SHIP_SIZES = "2345"


class InvalidPositionError(ValueError):
    """Raised when a typed target is not a square of the board."""


class FleetError(ValueError):
    """Raised when a fleet description cannot be loaded."""


class Outcome(enum.IntEnum):
    """State of the game; the values double as the program's exit status."""

    WON = 0
    LOST = 1
    ONGOING = 2


@dataclass(frozen=True)
class Position:
    """A square of the board, both coordinates counted from zero."""

    col: int
    line: int

    def __post_init__(self) -> None:
        if not (0 <= self.col < SIZE and 0 <= self.line < SIZE):
            raise InvalidPositionError(f"square out of the board: {self.col}, {self.line}")

    def label(self) -> str:
        """Return the square's name, such as ``A1``."""
        return COLUMNS[self.col] + ROWS[self.line]


def parse_position(text: str) -> Position:
    """Parse a target such as ``B3``, ``b3`` or ``3B``."""
    if len(text) != 2:
        raise InvalidPositionError("wrong position")
    first, second = text
    if first.upper() in COLUMNS and second in ROWS:
        letter, digit = first, second
    elif first in ROWS and second.upper() in COLUMNS:
        letter, digit = second, first
    else:
        raise InvalidPositionError("wrong position")
    return Position(COLUMNS.index(letter.upper()), ROWS.index(digit))


def _empty_cells() -> list[list[str]]:
    return [[WATER] * SIZE for _ in range(SIZE)]


@dataclass
class Grid:
    """An 8x8 board; cells hold water, a ship size digit, a miss or a hit."""

    cells: list[list[str]] = field(default_factory=_empty_cells)

    def __getitem__(self, position: Position) -> str:
        return self.cells[position.line][position.col]

    def __setitem__(self, position: Position, value: str) -> None:
        self.cells[position.line][position.col] = value

    def mark(self, position: Position, hit: bool) -> None:
        """Record a shot's result on the square."""
        self[position] = HIT if hit else MISS

    def receive_shot(self, position: Position) -> bool:
        """Apply an incoming shot and return whether it hit a ship.

        A square already shot at counts as a miss and stays unchanged.
        """
        cell = self[position]
        if cell in (MISS, HIT):
            return False
        hit = cell != WATER
        self.mark(position, hit)
        return hit

    def hit_count(self) -> int:
        return sum(row.count(HIT) for row in self.cells)

    def all_sunk(self) -> bool:
        """True once every ship square of a full fleet has been hit."""
        return self.hit_count() == FLEET_CELLS

    def render(self) -> str:
        lines = [" |A B C D E F G H", "-+---------------"]
        lines.extend(f"{number}|{' '.join(row)}" for number, row in enumerate(self.cells, 1))
        return "\n".join(lines) + "\n"


@dataclass
class Maps:
    """The player's own board and what is known of the enemy's."""

    own: Grid = field(default_factory=Grid)
    enemy: Grid = field(default_factory=Grid)

    def render(self) -> str:
        return (
            "\nmy positions:\n"
            + self.own.render()
            + "\nenemy's positions:\n"
            + self.enemy.render()
        )

    def outcome(self) -> Outcome:
        if self.enemy.all_sunk():
            return Outcome.WON
        if self.own.all_sunk():
            return Outcome.LOST
        return Outcome.ONGOING


def _coordinate(word: str) -> tuple[str, str]:
    return word[0], word[1] if len(word) > 1 else "\0"


def _span(start: int, end: int) -> range:
    step = 1 if end > start else -1
    return range(start, end + step, step)


def _place_ship(grid: Grid, line: str) -> None:
    words = split_words(line, ":")
    if len(words) != 3:
        raise FleetError(f"invalid ship description: {line!r}")
    symbol = words[0][0]
    if symbol not in SHIP_SIZES:
        raise FleetError(f"invalid ship size: {line!r}")
    (col1, row1), (col2, row2) = _coordinate(words[1]), _coordinate(words[2])
    if not ((col1 == col2 and row1 != row2) or (row1 == row2 and col1 != col2)):
        raise FleetError(f"ship is not a straight line: {line!r}")
    if any(c not in COLUMNS or r not in ROWS for c, r in ((col1, row1), (col2, row2))):
        raise FleetError(f"ship out of the board: {line!r}")

    if col1 == col2:
        col = COLUMNS.index(col1)
        start, end = ROWS.index(row1), ROWS.index(row2)
        squares = [Position(col, row) for row in _span(start, end)]
    else:
        row = ROWS.index(row1)
        start, end = COLUMNS.index(col1), COLUMNS.index(col2)
        squares = [Position(col, row) for col in _span(start, end)]
    if abs(end - start) != int(symbol) - 1:
        raise FleetError(f"ship length does not match its size: {line!r}")

    *body, last = squares
    for square in body:
        if grid[square] != WATER:
            raise FleetError(f"ships overlap: {line!r}")
        grid[square] = symbol
    # The end square is written without an overlap check.
    grid[last] = symbol


def _strip_newline(line: str) -> str:
    return line[:-1] if line.endswith("\n") else line


def parse_fleet(lines: Iterable[str]) -> Maps:
    """Build the boards from the four lines ``size:start:end`` of a fleet."""
    rows = [_strip_newline(line) for line in lines]
    if len(rows) < SHIP_COUNT:
        raise FleetError("a fleet needs four ships")
    grid = Grid()
    for row in rows[:SHIP_COUNT]:
        _place_ship(grid, row)
    if len(rows) > SHIP_COUNT:
        raise FleetError("a fleet has exactly four ships")
    if len({row[:1] for row in rows}) != SHIP_COUNT:
        raise FleetError("every ship must have a different size")
    return Maps(own=grid)


def load_fleet(path: str | Path) -> Maps:
    """Read a fleet file and return the initial boards."""
    try:
        text = Path(path).read_text()
    except OSError as exc:
        raise FleetError("Trying to open something that doesn't exist.") from exc
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return parse_fleet(lines)