"""
Game basics: cells, lines and the N x N board.
Teaching notes:
- A board is an N x N grid (N >= 3, default 9); cells are EMPTY, O or X.
- A line is a row, a column or one of the two diagonals: 2 + 2N lines in total.
- Boards are values. Marking a cell derives a new board and never touches the
  receiver, so hypothetical boards explored during search cannot alias.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np

from .errors import CellOccupied, ConfigError, OutOfRange

DEFAULT_SIZE = 9
MIN_SIZE = 3


class Cell(IntEnum):
    EMPTY = 0
    O = 1
    X = 2

    @property
    def symbol(self) -> str:
        return CELL_SYMBOLS[self]


CELL_SYMBOLS = {Cell.EMPTY: '_', Cell.O: 'O', Cell.X: 'X'}
SYMBOL_CELLS = {v: k for k, v in CELL_SYMBOLS.items()}
SIDES = (Cell.O, Cell.X)


def opponent(side: Cell) -> Cell:
    if side == Cell.O:
        return Cell.X
    if side == Cell.X:
        return Cell.O
    raise ValueError(f"EMPTY is not a side: {side!r}")


def parse_side(text: str) -> Cell:
    cell = SYMBOL_CELLS.get(text.strip().upper())
    if cell is None or cell == Cell.EMPTY:
        raise ConfigError(f"Unknown side {text!r}; expected one of O, X")
    return cell


class LineKind(Enum):
    DIAGONAL = 'diagonal'
    ANTI_DIAGONAL = 'anti_diagonal'
    ROW = 'row'
    COLUMN = 'column'


@dataclass(frozen=True)
class Line:
    kind: LineKind
    index: int = 0

    def coords(self, size: int) -> List[Tuple[int, int]]:
        if self.kind == LineKind.DIAGONAL:
            return [(i, i) for i in range(size)]
        if self.kind == LineKind.ANTI_DIAGONAL:
            return [(i, size - i - 1) for i in range(size)]
        if self.kind == LineKind.ROW:
            return [(self.index, j) for j in range(size)]
        return [(i, self.index) for i in range(size)]

    def __str__(self) -> str:
        if self.kind in (LineKind.ROW, LineKind.COLUMN):
            return f"{self.kind.value}[{self.index}]"
        return self.kind.value


class Board:
    """Immutable N x N grid of cells backed by a read-only numpy array."""

    __slots__ = ('_cells',)

    def __init__(self, size: int = DEFAULT_SIZE):
        check_size(size)
        cells = np.zeros((size, size), dtype=np.int8)
        cells.flags.writeable = False
        self._cells = cells

    @classmethod
    def _wrap(cls, cells: np.ndarray) -> "Board":
        board = cls.__new__(cls)
        cells.flags.writeable = False
        board._cells = cells
        return board

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Board":
        """Build a board from row-major cell values, row 0 first."""
        try:
            cells = np.array(rows, dtype=np.int8)
        except (ValueError, OverflowError) as e:
            raise ConfigError(f"Rows do not form a square grid: {e}") from e
        if cells.ndim != 2 or cells.shape[0] != cells.shape[1]:
            raise ConfigError(f"Rows do not form a square grid: shape={cells.shape}")
        check_size(cells.shape[0])
        if not np.isin(cells, [int(c) for c in Cell]).all():
            raise ConfigError("Cell values must be 0 (empty), 1 (O) or 2 (X)")
        return cls._wrap(cells)

    @classmethod
    def parse(cls, text: str) -> "Board":
        """Parse `serialize()` output: rows of `_`/`O`/`X`, row 0 first.

        Rows may be separated by `/`; a flat string of N*N symbols is also
        accepted.
        """
        raw = ''.join(text.split())
        if '/' in raw:
            rows = raw.split('/')
        else:
            n = math.isqrt(len(raw))
            if n * n != len(raw) or n == 0:
                raise ConfigError(f"Board text of length {len(raw)} is not a square")
            rows = [raw[i * n:(i + 1) * n] for i in range(n)]
        values = []
        for row in rows:
            try:
                values.append([int(SYMBOL_CELLS[c.upper()]) for c in row])
            except KeyError as e:
                raise ConfigError(f"Invalid board symbol {e.args[0]!r}; expected _, O or X") from e
        return cls.from_rows(values)

    def serialize(self) -> str:
        return '/'.join(
            ''.join(CELL_SYMBOLS[Cell(int(v))] for v in row) for row in self._cells
        )

    @property
    def size(self) -> int:
        return self._cells.shape[0]

    def to_array(self) -> np.ndarray:
        """Read-only view of the cell values (row, col)."""
        return self._cells.view()

    def _check(self, row: int, col: int) -> None:
        n = self.size
        if not (0 <= row < n and 0 <= col < n):
            raise OutOfRange(f"cell ({row}, {col}) is outside a {n}x{n} board")

    def get(self, row: int, col: int) -> Cell:
        self._check(row, col)
        return Cell(int(self._cells[row, col]))

    def with_mark(self, row: int, col: int, side: Cell) -> "Board":
        self._check(row, col)
        side = Cell(side)
        if side == Cell.EMPTY:
            raise ValueError("Cannot mark a cell as EMPTY")
        occupant = self.get(row, col)
        if occupant != Cell.EMPTY:
            raise CellOccupied(f"cell ({row}, {col}) is already occupied by {occupant.symbol}")
        cells = self._cells.copy()
        cells[row, col] = side
        return Board._wrap(cells)

    def lines(self) -> Iterator[Line]:
        """Lazily yield diagonal, anti-diagonal, rows 0..N-1, columns 0..N-1."""
        yield Line(LineKind.DIAGONAL)
        yield Line(LineKind.ANTI_DIAGONAL)
        for i in range(self.size):
            yield Line(LineKind.ROW, i)
        for j in range(self.size):
            yield Line(LineKind.COLUMN, j)

    def line_values(self, line: Line) -> np.ndarray:
        n = self.size
        if line.kind == LineKind.DIAGONAL:
            return np.diagonal(self._cells)
        if line.kind == LineKind.ANTI_DIAGONAL:
            return np.diagonal(np.fliplr(self._cells))
        if not 0 <= line.index < n:
            raise OutOfRange(f"{line} is outside a {n}x{n} board")
        if line.kind == LineKind.ROW:
            return self._cells[line.index, :]
        return self._cells[:, line.index]

    def rank_of(self, side: Cell, line: Line) -> int:
        values = self.line_values(line)
        if np.any(values == opponent(side)):
            return 0
        return int(np.count_nonzero(values == side))

    def empty_cells(self) -> Iterator[Tuple[int, int]]:
        """Row-major iteration over empty coordinates."""
        for i, j in zip(*np.nonzero(self._cells == Cell.EMPTY)):
            yield int(i), int(j)

    def count(self, cell: Cell) -> int:
        return int(np.count_nonzero(self._cells == cell))

    def is_full(self) -> bool:
        return not np.any(self._cells == Cell.EMPTY)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    def __hash__(self) -> int:
        return hash((self.size, self._cells.tobytes()))

    def __repr__(self) -> str:
        return f"Board.parse({self.serialize()!r})"


def check_size(size: int) -> None:
    if size < MIN_SIZE:
        raise ConfigError(f"Board size must be >= {MIN_SIZE}, got {size}")


def board_from_marks(size: int, marks: Iterable[Tuple[int, int, Cell]]) -> Board:
    board = Board(size)
    for row, col, side in marks:
        board = board.with_mark(row, col, side)
    return board
