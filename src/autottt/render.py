"""Text rendering of boards: highest row first, columns left to right."""
from __future__ import annotations

from typing import Dict, Optional

from .game_basics import CELL_SYMBOLS, Board, Cell

SEPARATOR = '********'


def render(board: Board, symbols: Optional[Dict[Cell, str]] = None) -> str:
    symbols = symbols or CELL_SYMBOLS
    cells = board.to_array()
    lines = []
    for i in range(board.size - 1, -1, -1):
        lines.append(''.join(symbols[Cell(int(v))] for v in cells[i]))
    return '\n'.join(lines)
