"""
Cells and cell-sets on the integer grid.

A polyomino is held as a tuple of ``Coord`` values. ``canonize_fixed`` is the
translation normal form: shift so both minimum coordinates are 0, then sort.
Two shapes that differ only by a translation have the same fixed form.
"""
from __future__ import annotations

from typing import Iterable, List, NamedTuple, Tuple


class Coord(NamedTuple):
    x: int
    y: int

    def rotate(self) -> "Coord":
        """Quarter turn about the origin: (x, y) -> (-y, x)."""
        return Coord(-self.y, self.x)

    def transpose(self) -> "Coord":
        """Reflection across the main diagonal: (x, y) -> (y, x)."""
        return Coord(self.y, self.x)


Polyomino = Tuple[Coord, ...]

MONOMINO: Polyomino = (Coord(0, 0),)


def canonize_fixed(cells: Iterable[Tuple[int, int]]) -> Polyomino:
    cells = list(cells)
    # an empty cell-set never comes out of the growth engine; keep it total anyway
    min_x = min((c[0] for c in cells), default=0)
    min_y = min((c[1] for c in cells), default=0)
    return tuple(sorted(Coord(x - min_x, y - min_y) for x, y in cells))


def rotate(cells: Iterable[Coord]) -> Polyomino:
    return canonize_fixed(c.rotate() for c in cells)


def transpose(cells: Iterable[Coord]) -> Polyomino:
    return canonize_fixed(c.transpose() for c in cells)


def neighbors(cell: Coord) -> List[Coord]:
    x, y = cell
    return [Coord(x + 1, y), Coord(x - 1, y), Coord(x, y + 1), Coord(x, y - 1)]


def format_cells(cells: Iterable[Tuple[int, int]]) -> str:
    """Render cells as ``x0,y0,x1,y1,...``, the key format of the listings."""
    return ",".join(f"{x},{y}" for x, y in cells)


def parse_cells(text: str) -> Polyomino:
    """Inverse of ``format_cells``.

    Cell order is preserved; no canonicalization is applied.
    """
    raw = text.strip()
    if not raw:
        return ()
    try:
        values = [int(tok) for tok in raw.split(",")]
    except ValueError:
        raise ValueError(f"Invalid cell list: {text!r}") from None
    if len(values) % 2:
        raise ValueError(f"Odd number of coordinates in cell list: {text!r}")
    return tuple(Coord(values[i], values[i + 1]) for i in range(0, len(values), 2))


def render(cells: Iterable[Tuple[int, int]]) -> str:
    """ASCII picture of a shape: '#' for occupied cells, row y = 0 first."""
    shape = canonize_fixed(cells)
    if not shape:
        return ""
    occupied = set(shape)
    width = max(c.x for c in shape) + 1
    height = max(c.y for c in shape) + 1
    rows = []
    for y in range(height):
        rows.append("".join("#" if (x, y) in occupied else "." for x in range(width)))
    return "\n".join(rows)
