"""
Symmetry and canonicalization for polyominoes.
Notes:
- The square has 8 symmetries (the dihedral group D4): identity, three quarter
  turns, and the transpose followed by each of those turns.
- The free canonical form is the lexicographically smallest fixed canonical
  image over the whole group.
- The symmetry class names the stabilizer: which group elements map the shape
  onto itself.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List, Tuple

import numpy as np

from .polyomino import Polyomino, canonize_fixed, format_cells

ALL_SYMS = ['c0', 'c90', 'c180', 'c270', 't0', 't90', 't180', 't270']


class SymmetryGroup(Enum):
    NONE = 'None'
    Mirror90 = 'Mirror90'
    Mirror45 = 'Mirror45'
    Rotation2Fold = 'Rotation2Fold'
    Rotation2FoldMirror90 = 'Rotation2FoldMirror90'
    Rotation2FoldMirror45 = 'Rotation2FoldMirror45'
    Rotation4Fold = 'Rotation4Fold'
    All = 'All'

    def __str__(self) -> str:
        return self.value

    @property
    def order(self) -> int:
        """Number of group elements that leave the shape unchanged."""
        return _STABILIZER_ORDER[self]

    @property
    def orbit_size(self) -> int:
        """Number of distinct fixed polyominoes congruent to the shape."""
        return 8 // self.order


_STABILIZER_ORDER = {
    SymmetryGroup.NONE: 1,
    SymmetryGroup.Mirror90: 2,
    SymmetryGroup.Mirror45: 2,
    SymmetryGroup.Rotation2Fold: 2,
    SymmetryGroup.Rotation2FoldMirror90: 4,
    SymmetryGroup.Rotation2FoldMirror45: 4,
    SymmetryGroup.Rotation4Fold: 4,
    SymmetryGroup.All: 8,
}

# Generators acting on column vectors (x, y).
ROTATE = np.array([[0, -1], [1, 0]], dtype=np.int64)
TRANSPOSE = np.array([[0, 1], [1, 0]], dtype=np.int64)


def _build_matrices() -> Dict[str, np.ndarray]:
    mats: Dict[str, np.ndarray] = {}
    rot = np.eye(2, dtype=np.int64)
    for quarter in range(4):
        mats[f'c{90 * quarter}'] = rot
        mats[f't{90 * quarter}'] = rot @ TRANSPOSE
        rot = ROTATE @ rot
    return {k: mats[k] for k in ALL_SYMS}


SYMMETRY_MATRICES = _build_matrices()
_STACKED = np.stack([SYMMETRY_MATRICES[k] for k in ALL_SYMS])


def _as_array(cells: Iterable[Tuple[int, int]]) -> np.ndarray:
    return np.asarray(list(cells), dtype=np.int64).reshape(-1, 2)


def transform_cells(cells: Iterable[Tuple[int, int]], kind: str) -> Polyomino:
    if kind not in SYMMETRY_MATRICES:
        raise ValueError(f"Unknown transformation: {kind}")
    pts = _as_array(cells) @ SYMMETRY_MATRICES[kind].T
    return canonize_fixed(pts.tolist())


def orbit(cells: Iterable[Tuple[int, int]]) -> Dict[str, Polyomino]:
    """Fixed canonical image of the shape under each of the 8 symmetries."""
    pts = _as_array(cells)
    # images[k, i] = SYMMETRY_MATRICES[ALL_SYMS[k]] @ pts[i]
    images = np.einsum('kab,nb->kna', _STACKED, pts)
    return {k: canonize_fixed(img) for k, img in zip(ALL_SYMS, images.tolist())}


def classify(images: Dict[str, Polyomino]) -> SymmetryGroup:
    c0 = images['c0']
    c180 = images['c180']
    if c0 == images['c90']:
        if c0 == images['t0']:
            return SymmetryGroup.All
        return SymmetryGroup.Rotation4Fold
    elif c0 == images['t0'] or c0 == images['t180']:
        if c0 == c180:
            return SymmetryGroup.Rotation2FoldMirror45
        return SymmetryGroup.Mirror45
    elif c0 == images['t90'] or c0 == images['t270']:
        if c0 == c180:
            return SymmetryGroup.Rotation2FoldMirror90
        return SymmetryGroup.Mirror90
    elif c0 == c180:
        return SymmetryGroup.Rotation2Fold
    return SymmetryGroup.NONE


def canonize_free(cells: Iterable[Tuple[int, int]]) -> Tuple[Polyomino, SymmetryGroup]:
    """Free canonical form and symmetry class of a shape.

    Both results are the same for every rotation or reflection of the input.
    """
    images = orbit(cells)
    return min(images.values()), classify(images)


def symmetry_info(cells: Iterable[Tuple[int, int]]) -> Dict:
    images = orbit(cells)
    ordered: List[Tuple[Polyomino, str]] = sorted(
        ((img, k) for k, img in images.items()), key=lambda x: x[0]
    )
    canonical, canonical_op = ordered[0]
    group = classify(images)
    c0 = images['c0']
    return {
        'canonical_form': format_cells(canonical),
        'canonical_op': canonical_op,
        'symmetry': group.value,
        'orbit_size': group.orbit_size,
        'unique_images': len(set(images.values())),
        'diagonal_symmetric': c0 == images['t0'],
        'antidiagonal_symmetric': c0 == images['t180'],
        'vertical_axis_symmetric': c0 == images['t90'],
        'horizontal_axis_symmetric': c0 == images['t270'],
        'rotational_symmetric_180': c0 == images['c180'],
        'rotational_symmetric_90': c0 == images['c90'],
    }
