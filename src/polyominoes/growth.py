"""
Generation-by-generation enumeration of free polyominoes.
Growth rule:
- Every size-n shape is a size-(n-1) shape plus one edge-adjacent empty cell.
- Each candidate is reduced to its free canonical form; congruent candidates
  collapse onto the same key with the same symmetry class.
"""
import logging
from collections import Counter
from typing import Dict, Iterable, Iterator, List, Tuple

from .polyomino import MONOMINO, Polyomino, neighbors
from .symmetry import SymmetryGroup, canonize_free

Generation = Dict[Polyomino, SymmetryGroup]

# Free (OEIS A000105) and fixed (OEIS A001168) polyomino counts, n = 1..10.
KNOWN_FREE_COUNTS = {1: 1, 2: 1, 3: 2, 4: 5, 5: 12, 6: 35, 7: 108, 8: 369, 9: 1285, 10: 4655}
KNOWN_FIXED_COUNTS = {
    1: 1, 2: 2, 3: 6, 4: 19, 5: 63, 6: 216, 7: 760, 8: 2725, 9: 9910, 10: 36446,
}


def initial_generation() -> List[Polyomino]:
    return [MONOMINO]


def candidates(shape: Polyomino) -> Iterator[Tuple[Polyomino, SymmetryGroup]]:
    """Classified one-cell extensions of a shape, duplicates included."""
    occupied = set(shape)
    for cell in shape:
        for nb in neighbors(cell):
            if nb in occupied:
                continue
            yield canonize_free(shape + (nb,))


def grow(previous: Iterable[Polyomino]) -> Generation:
    current: Generation = {}
    n_candidates = 0
    for shape in previous:
        for form, group in candidates(shape):
            n_candidates += 1
            current[form] = group
    logging.debug("Classified %d candidates into %d shapes", n_candidates, len(current))
    return dict(sorted(current.items()))


def enumerate_generations(up_to: int) -> Iterator[Tuple[int, Generation]]:
    """Yield (n, generation) for n = 2..up_to.

    Only the shapes of the latest generation are kept between steps.
    """
    previous = initial_generation()
    for n in range(2, up_to + 1):
        current = grow(previous)
        logging.info("Size %d: %d free polyominoes", n, len(current))
        yield n, current
        previous = list(current)


def fixed_count(generation: Generation) -> int:
    return sum(group.orbit_size for group in generation.values())


def class_distribution(generation: Generation) -> Dict[str, int]:
    counts = Counter(group.value for group in generation.values())
    return {g.value: counts.get(g.value, 0) for g in SymmetryGroup}
