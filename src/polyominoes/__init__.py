"""polyominoes package.

Enumeration of free polyominoes with symmetry classification, plus a small
CLI that writes one listing per size.

Convenience imports are exposed for common workflows.
"""

from .export import ExportArgs, run_export, write_generation
from .growth import enumerate_generations, grow
from .polyomino import Coord, canonize_fixed
from .symmetry import SymmetryGroup, canonize_free

__all__ = [
    "Coord",
    "canonize_fixed",
    "canonize_free",
    "SymmetryGroup",
    "grow",
    "enumerate_generations",
    "write_generation",
    "run_export",
    "ExportArgs",
]
