"""I/O module: Structure loading and result export."""

from crossarea_mc.io.structure import load_structure, load_radius_library, StructureFormatError
from crossarea_mc.io.results import save_results, load_results

__all__ = ["load_structure", "load_radius_library", "StructureFormatError",
           "save_results", "load_results"]
