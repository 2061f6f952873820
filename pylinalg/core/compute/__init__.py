"""
Shared compute infrastructure for PyLinalg.

Submodules:
    timing: Execution timing utilities
    tolerances: Tolerance tiers per scalar precision
"""

from pylinalg.core.compute.timing import Timer
from pylinalg.core.compute.tolerances import ToleranceTier, select_tolerance

__all__ = [
    # Timing
    "Timer",
    # Tolerances
    "ToleranceTier",
    "select_tolerance",
]
