"""
Shared backend infrastructure for PyLinalg.

Submodules:
    device: Hardware detection and device selection
    precision: Numerical precision constants and utilities
"""

from pylinalg.core.backends.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from pylinalg.core.backends.precision import (
    machine_epsilon,
    zero_threshold,
    sign,
)

__all__ = [
    # Device detection
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    # Precision
    "machine_epsilon",
    "zero_threshold",
    "sign",
]
