"""
In-place transposition of a row-major buffer.

Reinterpreting an R x C row-major buffer of length N = R * C as its C x R
transpose is a permutation of flat indices: the element at index i
(0 < i < N - 1) moves to (R * i) mod (N - 1), while indices 0 and N - 1
never move. The permutation splits into disjoint cycles; each cycle is
walked once, carrying elements through a single slot, so no second
buffer is allocated.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray


def transpose_in_place(buffer: NDArray[np.inexact[Any]], rows: int) -> None:
    """
    Permute a flat row-major buffer into the layout of its transpose.

    Args:
        buffer: 1-D buffer holding a rows x (len(buffer) // rows) matrix;
                modified in place
        rows: Row count of the matrix before transposition
    """
    size = buffer.shape[0]
    # With fewer than three elements every index is a fixed point
    if size < 3:
        return

    last = size - 1
    visited = np.zeros(size, dtype=bool)

    for start in range(1, last):
        if visited[start]:
            continue

        # buffer[start] holds the element in flight; each swap drops it at
        # its destination and picks up the one that was sitting there.
        index = start
        while True:
            index = (rows * index) % last
            buffer[index], buffer[start] = buffer[start], buffer[index]
            visited[index] = True
            if index == start:
                break
