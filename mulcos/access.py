"""
Bounds-checked buffer access.

Every read and write of a vector-group buffer goes through these guards:
an index at or past the buffer's capacity reads as (0, 0, 0, 0) and its
writes are dropped. Nothing is ever raised for a capacity overrun.

Buffers are (groups, 4) float32 arrays.
"""

import numpy as np

from .kernel_lang import VEC_WIDTH, ZERO_VEC4


def load(buffer: np.ndarray, idx: int, capacity: int) -> np.ndarray:
    """Read buffer[idx], or a zero vector-group if idx >= capacity."""
    if idx < capacity:
        return buffer[idx].copy()
    return ZERO_VEC4()


def store(buffer: np.ndarray, idx: int, capacity: int, value) -> None:
    """Write value into buffer[idx]; silently skipped if idx >= capacity."""
    if idx < capacity:
        buffer[idx] = value


def load_many(buffer: np.ndarray, indices: np.ndarray, capacity: int) -> np.ndarray:
    """Gather form of load(): one row per index, zero rows where out of range."""
    indices = np.asarray(indices)
    in_range = indices < capacity
    out = np.zeros((indices.shape[0], VEC_WIDTH), dtype=np.float32)
    out[in_range] = buffer[indices[in_range]]
    return out


def store_many(buffer: np.ndarray, indices: np.ndarray, capacity: int,
               values: np.ndarray) -> None:
    """Scatter form of store(): rows for out-of-range indices are dropped."""
    indices = np.asarray(indices)
    in_range = indices < capacity
    buffer[indices[in_range]] = values[in_range]
