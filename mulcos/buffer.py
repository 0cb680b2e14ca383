"""
Vector-group buffers.

A Buffer holds `size` float32 scalars. Storage is padded up to a whole
number of vector-groups so the kernel can always view it as (groups, 4);
the padding is zero and never part of the logical length.
"""

from enum import Enum

import numpy as np

from .kernel_lang import VEC_WIDTH


class ExecutionMode(Enum):
    """How a launch treats its bound buffers."""

    # capacities decoded from metadata must fit the bound storage
    CHECKED = "checked"
    # dispatched as-is; out-of-storage indices raise IndexError from numpy
    UNCHECKED = "unchecked"


class Buffer:
    """
    Float32 storage addressed in vector-groups.

    Args:
        size: Logical number of scalars
        shape: Optional logical shape (product must equal size)
    """

    def __init__(self, size: int, shape=None):
        size = int(size)
        if size < 0:
            raise ValueError(f"Buffer size must be non-negative, got {size}")
        if shape is None:
            shape = (size,)
        shape = tuple(int(d) for d in shape)
        if int(np.prod(shape, dtype=np.int64)) != size:
            raise ValueError(f"Shape {shape} doesn't match buffer size {size}")

        self._size = size
        self._shape = shape
        groups = -(-size // VEC_WIDTH)
        self._storage = np.zeros(groups * VEC_WIDTH, dtype=np.float32)
        self._freed = False

    def _check_alive(self):
        if self._freed:
            raise RuntimeError("Buffer has been freed")

    @property
    def size(self) -> int:
        return self._size

    @property
    def shape(self):
        return self._shape

    @property
    def dtype(self):
        return np.float32

    @property
    def nbytes(self) -> int:
        return self._size * np.dtype(np.float32).itemsize

    @property
    def reserved_nbytes(self) -> int:
        """Bytes held by the storage, padding included."""
        return self._storage.nbytes

    @property
    def freed(self) -> bool:
        return self._freed

    @property
    def num_groups(self) -> int:
        """Physical vector-groups, including a padded final group."""
        return self._storage.size // VEC_WIDTH

    @property
    def groups(self) -> np.ndarray:
        """Writable (num_groups, 4) view of the storage."""
        self._check_alive()
        return self._storage.reshape(-1, VEC_WIDTH)

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        state = "freed" if self._freed else f"groups={self.num_groups}"
        return f"Buffer(size={self._size}, shape={self._shape}, {state})"

    def from_numpy(self, data) -> None:
        """Copy a float32-convertible array into the buffer."""
        self._check_alive()
        data = np.asarray(data, dtype=np.float32).reshape(-1)
        if data.size != self._size:
            raise ValueError(
                f"Array size {data.size} doesn't match buffer size {self._size}"
            )
        self._storage[:self._size] = data

    def to_numpy(self) -> np.ndarray:
        """Copy of the logical contents, in the buffer's shape."""
        self._check_alive()
        return self._storage[:self._size].reshape(self._shape).copy()

    def fill(self, value: float) -> None:
        self._check_alive()
        self._storage[:self._size] = np.float32(value)

    def copy_from(self, other: "Buffer") -> None:
        self._check_alive()
        other._check_alive()
        if other.size != self._size:
            raise ValueError(
                f"Cannot copy buffer of size {other.size} into size {self._size}"
            )
        self._storage[:self._size] = other._storage[:other.size]

    def cleanup(self) -> None:
        """Release the storage; further use raises RuntimeError."""
        if not self._freed:
            self._storage = np.zeros(0, dtype=np.float32)
            self._freed = True
