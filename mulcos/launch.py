"""
Launch geometry and global index computation.

A launch is a 3-D grid of blocks, each a 3-D group of workers. Every worker
is assigned one global index by z-major flattening of its coordinate:

    x = block.x * block_dim.x + thread.x   (same for y, z)
    global = z * (grid.x*block.x * grid.y*block.y) + y * (grid.x*block.x) + x
"""

from dataclasses import dataclass
from typing import Iterator, NamedTuple, Tuple

import numpy as np


class Dim3(NamedTuple):
    """Per-axis extent or coordinate."""

    x: int = 1
    y: int = 1
    z: int = 1


@dataclass(frozen=True)
class LaunchGeometry:
    """
    Grid and block extents of one kernel launch.

    Attributes:
        grid: Number of blocks along each axis
        block: Number of workers per block along each axis
    """

    grid: Dim3 = Dim3()
    block: Dim3 = Dim3()

    def __post_init__(self):
        object.__setattr__(self, "grid", Dim3(*self.grid))
        object.__setattr__(self, "block", Dim3(*self.block))
        for name, dims in (("grid", self.grid), ("block", self.block)):
            if any(int(d) < 1 for d in dims):
                raise ValueError(
                    f"Launch {name} extents must be positive, got {tuple(dims)}"
                )

    @classmethod
    def for_count(cls, count: int, block_size: int = 64) -> "LaunchGeometry":
        """
        1-D launch covering at least `count` workers.

        Args:
            count: Number of workers required
            block_size: Workers per block

        Returns:
            Geometry with grid.x = ceil(count / block_size), never zero
        """
        if block_size < 1:
            raise ValueError(f"block_size must be positive, got {block_size}")
        blocks = max(1, -(-int(count) // block_size))
        return cls(grid=Dim3(blocks, 1, 1), block=Dim3(block_size, 1, 1))

    @property
    def extent(self) -> Dim3:
        """Total workers along each axis."""
        return Dim3(
            self.grid.x * self.block.x,
            self.grid.y * self.block.y,
            self.grid.z * self.block.z,
        )

    @property
    def num_workers(self) -> int:
        ext = self.extent
        return ext.x * ext.y * ext.z


def global_index(block_idx: Tuple[int, int, int],
                 thread_idx: Tuple[int, int, int],
                 geometry: LaunchGeometry) -> int:
    """Flatten one worker coordinate into its global index (z-major)."""
    bx, by, bz = block_idx
    tx, ty, tz = thread_idx
    x = bx * geometry.block.x + tx
    y = by * geometry.block.y + ty
    z = bz * geometry.block.z + tz
    ext = geometry.extent
    return z * (ext.x * ext.y) + y * ext.x + x


def iter_workers(geometry: LaunchGeometry) -> Iterator[Tuple[Dim3, Dim3]]:
    """Yield (block_idx, thread_idx) for every worker of the launch."""
    grid, block = geometry.grid, geometry.block
    for bz in range(grid.z):
        for by in range(grid.y):
            for bx in range(grid.x):
                for tz in range(block.z):
                    for ty in range(block.y):
                        for tx in range(block.x):
                            yield Dim3(bx, by, bz), Dim3(tx, ty, tz)


def global_indices(geometry: LaunchGeometry) -> np.ndarray:
    """
    Global index of every worker, in iter_workers() order.

    Vectorized form of global_index(); the result is a permutation of
    range(geometry.num_workers).
    """
    grid = np.array(geometry.grid, dtype=np.uint64)
    block = np.array(geometry.block, dtype=np.uint64)
    ext = grid * block

    # axes ordered (bz, by, bx, tz, ty, tx) to match iter_workers()
    bz, by, bx, tz, ty, tx = np.meshgrid(
        np.arange(grid[2], dtype=np.uint64),
        np.arange(grid[1], dtype=np.uint64),
        np.arange(grid[0], dtype=np.uint64),
        np.arange(block[2], dtype=np.uint64),
        np.arange(block[1], dtype=np.uint64),
        np.arange(block[0], dtype=np.uint64),
        indexing="ij",
        sparse=True,
    )
    x = bx * block[0] + tx
    y = by * block[1] + ty
    z = bz * block[2] + tz
    return (z * (ext[0] * ext[1]) + y * ext[0] + x).ravel()
