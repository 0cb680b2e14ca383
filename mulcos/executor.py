"""
Executor: owns buffers and dispatches the multiply-cosine-accumulate kernel.
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .backend import BackendType, validate_backend
from .buffer import Buffer, ExecutionMode
from .kernel import ITERATIONS, launch_reference, launch_vectorized
from .launch import LaunchGeometry
from .metadata import BufferSlot, decode_metadata, encode_metadata

logger = logging.getLogger(__name__)

_handles = itertools.count(1)


@dataclass(frozen=True)
class MemoryUsage:
    """
    Snapshot of the buffers an executor keeps alive.

    Attributes:
        number_allocs: Live buffers
        bytes_in_use: Logical bytes of the live buffers
        bytes_padding: Bytes added to round buffers up to whole vector-groups
        bytes_reserved: Total storage bytes (in use plus padding)
    """

    number_allocs: int
    bytes_in_use: int
    bytes_padding: int
    bytes_reserved: int


class Executor:
    """
    Buffer owner and kernel dispatcher.

    Args:
        backend: "numpy" (lock-step over all workers), "reference" (one
            worker at a time) or "auto"
        mode: ExecutionMode or its string value
        block_size: Workers per block for launches without explicit geometry

    Example:
        >>> with Executor() as exec:
        ...     a = exec.create(np.ones(8, dtype=np.float32))
        ...     b = exec.create(np.ones(8, dtype=np.float32))
        ...     out = exec.empty(8)
        ...     exec.execute(a, b, out)
    """

    def __init__(self, backend="auto", mode=ExecutionMode.CHECKED,
                 block_size: int = 64):
        self.backend = validate_backend(backend)
        self.mode = ExecutionMode(mode)
        if block_size < 1:
            raise ValueError(f"block_size must be positive, got {block_size}")
        self.block_size = int(block_size)
        self.handle = next(_handles)
        self._buffers = []
        self._freed = False
        logger.debug("Created %r", self)

    def __repr__(self) -> str:
        return (
            f"Executor(handle={self.handle}, backend='{self.backend}', "
            f"mode='{self.mode.value}')"
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cleanup()
        return False

    def _check_alive(self):
        if self._freed:
            raise RuntimeError("Executor has been cleaned up")

    def _prune(self):
        # buffers released with Buffer.cleanup() directly
        self._buffers = [buf for buf in self._buffers if not buf.freed]

    def allocate(self, size: int, shape=None) -> Buffer:
        """Allocate a zeroed buffer of `size` float32 scalars."""
        self._check_alive()
        self._prune()
        buffer = Buffer(size, shape)
        self._buffers.append(buffer)
        logger.debug("Allocated %r", buffer)
        return buffer

    def free(self, buffer: Buffer) -> None:
        """
        Release one buffer owned by this executor.

        Raises:
            ValueError: If the buffer was not allocated by this executor
        """
        for i, owned in enumerate(self._buffers):
            if owned is buffer:
                del self._buffers[i]
                buffer.cleanup()
                logger.debug("Freed %r", buffer)
                return
        raise ValueError(f"{buffer!r} is not owned by {self!r}")

    def memory_usage(self) -> MemoryUsage:
        """Live buffer count and bytes held by this executor."""
        self._prune()
        in_use = sum(buf.nbytes for buf in self._buffers)
        reserved = sum(buf.reserved_nbytes for buf in self._buffers)
        return MemoryUsage(
            number_allocs=len(self._buffers),
            bytes_in_use=in_use,
            bytes_padding=reserved - in_use,
            bytes_reserved=reserved,
        )

    def empty(self, size: int) -> Buffer:
        return self.allocate(size)

    def create(self, data) -> Buffer:
        """Allocate a buffer shaped like `data` and copy it in."""
        data = np.asarray(data, dtype=np.float32)
        buffer = self.allocate(data.size, data.shape)
        buffer.from_numpy(data)
        return buffer

    def read(self, buffer: Buffer) -> np.ndarray:
        return buffer.to_numpy()

    def _validate_launch(self, metadata, buffers):
        if len(metadata) < 1:
            raise ValueError("Metadata is empty; expected at least the rank word")
        rank = int(metadata[0])
        required = 6 * rank + 4
        if len(metadata) < required:
            raise ValueError(
                f"Metadata of rank {rank} needs at least {required} words, "
                f"got {len(metadata)}"
            )
        shape = decode_metadata(metadata)
        for slot, buffer in zip(BufferSlot, buffers):
            if shape.capacity(slot) > buffer.num_groups:
                raise ValueError(
                    f"{slot.name.lower()} capacity {shape.capacity(slot)} exceeds "
                    f"its buffer's {buffer.num_groups} vector-groups"
                )

    def execute(self, input_0: Buffer, input_1: Buffer, output_0: Buffer,
                metadata=None, geometry: Optional[LaunchGeometry] = None,
                iterations: int = ITERATIONS) -> int:
        """
        Run the kernel over the three buffers.

        Args:
            input_0: First operand
            input_1: Second operand
            output_0: Accumulator, updated in place
            metadata: u32 descriptor; encoded from the buffers' shapes if
                omitted. Buffers of differing ranks are described as flat
                rank-1 buffers of their sizes.
            geometry: Launch geometry; a 1-D launch covering output_0 if omitted
            iterations: Accumulation steps per worker

        Returns:
            Number of workers that ran (output_0's capacity clipped to the launch)

        Raises:
            RuntimeError: If the executor or any buffer has been freed
            ValueError: In CHECKED mode, if the metadata does not fit the buffers
        """
        self._check_alive()
        buffers = (input_0, input_1, output_0)
        for buffer in buffers:
            buffer._check_alive()

        if metadata is None:
            shapes = [buf.shape for buf in buffers]
            if len({len(s) for s in shapes}) > 1:
                shapes = [(buf.size,) for buf in buffers]
            metadata = encode_metadata(shapes)
        metadata = np.asarray(metadata, dtype=np.uint32)

        if self.mode is ExecutionMode.CHECKED:
            self._validate_launch(metadata, buffers)

        shape = decode_metadata(metadata)
        if geometry is None:
            geometry = LaunchGeometry.for_count(shape.output_0, self.block_size)

        logger.debug(
            "Launching on %s: grid=%s block=%s capacities=%s iterations=%d",
            self.backend, tuple(geometry.grid), tuple(geometry.block),
            shape.capacities, iterations,
        )

        groups = [buf.groups for buf in buffers]
        if self.backend == BackendType.REFERENCE.value:
            launch_reference(*groups, metadata, geometry, iterations)
            active = min(shape.output_0, geometry.num_workers)
        else:
            active = launch_vectorized(*groups, metadata, geometry, iterations)

        logger.debug("Launch complete: %d active workers", active)
        return active

    def cleanup(self) -> None:
        """Free every buffer allocated by this executor."""
        if self._freed:
            return
        for buffer in self._buffers:
            buffer.cleanup()
        self._buffers.clear()
        self._freed = True
