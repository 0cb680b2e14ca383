"""
Shape metadata layout.

The kernel receives a flat u32 descriptor:

    [0]                 rank
    [1 .. 6*rank]       strides then shapes of the three bindings (not read)
    [6*rank + 1]        scalar length of input_0
    [6*rank + 2]        scalar length of input_1
    [6*rank + 3]        scalar length of output_0
    [6*rank + 4]        reserved fourth length (not read)

Lengths are turned into vector-group capacities by truncating division by 4.
Decoding performs no validation: a short or inconsistent descriptor is the
caller's contract violation.
"""

import logging
import warnings
from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence, Tuple

import numpy as np

from .kernel_lang import VEC_WIDTH

logger = logging.getLogger(__name__)

NUM_BINDINGS = 3


class BufferSlot(IntEnum):
    """Logical buffer selector; the value is its offset in the length block."""

    INPUT_0 = 0
    INPUT_1 = 1
    OUTPUT_0 = 2


@dataclass(frozen=True)
class ShapeInfo:
    """Decoded descriptor: rank and per-buffer vector-group capacities."""

    rank: int
    capacities: Tuple[int, int, int]

    def capacity(self, slot: BufferSlot) -> int:
        return self.capacities[slot]

    @property
    def input_0(self) -> int:
        return self.capacities[BufferSlot.INPUT_0]

    @property
    def input_1(self) -> int:
        return self.capacities[BufferSlot.INPUT_1]

    @property
    def output_0(self) -> int:
        return self.capacities[BufferSlot.OUTPUT_0]


def metadata_len(rank: int) -> int:
    """Number of u32 words in a descriptor of the given rank."""
    return 6 * rank + 5


def decode_capacity(metadata, slot: BufferSlot) -> int:
    """Vector-group capacity of one buffer, read straight from the descriptor."""
    rank = int(metadata[0])
    return int(metadata[6 * rank + 1 + int(slot)]) // VEC_WIDTH


def decode_metadata(metadata) -> ShapeInfo:
    """Decode the descriptor once into a ShapeInfo record."""
    rank = int(metadata[0])
    return ShapeInfo(
        rank=rank,
        capacities=tuple(decode_capacity(metadata, slot) for slot in BufferSlot),
    )


def _row_major_strides(shape: Sequence[int]) -> Tuple[int, ...]:
    strides = []
    acc = 1
    for dim in reversed(shape):
        strides.append(acc)
        acc *= int(dim)
    return tuple(reversed(strides))


def encode_metadata(shapes: Sequence[Sequence[int]]) -> np.ndarray:
    """
    Build a descriptor for input_0, input_1 and output_0.

    Args:
        shapes: The three buffers' logical shapes, in binding order. All must
            have the same rank.

    Returns:
        uint32 array laid out as described in this module's docstring

    Raises:
        ValueError: If the number of shapes or their ranks are inconsistent
    """
    shapes = [tuple(int(d) for d in shape) for shape in shapes]
    if len(shapes) != NUM_BINDINGS:
        raise ValueError(
            f"Expected {NUM_BINDINGS} shapes (input_0, input_1, output_0), "
            f"got {len(shapes)}"
        )

    rank = len(shapes[0])
    if rank < 1 or any(len(shape) != rank for shape in shapes):
        raise ValueError(
            f"All shapes must share a non-zero rank, got {shapes}"
        )

    lengths = []
    for slot, shape in zip(BufferSlot, shapes):
        length = int(np.prod(shape, dtype=np.int64))
        if length % VEC_WIDTH:
            warnings.warn(
                f"{slot.name.lower()} length {length} is not a multiple of "
                f"{VEC_WIDTH}; its final partial vector-group is not addressable",
                UserWarning,
                stacklevel=2,
            )
        lengths.append(length)

    words = [rank]
    for shape in shapes:
        words.extend(_row_major_strides(shape))
    for shape in shapes:
        words.extend(shape)
    words.extend(lengths)
    words.append(0)

    metadata = np.array(words, dtype=np.uint32)
    logger.debug("Encoded metadata rank=%d lengths=%s", rank, lengths)
    return metadata
