"""Shared helpers for the mulcos test suite."""

import numpy as np


def make_metadata(len_in0, len_in1, len_out, rank=1):
    """Descriptor with the given scalar lengths and a zeroed reserved region."""
    words = [rank] + [0] * (6 * rank) + [len_in0, len_in1, len_out, 0]
    return np.array(words, dtype=np.uint32)


def groups(*rows):
    """(n, 4) float32 array from vector-group tuples."""
    return np.array(rows, dtype=np.float32).reshape(-1, 4)


def expected_accumulate(a, b, out, iterations=256):
    """Independent float32 rendition of the per-slot loop."""
    fused = np.cos(np.float32(a) * np.float32(b)).astype(np.float32)
    out = np.array(out, dtype=np.float32)
    for k in range(iterations):
        out = out - fused if k % 2 == 0 else out + fused
    return out
