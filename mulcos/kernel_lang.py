"""
Mulcos Kernel Primitives

Common functions and types for mulcos kernels.
Kernels are written as plain Python functions over these types and are
run once per worker by a dispatcher.

Example usage:
    from mulcos.kernel_lang import DeviceArray, Vec4, u32, get_global_id

    def my_kernel(a: DeviceArray[Vec4], n: u32):
        idx = get_global_id()
        if idx < n:
            # kernel logic
"""

import contextvars
from contextlib import contextmanager

import numpy as np


# Type aliases for the kernel interface
class DeviceArray:
    """Device array type annotation for kernel buffers"""
    def __class_getitem__(cls, item):
        return cls

f32 = np.float32  # 32-bit floating point
u32 = int         # 32-bit unsigned integer
Vec4 = np.ndarray  # vector-group: float32 array of shape (4,)

VEC_WIDTH = 4

_global_id = contextvars.ContextVar("mulcos_global_id")


def ZERO_VEC4() -> Vec4:
    """A fresh (0, 0, 0, 0) vector-group"""
    return np.zeros(VEC_WIDTH, dtype=np.float32)


def get_global_id() -> int:
    """
    Get global thread ID of the running worker

    Returns the unique worker index in the parallel execution, as bound by
    the dispatcher through worker_scope().

    Raises:
        RuntimeError: If called outside a dispatched worker
    """
    try:
        return _global_id.get()
    except LookupError:
        raise RuntimeError(
            "get_global_id() called outside a kernel dispatch"
        ) from None


@contextmanager
def worker_scope(idx: int):
    """Bind the global index of one worker for the duration of its body"""
    token = _global_id.set(int(idx))
    try:
        yield idx
    finally:
        _global_id.reset(token)


def cosf(x):
    """Lane-wise float32 cosine"""
    return np.cos(np.asarray(x, dtype=f32))
