"""
Operation wrappers.

Example:
    >>> import mulcos as mc
    >>> with mc.Executor() as exec:
    ...     a = exec.create(np.ones(8, dtype=np.float32))
    ...     b = exec.create(np.ones(8, dtype=np.float32))
    ...     out = exec.empty(8)
    ...     mc.ops.mul_cos_accumulate(exec, a, b, out)
"""

from typing import Optional

from .buffer import Buffer
from .executor import Executor
from .kernel import ITERATIONS
from .launch import LaunchGeometry


def mul_cos_accumulate(
    executor: Executor,
    buf_in0: Buffer,
    buf_in1: Buffer,
    buf_out: Buffer,
    metadata=None,
    geometry: Optional[LaunchGeometry] = None,
    iterations: int = ITERATIONS,
) -> Buffer:
    """
    Alternately subtract and add cos(in0 * in1) into out, `iterations` times.

    Args:
        executor: Executor owning the launch
        buf_in0: First operand buffer
        buf_in1: Second operand buffer
        buf_out: Accumulator buffer, updated in place
        metadata: Optional u32 descriptor (see mulcos.metadata)
        geometry: Optional launch geometry
        iterations: Accumulation steps per worker

    Returns:
        buf_out
    """
    executor.execute(buf_in0, buf_in1, buf_out, metadata=metadata,
                     geometry=geometry, iterations=iterations)
    return buf_out
