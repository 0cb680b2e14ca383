"""
Functional API for PyTorch tensors using mulcos.

Example:
    >>> import torch
    >>> import mulcos_torch as mct
    >>>
    >>> exec = mct.Executor()
    >>> a = torch.randn(1024)
    >>> b = torch.randn(1024)
    >>> acc = torch.zeros(1024)
    >>> result = mct.functional.mul_cos_accumulate(exec, a, b, acc)
"""

import torch
from typing import Optional
import mulcos as mc
from .utils import tensor_to_buffer, buffer_to_tensor, validate_tensor_compatible


def mul_cos_accumulate(
    executor: mc.Executor,
    input_0: torch.Tensor,
    input_1: torch.Tensor,
    output_0: torch.Tensor,
    metadata=None,
    out: Optional[torch.Tensor] = None,
    iterations: int = mc.ITERATIONS,
) -> torch.Tensor:
    """
    Multiply-cosine-accumulate through a mulcos executor.

    The tensors are copied into buffers, the kernel runs on the executor's
    backend, and the accumulated output is copied back. output_0 itself is
    left untouched.

    Args:
        executor: Mulcos executor
        input_0: First operand (CPU, float32)
        input_1: Second operand (CPU, float32)
        output_0: Initial accumulator values (CPU, float32)
        metadata: Optional u32 descriptor; built from the flattened sizes if omitted
        out: Optional tensor receiving the result (must match output_0's shape)
        iterations: Accumulation steps per worker

    Returns:
        Result tensor shaped like output_0

    Example:
        >>> a = torch.tensor([1.0, 0.0, 0.0, 0.0])
        >>> acc = torch.tensor([5.0, 0.0, 0.0, 0.0])
        >>> mct.functional.mul_cos_accumulate(exec, a, a, acc)  # ~ acc
    """
    for t in (input_0, input_1, output_0):
        validate_tensor_compatible(t)

    temporaries = []
    try:
        for t in (input_0, input_1, output_0):
            buf, _ = tensor_to_buffer(executor, t)
            temporaries.append(buf)
        buf_a, buf_b, buf_out = temporaries

        mc.ops.mul_cos_accumulate(
            executor, buf_a, buf_b, buf_out, metadata=metadata, iterations=iterations
        )

        # to_numpy() copies, so the tensor outlives the buffer
        result = buffer_to_tensor(buf_out, output_0.shape)
    finally:
        for buf in temporaries:
            executor.free(buf)

    if out is not None:
        out.copy_(result)
        return out

    return result
