"""
Utility functions for PyTorch tensor conversions.

Provides helper functions for converting between PyTorch tensors and mulcos
buffers, and for checking tensors before a launch.
"""

import torch
import numpy as np
from typing import Tuple, Optional
import mulcos as mc


def tensor_to_buffer(
    executor: mc.Executor,
    tensor: torch.Tensor,
    existing_buffer: Optional[mc.Buffer] = None
) -> Tuple[mc.Buffer, torch.Tensor]:
    """
    Convert PyTorch tensor to a mulcos buffer.

    Args:
        executor: Mulcos executor
        tensor: PyTorch tensor (must be float32, on CPU)
        existing_buffer: Optional existing buffer to reuse

    Returns:
        Tuple of (buffer, flattened_tensor)

    Raises:
        TypeError: If tensor is not a torch.Tensor
        ValueError: If tensor is not compatible
    """
    validate_tensor_compatible(tensor)

    if tensor.device.type != 'cpu':
        raise ValueError(
            f"Only CPU tensors can be copied into buffers, got device '{tensor.device}'. "
            f"Move tensor to CPU first: tensor.cpu()"
        )

    flat_tensor = tensor.contiguous().view(-1)
    size = flat_tensor.numel()

    if existing_buffer is None:
        buffer = executor.allocate(size)
    else:
        if existing_buffer.size != size:
            raise ValueError(
                f"Existing buffer size {existing_buffer.size} doesn't match tensor size {size}"
            )
        buffer = existing_buffer

    buffer.from_numpy(flat_tensor.detach().numpy())

    return buffer, flat_tensor


def buffer_to_tensor(
    buffer: mc.Buffer,
    shape: Tuple[int, ...],
    device: torch.device = torch.device('cpu'),
) -> torch.Tensor:
    """
    Convert mulcos buffer to PyTorch tensor.

    Args:
        buffer: Mulcos buffer
        shape: Desired tensor shape
        device: Target device

    Returns:
        PyTorch tensor with specified shape

    Raises:
        ValueError: If shape doesn't match buffer size
    """
    numel = int(np.prod(shape))
    if numel != buffer.size:
        raise ValueError(
            f"Shape {tuple(shape)} (numel={numel}) doesn't match buffer size {buffer.size}"
        )

    tensor = torch.from_numpy(buffer.to_numpy()).reshape(shape)
    return tensor.to(device)


def validate_tensor_compatible(tensor: torch.Tensor) -> None:
    """
    Validate that tensor can feed the kernel.

    Raises:
        TypeError: If tensor is not a torch.Tensor
        ValueError: If tensor is not float32
    """
    if not isinstance(tensor, torch.Tensor):
        raise TypeError(f"Expected torch.Tensor, got {type(tensor)}")

    if tensor.dtype != torch.float32:
        raise ValueError(
            f"Only float32 tensors supported, got {tensor.dtype}. "
            f"Convert with: tensor.float()"
        )


def match_device(*tensors: torch.Tensor) -> torch.device:
    """
    Common device of all tensors.

    Raises:
        ValueError: If the tensors live on different devices
    """
    devices = {t.device for t in tensors}
    if len(devices) != 1:
        raise ValueError(
            f"All tensors must be on the same device, got {sorted(map(str, devices))}"
        )
    return devices.pop()
