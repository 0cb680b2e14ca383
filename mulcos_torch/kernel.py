"""
Multiply-cosine-accumulate expressed with torch ops.

Runs on the tensors' own device (CPU, CUDA or MPS) and updates output_0 in
place. Workers are the 1-D range [0, capacity(output_0)); there is no grid
or block geometry here.
"""

import torch

from mulcos.kernel import ITERATIONS, accumulate_step
from mulcos.kernel_lang import VEC_WIDTH
from mulcos.metadata import decode_metadata

from .utils import match_device, validate_tensor_compatible


def _group_view(tensor: torch.Tensor) -> torch.Tensor:
    flat = tensor.view(-1)
    whole = flat.numel() // VEC_WIDTH * VEC_WIDTH
    return flat[:whole].view(-1, VEC_WIDTH)


def _load(groups: torch.Tensor, idx: torch.Tensor, capacity: int) -> torch.Tensor:
    out = torch.zeros((idx.shape[0], VEC_WIDTH), dtype=torch.float32, device=groups.device)
    mask = idx < capacity
    out[mask] = groups[idx[mask]]
    return out


def _store(groups: torch.Tensor, idx: torch.Tensor, capacity: int,
           values: torch.Tensor) -> None:
    mask = idx < capacity
    groups[idx[mask]] = values[mask]


def launch_torch(
    input_0: torch.Tensor,
    input_1: torch.Tensor,
    output_0: torch.Tensor,
    metadata,
    iterations: int = ITERATIONS,
) -> torch.Tensor:
    """
    Run the kernel over three float32 tensors.

    Args:
        input_0: First operand
        input_1: Second operand
        output_0: Accumulator, must be contiguous; updated in place
        metadata: u32 descriptor (sequence, numpy array or tensor)
        iterations: Accumulation steps per worker

    Returns:
        output_0
    """
    for t in (input_0, input_1, output_0):
        validate_tensor_compatible(t)
    if not output_0.is_contiguous():
        raise ValueError("output_0 must be contiguous to be updated in place")
    device = match_device(input_0, input_1, output_0)

    if isinstance(metadata, torch.Tensor):
        metadata = metadata.cpu().tolist()
    shape = decode_metadata(metadata)

    a_groups = _group_view(input_0.contiguous())
    b_groups = _group_view(input_1.contiguous())
    out_groups = _group_view(output_0)

    active = torch.arange(shape.output_0, device=device)
    if active.numel() == 0:
        return output_0

    with torch.no_grad():
        for k in range(iterations):
            a = _load(a_groups, active, shape.input_0)
            b = _load(b_groups, active, shape.input_1)
            fused = torch.cos(a * b)
            prev = _load(out_groups, active, shape.output_0)
            _store(out_groups, active, shape.output_0, accumulate_step(k, prev, fused))

    return output_0
