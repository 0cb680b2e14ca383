"""
Mulcos PyTorch Integration

PyTorch integration for the multiply-cosine-accumulate kernel providing:
- Functional API through a mulcos executor (mulcos_torch.functional)
- A torch-native launcher that runs on the tensors' device (mulcos_torch.kernel)
- Tensor/buffer conversion helpers

Example - Functional API:
    >>> import torch
    >>> import mulcos_torch as mct
    >>>
    >>> exec = mct.Executor()
    >>> a = torch.randn(1000)
    >>> b = torch.randn(1000)
    >>> acc = torch.zeros(1000)
    >>> result = mct.functional.mul_cos_accumulate(exec, a, b, acc)

Example - Native launch:
    >>> acc = torch.zeros(1000, device='cuda')
    >>> mct.launch_torch(a.cuda(), b.cuda(), acc, metadata)
"""

__version__ = "0.1.0"

# Re-export from mulcos for convenience
from mulcos import Executor, Buffer, BackendType

# Import submodules
from . import functional
from . import kernel
from . import utils

# Convenience imports
from .kernel import launch_torch
from .utils import (
    tensor_to_buffer,
    buffer_to_tensor,
    validate_tensor_compatible,
    match_device,
)

__all__ = [
    # Core (from mulcos)
    "Executor",
    "Buffer",
    "BackendType",
    # Submodules
    "functional",
    "kernel",
    "utils",
    # Launch
    "launch_torch",
    # Utilities
    "tensor_to_buffer",
    "buffer_to_tensor",
    "validate_tensor_compatible",
    "match_device",
    # Metadata
    "__version__",
]
