"""
Mulcos: fused multiply-cosine-accumulate kernel

Runs, for every vector-group slot of an output buffer, 256 alternating
subtract/add steps of cos(input_0 * input_1), with bounds-checked access
driven by a runtime shape descriptor.

Example:
    >>> import mulcos as mc
    >>> import numpy as np
    >>>
    >>> with mc.Executor(backend='numpy') as exec:
    ...     a = exec.create(np.random.randn(1024).astype(np.float32))
    ...     b = exec.create(np.random.randn(1024).astype(np.float32))
    ...     out = exec.create(np.zeros(1024, dtype=np.float32))
    ...
    ...     mc.ops.mul_cos_accumulate(exec, a, b, out)
    ...
    ...     result = out.to_numpy()
"""

__version__ = "0.1.0"

# Core components
from .executor import Executor, MemoryUsage
from .buffer import Buffer, ExecutionMode
from .launch import Dim3, LaunchGeometry, global_index, global_indices
from .metadata import BufferSlot, ShapeInfo, decode_metadata, encode_metadata
from .kernel import ITERATIONS
from . import ops
from . import backend

# Re-export backend utilities for convenience
from .backend import BackendType, is_torch_available, get_default_backend

__all__ = [
    # Core classes
    "Executor",
    "MemoryUsage",
    "Buffer",
    "ExecutionMode",
    # Launch geometry
    "Dim3",
    "LaunchGeometry",
    "global_index",
    "global_indices",
    # Metadata
    "BufferSlot",
    "ShapeInfo",
    "decode_metadata",
    "encode_metadata",
    "ITERATIONS",
    # Modules
    "ops",
    "backend",
    # Backend utilities
    "BackendType",
    "is_torch_available",
    "get_default_backend",
    # Metadata
    "__version__",
]
