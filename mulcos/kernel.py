"""
Multiply-Cosine-Accumulate Kernel

Operation, per active worker idx, for k = 0 .. 255:

    fused = cos(input_0[idx] * input_1[idx])
    output_0[idx] = output_0[idx] - fused    (k even)
    output_0[idx] = output_0[idx] + fused    (k odd)

A worker is active when idx < capacity(output_0). Reads of input_0 and
input_1 past their own capacities see zero vector-groups.

Each even/odd pair cancels in exact arithmetic only; the float32 result
keeps the rounding drift of 256 dependent steps, and both launchers below
reproduce it lane for lane.
"""

import operator

import numpy as np

from .access import load, load_many, store, store_many
from .fused import mul_cos
from .kernel_lang import DeviceArray, Vec4, u32, get_global_id, worker_scope
from .launch import LaunchGeometry, global_index, global_indices, iter_workers
from .metadata import ShapeInfo, decode_metadata

ITERATIONS = 256

# indexed by iteration parity
COMBINE = (operator.sub, operator.add)


def accumulate_step(k: int, prev, fused):
    """One iteration's combine: prev - fused on even k, prev + fused on odd k."""
    return COMBINE[k % 2](prev, fused)


def run_worker(idx: int, input_0: np.ndarray, input_1: np.ndarray,
               output_0: np.ndarray, shape: ShapeInfo,
               iterations: int = ITERATIONS) -> None:
    """Run the full accumulation loop of one worker."""
    for k in range(iterations):
        a = load(input_0, idx, shape.input_0)
        b = load(input_1, idx, shape.input_1)
        fused = mul_cos(a, b)
        prev = load(output_0, idx, shape.output_0)
        store(output_0, idx, shape.output_0, accumulate_step(k, prev, fused))


def mul_cos_accumulate(input_0: DeviceArray[Vec4], input_1: DeviceArray[Vec4],
                       output_0: DeviceArray[Vec4], info: DeviceArray[u32],
                       iterations: u32 = ITERATIONS):
    """Kernel body: accumulate cos(input_0 * input_1) into output_0"""
    idx = get_global_id()
    shape = decode_metadata(info)
    if idx < shape.output_0:
        run_worker(idx, input_0, input_1, output_0, shape, iterations)


def launch_reference(input_0: np.ndarray, input_1: np.ndarray,
                     output_0: np.ndarray, metadata, geometry: LaunchGeometry,
                     iterations: int = ITERATIONS) -> None:
    """
    Dispatch the kernel one worker at a time.

    Every worker of the launch is bound with worker_scope() and runs the
    kernel body to completion before the next one starts.
    """
    for block_idx, thread_idx in iter_workers(geometry):
        idx = global_index(block_idx, thread_idx, geometry)
        with worker_scope(idx):
            mul_cos_accumulate(input_0, input_1, output_0, metadata, iterations)


def launch_vectorized(input_0: np.ndarray, input_1: np.ndarray,
                      output_0: np.ndarray, metadata, geometry: LaunchGeometry,
                      iterations: int = ITERATIONS) -> int:
    """
    Dispatch all active workers in lock-step.

    Each iteration is applied to every active worker's slot at once.
    Workers never share a slot, so the result matches launch_reference().

    Returns:
        Number of active workers
    """
    shape = decode_metadata(metadata)
    indices = global_indices(geometry)
    active = indices[indices < shape.output_0]
    if active.size == 0:
        return 0

    for k in range(iterations):
        a = load_many(input_0, active, shape.input_0)
        b = load_many(input_1, active, shape.input_1)
        fused = mul_cos(a, b)
        prev = load_many(output_0, active, shape.output_0)
        store_many(output_0, active, shape.output_0,
                   accumulate_step(k, prev, fused))

    return int(active.size)
