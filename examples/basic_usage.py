#!/usr/bin/env python3
"""
Basic usage example for mulcos.

Demonstrates:
- Executor context manager
- Buffer creation from NumPy
- Launching the multiply-cosine-accumulate kernel
- Bounds-checked access when buffer sizes differ
"""

import logging
import math

import numpy as np
import mulcos as mc


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    print("=" * 60)
    print("Mulcos - Basic Usage Example")
    print("=" * 60)
    print()

    print("Available backends:")
    print(f"  Default: {mc.get_default_backend()}")
    print(f"  PyTorch integration: {mc.is_torch_available()}")
    print()

    with mc.Executor(backend='auto') as exec:
        print(f"Executor created: {exec}")
        print()

        # One vector-group per buffer
        a = exec.create(np.array([1.0, 0.0, 0.0, 0.0], dtype=np.float32))
        b = exec.create(np.array([1.0, 0.0, 0.0, 0.0], dtype=np.float32))
        out = exec.create(np.array([5.0, 0.0, 0.0, 0.0], dtype=np.float32))

        print("Single step: out = out - cos(a * b)")
        mc.ops.mul_cos_accumulate(exec, a, b, out, iterations=1)
        print(f"  result = {out.to_numpy()}  (expected 5 - cos(1) = {5 - math.cos(1):.7f})")
        print()

        out.from_numpy(np.array([5.0, 0.0, 0.0, 0.0], dtype=np.float32))
        print(f"Full launch: {mc.ITERATIONS} alternating steps")
        mc.ops.mul_cos_accumulate(exec, a, b, out)
        result = out.to_numpy()
        print(f"  result = {result}")
        print(f"  drift from start = {result - np.float32([5, 0, 0, 0])}")
        print()

        # Inputs smaller than the output: trailing groups read zeros
        print("Mismatched sizes: input_1 covers 1 of 3 output groups")
        a = exec.create(np.full(12, 2.0, dtype=np.float32))
        b = exec.create(np.full(4, 0.5, dtype=np.float32))
        out = exec.allocate(12)
        active = exec.execute(a, b, out, iterations=1)
        print(f"  active workers = {active}")
        print(f"  result = {out.to_numpy().reshape(3, 4)}")
        print()

    print("Done.")


if __name__ == "__main__":
    main()
