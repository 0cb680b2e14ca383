"""
Integration tests for mulcos.

Tests complete workflows end-to-end through an Executor.
"""

import math

import pytest
import numpy as np

import mulcos as mc

from helpers import expected_accumulate, make_metadata

BACKENDS = ["numpy", "reference"]


@pytest.mark.parametrize("backend", BACKENDS)
class TestIntegrationWorkflows:
    """Test complete workflows end-to-end."""

    def test_scenario(self, backend):
        """Test the documented single vector-group scenario."""
        with mc.Executor(backend=backend) as exec:
            a = exec.create(np.array([1, 0, 0, 0], dtype=np.float32))
            b = exec.create(np.array([1, 0, 0, 0], dtype=np.float32))
            out = exec.create(np.array([5, 0, 0, 0], dtype=np.float32))

            mc.ops.mul_cos_accumulate(exec, a, b, out, iterations=1)
            np.testing.assert_allclose(
                out.to_numpy(), [5 - math.cos(1), -1, -1, -1], rtol=1e-6
            )

            mc.ops.mul_cos_accumulate(exec, a, b, out, iterations=1)
            # second launch starts again at an even step
            np.testing.assert_allclose(
                out.to_numpy(), [5 - 2 * math.cos(1), -2, -2, -2], rtol=1e-6
            )

    def test_full_launch_returns_close_to_start(self, backend):
        with mc.Executor(backend=backend) as exec:
            a = exec.create(np.array([1, 0, 0, 0], dtype=np.float32))
            b = exec.create(np.array([1, 0, 0, 0], dtype=np.float32))
            out = exec.create(np.array([5, 0, 0, 0], dtype=np.float32))

            result = mc.ops.mul_cos_accumulate(exec, a, b, out)

            assert result is out
            np.testing.assert_allclose(out.to_numpy(), [5, 0, 0, 0], atol=1e-4)

    def test_default_metadata_and_geometry(self, backend):
        """Test omitted metadata and geometry cover the whole output."""
        data_a = np.linspace(-2, 2, 64, dtype=np.float32)
        data_b = np.linspace(3, -1, 64, dtype=np.float32)
        initial = np.linspace(0, 1, 64, dtype=np.float32)

        with mc.Executor(backend=backend, block_size=4) as exec:
            a, b, out = exec.create(data_a), exec.create(data_b), exec.create(initial)
            active = exec.execute(a, b, out, iterations=3)
            assert active == 16

            expected = expected_accumulate(data_a, data_b, initial, iterations=3)
            np.testing.assert_allclose(out.to_numpy(), expected, atol=1e-5)

    def test_mismatched_buffer_sizes(self, backend):
        """Test smaller inputs zero-fill for the output's trailing groups."""
        with mc.Executor(backend=backend) as exec:
            a = exec.create(np.full(4, 2.0, dtype=np.float32))
            b = exec.create(np.full(8, 0.5, dtype=np.float32))
            out = exec.allocate(12)

            exec.execute(a, b, out, iterations=1)

            result = out.to_numpy().reshape(3, 4)
            np.testing.assert_allclose(result[0], -math.cos(1), rtol=1e-6)
            np.testing.assert_array_equal(result[1], -1)   # input_0 overrun
            np.testing.assert_array_equal(result[2], -1)   # both overrun

    def test_explicit_geometry(self, backend):
        """Test a 3-D launch larger than the output."""
        geometry = mc.LaunchGeometry(grid=(2, 1, 2), block=(2, 2, 1))
        with mc.Executor(backend=backend) as exec:
            a = exec.create(np.ones(20, dtype=np.float32))
            b = exec.create(np.zeros(20, dtype=np.float32))
            out = exec.allocate(20)

            active = exec.execute(a, b, out, geometry=geometry, iterations=1)

            assert active == 5
            np.testing.assert_array_equal(out.to_numpy(), np.full(20, -1.0))

    def test_unaligned_output_length(self, backend):
        """Test a 6-scalar output leaves its trailing partial group untouched."""
        with mc.Executor(backend=backend) as exec:
            a = exec.create(np.ones(8, dtype=np.float32))
            b = exec.create(np.ones(8, dtype=np.float32))
            out = exec.create(np.full(6, 3.0, dtype=np.float32))

            with pytest.warns(UserWarning, match="not a multiple of 4"):
                exec.execute(a, b, out, iterations=1)

            result = out.to_numpy()
            np.testing.assert_allclose(result[:4], 3 - math.cos(1), rtol=1e-6)
            np.testing.assert_array_equal(result[4:], [3.0, 3.0])

    def test_explicit_metadata_overrides_shapes(self, backend):
        """Test capacities come from the descriptor, not buffer sizes."""
        with mc.Executor(backend=backend) as exec:
            a = exec.create(np.ones(8, dtype=np.float32))
            b = exec.create(np.ones(8, dtype=np.float32))
            out = exec.allocate(8)

            exec.execute(a, b, out, metadata=make_metadata(8, 8, 4), iterations=1)

            result = out.to_numpy()
            np.testing.assert_allclose(result[:4], -math.cos(1), rtol=1e-6)
            np.testing.assert_array_equal(result[4:], 0)


class TestBackendAgreement:
    """Test both backends produce the same accumulated output."""

    def test_random_data(self, rng):
        data_a = rng.standard_normal(96).astype(np.float32)
        data_b = rng.standard_normal(64).astype(np.float32)
        initial = rng.standard_normal(128).astype(np.float32)

        results = {}
        for backend in BACKENDS:
            with mc.Executor(backend=backend, block_size=8) as exec:
                a, b = exec.create(data_a), exec.create(data_b)
                out = exec.create(initial)
                exec.execute(a, b, out)
                results[backend] = out.to_numpy()

        np.testing.assert_allclose(results["numpy"], results["reference"], atol=1e-5)
        np.testing.assert_allclose(results["numpy"], initial, atol=5e-4)
