"""
Fused Op

Operation: out[lane] = cos(a[lane] * b[lane])

Works on one vector-group of shape (4,) or a batch of shape (n, 4). Both
the product and the cosine are evaluated in float32.
"""

import numpy as np

from .kernel_lang import cosf, f32


def mul_cos(a, b) -> np.ndarray:
    """Compute cos(a * b) lane by lane"""
    product = np.multiply(a, b, dtype=f32)
    return cosf(product)
