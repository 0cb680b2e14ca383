"""
Backend utilities for mulcos execution.

Provides backend type enumeration and selection utilities.
"""

import logging
import os
from enum import Enum

logger = logging.getLogger(__name__)

BACKEND_ENV_VAR = "MULCOS_BACKEND"


class BackendType(Enum):
    """Backend types for mulcos execution."""

    NUMPY = "numpy"
    REFERENCE = "reference"
    AUTO = "auto"

    def __str__(self) -> str:
        return self.value


VALID_BACKENDS = {BackendType.NUMPY.value, BackendType.REFERENCE.value}


def is_torch_available() -> bool:
    """
    Check if the PyTorch integration can be used.

    Returns:
        True if torch is importable, False otherwise.
    """
    import importlib.util

    return importlib.util.find_spec("torch") is not None


def get_default_backend() -> str:
    """
    Get the default backend.

    Returns the value of the MULCOS_BACKEND environment variable when it is
    set to a valid backend, "numpy" otherwise.

    Returns:
        Backend string: "numpy" or "reference"
    """
    configured = os.environ.get(BACKEND_ENV_VAR, "").strip().lower()
    if configured in VALID_BACKENDS:
        logger.debug("Backend %r selected from %s", configured, BACKEND_ENV_VAR)
        return configured
    if configured and configured != BackendType.AUTO.value:
        logger.warning(
            "Ignoring %s=%r; expected one of %s",
            BACKEND_ENV_VAR, configured, sorted(VALID_BACKENDS),
        )
    return BackendType.NUMPY.value


def validate_backend(backend) -> str:
    """
    Validate and normalize backend string.

    Args:
        backend: Backend string or BackendType ("numpy", "reference", "auto")

    Returns:
        Normalized backend string

    Raises:
        ValueError: If backend is invalid
    """
    backend_lower = str(backend).lower()

    if backend_lower == BackendType.AUTO.value:
        return get_default_backend()

    if backend_lower not in VALID_BACKENDS:
        raise ValueError(
            f"Invalid backend '{backend}'. "
            f"Must be one of: {', '.join(sorted(VALID_BACKENDS))}, or 'auto'"
        )

    return backend_lower
