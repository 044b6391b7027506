"""Pytest configuration and shared fixtures for qvector tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Helpers for building random states and for resetting global state
"""

import os

import numpy as np
import pytest
import torch

from qvector.core.matrix import Matrix
from qvector.diagnostics import debug_context, is_debug_enabled


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).

    Returns:
        A seeded numpy.random.Generator instance.
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed numpy and torch globals before every test."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())
    if torch.cuda.is_available():
        torch.cuda.manual_seed_all(_seed())


@pytest.fixture(scope="function", autouse=True)
def restore_debug_mode():
    """Restore the debug setting each test started with, whatever the test did."""
    with debug_context(is_debug_enabled()):
        yield


@pytest.fixture
def random_state(rng):
    """Factory for normalized random ``2**n x 1`` states."""

    def make(n_qubits: int) -> Matrix:
        dim = 2**n_qubits
        amplitudes = rng.normal(size=dim) + 1j * rng.normal(size=dim)
        amplitudes /= np.linalg.norm(amplitudes)
        return Matrix.from_rows(amplitudes.reshape(dim, 1))

    return make
