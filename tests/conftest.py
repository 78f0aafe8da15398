"""
Pytest configuration and shared fixtures for basis-change tests.

This module provides seeded numpy generators and small bases shared across
the polynomial, basis and relation test suites.
"""
import zlib

import pytest
import numpy as np

from symmpoly import HalfIdempotentBasis, SymmetricBasis


@pytest.fixture(scope="session")
def base_seed():
    """Root seed for all tests."""
    return 42


@pytest.fixture
def rng(base_seed, request):
    """Per-test generator derived from test name for reproducibility."""
    test_id = zlib.crc32(request.node.nodeid.encode())
    return np.random.default_rng([base_seed, test_id])


@pytest.fixture(params=[1, 2, 3, 4])
def n(request):
    """Parametrized number of letters for testing across scales."""
    return request.param


@pytest.fixture(params=[True, False], ids=["ordered", "hashed"])
def ordered(request):
    """Parametrized container kind."""
    return request.param


@pytest.fixture
def symmetric_basis(n, ordered):
    return SymmetricBasis(n, ordered=ordered)


@pytest.fixture
def idempotent_basis(n, ordered):
    return HalfIdempotentBasis(n, ordered=ordered)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "phase1: relations policy tests")
    config.addinivalue_line("markers", "phase2: graded polynomial tests")
    config.addinivalue_line("markers", "phase3: basis-change engine tests")
    config.addinivalue_line("markers", "phase4: elementary symmetric basis tests")
    config.addinivalue_line("markers", "phase5: half-idempotent basis tests")
    config.addinivalue_line("markers", "invariant: mathematical invariant verification")
