"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def kernel():
    """Faller from r = 2 (n = 0), watcher at r = 11 (n = -1)."""
    from horizonsim.core import create_kernel
    return create_kernel(closeness_faller=0.0, closeness_observer=-1.0)


@pytest.fixture
def deep_kernel():
    """Faller starting 10^-20 horizon radii above the horizon."""
    from horizonsim.core import create_kernel
    return create_kernel(closeness_faller=20.0, closeness_observer=5.0)


@pytest.fixture
def log_time_grid():
    """Log times spanning the whole double range of interest."""
    return np.linspace(0.0, 25.0, 101)
