"""
Analysis layer: sampled worldlines and solver cross-checks.

IMPORTANT: This is NOT used by the kernel. One-way derivation only.

- sample_worldlines: both bodies on a log-time grid, as numpy arrays
- sample_intercepts: intercept delays for a range of emission times
- check_intercept: validate the bisection against scipy's brentq
"""

from horizonsim.analysis.sampling import Worldlines, sample_worldlines, sample_intercepts
from horizonsim.analysis.consistency import InterceptCheck, check_intercept, check_intercepts

__all__ = [
    "Worldlines",
    "sample_worldlines",
    "sample_intercepts",
    "InterceptCheck",
    "check_intercept",
    "check_intercepts",
]
