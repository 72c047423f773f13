"""
Trajectories of the two bodies: the radial faller and the stationary watcher.

The faller starts at rest at closeness n0 and reaches the horizon after a
finite proper time tau_max. Its position is written directly in closeness:

    n(tau) = n0 - log10(1 - tau / tau_max)

The log time n_tau = -log10(1 - tau / tau_max) turns this into
n = n0 + n_tau, so advancing the fall is an addition rather than a
subtraction of nearly equal proper times.

Coordinate time t diverges as the faller approaches the horizon. The watcher
sits at fixed closeness and its clock runs at a fixed fraction of t.

NOTE: These are qualitative closed forms chosen for monotonicity, divergence
and dilation, not exact Schwarzschild geodesics.
"""

from __future__ import annotations

import numpy as np

from horizonsim.core.coordinates import (
    LN10,
    AnchoredFloat,
    anchored_offset,
    closeness_to_radius,
    pow10,
)


def max_proper_time(closeness_faller: float) -> float:
    """
    Proper time for the faller to reach the horizon: tau_max = r0^1.5.

    Falling from farther out takes longer.
    """
    r0 = float(closeness_to_radius(closeness_faller))
    with np.errstate(over="ignore"):
        return float(np.power(r0, 1.5))


def _log10_remaining(tau: float, tau_max: float) -> float:
    """
    log10 of the remaining fraction 1 - tau/tau_max, in [-inf, 0].

    Uses the exact offset carried by anchored proper times.
    """
    offset = anchored_offset(tau, tau_max)
    if offset is not None:
        fraction = -offset / tau_max
        if fraction >= 1.0:
            return 0.0
        if fraction <= 0.0:
            return -np.inf
        return float(np.log10(fraction))

    if tau <= 0:
        return 0.0
    if tau >= tau_max:
        return -np.inf
    return float(np.log1p(-tau / tau_max) / LN10)


def falling_closeness(tau: float, closeness_faller: float, tau_max: float) -> float:
    """
    Closeness of the faller after proper time tau.

    Returns closeness_faller at tau <= 0 and +inf at tau >= tau_max.
    Non-decreasing in tau.
    """
    return closeness_faller - _log10_remaining(tau, tau_max)


def proper_time_to_log_time(tau: float, tau_max: float) -> float:
    """Map tau in [0, tau_max) onto n_tau in [0, inf)."""
    n_tau = -_log10_remaining(tau, tau_max)
    return n_tau if n_tau > 0 else 0.0


def log_time_to_proper_time(n_tau: float, tau_max: float) -> float:
    """
    Map n_tau in [0, inf) back to tau = tau_max * (1 - 10^(-n_tau)).

    The result is anchored to tau_max so that proper_time_to_log_time
    recovers n_tau even when tau has rounded onto tau_max.
    """
    if n_tau <= 0:
        return 0.0
    if n_tau == np.inf:
        return tau_max

    fraction = pow10(-n_tau)
    tau = -tau_max * float(np.expm1(-n_tau * LN10))
    return AnchoredFloat(tau, tau_max, -tau_max * fraction)


def coordinate_time(n: float, closeness_faller: float) -> float:
    """
    Coordinate time at which the faller reaches closeness n.

    t = 10^n - 10^n0, written as 10^n0 * (10^(n - n0) - 1) so that it is
    exactly 0 at the start and precise just after it.
    """
    if n == np.inf:
        return np.inf
    if n <= closeness_faller:
        return 0.0
    with np.errstate(over="ignore"):
        growth = float(np.expm1((n - closeness_faller) * LN10))
    return pow10(closeness_faller) * growth


def falling_closeness_at_coordinate_time(t: float, closeness_faller: float) -> float:
    """Inverse of coordinate_time: n = log10(t + 10^n0)."""
    if t <= 0:
        return closeness_faller
    if t == np.inf:
        return np.inf
    scaled = t * pow10(-closeness_faller)
    return closeness_faller + float(np.log1p(scaled) / LN10)


def dilation_factor(closeness_observer: float) -> float:
    """
    Ratio of the watcher's proper time to coordinate time, sqrt(1 - 1/r).

    Computed from the exact offset x = r - 1 as sqrt(x / (1 + x)), which
    stays positive for watchers much closer than doubles can resolve in r.
    Once x itself underflows the factor is 10^(-n/2), which stays positive
    up to n ~ 640.
    """
    x = pow10(-closeness_observer)
    if x == np.inf:
        return 1.0
    if x < 1e-300:
        return pow10(-0.5 * closeness_observer)
    return float(np.sqrt(x / (1.0 + x)))


def stationary_proper_time(t: float, closeness_observer: float) -> float:
    """Watcher's proper time at coordinate time t."""
    if t == np.inf:
        return np.inf
    return t * dilation_factor(closeness_observer)


def observer_coordinate_time(tau_observer: float, closeness_observer: float) -> float:
    """Coordinate time at which the watcher's clock reads tau_observer."""
    factor = dilation_factor(closeness_observer)
    if factor == 0.0:
        return np.inf
    return tau_observer / factor
