"""
Intercept solver: when does a photon sent inward by the watcher reach the faller?

Both closenesses are non-decreasing in the coordinate-time delay dt, and the
photon starts behind the faller (the watcher is farther out), so there is a
single crossing. dt spans dozens of decades depending on how deep the faller
already is, so the search runs in log10(dt):

1. Expand: double dt (step log10(2)) until the photon is level with or ahead
   of the faller, up to max_doublings.
2. Bisect log10(dt) for max_bisections steps or until the bracket is
   narrower than log_tolerance.
3. Return the midpoint.

The search starts start_decades below the photon's own horizon-crossing
delay, and the photon is ahead by that delay at the latest, so the expansion
cap is a guard rather than a working limit.

A photon at the horizon counts as ahead, so when the faller is deeper than
the photon's remaining distance can resolve, the crossing is the photon's
horizon delay. If that delay is too small to change the emission time
itself (t_emit + dt == t_emit), the faller is effectively frozen at the
horizon for the watcher; no observable interception happens and the result
is +inf. This is an answer, not an error.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass

import numpy as np

from horizonsim.core.coordinates import pow10
from horizonsim.core.photons import inbound_horizon_delay, photon_closeness_inbound
from horizonsim.core.trajectories import (
    dilation_factor,
    falling_closeness_at_coordinate_time,
)

logger = logging.getLogger(__name__)

LOG10_2 = float(np.log10(2.0))


@dataclass(frozen=True)
class InterceptSolverConfig:
    """Iteration budget for the intercept search."""

    max_doublings: int = 100  # Bracket expansion cap
    max_bisections: int = 60  # Bisection cap
    log_tolerance: float = 1e-12  # Bracket width in log10(dt)
    start_decades: float = 15.0  # Start this far below the photon's horizon delay


DEFAULT_SOLVER_CONFIG = InterceptSolverConfig()


def _closeness_pair(
    log_dt: float,
    t_emit: float,
    closeness_faller: float,
    closeness_observer: float,
) -> tuple[float, float]:
    """(photon, faller) closeness at delay 10^log_dt after emission."""
    dt = pow10(log_dt)
    n_photon = photon_closeness_inbound(closeness_observer, 0.0, dt)
    n_faller = falling_closeness_at_coordinate_time(t_emit + dt, closeness_faller)
    return n_photon, n_faller


def intercept_coordinate_delta(
    t_emit: float,
    closeness_faller: float,
    closeness_observer: float,
    config: InterceptSolverConfig | None = None,
) -> float:
    """
    Coordinate-time delay until an inbound photon catches the faller.

    Args:
        t_emit: Coordinate time at which the watcher emits
        closeness_faller: Faller's starting closeness n0
        closeness_observer: Watcher's closeness (emission point)
        config: Iteration budget (defaults to DEFAULT_SOLVER_CONFIG)

    Returns:
        dt > 0, or +inf if no interception is found
    """
    if config is None:
        config = DEFAULT_SOLVER_CONFIG

    if t_emit == np.inf or falling_closeness_at_coordinate_time(t_emit, closeness_faller) == np.inf:
        return np.inf

    def photon_ahead(log_dt: float) -> bool:
        n_photon, n_faller = _closeness_pair(log_dt, t_emit, closeness_faller, closeness_observer)
        return n_photon >= n_faller

    horizon_delay = inbound_horizon_delay(closeness_observer)
    if not 0.0 < horizon_delay < np.inf:
        logger.debug("Photon horizon delay out of range (n_obs=%g)", closeness_observer)
        return np.inf

    lo = float(np.log10(horizon_delay)) - config.start_decades
    hi = lo

    for _ in range(config.max_doublings):
        hi = lo + LOG10_2
        if photon_ahead(hi):
            break
        lo = hi
    else:
        logger.debug("Intercept bracket not found after %d doublings (t_emit=%g)",
                     config.max_doublings, t_emit)
        return np.inf

    for _ in range(config.max_bisections):
        if hi - lo < config.log_tolerance:
            break
        mid = 0.5 * (lo + hi)
        if photon_ahead(mid):
            hi = mid
        else:
            lo = mid

    # Delay below the resolution of t_emit: the faller never moves in between
    if t_emit + pow10(hi) == t_emit:
        logger.debug("Intercept delay lost against emission time (t_emit=%g)", t_emit)
        return np.inf

    return pow10(0.5 * (lo + hi))


def intercept_delta(
    t_emit: float,
    closeness_faller: float,
    closeness_observer: float,
    config: InterceptSolverConfig | None = None,
) -> float:
    """
    Same as intercept_coordinate_delta, in the watcher's proper time.

    Returns +inf if no interception is found.
    """
    dt = intercept_coordinate_delta(t_emit, closeness_faller, closeness_observer, config)
    if dt == np.inf:
        return np.inf
    return dt * dilation_factor(closeness_observer)
