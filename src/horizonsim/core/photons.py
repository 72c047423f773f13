"""
Light signals between the faller and the watcher, in closeness space.

Both directions are analytic approximations in coordinate time:

- Outbound (toward the watcher, n decreasing): the closeness speed
  1 / (ln10 * 10^max(n_emit, 0)) is taken once at emission and held fixed.
- Inbound (toward the horizon, n increasing): the photon spends a budget of
  remaining log distance, remaining = 10^(-n_emit) - dt / ln10, and
  n = -log10(remaining). Spending a budget avoids taking the log of a
  difference of nearly equal radii near the horizon.

A query before emission returns the emission point.
"""

from __future__ import annotations
from typing import Literal

import numpy as np

from horizonsim.core.coordinates import LN10, pow10

Direction = Literal["inbound", "outbound"]


def photon_closeness_outbound(n_emit: float, t_emit: float, t_current: float) -> float:
    """
    Closeness of a photon emitted outward at (n_emit, t_emit).

    Args:
        n_emit: Closeness at emission
        t_emit: Coordinate time of emission
        t_current: Coordinate time of the query

    Returns:
        Current closeness (decreasing with time)
    """
    dt = t_current - t_emit
    if not dt > 0 or n_emit == np.inf:
        return n_emit

    speed = 1.0 / (LN10 * pow10(max(n_emit, 0.0)))
    return n_emit - dt * speed


def photon_closeness_inbound(n_emit: float, t_emit: float, t_current: float) -> float:
    """
    Closeness of a photon emitted inward at (n_emit, t_emit).

    Returns +inf once the remaining log distance is spent (the photon has
    reached the horizon).
    """
    dt = t_current - t_emit
    if not dt > 0 or n_emit == np.inf:
        return n_emit

    remaining = pow10(-n_emit) - dt / LN10
    if remaining <= 0:
        return np.inf
    return float(-np.log10(remaining))


def inbound_horizon_delay(n_emit: float) -> float:
    """Coordinate time an inbound photon emitted at n_emit takes to reach the horizon."""
    return pow10(-n_emit) * LN10
