"""
Cross-check the intercept solver against a reference root finder.

The kernel finds the crossing by bracketing and bisecting log10(dt) in
closeness space. Here the same crossing is solved with scipy's brentq in
remaining-distance space, where both sides stay finite up to the horizon:

    10^(-n_obs) - dt / ln10  =  10^(-n_faller(t_emit + dt))

If they agree, the bisection is finding the right root.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np
from scipy.optimize import brentq

from horizonsim.core.coordinates import LN10, pow10
from horizonsim.core.photons import inbound_horizon_delay, photon_closeness_inbound
from horizonsim.core.trajectories import (
    falling_closeness_at_coordinate_time,
    observer_coordinate_time,
)

if TYPE_CHECKING:
    from horizonsim.core.kernel import BlackHoleKernel


@dataclass
class InterceptCheck:
    """Bisection result vs reference root for one emission."""

    tau_emit: float
    delta_bisection: float  # Kernel answer (watcher proper time)
    delta_reference: float  # brentq answer (watcher proper time)
    relative_error: float
    closeness_gap: float  # |n_photon - n_faller| at the kernel answer
    converged: bool  # False if the kernel returned +inf


def check_intercept(
    kernel: "BlackHoleKernel",
    tau_emit: float,
    xtol: float = 1e-14,
) -> InterceptCheck:
    """
    Compare kernel.intercept_delta(tau_emit) with a brentq root.

    Args:
        kernel: Kernel under test
        tau_emit: Watcher's proper time at emission
        xtol: brentq tolerance in log10(dt)

    Returns:
        InterceptCheck with both answers and the error metrics
    """
    n0 = kernel.config.closeness_faller
    n_obs = kernel.config.closeness_observer
    t_emit = observer_coordinate_time(max(tau_emit, 0.0), n_obs)
    budget = pow10(-n_obs)

    def residual(log_dt: float) -> float:
        dt = pow10(log_dt)
        photon_remaining = budget - dt / LN10
        faller_remaining = pow10(-falling_closeness_at_coordinate_time(t_emit + dt, n0))
        return photon_remaining - faller_remaining

    # One doubling past the photon's horizon delay, where it is surely ahead
    hi = float(np.log10(2.0 * inbound_horizon_delay(n_obs)))
    lo = hi - kernel.solver.start_decades - 1.0
    log_dt_ref = brentq(residual, lo, hi, xtol=xtol)
    delta_reference = pow10(log_dt_ref) * kernel.dilation

    delta = kernel.intercept_delta(tau_emit)
    if delta == np.inf:
        return InterceptCheck(
            tau_emit=tau_emit,
            delta_bisection=delta,
            delta_reference=delta_reference,
            relative_error=np.inf,
            closeness_gap=np.inf,
            converged=False,
        )

    dt = delta / kernel.dilation
    n_photon = photon_closeness_inbound(n_obs, 0.0, dt)
    n_faller = falling_closeness_at_coordinate_time(t_emit + dt, n0)

    return InterceptCheck(
        tau_emit=tau_emit,
        delta_bisection=delta,
        delta_reference=delta_reference,
        relative_error=abs(delta - delta_reference) / delta_reference,
        closeness_gap=abs(n_photon - n_faller),
        converged=True,
    )


def check_intercepts(
    kernel: "BlackHoleKernel",
    tau_emits: Sequence[float] | np.ndarray,
) -> list[InterceptCheck]:
    """Run check_intercept for each emission time."""
    return [check_intercept(kernel, float(tau)) for tau in tau_emits]
