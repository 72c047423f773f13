"""
Sample the kernel over a grid of times into numpy arrays.

This is for analysis and plotting only. The kernel is queried one point at a
time, exactly as a UI would query it per frame.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np

if TYPE_CHECKING:
    from horizonsim.core.kernel import BlackHoleKernel


@dataclass
class Worldlines:
    """Both bodies sampled on a log-time grid."""

    n_tau: np.ndarray  # Faller log time
    faller_n: np.ndarray  # Faller closeness
    faller_tau: np.ndarray  # Faller proper time
    coordinate_time: np.ndarray
    observer_tau: np.ndarray  # Watcher proper time
    horizon_reached: np.ndarray  # bool

    def __len__(self) -> int:
        return len(self.n_tau)


def sample_worldlines(
    kernel: "BlackHoleKernel",
    n_tau_max: float = 10.0,
    n_samples: int = 200,
) -> Worldlines:
    """
    Sample both worldlines on an even log-time grid.

    Args:
        kernel: Kernel to query
        n_tau_max: Last log time on the grid
        n_samples: Number of grid points

    Returns:
        Worldlines with one entry per grid point
    """
    if n_samples < 2:
        raise ValueError(f"n_samples must be at least 2, got {n_samples}")

    n_tau = np.linspace(0.0, n_tau_max, n_samples)
    faller_n = np.empty(n_samples)
    faller_tau = np.empty(n_samples)
    coordinate_time = np.empty(n_samples)
    observer_tau = np.empty(n_samples)
    horizon_reached = np.zeros(n_samples, dtype=bool)

    for i, value in enumerate(n_tau):
        snapshot = kernel.state_by_log_time(float(value))
        faller_n[i] = snapshot.faller.n
        faller_tau[i] = snapshot.faller.tau
        coordinate_time[i] = snapshot.coordinate_time
        observer_tau[i] = snapshot.observer.tau
        horizon_reached[i] = snapshot.horizon_reached

    return Worldlines(
        n_tau=n_tau,
        faller_n=faller_n,
        faller_tau=faller_tau,
        coordinate_time=coordinate_time,
        observer_tau=observer_tau,
        horizon_reached=horizon_reached,
    )


def sample_intercepts(
    kernel: "BlackHoleKernel",
    tau_emits: Sequence[float] | np.ndarray,
) -> np.ndarray:
    """
    Intercept delay (watcher proper time) for each emission time.

    Entries are +inf where the signal never observably catches the faller.
    """
    return np.array([kernel.intercept_delta(float(tau)) for tau in tau_emits], dtype=np.float64)
