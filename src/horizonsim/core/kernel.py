"""
BlackHoleKernel: stateless query facade over the trajectory, photon and
intercept functions.

A kernel is built from an immutable KernelConfig (the two starting
closenesses). To change the configuration, build a new kernel. Every query
is a pure function of its arguments and returns a fresh StateSnapshot or a
number; out-of-range times are clamped rather than rejected.

Clocks:
- state(), tau_to_log_time(), faller_photon_*(): the faller's proper time
- observer_photon_*(), intercept_*(): the watcher's proper time
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field

import numpy as np

from horizonsim.core.coordinates import closeness_to_radius
from horizonsim.core.intercept import (
    DEFAULT_SOLVER_CONFIG,
    InterceptSolverConfig,
    intercept_delta,
)
from horizonsim.core.photons import photon_closeness_inbound, photon_closeness_outbound
from horizonsim.core.trajectories import (
    coordinate_time,
    dilation_factor,
    falling_closeness,
    log_time_to_proper_time,
    max_proper_time,
    observer_coordinate_time,
    proper_time_to_log_time,
    stationary_proper_time,
)

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when a kernel is built from an invalid configuration."""


@dataclass(frozen=True)
class KernelConfig:
    """Starting positions of the two bodies, in closeness units."""

    closeness_faller: float  # Faller's starting closeness n0
    closeness_observer: float  # Watcher's fixed closeness (must be < n0)


@dataclass(frozen=True)
class BodyState:
    """Position and clock reading of one body."""

    n: float  # Closeness (+inf at the horizon)
    r: float  # Radius in horizon units (display only)
    tau: float  # Proper time
    n_tau: float | None = None  # Log time (faller, when queried by log time)


@dataclass(frozen=True)
class StateSnapshot:
    """Both bodies at one instant."""

    faller: BodyState
    observer: BodyState
    coordinate_time: float
    horizon_reached: bool


@dataclass(frozen=True)
class BlackHoleKernel:
    """
    Query object for a faller / watcher pair.

    Construction validates the configuration:
    - both closenesses finite
    - closeness_observer < closeness_faller (watcher farther out)
    - a finite fall time tau_max
    - a watcher clock that still runs (dilation > 0)
    """

    config: KernelConfig
    solver: InterceptSolverConfig = DEFAULT_SOLVER_CONFIG

    _tau_max: float = field(init=False, repr=False)
    _dilation: float = field(init=False, repr=False)

    def __post_init__(self):
        cfg = self.config
        if not (math.isfinite(cfg.closeness_faller) and math.isfinite(cfg.closeness_observer)):
            raise ConfigurationError(
                f"Closeness values must be finite, got faller={cfg.closeness_faller}, "
                f"observer={cfg.closeness_observer}"
            )
        if cfg.closeness_observer >= cfg.closeness_faller:
            raise ConfigurationError(
                "Observer must be farther from the horizon than the faller "
                f"(closeness_observer={cfg.closeness_observer} >= "
                f"closeness_faller={cfg.closeness_faller})"
            )

        tau_max = max_proper_time(cfg.closeness_faller)
        if not math.isfinite(tau_max):
            raise ConfigurationError(
                f"Fall time overflows for closeness_faller={cfg.closeness_faller}"
            )

        dilation = dilation_factor(cfg.closeness_observer)
        if dilation == 0.0:
            raise ConfigurationError(
                f"Watcher clock freezes for closeness_observer={cfg.closeness_observer}"
            )

        # Frozen dataclass: cached derived constants
        object.__setattr__(self, "_tau_max", tau_max)
        object.__setattr__(self, "_dilation", dilation)

        logger.debug("Kernel built: %s, tau_max=%g", cfg, tau_max)

    @property
    def tau_max(self) -> float:
        """Faller's proper time to reach the horizon."""
        return self._tau_max

    @property
    def dilation(self) -> float:
        """Watcher's proper time per unit coordinate time (in (0, 1))."""
        return self._dilation

    # ═══════════════════════════════════════════════════════════════
    # Time axes
    # ═══════════════════════════════════════════════════════════════

    def tau_to_log_time(self, tau: float) -> float:
        """Faller's proper time -> log time n_tau."""
        return proper_time_to_log_time(tau, self._tau_max)

    def log_time_to_tau(self, n_tau: float) -> float:
        """Log time n_tau -> faller's proper time."""
        return log_time_to_proper_time(n_tau, self._tau_max)

    def _observer_tau_to_t(self, tau_observer: float) -> float:
        return observer_coordinate_time(max(tau_observer, 0.0), self.config.closeness_observer)

    # ═══════════════════════════════════════════════════════════════
    # State queries
    # ═══════════════════════════════════════════════════════════════

    def _observer_state(self, t: float) -> BodyState:
        n_obs = self.config.closeness_observer
        return BodyState(
            n=n_obs,
            r=closeness_to_radius(n_obs),
            tau=stationary_proper_time(t, n_obs),
        )

    def state(self, tau: float) -> StateSnapshot:
        """
        Snapshot at faller proper time tau, clamped to [0, tau_max].
        """
        if tau < 0:
            tau = 0.0
        elif tau > self._tau_max:
            tau = self._tau_max

        n0 = self.config.closeness_faller
        n_faller = falling_closeness(tau, n0, self._tau_max)
        t = coordinate_time(n_faller, n0)

        return StateSnapshot(
            faller=BodyState(n=n_faller, r=closeness_to_radius(n_faller), tau=tau),
            observer=self._observer_state(t),
            coordinate_time=t,
            horizon_reached=n_faller == np.inf,
        )

    def state_by_log_time(self, n_tau: float) -> StateSnapshot:
        """
        Snapshot at faller log time n_tau (clamped to >= 0).

        In log time the fall is linear: n = n0 + n_tau.
        """
        n_tau = max(n_tau, 0.0)

        n0 = self.config.closeness_faller
        n_faller = n0 + n_tau
        t = coordinate_time(n_faller, n0)

        return StateSnapshot(
            faller=BodyState(
                n=n_faller,
                r=closeness_to_radius(n_faller),
                tau=self.log_time_to_tau(n_tau),
                n_tau=n_tau,
            ),
            observer=self._observer_state(t),
            coordinate_time=t,
            horizon_reached=n_faller == np.inf,
        )

    # ═══════════════════════════════════════════════════════════════
    # Photons
    # ═══════════════════════════════════════════════════════════════

    def observer_photon_closeness(self, tau_emit: float, tau_current: float) -> float:
        """
        Closeness of a photon the watcher sends inward.

        Both times are on the watcher's clock. Before emission the photon
        sits at the watcher.
        """
        t_emit = self._observer_tau_to_t(tau_emit)
        t_current = self._observer_tau_to_t(tau_current)
        return photon_closeness_inbound(self.config.closeness_observer, t_emit, t_current)

    def observer_photon_at_horizon(self, tau_emit: float, tau_current: float) -> bool:
        """Whether the watcher's inbound photon has reached the horizon."""
        return self.observer_photon_closeness(tau_emit, tau_current) == np.inf

    def faller_photon_closeness(self, tau_emit: float, tau_current: float) -> float:
        """
        Closeness of a photon the faller sends outward.

        Both times are on the faller's clock. A photon sent from the
        horizon never leaves it.
        """
        emitted = self.state(tau_emit)
        current = self.state(tau_current)
        return photon_closeness_outbound(
            emitted.faller.n, emitted.coordinate_time, current.coordinate_time
        )

    def faller_photon_arrived(self, tau_emit: float, tau_current: float) -> bool:
        """Whether the faller's outbound photon has reached the watcher."""
        n = self.faller_photon_closeness(tau_emit, tau_current)
        return n <= self.config.closeness_observer

    # ═══════════════════════════════════════════════════════════════
    # Intercepts
    # ═══════════════════════════════════════════════════════════════

    def _intercept_delta_at(self, t_emit: float) -> float:
        return intercept_delta(
            t_emit,
            self.config.closeness_faller,
            self.config.closeness_observer,
            self.solver,
        )

    def intercept_delta(self, tau_emit: float) -> float:
        """
        Watcher proper time from emitting an inbound photon at tau_emit
        (watcher's clock) until it reaches the faller.

        Returns +inf if the photon never observably catches the faller.
        """
        return self._intercept_delta_at(self._observer_tau_to_t(tau_emit))

    def intercept_tau(self, tau_emit: float) -> float:
        """Watcher's clock reading when the photon sent at tau_emit arrives."""
        delta = self.intercept_delta(tau_emit)
        if delta == np.inf:
            return np.inf
        return max(tau_emit, 0.0) + delta

    def intercept_delta_by_log_time(self, n_tau: float) -> float:
        """
        Like intercept_delta, for a photon emitted at the moment the faller
        reaches log time n_tau.

        Addresses emissions arbitrarily late in the fall, where the
        watcher's clock reading itself would lose precision.
        """
        n_tau = max(n_tau, 0.0)
        n0 = self.config.closeness_faller
        return self._intercept_delta_at(coordinate_time(n0 + n_tau, n0))


def create_kernel(
    closeness_faller: float,
    closeness_observer: float,
    solver: InterceptSolverConfig | None = None,
) -> BlackHoleKernel:
    """
    Factory for a kernel.

    Args:
        closeness_faller: Faller's starting closeness
        closeness_observer: Watcher's closeness (must be lower)
        solver: Intercept iteration budget (default budget if None)

    Raises:
        ConfigurationError: if the configuration is invalid
    """
    config = KernelConfig(closeness_faller=closeness_faller, closeness_observer=closeness_observer)
    if solver is None:
        return BlackHoleKernel(config)
    return BlackHoleKernel(config, solver=solver)
