"""
SignalPhoton: a light signal sent by one body, followed frame by frame.

A photon is created at emission, re-queried every frame and frozen once it
arrives:
- inbound (sent by the watcher): arrives at the horizon
- outbound (sent by the faller): arrives at the watcher

Times are read on the emitter's clock: the watcher's proper time for
inbound photons, the faller's for outbound ones.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from horizonsim.core.kernel import BlackHoleKernel

from horizonsim.core.photons import Direction
from horizonsim.patterns.base import Pattern, PatternConfig


@dataclass
class PhotonConfig(PatternConfig):
    """Configuration for a light signal."""

    direction: Direction = "inbound"


class SignalPhoton(Pattern):
    """
    A light signal between the two bodies.

    The photon:
    1. Records its emission time and emission closeness
    2. Moves to the kernel's answer on each update
    3. Stops moving once it has arrived
    4. Records (tau, n) readings along the way
    """

    def __init__(self, config: PhotonConfig, kernel: "BlackHoleKernel"):
        super().__init__(config, kernel)

        if config.direction == "inbound":
            self.n_emit: float = kernel.config.closeness_observer
        elif config.direction == "outbound":
            self.n_emit = kernel.state(config.tau_emit).faller.n
        else:
            raise ValueError(f"Unknown direction: {config.direction}")

        self.n: float = self.n_emit
        self.arrived: bool = False

        # Record readings: list of (tau, n)
        self.readings: list[tuple[float, float]] = [(config.tau_emit, self.n)]

    @property
    def direction(self) -> Direction:
        return self.config.direction

    def _query(self, tau: float) -> tuple[float, bool]:
        tau_emit = self.config.tau_emit
        if self.direction == "inbound":
            n = self.kernel.observer_photon_closeness(tau_emit, tau)
            return n, self.kernel.observer_photon_at_horizon(tau_emit, tau)
        n = self.kernel.faller_photon_closeness(tau_emit, tau)
        return n, self.kernel.faller_photon_arrived(tau_emit, tau)

    def update(self, tau: float) -> None:
        """
        Move the photon to its position at emitter time tau.

        Arrived photons keep their last position; outbound photons are
        pinned to the watcher's closeness on arrival.
        """
        if self.arrived:
            return

        self._tau = tau
        n, arrived = self._query(tau)
        if arrived and self.direction == "outbound":
            n = self.kernel.config.closeness_observer

        self.n = n
        self.arrived = arrived
        self.readings.append((tau, n))

    def get_measurements(self) -> dict:
        """Return photon measurements."""
        return {
            "pattern_id": self.config.pattern_id,
            "direction": self.direction,
            "tau_emit": self.config.tau_emit,
            "n_emit": self.n_emit,
            "n": self.n,
            "tau": self._tau,
            "arrived": self.arrived,
            "readings": self.readings.copy(),
        }


def emit_from_observer(
    pattern_id: str,
    kernel: "BlackHoleKernel",
    tau_emit: float,
) -> SignalPhoton:
    """
    Convenience factory for a photon the watcher sends toward the horizon.

    Args:
        pattern_id: Unique identifier for this photon
        kernel: The kernel to query
        tau_emit: Watcher's proper time at emission

    Returns:
        Inbound SignalPhoton
    """
    config = PhotonConfig(pattern_id=pattern_id, tau_emit=tau_emit, direction="inbound")
    return SignalPhoton(config, kernel)


def emit_from_faller(
    pattern_id: str,
    kernel: "BlackHoleKernel",
    tau_emit: float,
) -> SignalPhoton:
    """
    Convenience factory for a photon the faller sends toward the watcher.

    Args:
        pattern_id: Unique identifier for this photon
        kernel: The kernel to query
        tau_emit: Faller's proper time at emission

    Returns:
        Outbound SignalPhoton
    """
    config = PhotonConfig(pattern_id=pattern_id, tau_emit=tau_emit, direction="outbound")
    return SignalPhoton(config, kernel)
