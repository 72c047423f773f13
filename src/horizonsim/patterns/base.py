"""
Base classes for patterns.

Patterns are UI-side records that follow something through the simulation:
- Light signals sent by either body (photons)

IMPORTANT: Patterns observe the kernel but never change it. The kernel is
stateless; a pattern holds the only mutable state, refreshed once per frame.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from horizonsim.core.kernel import BlackHoleKernel


@dataclass
class PatternConfig:
    """Base configuration for patterns."""

    pattern_id: str  # Unique identifier
    tau_emit: float = 0.0  # Creation time on the emitter's clock


class Pattern(ABC):
    """
    Base class for patterns that follow the kernel's bodies.

    Patterns query the kernel and accumulate readings.
    """

    def __init__(self, config: PatternConfig, kernel: "BlackHoleKernel"):
        self.config = config
        self.kernel = kernel
        self._tau = config.tau_emit

    @property
    def tau(self) -> float:
        """Clock reading of the last update."""
        return self._tau

    @abstractmethod
    def update(self, tau: float) -> None:
        """
        Refresh the pattern for the current frame.

        Args:
            tau: Current reading of the emitter's clock
        """
        ...

    @abstractmethod
    def get_measurements(self) -> dict:
        """
        Return recorded measurements from this pattern.

        Returns:
            Dict with pattern-specific measurements
        """
        ...
