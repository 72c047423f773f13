"""
Patterns: UI-side records that follow the kernel's bodies.

Patterns query the kernel; they never change it.
- SignalPhoton: a light signal sent inward by the watcher or outward by the faller
"""

from horizonsim.patterns.base import Pattern, PatternConfig
from horizonsim.patterns.photon import (
    PhotonConfig,
    SignalPhoton,
    emit_from_faller,
    emit_from_observer,
)

__all__ = [
    "Pattern",
    "PatternConfig",
    "PhotonConfig",
    "SignalPhoton",
    "emit_from_faller",
    "emit_from_observer",
]
