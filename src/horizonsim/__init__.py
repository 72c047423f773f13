"""
horizonsim: a faller and a watcher near a Schwarzschild black hole

Computes the trajectories of a body falling radially from rest and a
stationary watcher, and the light signals exchanged between them, for an
interactive visualization.

Core concepts:
- Positions are carried in closeness n = -log10(r - 1), horizon at r = 1
- The faller's proper time is remapped to log time, so n = n0 + n_tau
- Coordinate time diverges at the horizon; the watcher's clock is dilated
- Inbound signals are tracked by spending a remaining-distance budget
- A bisection in log10(dt) finds when a signal catches the faller

Stays precise at fractional distances of 10^-100 from the horizon and beyond.
"""

__version__ = "0.1.0"
