"""
Coordinate transform between radius and the logarithmic closeness n.

Radii are in units of the horizon radius, so the horizon sits at r = 1:

    r = 1 + 10^(-n)        n = -log10(r - 1)

Larger n means closer to the horizon; n = +inf is the horizon itself.

A plain float radius collapses to exactly 1.0 once n exceeds ~16. To keep
the two maps exact inverses, closeness_to_radius returns an AnchoredFloat:
its float value is the (display-only) radius, and it also carries the exact
offset 10^(-n) from the horizon, which radius_to_closeness reads back.
"""

from __future__ import annotations

import numpy as np

HORIZON_RADIUS = 1.0
LN10 = float(np.log(10.0))


class AnchoredFloat(float):
    """
    A float that remembers its exact offset from an anchor value.

    value == anchor + offset up to rounding, but offset keeps full relative
    precision even when the float value has rounded onto the anchor.
    Arithmetic on an AnchoredFloat returns plain floats.
    """

    def __new__(cls, value: float, anchor: float, offset: float):
        obj = super().__new__(cls, value)
        obj.anchor = float(anchor)
        obj.offset = float(offset)
        return obj

    def __repr__(self) -> str:
        return f"AnchoredFloat({float(self)!r}, anchor={self.anchor!r}, offset={self.offset!r})"

    def __reduce__(self):
        return (AnchoredFloat, (float(self), self.anchor, self.offset))


def anchored_offset(value: float, anchor: float) -> float | None:
    """Exact offset of value from anchor if value carries one, else None."""
    if isinstance(value, AnchoredFloat) and value.anchor == anchor:
        return value.offset
    return None


def pow10(x: float) -> float:
    """10^x, with overflow to inf instead of an exception."""
    with np.errstate(over="ignore"):
        return float(np.power(10.0, x))


def closeness_to_radius(n: float) -> AnchoredFloat:
    """
    Convert closeness n to radius r = 1 + 10^(-n).

    Returns exactly 1.0 at n = +inf.
    """
    if n == np.inf:
        return AnchoredFloat(HORIZON_RADIUS, HORIZON_RADIUS, 0.0)
    excess = pow10(-n)
    return AnchoredFloat(HORIZON_RADIUS + excess, HORIZON_RADIUS, excess)


def radius_to_closeness(r: float) -> float:
    """
    Convert radius r to closeness n = -log10(r - 1).

    Radii at or inside the horizon map to +inf.
    """
    excess = anchored_offset(r, HORIZON_RADIUS)
    if excess is None:
        excess = r - HORIZON_RADIUS
    if excess <= 0:
        return np.inf
    return float(-np.log10(excess))
