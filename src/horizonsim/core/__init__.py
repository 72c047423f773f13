"""
Core kernel primitives.

This layer knows nothing about drawing, units or playback. It only knows:
- The closeness coordinate n and its radius (coordinates)
- The faller's and the watcher's clocks (trajectories)
- Light signals in closeness space (photons)
- When an inbound signal catches the faller (intercept)
- A stateless facade over all of the above (kernel)
"""

from horizonsim.core.coordinates import (
    AnchoredFloat,
    closeness_to_radius,
    radius_to_closeness,
)
from horizonsim.core.trajectories import (
    max_proper_time,
    falling_closeness,
    proper_time_to_log_time,
    log_time_to_proper_time,
    coordinate_time,
    falling_closeness_at_coordinate_time,
    dilation_factor,
    stationary_proper_time,
    observer_coordinate_time,
)
from horizonsim.core.photons import (
    Direction,
    photon_closeness_outbound,
    photon_closeness_inbound,
    inbound_horizon_delay,
)
from horizonsim.core.intercept import (
    InterceptSolverConfig,
    intercept_coordinate_delta,
    intercept_delta,
)
from horizonsim.core.kernel import (
    BlackHoleKernel,
    BodyState,
    ConfigurationError,
    KernelConfig,
    StateSnapshot,
    create_kernel,
)

__all__ = [
    "AnchoredFloat",
    "closeness_to_radius",
    "radius_to_closeness",
    "max_proper_time",
    "falling_closeness",
    "proper_time_to_log_time",
    "log_time_to_proper_time",
    "coordinate_time",
    "falling_closeness_at_coordinate_time",
    "dilation_factor",
    "stationary_proper_time",
    "observer_coordinate_time",
    "Direction",
    "photon_closeness_outbound",
    "photon_closeness_inbound",
    "inbound_horizon_delay",
    "InterceptSolverConfig",
    "intercept_coordinate_delta",
    "intercept_delta",
    "BlackHoleKernel",
    "BodyState",
    "ConfigurationError",
    "KernelConfig",
    "StateSnapshot",
    "create_kernel",
]
