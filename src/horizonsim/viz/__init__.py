"""
Visualization utilities.

- Worldline plots (closeness vs log time, clock vs clock)
- Intercept delay plots
"""

from horizonsim.viz.worldlines import (
    plot_worldlines,
    plot_intercept_delays,
    save_figure,
)

__all__ = [
    "plot_worldlines",
    "plot_intercept_delays",
    "save_figure",
]
