"""
Worldline and intercept-delay plots.

Static diagnostic figures of sampled kernel output, showing how the faller
approaches the horizon in log time while the watcher's clock runs away, and
how the delay for an inbound signal grows with emission time.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

if TYPE_CHECKING:
    from horizonsim.analysis.sampling import Worldlines


def plot_worldlines(
    worldlines: "Worldlines",
    title: str = "Faller and Watcher",
    figsize: tuple[float, float] = (12, 5),
) -> Figure:
    """
    Plot the fall in log time and the two clocks against each other.

    Args:
        worldlines: Output of sample_worldlines
        title: Figure title

    Returns:
        Figure with two panels
    """
    fig, axes = plt.subplots(1, 2, figsize=figsize)

    # Left: closeness vs log time (a straight line by construction)
    ax1 = axes[0]
    ax1.plot(worldlines.n_tau, worldlines.faller_n, color="tab:red", linewidth=2, label="Faller")
    ax1.axhline(y=worldlines.faller_n[0], color="gray", linestyle="--", alpha=0.5, label="Start")
    ax1.set_xlabel("Log time n_τ")
    ax1.set_ylabel("Closeness n")
    ax1.set_title("Closeness vs Log Time")
    ax1.legend()
    ax1.grid(True, alpha=0.3)

    # Right: watcher's clock vs faller's clock (log scale on the watcher)
    ax2 = axes[1]
    finite = np.isfinite(worldlines.observer_tau) & (worldlines.observer_tau > 0)
    ax2.semilogy(
        worldlines.faller_tau[finite],
        worldlines.observer_tau[finite],
        color="tab:blue", linewidth=2, label="Watcher τ",
    )
    ax2.set_xlabel("Faller proper time τ")
    ax2.set_ylabel("Watcher proper time")
    ax2.set_title("Clocks")
    ax2.legend()
    ax2.grid(True, alpha=0.3)

    fig.suptitle(title)
    fig.tight_layout()
    return fig


def plot_intercept_delays(
    tau_emits: Sequence[float] | np.ndarray,
    deltas: Sequence[float] | np.ndarray,
    title: str = "Signal Delay to Faller",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 5),
) -> tuple[Figure, Axes]:
    """
    Plot intercept delay against emission time.

    Emissions that never catch the faller (+inf) are marked on the top edge.

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    tau_emits = np.asarray(tau_emits, dtype=np.float64)
    deltas = np.asarray(deltas, dtype=np.float64)
    finite = np.isfinite(deltas)

    ax.plot(tau_emits[finite], deltas[finite], "ko-", markersize=3, label="Delay")
    if np.any(~finite):
        top = deltas[finite].max() if np.any(finite) else 1.0
        ax.scatter(
            tau_emits[~finite], np.full((~finite).sum(), top),
            color="red", marker="^", zorder=3, label="Never caught",
        )

    ax.set_xlabel("Watcher emission time τ")
    ax.set_ylabel("Watcher delay Δτ")
    ax.set_title(title)
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)

    return fig, ax


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file."""
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
