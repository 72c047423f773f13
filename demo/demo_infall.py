#!/usr/bin/env python3
"""
Demo: Falling Toward the Horizon

A body falls radially from rest at r = 2 (closeness n = 0) while a watcher
stays put at r = 11 (n = -1):

1. The faller reaches the horizon after a finite proper time tau_max
2. In log time the fall is a straight line: n = n0 + n_tau
3. The watcher's clock runs away as the faller nears the horizon
4. Signals sent inward later take longer to catch the faller

Output: output/demo_infall/worldlines.png, output/demo_infall/intercepts.png
"""

from pathlib import Path

import numpy as np
import matplotlib

matplotlib.use("Agg")

from horizonsim.core import create_kernel
from horizonsim.patterns import emit_from_observer, emit_from_faller
from horizonsim.analysis import sample_worldlines, sample_intercepts, check_intercept
from horizonsim.viz import plot_worldlines, plot_intercept_delays, save_figure


def main():
    print("=" * 60)
    print("  INFALL DEMONSTRATION")
    print("=" * 60)

    output_dir = Path("output/demo_infall")
    output_dir.mkdir(parents=True, exist_ok=True)

    print("\n1. Building kernel...")
    kernel = create_kernel(closeness_faller=0.0, closeness_observer=-1.0)
    start = kernel.state(0.0)
    print(f"   Faller starts at r = {start.faller.r:.3f} (n = {start.faller.n})")
    print(f"   Watcher sits at r = {start.observer.r:.3f} (n = {start.observer.n})")
    print(f"   Fall time tau_max = {kernel.tau_max:.6f}")
    print(f"   Watcher clock rate = {kernel.dilation:.6f}")

    print("\n2. Following the fall in log time...")
    for n_tau in [0.0, 1.0, 5.0, 20.0, 100.0]:
        snapshot = kernel.state_by_log_time(n_tau)
        print(f"   n_tau={n_tau:6.1f}  n={snapshot.faller.n:8.2f}  "
              f"r={float(snapshot.faller.r):.6f}  watcher tau={snapshot.observer.tau:.3e}")

    print("\n3. Sampling worldlines...")
    worldlines = sample_worldlines(kernel, n_tau_max=12.0, n_samples=300)
    fig = plot_worldlines(worldlines)
    save_figure(fig, output_dir / "worldlines.png")
    print(f"   {len(worldlines)} samples -> {output_dir / 'worldlines.png'}")

    print("\n4. Signals from the watcher...")
    tau_emits = np.linspace(0.0, 50.0, 26)
    deltas = sample_intercepts(kernel, tau_emits)
    for tau, delta in zip(tau_emits[::5], deltas[::5]):
        print(f"   emitted at {tau:5.1f}: caught after {delta:.6f}")
    late = kernel.intercept_delta_by_log_time(50.0)
    print(f"   emitted when n_tau = 50: {late}")

    check = check_intercept(kernel, 0.0)
    print(f"   brentq agreement at tau=0: rel. error {check.relative_error:.2e}, "
          f"closeness gap {check.closeness_gap:.2e}")

    fig, _ = plot_intercept_delays(tau_emits, deltas)
    save_figure(fig, output_dir / "intercepts.png")

    print("\n5. Following individual photons...")
    inbound = emit_from_observer("ping", kernel, tau_emit=0.0)
    outbound = emit_from_faller("echo", kernel, tau_emit=0.5 * kernel.tau_max)
    for tau in np.linspace(0.0, 30.0, 7):
        inbound.update(float(tau))
    for n_tau in np.linspace(0.3, 3.0, 7):
        outbound.update(kernel.log_time_to_tau(float(n_tau)))
    print(f"   ping: n={inbound.n}, arrived={inbound.arrived}")
    print(f"   echo: n={outbound.n:.3f}, arrived={outbound.arrived}")

    print("\nDone.")


if __name__ == "__main__":
    main()
