"""Unit tests for BlackHoleKernel."""

import dataclasses

import numpy as np
import pytest

from horizonsim.core.kernel import (
    BlackHoleKernel,
    ConfigurationError,
    KernelConfig,
    create_kernel,
)
from horizonsim.core.intercept import InterceptSolverConfig
from horizonsim.core.coordinates import radius_to_closeness
from horizonsim.core.trajectories import falling_closeness_at_coordinate_time
from horizonsim.core.photons import inbound_horizon_delay
from horizonsim.analysis.consistency import check_intercept


class TestConstruction:
    """Tests for kernel construction and validation."""

    def test_creation(self, kernel):
        assert kernel.config.closeness_faller == 0.0
        assert kernel.config.closeness_observer == -1.0
        assert kernel.tau_max == pytest.approx(2.0 ** 1.5)

    def test_observer_inside_faller_rejected(self):
        with pytest.raises(ConfigurationError):
            create_kernel(closeness_faller=0.0, closeness_observer=1.0)

    def test_observer_at_faller_rejected(self):
        with pytest.raises(ConfigurationError):
            create_kernel(closeness_faller=2.0, closeness_observer=2.0)

    @pytest.mark.parametrize("n0, n_obs", [
        (np.inf, 0.0),
        (0.0, -np.inf),
        (np.nan, -1.0),
    ])
    def test_non_finite_rejected(self, n0, n_obs):
        with pytest.raises(ConfigurationError):
            create_kernel(closeness_faller=n0, closeness_observer=n_obs)

    def test_overflowing_fall_time_rejected(self):
        with pytest.raises(ConfigurationError):
            create_kernel(closeness_faller=-300.0, closeness_observer=-301.0)

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)

    def test_config_object(self):
        kernel = BlackHoleKernel(KernelConfig(closeness_faller=1.0, closeness_observer=0.0))
        assert kernel.tau_max == pytest.approx(1.1 ** 1.5)

    def test_frozen(self, kernel):
        with pytest.raises(dataclasses.FrozenInstanceError):
            kernel.config = KernelConfig(closeness_faller=3.0, closeness_observer=0.0)

    def test_custom_solver(self):
        solver = InterceptSolverConfig(max_bisections=10)
        kernel = create_kernel(0.0, -1.0, solver=solver)
        assert kernel.solver is solver

    def test_dilation(self, kernel):
        assert kernel.dilation == pytest.approx(np.sqrt(10.0 / 11.0))

    def test_watcher_beyond_radius_resolution(self):
        kernel = create_kernel(closeness_faller=400.0, closeness_observer=330.0)
        assert 0.0 < kernel.dilation < 1.0
        assert kernel.state(0.0).observer.tau == 0.0

    def test_frozen_watcher_clock_rejected(self):
        with pytest.raises(ConfigurationError):
            create_kernel(closeness_faller=1000.0, closeness_observer=700.0)


class TestState:
    """Tests for state(tau)."""

    def test_start(self, kernel):
        snapshot = kernel.state(0.0)
        assert snapshot.faller.n == 0.0
        assert snapshot.faller.r == 2.0
        assert snapshot.faller.tau == 0.0
        assert snapshot.coordinate_time == 0.0
        assert snapshot.observer.tau == 0.0
        assert snapshot.observer.n == -1.0
        assert snapshot.observer.r == pytest.approx(11.0)
        assert not snapshot.horizon_reached

    def test_horizon_at_tau_max(self, kernel):
        snapshot = kernel.state(kernel.tau_max)
        assert snapshot.horizon_reached
        assert snapshot.faller.n == np.inf
        assert snapshot.faller.r == 1.0
        assert snapshot.coordinate_time == np.inf
        assert snapshot.observer.tau == np.inf

    def test_halfway(self, kernel):
        n = kernel.state(kernel.tau_max / 2).faller.n
        assert 0.0 < n < np.inf

    def test_clamped_above(self, kernel):
        snapshot = kernel.state(10 * kernel.tau_max)
        assert snapshot.faller.tau == kernel.tau_max
        assert snapshot.horizon_reached

    def test_clamped_below(self, kernel):
        snapshot = kernel.state(-1.0)
        assert snapshot.faller.tau == 0.0
        assert snapshot.faller.n == 0.0

    def test_observer_clock_diverges(self, kernel):
        readings = [kernel.state(kernel.log_time_to_tau(k)).observer.tau for k in [1.0, 5.0, 10.0, 50.0]]
        assert all(b > a for a, b in zip(readings, readings[1:]))
        assert readings[-1] > 1e49

    def test_snapshot_is_fresh_and_frozen(self, kernel):
        a = kernel.state(1.0)
        b = kernel.state(1.0)
        assert a == b
        assert a is not b
        with pytest.raises(dataclasses.FrozenInstanceError):
            a.coordinate_time = 0.0

    def test_idempotent(self, kernel):
        assert kernel.state(2.1) == kernel.state(2.1)


class TestStateByLogTime:
    """Tests for state_by_log_time(n_tau)."""

    def test_linear_in_log_time(self, kernel):
        snapshot = kernel.state_by_log_time(3.0)
        assert snapshot.faller.n == 3.0
        assert snapshot.faller.n_tau == 3.0
        assert snapshot.faller.tau == pytest.approx(kernel.tau_max * (1 - 1e-3))

    def test_clamped_below(self, kernel):
        snapshot = kernel.state_by_log_time(-2.0)
        assert snapshot.faller.n == 0.0
        assert snapshot.faller.n_tau == 0.0
        assert snapshot.coordinate_time == 0.0

    def test_infinite_log_time(self, kernel):
        snapshot = kernel.state_by_log_time(np.inf)
        assert snapshot.horizon_reached
        assert snapshot.faller.tau == kernel.tau_max

    def test_consistent_with_state(self, kernel):
        for n_tau in [0.25, 2.5, 9.0]:
            by_log = kernel.state_by_log_time(n_tau)
            by_tau = kernel.state(kernel.log_time_to_tau(n_tau))
            assert by_tau.faller.n == pytest.approx(by_log.faller.n)
            assert by_tau.coordinate_time == pytest.approx(by_log.coordinate_time, rel=1e-9)

    def test_deep_fall_stays_precise(self, kernel):
        snapshot = kernel.state_by_log_time(100.0)
        assert snapshot.faller.n == 100.0
        assert float(snapshot.faller.r) == 1.0
        assert radius_to_closeness(snapshot.faller.r) == pytest.approx(100.0)
        assert not snapshot.horizon_reached
        assert kernel.tau_to_log_time(snapshot.faller.tau) == pytest.approx(100.0)

    def test_deep_start(self, deep_kernel):
        snapshot = deep_kernel.state(0.0)
        assert snapshot.faller.n == 20.0
        assert radius_to_closeness(snapshot.faller.r) == pytest.approx(20.0)
        assert radius_to_closeness(snapshot.observer.r) == pytest.approx(5.0)


class TestLogTimeConversion:
    """Tests for tau_to_log_time / log_time_to_tau."""

    def test_inverse(self, kernel, log_time_grid):
        for n_tau in log_time_grid:
            tau = kernel.log_time_to_tau(float(n_tau))
            assert abs(kernel.tau_to_log_time(tau) - n_tau) < 1e-6

    def test_endpoints(self, kernel):
        assert kernel.tau_to_log_time(0.0) == 0.0
        assert kernel.tau_to_log_time(kernel.tau_max) == np.inf
        assert kernel.log_time_to_tau(np.inf) == kernel.tau_max


class TestPhotons:
    """Tests for photon queries."""

    def test_observer_photon_starts_at_observer(self, kernel):
        assert kernel.observer_photon_closeness(5.0, 5.0) == -1.0
        assert kernel.observer_photon_closeness(5.0, 1.0) == -1.0

    def test_observer_photon_moves_inward(self, kernel):
        n1 = kernel.observer_photon_closeness(0.0, 2.0)
        n2 = kernel.observer_photon_closeness(0.0, 5.0)
        assert -1.0 < n1 < n2 < np.inf

    def test_observer_photon_reaches_horizon(self, kernel):
        assert not kernel.observer_photon_at_horizon(0.0, 5.0)
        assert kernel.observer_photon_at_horizon(0.0, 100.0)
        assert kernel.observer_photon_closeness(0.0, 100.0) == np.inf

    def test_faller_photon_starts_at_faller(self, kernel):
        assert kernel.faller_photon_closeness(0.0, 0.0) == 0.0

    def test_faller_photon_moves_outward(self, kernel):
        n_late = kernel.faller_photon_closeness(0.0, 1.0)
        assert -1.0 < n_late < 0.0

    def test_faller_photon_arrives(self, kernel):
        assert not kernel.faller_photon_arrived(0.0, 0.1)
        assert kernel.faller_photon_arrived(0.0, kernel.log_time_to_tau(1.0))

    def test_faller_photon_from_horizon(self, kernel):
        assert kernel.faller_photon_closeness(kernel.tau_max, kernel.tau_max) == np.inf
        assert not kernel.faller_photon_arrived(kernel.tau_max, kernel.tau_max)


class TestIntercept:
    """Tests for intercept queries."""

    def test_first_emission_is_caught(self, kernel):
        delta = kernel.intercept_delta(0.0)
        assert 0 < delta < np.inf

    def test_closenesses_match(self, kernel):
        delta = kernel.intercept_delta(0.0)
        n_photon = kernel.observer_photon_closeness(0.0, delta)
        t = delta / kernel.dilation
        n_faller = falling_closeness_at_coordinate_time(t, kernel.config.closeness_faller)
        assert abs(n_photon - n_faller) < 1e-8

    def test_later_emission_takes_longer(self, kernel):
        assert kernel.intercept_delta(0.0) < kernel.intercept_delta(kernel.tau_max * 0.999)

    def test_intercept_tau(self, kernel):
        delta = kernel.intercept_delta(1.0)
        assert kernel.intercept_tau(1.0) == pytest.approx(1.0 + delta)

    def test_negative_emission_clamps(self, kernel):
        assert kernel.intercept_delta(-3.0) == kernel.intercept_delta(0.0)

    def test_by_log_time_matches_at_start(self, kernel):
        assert kernel.intercept_delta_by_log_time(0.0) == kernel.intercept_delta(0.0)

    def test_by_log_time_grows(self, kernel):
        early = kernel.intercept_delta_by_log_time(0.5)
        late = kernel.intercept_delta_by_log_time(3.0)
        assert early < late < np.inf

    def test_emission_near_tau_max_never_caught(self, kernel):
        """Emitted when the faller is within 10^-50 of tau_max."""
        assert kernel.intercept_delta_by_log_time(50.0) == np.inf
        assert kernel.intercept_delta_by_log_time(np.inf) == np.inf

    def test_very_late_watcher_emission_never_caught(self, kernel):
        assert kernel.intercept_delta(1e60) == np.inf
        assert kernel.intercept_delta(np.inf) == np.inf
        assert kernel.intercept_tau(np.inf) == np.inf

    def test_idempotent(self, kernel):
        assert kernel.intercept_delta(0.7) == kernel.intercept_delta(0.7)


class TestDeepIntercept:
    """Intercepts for fallers far deeper than the watcher can resolve."""

    def test_deep_kernel_first_emission(self, deep_kernel):
        delta = deep_kernel.intercept_delta(0.0)
        assert 0 < delta < np.inf

        check = check_intercept(deep_kernel, 0.0)
        assert check.converged
        assert check.relative_error < 1e-9

    @pytest.mark.parametrize("n0, n_obs", [(16.0, 0.0), (30.0, 0.0), (100.0, 0.0), (100.0, 50.0)])
    def test_matches_reference(self, n0, n_obs):
        kernel = create_kernel(closeness_faller=n0, closeness_observer=n_obs)
        check = check_intercept(kernel, 0.0)
        assert check.converged
        assert check.relative_error < 1e-9

    def test_crossing_at_photon_horizon_delay(self):
        kernel = create_kernel(closeness_faller=100.0, closeness_observer=0.0)
        dt = kernel.intercept_delta(0.0) / kernel.dilation
        assert dt == pytest.approx(inbound_horizon_delay(0.0), rel=1e-9)

    def test_deep_kernel_late_emission_never_caught(self, deep_kernel):
        assert deep_kernel.intercept_delta_by_log_time(50.0) == np.inf
