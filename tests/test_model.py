"""
Unit tests for Model stepping and batch evaluation.
"""

import pytest
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from pid_playground.core.pid_params import PIDGains
from pid_playground.simulation.environment import Environment
from pid_playground.simulation.model import Model
from pid_playground.utils.validators import ValidationError


class TestModelStep:
    """Test suite for Model.step."""

    @pytest.mark.parametrize("dt", [0.001, 0.016, 0.1, 1.0])
    def test_zero_gains_stay_at_rest(self, dt):
        """Test no spontaneous motion without gains, damping or force."""
        model = Model(1, "rest")
        env = Environment(damping=0.0, applied_force=0.0)

        for _ in range(200):
            model.step(env, dt)

        assert model.value == 0.0
        assert model.velocity == 0.0
        assert model.acceleration == 0.0
        assert model.elapsed_time == pytest.approx(200 * dt)

    def test_clamp_to_environment_limit(self):
        """Test large controller output is clamped to the environment limit."""
        model = Model(1, "hot", gains=PIDGains(kp=1000.0, kd=50.0))
        env = Environment(max_accel=10.0, damping=0.0)

        for _ in range(500):
            model.step(env, 0.016)
            assert abs(model.plant.command) <= 10.0

        # First step output is 1000 * 100 + derivative kick
        fresh = Model(2, "fresh", gains=PIDGains(kp=1000.0))
        fresh.step(env, 0.016)
        assert fresh.controller.output > 10.0
        assert fresh.plant.command == 10.0

    def test_clamp_negative(self):
        """Test negative output is clamped to -limit."""
        model = Model(1, "neg", gains=PIDGains(kp=100.0))
        env = Environment(setpoint=-50.0, max_accel=4.0)
        model.step(env, 0.1)
        assert model.plant.command == -4.0

    def test_per_model_limit_overrides_environment(self):
        """Test a model's own limit wins over the environment default."""
        model = Model(1, "limited", gains=PIDGains(kp=1000.0), max_accel=2.5)
        env = Environment(max_accel=40.0)

        model.step(env, 0.016)

        assert model.accel_limit(env) == 2.5
        assert model.plant.command == 2.5

    def test_acceleration_includes_damping_and_force(self):
        """Test acceleration = clamped command - v * damping + force."""
        model = Model(1, "m", gains=PIDGains(kp=1.0))
        env = Environment(damping=0.5, applied_force=1.0, max_accel=5.0, setpoint=100.0)

        model.step(env, 0.1)
        velocity = model.velocity
        model.step(env, 0.1)

        assert model.acceleration == pytest.approx(5.0 - velocity * 0.5 + 1.0)

    def test_rejects_zero_dt(self):
        """Test a zero step is rejected instead of producing inf."""
        model = Model(1, "m", gains=PIDGains(kd=1.0))
        with pytest.raises(ValidationError):
            model.step(Environment(), 0.0)

    def test_invalid_max_accel(self):
        """Test non-positive per-model limit is rejected."""
        with pytest.raises(ValidationError):
            Model(1, "m", max_accel=0.0)


class TestModelEvaluate:
    """Test suite for Model.evaluate."""

    def test_sample_times_cover_horizon(self):
        """Test evaluation stops just after the horizon."""
        model = Model(1, "m", gains=PIDGains(kp=1.0))
        env = Environment(timestep=0.125)

        samples = model.evaluate(2.0, env)
        times = [t for t, _ in samples]

        # 0.125 .. 2.125: stops once more than 2.0 has elapsed
        assert len(samples) == 17
        assert times[0] == 0.125
        assert times[-1] == 2.125
        assert all(b > a for a, b in zip(times, times[1:]))

    def test_sample_count_default_horizon(self):
        """Test sample count is bounded by horizon / timestep."""
        model = Model(1, "m")
        samples = model.evaluate(20.0, Environment(timestep=0.016))
        assert 1250 <= len(samples) <= 1252
        assert samples[-1][0] > 20.0

    def test_evaluate_continues_from_current_time(self):
        """Test evaluation measures the horizon from the current elapsed time."""
        model = Model(1, "m")
        env = Environment(timestep=0.25)
        model.evaluate(1.0, env)
        start = model.elapsed_time

        samples = model.evaluate(1.0, env)

        assert samples[0][0] == pytest.approx(start + 0.25)
        assert samples[-1][0] - start > 1.0

    def test_deterministic(self):
        """Test identical models produce bit-identical trajectories."""
        env = Environment(damping=0.3, applied_force=0.7, timestep=0.02, setpoint=80.0)
        gains = PIDGains(kp=1.7, ki=0.05, kd=0.9)

        a = Model(1, "a", gains=gains)
        b = Model(2, "b", gains=gains.copy())

        assert a.evaluate(20.0, env) == b.evaluate(20.0, env)

    def test_reset_then_evaluate_repeats(self):
        """Test reset restores the starting point of a trajectory."""
        model = Model(1, "m", gains=PIDGains(kp=2.0, ki=0.1, kd=0.4))
        env = Environment()

        first = model.evaluate(20.0, env)
        model.reset()
        second = model.evaluate(20.0, env)

        assert first == second

    def test_reset_preserves_tuning(self):
        """Test reset keeps gains, name, identity and limit."""
        model = Model(7, "keep", gains=PIDGains(kp=3.0), max_accel=12.0)
        model.evaluate(5.0, Environment())

        model.reset()

        assert model.identity == 7
        assert model.name == "keep"
        assert model.gains == PIDGains(kp=3.0)
        assert model.max_accel == 12.0
        assert model.value == 0.0
        assert model.velocity == 0.0
        assert model.acceleration == 0.0
        assert model.elapsed_time == 0.0
        assert model.controller.integral == 0.0
        assert model.controller.prev_error == 0.0

    def test_clone_copies_tuning_only(self):
        """Test clone starts from rest with the same tuning."""
        model = Model(1, "src", gains=PIDGains(kp=1.0, kd=0.2), max_accel=8.0)
        model.evaluate(3.0, Environment())

        copy = model.clone(2, "dst")

        assert copy.identity == 2
        assert copy.name == "dst"
        assert copy.gains == model.gains
        assert copy.gains is not model.gains
        assert copy.max_accel == 8.0
        assert copy.elapsed_time == 0.0
        assert copy.value == 0.0


class TestReferenceScenario:
    """Regression of the default playground configuration."""

    @pytest.fixture
    def trajectory(self):
        env = Environment(damping=0.5, applied_force=0.0, timestep=0.016, setpoint=100.0)
        model = Model(1, "reference", gains=PIDGains(kp=2.0))
        samples = model.evaluate(20.0, env)
        return np.array(samples)

    def test_first_samples(self, trajectory):
        """Test the first steps against hand-computed values."""
        # Step 1: command clamped to 10, v = 0.16, x = 0.16 * 0.016
        assert trajectory[0, 0] == pytest.approx(0.016)
        assert trajectory[0, 1] == pytest.approx(0.00256)
        # Step 2: a = 10 - 0.16 * 0.5 = 9.92, v = 0.31872
        assert trajectory[1, 0] == pytest.approx(0.032)
        assert trajectory[1, 1] == pytest.approx(0.00256 + 0.31872 * 0.016)

    def test_finite(self, trajectory):
        """Test no inf or NaN reaches the history."""
        assert np.all(np.isfinite(trajectory))

    def test_monotonic_rise_to_peak(self, trajectory):
        """Test the value only increases until the first peak."""
        values = trajectory[:, 1]
        peak = int(np.argmax(values))
        assert np.all(np.diff(values[:peak + 1]) >= 0.0)

    def test_overshoot_bounded(self, trajectory):
        """Test overshoot stays below the energy bound of the clamped loop."""
        values = trajectory[:, 1]
        assert values.max() < 125.0

    def test_oscillation_decays(self, trajectory):
        """Test late deviations are smaller than the first overshoot."""
        times, values = trajectory[:, 0], trajectory[:, 1]
        peak_deviation = abs(values.max() - 100.0)
        late = np.abs(values[times > 15.0] - 100.0)
        assert late.max() < peak_deviation


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
