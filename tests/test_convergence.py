import math

import pytest

from regressionAPP.core.config import ConfigurationError
from regressionAPP.core.convergence import (
    ExitState,
    LossDeltaCriterion,
    StepSizeCriterion,
)


class TestStepSizeCriterion:
    def test_first_iteration_always_runs(self):
        crit = StepSizeCriterion(min_step=1e9, max_steps=1)
        assert crit.should_continue(0, math.inf)

    def test_stops_at_cap(self):
        crit = StepSizeCriterion(min_step=0.0, max_steps=3)
        assert crit.should_continue(2, 1.0)
        assert not crit.should_continue(3, 1.0)
        assert crit.exit_state(3, 1.0) == ExitState.MAX_STEPS_REACHED

    def test_stops_on_small_step(self):
        crit = StepSizeCriterion(min_step=0.1, max_steps=100)
        assert crit.should_continue(4, 0.2)
        assert not crit.should_continue(4, 0.1)
        assert crit.exit_state(4, 0.1) == ExitState.CONVERGED

    def test_convergence_wins_when_both_fail(self):
        crit = StepSizeCriterion(min_step=0.1, max_steps=5)
        assert crit.exit_state(5, 0.05) == ExitState.CONVERGED

    def test_nan_step_stops_loop(self):
        crit = StepSizeCriterion(min_step=0.1, max_steps=5)
        assert not crit.should_continue(1, math.nan)

    def test_running_while_both_hold(self):
        crit = StepSizeCriterion(min_step=0.1, max_steps=5)
        assert crit.exit_state(2, 1.0) == ExitState.RUNNING


class TestLossDeltaCriterion:
    def test_ignores_step_magnitude(self):
        crit = LossDeltaCriterion(min_loss_delta=1e-6, max_steps=10)
        assert crit.should_continue(1, 0.0, 1.0)
        assert not crit.should_continue(1, 10.0, 1e-7)
        assert crit.exit_state(1, 10.0, 1e-7) == ExitState.CONVERGED

    def test_cap(self):
        crit = LossDeltaCriterion(min_loss_delta=0.0, max_steps=2)
        assert not crit.should_continue(2, 1.0, 1.0)
        assert crit.exit_state(2, 1.0, 1.0) == ExitState.MAX_STEPS_REACHED


class TestCriterionArguments:
    @pytest.mark.parametrize("max_steps", [0, -3, 1.5, True])
    def test_bad_max_steps(self, max_steps):
        with pytest.raises(ConfigurationError):
            StepSizeCriterion(min_step=1e-3, max_steps=max_steps)
        with pytest.raises(ConfigurationError):
            LossDeltaCriterion(min_loss_delta=0.0, max_steps=max_steps)

    @pytest.mark.parametrize("threshold", [-1.0, math.nan])
    def test_bad_threshold(self, threshold):
        with pytest.raises(ConfigurationError):
            StepSizeCriterion(min_step=threshold, max_steps=5)
        with pytest.raises(ConfigurationError):
            LossDeltaCriterion(min_loss_delta=threshold, max_steps=5)

    def test_zero_threshold_allowed(self):
        assert StepSizeCriterion(min_step=0.0, max_steps=1).min_step == 0.0
        assert LossDeltaCriterion(min_loss_delta=0.0, max_steps=1).min_loss_delta == 0.0

class TestExitState:
    def test_values(self):
        assert ExitState.CONVERGED.value == "converged"
        assert ExitState.MAX_STEPS_REACHED.value == "max_steps_reached"
        assert ExitState.DIVERGED == "diverged"
