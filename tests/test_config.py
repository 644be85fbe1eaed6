import logging

import numpy as np
import pytest

from regressionAPP.core.config import (
    UPDATE_SEQUENTIAL,
    UPDATE_SIMULTANEOUS,
    ConfigurationError,
    Hyperparameters,
)


class TestDefaults:
    def test_default_values(self):
        hp = Hyperparameters()
        assert hp.learning_rate == 0.01
        assert hp.min_step == 1e-3
        assert hp.max_steps == 1000
        assert hp.fit_intercept is True
        assert hp.update_order == UPDATE_SEQUENTIAL
        assert hp.detect_divergence is True

    def test_initial_parameters_two_parameter(self):
        hp = Hyperparameters(initial_intercept=0.5, initial_slope=2.0)
        np.testing.assert_array_equal(hp.initial_parameters, [0.5, 2.0])

    def test_initial_parameters_single_parameter(self):
        hp = Hyperparameters(initial_intercept=0.5, initial_slope=2.0, fit_intercept=False)
        np.testing.assert_array_equal(hp.initial_parameters, [2.0])
        assert hp.model.parameter_names == ("slope",)

    def test_numpy_scalars_accepted(self):
        hp = Hyperparameters(learning_rate=np.float64(0.1), max_steps=np.int64(10))
        assert hp.max_steps == 10

    def test_replace_returns_new_validated_copy(self):
        hp = Hyperparameters(learning_rate=0.1)
        other = hp.replace(update_order=UPDATE_SIMULTANEOUS)
        assert other.update_order == UPDATE_SIMULTANEOUS
        assert hp.update_order == UPDATE_SEQUENTIAL
        with pytest.raises(ConfigurationError):
            hp.replace(learning_rate=0.0)

    def test_frozen(self):
        hp = Hyperparameters()
        with pytest.raises(AttributeError):
            hp.learning_rate = 1.0


class TestRejection:
    @pytest.mark.parametrize("lr", [0.0, -0.1, np.nan, np.inf])
    def test_bad_learning_rate(self, lr):
        with pytest.raises(ConfigurationError):
            Hyperparameters(learning_rate=lr)

    @pytest.mark.parametrize("max_steps", [0, -5, 2.5, True])
    def test_bad_max_steps(self, max_steps):
        with pytest.raises(ConfigurationError):
            Hyperparameters(max_steps=max_steps)

    @pytest.mark.parametrize("min_step", [-1e-9, np.nan])
    def test_bad_min_step(self, min_step):
        with pytest.raises(ConfigurationError):
            Hyperparameters(min_step=min_step)

    def test_zero_min_step_allowed(self):
        assert Hyperparameters(min_step=0.0).min_step == 0.0

    @pytest.mark.parametrize("field", ["initial_slope", "initial_intercept", "fixed_intercept"])
    def test_non_finite_initial_values(self, field):
        with pytest.raises(ConfigurationError):
            Hyperparameters(**{field: np.inf})

    def test_unknown_update_order(self):
        with pytest.raises(ConfigurationError):
            Hyperparameters(update_order="random")

    def test_learning_rate_must_be_number(self):
        with pytest.raises(ConfigurationError):
            Hyperparameters(learning_rate="0.1")

    @pytest.mark.parametrize("field", ["fit_intercept", "detect_divergence"])
    @pytest.mark.parametrize("value", [0, 1, "yes", None])
    def test_flags_must_be_bool(self, field, value):
        with pytest.raises(ConfigurationError):
            Hyperparameters(**{field: value})

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)


class TestIgnoredInitialIntercept:
    def test_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="regressionAPP.core.config"):
            hp = Hyperparameters(fit_intercept=False, initial_intercept=2.0, fixed_intercept=0.5)
        assert any("initial_intercept" in r.getMessage() for r in caplog.records)
        assert hp.model.unpack(hp.initial_parameters)[0] == 0.5

    def test_default_not_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="regressionAPP.core.config"):
            Hyperparameters(fit_intercept=False)
        assert not any("initial_intercept" in r.getMessage() for r in caplog.records)
