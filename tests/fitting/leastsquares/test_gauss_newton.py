import logging

import numpy as np
import pytest
from numpy.testing import assert_allclose

from mathkit.core.base.exceptions import (
    ConvergenceError,
    NullArgumentError,
    TooManyEvaluationsError,
    TooManyIterationsError,
)
from mathkit.core.config.settings import reset_config, update_config
from mathkit.fitting.leastsquares.builder import LeastSquaresBuilder
from mathkit.fitting.leastsquares.checkers import EvaluationRmsChecker, SimpleVectorValueChecker
from mathkit.fitting.leastsquares.gauss_newton import Decomposition, GaussNewtonOptimizer
from mathkit.fitting.leastsquares.optimum import Optimum


@pytest.fixture(autouse=True)
def clean_global_config():
    reset_config()
    yield
    reset_config()


def linear_model(point):
    x0, x1 = point
    return (np.array([x0 + x1, 2.0 * x0 - x1]),
            np.array([[1.0, 1.0], [2.0, -1.0]]))


def exponential_model(times):
    # y = a * exp(b * t)
    def model(point):
        a, b = point
        e = np.exp(b * times)
        return a * e, np.column_stack([e, a * times * e])
    return model


def linear_builder(max_evaluations=100, max_iterations=100):
    return (LeastSquaresBuilder()
            .model(linear_model)
            .target([3.0, 0.0])
            .start([0.0, 0.0])
            .checker_pair(SimpleVectorValueChecker(1e-10, 1e-10))
            .max_evaluations(max_evaluations)
            .max_iterations(max_iterations))


class TestGaussNewtonOptimizer:
    @pytest.mark.parametrize("decomposition", list(Decomposition))
    def test_linear_problem(self, decomposition):
        optimum = GaussNewtonOptimizer(decomposition).optimize(linear_builder().build())
        assert isinstance(optimum, Optimum)
        assert_allclose(optimum.point, [1.0, 2.0], atol=1e-10)
        assert optimum.cost == pytest.approx(0.0, abs=1e-10)
        assert optimum.iterations >= 2
        assert optimum.evaluations == optimum.iterations

    def test_counters_come_from_problem(self):
        problem = linear_builder().build()
        optimum = GaussNewtonOptimizer().optimize(problem)
        assert optimum.evaluations == problem.evaluation_counter.count
        assert optimum.iterations == problem.iteration_counter.count

    def test_nonlinear_fit(self):
        times = np.linspace(0.0, 1.0, 8)
        observed = 2.0 * np.exp(-1.5 * times)
        problem = (LeastSquaresBuilder()
                   .model(exponential_model(times))
                   .target(observed)
                   .start([1.0, -1.0])
                   .checker(EvaluationRmsChecker(1e-12, 1e-14))
                   .build())
        optimum = GaussNewtonOptimizer("qr").optimize(problem)
        assert_allclose(optimum.point, [2.0, -1.5], atol=1e-6)
        assert optimum.rms < 1e-8

    def test_weighted_problem(self):
        problem = linear_builder().weight(np.diag([10.0, 0.1])).build()
        optimum = GaussNewtonOptimizer(Decomposition.CHOLESKY).optimize(problem)
        assert_allclose(optimum.point, [1.0, 2.0], atol=1e-10)

    def test_optimum_statistics(self):
        optimum = GaussNewtonOptimizer().optimize(linear_builder().build())
        assert_allclose(optimum.get_sigma(), np.sqrt([2.0 / 9.0, 5.0 / 9.0]), atol=1e-10)
        assert optimum.get_covariances().shape == (2, 2)

    def test_default_decomposition_from_config(self):
        update_config(decomposition="LU")
        assert GaussNewtonOptimizer().decomposition is Decomposition.LU

    def test_with_decomposition(self):
        optimizer = GaussNewtonOptimizer("svd", singularity_threshold=1e-9)
        other = optimizer.with_decomposition(Decomposition.QR)
        assert other.decomposition is Decomposition.QR
        assert other.singularity_threshold == 1e-9
        assert optimizer.decomposition is Decomposition.SVD

    def test_requires_checker(self):
        problem = (LeastSquaresBuilder()
                   .model(linear_model)
                   .target([3.0, 0.0])
                   .start([0.0, 0.0])
                   .build())
        with pytest.raises(NullArgumentError, match="checker"):
            GaussNewtonOptimizer().optimize(problem)

    @pytest.mark.parametrize("decomposition", [Decomposition.LU, Decomposition.QR])
    def test_singular_step(self, decomposition):
        def degenerate(point):
            s = point[0] + point[1]
            return np.array([s, s]), np.array([[1.0, 1.0], [1.0, 1.0]])

        problem = (LeastSquaresBuilder()
                   .model(degenerate)
                   .target([1.0, 2.0])
                   .start([0.0, 0.0])
                   .checker_pair(SimpleVectorValueChecker(1e-10, 1e-10))
                   .build())
        with pytest.raises(ConvergenceError) as info:
            GaussNewtonOptimizer(decomposition).optimize(problem)
        assert info.value.get_detail("decomposition") == decomposition.value

    def test_too_many_evaluations(self):
        problem = linear_builder(max_evaluations=1).build()
        with pytest.raises(TooManyEvaluationsError):
            GaussNewtonOptimizer().optimize(problem)

    def test_too_many_iterations(self):
        problem = linear_builder(max_iterations=1).build()
        with pytest.raises(TooManyIterationsError):
            GaussNewtonOptimizer().optimize(problem)

    def test_logs_convergence(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="mathkit"):
            GaussNewtonOptimizer().optimize(linear_builder().build())
        assert "Converged after" in caplog.text
        assert "Iteration 1" in caplog.text
