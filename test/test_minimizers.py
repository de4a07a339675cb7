# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.
#
# Copyright(C) 2013-2021 Max-Planck-Society

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_equal
from scipy.optimize import rosen, rosen_der

import wolfels as wls

from .common import setup_function, teardown_function

pmp = pytest.mark.parametrize
IC = wls.GradientNormController(tol_abs_gradnorm=1e-5, iteration_limit=1000)

minimizers = ['wls.L_BFGS(IC)']
slow_minimizers = ['wls.SteepestDescent(IC)']
strong_minimizers = [
    'wls.SteepestDescent(IC, line_searcher=wls.StrongWolfeLineSearch(max_iterations=100))',
]


@pmp('minimizer', minimizers + slow_minimizers)
@pmp('n', [1, 10])
def test_quadratic_minimization(minimizer, n):
    rng = np.random.default_rng(98765)
    starting_point = rng.normal(size=n)*10
    covariance_diagonal = rng.uniform(size=n) + 0.5
    required_result = np.ones(n)

    minimizer = eval(minimizer)
    energy = wls.QuadraticEnergy(A=np.diag(covariance_diagonal),
                                 b=required_result, position=starting_point)

    (energy, convergence) = minimizer(energy)

    assert_equal(convergence, IC.CONVERGED)
    assert_allclose(energy.position, 1./covariance_diagonal,
                    rtol=1e-3, atol=1e-3)


@pmp('minimizer', minimizers)
def test_rosenbrock(minimizer):
    starting_point = np.array([-1.2, 1.])
    minimizer = eval(minimizer)
    energy = wls.FunctionEnergy(starting_point, rosen, jac=rosen_der)

    (energy, convergence) = minimizer(energy)

    assert_equal(convergence, IC.CONVERGED)
    assert_allclose(energy.position, 1., rtol=1e-3, atol=1e-3)


@pmp('minimizer', minimizers + slow_minimizers)
def test_gauss(minimizer):
    def f(x):
        return -np.exp(-(x[0]**2)), 2*x*np.exp(-(x**2))

    minimizer = eval(minimizer)
    energy = wls.FunctionEnergy(np.array([3.]), f, jac=True)

    (energy, convergence) = minimizer(energy)

    assert_equal(convergence, IC.CONVERGED)
    assert_allclose(energy.position, 0., atol=1e-3)


@pmp('minimizer', minimizers + slow_minimizers + strong_minimizers)
def test_cosh(minimizer):
    minimizer = eval(minimizer)
    energy = wls.FunctionEnergy(np.array([3.]), lambda x: np.cosh(x[0]),
                                jac=np.sinh)

    (energy, convergence) = minimizer(energy)

    assert_equal(convergence, IC.CONVERGED)
    assert_allclose(energy.position, 0., atol=1e-3)


def test_flat_start():
    energy = wls.QuadraticEnergy(np.zeros(3), np.eye(3))
    res, convergence = wls.SteepestDescent(IC)(energy)
    assert res is energy
    assert_equal(convergence, IC.CONVERGED)


def test_failing_line_search_reports_error():
    ic = wls.GradientNormController(tol_abs_gradnorm=1e-5,
                                    iteration_limit=100)
    energy = wls.FunctionEnergy(
        np.zeros(2), lambda x: (-np.sum(x), -np.ones_like(x)), jac=True)
    minimizer = wls.SteepestDescent(
        ic, line_searcher=wls.WeakWolfeLineSearch(max_iterations=5))
    res, convergence = minimizer(energy)
    assert res is energy
    assert_equal(convergence, ic.ERROR)


def test_nonfinite_energy_reports_error():
    ic = wls.GradientNormController(tol_abs_gradnorm=1e-5,
                                    iteration_limit=100)

    def f(x):
        val = np.sum(x**2) if x[0] > 0 else np.nan
        return val, 2*x

    energy = wls.FunctionEnergy(np.array([1.]), f, jac=True)
    minimizer = wls.SteepestDescent(ic, preferred_initial_step_size=2.)
    res, convergence = minimizer(energy)
    assert res is energy
    assert_equal(convergence, ic.ERROR)


def test_controller_history():
    ic = wls.GradientNormController(tol_rel_gradnorm=1e-8,
                                    iteration_limit=200, name="quadratic")
    energy = wls.QuadraticEnergy(np.array([4., -2.]), np.diag([1., 3.]),
                                 np.array([1., 1.]))
    res, convergence = wls.L_BFGS(ic)(energy)
    assert_equal(convergence, ic.CONVERGED)
    assert_allclose(res.position, [1., 1./3.], rtol=1e-6)
    hist = ic.energyhistory
    assert_equal(hist[0], energy.value)
    assert np.all(np.diff(hist) < 0)


def test_iteration_limit():
    ic = wls.GradientNormController(tol_abs_gradnorm=1e-12,
                                    iteration_limit=2)
    energy = wls.FunctionEnergy(np.array([-1.2, 1.]), rosen, jac=rosen_der)
    res, convergence = wls.SteepestDescent(ic)(energy)
    assert_equal(convergence, ic.CONVERGED)
    assert_equal(len(ic.energyhistory), 3)
    assert res.value < energy.value


@pmp('tol_abs, tol_rel, pos, expected', [
    (None, 0.1, [0.6, 0.8], wls.IterationController.CONTINUE),
    (None, 0.1, [0.3, 0.4], wls.IterationController.CONVERGED),
    (1., 0.1, [0.6, 0.8], wls.IterationController.CONVERGED),
    (0.1, None, [0.3, 0.4], wls.IterationController.CONTINUE),
])
def test_gradient_norm_controller(tol_abs, tol_rel, pos, expected):
    ic = wls.GradientNormController(tol_abs_gradnorm=tol_abs,
                                    tol_rel_gradnorm=tol_rel)
    energy = wls.QuadraticEnergy(np.array([3., 4.]), np.eye(2))
    assert_equal(ic.start(energy), ic.CONTINUE)
    assert_equal(ic.check(energy.at(np.array(pos))), expected)
    assert_equal(len(ic.energyhistory), 2)


def test_lbfgs_newton_step_on_parabola():
    minimizer = wls.L_BFGS(IC)
    minimizer.reset()
    e0 = wls.QuadraticEnergy(np.array([1.]), np.array([[4.]]))
    assert_allclose(minimizer.get_descent_direction(e0), [-4.])
    e1 = e0.at(np.array([0.5]))
    assert_allclose(minimizer.get_descent_direction(e1), [-0.5])


def test_lbfgs_history_length():
    ic = wls.GradientNormController(tol_abs_gradnorm=1e-6,
                                    iteration_limit=200)
    a = np.diag(np.arange(1., 11.))
    energy = wls.QuadraticEnergy(np.ones(10), a, np.arange(10.))
    minimizer = wls.L_BFGS(ic, max_history_length=2)
    res, convergence = minimizer(energy)
    assert_equal(convergence, ic.CONVERGED)
    assert len(minimizer._pairs) <= 2
    assert_allclose(res.position, energy.minimum, rtol=0, atol=1e-5)
