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

from .. import config
from ..errors import EvaluationError, MaximumIterationsError
from ..logger import logger
from ..utilities import WolfeMeta, vdot
from .line_search_result import ExitCondition, LineSearchResult


class LineEnergy:
    """Evaluates an underlying Energy along a certain line direction.

    Given an Energy class and a line direction, its position is parametrized by
    a scalar step size along the descent direction relative to a zero point.

    Parameters
    ----------
    line_position : float
        Defines the full spatial position of this energy via
        self.energy.position = zero_point + line_position*line_direction
    energy : Energy
        The Energy object which will be evaluated along the given direction.
    line_direction : numpy.ndarray
        Direction used for line evaluation. Does not have to be normalized.
    offset :  float *optional*
        Indirectly defines the zero point of the line via the equation
        energy.position = zero_point + offset*line_direction
        (default : 0.).

    Notes
    -----
    The LineEnergy is used in minimization schemes in order perform line
    searches. It describes an underlying Energy which is restricted along one
    direction, only requiring the step size parameter to determine a new
    position.
    """

    def __init__(self, line_position, energy, line_direction, offset=0.):
        self._line_position = float(line_position)
        self._line_direction = line_direction

        if self._line_position == float(offset):
            self._energy = energy
        else:
            pos = energy.position \
                + (self._line_position-float(offset))*self._line_direction
            self._energy = energy.at(position=pos)

    def at(self, line_position):
        """Returns LineEnergy at new position, memorizing the zero point.

        Parameters
        ----------
        line_position : float
            Parameter for the new position on the line direction.

        Returns
        -------
            LineEnergy object at new position with same zero point as `self`.

        """

        return LineEnergy(line_position, self._energy, self._line_direction,
                          offset=self._line_position)

    @property
    def energy(self):
        """
        Energy : The underlying Energy object
        """
        return self._energy

    @property
    def value(self):
        """
        float : The value of the energy functional at given `position`.
        """
        return self._energy.value

    @property
    def directional_derivative(self):
        """
        float : The directional derivative at the given `position`.
        """
        res = complex(vdot(self._line_direction, self._energy.gradient))
        if abs(res.imag) / max(abs(res.real), 1.) > 1e-12:
            logger.warning("directional derivative has non-negligible "
                           "imaginary part: {}".format(res))
        return res.real


class WolfeLineSearch(metaclass=WolfeMeta):
    """Base class for finding a step size that satisfies the Wolfe
    conditions by bisection.

    Starting from a trial step, the step is halved towards the lower end of
    the bracket [lower_bound, upper_bound] whenever the sufficient decrease
    condition fails and moved up (doubled while the bracket is unbounded,
    bisected otherwise) whenever the curvature condition fails. Which
    curvature condition is used is decided by the subclasses through
    `wolfe_condition` and `wolfe_exit_condition`.

    Parameters
    ----------
    c1 : float, optional
        Parameter for the sufficient decrease (Armijo) condition.
        Default: `config.get("c1")`.
    c2 : float, optional
        Parameter for the curvature condition.
        Default: `config.get("c2")`.
    parameter_tolerance : float, optional
        The search stops for lack of progress once the bracket, measured
        relative to the magnitude of the trial position, has shrunk below
        this value. Default: `config.get("parameter_tolerance")`.
    max_iterations : int, optional
        Maximum number of trial steps.
        Default: `config.get("max_iterations")`.

    Notes
    -----
    Implemented following
    http://www.math.washington.edu/~burke/crs/408/lectures/L9-weak-Wolfe.pdf
    """

    def __init__(self, c1=None, c2=None, parameter_tolerance=None,
                 max_iterations=None):
        c1 = config.get("c1") if c1 is None else float(c1)
        c2 = config.get("c2") if c2 is None else float(c2)
        if c1 <= 0:
            raise ValueError("c1 {} should be greater than 0".format(c1))
        if c2 <= c1:
            raise ValueError("c1 {} should be less than c2 {}".format(c1, c2))
        if c2 >= 1:
            raise ValueError("c2 {} should be less than 1".format(c2))

        if parameter_tolerance is None:
            parameter_tolerance = config.get("parameter_tolerance")
        if max_iterations is None:
            max_iterations = config.get("max_iterations")
        self._c1 = c1
        self._c2 = c2
        self._parameter_tolerance = parameter_tolerance
        self._max_iterations = max_iterations

    @property
    def c1(self):
        return self._c1

    @property
    def c2(self):
        return self._c2

    @property
    def parameter_tolerance(self):
        return self._parameter_tolerance

    @property
    def max_iterations(self):
        return self._max_iterations

    def find_conforming_step(self, starting_point, search_direction,
                             initial_step, upper_bound=np.inf):
        """Searches a step length along `search_direction` which fulfills
        the Wolfe conditions.

        Parameters
        ----------
        starting_point : Energy
            The objective, evaluated at the starting point of the search.
            It is not modified.
        search_direction : numpy.ndarray
            Search direction, same shape as `starting_point.position`.
        initial_step : float
            Initial size of the step in the search direction.
        upper_bound : float, optional
            Upper bound for the step length. Default: unbounded.

        Returns
        -------
        LineSearchResult
            Energy at the accepted step, the iteration in which the search
            stopped, the final step length and the reason for stopping.
            Callers have to check `exit_condition` to tell a step fulfilling
            the Wolfe conditions from a stalled search.

        Raises
        ------
        MaximumIterationsError
            If `max_iterations` trial steps did not lead to a result.
        """
        self.validate_input_arguments(starting_point, search_direction,
                                      initial_step, upper_bound)

        lower_bound = 0.
        search_direction = np.asarray(search_direction)
        upper_bound = float(upper_bound)
        step = float(initial_step)

        le_0 = LineEnergy(0., starting_point, search_direction)
        initial_value = le_0.value
        initial_dd = le_0.directional_derivative

        reason_for_exit = ExitCondition.NONE
        for ii in range(self._max_iterations):
            le_step = le_0.at(step)
            energy = le_step.energy
            self.validate_gradient(energy)
            self.validate_value(energy)

            step_dd = le_step.directional_derivative
            logger.debug(
                "line search #{}: step={:.6E} bracket=[{:.6E}, {:.6E}] "
                "value={:.6E} dd={:.6E}".format(
                    ii, step, lower_bound, upper_bound, energy.value,
                    step_dd))

            if energy.value > initial_value + self._c1*step*initial_dd:
                upper_bound = step
                step = 0.5*(lower_bound + upper_bound)
            elif self.wolfe_condition(step_dd, initial_dd):
                lower_bound = step
                if np.isposinf(upper_bound):
                    step = 2*lower_bound
                else:
                    step = 0.5*(lower_bound + upper_bound)
            else:
                reason_for_exit = self.wolfe_exit_condition
                break

            if not np.isinf(upper_bound):
                rel_change = np.abs(
                    search_direction*(upper_bound - lower_bound)) \
                    / np.maximum(np.abs(energy.position), 1.)
                if np.max(rel_change) < self._parameter_tolerance:
                    logger.warning(
                        "line search: lack of progress after {} iterations, "
                        "bracket [{:.6E}, {:.6E}]".format(
                            ii, lower_bound, upper_bound))
                    reason_for_exit = ExitCondition.LACK_OF_PROGRESS
                    break
        else:
            if np.isposinf(upper_bound):
                raise MaximumIterationsError(
                    "Maximum iterations ({}) reached. Function appears to be "
                    "unbounded in search direction.".format(
                        self._max_iterations))
            raise MaximumIterationsError(
                "Maximum iterations ({}) reached.".format(
                    self._max_iterations))

        return LineSearchResult(energy, ii, step, reason_for_exit)

    @property
    def wolfe_exit_condition(self):
        """int : the `ExitCondition` reported when both sufficient decrease
        and the curvature condition are fulfilled."""
        raise NotImplementedError

    def wolfe_condition(self, step_dd, initial_dd):
        """Checks whether the curvature condition is violated.

        Parameters
        ----------
        step_dd : float
            Directional derivative at the trial step.
        initial_dd : float
            Directional derivative at the starting point.

        Returns
        -------
        bool
            True if the trial step is too short, i.e. the search has to
            continue at larger steps.
        """
        raise NotImplementedError

    def validate_input_arguments(self, starting_point, search_direction,
                                 initial_step, upper_bound):
        """Called once before the search starts. Raises if the arguments are
        unusable; does nothing by default."""
        pass

    def validate_gradient(self, energy):
        """Called after every evaluation. Raises if the gradient of `energy`
        is unusable; does nothing by default."""
        pass

    def validate_value(self, energy):
        """Called after every evaluation. Raises if the value of `energy` is
        unusable; does nothing by default."""
        pass


class _CheckedWolfeLineSearch(WolfeLineSearch):
    """Rejects invalid arguments and non-finite evaluations."""

    def validate_input_arguments(self, starting_point, search_direction,
                                 initial_step, upper_bound):
        if not starting_point.has_gradient:
            raise ValueError("objective function does not support gradient")
        if np.shape(search_direction) != np.shape(starting_point.position):
            raise ValueError(
                "search direction shape {} does not match position shape "
                "{}".format(np.shape(search_direction),
                            np.shape(starting_point.position)))
        if not (np.isfinite(initial_step) and initial_step > 0):
            raise ValueError(
                "initial step {} should be positive and finite".format(
                    initial_step))
        if not upper_bound > 0:
            raise ValueError(
                "upper bound {} should be greater than 0".format(upper_bound))
        if initial_step > upper_bound:
            raise ValueError(
                "initial step {} exceeds upper bound {}".format(
                    initial_step, upper_bound))
        self.validate_gradient(starting_point)
        self.validate_value(starting_point)

    def validate_gradient(self, energy):
        if not np.all(np.isfinite(energy.gradient)):
            raise EvaluationError("Non-finite gradient returned.", energy)

    def validate_value(self, energy):
        if not np.isfinite(energy.value):
            raise EvaluationError("Non-finite value returned.", energy)


class StrongWolfeLineSearch(_CheckedWolfeLineSearch):
    """Finds a step size that satisfies the strong Wolfe conditions.

    A step `t` is accepted if
    f(x + t*d) <= f(x) + c1*t*d.grad(x) and
    |d.grad(x + t*d)| <= -c2*d.grad(x).
    """

    @property
    def wolfe_exit_condition(self):
        return ExitCondition.STRONG_WOLFE_CRITERIA

    def wolfe_condition(self, step_dd, initial_dd):
        return abs(step_dd) > -self._c2*initial_dd


class WeakWolfeLineSearch(_CheckedWolfeLineSearch):
    """Finds a step size that satisfies the weak Wolfe conditions.

    A step `t` is accepted if
    f(x + t*d) <= f(x) + c1*t*d.grad(x) and
    d.grad(x + t*d) >= c2*d.grad(x).
    """

    @property
    def wolfe_exit_condition(self):
        return ExitCondition.WEAK_WOLFE_CRITERIA

    def wolfe_condition(self, step_dd, initial_dd):
        return step_dd < self._c2*initial_dd
