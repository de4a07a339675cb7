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

from ..errors import EvaluationError, MaximumIterationsError
from ..logger import logger
from ..utilities import WolfeMeta, vdot
from .line_search import WeakWolfeLineSearch
from .line_search_result import ExitCondition


class DescentMinimizer(metaclass=WolfeMeta):
    """A base class used by gradient methods to find a local minimum.

    Descent minimization methods are used to find a local minimum of a scalar
    function by following a descent direction. This class implements the
    minimization procedure once a descent direction is known. The descent
    direction has to be implemented separately.

    Parameters
    ----------
    controller : IterationController
        Object that decides when to terminate the minimization.
    line_searcher : WolfeLineSearch *optional*
        Infers the step size in the descent direction
        (default : WeakWolfeLineSearch(max_iterations=100)).
    preferred_initial_step_size : float *optional*
        First trial step of every line search. If None, the step which moves
        the position by unit length is tried first.
    """

    def __init__(self, controller, line_searcher=None,
                 preferred_initial_step_size=None):
        if line_searcher is None:
            line_searcher = WeakWolfeLineSearch(max_iterations=100)
        self._controller = controller
        self.line_searcher = line_searcher
        self.preferred_initial_step_size = preferred_initial_step_size

    def __call__(self, energy):
        """Performs the minimization of the provided Energy functional.

        Parameters
        ----------
        energy : Energy
           Energy object which provides value and gradient at a specific
           position in parameter space.

        Returns
        -------
        Energy
            Latest `energy` of the minimization.
        int
            Can be controller.CONVERGED or controller.ERROR

        Notes
        -----
        The minimization is stopped if
            * the controller returns controller.CONVERGED or controller.ERROR,
            * a perfectly flat point is reached,
            * the line search fails or does not make progress any more.
        """
        controller = self._controller
        status = controller.start(energy)
        if status != controller.CONTINUE:
            return energy, status

        while True:
            # check if position is at a flat point
            if energy.gradient_norm == 0:
                return energy, controller.CONVERGED

            pk = self.get_descent_direction(energy)
            try:
                result = self.line_searcher.find_conforming_step(
                    energy, pk, self._initial_step(pk))
            except (MaximumIterationsError, EvaluationError) as e:
                logger.error("Error: line search failed: {}".format(e))
                return energy, controller.ERROR

            new_energy = result.energy
            if result.exit_condition == ExitCondition.LACK_OF_PROGRESS:
                self.reset()
                if new_energy.value >= energy.value:
                    logger.warning("Warning: line search made no progress. "
                                   "Assuming convergence...")
                    return energy, controller.CONVERGED

            if new_energy.value > energy.value:
                logger.error("Error: Energy has increased")
                return energy, controller.ERROR

            if new_energy.value == energy.value:
                logger.warning(
                    "Warning: Energy has not changed. Assuming convergence...")
                return new_energy, controller.CONVERGED

            energy = new_energy
            status = self._controller.check(energy)
            if status != controller.CONTINUE:
                return energy, status

    def _initial_step(self, pk):
        if self.preferred_initial_step_size is not None:
            return self.preferred_initial_step_size
        return 1./np.linalg.norm(np.ravel(pk))

    def reset(self):
        pass

    def get_descent_direction(self, energy):
        """Calculates the next descent direction.

        Parameters
        ----------
        energy : Energy
            An instance of the Energy class which shall be minimized. The
            position of `energy` is used as the starting point of minimization.

        Returns
        -------
        numpy.ndarray
           The descent direction.
        """
        raise NotImplementedError

    @property
    def controller(self):
        return self._controller


class SteepestDescent(DescentMinimizer):
    """Implementation of the steepest descent minimization scheme.

    Also known as 'gradient descent'. This algorithm simply follows the
    functional's gradient for minimization.
    """

    def get_descent_direction(self, energy):
        return -energy.gradient


class L_BFGS(DescentMinimizer):
    """Limited-memory BFGS.

    The curvature pairs of the last `max_history_length` steps approximate
    the inverse Hessian. The weak Wolfe conditions already guarantee positive
    curvature of every accepted step, so a `WeakWolfeLineSearch` is used by
    default, starting with a unit step.

    References
    ----------
    Jorge Nocedal & Stephen Wright, "Numerical Optimization", Second Edition,
    2006, Springer-Verlag New York
    """

    def __init__(self, controller, line_searcher=None, max_history_length=5):
        if line_searcher is None:
            line_searcher = WeakWolfeLineSearch(max_iterations=100)
        super(L_BFGS, self).__init__(controller=controller,
                                     line_searcher=line_searcher,
                                     preferred_initial_step_size=1.)
        self.max_history_length = max_history_length

    def __call__(self, energy):
        self.reset()
        return super(L_BFGS, self).__call__(energy)

    def reset(self):
        self._pairs = []
        self._last = None

    def get_descent_direction(self, energy):
        x, gradient = energy.position, energy.gradient
        if self._last is not None:
            s = x - self._last[0]
            y = gradient - self._last[1]
            sy = vdot(s, y).real
            if sy > 0:
                self._pairs.append((s, y, 1./sy))
                del self._pairs[:-self.max_history_length]
            else:
                logger.warning("L-BFGS: curvature {:.2E} not positive, "
                               "update skipped".format(sy))
        self._last = x, gradient

        # two-loop recursion, newest pair first
        p = -gradient
        alphas = []
        for s, y, rho in reversed(self._pairs):
            alpha = rho*vdot(s, p).real
            p = p - alpha*y
            alphas.append(alpha)
        if self._pairs:
            s, y, rho = self._pairs[-1]
            p = p/(rho*vdot(y, y).real)
        for (s, y, rho), alpha in zip(self._pairs, reversed(alphas)):
            beta = rho*vdot(y, p).real
            p = p + (alpha - beta)*s
        return p
