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

from ..logger import logger
from ..utilities import WolfeMeta


class IterationController(metaclass=WolfeMeta):
    """Decides after every accepted line search step whether a minimizer
    goes on.

    `start` is called once with the starting energy, `check` with the energy
    returned by every successful line search. Both return one of the status
    codes CONVERGED, CONTINUE or ERROR.
    """

    CONVERGED, CONTINUE, ERROR = list(range(3))

    def start(self, energy):
        raise NotImplementedError

    def check(self, energy):
        raise NotImplementedError


class GradientNormController(IterationController):
    """Stops once the L2 norm of the gradient is small enough.

    Parameters
    ----------
    tol_abs_gradnorm : float, optional
        Converged once the gradient norm drops to this value.
    tol_rel_gradnorm : float, optional
        Converged once the gradient norm drops to this fraction of the
        gradient norm at the start.
    iteration_limit : int, optional
        Number of steps after which convergence is assumed.
    name : str, optional
        If given, progress is logged under this name after every step.

    Attributes
    ----------
    energyhistory : list of float
        Energy values seen since the last `start`.
    """

    def __init__(self, tol_abs_gradnorm=None, tol_rel_gradnorm=None,
                 iteration_limit=None, name=None):
        self._tol_abs_gradnorm = tol_abs_gradnorm
        self._tol_rel_gradnorm = tol_rel_gradnorm
        self._iteration_limit = iteration_limit
        self._name = name

    def start(self, energy):
        self.energyhistory = []
        self._itcount = -1
        self._tol = self._tol_abs_gradnorm
        if self._tol_rel_gradnorm is not None:
            rel = self._tol_rel_gradnorm*energy.gradient_norm
            self._tol = rel if self._tol is None else max(self._tol, rel)
        return self.check(energy)

    def check(self, energy):
        self._itcount += 1
        self.energyhistory.append(energy.value)
        gradnorm = energy.gradient_norm
        if self._name is not None:
            logger.info("{}: Iteration #{} energy={:.6E} gradnorm={:.2E}"
                        .format(self._name, self._itcount, energy.value,
                                gradnorm))

        if self._tol is not None and gradnorm <= self._tol:
            return self.CONVERGED
        if self._iteration_limit is not None \
                and self._itcount >= self._iteration_limit:
            logger.warning(
                "{}Iteration limit reached. Assuming convergence"
                .format("" if self._name is None else self._name+": "))
            return self.CONVERGED
        return self.CONTINUE
