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


class ExitCondition:
    """Reasons for a line search to stop without raising.

    NONE is only reported if no stopping condition was recorded.
    STRONG_WOLFE_CRITERIA and WEAK_WOLFE_CRITERIA mean that sufficient
    decrease and the respective curvature condition hold at the returned
    step. LACK_OF_PROGRESS means that the step bracket collapsed below the
    parameter tolerance; the returned energy is then not guaranteed to
    fulfill the Wolfe conditions.
    """

    NONE, STRONG_WOLFE_CRITERIA, WEAK_WOLFE_CRITERIA, LACK_OF_PROGRESS = \
        list(range(4))

    _names = ("NONE", "STRONG_WOLFE_CRITERIA", "WEAK_WOLFE_CRITERIA",
              "LACK_OF_PROGRESS")

    @classmethod
    def name(cls, code):
        """Returns the name of the exit condition `code`."""
        return cls._names[code]


class LineSearchResult:
    """Outcome of a successful line search.

    Parameters
    ----------
    energy : Energy
        The energy at the accepted position.
    iterations : int
        Index of the iteration in which the search stopped.
    step : float
        Final step length along the search direction.
    exit_condition : int
        One of the `ExitCondition` codes.
    """

    __slots__ = ("_energy", "_iterations", "_step", "_exit_condition")

    def __init__(self, energy, iterations, step, exit_condition):
        self._energy = energy
        self._iterations = int(iterations)
        self._step = float(step)
        self._exit_condition = exit_condition

    @property
    def energy(self):
        return self._energy

    @property
    def iterations(self):
        return self._iterations

    @property
    def step(self):
        return self._step

    @property
    def exit_condition(self):
        return self._exit_condition

    @property
    def position(self):
        return self._energy.position

    @property
    def value(self):
        return self._energy.value

    @property
    def converged(self):
        """bool : True if the Wolfe conditions were met."""
        return self._exit_condition in (ExitCondition.STRONG_WOLFE_CRITERIA,
                                        ExitCondition.WEAK_WOLFE_CRITERIA)

    def __repr__(self):
        return ("LineSearchResult(step={:.6E}, value={:.6E}, iterations={}, "
                "exit_condition={})".format(
                    self._step, self.value, self._iterations,
                    ExitCondition.name(self._exit_condition)))
