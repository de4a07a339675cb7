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


class MaximumIterationsError(RuntimeError):
    """Raised when a search exhausts its iteration budget without finding an
    acceptable point."""
    pass


class EvaluationError(ArithmeticError):
    """Raised when an objective evaluation is unusable, e.g. non-finite.

    Parameters
    ----------
    message : str
        Description of the problem.
    energy : Energy, optional
        The offending evaluation.
    """

    def __init__(self, message, energy=None):
        super(EvaluationError, self).__init__(message)
        self.energy = energy
