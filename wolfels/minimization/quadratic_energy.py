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
from scipy.sparse.linalg import aslinearoperator

from ..utilities import vdot
from .energy import Energy, _readonly_float_array


class QuadraticEnergy(Energy):
    """The Energy for a quadratic form.

    value = 0.5 x.A.x - b.x, gradient = A.x - b

    Parameters
    ----------
    position : numpy.ndarray
        The input parameter of the quadratic form.
    A : numpy.ndarray, scipy.sparse matrix or LinearOperator
        Symmetric matrix of the form.
    b : numpy.ndarray, optional
        Linear term. Default: None (no linear term).
    """

    def __init__(self, position, A, b=None):
        position = _readonly_float_array(position)
        super(QuadraticEnergy, self).__init__(position=position)
        self._A = aslinearoperator(A)
        self._b = b
        Ax = self._A.matvec(self.position.ravel()).reshape(
            self.position.shape)
        self._grad = _readonly_float_array(Ax if b is None else Ax - b)
        self._value = 0.5*vdot(self.position, Ax).real
        if b is not None:
            self._value -= vdot(b, self.position).real
        self._value = float(self._value)

    def at(self, position):
        return QuadraticEnergy(position=position, A=self._A, b=self._b)

    @property
    def value(self):
        return self._value

    @property
    def gradient(self):
        return self._grad

    @property
    def minimum(self):
        """numpy.ndarray : the stationary point A^-1 b, computed densely.

        Only meant for small problems, e.g. to check a minimizer's result.
        """
        n = self.position.size
        A = self._A.matmat(np.eye(n))
        b = np.zeros(n) if self._b is None else np.asarray(self._b).ravel()
        return np.linalg.solve(A, b).reshape(self.position.shape)
