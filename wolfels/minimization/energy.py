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

from ..utilities import WolfeMeta


class Energy(metaclass=WolfeMeta):
    """Provides the functional used by minimization schemes.

    The Energy object is an implementation of a scalar function including its
    gradient at some position.

    Parameters
    ----------
    position : numpy.ndarray
        The input parameter of the scalar function.

    Notes
    -----
    An instance of the Energy class is defined at a certain location. If one
    is interested in the value or gradient of the abstract energy functional
    one has to 'jump' to the new position using the `at` method. This method
    returns a new energy instance residing at the new position, so an
    evaluation handed to a line search is never modified by it.

    Memorizing the evaluations of some quantities minimizes the computational
    effort for multiple calls.
    """

    def __init__(self, position):
        self._position = position
        self._gradnorm = None

    def at(self, position):
        """Returns a new Energy object, initialized at `position`.

        Parameters
        ----------
        position : numpy.ndarray
            Location in parameter space for the new Energy object.

        Returns
        -------
        Energy
            Energy object at new position.
        """
        return self.__class__(position)

    @property
    def position(self):
        """
        numpy.ndarray : selected location in parameter space.

        The location in parameter space where value and gradient are
        evaluated.
        """
        return self._position

    @property
    def value(self):
        """
        float : value of the functional.

            The value of the energy functional at given `position`.
        """
        raise NotImplementedError

    @property
    def gradient(self):
        """
        numpy.ndarray : The gradient at given `position`.
        """
        raise NotImplementedError

    @property
    def has_gradient(self):
        """
        bool : whether this energy can provide its gradient.
        """
        try:
            self.gradient
        except NotImplementedError:
            return False
        return True

    @property
    def gradient_norm(self):
        """
        float : L2-norm of the gradient at given `position`.
        """
        if self._gradnorm is None:
            self._gradnorm = float(np.linalg.norm(self.gradient))
        return self._gradnorm


def _readonly_float_array(x):
    res = np.array(x)
    if not np.issubdtype(res.dtype, np.inexact):
        res = res.astype(np.float64)
    res.flags.writeable = False
    return res


class FunctionEnergy(Energy):
    """Energy defined by plain python callables.

    Parameters
    ----------
    position : numpy.ndarray
        The input parameter of the scalar function.
    func : callable
        `func(x)` returns the value of the objective at `x`, or a tuple
        `(value, gradient)` if `jac` is True.
    jac : callable or bool, optional
        `jac(x)` returns the gradient at `x`. If True, the gradient is
        returned by `func` together with the value. If None, the energy does
        not support gradients.

    Notes
    -----
    Value and gradient are computed on first access and cached afterwards.
    """

    def __init__(self, position, func, jac=None):
        position = _readonly_float_array(position)
        super(FunctionEnergy, self).__init__(position)
        if not callable(func):
            raise TypeError("func must be callable")
        if not (jac is None or jac is True or callable(jac)):
            raise TypeError("jac must be None, True or callable")
        self._func = func
        self._jac = jac
        self._value = None
        self._grad = None

    def at(self, position):
        return FunctionEnergy(position, self._func, self._jac)

    def _evaluate_combined(self):
        val, grad = self._func(self._position)
        self._value = float(val)
        self._grad = self._lock(grad)

    def _lock(self, grad):
        grad = _readonly_float_array(grad)
        if grad.shape != self._position.shape:
            raise ValueError(
                "gradient shape {} does not match position shape {}".format(
                    grad.shape, self._position.shape))
        return grad

    @property
    def value(self):
        if self._value is None:
            if self._jac is True:
                self._evaluate_combined()
            else:
                self._value = float(self._func(self._position))
        return self._value

    @property
    def gradient(self):
        if self._grad is None:
            if self._jac is None:
                raise NotImplementedError
            if self._jac is True:
                self._evaluate_combined()
            else:
                self._grad = self._lock(self._jac(self._position))
        return self._grad

    @property
    def has_gradient(self):
        return self._jac is not None
