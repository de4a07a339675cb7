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

_config = dict(
    c1=1e-4,
    c2=0.9,
    parameter_tolerance=1e-10,
    max_iterations=10,
)

_types = dict(
    c1=float,
    c2=float,
    parameter_tolerance=float,
    max_iterations=int,
)


def update(key, value, /):
    """Update the package-wide defaults of the Wolfe line searches

    Parameters
    ----------
    key : str
        Identifier for the configuration option.
    value : float or int
        Value for the configuration option.


    Currently, the following configuration options are available:

    - "c1": sufficient decrease parameter (default 1e-4)
    - "c2": curvature parameter (default 0.9)
    - "parameter_tolerance": relative bracket width below which a search stops
      for lack of progress (default 1e-10)
    - "max_iterations": number of trial steps before a search gives up
      (default 10)

    These values are only read when a line search is constructed without
    explicit arguments; existing line searches keep their settings.
    """
    global _config
    if not isinstance(key, str):
        raise TypeError(f"key must be a string; got {key!r}")
    key = key.lower().replace(" ", "_")
    if key not in _config:
        raise ValueError(f"invalid key; got {key!r}")
    tp = _types[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"value to {key!r} must be a number; got {value!r}")
    if tp is int and int(value) != value:
        raise ValueError(f"value to {key!r} must be integral; got {value!r}")
    _config[key] = tp(value)


def get(key):
    """Returns the current default for `key`."""
    if not isinstance(key, str):
        raise TypeError(f"key must be a string; got {key!r}")
    key = key.lower().replace(" ", "_")
    if key not in _config:
        raise ValueError(f"invalid key; got {key!r}")
    return _config[key]
