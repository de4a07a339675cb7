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

import site
import sys

from setuptools import find_packages, setup

# Workaround until https://github.com/pypa/pip/issues/7953 is fixed
site.ENABLE_USER_SITE = "--user" in sys.argv[1:]

exec(open('wolfels/version.py').read())

with open("README.md") as f:
    long_description = f.read()
description = "Bisection line searches satisfying the strong or weak Wolfe conditions, for gradient-based minimizers."

extras_require = {
    "test": ("pytest", ),
}

setup(name="wolfels",
      version=__version__,
      description=description,
      long_description=long_description,
      long_description_content_type="text/markdown",
      packages=find_packages(include=["wolfels", "wolfels.*"]),
      license="GPLv3",
      install_requires=['scipy>=1.4.1', 'numpy>=1.17'],
      extras_require=extras_require,
      python_requires='>=3.8',
      classifiers=[
          "Development Status :: 4 - Beta",
          "Topic :: Scientific/Engineering :: Mathematics",
          "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
          "Operating System :: OS Independent",
          "Programming Language :: Python",
          "Intended Audience :: Science/Research"],
      )
