from .version import __version__

from . import config
from .logger import logger
from .errors import EvaluationError, MaximumIterationsError
from .utilities import vdot

from .minimization.energy import Energy, FunctionEnergy
from .minimization.quadratic_energy import QuadraticEnergy
from .minimization.line_search_result import ExitCondition, LineSearchResult
from .minimization.line_search import (
    LineEnergy, WolfeLineSearch, StrongWolfeLineSearch, WeakWolfeLineSearch)
from .minimization.iteration_controllers import (
    IterationController, GradientNormController)
from .minimization.descent_minimizers import (
    DescentMinimizer, SteepestDescent, L_BFGS)
