from .model import Model
from .cryptarithm import (
    Cryptarithm,
    InvalidInputError,
    solve,
)
from .outcome import Found, NotFound
from .parser import EquationSyntaxError, parse_equation, solve_equation
from .solver import SelectVar, SelectValue, Solver, ModelSolver, State
