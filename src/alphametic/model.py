import collections
import re
import types

from .constraint import (
    Constraint,
    NonZeroConstraint,
    AllDifferentConstraint,
    LinearEquationConstraint,
)
from .solver import Solver


__all__ = [
    'Model',
]


class VariableInfo:
    def __init__(self, var_name, domain):
        self.var_name = var_name
        self.domain = domain

    def __repr__(self):
        return "{}(var_name={!r}, domain={!r})".format(
            type(self).__name__,
            self.var_name,
            self.domain)


class Model(object):
    __re_name__ = re.compile(r'^[a-zA-Z]\w*$')

    def __init__(self):
        self.__variables = collections.OrderedDict()
        self.__constraints = []
        self.__variables_proxy = types.MappingProxyType(self.__variables)
        self.__solvable = True

    def solvable(self):
        return self.__solvable

    def set_solvable(self, solvable):
        self.__solvable = bool(solvable)

    def variables(self):
        return self.__variables_proxy

    def var_names(self):
        return list(self.__variables)

    def constraints(self):
        yield from self.__constraints

    def _check_name(self, name):
        if not isinstance(name, str) or not self.__re_name__.match(name):
            raise ValueError("bad name {!r}".format(name))
        if name in self.__variables:
            raise ValueError("variable {} already defined".format(name))

    def _check_domain(self, domain):
        values = set()
        for value in domain:
            if not isinstance(value, int):
                raise TypeError("bad value {!r}: not an int".format(value))
            if value in values:
                raise ValueError("duplicated value {}".format(value))
            values.add(value)
        if not values:
            raise ValueError("empty domain")

    def add_int_variable(self, domain, *, name):
        domain = tuple(domain)
        self._check_name(name)
        self._check_domain(domain)
        self.__variables[name] = VariableInfo(var_name=name, domain=domain)
        return name

    def get_var_domain(self, var_name):
        return self.__variables[var_name].domain

    def add_constraint(self, constraint):
        if not isinstance(constraint, Constraint):
            raise TypeError("{!r} is not a valid constraint".format(constraint))
        for var_name in constraint.vars:
            if var_name not in self.__variables:
                raise ValueError("constraint {} depends on undefined variable {}".format(constraint, var_name))
        self.__constraints.append(constraint)
        return constraint

    def add_non_zero_constraint(self, var_name):
        return self.add_constraint(NonZeroConstraint(var_name))

    def add_all_different_constraint(self, var_names):
        return self.add_constraint(AllDifferentConstraint(var_names))

    def add_linear_equation_constraint(self, term1, term2, result):
        return self.add_constraint(LinearEquationConstraint(term1, term2, result))

    def solver(self, **kwargs):
        return Solver(**kwargs)

    def solve(self, **kwargs):
        return self.solver(**kwargs)(self)
