import abc
import collections

__all__ = [
    'Constraint',
    'NonZeroConstraint',
    'AllDifferentConstraint',
    'LinearEquationConstraint',
    'Column',
    'word_value',
]


def word_value(var_names, substitution):
    """Base-10 value of a sequence of variables, most significant first."""
    value = 0
    for var_name in var_names:
        value = value * 10 + substitution[var_name]
    return value


class Constraint(abc.ABC):
    def __init__(self, vars):
        self.vars = frozenset(vars)

    @abc.abstractmethod
    def evaluate(self, substitution):
        raise NotImplementedError()

    def unsatisfied(self, substitution):
        for var_name in self.vars:
            if var_name not in substitution:
                return False
        return not self.evaluate(substitution)


class NonZeroConstraint(Constraint):
    def __init__(self, var_name):
        self.var_name = var_name
        super().__init__(vars=(var_name,))

    def evaluate(self, substitution):
        return substitution[self.var_name] != 0

    def __repr__(self):
        return "{}({!r})".format(type(self).__name__, self.var_name)

    def __str__(self):
        return "{} != 0".format(self.var_name)


class AllDifferentConstraint(Constraint):
    def __init__(self, var_names):
        var_names = tuple(collections.OrderedDict.fromkeys(var_names))
        self.var_names = var_names
        super().__init__(vars=var_names)

    def evaluate(self, substitution):
        return len(set(substitution[var_name] for var_name in self.var_names)) == len(self.var_names)

    def __repr__(self):
        return "{}({!r})".format(type(self).__name__, list(self.var_names))

    def __str__(self):
        return "all_different({})".format(', '.join(self.var_names))


# One column of the sum, from the units up: a missing position is None.
Column = collections.namedtuple(  # pylint: disable=invalid-name
    'Column',
    'term1 term2 result')


class LinearEquationConstraint(Constraint):
    """term1 + term2 == result, each term being a sequence of variables
       read as a base-10 number (most significant first).
    """

    def __init__(self, term1, term2, result):
        self.term1 = tuple(term1)
        self.term2 = tuple(term2)
        self.result = tuple(result)
        for name, term in (('term1', self.term1), ('term2', self.term2), ('result', self.result)):
            if not term:
                raise ValueError("{}: empty term".format(name))
        super().__init__(vars=self.term1 + self.term2 + self.result)
        self.columns = self._make_columns()

    def _make_columns(self):
        num_columns = max(len(self.term1), len(self.term2), len(self.result))

        def position(term, index):
            if index < len(term):
                return term[-1 - index]
            return None

        return tuple(
            Column(term1=position(self.term1, index),
                   term2=position(self.term2, index),
                   result=position(self.result, index))
            for index in range(num_columns))

    def evaluate(self, substitution):
        return word_value(self.term1, substitution) + word_value(self.term2, substitution) == \
            word_value(self.result, substitution)

    def __repr__(self):
        return "{}({!r}, {!r}, {!r})".format(
            type(self).__name__, ''.join(self.term1), ''.join(self.term2), ''.join(self.result))

    def __str__(self):
        return "{} + {} == {}".format(''.join(self.term1), ''.join(self.term2), ''.join(self.result))
