import collections
import enum
import itertools

from .constraint import (
    NonZeroConstraint,
    AllDifferentConstraint,
    LinearEquationConstraint,
)
from .matching import filter_all_different


__all__ = [
    'Consistency',
    'AllDifferentFiltering',
    'Propagator',
    'propagate_non_zero',
    'propagate_all_different',
    'propagate_linear_equation',
]


class Consistency(enum.Enum):
    CONSISTENT = 0
    INCONSISTENT = 1


class AllDifferentFiltering(enum.Enum):
    forward_checking = 0
    matching = 1


def propagate_non_zero(constraint, store):
    return not store.remove(constraint.var_name, 0).empty


def propagate_all_different(constraint, store, filtering=AllDifferentFiltering.forward_checking):
    var_names = constraint.var_names
    propagated = set()
    changed = True
    while changed:
        changed = False
        for var_name in var_names:
            domain = store[var_name]
            if not domain:
                return False
            if len(domain) == 1 and var_name not in propagated:
                propagated.add(var_name)
                value = next(iter(domain))
                for other_var_name in var_names:
                    if other_var_name == var_name:
                        continue
                    change = store.remove(other_var_name, value)
                    if change.empty:
                        return False
                    changed = changed or change.changed

    # pigeonhole: n variables need at least n values
    values = set()
    for var_name in var_names:
        values.update(store[var_name])
    if len(values) < len(var_names):
        return False

    if filtering is AllDifferentFiltering.matching:
        return filter_all_different(var_names, store)
    return True


def _column_transitions(column, store, carries):
    """Enumerate (carry_in, carry_out, values) for one column of the sum.

       Only the distinct letters of the addends are enumerated: the result
       digit follows from them and from the carry. A letter occurring twice in
       the column takes the same value at both places.
    """
    term_var_names = []
    for var_name in (column.term1, column.term2):
        if var_name is not None and var_name not in term_var_names:
            term_var_names.append(var_name)
    result_var_name = column.result

    transitions = []
    for term_values in itertools.product(*(sorted(store[var_name]) for var_name in term_var_names)):
        term_substitution = dict(zip(term_var_names, term_values))
        total = sum(term_substitution[var_name] for var_name in (column.term1, column.term2) if var_name is not None)
        for carry_in in carries:
            carry_out, digit = divmod(total + carry_in, 10)
            if result_var_name is None:
                # result is shorter than the addends
                if digit != 0:
                    continue
                values = term_substitution
            elif result_var_name in term_substitution:
                if term_substitution[result_var_name] != digit:
                    continue
                values = term_substitution
            else:
                if digit not in store[result_var_name]:
                    continue
                values = dict(term_substitution)
                values[result_var_name] = digit
            transitions.append((carry_in, carry_out, values))
    return transitions


def propagate_linear_equation(constraint, store):
    """Column-wise carry propagation of term1 + term2 == result.

       A forward pass over the columns (units first) collects the carries that
       can be reached from a zero carry into the units column; a backward pass
       keeps only the column transitions that lead to a zero carry out of the
       last column. A value survives if it occurs in a kept transition of every
       column in which its variable appears.
    """
    columns = constraint.columns
    transitions = []
    carries = {0}
    for column in columns:
        column_transitions = _column_transitions(column, store, carries)
        if not column_transitions:
            return False
        transitions.append(column_transitions)
        carries = {carry_out for _, carry_out, _ in column_transitions}

    supported = {}
    required_carries = {0}
    for column_transitions in reversed(transitions):
        kept = [t for t in column_transitions if t[1] in required_carries]
        if not kept:
            return False
        required_carries = {carry_in for carry_in, _, _ in kept}
        column_support = collections.defaultdict(set)
        for _, _, values in kept:
            for var_name, value in values.items():
                column_support[var_name].add(value)
        for var_name, values in column_support.items():
            if var_name in supported:
                supported[var_name] &= values
            else:
                supported[var_name] = values

    for var_name, values in supported.items():
        if store.narrow(var_name, values).empty:
            return False
    return True


class Propagator:
    """Reduces the domains of a store to a fixpoint of the constraints."""

    def __init__(self, constraints, all_different=AllDifferentFiltering.forward_checking):
        self._constraints = list(constraints)
        self._all_different = all_different
        self._watchers = collections.defaultdict(list)
        for constraint in self._constraints:
            for var_name in constraint.vars:
                self._watchers[var_name].append(constraint)
        self._rules = {
            NonZeroConstraint: propagate_non_zero,
            AllDifferentConstraint: self._propagate_all_different,
            LinearEquationConstraint: propagate_linear_equation,
        }

    @property
    def constraints(self):
        return tuple(self._constraints)

    def _propagate_all_different(self, constraint, store):
        return propagate_all_different(constraint, store, self._all_different)

    def _rule(self, constraint):
        for constraint_class in type(constraint).__mro__:
            rule = self._rules.get(constraint_class)
            if rule is not None:
                return rule
        raise TypeError("no propagation rule for {!r}".format(constraint))

    def propagate(self, store, initial=False):
        pending = collections.deque()
        queued = set()

        def enqueue(constraints):
            for constraint in constraints:
                if constraint not in queued:
                    queued.add(constraint)
                    pending.append(constraint)

        modified = store.pop_modified()
        if initial:
            enqueue(self._constraints)
        else:
            for var_name in modified:
                enqueue(self._watchers[var_name])

        while pending:
            constraint = pending.popleft()
            queued.discard(constraint)
            if not self._rule(constraint)(constraint, store):
                store.pop_modified()
                return Consistency.INCONSISTENT
            for var_name in store.pop_modified():
                enqueue(self._watchers[var_name])
        return Consistency.CONSISTENT

    __call__ = propagate
