import collections

from .constraint import word_value
from .solver import State

__all__ = [
    'Found',
    'NotFound',
    'word_value',
    'build_found',
    'build_not_found',
]


class Found(collections.namedtuple(
        'Found',
        'term1 term2 result term1_value term2_value result_value assignment')):
    __slots__ = ()
    found = True


class NotFound(collections.namedtuple(
        'NotFound',
        'term1 term2 result state')):
    __slots__ = ()
    found = False

    @property
    def interrupted(self):
        return self.state in {State.INTERRUPT_TIMEOUT, State.INTERRUPT_LIMIT}


def build_found(term1, term2, result, assignment):
    """Project a total assignment (letter -> digit) onto the three words."""
    assignment = {letter: assignment[letter] for letter in sorted(assignment)}
    return Found(
        term1=term1,
        term2=term2,
        result=result,
        term1_value=word_value(term1, assignment),
        term2_value=word_value(term2, assignment),
        result_value=word_value(result, assignment),
        assignment=assignment)


def build_not_found(term1, term2, result, state=State.DONE):
    return NotFound(term1=term1, term2=term2, result=result, state=state)
