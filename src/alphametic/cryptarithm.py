import collections
import logging
import re

from .domain import DIGITS
from .model import Model
from .outcome import build_found, build_not_found
from .solver import State

__all__ = [
    'InvalidInputError',
    'Cryptarithm',
    'check_word',
    'extract_letters',
    'solve',
]


LOG = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    pass


_RE_WORD = re.compile(r'[A-Za-z]+')


def check_word(word, name='word'):
    """Return 'word' uppercased; raise InvalidInputError if it is not a
       non-empty sequence of letters.
    """
    if not isinstance(word, str):
        raise InvalidInputError("{}: {!r} is not a string".format(name, word))
    if not word:
        raise InvalidInputError("{}: empty word".format(name))
    if not _RE_WORD.fullmatch(word):
        raise InvalidInputError("{}: {!r} contains non alphabetic characters".format(name, word))
    return word.upper()


def extract_letters(*words):
    """Distinct letters of the words, in order of first occurrence."""
    letters = collections.OrderedDict()
    for word in words:
        for letter in word:
            letters[letter] = None
    return tuple(letters)


class Cryptarithm(Model):
    """The model of TERM1 + TERM2 = RESULT.

       Only the leading letters of the two addends must be non zero: the
       leading letter of the result is unconstrained.
    """

    def __init__(self, term1, term2, result):
        super().__init__()
        self._term1 = check_word(term1, 'term1')
        self._term2 = check_word(term2, 'term2')
        self._result = check_word(result, 'result')
        self._letters = extract_letters(self._term1, self._term2, self._result)
        if len(self._letters) > len(DIGITS):
            LOG.warning("%s: %d distinct letters, only %d digits available",
                        self.source, len(self._letters), len(DIGITS))
            self.set_solvable(False)

        for letter in self._letters:
            self.add_int_variable(sorted(DIGITS), name=letter)
        for letter in sorted({self._term1[0], self._term2[0]}, key=self._letters.index):
            self.add_non_zero_constraint(letter)
        self.add_all_different_constraint(self._letters)
        self.add_linear_equation_constraint(self._term1, self._term2, self._result)
        LOG.debug("%s: letters %s", self.source, ''.join(self._letters))

    @property
    def term1(self):
        return self._term1

    @property
    def term2(self):
        return self._term2

    @property
    def result(self):
        return self._result

    @property
    def words(self):
        return (self._term1, self._term2, self._result)

    @property
    def letters(self):
        return self._letters

    @property
    def source(self):
        return "{} + {} = {}".format(self._term1, self._term2, self._result)

    def outcome(self, model_solver):
        """Run 'model_solver' up to the first solution."""
        for solution in model_solver:
            # the search stops at the first solution
            model_solver.state.state = State.DONE
            return build_found(self._term1, self._term2, self._result, solution)
        state = model_solver.state.state
        LOG.debug("%s: no solution [%s]", self.source, state.name)
        return build_not_found(self._term1, self._term2, self._result, state)

    def find_solution(self, **solver_args):
        with self.solve(**solver_args) as model_solver:
            return self.outcome(model_solver)


def solve(term1, term2, result, **solver_args):
    """Solve TERM1 + TERM2 = RESULT.

       Returns a Found outcome with the values of the three words, or
       NotFound if no assignment satisfies the constraints (or a search
       budget given in 'solver_args' ran out). Raises InvalidInputError for
       malformed words.
    """
    return Cryptarithm(term1, term2, result).find_solution(**solver_args)
