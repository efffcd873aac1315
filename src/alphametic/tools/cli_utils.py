import abc
import argparse
import cProfile
import contextlib
import enum
import functools
import io
import json
import logging
import pstats
import sys

import termcolor

from ..cryptarithm import Cryptarithm
from ..propagator import AllDifferentFiltering
from ..solver import SelectVar, SelectValue, State
from ..utils import INFINITY

__all__ = [
    'ShowMode',
    'Renderer',
    'TextRenderer',
    'JsonRenderer',
    'make_renderer',
    'profiling',
    'solve_puzzle',
    'add_solve_arguments',
    'solve_arguments',
    'setup_logging',
]


_INTERRUPT_NAMES = {
    State.INTERRUPT_TIMEOUT: 'timeout',
    State.INTERRUPT_LIMIT: 'node limit',
}


class Renderer(abc.ABC):
    def __init__(self, output_file=sys.stdout):
        self.output_file = output_file
        self.print = functools.partial(print, file=output_file)

    def show_title(self, title):
        pass

    def show_model(self, model):
        pass

    @abc.abstractmethod
    def show_outcome(self, outcome):
        raise NotImplementedError()

    def show_stats(self, model_solver):
        pass

    def open(self):
        pass

    def close(self):
        self.output_file.flush()

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_value, exc_tb):
        self.close()


class TextRenderer(Renderer):
    def __init__(self, output_file=sys.stdout, color=None):
        super().__init__(output_file=output_file)
        if color is None:
            isatty = getattr(output_file, 'isatty', None)
            color = bool(isatty and isatty())
        self.color = color

    def colored(self, text, color):
        if self.color:
            return termcolor.colored(text, color)
        return text

    def show_title(self, title):
        self.print()
        self.print(title)

    def show_model(self, model):
        self.print("=== model variables: ===")
        for var_index, (var_name, var_info) in enumerate(model.variables().items()):
            self.print(" {:4d}) {!r} domain: {}".format(var_index, var_name, list(var_info.domain)))
        self.print()
        self.print("=== model constraints: ===")
        for c_index, constraint in enumerate(model.constraints()):
            self.print(" {:4d}) {}".format(c_index, constraint))
        self.print()

    def show_outcome(self, outcome):
        self.print("\tTASK     : {} + {} = {}".format(outcome.term1, outcome.term2, outcome.result))
        if outcome.found:
            solution = self.colored('true', 'green')
            result = "{} + {} = {}".format(outcome.term1_value, outcome.term2_value, outcome.result_value)
        else:
            solution = self.colored('false', 'red')
            result = '-'
        self.print("\tSOLUTION : {}".format(solution))
        self.print("\tRESULT   : {}".format(result))

    def show_stats(self, model_solver):
        state = model_solver.state
        stats = state.stats
        if state.solutions_count:
            fmt = "Found solution in {elapsed:.3f} seconds after {trials} trials ({backtracks} backtracks)"
        elif state.interrupted():
            fmt = "No solution found in {elapsed:.3f} seconds after {trials} trials [{interrupt} reached]"
        else:
            fmt = "No solution exists: search completed in {elapsed:.3f} seconds after {trials} trials"
        self.print(fmt.format(
            elapsed=stats.elapsed,
            trials=state.trials_count,
            backtracks=state.backtracks_count,
            interrupt=_INTERRUPT_NAMES.get(state.state, state.state.name)))


class JsonRenderer(Renderer):
    def __init__(self, *args, **kwargs):
        self.data = []
        self._current = None
        super().__init__(*args, **kwargs)

    def show_title(self, title):
        self._current = {'title': title}
        self.data.append(self._current)

    def _entry(self):
        if self._current is None:
            self._current = {}
            self.data.append(self._current)
        return self._current

    def show_model(self, model):
        self._entry()['model'] = {
            'variables': {
                var_name: list(var_info.domain) for var_name, var_info in model.variables().items()
            },
            'constraints': [str(constraint) for constraint in model.constraints()],
        }

    def show_outcome(self, outcome):
        entry = self._entry()
        entry['task'] = [outcome.term1, outcome.term2, outcome.result]
        entry['solution'] = outcome.found
        if outcome.found:
            entry['result'] = [outcome.term1_value, outcome.term2_value, outcome.result_value]
            entry['assignment'] = outcome.assignment
        else:
            entry['state'] = outcome.state.name

    def show_stats(self, model_solver):
        state = model_solver.state
        self._entry()['stats'] = {
            'solver_state': state.state.name,
            'trials_count': state.trials_count,
            'backtracks_count': state.backtracks_count,
            'elapsed_seconds': state.stats.elapsed,
        }
        # the next outcome opens a new entry
        self._current = None

    def close(self):
        self.print(json.dumps(self.data, indent=4))
        super().close()


class ShowMode(enum.Enum):
    TEXT = 0
    JSON = 1


def make_renderer(show_mode, output_file):
    if show_mode is ShowMode.JSON:
        return JsonRenderer(output_file=output_file)
    return TextRenderer(output_file=output_file)


@contextlib.contextmanager
def profiling(enabled=True, output_file=sys.stderr):
    if enabled:
        prof = cProfile.Profile()
        prof.enable()
    try:
        yield
    finally:
        if enabled:
            prof.disable()
            s = io.StringIO()
            ps = pstats.Stats(prof, stream=s).sort_stats('cumulative')
            ps.print_stats()
            print(s.getvalue(), file=output_file)


def solve_puzzle(renderer, term1, term2, result, *, solver_args, show_model=False, show_stats=False,
                 profile=False, title=None):
    model = Cryptarithm(term1, term2, result)
    if title is not None:
        renderer.show_title(title)
    if show_model:
        renderer.show_model(model)
    with model.solve(**solver_args) as model_solver:
        with profiling(profile):
            outcome = model.outcome(model_solver)
        renderer.show_outcome(outcome)
        if show_stats:
            renderer.show_stats(model_solver)
    return outcome


def add_solve_arguments(parser, default_show_model=False, default_show_stats=False):
    parser.add_argument(
        "-t", "--timeout",
        metavar="S",
        default=None,
        nargs='?', const=INFINITY,
        type=float,
        help="solve timeout")

    parser.add_argument(
        "-l", "--node-limit",
        metavar="N",
        default=None,
        nargs='?', const=INFINITY,
        type=int,
        help="max number of search nodes")

    parser.add_argument(
        "--select-var",
        choices=list(SelectVar.__entries__()),
        default=SelectVar.min_domain.name,
        help="variable selection policy (default: %(default)s)")

    parser.add_argument(
        "--select-value",
        choices=list(SelectValue.__entries__()),
        default=SelectValue.min_value.name,
        help="value selection policy (default: %(default)s)")

    parser.add_argument(
        "--all-different",
        choices=[item.name for item in AllDifferentFiltering],
        default=AllDifferentFiltering.forward_checking.name,
        help="all-different propagation (default: %(default)s)")

    def _default(b_value):
        if b_value:
            return " (default)"
        return ""

    show_model_group = parser.add_mutually_exclusive_group()
    show_model_group.add_argument(
        "-m", "--show-model",
        dest='show_model',
        default=default_show_model,
        action="store_true",
        help="show model variables and constraints" + _default(default_show_model))
    show_model_group.add_argument(
        "-M", "--no-show-model",
        dest='show_model',
        default=default_show_model,
        action="store_false",
        help="do not show model variables and constraints" + _default(not default_show_model))

    show_stats_group = parser.add_mutually_exclusive_group()
    show_stats_group.add_argument(
        "-s", "--show-stats",
        dest='show_stats',
        default=default_show_stats,
        action="store_true",
        help="show solver statistics" + _default(default_show_stats))
    show_stats_group.add_argument(
        "-S", "--no-show-stats",
        dest='show_stats',
        default=default_show_stats,
        action="store_false",
        help="do not show solver statistics" + _default(not default_show_stats))

    parser.add_argument(
        "-p", "--profile",
        dest='profile',
        action="store_true", default=False,
        help="enable profiling")

    parser.add_argument(
        '-j', '--json',
        dest='show_mode',
        action='store_const', const=ShowMode.JSON,
        default=ShowMode.TEXT,
        help='JSON output')

    parser.add_argument(
        '-o', '--output-file',
        default=sys.stdout,
        type=argparse.FileType('w'),
        help='output filename')

    parser.add_argument(
        '-v', '--verbose',
        action='count', default=0,
        help='increase log verbosity')


def solve_arguments():
    return ["timeout", "node_limit", "select_var", "select_value", "all_different",
            "show_model", "show_stats", "profile", "show_mode", "output_file"]


def setup_logging(verbose):
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s")
