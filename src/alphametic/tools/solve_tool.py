import argparse
import logging
import sys

import argcomplete

from ..cryptarithm import InvalidInputError
from ..parser import parse_equation

from .cli_utils import (
    add_solve_arguments,
    make_renderer,
    setup_logging,
    solve_arguments,
    solve_puzzle,
)

__all__ = [
    'main',
    'demo_puzzles',
]

LOG = logging.getLogger(__name__)


DEMO_PUZZLES = (
    ("positive test case:", ("CRACK", "HACK", "ERROR")),
    ("positive test case:", ("SEND", "MORE", "MONEY")),
    ("positive test case:", ("AGONY", "JOY", "GUILT")),
    ("positive test case:", ("APPLE", "LEMON", "BANANA")),
    ("negative test case:", ("APPLE", "LEMON", "BANANAX")),
    ("positive test case:", ("SYSTEMA", "ATIMA", "SECURER")),
)


def demo_puzzles():
    return DEMO_PUZZLES


def _run(puzzles, timeout, node_limit, select_var, select_value, all_different,
         show_model, show_stats, profile, show_mode, output_file):
    solver_args = {
        'timeout': timeout,
        'node_limit': node_limit,
        'select_var': select_var,
        'select_value': select_value,
        'all_different': all_different,
    }
    all_found = True
    with make_renderer(show_mode, output_file) as renderer:
        for title, words in puzzles:
            outcome = solve_puzzle(
                renderer, *words,
                solver_args=solver_args,
                show_model=show_model,
                show_stats=show_stats,
                profile=profile,
                title=title)
            all_found = all_found and outcome.found
    if all_found:
        return 0
    return 1


def solve_words(term1, term2, result, **kwargs):
    return _run([(None, (term1, term2, result))], **kwargs)


def solve_equation_source(equation, **kwargs):
    return _run([(None, parse_equation(equation))], **kwargs)


def demo(**kwargs):
    _run(demo_puzzles(), **kwargs)
    return 0


def main(argv=None):
    common_args = {
        'formatter_class': argparse.RawDescriptionHelpFormatter
    }
    top_level_parser = argparse.ArgumentParser(
        description="""\
Alphametic tool - solve verbal arithmetic puzzles TERM1 + TERM2 = RESULT,
where every letter stands for a different digit.

* solve: solve the puzzle given by three words
* equation: solve a puzzle written as an equation, e.g. 'SEND + MORE = MONEY'
* demo: solve some sample puzzles

The command has bash autocompletion; to enable it run this command:

  $ eval "$(register-python-argcomplete alphametic)"

""",
        **common_args)

    solve_args = solve_arguments()

    subparsers = top_level_parser.add_subparsers()
    top_level_parser.set_defaults(
        function=None,
        function_args=[])

    solve_parser = subparsers.add_parser(
        "solve",
        description="""\
Solve TERM1 + TERM2 = RESULT; words are case insensitive. For instance:

  $ alphametic solve SEND MORE MONEY

""",
        **common_args)
    solve_parser.set_defaults(
        function=solve_words,
        function_args=["term1", "term2", "result"] + solve_args)
    solve_parser.add_argument("term1", help="first term")
    solve_parser.add_argument("term2", help="second term")
    solve_parser.add_argument("result", help="result")

    equation_parser = subparsers.add_parser(
        "equation",
        description="""\
Solve a puzzle written as an equation, for instance:

  $ alphametic equation 'SEND + MORE = MONEY'

""",
        **common_args)
    equation_parser.set_defaults(
        function=solve_equation_source,
        function_args=["equation"] + solve_args)
    equation_parser.add_argument("equation", help="the equation")

    demo_parser = subparsers.add_parser(
        "demo",
        description="""\
Solve some sample puzzles:

{examples}

""".format(examples='\n'.join("  {} + {} = {}".format(*words) for _, words in demo_puzzles())),
        **common_args)
    demo_parser.set_defaults(
        function=demo,
        function_args=[] + solve_args)

    for parser in [solve_parser, equation_parser, demo_parser]:
        add_solve_arguments(parser)

    argcomplete.autocomplete(top_level_parser)
    namespace = top_level_parser.parse_args(argv)

    function = namespace.function
    if function is None:
        top_level_parser.print_help()
        return 2
    setup_logging(namespace.verbose)
    kwargs = {
        arg: getattr(namespace, arg) for arg in namespace.function_args
    }
    try:
        return function(**kwargs)
    except InvalidInputError as err:
        LOG.error("invalid input: %s", err)
        return 2
    finally:
        output_file = getattr(namespace, 'output_file', None)
        if output_file is not None and output_file is not sys.stdout:
            output_file.close()


if __name__ == "__main__":
    sys.exit(main())
