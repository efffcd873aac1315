import logging

import ply.lex as lex
import ply.yacc as yacc

from .cryptarithm import InvalidInputError, check_word, solve


__all__ = [
    'EquationSyntaxError',
    'EquationLexer',
    'EquationParser',
    'parse_equation',
    'solve_equation',
]

LOG = logging.getLogger(__name__)


class EquationSyntaxError(InvalidInputError):
    pass


class EquationLexer:
    # List of token names.   This is always required
    tokens = (
        'WORD',
        'PLUS',
        'EQUALS',
    )

    t_WORD                     = r'[a-zA-Z]+'
    t_PLUS                     = r'\+'
    t_EQUALS                   = r'\=\=|\='

    t_ignore  = ' \t\n'

    # Error handling rule
    def t_error(self, t):
        raise EquationSyntaxError("illegal character {!r} at position {}".format(
            t.value[0], t.lexpos))

    def tokenize(self, source):
        self.lexer.input(source)
        while True:
            tok = self.lexer.token()
            if not tok:
                break
            yield tok

    def __init__(self):
        self.lexer = lex.lex(module=self)


class EquationParser:
    tokens = EquationLexer.tokens
    start = 'equation'

    def __init__(self):
        self.lexer = EquationLexer()
        self.parser = yacc.yacc(module=self, debug=False, write_tables=False)

    def parse(self, source):
        return self.parser.parse(source, lexer=self.lexer.lexer)

    def p_equation(self, p):
        '''equation : WORD PLUS WORD EQUALS WORD'''
        p[0] = (
            check_word(p[1], 'term1'),
            check_word(p[3], 'term2'),
            check_word(p[5], 'result'),
        )

    ### ERROR:
    def p_error(self, t):
        if t is None:
            raise EquationSyntaxError("unexpected end of equation")
        raise EquationSyntaxError("syntax error at position {}, token {!r} [{}]".format(t.lexpos, t.value, t.type))


def parse_equation(source):
    """Split 'SEND + MORE = MONEY' (or '==') into its three words."""
    if not isinstance(source, str):
        source = source.read()
    if not source.strip():
        raise EquationSyntaxError("empty equation")
    words = EquationParser().parse(source)
    LOG.debug("parsed %r -> %s", source, words)
    return words


def solve_equation(source, **solver_args):
    return solve(*parse_equation(source), **solver_args)
