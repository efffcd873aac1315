import io

import pytest

from alphametic import EquationSyntaxError, InvalidInputError, parse_equation, solve_equation
from alphametic.parser import EquationLexer


def test_tokenize():
    tokens = [(tok.type, tok.value) for tok in EquationLexer().tokenize("SEND + MORE == MONEY")]
    assert tokens == [
        ('WORD', 'SEND'),
        ('PLUS', '+'),
        ('WORD', 'MORE'),
        ('EQUALS', '=='),
        ('WORD', 'MONEY'),
    ]


@pytest.mark.parametrize("source", [
    "SEND + MORE = MONEY",
    "SEND+MORE=MONEY",
    "send + more == money",
    "  SEND\t+ MORE =\nMONEY\n",
    io.StringIO("SEND + MORE = MONEY\n"),
])
def test_parse_equation(source):
    assert parse_equation(source) == ("SEND", "MORE", "MONEY")


@pytest.mark.parametrize("source", [
    "",
    "   ",
    "SEND + MORE",
    "SEND + MORE =",
    "SEND - MORE = MONEY",
    "SEND + MORE = MONEY1",
    "SEND + + MORE = MONEY",
    "SEND + MORE = MONEY = X",
    "SEND + MORE + X = MONEY",
])
def test_parse_equation_error(source):
    with pytest.raises(EquationSyntaxError):
        parse_equation(source)


def test_syntax_error_is_invalid_input():
    with pytest.raises(InvalidInputError):
        parse_equation("SEND +")


def test_solve_equation():
    outcome = solve_equation("SEND + MORE = MONEY")
    assert outcome.found
    assert (outcome.term1_value, outcome.term2_value, outcome.result_value) == (9567, 1085, 10652)


def test_solve_equation_not_found():
    outcome = solve_equation("APPLE + LEMON = BANANAX")
    assert not outcome.found
