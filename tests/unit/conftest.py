import itertools

import pytest


def brute_force_solutions(term1, term2, result):
    letters = []
    for letter in term1 + term2 + result:
        if letter not in letters:
            letters.append(letter)
    non_zero = {term1[0], term2[0]}
    solutions = []
    for digits in itertools.permutations(range(10), len(letters)):
        assignment = dict(zip(letters, digits))
        if any(assignment[letter] == 0 for letter in non_zero):
            continue
        values = [int(''.join(str(assignment[letter]) for letter in word)) for word in (term1, term2, result)]
        if values[0] + values[1] == values[2]:
            solutions.append(assignment)
    return solutions


@pytest.fixture
def brute_force():
    return brute_force_solutions
