import pytest

from alphametic.cryptarithm import Cryptarithm
from alphametic.propagator import AllDifferentFiltering
from alphametic.solver import SelectVar, SelectValue, Solver, State
from alphametic.utils import INFINITY


def test_solver_defaults():
    solver = Solver()
    assert solver.select_var is SelectVar.min_domain
    assert solver.select_value is SelectValue.min_value
    assert solver.all_different is AllDifferentFiltering.forward_checking
    assert solver.timeout is None
    assert solver.node_limit is None


def test_solver_names():
    solver = Solver(select_var="in_order", select_value="max_value", all_different="matching",
                    timeout=INFINITY, node_limit=INFINITY)
    assert solver.select_var is SelectVar.in_order
    assert solver.select_value is SelectValue.max_value
    assert solver.all_different is AllDifferentFiltering.matching
    assert solver.timeout is None
    assert solver.node_limit is None


@pytest.mark.parametrize("kwargs, error_type", [
    ({'select_var': "max_domain"}, ValueError),
    ({'select_var': SelectValue.min_value}, TypeError),
    ({'select_value': 1}, TypeError),
    ({'all_different': "bounds"}, ValueError),
    ({'timeout': -1.0}, ValueError),
    ({'node_limit': -1}, ValueError),
])
def test_solver_error(kwargs, error_type):
    with pytest.raises(error_type):
        Solver(**kwargs)


def test_select_value_order():
    assert SelectValue.min_value("A", {3, 1, 2}) == [3, 2, 1]
    assert SelectValue.max_value("A", {3, 1, 2}) == [1, 2, 3]


def test_select_var():
    model = Cryptarithm("SEND", "MORE", "MONEY")
    with model.solve() as model_solver:
        store = model_solver.store
        store.set_domain("E", {4, 5})
        store.set_domain("R", {4, 5})
        store.set_domain("Y", {2})
        assert SelectVar.min_domain(store) == "E"
        assert SelectVar.in_order(store) == "S"


def test_node_limit():
    model = Cryptarithm("SEND", "MORE", "MONEY")
    with model.solve(node_limit=0) as model_solver:
        assert list(model_solver) == []
        assert model_solver.state.state is State.INTERRUPT_LIMIT
        assert model_solver.state.interrupted()
        assert model_solver.state.trials_count == 0


def test_stats():
    model = Cryptarithm("SEND", "MORE", "MONEY")
    with model.solve() as model_solver:
        solutions = list(model_solver)
    state = model_solver.state
    assert len(solutions) == 1
    assert state.state is State.DONE
    assert state.solutions_count == 1
    assert state.trials_count > 0
    assert state.stats.elapsed >= 0.0


def test_timeout():
    model = Cryptarithm("SEND", "MORE", "MONEY")
    with model.solve(timeout=0) as model_solver:
        assert list(model_solver) == []
        assert model_solver.state.state is State.INTERRUPT_TIMEOUT
        assert model_solver.state.interrupted()
