import abc
import collections
import contextlib
import enum
import itertools
import logging

from .domain import DomainStore
from .propagator import AllDifferentFiltering, Consistency, Propagator
from .utils import Timer, unlimited


__all__ = [
    'SelectVar',
    'SelectValue',
    'Solver',
    'State',
    'SolverState',
    'ModelSolver',
]

LOG = logging.getLogger(__name__)


Choice = collections.namedtuple(  # pylint: disable=invalid-name
    'Choice',
    'var_name snapshot values')


class SelectNamespace:
    def __init__(self):
        self.__names = []

    def __entries__(self):
        yield from self.__names

    def __register__(self, name, *aliases):
        def register_decorator(cls):
            for key in itertools.chain([name], aliases):
                if key in self.__names:
                    raise ValueError("{}: redefined {}".format(type(self).__name__, key))
                self.__dict__[key] = cls(key)
                self.__names.append(key)
            return cls
        return register_decorator

    def __lookup__(self, name):
        if name not in self.__names:
            raise ValueError("{}: unknown selector {!r}".format(type(self).__name__, name))
        return self.__dict__[name]


class SelectVarNamespace(SelectNamespace):
    pass


class SelectValueNamespace(SelectNamespace):
    pass


SelectVar = SelectVarNamespace()
SelectValue = SelectValueNamespace()


class Selector(abc.ABC):
    def __init__(self, name):
        self._name = name

    @property
    def name(self):
        return self._name


class ValueSelector(Selector):
    @abc.abstractmethod
    def order(self, domain):
        raise NotImplementedError()

    def __call__(self, var_name, domain):
        # values are popped from the end
        values = self.order(domain)
        values.reverse()
        return values

    def __repr__(self):
        return 'SelectValue.{}'.format(self.name)


@SelectValue.__register__('min_value', 'in_order')
class MinValueSelector(ValueSelector):
    def order(self, domain):
        return sorted(domain)


@SelectValue.__register__('max_value')
class MaxValueSelector(ValueSelector):
    def order(self, domain):
        return sorted(domain, reverse=True)


class VarSelector(Selector):
    @abc.abstractmethod
    def select_var(self, store, unbound_var_names):
        raise NotImplementedError()

    def __call__(self, store):
        unbound_var_names = store.unbound_var_names()
        if not unbound_var_names:
            return None
        return self.select_var(store, unbound_var_names)

    def __repr__(self):
        return 'SelectVar.{}'.format(self.name)


@SelectVar.__register__('min_domain')
class MinDomainVarSelector(VarSelector):
    def select_var(self, store, unbound_var_names):
        # min() keeps the first of equal keys: ties go to declaration order
        return min(unbound_var_names, key=lambda v: len(store[v]))


@SelectVar.__register__('in_order')
class InOrderVarSelector(VarSelector):
    def select_var(self, store, unbound_var_names):
        return unbound_var_names[0]


class Solver:
    def __init__(self,
                 select_var=SelectVar.min_domain,
                 select_value=SelectValue.min_value,
                 all_different=AllDifferentFiltering.forward_checking,
                 timeout=None,
                 node_limit=None):
        self._select_var = None
        self.select_var = select_var
        self._select_value = None
        self.select_value = select_value
        self._all_different = None
        self.all_different = all_different
        self._timeout = None
        self.timeout = timeout
        self._node_limit = None
        self.node_limit = node_limit

    @property
    def select_var(self):
        return self._select_var

    @select_var.setter
    def select_var(self, value):
        if isinstance(value, str):
            value = SelectVar.__lookup__(value)
        if not isinstance(value, VarSelector):
            raise TypeError("{!r} is not a VarSelector".format(value))
        self._select_var = value

    @property
    def select_value(self):
        return self._select_value

    @select_value.setter
    def select_value(self, value):
        if isinstance(value, str):
            value = SelectValue.__lookup__(value)
        if not isinstance(value, ValueSelector):
            raise TypeError("{!r} is not a ValueSelector".format(value))
        self._select_value = value

    @property
    def all_different(self):
        return self._all_different

    @all_different.setter
    def all_different(self, value):
        if isinstance(value, str):
            try:
                value = AllDifferentFiltering[value]
            except KeyError:
                raise ValueError("unknown all_different filtering {!r}".format(value)) from None
        if not isinstance(value, AllDifferentFiltering):
            raise TypeError(value)
        self._all_different = value

    @property
    def timeout(self):
        return self._timeout

    @timeout.setter
    def timeout(self, value):
        if unlimited(value):
            value = None
        elif value < 0:
            raise ValueError("negative timeout {!r}".format(value))
        self._timeout = value

    @property
    def node_limit(self):
        return self._node_limit

    @node_limit.setter
    def node_limit(self, value):
        if unlimited(value):
            value = None
        else:
            value = int(value)
            if value < 0:
                raise ValueError("negative node limit {!r}".format(value))
        self._node_limit = value

    @contextlib.contextmanager
    def __call__(self, model):
        yield ModelSolver(model, self)

    def __repr__(self):
        return "{}(select_var={!r}, select_value={!r}, all_different={}, timeout={!r}, node_limit={!r})".format(
            type(self).__name__, self._select_var, self._select_value, self._all_different.name,
            self._timeout, self._node_limit)


class State(enum.Enum):
    RUNNING = 0
    DONE = 1
    INTERRUPT_TIMEOUT = 2
    INTERRUPT_LIMIT = 3


class SolverState:
    def __init__(self):
        self._timer = Timer()
        self._trials_count = 0
        self._backtracks_count = 0
        self._solutions_count = 0
        self._state = State.RUNNING
        self.stats = self._timer.stats

    @property
    def state(self):
        return self._state

    @state.setter
    def state(self, value):
        if not isinstance(value, State):
            raise TypeError(value)
        self._state = value

    @property
    def timer(self):
        return self._timer

    @property
    def trials_count(self):
        return self._trials_count

    @property
    def backtracks_count(self):
        return self._backtracks_count

    @property
    def solutions_count(self):
        return self._solutions_count

    def add_try(self):
        self._trials_count += 1

    def add_backtrack(self):
        self._backtracks_count += 1

    def add_solution(self):
        self._solutions_count += 1

    def interrupted(self):
        return self._state in {State.INTERRUPT_TIMEOUT, State.INTERRUPT_LIMIT}


class ModelSolver:
    """Depth-first search over the domains of a model.

       Iterating yields the solutions found in order; callers interested
       in the first solution only stop after the first item, and the search
       stops with them.
    """

    def __init__(self, model, solver):
        self._model = model
        self._solver = solver
        self._state = SolverState()

        self._store = DomainStore()
        for var_name, var_info in model.variables().items():
            self._store.set_domain(var_name, var_info.domain)
        self._propagator = Propagator(model.constraints(), all_different=solver.all_different)
        LOG.debug("model: %d variables, %d constraints, solver %r",
                  len(self._store), len(self._propagator.constraints), solver)

    @property
    def model(self):
        return self._model

    @property
    def solver(self):
        return self._solver

    @property
    def state(self):
        return self._state

    @property
    def stats(self):
        return self._state.stats

    @property
    def store(self):
        return self._store

    def _found(self, store):
        solution = store.substitution()
        for constraint in self._model.constraints():
            if constraint.unsatisfied(solution):
                raise RuntimeError("constraint {} is not satisfied by {}".format(constraint, solution))
        self._state.add_solution()
        LOG.debug("solution %d found after %d trials: %s",
                  self._state.solutions_count, self._state.trials_count, solution)
        return solution

    def __iter__(self):
        model = self._model
        solver = self._solver
        select_var = solver.select_var
        select_value = solver.select_value
        timeout = solver.timeout
        node_limit = solver.node_limit
        state = self._state
        timer = state.timer
        store = self._store
        propagate = self._propagator

        timer.start()
        if not model.solvable() or propagate(store, initial=True) is Consistency.INCONSISTENT:
            LOG.debug("initial propagation: model is inconsistent")
            state.state = State.DONE
            timer.abort()
            return

        var_name = select_var(store)
        if var_name is None:
            timer.stop()
            yield self._found(store)
            state.state = State.DONE
            return

        stack = [Choice(var_name, store.snapshot(), select_value(var_name, store[var_name]))]
        while stack:
            if timer.expired(timeout):
                LOG.debug("timeout %s reached after %d trials", timeout, state.trials_count)
                state.state = State.INTERRUPT_TIMEOUT
                timer.abort()
                return

            choice = stack[-1]
            if not choice.values:
                stack.pop(-1)
                state.add_backtrack()
                continue

            if node_limit is not None and state.trials_count >= node_limit:
                LOG.debug("node limit %d reached", node_limit)
                state.state = State.INTERRUPT_LIMIT
                timer.abort()
                return

            value = choice.values.pop(-1)
            store.restore(choice.snapshot)
            store.assign(choice.var_name, value)
            state.add_try()
            if propagate(store) is Consistency.INCONSISTENT:
                continue

            next_var_name = select_var(store)
            if next_var_name is None:
                timer.stop()
                yield self._found(store)
                timer.start()
                continue
            stack.append(Choice(next_var_name, store.snapshot(), select_value(next_var_name, store[next_var_name])))

        state.state = State.DONE
        timer.abort()
