import collections

__all__ = [
    'DIGITS',
    'DomainChange',
    'DomainStore',
]


DIGITS = frozenset(range(10))


DomainChange = collections.namedtuple(  # pylint: disable=invalid-name
    'DomainChange',
    'changed empty')


class DomainStore:
    """Current candidate values of every variable.

       Domains are frozensets, so a snapshot is a shallow copy of the
       var_name -> domain mapping and costs O(number of variables).
    """

    def __init__(self, var_names=(), values=DIGITS):
        self._domains = collections.OrderedDict()
        self._modified = set()
        self.initialize(var_names, values)

    def initialize(self, var_names, values=DIGITS):
        values = frozenset(values)
        self._domains.clear()
        for var_name in var_names:
            self._domains[var_name] = values
        self._modified.clear()

    def set_domain(self, var_name, values):
        self._domains[var_name] = frozenset(values)

    def narrow(self, var_name, allowed_values):
        domain = self._domains[var_name]
        new_domain = domain.intersection(allowed_values)
        if len(new_domain) == len(domain):
            return DomainChange(changed=False, empty=not new_domain)
        self._domains[var_name] = new_domain
        self._modified.add(var_name)
        return DomainChange(changed=True, empty=not new_domain)

    def assign(self, var_name, value):
        return self.narrow(var_name, (value,))

    def remove(self, var_name, value):
        domain = self._domains[var_name]
        if value not in domain:
            return DomainChange(changed=False, empty=not domain)
        return self.narrow(var_name, domain.difference((value,)))

    def snapshot(self):
        return self._domains.copy()

    def restore(self, snapshot):
        self._domains = snapshot.copy()
        self._modified.clear()

    def pop_modified(self):
        modified = self._modified
        self._modified = set()
        return modified

    def var_names(self):
        return list(self._domains)

    def is_bound(self, var_name):
        return len(self._domains[var_name]) == 1

    def value(self, var_name):
        domain = self._domains[var_name]
        if len(domain) != 1:
            raise ValueError("variable {} is not bound: domain {}".format(var_name, sorted(domain)))
        return next(iter(domain))

    def unbound_var_names(self):
        return [var_name for var_name, domain in self._domains.items() if len(domain) != 1]

    def is_complete(self):
        return all(len(domain) == 1 for domain in self._domains.values())

    def is_failed(self):
        return any(not domain for domain in self._domains.values())

    def substitution(self):
        return {
            var_name: next(iter(domain))
            for var_name, domain in self._domains.items() if len(domain) == 1
        }

    def __getitem__(self, var_name):
        return self._domains[var_name]

    def __contains__(self, var_name):
        return var_name in self._domains

    def __iter__(self):
        yield from self._domains

    def __len__(self):
        return len(self._domains)

    def __repr__(self):
        return "{}({})".format(
            type(self).__name__,
            ', '.join("{}={}".format(var_name, sorted(domain)) for var_name, domain in self._domains.items()))
