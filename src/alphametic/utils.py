import time

__all__ = [
    'INFINITY',
    'Infinity',
    'Timer',
    'Stats',
    'unlimited',
]


class _Singleton(object):
    __instance__ = None

    def __new__(cls):
        if cls.__instance__ is None:
            instance = super().__new__(cls)
            cls.__instance__ = instance
        return cls.__instance__

    def name(self):
        return type(self).__name__

    def __repr__(self):
        return "{}()".format(self.name())

    def __str__(self):
        return self.name()


class Infinity(_Singleton):
    __instance__ = None


INFINITY = Infinity()


def unlimited(value):
    """True if 'value' does not set a budget (None or INFINITY)."""
    return value is None or value is INFINITY


class Stats:
    def __init__(self, count=0, elapsed=0.0):
        self.count = count
        self.elapsed = elapsed

    def __repr__(self):
        return "{}(count={!r}, elapsed={!r})".format(type(self).__name__, self.count, self.elapsed)


class Timer(object):
    """Accumulates the time spent between start() and stop() calls.

       The search yields its solutions from a generator; the timer is
       stopped while the consumer holds a solution, so that only the
       time spent searching is accounted.
    """

    def __init__(self):
        self._t_start = None
        self.stats = Stats(count=0, elapsed=0.0)

    def running(self):
        return self._t_start is not None

    def start(self):
        if self.running():
            raise RuntimeError("already started")
        self._t_start = time.monotonic()

    def stop(self, *, count=1):
        if not self.running():
            raise RuntimeError("not started")
        t_elapsed = time.monotonic() - self._t_start
        self.stats.count += count
        self.stats.elapsed += t_elapsed
        self._t_start = None
        return t_elapsed

    def abort(self):
        if self.running():
            self.stop(count=0)

    def elapsed(self):
        if self.running():
            return self.stats.elapsed + (time.monotonic() - self._t_start)
        else:
            return self.stats.elapsed

    def expired(self, timeout):
        if unlimited(timeout):
            return False
        return self.elapsed() > timeout
