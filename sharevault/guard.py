import contextlib
import functools

from sharevault.errors import Reentrancy


class ReentrancyGuard:
    """Controller-wide lock, held for the whole body of a guarded call."""

    def __init__(self):
        self.is_locked = False

    @contextlib.contextmanager
    def locked(self):
        if self.is_locked:
            raise Reentrancy("reentrant call")
        self.is_locked = True
        try:
            yield
        finally:
            self.is_locked = False


def nonreentrant(fn):
    @functools.wraps(fn)
    def wrapper(self, *args, **kwargs):
        with self.guard.locked():
            return fn(self, *args, **kwargs)

    return wrapper
