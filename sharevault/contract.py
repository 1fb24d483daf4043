import functools

from sharevault.addresses import to_address
from sharevault.env import snapshot_state


class Contract:
    """
    Stateful participant of an `Env`. Subclasses list the attributes that make
    up their storage in `_journaled`; those are restored when a transaction
    fails.
    """

    _journaled = ()

    def __init__(self, env, label=None):
        self.env = env
        self.label = label or type(self).__name__
        self.address = env.deploy_address(self.label)
        self.events = []
        self._last_logs = []
        env.register(self)

    def __repr__(self):
        return f"<{type(self).__name__} {self.label} at {self.address}>"

    def get_logs(self):
        # logs emitted by this contract during the latest transaction
        return list(self._last_logs)

    def _emit(self, event):
        self.env.log(self, event)

    def _record(self, events):
        self._last_logs = list(events)
        self.events.extend(events)

    def _snapshot(self):
        return snapshot_state(self, self._journaled)

    def _restore(self, state):
        for name, value in state.items():
            setattr(self, name, value)


def external(fn):
    """
    Entry point callable by any identity. `sender` is the caller's address
    (defaults to the environment's EOA) and the body runs inside an
    environment transaction.
    """

    @functools.wraps(fn)
    def wrapper(self, *args, sender=None, **kwargs):
        sender = self.env.eoa if sender is None else to_address(sender)
        with self.env.transaction():
            return fn(self, *args, sender=sender, **kwargs)

    return wrapper
