import contextlib
import copy
import time

from sharevault.addresses import address_from_label, to_address
from sharevault.errors import NotAContract, VaultError


class Env:
    """
    Serialized execution environment shared by every contract of a
    simulation. Owns the clock and the transaction journal: a top-level call
    either completes or leaves every registered contract exactly as it found
    it, with no logs recorded.
    """

    def __init__(self, timestamp=None, eoa=None):
        self.timestamp = int(time.time()) if timestamp is None else timestamp
        self.eoa = to_address(eoa) if eoa is not None else address_from_label("eoa")
        self.tx_count = 0
        self._contracts = []
        self._deploy_nonce = 0
        self._depth = 0
        self._pending_logs = []

    def generate_address(self, label):
        return address_from_label(label)

    def deploy_address(self, label):
        self._deploy_nonce += 1
        return address_from_label(f"{label}:{self._deploy_nonce}")

    def register(self, contract):
        self._contracts.append(contract)

    def contract_at(self, value):
        # contract objects pass through, addresses are looked up among registered contracts
        if not isinstance(value, str):
            return value
        address = to_address(value)
        for contract in self._contracts:
            if contract.address == address:
                return contract
        raise NotAContract("not a contract")

    def time_travel(self, seconds=0):
        if seconds < 0:
            raise ValueError("cannot travel back in time")
        self.timestamp += seconds

    @property
    def in_transaction(self):
        return self._depth > 0

    def log(self, contract, event):
        if self._depth == 0:
            contract._record([event])
            return
        self._pending_logs.append((contract, event))

    @contextlib.contextmanager
    def transaction(self):
        # nested calls (vault -> token) join the outer transaction, a failing one
        # is undone on its own like a reverted sub-call
        if self._depth > 0:
            snapshot = self._snapshot_all()
            mark = len(self._pending_logs)
            self._depth += 1
            try:
                yield
            except BaseException:
                self._restore_all(snapshot)
                del self._pending_logs[mark:]
                raise
            finally:
                self._depth -= 1
            return

        snapshot = self._snapshot_all()
        self._depth = 1
        self._pending_logs = []
        try:
            yield
        except BaseException:
            self._restore_all(snapshot)
            self._pending_logs = []
            raise
        finally:
            self._depth = 0

        pending, self._pending_logs = self._pending_logs, []
        self.tx_count += 1
        for contract in self._contracts:
            contract._record([event for c, event in pending if c is contract])

    def _snapshot_all(self):
        return [(c, c._snapshot()) for c in self._contracts]

    def _restore_all(self, snapshot):
        for contract, state in snapshot:
            contract._restore(state)


def snapshot_state(obj, names):
    return {name: copy.deepcopy(getattr(obj, name)) for name in names}


@contextlib.contextmanager
def reverts(reason=None):
    """
    Asserts that the wrapped call is rejected. `reason` may be the exact
    reason string or a `VaultError` subclass.
    """
    try:
        yield
    except VaultError as e:
        if reason is None:
            return
        if isinstance(reason, type):
            if not isinstance(e, reason):
                raise AssertionError(f"expected {reason.__name__}, got {type(e).__name__}: {e.reason}") from e
        elif e.reason != reason:
            raise AssertionError(f"expected revert reason `{reason}`, got `{e.reason}`") from e
    else:
        raise AssertionError("call did not revert")
