from sharevault.addresses import to_address
from sharevault.constants import ZERO_ADDRESS
from sharevault.errors import NotOwner, NotPaused, Paused, ZeroAddress


class Ownership:
    """Single owner capability."""

    def __init__(self, owner):
        owner = to_address(owner)
        if owner == ZERO_ADDRESS:
            raise ZeroAddress("invalid owner")
        self.owner = owner

    def is_owner(self, caller):
        return to_address(caller) == self.owner

    def check(self, caller):
        if not self.is_owner(caller):
            raise NotOwner("no perms")

    def transfer(self, new_owner):
        new_owner = to_address(new_owner)
        if new_owner == ZERO_ADDRESS:
            raise ZeroAddress("invalid new owner")
        prev_owner, self.owner = self.owner, new_owner
        return prev_owner


class PauseGate:
    """Admission gate for new capital. Exits never consult it."""

    def __init__(self, is_paused=False):
        self.is_paused = is_paused

    def check_active(self):
        if self.is_paused:
            raise Paused("paused")

    def pause(self):
        self.check_active()
        self.is_paused = True

    def unpause(self):
        if not self.is_paused:
            raise NotPaused("not paused")
        self.is_paused = False
