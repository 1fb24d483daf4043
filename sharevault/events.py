from dataclasses import dataclass, fields


@dataclass(frozen=True)
class Event:

    @property
    def name(self):
        return type(self).__name__

    def to_dict(self):
        return {"event": self.name, **{f.name: getattr(self, f.name) for f in fields(self)}}


# erc20


@dataclass(frozen=True)
class Transfer(Event):
    sender: str
    recipient: str
    amount: int


@dataclass(frozen=True)
class Approval(Event):
    owner: str
    spender: str
    amount: int


# erc4626


@dataclass(frozen=True)
class Deposit(Event):
    sender: str
    owner: str
    assets: int
    shares: int


@dataclass(frozen=True)
class Withdraw(Event):
    sender: str
    receiver: str
    owner: str
    assets: int
    shares: int


# admin


@dataclass(frozen=True)
class Paused(Event):
    caller: str
    timestamp: int


@dataclass(frozen=True)
class Unpaused(Event):
    caller: str
    timestamp: int


@dataclass(frozen=True)
class TokenSwept(Event):
    token: str
    recipient: str
    amount: int
    timestamp: int


@dataclass(frozen=True)
class MaxAssetsUpdated(Event):
    prevMaxAssets: int
    newMaxAssets: int
    timestamp: int


@dataclass(frozen=True)
class OwnershipTransferred(Event):
    prevOwner: str
    newOwner: str
