from sharevault.addresses import to_address
from sharevault.constants import MAX_UINT256, ZERO_ADDRESS
from sharevault.contract import Contract, external
from sharevault.errors import (
    AmountOutOfRange,
    InsufficientAllowance,
    InsufficientFunds,
    NotOwner,
    ZeroAddress,
    ZeroAmount,
)
from sharevault.events import Approval, Transfer
from sharevault.ledger import check_uint256


class MockErc20(Contract):
    """
    In-memory fungible token used as the vault's underlying asset (and as
    stray tokens to sweep). Only `minter` can create supply.
    """

    _journaled = ("_balances", "_allowances", "_totalSupply")

    def __init__(self, env, minter, name, symbol, decimals=18, label=None):
        super().__init__(env, label or symbol.lower())
        self.minter = to_address(minter)
        self._name = name
        self._symbol = symbol
        self._decimals = decimals
        self._balances = {}
        self._allowances = {}
        self._totalSupply = 0

    def name(self):
        return self._name

    def symbol(self):
        return self._symbol

    def decimals(self):
        return self._decimals

    def totalSupply(self):
        return self._totalSupply

    def balanceOf(self, account):
        return self._balances.get(to_address(account), 0)

    def allowance(self, owner, spender):
        return self._allowances.get((to_address(owner), to_address(spender)), 0)

    @external
    def transfer(self, recipient, amount, *, sender):
        self._transfer(sender, to_address(recipient), amount)
        return True

    @external
    def transferFrom(self, owner, recipient, amount, *, sender):
        owner = to_address(owner)
        allowance = self.allowance(owner, sender)
        if allowance != MAX_UINT256:
            if amount > allowance:
                raise InsufficientAllowance("insufficient allowance")
            self._allowances[(owner, sender)] = allowance - amount
        self._transfer(owner, to_address(recipient), amount)
        return True

    @external
    def approve(self, spender, amount, *, sender):
        spender = to_address(spender)
        if spender == ZERO_ADDRESS:
            raise ZeroAddress("invalid spender")
        self._allowances[(sender, spender)] = check_uint256(amount)
        self._emit(Approval(sender, spender, amount))
        return True

    @external
    def mint(self, recipient, amount, *, sender):
        if sender != self.minter:
            raise NotOwner("no perms")
        recipient = to_address(recipient)
        if recipient == ZERO_ADDRESS:
            raise ZeroAddress("invalid recipient")
        check_uint256(amount)
        if self._totalSupply + amount > MAX_UINT256:
            raise AmountOutOfRange("supply overflow")
        self._balances[recipient] = self.balanceOf(recipient) + amount
        self._totalSupply += amount
        self._emit(Transfer(ZERO_ADDRESS, recipient, amount))
        return True

    @external
    def burn(self, amount, *, sender):
        balance = self.balanceOf(sender)
        if amount > balance:
            raise InsufficientFunds("insufficient funds")
        self._balances[sender] = balance - amount
        self._totalSupply -= amount
        self._emit(Transfer(sender, ZERO_ADDRESS, amount))
        return True

    def _transfer(self, owner, recipient, amount):
        if recipient in (ZERO_ADDRESS, self.address):
            raise ZeroAddress("invalid recipient")
        if check_uint256(amount) == 0:
            raise ZeroAmount("cannot transfer 0 amount")
        balance = self.balanceOf(owner)
        if amount > balance:
            raise InsufficientFunds("insufficient funds")
        self._balances[owner] = balance - amount
        self._balances[recipient] = self.balanceOf(recipient) + amount
        self._emit(Transfer(owner, recipient, amount))
