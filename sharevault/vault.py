from sharevault import conversion
from sharevault.access import Ownership, PauseGate
from sharevault.addresses import to_address
from sharevault.constants import MAX_UINT256, SHARE_DECIMALS, ZERO_ADDRESS
from sharevault.contract import Contract, external
from sharevault.errors import AssetTransferFailed, CannotSweepVaultAsset, ZeroAddress, ZeroAmount
from sharevault.events import (
    Approval,
    Deposit,
    MaxAssetsUpdated,
    OwnershipTransferred,
    Paused,
    TokenSwept,
    Transfer,
    Unpaused,
    Withdraw,
)
from sharevault.guard import ReentrancyGuard, nonreentrant
from sharevault.ledger import ShareLedger, check_uint256


class ShareVault(Contract):
    """
    Single-asset vault issuing shares against a pooled balance.

    The pooled balance is never stored: `totalAssets()` asks the asset for
    the vault's own balance, so anything sent to the vault directly (yield)
    is shared by every holder at once.

    Mutating entry points follow the same order: validate, check admission,
    price from live totals, spend allowance, mutate the ledger, emit, and
    only then move the underlying asset.
    """

    _journaled = ("ledger", "gate", "ownership", "_maxTotalAssets")

    def __init__(self, env, asset, name, symbol, owner=None, maxTotalAssets=MAX_UINT256, label=None):
        if asset is None or to_address(asset) == ZERO_ADDRESS:
            raise ZeroAddress("invalid asset")
        asset = env.contract_at(asset)
        super().__init__(env, label or symbol.lower())
        self._asset = asset
        self._name = name
        self._symbol = symbol
        self._maxTotalAssets = check_uint256(maxTotalAssets)
        self.ledger = ShareLedger()
        self.gate = PauseGate()
        self.ownership = Ownership(env.eoa if owner is None else owner)
        self.guard = ReentrancyGuard()

    #########
    # Views #
    #########

    def asset(self):
        return self._asset.address

    def name(self):
        return self._name

    def symbol(self):
        return self._symbol

    def decimals(self):
        return SHARE_DECIMALS

    def owner(self):
        return self.ownership.owner

    def isPaused(self):
        return self.gate.is_paused

    def maxTotalAssets(self):
        return self._maxTotalAssets

    def totalSupply(self):
        return self.ledger.total_shares

    def totalAssets(self):
        return self._asset.balanceOf(self.address)

    def balanceOf(self, account):
        return self.ledger.balance_of(to_address(account))

    def allowance(self, owner, spender):
        return self.ledger.allowance(to_address(owner), to_address(spender))

    # conversions

    def convertToShares(self, assets):
        return conversion.convert_to_shares(assets, self.totalSupply(), self.totalAssets())

    def convertToAssets(self, shares):
        return conversion.convert_to_assets(shares, self.totalSupply(), self.totalAssets())

    def previewDeposit(self, assets):
        return conversion.preview_deposit(assets, self.totalSupply(), self.totalAssets())

    def previewMint(self, shares):
        return conversion.preview_mint(shares, self.totalSupply(), self.totalAssets())

    def previewWithdraw(self, assets):
        return conversion.preview_withdraw(assets, self.totalSupply(), self.totalAssets())

    def previewRedeem(self, shares):
        return conversion.preview_redeem(shares, self.totalSupply(), self.totalAssets())

    # limits

    def maxDeposit(self, receiver):
        # the asset cap is advisory, only the pause gate limits entry
        return 0 if self.gate.is_paused else MAX_UINT256

    def maxMint(self, receiver):
        return 0 if self.gate.is_paused else MAX_UINT256

    def maxWithdraw(self, owner):
        return self.previewRedeem(self.balanceOf(owner))

    def maxRedeem(self, owner):
        return self.balanceOf(owner)

    ###########
    # Erc4626 #
    ###########

    @external
    @nonreentrant
    def deposit(self, assets, receiver, *, sender):
        receiver = self._check_recipient(receiver)
        if check_uint256(assets) == 0:
            raise ZeroAmount("cannot deposit 0 amount")
        self.gate.check_active()

        shares = self.previewDeposit(assets)
        if shares == 0:
            raise ZeroAmount("cannot mint 0 shares")

        self._issue(sender, receiver, assets, shares)
        return shares

    @external
    @nonreentrant
    def mint(self, shares, receiver, *, sender):
        receiver = self._check_recipient(receiver)
        if check_uint256(shares) == 0:
            raise ZeroAmount("cannot mint 0 shares")
        self.gate.check_active()

        assets = self.previewMint(shares)
        if assets == 0:
            raise ZeroAmount("cannot deposit 0 amount")

        self._issue(sender, receiver, assets, shares)
        return assets

    @external
    @nonreentrant
    def withdraw(self, assets, receiver, owner, *, sender):
        receiver = self._check_recipient(receiver)
        owner = self._check_owner(owner)
        if check_uint256(assets) == 0:
            raise ZeroAmount("cannot withdraw 0 amount")

        shares = self.previewWithdraw(assets)
        self._retire(sender, receiver, owner, assets, shares)
        return shares

    @external
    @nonreentrant
    def redeem(self, shares, receiver, owner, *, sender):
        receiver = self._check_recipient(receiver)
        owner = self._check_owner(owner)
        if check_uint256(shares) == 0:
            raise ZeroAmount("cannot withdraw 0 amount")

        assets = self.previewRedeem(shares)
        if assets == 0:
            raise ZeroAmount("cannot withdraw 0 assets")

        self._retire(sender, receiver, owner, assets, shares)
        return assets

    def _issue(self, caller, receiver, assets, shares):
        self.ledger.credit_shares(receiver, shares)
        self._emit(Transfer(ZERO_ADDRESS, receiver, shares))
        self._emit(Deposit(caller, receiver, assets, shares))

        # external interaction last
        if not self._asset.transferFrom(caller, self.address, assets, sender=self.address):
            raise AssetTransferFailed("asset transfer failed")

    def _retire(self, caller, receiver, owner, assets, shares):
        if caller != owner:
            self.ledger.consume_allowance(owner, caller, shares)
        self.ledger.debit_shares(owner, shares)
        self._emit(Transfer(owner, ZERO_ADDRESS, shares))
        self._emit(Withdraw(caller, receiver, owner, assets, shares))

        # external interaction last
        if not self._asset.transfer(receiver, assets, sender=self.address):
            raise AssetTransferFailed("asset transfer failed")

    #########
    # Erc20 #
    #########

    @external
    @nonreentrant
    def transfer(self, recipient, amount, *, sender):
        recipient = self._check_recipient(recipient)
        if check_uint256(amount) == 0:
            raise ZeroAmount("cannot transfer 0 amount")

        self.ledger.transfer_shares(sender, recipient, amount)
        self._emit(Transfer(sender, recipient, amount))
        return True

    @external
    @nonreentrant
    def transferFrom(self, owner, recipient, amount, *, sender):
        owner = self._check_owner(owner)
        recipient = self._check_recipient(recipient)
        if check_uint256(amount) == 0:
            raise ZeroAmount("cannot transfer 0 amount")

        self.ledger.consume_allowance(owner, sender, amount)
        self.ledger.transfer_shares(owner, recipient, amount)
        self._emit(Transfer(owner, recipient, amount))
        return True

    @external
    def approve(self, spender, amount, *, sender):
        spender = self._check_spender(spender)
        self.ledger.set_allowance(sender, spender, amount)
        self._emit(Approval(sender, spender, amount))
        return True

    @external
    def increaseAllowance(self, spender, amount, *, sender):
        spender = self._check_spender(spender)
        check_uint256(amount)
        new_amount = min(self.ledger.allowance(sender, spender) + amount, MAX_UINT256)
        self.ledger.set_allowance(sender, spender, new_amount)
        self._emit(Approval(sender, spender, new_amount))
        return True

    @external
    def decreaseAllowance(self, spender, amount, *, sender):
        spender = self._check_spender(spender)
        check_uint256(amount)
        new_amount = max(self.ledger.allowance(sender, spender) - amount, 0)
        self.ledger.set_allowance(sender, spender, new_amount)
        self._emit(Approval(sender, spender, new_amount))
        return True

    #########
    # Admin #
    #########

    @external
    def pause(self, *, sender):
        self.ownership.check(sender)
        self.gate.pause()
        self._emit(Paused(sender, self.env.timestamp))
        return True

    @external
    def unpause(self, *, sender):
        self.ownership.check(sender)
        self.gate.unpause()
        self._emit(Unpaused(sender, self.env.timestamp))
        return True

    @external
    def setMaxTotalAssets(self, maxTotalAssets, *, sender):
        self.ownership.check(sender)
        prev_max, self._maxTotalAssets = self._maxTotalAssets, check_uint256(maxTotalAssets)
        self._emit(MaxAssetsUpdated(prev_max, maxTotalAssets, self.env.timestamp))
        return True

    @external
    @nonreentrant
    def sweep(self, token, recipient, *, sender):
        """
        Sends the vault's entire balance of a stray `token` (contract or
        address) to `recipient`. The underlying asset can never be swept.
        """
        self.ownership.check(sender)
        if to_address(token) == self.asset():
            raise CannotSweepVaultAsset("cannot sweep vault asset")
        token = self.env.contract_at(token)
        recipient = to_address(recipient)
        if recipient == ZERO_ADDRESS:
            raise ZeroAddress("invalid recipient")

        amount = token.balanceOf(self.address)
        if amount == 0:
            raise ZeroAmount("nothing to sweep")

        self._emit(TokenSwept(token.address, recipient, amount, self.env.timestamp))
        if not token.transfer(recipient, amount, sender=self.address):
            raise AssetTransferFailed("token transfer failed")
        return amount

    @external
    def transferOwnership(self, newOwner, *, sender):
        self.ownership.check(sender)
        prev_owner = self.ownership.transfer(newOwner)
        self._emit(OwnershipTransferred(prev_owner, self.ownership.owner))
        return True

    # validation

    def _check_recipient(self, recipient):
        recipient = to_address(recipient)
        if recipient in (ZERO_ADDRESS, self.address):
            raise ZeroAddress("invalid recipient")
        return recipient

    def _check_owner(self, owner):
        owner = to_address(owner)
        if owner == ZERO_ADDRESS:
            raise ZeroAddress("invalid owner")
        return owner

    def _check_spender(self, spender):
        spender = to_address(spender)
        if spender == ZERO_ADDRESS:
            raise ZeroAddress("invalid spender")
        return spender
