class VaultError(Exception):
    """
    Base error for every rejected call. `reason` is the short message a
    caller (or `env.reverts`) matches on.
    """

    default_reason = "vault error"

    def __init__(self, reason=None):
        self.reason = reason or self.default_reason
        super().__init__(self.reason)


class ZeroAmount(VaultError):
    default_reason = "cannot use 0 amount"


class ZeroAddress(VaultError):
    default_reason = "invalid addrs"


class InsufficientShares(VaultError):
    default_reason = "insufficient shares"


class InsufficientAllowance(VaultError):
    default_reason = "insufficient allowance"


class InsufficientFunds(VaultError):
    default_reason = "insufficient funds"


class CannotSweepVaultAsset(VaultError):
    default_reason = "cannot sweep vault asset"


class NotOwner(VaultError):
    default_reason = "no perms"


class Paused(VaultError):
    default_reason = "paused"


class NotPaused(VaultError):
    default_reason = "not paused"


class Reentrancy(VaultError):
    default_reason = "reentrant call"


class AmountOutOfRange(VaultError):
    default_reason = "amount out of range"


class NoBackingAssets(VaultError):
    default_reason = "no backing assets"


class AssetTransferFailed(VaultError):
    default_reason = "asset transfer failed"


class NotAContract(VaultError):
    default_reason = "not a contract"
