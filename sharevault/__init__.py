from sharevault.constants import EIGHTEEN_DECIMALS, MAX_UINT256, SHARE_DECIMALS, ZERO_ADDRESS
from sharevault.env import Env, reverts
from sharevault.token import MockErc20
from sharevault.vault import ShareVault

__all__ = [
    "EIGHTEEN_DECIMALS",
    "MAX_UINT256",
    "SHARE_DECIMALS",
    "ZERO_ADDRESS",
    "Env",
    "MockErc20",
    "ShareVault",
    "reverts",
]
