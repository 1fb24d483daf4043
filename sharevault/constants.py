ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
EIGHTEEN_DECIMALS = 10 ** 18
MAX_UINT256 = 2 ** 256 - 1

# shares are normalized to 18 decimals regardless of the asset's own precision
SHARE_DECIMALS = 18
