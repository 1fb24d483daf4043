"""
Share <-> asset exchange math.

Every function is pure in `(total_shares, total_assets)`, both read by the
caller from live state. Rounding always goes against the caller:

    preview_deposit   assets -> shares   down
    preview_mint      shares -> assets   up
    preview_withdraw  assets -> shares   up
    preview_redeem    shares -> assets   down

An empty pool (`total_shares == 0`) converts 1:1.
"""

from sharevault.constants import MAX_UINT256
from sharevault.errors import AmountOutOfRange, NoBackingAssets
from sharevault.ledger import check_uint256


def mul_div_down(x, y, denominator):
    check_uint256(x)
    check_uint256(y)
    if denominator == 0:
        raise ZeroDivisionError("mul_div by zero")
    # python ints keep the full 512-bit product, only the result must fit
    return _result(x * y // denominator)


def mul_div_up(x, y, denominator):
    check_uint256(x)
    check_uint256(y)
    if denominator == 0:
        raise ZeroDivisionError("mul_div by zero")
    return _result(-(-(x * y) // denominator))


def _result(value):
    if value > MAX_UINT256:
        raise AmountOutOfRange("amount out of range")
    return value


def _assets_to_shares(assets, total_shares, total_assets, round_up):
    if total_shares == 0:
        return check_uint256(assets)
    if total_assets == 0:
        # shares outstanding with nothing behind them
        raise NoBackingAssets("no backing assets")
    if round_up:
        return mul_div_up(assets, total_shares, total_assets)
    return mul_div_down(assets, total_shares, total_assets)


def _shares_to_assets(shares, total_shares, total_assets, round_up):
    if total_shares == 0:
        return check_uint256(shares)
    if round_up:
        return mul_div_up(shares, total_assets, total_shares)
    return mul_div_down(shares, total_assets, total_shares)


def preview_deposit(assets, total_shares, total_assets):
    return _assets_to_shares(assets, total_shares, total_assets, round_up=False)


def preview_mint(shares, total_shares, total_assets):
    return _shares_to_assets(shares, total_shares, total_assets, round_up=True)


def preview_withdraw(assets, total_shares, total_assets):
    return _assets_to_shares(assets, total_shares, total_assets, round_up=True)


def preview_redeem(shares, total_shares, total_assets):
    return _shares_to_assets(shares, total_shares, total_assets, round_up=False)


def convert_to_shares(assets, total_shares, total_assets):
    # informational view, never raises on a drained pool
    if total_shares > 0 and total_assets == 0:
        return 0
    return preview_deposit(assets, total_shares, total_assets)


def convert_to_assets(shares, total_shares, total_assets):
    return preview_redeem(shares, total_shares, total_assets)
