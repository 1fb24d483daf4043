from eth_utils import is_address, keccak, to_checksum_address

from sharevault.constants import ZERO_ADDRESS
from sharevault.errors import ZeroAddress


def to_address(value):
    # contracts and eth_account accounts both expose `.address`
    if hasattr(value, "address"):
        value = value.address
    if not isinstance(value, str) or not is_address(value):
        raise ZeroAddress("invalid addrs")
    return to_checksum_address(value)


def is_zero(value):
    return to_address(value) == ZERO_ADDRESS


def address_from_label(label):
    """Deterministic address for a human readable label (`bob`, `whale`...)."""
    return to_checksum_address(keccak(text=label)[-20:])
