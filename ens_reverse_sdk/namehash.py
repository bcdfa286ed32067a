"""
ENS name hashing.

namehash("") is 32 zero bytes; for any other name the labels are folded
right to left: node = keccak(node + keccak(label)).
"""
from ens.utils import normalize_name
from eth_utils import is_address, keccak, to_normalized_address

EMPTY_NODE = b"\x00" * 32

REVERSE_SUFFIX = "addr.reverse"


def label_hash(label: str) -> bytes:
    """keccak256 of a single, already normalized label."""
    return keccak(text=label)


def namehash(name: str) -> bytes:
    """
    Compute the ENS namehash of a dotted name.

    Args:
        name: Name such as "addr.reverse" or "alice.eth"

    Returns:
        32-byte node identifier
    """
    if not name:
        return EMPTY_NODE

    node = EMPTY_NODE
    for label in reversed(normalize_name(name).split(".")):
        node = keccak(node + label_hash(label))
    return node


def reverse_name(address: str) -> str:
    """
    Reverse record name for an address, e.g. "<40 hex chars>.addr.reverse".

    Raises:
        ValueError: If address is not a valid Ethereum address
    """
    if not is_address(address):
        raise ValueError(f"Invalid address: {address!r}")
    return f"{to_normalized_address(address)[2:]}.{REVERSE_SUFFIX}"
