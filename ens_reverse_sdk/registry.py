"""
ENS root registry binding.
"""
import logging
from typing import Protocol

from eth_utils import to_checksum_address
from web3 import Web3

from .config import NetworkConfig
from .exceptions import ConnectivityError, ENSError, RegistryReadError, UnsupportedNetworkError
from .models import Found, NotFound, OwnerLookup

logger = logging.getLogger(__name__)

# Address returned by the registry for nodes nobody owns
UNKNOWN_ADDRESS = "0x0000000000000000000000000000000000000000"

REGISTRY_ABI = [
    {
        "inputs": [{"internalType": "bytes32", "name": "node", "type": "bytes32"}],
        "name": "owner",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [{"internalType": "bytes32", "name": "node", "type": "bytes32"}],
        "name": "resolver",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function"
    }
]


class RegistryReader(Protocol):
    """Anything that can read the owner of a registry node"""

    def owner(self, node: bytes) -> str:
        ...


class Registry:
    """Read-only handle on the ENS root registry of one network"""

    def __init__(self, address: str, w3: Web3):
        self.address = to_checksum_address(address)
        self.w3 = w3
        self.contract = w3.eth.contract(address=self.address, abi=REGISTRY_ABI)

    def owner(self, node: bytes) -> str:
        return self.contract.functions.owner(node).call()

    def resolver(self, node: bytes, block_identifier="latest") -> str:
        return self.contract.functions.resolver(node).call(block_identifier=block_identifier)


def registry_contract(w3: Web3) -> Registry:
    """
    Bind the ENS registry for the network ``w3`` is connected to.

    Raises:
        ConnectivityError: If the chain id cannot be read
        UnsupportedNetworkError: If no registry is configured for the chain
    """
    try:
        chain_id = w3.eth.chain_id
    except Exception as e:
        raise ConnectivityError(f"Failed to read chain ID: {e}") from e

    address = NetworkConfig.registry_address_for_chain_id(chain_id)
    if address is None:
        raise UnsupportedNetworkError(f"No ENS registry for chain ID {chain_id}", chain_id=chain_id)

    logger.debug(f"Using ENS registry {address} on chain {chain_id}")
    return Registry(address, w3)


def is_unknown_address(address: str) -> bool:
    return not address or int(address, 16) == 0


def lookup_owner(registry: RegistryReader, node: bytes) -> OwnerLookup:
    """
    Read the owner of ``node`` as a tagged result.

    Returns:
        Found(address) for a registered node, NotFound() for the unset address

    Raises:
        RegistryReadError: If the registry call fails
    """
    try:
        owner = registry.owner(node)
    except ENSError:
        raise
    except Exception as e:
        raise RegistryReadError(f"Failed to read registry owner: {e}") from e

    if is_unknown_address(owner):
        return NotFound()
    return Found(to_checksum_address(owner))
