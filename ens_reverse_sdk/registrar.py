"""
Reverse registrar binding, locator and name setter.
"""
import logging
from typing import Callable, Optional, TYPE_CHECKING

from eth_utils import is_address, to_checksum_address
from web3 import Web3

from .exceptions import ENSError, RegistrarNotFoundError, RegistryReadError
from .models import NotFound, TransactionHandle
from .namehash import REVERSE_SUFFIX, namehash, reverse_name
from .network import DEFAULT_CONNECT_TIMEOUT, check_connectivity
from .registry import Registry, RegistryReader, is_unknown_address, lookup_owner, registry_contract

# Avoid circular imports with TYPE_CHECKING
if TYPE_CHECKING:
    from .session import ReverseRegistrarSession

logger = logging.getLogger(__name__)

REVERSE_REGISTRAR_ABI = [
    {
        "inputs": [{"internalType": "string", "name": "name", "type": "string"}],
        "name": "setName",
        "outputs": [{"internalType": "bytes32", "name": "", "type": "bytes32"}],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {
        "inputs": [{"internalType": "address", "name": "addr", "type": "address"}],
        "name": "node",
        "outputs": [{"internalType": "bytes32", "name": "", "type": "bytes32"}],
        "stateMutability": "pure",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "defaultResolver",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function"
    }
]

NAME_RESOLVER_ABI = [
    {
        "inputs": [{"internalType": "bytes32", "name": "node", "type": "bytes32"}],
        "name": "name",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function"
    }
]

RegistryResolver = Callable[[Web3], RegistryReader]


class ReverseRegistrar:
    """Handle on a deployed reverse registrar contract"""

    def __init__(self, address: str, w3: Web3):
        if not is_address(address):
            raise ValueError(f"Invalid registrar address: {address!r}")
        self.address = to_checksum_address(address)
        self.w3 = w3
        self.contract = w3.eth.contract(address=self.address, abi=REVERSE_REGISTRAR_ABI)

    def __repr__(self) -> str:
        return f"ReverseRegistrar({self.address})"

    def set_name_function(self, name: str):
        """Contract function that sets ``name`` for the transaction sender"""
        return self.contract.functions.setName(name)

    def node(self, address: str, block_identifier="latest") -> bytes:
        """Reverse node the registrar assigns to ``address``"""
        return self.contract.functions.node(to_checksum_address(address)).call(
            block_identifier=block_identifier
        )

    def default_resolver(self, block_identifier="latest") -> str:
        return self.contract.functions.defaultResolver().call(block_identifier=block_identifier)

    def name_of(
        self,
        address: str,
        registry: Optional[Registry] = None,
        block_identifier="latest"
    ) -> Optional[str]:
        """
        Currently set reverse name of ``address``.

        Returns:
            The name, or None when no resolver or no name is set

        Raises:
            RegistryReadError: If the registry or resolver read fails
        """
        node = namehash(reverse_name(address))
        if registry is None:
            registry = registry_contract(self.w3)

        try:
            resolver_address = registry.resolver(node, block_identifier=block_identifier)
            if is_unknown_address(resolver_address):
                return None
            resolver = self.w3.eth.contract(
                address=to_checksum_address(resolver_address),
                abi=NAME_RESOLVER_ABI
            )
            name = resolver.functions.name(node).call(block_identifier=block_identifier)
        except ENSError:
            raise
        except Exception as e:
            raise RegistryReadError(f"Failed to read reverse name for {address}: {e}") from e

        return name or None


def locate_registrar(
    w3: Web3,
    registry_resolver: RegistryResolver = registry_contract,
    timeout: float = DEFAULT_CONNECT_TIMEOUT
) -> ReverseRegistrar:
    """
    Find and bind the reverse registrar for the network ``w3`` is connected to.

    The registrar is the owner of ``addr.reverse`` in the ENS registry.

    Args:
        w3: Connected Web3 instance
        registry_resolver: Callable returning the registry handle for ``w3``
        timeout: Bound on the initial chain ID request, in seconds

    Returns:
        ReverseRegistrar bound to the registrar address

    Raises:
        ConnectivityError: If the node is unreachable or times out
        UnsupportedNetworkError: If no registry is known for the chain
        RegistryReadError: If the registry read fails
        RegistrarNotFoundError: If ``addr.reverse`` has no owner
    """
    check_connectivity(w3, timeout)

    try:
        registry = registry_resolver(w3)
    except ENSError:
        raise
    except Exception as e:
        raise RegistryReadError(f"Failed to obtain ENS registry: {e}") from e

    lookup = lookup_owner(registry, namehash(REVERSE_SUFFIX))
    if isinstance(lookup, NotFound):
        raise RegistrarNotFoundError("no registrar for that network")

    logger.debug(f"Reverse registrar located at {lookup.address}")
    return ReverseRegistrar(lookup.address, w3)


def set_name(session: "ReverseRegistrarSession", name: str) -> TransactionHandle:
    """
    Set the reverse name of the session's sending account.

    Each call submits a new transaction.

    Raises:
        SigningError: If the session's signer cannot sign
        SubmissionError: If the node rejects the transaction
    """
    return session.set_name(name)
