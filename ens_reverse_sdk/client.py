"""
ReverseRegistrarClient - convenience facade over the reverse registrar helpers.
"""
import logging
import urllib.parse
from typing import Optional

from web3 import Web3

from .config import NetworkConfig
from .exceptions import ConnectivityError
from .models import TransactionHandle
from .network import DEFAULT_CONNECT_TIMEOUT, check_connectivity
from .registrar import RegistryResolver, ReverseRegistrar, locate_registrar, set_name
from .registry import registry_contract
from .session import ReverseRegistrarSession, build_session
from .signer import Credentials

# Bounds how long a stalled request can keep a worker thread alive
DEFAULT_REQUEST_TIMEOUT = 30.0


class ReverseRegistrarClient:
    """
    Client for the ENS reverse registrar of one network.

    This client handles:
    1. Checking the node is reachable
    2. Locating the reverse registrar through the ENS registry
    3. Building signing sessions and setting reverse names
    """

    def __init__(
        self,
        rpc_url: str,
        timeout: float = DEFAULT_CONNECT_TIMEOUT,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        expected_chain_id: Optional[int] = None,
        registry_resolver: RegistryResolver = registry_contract,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the ReverseRegistrarClient

        Args:
            rpc_url: Ethereum RPC endpoint URL
            timeout: Bound on the connectivity check in seconds
            request_timeout: HTTP timeout for every RPC request in seconds
            expected_chain_id: Chain ID the node must report (optional)
            registry_resolver: Callable returning the ENS registry for a Web3 instance
            logger: Optional logger instance to use for debug/info logging

        Raises:
            ValueError: If the URL doesn't use https (unless it's localhost/127.0.0.1)
        """
        parsed = urllib.parse.urlparse(rpc_url)
        host = parsed.hostname or ''
        is_local = host in ('localhost', '127.0.0.1')
        if parsed.scheme != 'https' and not is_local:
            raise ValueError(f"rpc_url must use https:// for security (got: {parsed.scheme}://)")

        self.rpc_url = rpc_url
        self.timeout = timeout
        self.request_timeout = request_timeout
        self.expected_chain_id = expected_chain_id
        self.registry_resolver = registry_resolver
        self.logger = logger or logging.getLogger(__name__)
        self.w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": request_timeout}))
        self._registrar: Optional[ReverseRegistrar] = None

    @classmethod
    def from_network(
        cls,
        network: str,
        rpc_url: Optional[str] = None,
        **kwargs
    ) -> "ReverseRegistrarClient":
        """
        Create a client for a configured network.

        Args:
            network: Network name from networks.json (e.g. "sepolia")
            rpc_url: Optional RPC URL overriding the configured one
            **kwargs: Passed through to the constructor

        Raises:
            ValueError: If the network is not configured
        """
        kwargs.setdefault("expected_chain_id", NetworkConfig.get_chain_id(network))
        return cls(rpc_url=NetworkConfig.get_rpc_url(network, override=rpc_url), **kwargs)

    @property
    def chain_id(self) -> int:
        """Chain ID reported by the node, bounded by ``timeout``"""
        return check_connectivity(self.w3, self.timeout)

    def assert_chain_id(self) -> None:
        """
        Check the node is on the expected chain.

        Raises:
            ConnectivityError: If the node is unreachable or on another chain
        """
        if self.expected_chain_id is None:
            self.logger.warning("No expected chain ID set, skipping chain ID validation")
            return

        actual = self.chain_id
        if actual != self.expected_chain_id:
            raise ConnectivityError(
                f"Chain ID mismatch: expected {self.expected_chain_id}, node reports {actual}"
            )

    def locate(self, refresh: bool = False) -> ReverseRegistrar:
        """Locate the reverse registrar, reusing the previous result unless ``refresh``"""
        if self._registrar is None or refresh:
            self._registrar = locate_registrar(self.w3, self.registry_resolver, self.timeout)
            self.logger.debug(f"Using reverse registrar {self._registrar.address}")
        return self._registrar

    def create_session(
        self,
        credentials: Credentials,
        gas_price: Optional[int] = None,
        gas_limit: Optional[int] = None,
        eager_unlock: bool = False
    ) -> ReverseRegistrarSession:
        """Build a session on the located registrar for ``credentials``"""
        return build_session(
            self.chain_id,
            credentials.wallet,
            credentials.account,
            credentials.passphrase,
            self.locate(),
            gas_price,
            gas_limit=gas_limit,
            eager_unlock=eager_unlock,
        )

    def set_name(self, session: ReverseRegistrarSession, name: str) -> TransactionHandle:
        return set_name(session, name)

    def name_of(self, address: str) -> Optional[str]:
        """Currently set reverse name of ``address``, or None"""
        return self.locate().name_of(address, registry=self.registry_resolver(self.w3))
