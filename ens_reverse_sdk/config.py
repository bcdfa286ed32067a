"""
Network configuration for the ens-reverse SDK.

Networks are described in the packaged ``networks.json``: chain id, a default
RPC endpoint and the address of the ENS root registry.
"""
import importlib.resources
import json
import logging
import os
from typing import Any, Dict, Optional

from eth_utils import is_address, to_checksum_address

logger = logging.getLogger(__name__)

# Environment variable that replaces the registry address for every network
REGISTRY_ADDRESS_ENV = "ENS_REGISTRY_ADDRESS"


class NetworkConfig:
    """Lookup helpers over the packaged network table."""

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        """
        Load network configurations, caching them after the first read.

        Returns:
            Mapping of network name to its configuration
        """
        if cls._networks_cache is None:
            resource = importlib.resources.files("ens_reverse_sdk").joinpath("networks.json")
            with resource.open("r", encoding="utf-8") as f:
                cls._networks_cache = json.load(f)
            logger.debug(f"Loaded {len(cls._networks_cache)} network configurations")
        return cls._networks_cache

    @classmethod
    def get_network(cls, network: str) -> Dict[str, Any]:
        """
        Get the configuration of a named network.

        Raises:
            ValueError: If the network is not configured
        """
        networks = cls.load_networks()
        if network not in networks:
            available = ", ".join(sorted(networks))
            raise ValueError(f"Network '{network}' not found. Available networks: {available}")
        return networks[network]

    @classmethod
    def get_rpc_url(cls, network: str, override: Optional[str] = None) -> str:
        """
        Resolve the RPC URL for a network.

        Precedence: explicit override, then ``<NETWORK>_RPC_URL`` from the
        environment, then the packaged default.
        """
        if override:
            return override

        env_var = f"{network.upper().replace('-', '_')}_RPC_URL"
        env_url = os.environ.get(env_var)
        if env_url:
            return env_url

        return cls.get_network(network)["rpc"]

    @classmethod
    def get_chain_id(cls, network: str) -> int:
        return int(cls.get_network(network)["chainId"])

    @classmethod
    def get_registry_address(cls, network: str) -> str:
        return to_checksum_address(cls.get_network(network)["ensRegistry"])

    @classmethod
    def get_network_for_chain_id(cls, chain_id: int) -> Optional[str]:
        """Name of the configured network with this chain id, if any."""
        for name, config in cls.load_networks().items():
            if int(config["chainId"]) == chain_id:
                return name
        return None

    @classmethod
    def registry_address_for_chain_id(cls, chain_id: int) -> Optional[str]:
        """
        ENS registry address for a chain id.

        ``ENS_REGISTRY_ADDRESS`` wins over the packaged table so local
        deployments (e.g. a dev chain) can be targeted.

        Raises:
            ValueError: If the environment override is not a valid address
        """
        override = os.environ.get(REGISTRY_ADDRESS_ENV)
        if override:
            if not is_address(override):
                raise ValueError(f"{REGISTRY_ADDRESS_ENV} is not a valid address: {override!r}")
            return to_checksum_address(override)

        network = cls.get_network_for_chain_id(chain_id)
        if network is None:
            return None
        return cls.get_registry_address(network)
