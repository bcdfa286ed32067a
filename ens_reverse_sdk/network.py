"""
Liveness probe for a connected node.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError

from web3 import Web3

from .exceptions import ConnectivityError

logger = logging.getLogger(__name__)

# Bound on the initial chain ID request, in seconds
DEFAULT_CONNECT_TIMEOUT = 5.0


def check_connectivity(w3: Web3, timeout: float = DEFAULT_CONNECT_TIMEOUT) -> int:
    """
    Request the chain ID, failing if the node does not answer within ``timeout``.

    The request runs on a worker thread so the bound holds whatever provider
    ``w3`` uses. It is not retried. The timeout bounds only the caller's wait:
    a request that is still in flight keeps its worker thread alive until the
    provider's own HTTP timeout, and interpreter exit waits for that thread.
    Give the provider a request timeout (``HTTPProvider(url,
    request_kwargs={"timeout": ...})``) when a hard bound on exit matters.

    Returns:
        The chain ID reported by the node

    Raises:
        ConnectivityError: On timeout or any transport failure
    """
    executor = ThreadPoolExecutor(max_workers=1)
    try:
        future = executor.submit(lambda: w3.eth.chain_id)
        chain_id = future.result(timeout=timeout)
    except FuturesTimeoutError as e:
        raise ConnectivityError(f"Node did not report a chain ID within {timeout}s") from e
    except Exception as e:
        raise ConnectivityError(f"Failed to connect to node: {e}") from e
    finally:
        executor.shutdown(wait=False)

    logger.debug(f"Connected to chain {chain_id}")
    return chain_id
