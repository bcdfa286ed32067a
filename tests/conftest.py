"""
Pytest fixtures for the ens-reverse SDK tests.
"""
import itertools
from unittest.mock import MagicMock

import pytest
from eth_account import Account
from eth_utils import keccak, to_checksum_address
from web3 import Web3

from ens_reverse_sdk.config import NetworkConfig
from ens_reverse_sdk.namehash import namehash

# Constants for testing
TEST_RPC_URL = "https://rpc.example.com"
TEST_CHAIN_ID = 11155111  # Sepolia testnet ID
TEST_PRIV_KEY = "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
TEST_PASSPHRASE = "correct horse battery staple"
TEST_REGISTRAR = to_checksum_address("0xabcd000000000000000000000000000000000001")
TEST_RESOLVER = to_checksum_address("0x5678000000000000000000000000000000000002")
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
REVERSE_NODE = namehash("addr.reverse")


class FakeRegistry:
    """In-memory registry keyed by node"""

    def __init__(self, owners=None, resolvers=None):
        self.owners = owners or {}
        self.resolvers = resolvers or {}
        self.owner_calls = []
        self.resolver_calls = []

    def owner(self, node):
        self.owner_calls.append(node)
        return self.owners.get(node, ZERO_ADDRESS)

    def resolver(self, node, block_identifier="latest"):
        self.resolver_calls.append((node, block_identifier))
        return self.resolvers.get(node, ZERO_ADDRESS)


class FakeWallet:
    """Wallet holding private keys behind passphrases"""

    def __init__(self, keys=None):
        # address -> (private key, passphrase)
        self.keys = keys or {}
        self.unlock_calls = 0

    def add(self, private_key, passphrase):
        account = Account.from_key(private_key)
        self.keys[account.address] = (private_key, passphrase)
        return account.address

    def unlock(self, address, passphrase):
        self.unlock_calls += 1
        if address not in self.keys:
            raise KeyError(f"unknown account {address}")
        private_key, expected = self.keys[address]
        if passphrase != expected:
            raise ValueError("MAC mismatch")
        return Account.from_key(private_key)


@pytest.fixture(autouse=True)
def _reset_network_cache(monkeypatch):
    """Every test starts from the packaged networks.json and no overrides"""
    monkeypatch.delenv("ENS_REGISTRY_ADDRESS", raising=False)
    NetworkConfig._networks_cache = None
    yield
    NetworkConfig._networks_cache = None


@pytest.fixture
def mock_account():
    """Create a deterministic test account"""
    return Account.from_key(TEST_PRIV_KEY)


@pytest.fixture
def wallet():
    w = FakeWallet()
    w.add(TEST_PRIV_KEY, TEST_PASSPHRASE)
    return w


@pytest.fixture
def fake_registry():
    return FakeRegistry(owners={REVERSE_NODE: TEST_REGISTRAR})


@pytest.fixture
def mock_w3():
    """
    Mock Web3 instance with a reverse registrar contract.

    The pending nonce advances on every submission and the transaction hash
    is the keccak of the raw transaction, so distinct submissions get
    distinct hashes.
    """
    w3 = MagicMock(spec=Web3)
    eth = MagicMock()
    eth.chain_id = TEST_CHAIN_ID
    eth.gas_price = 3_000_000_000

    nonces = itertools.count(7)
    eth.get_transaction_count = MagicMock(side_effect=lambda *_a, **_kw: next(nonces))
    eth.send_raw_transaction = MagicMock(side_effect=lambda raw: keccak(bytes(raw)))

    def contract(address, abi):
        contract_mock = MagicMock()
        contract_mock.address = address

        def set_name(name):
            fn = MagicMock()
            fn.estimate_gas = MagicMock(return_value=60000)

            def build_tx(tx_params):
                return {
                    **tx_params,
                    "to": address,
                    "value": 0,
                    "data": "0x" + name.encode("utf-8").hex(),
                }

            fn.build_transaction = MagicMock(side_effect=build_tx)
            return fn

        contract_mock.functions.setName = MagicMock(side_effect=set_name)
        return contract_mock

    eth.contract = MagicMock(side_effect=contract)
    w3.eth = eth
    return w3
