"""
Tests for the ENS registry binding.
"""
from unittest.mock import MagicMock, PropertyMock

import pytest

from ens_reverse_sdk.exceptions import ConnectivityError, RegistryReadError, UnsupportedNetworkError
from ens_reverse_sdk.models import Found, NotFound
from ens_reverse_sdk.registrar import REVERSE_REGISTRAR_ABI
from ens_reverse_sdk.registry import REGISTRY_ABI, Registry, lookup_owner, registry_contract
from tests.conftest import REVERSE_NODE, TEST_REGISTRAR, ZERO_ADDRESS, FakeRegistry


def test_lookup_owner_found(fake_registry):
    assert lookup_owner(fake_registry, REVERSE_NODE) == Found(TEST_REGISTRAR)


def test_lookup_owner_unset_is_not_found():
    assert lookup_owner(FakeRegistry(), REVERSE_NODE) == NotFound()


def test_lookup_owner_wraps_read_failure():
    registry = MagicMock()
    registry.owner.side_effect = OSError("connection reset")

    with pytest.raises(RegistryReadError, match="connection reset") as exc_info:
        lookup_owner(registry, REVERSE_NODE)

    assert isinstance(exc_info.value.__cause__, OSError)


def test_registry_contract_uses_configured_address():
    w3 = MagicMock()
    w3.eth.chain_id = 1

    registry = registry_contract(w3)

    assert isinstance(registry, Registry)
    assert registry.address == "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e"
    w3.eth.contract.assert_called_once()
    assert w3.eth.contract.call_args.kwargs["address"] == registry.address


def test_registry_contract_unknown_chain():
    w3 = MagicMock()
    w3.eth.chain_id = 424242

    with pytest.raises(UnsupportedNetworkError) as exc_info:
        registry_contract(w3)

    assert exc_info.value.chain_id == 424242
    w3.eth.contract.assert_not_called()


def test_registry_contract_chain_id_failure():
    w3 = MagicMock()
    type(w3.eth).chain_id = PropertyMock(side_effect=Exception("RPC error"))

    with pytest.raises(ConnectivityError, match="RPC error"):
        registry_contract(w3)


def test_registry_owner_calls_contract():
    w3 = MagicMock()
    contract = w3.eth.contract.return_value
    contract.functions.owner.return_value.call.return_value = ZERO_ADDRESS

    registry = Registry("0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e", w3)

    assert registry.owner(REVERSE_NODE) == ZERO_ADDRESS
    contract.functions.owner.assert_called_once_with(REVERSE_NODE)


def test_registry_resolver_reads_at_block():
    w3 = MagicMock()
    contract = w3.eth.contract.return_value
    contract.functions.resolver.return_value.call.return_value = ZERO_ADDRESS

    registry = Registry("0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e", w3)

    assert registry.resolver(REVERSE_NODE, block_identifier="pending") == ZERO_ADDRESS
    contract.functions.resolver.return_value.call.assert_called_once_with(block_identifier="pending")


@pytest.mark.parametrize("abi, expected", [
    (REGISTRY_ABI, {"owner", "resolver"}),
    (REVERSE_REGISTRAR_ABI, {"setName", "node", "defaultResolver"}),
])
def test_abis_list_only_bound_functions(abi, expected):
    assert {entry["name"] for entry in abi} == expected
