"""
Tests for the example scripts.
"""
import importlib.util
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from tests.conftest import TEST_PASSPHRASE

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


@pytest.fixture
def set_reverse_name_example():
    spec = importlib.util.spec_from_file_location(
        "set_reverse_name_example", EXAMPLES_DIR / "set_reverse_name.py"
    )
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_example_reads_name_after_receipt(set_reverse_name_example, monkeypatch, mock_account, tmp_path):
    monkeypatch.setenv("KEYSTORE_PATH", str(tmp_path))
    monkeypatch.setenv("ACCOUNT_ADDRESS", mock_account.address)
    monkeypatch.setenv("KEYSTORE_PASSPHRASE", TEST_PASSPHRASE)
    monkeypatch.setenv("REVERSE_NAME", "alice.eth")

    client = MagicMock()
    client.assert_chain_id = MagicMock()
    client.set_name.return_value.tx_hash = "0xabc"
    client.w3.eth.wait_for_transaction_receipt.return_value = {"blockNumber": 123}
    client.name_of.return_value = "alice.eth"
    order = MagicMock()
    order.attach_mock(client.w3.eth.wait_for_transaction_receipt, "wait")
    order.attach_mock(client.name_of, "name_of")

    client_cls = MagicMock()
    client_cls.from_network.return_value = client
    monkeypatch.setattr(set_reverse_name_example, "ReverseRegistrarClient", client_cls)

    set_reverse_name_example.main()

    client.set_name.assert_called_once()
    assert [c[0] for c in order.mock_calls] == ["wait", "name_of"]
    client.w3.eth.wait_for_transaction_receipt.assert_called_once_with("0xabc", timeout=120)


def test_example_requires_keystore_settings(set_reverse_name_example, monkeypatch, capsys):
    for var in ("KEYSTORE_PATH", "ACCOUNT_ADDRESS", "KEYSTORE_PASSPHRASE"):
        monkeypatch.delenv(var, raising=False)
    client_cls = MagicMock()
    monkeypatch.setattr(set_reverse_name_example, "ReverseRegistrarClient", client_cls)

    set_reverse_name_example.main()

    assert "required" in capsys.readouterr().out
    client_cls.from_network.assert_not_called()
