"""
Signers for reverse registrar transactions.

Unlocking is split in two stages: ``Credentials`` is a plain value that can
always be built, and ``Credentials.unlock()`` is the fallible step that turns
it into an ``UnlockedSigner``. ``AccountSigner`` defers that step until the
first signature unless it is unlocked explicitly.
"""
import json
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Protocol, Union

import portalocker
from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import is_address, to_checksum_address, to_normalized_address

from .exceptions import SigningError

logger = logging.getLogger(__name__)


class Signer(Protocol):
    """Protocol for transaction signers"""
    address: str

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> Any:
        """Sign transaction and return signed tx object"""
        ...


class Wallet(Protocol):
    """A source of private keys that can be unlocked with a passphrase"""

    def unlock(self, address: str, passphrase: str) -> LocalAccount:
        """Return the unlocked account or raise if it cannot be unlocked"""
        ...


class KeystoreWallet:
    """
    Read-only view over encrypted (V3) keystore files.

    Args:
        path: A keystore file or a directory of keystore files
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _keyfiles(self) -> Iterator[Path]:
        if self.path.is_dir():
            yield from sorted(p for p in self.path.iterdir() if p.is_file() and not p.name.startswith("."))
        else:
            yield self.path

    def _read(self, keyfile: Path) -> Optional[Dict[str, Any]]:
        flags = portalocker.LockFlags.SHARED | portalocker.LockFlags.NON_BLOCKING
        with portalocker.Lock(str(keyfile), "r", timeout=10, flags=flags) as f:
            try:
                return json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError):
                logger.debug(f"Skipping non-JSON file {keyfile}")
                return None

    def find(self, address: str) -> Optional[Dict[str, Any]]:
        """Encrypted keyfile for ``address``, or None"""
        wanted = to_normalized_address(address)
        for keyfile in self._keyfiles():
            data = self._read(keyfile)
            if not isinstance(data, dict) or not is_address(data.get("address")):
                continue
            if to_normalized_address(data["address"]) == wanted:
                return data
        return None

    def unlock(self, address: str, passphrase: str) -> LocalAccount:
        keyfile = self.find(address)
        if keyfile is None:
            raise SigningError(f"No keystore entry for account {to_checksum_address(address)}")
        private_key = Account.decrypt(keyfile, passphrase)
        return Account.from_key(private_key)


class UnlockedSigner:
    """Signer backed by an unlocked account, bound to one chain id"""

    def __init__(self, account: LocalAccount, chain_id: int):
        self.account = account
        self.chain_id = chain_id

    @property
    def address(self) -> str:
        return self.account.address

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> Any:
        tx = dict(transaction_dict)
        tx.setdefault("chainId", self.chain_id)
        if tx["chainId"] != self.chain_id:
            raise SigningError(
                f"Transaction chain ID {tx['chainId']} does not match signer chain ID {self.chain_id}"
            )
        try:
            return self.account.sign_transaction(tx)
        except Exception as e:
            raise SigningError(f"Failed to sign transaction: {e}") from e


@dataclass(frozen=True)
class Credentials:
    """
    Account, wallet and passphrase needed to sign.

    Building this value never touches the wallet; ``unlock`` does.
    """
    account: str
    wallet: Wallet
    passphrase: str = field(repr=False)

    def __post_init__(self):
        if not is_address(self.account):
            raise ValueError(f"Invalid account address: {self.account!r}")
        object.__setattr__(self, "account", to_checksum_address(self.account))

    def unlock(self, chain_id: int) -> UnlockedSigner:
        """
        Unlock the account in the wallet.

        Raises:
            SigningError: If the passphrase is wrong or the account is missing
        """
        try:
            unlocked = self.wallet.unlock(self.account, self.passphrase)
        except SigningError:
            raise
        except Exception as e:
            raise SigningError(f"Failed to unlock account {self.account}: {e}") from e

        if to_checksum_address(unlocked.address) != self.account:
            raise SigningError(
                f"Wallet returned account {unlocked.address}, expected {self.account}"
            )
        logger.debug(f"Unlocked account {self.account[:10]}…")
        return UnlockedSigner(unlocked, chain_id)


class AccountSigner:
    """
    Signer that unlocks its credentials on first use.

    Unlock failures surface as SigningError from ``sign_transaction`` (or
    from ``unlock`` when called eagerly), never from the constructor.
    """

    def __init__(self, credentials: Credentials, chain_id: int):
        self.credentials = credentials
        self.chain_id = chain_id
        self._unlocked: Optional[UnlockedSigner] = None
        self._lock = threading.Lock()

    @property
    def address(self) -> str:
        return self.credentials.account

    @property
    def is_unlocked(self) -> bool:
        return self._unlocked is not None

    def unlock(self) -> UnlockedSigner:
        with self._lock:
            if self._unlocked is None:
                self._unlocked = self.credentials.unlock(self.chain_id)
            return self._unlocked

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> Any:
        return self.unlock().sign_transaction(transaction_dict)


def account_signer(chain_id: int, wallet: Wallet, account: str, passphrase: str) -> AccountSigner:
    """
    Build a lazily unlocking signer for ``account`` in ``wallet``.

    Raises:
        ValueError: If account is not a valid address
    """
    return AccountSigner(Credentials(account, wallet, passphrase), chain_id)
