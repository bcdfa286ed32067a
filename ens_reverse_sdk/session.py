"""
Reusable signing sessions over a reverse registrar.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from web3 import Web3

from .exceptions import ENSError, SigningError, SubmissionError
from .models import TransactionHandle
from .registrar import ReverseRegistrar
from .signer import Signer, Wallet, account_signer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallOpts:
    """Options for read-only calls"""
    pending: bool = True

    @property
    def block_identifier(self) -> str:
        return "pending" if self.pending else "latest"


@dataclass(frozen=True)
class TransactOpts:
    """Options for state-changing calls"""
    sender: str
    signer: Signer = field(repr=False)
    chain_id: int
    gas_price: Optional[int] = None
    gas_limit: Optional[int] = None


@dataclass(frozen=True)
class ReverseRegistrarSession:
    """
    Registrar handle plus the options every call through it uses.

    Holds no mutable state of its own, so one session can be reused for any
    number of calls.
    """
    contract: ReverseRegistrar
    call_opts: CallOpts
    transact_opts: TransactOpts

    @property
    def w3(self) -> Web3:
        return self.contract.w3

    def node(self, address: str) -> bytes:
        return self.contract.node(address, block_identifier=self.call_opts.block_identifier)

    def default_resolver(self) -> str:
        return self.contract.default_resolver(block_identifier=self.call_opts.block_identifier)

    def name_of(self, address: str) -> Optional[str]:
        return self.contract.name_of(address, block_identifier=self.call_opts.block_identifier)

    def set_name(self, name: str) -> TransactionHandle:
        """
        Sign and submit ``setName(name)`` from the session's account.

        Raises:
            SigningError: If the signer cannot sign
            SubmissionError: If building or sending the transaction fails
        """
        opts = self.transact_opts
        fn = self.contract.set_name_function(name)

        try:
            nonce = self.w3.eth.get_transaction_count(opts.sender, "pending")
            gas_price = opts.gas_price if opts.gas_price is not None else self.w3.eth.gas_price

            gas = opts.gas_limit
            if gas is None:
                gas = fn.estimate_gas({"from": opts.sender})
                logger.debug(f"Estimated gas: {gas}")

            tx = fn.build_transaction({
                "from": opts.sender,
                "nonce": nonce,
                "chainId": opts.chain_id,
                "gas": gas,
                "gasPrice": gas_price,
            })
        except Exception as e:
            raise SubmissionError(f"Failed to prepare setName transaction: {e}") from e

        try:
            signed_tx = opts.signer.sign_transaction(tx)
        except ENSError:
            raise
        except Exception as e:
            raise SigningError(f"Failed to sign transaction: {e}") from e

        try:
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        except Exception as e:
            raise SubmissionError(f"Failed to send transaction: {e}") from e

        tx_hash_hex = Web3.to_hex(tx_hash)
        logger.info(f"setName transaction sent: {tx_hash_hex}")

        return TransactionHandle(
            tx_hash=tx_hash_hex,
            sender=opts.sender,
            to=self.contract.address,
            nonce=nonce,
            chain_id=opts.chain_id,
            gas_price=gas_price,
        )


def build_session(
    chain_id: int,
    wallet: Wallet,
    account: str,
    passphrase: str,
    registrar: ReverseRegistrar,
    gas_price: Optional[int],
    gas_limit: Optional[int] = None,
    eager_unlock: bool = False
) -> ReverseRegistrarSession:
    """
    Create a session suitable for multiple calls.

    Nothing is read from the network. The account is unlocked on the first
    signature unless ``eager_unlock`` is set.

    Args:
        chain_id: Chain ID of the network ``registrar`` was located on
        wallet: Wallet holding ``account``
        account: Address of the sending account
        passphrase: Passphrase that unlocks ``account``
        registrar: Located reverse registrar
        gas_price: Gas price in wei, or None to use the node's price at send time
        gas_limit: Gas limit, or None to estimate per transaction
        eager_unlock: Unlock the account now instead of on first use

    Raises:
        ValueError: If account is not an address or gas_price is negative
        SigningError: If eager_unlock is set and the account cannot be unlocked
    """
    if gas_price is not None and gas_price < 0:
        raise ValueError(f"gas_price must not be negative, got {gas_price}")

    signer = account_signer(chain_id, wallet, account, passphrase)
    if eager_unlock:
        signer.unlock()

    return ReverseRegistrarSession(
        contract=registrar,
        call_opts=CallOpts(pending=True),
        transact_opts=TransactOpts(
            sender=signer.address,
            signer=signer,
            chain_id=chain_id,
            gas_price=gas_price,
            gas_limit=gas_limit,
        ),
    )
