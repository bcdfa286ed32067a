#!/usr/bin/env python3
"""
Example of setting the ENS reverse name of an account.
"""
import logging
import os

from ens_reverse_sdk import (
    Credentials,
    KeystoreWallet,
    RegistrarNotFoundError,
    ReverseRegistrarClient,
)


def main():
    """
    Demonstrate usage of the ReverseRegistrarClient.

    This example shows how to:
    1. Initialize the client from a network configuration
    2. Locate the reverse registrar
    3. Build a session from a keystore account
    4. Set the reverse name and read it back
    """
    logging.basicConfig(level=logging.INFO)

    NETWORK = os.environ.get("ENS_NETWORK", "sepolia")
    KEYSTORE = os.environ.get("KEYSTORE_PATH")
    ACCOUNT = os.environ.get("ACCOUNT_ADDRESS")
    PASSPHRASE = os.environ.get("KEYSTORE_PASSPHRASE")
    NAME = os.environ.get("REVERSE_NAME", "alice.eth")

    # Verify configuration
    if not (KEYSTORE and ACCOUNT and PASSPHRASE):
        print("ERROR: KEYSTORE_PATH, ACCOUNT_ADDRESS and KEYSTORE_PASSPHRASE are required")
        return

    client = ReverseRegistrarClient.from_network(NETWORK)
    client.assert_chain_id()

    try:
        registrar = client.locate()
    except RegistrarNotFoundError:
        print(f"{NETWORK} has no reverse registrar")
        return
    print(f"Reverse registrar: {registrar.address}")

    credentials = Credentials(ACCOUNT, KeystoreWallet(KEYSTORE), PASSPHRASE)
    session = client.create_session(credentials, eager_unlock=True)

    handle = client.set_name(session, NAME)
    print(f"Transaction sent: {handle.tx_hash} (nonce {handle.nonce})")
    # The name is only visible once the transaction is mined
    receipt = client.w3.eth.wait_for_transaction_receipt(handle.tx_hash, timeout=120)
    print(f"Mined in block {receipt['blockNumber']}")
    print(f"Current reverse name: {client.name_of(ACCOUNT)}")


if __name__ == "__main__":
    main()
