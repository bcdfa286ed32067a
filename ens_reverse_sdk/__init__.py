"""
ens-reverse SDK - locate the ENS reverse registrar and set reverse names.
"""
from .version import __version__
from .client import ReverseRegistrarClient
from .config import NetworkConfig
from .exceptions import (
    ENSError,
    ConnectivityError,
    UnsupportedNetworkError,
    RegistryReadError,
    RegistrarNotFoundError,
    SigningError,
    SubmissionError,
)
from .models import TransactionHandle, Found, NotFound
from .namehash import namehash, label_hash, reverse_name
from .network import check_connectivity, DEFAULT_CONNECT_TIMEOUT
from .registry import Registry, registry_contract, lookup_owner, UNKNOWN_ADDRESS
from .registrar import ReverseRegistrar, locate_registrar, set_name
from .session import ReverseRegistrarSession, CallOpts, TransactOpts, build_session
from .signer import Credentials, KeystoreWallet, AccountSigner, UnlockedSigner, account_signer

__all__ = [
    "ReverseRegistrarClient",
    "NetworkConfig",
    "ENSError",
    "ConnectivityError",
    "UnsupportedNetworkError",
    "RegistryReadError",
    "RegistrarNotFoundError",
    "SigningError",
    "SubmissionError",
    "TransactionHandle",
    "Found",
    "NotFound",
    "namehash",
    "label_hash",
    "reverse_name",
    "check_connectivity",
    "DEFAULT_CONNECT_TIMEOUT",
    "Registry",
    "registry_contract",
    "lookup_owner",
    "UNKNOWN_ADDRESS",
    "ReverseRegistrar",
    "locate_registrar",
    "set_name",
    "ReverseRegistrarSession",
    "CallOpts",
    "TransactOpts",
    "build_session",
    "Credentials",
    "KeystoreWallet",
    "AccountSigner",
    "UnlockedSigner",
    "account_signer",
    "__version__",
]
