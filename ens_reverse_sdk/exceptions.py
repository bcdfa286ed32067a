"""
Exceptions for the ens-reverse SDK.

Every error raised by the locator, the session builder and the name setter
derives from ENSError. Transport faults are chained (``raise ... from exc``)
so the original exception stays available on ``__cause__``.
"""


class ENSError(Exception):
    """Base exception for reverse registrar errors."""
    pass


class ConnectivityError(ENSError):
    """Raised when the node cannot be reached or does not answer in time."""
    pass


class UnsupportedNetworkError(ENSError):
    """Raised when no ENS registry is known for the connected chain."""

    def __init__(self, message: str, chain_id: int = None):
        self.chain_id = chain_id
        super().__init__(message)


class RegistryReadError(ENSError):
    """Raised when reading from the ENS registry fails."""
    pass


class RegistrarNotFoundError(ENSError):
    """
    Raised when the registry has no owner for ``addr.reverse``.

    This is an expected outcome on networks without ENS, not a transport
    fault, so callers can branch on it.
    """
    pass


class SigningError(ENSError):
    """Raised when a credential cannot be unlocked or cannot sign."""
    pass


class SubmissionError(ENSError):
    """Raised when the node rejects a transaction or its preparation."""
    pass
