"""
Data models for the ens-reverse SDK.
"""
from dataclasses import dataclass
from typing import Optional, Union

from pydantic import BaseModel, Field


class TransactionHandle(BaseModel):
    """A submitted transaction; status tracking is left to the caller"""
    tx_hash: str = Field(..., alias="transactionHash")
    sender: str = Field(..., alias="from")
    to: str
    nonce: int
    chain_id: int = Field(..., alias="chainId")
    gas_price: Optional[int] = Field(None, alias="gasPrice")

    class Config:
        populate_by_name = True
        frozen = True


@dataclass(frozen=True)
class Found:
    """Registry lookup that returned a registered owner"""
    address: str


@dataclass(frozen=True)
class NotFound:
    """Registry lookup that returned the unset address"""
    pass


OwnerLookup = Union[Found, NotFound]
