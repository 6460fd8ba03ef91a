from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, Field
from web3.types import TxParams


class TxOptions(BaseModel):
    """
    Transaction options attached to a state-changing call

    Field names follow Python style; they are dumped under the JSON-RPC
    names web3 expects (``from``, ``gasPrice``). Extra fields are kept
    and passed through.
    """

    sender: Optional[str] = Field(default=None, alias="from")
    gas: Optional[int] = None
    gas_price: Optional[int] = Field(default=None, alias="gasPrice")
    value: Optional[int] = None
    nonce: Optional[int] = None

    class Config:
        """Pydantic configuration"""
        frozen = True
        populate_by_name = True
        extra = "allow"

    def to_tx_params(self) -> TxParams:
        """Dump as web3 transaction params, dropping unset fields"""
        return TxParams(self.model_dump(by_alias=True, exclude_none=True))


TxOptionsLike = Union[TxOptions, Mapping[str, Any]]


def default_tx_options(sender: str) -> Dict[str, Any]:
    """Options used when the caller supplies none"""
    return {"from": sender}


def to_tx_params(options: TxOptionsLike) -> Union[TxParams, Mapping[str, Any]]:
    """
    Normalize caller-supplied options

    Mappings are returned as-is (same object). TxOptions are dumped.
    """
    if isinstance(options, TxOptions):
        return options.to_tx_params()
    if isinstance(options, Mapping):
        return options
    raise TypeError(
        f"Transaction options must be a TxOptions or a mapping, got {type(options).__name__}"
    )
