"""Client side of the rollup request/response protocol."""

from rollup.client import RollupClient
from rollup.codec import hex_to_str, str_to_hex
from rollup.exceptions import (
    DecodeError,
    ResponseFormatError,
    RollupError,
    TransportError,
    UnknownRequestError,
    ValidationError,
)
from rollup.schemas import AdvanceRequest, InspectRequest, Outcome

__all__ = [
    "AdvanceRequest",
    "DecodeError",
    "InspectRequest",
    "Outcome",
    "ResponseFormatError",
    "RollupClient",
    "RollupError",
    "TransportError",
    "UnknownRequestError",
    "ValidationError",
    "hex_to_str",
    "str_to_hex",
]
