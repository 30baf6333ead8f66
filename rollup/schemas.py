from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

ADVANCE_STATE = "advance_state"
INSPECT_STATE = "inspect_state"
REQUEST_TYPES = (ADVANCE_STATE, INSPECT_STATE)


class Outcome(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"


class FinishRequest(BaseModel):
    status: Outcome


class PayloadBody(BaseModel):
    """Body of the notice and report calls."""

    payload: str


class AdvanceMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    msg_sender: str
    epoch_index: Optional[int] = None
    input_index: Optional[int] = None
    block_number: Optional[int] = None
    timestamp: Optional[int] = None


class AdvanceData(BaseModel):
    model_config = ConfigDict(frozen=True)

    metadata: AdvanceMetadata
    payload: str

    @property
    def sender(self) -> str:
        return self.metadata.msg_sender


class InspectData(BaseModel):
    model_config = ConfigDict(frozen=True)

    payload: str


class AdvanceRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    request_type: Literal["advance_state"]
    data: AdvanceData


class InspectRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    request_type: Literal["inspect_state"]
    data: InspectData


RollupRequest = Annotated[
    Union[AdvanceRequest, InspectRequest], Field(discriminator="request_type")
]

rollup_request_adapter = TypeAdapter(RollupRequest)
