"""
Models for responses that the agent writes to standard output.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ErrorCode


class OperationError(BaseModel):
    """
    A protocol-level error.
    """

    code: int
    "One of the ErrorCode values."
    message: str
    "Human-readable description of what went wrong."

    @classmethod
    def from_code(cls, code: ErrorCode, message: str) -> "OperationError":
        return cls(code=int(code), message=message)


class InitResponse(BaseModel):
    """
    Response to the init event. Serializes to ``{}`` on success.
    """

    error: Optional[OperationError] = None


class TransferResponse(BaseModel):
    """
    Sent once a download or upload has finished, successfully or not.
    """

    event: Literal["complete"] = "complete"
    oid: str
    "The oid of the request this responds to."
    path: Optional[str] = None
    "Local path of the downloaded object. Never set for uploads or failures."
    error: Optional[OperationError] = None


class ProgressResponse(BaseModel):
    """
    Incremental progress for a transfer. Part of the protocol, but the agent
    never sends it: rsync runs as a single blocking call.
    """

    model_config = ConfigDict(populate_by_name=True)

    event: Literal["progress"] = "progress"
    oid: str
    bytes_so_far: int = Field(alias="bytesSoFar")
    "Total bytes transferred so far."
    bytes_since_last: int = Field(alias="bytesSinceLast")
    "Bytes transferred since the previous progress message."
