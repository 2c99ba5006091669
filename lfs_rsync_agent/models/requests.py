"""
Models for requests that git-lfs sends to the agent, one JSON object per
line on standard input.
"""

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, ValidationError

from ..exceptions import MalformedRequestError, UnknownEventError


class Action(BaseModel):
    """
    The endpoint descriptor that git-lfs attaches to transfer requests. The
    agent passes it through untouched; the remote path is always derived from
    the configured remote and the oid.
    """

    href: str
    "Address of the object on the LFS server."
    header: Optional[dict[str, str]] = None
    "Headers to send alongside a request to href."
    expires_at: Optional[datetime] = None
    "When the action stops being valid."


class RequestEnvelope(BaseModel):
    """
    First parsing stage. Only used to extract the event tag.
    """

    event: str


class InitRequest(BaseModel):
    """
    Sent once, before any transfer.
    """

    event: Literal["init"]
    operation: str = ""
    "Either 'upload' or 'download'."
    remote: Optional[str] = None
    "Name of the git remote. Unrelated to the storage remote given on the command line."
    concurrent: bool = False
    "Whether git-lfs may send transfers concurrently. Accepted, not acted upon."
    concurrenttransfers: Optional[int] = None
    "Number of concurrent transfers git-lfs would allow. Accepted, not acted upon."


class DownloadRequest(BaseModel):
    event: Literal["download"]
    oid: str
    "Content identifier of the object; correlates the response."
    size: int = 0
    "Size of the object in bytes."
    action: Optional[Action] = None


class UploadRequest(BaseModel):
    event: Literal["upload"]
    oid: str
    "Content identifier of the object; correlates the response."
    size: int = 0
    "Size of the object in bytes."
    path: str
    "Local file to upload."
    action: Optional[Action] = None


class TerminateRequest(BaseModel):
    event: Literal["terminate"]


AgentRequest = Union[InitRequest, DownloadRequest, UploadRequest, TerminateRequest]

RequestModels: dict[str, type[BaseModel]] = {
    "init": InitRequest,
    "download": DownloadRequest,
    "upload": UploadRequest,
    "terminate": TerminateRequest,
}


def parse_request(line: str) -> AgentRequest:
    """
    Parse one line of input into a typed request.

    The event tag is read first, then the whole line is validated against
    the model registered for that tag.

    Parameters
    ----------
    line : str
        A single line from standard input.

    Returns
    -------
    AgentRequest
        One of InitRequest, DownloadRequest, UploadRequest, TerminateRequest.

    Raises
    ------
    MalformedRequestError
        If the line is not a JSON object with a string event, or if it is
        missing the fields required by its event.
    UnknownEventError
        If the event tag is not one the agent handles.
    """

    try:
        line.encode("utf-8")
    except UnicodeEncodeError:
        raise MalformedRequestError(line, "not valid UTF-8")

    try:
        envelope = RequestEnvelope.model_validate_json(line)
    except ValidationError as e:
        raise MalformedRequestError(line, f"{e.error_count()} validation error(s)")

    model = RequestModels.get(envelope.event)

    if model is None:
        raise UnknownEventError(line, envelope.event)

    try:
        return model.model_validate_json(line)
    except ValidationError as e:
        missing = ", ".join(".".join(str(x) for x in err["loc"]) for err in e.errors())
        raise MalformedRequestError(line, f"invalid {envelope.event} request: {missing}")
