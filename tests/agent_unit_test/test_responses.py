"""
Tests for the wire format of responses.
"""

import json

import pytest

from lfs_rsync_agent.errors import ErrorCode
from lfs_rsync_agent.models.responses import (
    InitResponse,
    OperationError,
    ProgressResponse,
    TransferResponse,
)


def dump(response) -> str:
    return response.model_dump_json(by_alias=True, exclude_none=True)


def test_init_success_is_empty_object():
    assert dump(InitResponse()) == "{}"


def test_init_failure():
    response = InitResponse(
        error=OperationError.from_code(ErrorCode.CONFIGURATION, "No remote")
    )

    assert json.loads(dump(response)) == {"error": {"code": 3, "message": "No remote"}}


def test_transfer_failure_omits_path():
    response = TransferResponse(
        oid="abc123",
        error=OperationError.from_code(ErrorCode.DOWNLOAD, "connection refused"),
    )

    assert json.loads(dump(response)) == {
        "event": "complete",
        "oid": "abc123",
        "error": {"code": 4, "message": "connection refused"},
    }


def test_upload_success_has_only_event_and_oid():
    assert json.loads(dump(TransferResponse(oid="abc123"))) == {
        "event": "complete",
        "oid": "abc123",
    }


def test_progress_uses_camel_case():
    response = ProgressResponse(oid="abc123", bytes_so_far=10, bytes_since_last=5)

    assert json.loads(dump(response)) == {
        "event": "progress",
        "oid": "abc123",
        "bytesSoFar": 10,
        "bytesSinceLast": 5,
    }


@pytest.mark.parametrize(
    "response",
    [
        InitResponse(),
        InitResponse(error=OperationError(code=3, message="No remote")),
        TransferResponse(oid="abc123", path="/tmp/rsync-agent1234"),
        TransferResponse(oid="abc123", error=OperationError(code=5, message="x")),
        ProgressResponse(oid="abc123", bytesSoFar=10, bytesSinceLast=5),
    ],
)
def test_responses_survive_serialization(response):
    assert type(response).model_validate_json(dump(response)) == response
