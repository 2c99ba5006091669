"""
Shared fixtures amongst all tests.
"""

import io
import random
from pathlib import Path
from typing import Optional

import pytest
from loguru import logger

from lfs_rsync_agent.agent import TransferAgent
from lfs_rsync_agent.exceptions import TransferError
from lfs_rsync_agent.transfers import CoreTransferManager


class FakeTransferManager(CoreTransferManager):
    """
    A transfer manager that records what it was asked to do instead of
    moving any bytes.
    """

    fail_with: Optional[str] = None
    "If set, every transfer raises a TransferError with this message."
    is_valid: bool = True
    calls: list[tuple[str, str]] = []

    def transfer(self, source: str, destination: str):
        self.calls.append((source, destination))

        if self.fail_with is not None:
            raise TransferError(self.fail_with, source=source, destination=destination)

        return True

    @property
    def valid(self) -> bool:
        return self.is_valid


@pytest.fixture
def log_messages():
    """
    Collects everything logged through loguru while the test runs.
    """

    messages = []

    handler_id = logger.add(lambda message: messages.append(message.record["message"]))

    yield messages

    logger.remove(handler_id)


@pytest.fixture
def fake_manager() -> FakeTransferManager:
    return FakeTransferManager()


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def agent(fake_manager, output, tmp_path) -> TransferAgent:
    """
    An agent launched with /backup/lfs as its remote, downloading into
    the test's temporary directory.
    """

    return TransferAgent(
        remote="/backup/lfs",
        transfer_manager=fake_manager,
        output=output,
        temp_dir=tmp_path,
    )


@pytest.fixture
def garbage_file(tmp_path) -> Path:
    """
    Returns a file filled with garbage at the path.
    """

    data = random.randbytes(1024)

    path = tmp_path / "garbage_file.bin"

    with open(path, "wb") as handle:
        handle.write(data)

    yield path
