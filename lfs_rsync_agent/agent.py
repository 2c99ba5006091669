"""
The protocol engine. Reads git-lfs custom transfer requests from a stream,
one JSON object per line, and writes the responses to another.

The engine handles one request at a time. A transfer blocks the loop until
the transfer manager returns, and there is no timeout.
"""

import tempfile
from pathlib import Path
from typing import IO, Iterable, Optional

from loguru import logger
from pydantic import BaseModel

from .errors import ErrorCode
from .exceptions import MalformedRequestError, TransferError
from .models.requests import (
    DownloadRequest,
    InitRequest,
    TerminateRequest,
    UploadRequest,
    parse_request,
)
from .models.responses import InitResponse, OperationError, TransferResponse
from .transfers import CoreTransferManager


class AgentContext(BaseModel):
    """
    State fixed by a successful init. Every transfer handler needs one.
    """

    remote: str
    "Root of the large file storage, e.g. /backup/lfs or host:/srv/lfs."

    def remote_file(self, oid: str) -> str:
        """
        The remote address of the object with the given oid.
        """

        return f"{self.remote.rstrip('/')}/{oid}"


class ResponseWriter:
    """
    Writes responses as single JSON lines, flushing after each one so the
    peer never waits on a buffer.

    Failure to serialize or write is logged and then ignored: send() returns
    False and the agent carries on with the next request.
    """

    def __init__(self, stream: IO[str]):
        self.stream = stream

    def send(self, response: BaseModel) -> bool:
        try:
            line = response.model_dump_json(by_alias=True, exclude_none=True)
            self.stream.write(line + "\n")
            self.stream.flush()
        except (OSError, ValueError) as e:
            logger.error("Unable to send response: {e}", e=e)
            return False

        logger.debug("Sent message {line}", line=line)

        return True


def not_initialized_error(oid: str) -> TransferResponse:
    return TransferResponse(
        oid=oid,
        error=OperationError.from_code(
            ErrorCode.CONFIGURATION,
            "Agent has not been initialised; the init event must come first",
        ),
    )


def perform_init(
    remote: Optional[str], transfer_manager: CoreTransferManager
) -> tuple[Optional[AgentContext], InitResponse]:
    """
    Validate the launch configuration.

    Parameters
    ----------
    remote : str, optional
        The remote given on the command line.
    transfer_manager : CoreTransferManager
        The transfer manager that later transfers will use.

    Returns
    -------
    tuple[AgentContext | None, InitResponse]
        The new context (None on failure) and the response to send.
    """

    if not remote:
        return None, InitResponse(
            error=OperationError.from_code(
                ErrorCode.CONFIGURATION,
                "No remote specified when launching the process",
            )
        )

    if not transfer_manager.valid:
        return None, InitResponse(
            error=OperationError.from_code(
                ErrorCode.CONFIGURATION,
                f"Transfer manager {transfer_manager.__class__.__name__} "
                "cannot run on this system",
            )
        )

    return AgentContext(remote=remote), InitResponse()


def perform_download(
    request: DownloadRequest,
    context: AgentContext,
    transfer_manager: CoreTransferManager,
    temp_dir: Optional[Path] = None,
    temp_prefix: str = "rsync-agent",
) -> TransferResponse:
    """
    Fetch an object from the remote into a fresh temporary file.

    The temporary file is left on disk on success and on failure; on success
    git-lfs takes ownership of it through the returned path.
    """

    try:
        with tempfile.NamedTemporaryFile(
            prefix=temp_prefix, dir=temp_dir, delete=False
        ) as handle:
            download_path = handle.name
            transfer_manager.transfer(context.remote_file(request.oid), download_path)
    except TransferError as e:
        logger.error("Download of {oid} failed: {e}", oid=request.oid, e=e.message)
        return TransferResponse(
            oid=request.oid,
            error=OperationError.from_code(ErrorCode.DOWNLOAD, e.message),
        )
    except OSError as e:
        logger.error(
            "Unable to create temporary file for {oid}: {e}", oid=request.oid, e=e
        )
        return TransferResponse(
            oid=request.oid,
            error=OperationError.from_code(ErrorCode.CONFIGURATION, str(e)),
        )

    return TransferResponse(oid=request.oid, path=download_path)


def perform_upload(
    request: UploadRequest,
    context: AgentContext,
    transfer_manager: CoreTransferManager,
) -> TransferResponse:
    """
    Send a local file to the remote.
    """

    try:
        transfer_manager.transfer(request.path, context.remote_file(request.oid))
    except TransferError as e:
        logger.error("Upload of {oid} failed: {e}", oid=request.oid, e=e.message)
        return TransferResponse(
            oid=request.oid,
            error=OperationError.from_code(ErrorCode.UPLOAD, e.message),
        )

    return TransferResponse(oid=request.oid)


class TransferAgent:
    """
    A git-lfs custom transfer agent.

    Parameters
    ----------
    remote : str, optional
        The storage remote given on the command line. Checked at init.
    transfer_manager : CoreTransferManager
        Moves the bytes.
    output : IO[str]
        Where responses go. Normally standard output.
    temp_dir : Path, optional
        Directory for downloaded files. Defaults to the system temp dir.
    temp_prefix : str
        Prefix for downloaded file names.
    """

    context: Optional[AgentContext] = None
    "Set by a successful init; None before then."

    def __init__(
        self,
        remote: Optional[str],
        transfer_manager: CoreTransferManager,
        output: IO[str],
        temp_dir: Optional[Path] = None,
        temp_prefix: str = "rsync-agent",
    ):
        self.remote = remote
        self.transfer_manager = transfer_manager
        self.writer = ResponseWriter(output)
        self.temp_dir = temp_dir
        self.temp_prefix = temp_prefix

    def handle_line(self, line: str) -> bool:
        """
        Handle a single line of input.

        Returns
        -------
        bool
            False once a terminate event has been handled, True otherwise.
        """

        try:
            request = parse_request(line)
        except MalformedRequestError as e:
            logger.warning("Unable to parse request: {line}", line=e.line)
            logger.debug(e.reason)
            return True

        if isinstance(request, InitRequest):
            logger.info(
                "Initialising rsync agent for: {operation}",
                operation=request.operation,
            )

            if request.concurrent:
                logger.debug(
                    "Peer allows {n} concurrent transfers; running them one at a time",
                    n=request.concurrenttransfers,
                )

            self.context, response = perform_init(self.remote, self.transfer_manager)
        elif isinstance(request, DownloadRequest):
            logger.info("Received download request for: {oid}", oid=request.oid)

            if self.context is None:
                response = not_initialized_error(request.oid)
            else:
                response = perform_download(
                    request,
                    self.context,
                    self.transfer_manager,
                    temp_dir=self.temp_dir,
                    temp_prefix=self.temp_prefix,
                )
        elif isinstance(request, UploadRequest):
            logger.info("Received upload request for: {oid}", oid=request.oid)

            if self.context is None:
                response = not_initialized_error(request.oid)
            else:
                response = perform_upload(request, self.context, self.transfer_manager)
        elif isinstance(request, TerminateRequest):
            logger.info("Terminating rsync agent gracefully.")
            return False

        self.writer.send(response)

        return True

    def run(self, lines: Iterable[str]):
        """
        Process lines until a terminate event or the end of input.
        """

        for line in lines:
            if not self.handle_line(line.rstrip("\r\n")):
                break

        return
