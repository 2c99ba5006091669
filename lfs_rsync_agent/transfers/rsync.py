"""
A transfer manager for rsync transfers.
"""

import shutil
import subprocess

import sysrsync
from loguru import logger

from ..exceptions import TransferError
from .core import CoreTransferManager


class RsyncTransferManager(CoreTransferManager):
    """
    A transfer manager that shells out to rsync. The remote may be anything
    rsync accepts as a path, e.g. ``/mnt/backup/lfs`` or ``host:/srv/lfs``.
    """

    executable: str = "rsync"
    "The rsync binary to run."
    options: list[str] = []
    "Extra options placed before the source and destination."

    def command(self, source: str, destination: str) -> list[str]:
        """
        Build the command line for a single transfer.
        """

        # A local file source would otherwise get a trailing slash.
        command = sysrsync.get_rsync_command(
            source=source,
            destination=destination,
            sync_source_contents=False,
            options=list(self.options),
        )
        command[0] = self.executable

        return command

    def transfer(self, source: str, destination: str):
        command = self.command(source, destination)
        command_string = " ".join(command)

        logger.debug("Running {command}", command=command_string)

        try:
            process = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                shell=False,
            )
        except OSError as e:
            raise TransferError(
                f"Error while running `{command_string}`: {e}",
                source=source,
                destination=destination,
            )

        if process.returncode != 0:
            raise TransferError(
                f"Error while running `{command_string}`: "
                f"exit status {process.returncode}\n{process.stdout}",
                source=source,
                destination=destination,
            )

        return True

    @property
    def valid(self) -> bool:
        return shutil.which(self.executable) is not None
