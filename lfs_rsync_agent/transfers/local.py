"""
Local transfer. Basically just a wrapper around `cp`, for remotes that are
mounted on this machine.
"""

import shutil
from pathlib import Path

from ..exceptions import TransferError
from .core import CoreTransferManager


class LocalTransferManager(CoreTransferManager):
    def transfer(self, source: str, destination: str):
        """
        Raises
        ------

        TransferError
            If the copy fails for any reason (missing source, permissions,
            full disk).
        """

        destination_path = Path(destination)

        try:
            destination_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, destination_path)
        except OSError as e:
            raise TransferError(
                f"Could not copy {source} to {destination}: {e}",
                source=source,
                destination=destination,
            )

        return True

    @property
    def valid(self) -> bool:
        return True
