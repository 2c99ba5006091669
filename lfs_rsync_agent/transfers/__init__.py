"""
Transfer managers; the primitives that physically move bytes between this
machine and the remote.
"""

from .core import CoreTransferManager
from .local import LocalTransferManager
from .rsync import RsyncTransferManager

TransferManagers: dict[int, type[CoreTransferManager]] = {
    0: CoreTransferManager,
    1: LocalTransferManager,
    2: RsyncTransferManager,
}

TransferManagerNames: dict[str, int] = {
    "core": 0,
    "local": 1,
    "rsync": 2,
}


def transfer_manager_from_name(name: str) -> type[CoreTransferManager]:
    """
    Get a transfer manager from its name.
    """
    return TransferManagers[TransferManagerNames[name]]
