"""
Error codes that the agent reports back to git-lfs.
"""

from enum import IntEnum


class ErrorCode(IntEnum):
    """
    Protocol-level error codes. These are not process exit codes; the
    agent always exits with 0 after a normal shutdown.
    """

    CONFIGURATION = 3
    "Setup failed: no remote, no usable transfer manager, or no temporary file."

    DOWNLOAD = 4
    "The transfer manager failed to fetch the object from the remote."

    UPLOAD = 5
    "The transfer manager failed to store the object on the remote."

    def __str__(self):
        return str(self.value)
