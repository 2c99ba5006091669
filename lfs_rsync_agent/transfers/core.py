"""
Core transfer manager (prototype)
"""

import abc

from pydantic import BaseModel


class CoreTransferManager(BaseModel, abc.ABC):
    """
    The core transfer manager. A transfer manager moves a single file from
    a source to a destination and blocks until it is done. Either side may
    be local or remote, depending on what the manager understands.
    """

    @abc.abstractmethod
    def transfer(self, source: str, destination: str):
        """
        Transfer a single file.

        Parameters
        ----------
        source : str
            Path (or remote address) to copy from.
        destination : str
            Path (or remote address) to copy to.

        Raises
        ------
        TransferError
            If the transfer fails. The message is shown to the git-lfs user.
        """
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def valid(self) -> bool:
        """
        Whether or not this transfer manager is valid for the
        current system we are running on.
        """
        raise NotImplementedError
