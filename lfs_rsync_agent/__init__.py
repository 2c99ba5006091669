# -*- mode: python; coding: utf-8 -*-
# Copyright 2024 the lfs-rsync-agent developers.
# Licensed under the BSD License.

"""
A git-lfs custom transfer agent that moves large files with rsync.
"""

from importlib.metadata import PackageNotFoundError, version

__all__ = str(
    """
TransferAgent
AgentContext
"""
).split()

try:
    __version__ = version("lfs-rsync-agent")
except PackageNotFoundError:
    # package is not installed
    __version__ = "unknown"

from .agent import AgentContext, TransferAgent
