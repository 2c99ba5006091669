"""
Settings for the transfer agent. This is a pydantic model deserialized
from the available agent config path, with environment variables taking
precedence over defaults.
"""

import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import loguru
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .transfers import CoreTransferManager, TransferManagerNames, transfer_manager_from_name
from .transfers.rsync import RsyncTransferManager

if TYPE_CHECKING:
    agent_settings: "AgentSettings"


class LogSettings(BaseModel):
    """
    Settings for the loguru logger. Standard output carries the protocol,
    so it is never used as a sink.
    """

    level: str = "DEBUG"
    "Minimum level for every sink."
    stderr: bool = True
    "Whether to log to standard error."
    files: dict[Path, str] = {}
    "Egress files for the logger. Rotation (e.g. 500 MB, 1 week) is the string."

    def setup_logs(self):
        loguru.logger.remove()

        if self.stderr:
            loguru.logger.add(sys.stderr, level=self.level)

        for file_name, rotation in self.files.items():
            loguru.logger.add(file_name, level=self.level, rotation=rotation)

        return


class AgentSettings(BaseSettings):
    """
    Settings for the agent. Note that because this is a BaseSettings
    object, environment variables fill in values the config file does not
    set, e.g. LFS_RSYNC_AGENT_TRANSFER_MANAGER=local. Values in the file win.
    """

    # Which transfer manager moves the bytes; see transfers.TransferManagerNames.
    transfer_manager: str = "rsync"

    # Only used by the rsync transfer manager.
    rsync_executable: str = "rsync"
    rsync_options: list[str] = []

    # Where downloads are staged before git-lfs moves them into its store.
    temp_dir: Optional[Path] = None
    temp_prefix: str = "rsync-agent"

    log_settings: LogSettings = Field(default_factory=LogSettings)

    model_config = SettingsConfigDict(env_prefix="lfs_rsync_agent_")

    @field_validator("transfer_manager")
    def transfer_manager_is_valid(cls, v: str) -> str:
        """
        Validates that the transfer manager is one we know about.
        """

        if v not in TransferManagerNames or v == "core":
            raise ValueError(f"Invalid transfer manager {v}")

        return v

    def build_transfer_manager(self) -> CoreTransferManager:
        """
        Instantiate the configured transfer manager.
        """

        manager = transfer_manager_from_name(self.transfer_manager)

        if manager is RsyncTransferManager:
            return RsyncTransferManager(
                executable=self.rsync_executable, options=self.rsync_options
            )

        return manager()

    @classmethod
    def from_file(cls, config_path: Path | str) -> "AgentSettings":
        """
        Loads the settings from the given path.
        """

        with open(config_path, "r") as handle:
            return cls.model_validate_json(handle.read())


# Automatically create a variable, agent_settings, from the environment variable
# on _use_!

_settings = None


def load_settings(config_path: Path | str | None = None) -> AgentSettings:
    """
    Load the settings from the config file. An explicit path wins over
    LFS_RSYNC_AGENT_CONFIG, which wins over ~/.lfs_rsync_agent.json.
    """

    global _settings

    if config_path is not None:
        _settings = AgentSettings.from_file(config_path)
        return _settings

    try_paths = [
        os.environ.get("LFS_RSYNC_AGENT_CONFIG", None),
        Path.home() / ".lfs_rsync_agent.json",
    ]

    for path in try_paths:
        if path is not None:
            path = Path(path)
        else:
            continue

        if path.exists():
            _settings = AgentSettings.from_file(path)
            return _settings

    _settings = AgentSettings()

    return _settings


def __getattr__(name):
    """
    Try to load the settings if they haven't been loaded yet.
    """

    if name == "agent_settings":
        global _settings

        if _settings is not None:
            return _settings

        return load_settings()

    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
