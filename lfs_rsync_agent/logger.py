"""
Logging setup. Use this as 'from .logger import log'
"""

import loguru

from .settings import AgentSettings


def setup_logging(settings: AgentSettings):
    settings.log_settings.setup_logs()
    loguru.logger.debug("Logging set up.")


log = loguru.logger
