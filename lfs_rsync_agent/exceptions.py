"""
Exceptions for the lfs_rsync_agent package.
"""


class AgentError(Exception):
    def __init__(self, message):
        super(AgentError, self).__init__(message)
        self.message = message


class MalformedRequestError(AgentError):
    def __init__(self, line, reason):
        super(MalformedRequestError, self).__init__(
            f"Unable to parse request: {line} ({reason})"
        )
        self.line = line
        self.reason = reason


class UnknownEventError(MalformedRequestError):
    def __init__(self, line, event):
        super(UnknownEventError, self).__init__(line, f"unknown event {event!r}")
        self.event = event


class TransferError(AgentError):
    def __init__(self, message, source=None, destination=None):
        super(TransferError, self).__init__(message)
        self.source = source
        self.destination = destination
