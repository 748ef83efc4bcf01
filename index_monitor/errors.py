"""Error types raised while monitoring an index."""


class MonitorError(RuntimeError):
    """Base class for monitor failures."""


class TransportFailure(MonitorError):
    """The index service could not be reached or answered with an error. Fatal."""


class MalformedResponse(MonitorError):
    """A response decoded fine but is missing an expected field or has the wrong shape."""


class MalformedLogEntry(MonitorError):
    """A single log entry cannot be used (e.g. no timestamp). The entry is skipped."""
