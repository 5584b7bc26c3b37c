class StreamError(Exception):
    pass


class StreamStateError(StreamError):
    """Raised when a handler is used outside its one-shot lifecycle."""
    pass


class StreamClosedError(StreamError):
    """Raised when a delta is applied after the stream was finalized."""
    pass


class StreamTimeoutError(StreamError, TimeoutError):
    """Raised when the caller's wait deadline elapses before a terminal signal."""

    def __init__(self, timeout: float):
        super().__init__(f"Stream did not finish within {timeout:g}s")
        self.timeout = timeout


class ConfigurationError(StreamError):
    pass
