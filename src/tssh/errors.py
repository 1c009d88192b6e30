"""Fatal error types. Anything raised from here ends the run with exit code 1."""

from typing import Optional


class TsshError(Exception):
    """Base class for errors that abort the program."""


class ConfigError(TsshError):
    """The config file could not be located, read, parsed, or written."""


class PeerQueryError(TsshError):
    """The peer status command could not be run or exited non-zero."""

    def __init__(self, message: str, stderr: str = ""):
        super().__init__(message)
        self.stderr = stderr


class SessionError(TsshError):
    """The ssh command could not be started or exited non-zero."""

    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode


class SelectionError(TsshError):
    """A menu entry could not be mapped back to the host it was built from."""
