"""nmbridge exception classes."""

from __future__ import annotations


class NmBridgeError(RuntimeError):
    """Base exception for nmbridge errors."""


class UserError(NmBridgeError):
    """Errors that should be shown to user without traceback."""

    def __init__(self, message: str, rc: int = 2):
        super().__init__(message)
        self.rc = rc


class CommandFailureError(NmBridgeError):
    """Command failed - error message already printed, just need to exit."""

    def __init__(self, rc: int = 1):
        super().__init__("")
        self.rc = rc


class LaunchError(NmBridgeError):
    """The nmcli executable could not be started."""


class ToolError(NmBridgeError):
    """nmcli reported a failure, either on stderr or through its exit code."""

    def __init__(self, message: str, *, exit_code: int | None = None, stderr: str = ""):
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr


class InvocationTimeout(ToolError):
    """nmcli did not finish within the configured timeout."""


class ParseError(NmBridgeError):
    """Multiline output could not be split into key/value lines."""

    def __init__(self, message: str, *, line_no: int, line: str):
        super().__init__(message)
        self.line_no = line_no
        self.line = line
