"""Exceptions raised by kubeadd operations.

Every failure is terminal for the current invocation: the CLI prints the
message and exits with status 1.
"""

from typing import Optional


class KubeaddError(Exception):
    """Base class for all kubeadd errors."""
    pass


class MissingDependencyError(KubeaddError):
    """A required executable (kubectl, yq) is not on PATH."""

    def __init__(self, binary: str, hint: str = ""):
        self.binary = binary
        self.hint = hint
        message = f"{binary} is not installed or not in PATH"
        if hint:
            message = f"{message}\n{hint}"
        super().__init__(message)


class SourceFileNotFoundError(KubeaddError):
    """The kubeconfig file to import does not exist."""
    pass


class ConfigNotFoundError(KubeaddError):
    """The destination kubeconfig does not exist."""
    pass


class ParseError(KubeaddError):
    """The imported file lacks a cluster name or server."""
    pass


class InvalidURLError(KubeaddError):
    """A server URL failed validation."""
    pass


class NoClustersError(KubeaddError):
    pass


class InvalidSelectionError(KubeaddError):
    pass


class UserCancelledError(KubeaddError):
    """The user declined a confirmation prompt."""

    def __init__(self, message: str = "Operation cancelled"):
        super().__init__(message)


class OperationFailedError(KubeaddError):
    """An external command failed."""

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)
