"""Utility functions and helpers for the kubeadd application."""
import logging
import os
import shutil
import subprocess
from typing import Dict, List, Optional, Sequence

from ..config import Config
from ..errors import MissingDependencyError, OperationFailedError

logger = logging.getLogger(__name__)


def install_hint(binary: str) -> str:
    return Config.INSTALL_HINTS.get(os.path.basename(binary), "")


def check_dependencies(binaries: Optional[Sequence[str]] = None) -> None:
    """Make sure every required executable is reachable on PATH.

    Args:
        binaries: Executables to look for (defaults to kubectl and yq)

    Raises:
        MissingDependencyError: For the first executable that cannot be found
    """
    for binary in binaries or Config.required_binaries():
        if shutil.which(binary) is None:
            raise MissingDependencyError(binary, install_hint(binary))
        logger.debug(f"Found {binary} at {shutil.which(binary)}")


def run_command(
    args: List[str],
    env: Optional[Dict[str, str]] = None,
    check: bool = True,
    timeout: Optional[float] = None,
) -> subprocess.CompletedProcess:
    """Run an external command and capture its output.

    Args:
        args: Command and arguments
        env: Extra environment variables layered over os.environ
        check: Raise OperationFailedError on a nonzero exit status
        timeout: Seconds before giving up (defaults to Config.COMMAND_TIMEOUT)

    Returns:
        The completed process with text stdout/stderr
    """
    if timeout is None:
        timeout = Config.COMMAND_TIMEOUT
    full_env = None
    if env:
        full_env = {**os.environ, **env}
        logger.debug(f"Environment overrides: {env}")
    logger.debug(f"Running: {' '.join(args)}")

    try:
        result = subprocess.run(
            args, capture_output=True, text=True, env=full_env, timeout=timeout
        )
    except FileNotFoundError as e:
        raise MissingDependencyError(args[0], install_hint(args[0])) from e
    except subprocess.TimeoutExpired as e:
        raise OperationFailedError(
            f"'{' '.join(args)}' timed out after {timeout} seconds"
        ) from e

    if check and result.returncode != 0:
        stderr = (result.stderr or "").strip()
        raise OperationFailedError(
            f"'{' '.join(args)}' failed with exit code {result.returncode}: {stderr}",
            returncode=result.returncode,
            stderr=stderr,
        )
    return result
