import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence

from kubernetes import config
from kubernetes.config.config_exception import ConfigException

from ..config import Config
from ..errors import OperationFailedError
from . import run_command

logger = logging.getLogger(__name__)


def resolve_kubeconfig(local_path: Optional[str] = None, global_path: Optional[str] = None) -> Path:
    """
    Pick the kubeconfig to operate on.

    The local config (``.kube/config`` under the current working directory)
    wins when it exists as a file; otherwise the per-user global config
    (``~/.kube/config``) is used, whether or not it exists yet.
    """
    local = Path(os.path.expanduser(local_path or Config.LOCAL_KUBECONFIG_PATH))
    if local.is_file():
        return local.resolve()
    return Path(os.path.expanduser(global_path or Config.KUBECONFIG_PATH))


def is_local_kubeconfig(path: Path, global_path: Optional[str] = None) -> bool:
    global_config = Path(os.path.expanduser(global_path or Config.KUBECONFIG_PATH))
    return Path(path) != global_config


def verify_active_context(path: Path, name: str) -> None:
    """Load ``path`` with the Kubernetes client and check its current context."""
    try:
        contexts, active_context = config.list_kube_config_contexts(config_file=str(path))
    except ConfigException as e:
        raise OperationFailedError(f"Merged kubeconfig {path} could not be loaded: {e}") from e

    logger.debug(f"Contexts in {path}: {[c['name'] for c in contexts]}")
    if not active_context or active_context.get("name") != name:
        raise OperationFailedError(
            f"Merged kubeconfig {path} has current context "
            f"'{(active_context or {}).get('name')}', expected '{name}'"
        )


class KubectlConfig:
    """kubeconfig operations backed by ``kubectl config``."""

    def __init__(self, binary: Optional[str] = None):
        self.binary = binary or Config.KUBECTL_BIN

    def _config(self, *args: str, path: Path = None, env=None):
        cmd = [self.binary, "config", *args]
        if path is not None:
            cmd.append(f"--kubeconfig={path}")
        return run_command(cmd, env=env)

    def get_clusters(self, path: Path) -> List[str]:
        result = self._config("get-clusters", path=path)
        lines = [line.strip() for line in result.stdout.splitlines()]
        # First line is the NAME header
        return [line for line in lines[1:] if line]

    def delete_cluster(self, name: str, path: Path) -> None:
        self._config("delete-cluster", name, path=path)

    def delete_context(self, name: str, path: Path) -> None:
        self._config("delete-context", name, path=path)

    def delete_user(self, name: str, path: Path) -> None:
        self._config("delete-user", name, path=path)

    def merge(self, paths: Sequence[Path]) -> str:
        # kubectl keeps the first definition of a name, so the list goes in reversed
        kubeconfig = os.pathsep.join(str(p) for p in reversed(list(paths)))
        result = self._config("view", "--flatten", env={"KUBECONFIG": kubeconfig})
        return result.stdout
