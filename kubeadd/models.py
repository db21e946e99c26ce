"""
Collaborator interfaces used by the add and delete operations.
"""
from pathlib import Path
from typing import Callable, List, Optional, Protocol, Sequence

# Single blocking question -> answer
Asker = Callable[[str], str]


class YamlAccessor(Protocol):
    """Path-based scalar access to a YAML document on disk."""

    def read(self, expression: str, path: Path) -> Optional[str]:
        """Return the scalar at ``expression``, or None when absent or null."""
        ...

    def write(self, expression: str, value: str, path: Path) -> None:
        """Set the scalar at ``expression`` in place."""
        ...


class KubeConfigManager(Protocol):
    """Cluster-level operations on kubeconfig files."""

    def get_clusters(self, path: Path) -> List[str]:
        ...

    def delete_cluster(self, name: str, path: Path) -> None:
        ...

    def delete_context(self, name: str, path: Path) -> None:
        ...

    def delete_user(self, name: str, path: Path) -> None:
        ...

    def merge(self, paths: Sequence[Path]) -> str:
        """Return the flattened merge of ``paths``; later paths win on name collision."""
        ...
