import logging
import re
from pathlib import Path
from typing import Callable, List

import typer

from kubeadd.errors import (
    ConfigNotFoundError,
    InvalidSelectionError,
    NoClustersError,
    OperationFailedError,
    UserCancelledError,
)
from kubeadd.models import Asker, KubeConfigManager
from kubeadd.modules.backup import create_backup
from kubeadd.prompt import ask, confirm

logger = logging.getLogger(__name__)

INDEX_PATTERN = re.compile(r"^[0-9]+$")


def resolve_selection(selection: str, clusters: List[str]) -> str:
    """Map a 1-based index or an exact cluster name onto a listed cluster."""
    selection = selection.strip()
    if INDEX_PATTERN.match(selection):
        index = int(selection) - 1
        if 0 <= index < len(clusters):
            return clusters[index]
        raise InvalidSelectionError(f"Invalid selection number: {selection}")
    if selection in clusters:
        return selection
    raise InvalidSelectionError(f"Cluster '{selection}' not found")


def delete_cluster(
    kubeconfig: Path,
    kube: KubeConfigManager,
    asker: Asker = ask,
    echo: Callable[[str], None] = typer.echo,
) -> str:
    """
    Let the user pick a cluster and remove it, with its context and user.

    The context and user removals are best effort; only the cluster removal
    can fail the call.

    Returns:
        The name of the deleted cluster.
    """
    kubeconfig = Path(kubeconfig)
    if not kubeconfig.exists():
        raise ConfigNotFoundError(f"Kubeconfig file not found at {kubeconfig}")

    clusters = kube.get_clusters(kubeconfig)
    if not clusters:
        raise NoClustersError("No clusters found in kubeconfig")

    echo("🗑️  Available clusters for deletion:")
    echo("")
    for i, name in enumerate(clusters, start=1):
        echo(f"   {i}. {name}")
    echo("")

    selection = asker("Enter the number of cluster to delete (or cluster name): ")
    cluster_to_delete = resolve_selection(selection, clusters)

    echo("")
    echo(f"⚠️  You are about to delete cluster: {cluster_to_delete}")
    if not confirm("Are you sure? This action cannot be undone", asker):
        raise UserCancelledError()

    backup = create_backup(kubeconfig)
    echo(f"💾 Backup created: {backup}")

    cluster_error = None
    try:
        kube.delete_cluster(cluster_to_delete, kubeconfig)
    except OperationFailedError as e:
        cluster_error = e

    for remove, kind in ((kube.delete_context, "context"), (kube.delete_user, "user")):
        try:
            remove(cluster_to_delete, kubeconfig)
        except OperationFailedError as e:
            logger.debug(f"No {kind} '{cluster_to_delete}' to delete: {e}")

    if cluster_error is not None:
        raise OperationFailedError(
            f"Failed to delete cluster '{cluster_to_delete}': {cluster_error}",
            returncode=cluster_error.returncode,
            stderr=cluster_error.stderr,
        ) from cluster_error

    echo(f"✅ Successfully deleted cluster '{cluster_to_delete}' from kubeconfig")
    return cluster_to_delete
