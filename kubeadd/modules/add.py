import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Callable

import typer

from kubeadd.errors import (
    InvalidURLError,
    OperationFailedError,
    ParseError,
    SourceFileNotFoundError,
    UserCancelledError,
)
from kubeadd.models import Asker, KubeConfigManager, YamlAccessor
from kubeadd.modules.backup import create_backup
from kubeadd.prompt import ask, confirm
from kubeadd.utils.kube import verify_active_context
from kubeadd.utils.validate import validate_server_url

logger = logging.getLogger(__name__)

CLUSTER_NAME = ".clusters[0].name"
CLUSTER_SERVER = ".clusters[0].cluster.server"
CONTEXT_NAME = ".contexts[0].name"
CONTEXT_CLUSTER = ".contexts[0].context.cluster"
CONTEXT_USER = ".contexts[0].context.user"
USER_NAME = ".users[0].name"
CURRENT_CONTEXT = '.["current-context"]'


def read_cluster_info(source: Path, yaml_accessor: YamlAccessor):
    """Return the first cluster's (name, server) from a kubeconfig file."""
    try:
        name = yaml_accessor.read(CLUSTER_NAME, source)
        server = yaml_accessor.read(CLUSTER_SERVER, source)
    except OperationFailedError as e:
        raise ParseError(
            f"Could not parse cluster information from '{source}': {e}"
        ) from e

    if not name or not server:
        raise ParseError(
            f"Could not parse cluster information from '{source}'\n"
            "Make sure the file contains valid kubeconfig format with clusters section"
        )
    return name, server


def rewrite_names(config_file: Path, name: str, server: str, yaml_accessor: YamlAccessor) -> None:
    """Point the first cluster/context/user of ``config_file`` at one shared name."""
    logger.debug(f"Rewriting {config_file}: name={name} server={server}")
    yaml_accessor.write(CLUSTER_NAME, name, config_file)
    yaml_accessor.write(CLUSTER_SERVER, server, config_file)
    yaml_accessor.write(CONTEXT_NAME, name, config_file)
    yaml_accessor.write(CONTEXT_CLUSTER, name, config_file)
    yaml_accessor.write(CONTEXT_USER, name, config_file)
    yaml_accessor.write(USER_NAME, name, config_file)
    yaml_accessor.write(CURRENT_CONTEXT, name, config_file)


def write_merged(kubeconfig: Path, content: str) -> None:
    """Replace ``kubeconfig`` with ``content`` via a sibling .tmp file."""
    kubeconfig.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = kubeconfig.with_name(kubeconfig.name + ".tmp")
    with open(tmp_path, "w") as f:
        f.write(content)
    if kubeconfig.exists():
        shutil.copymode(kubeconfig, tmp_path)
    else:
        os.chmod(tmp_path, 0o600)
    os.replace(tmp_path, kubeconfig)


def add_cluster(
    source_file,
    kubeconfig: Path,
    yaml_accessor: YamlAccessor,
    kube: KubeConfigManager,
    asker: Asker = ask,
    echo: Callable[[str], None] = typer.echo,
) -> str:
    """
    Import the first cluster of ``source_file`` into ``kubeconfig``.

    The imported cluster, context and user all take the same name, which also
    becomes the current context. The destination is backed up first.

    Returns:
        The name the cluster was stored under.
    """
    source = Path(os.path.expanduser(str(source_file)))
    kubeconfig = Path(kubeconfig)
    if not source.is_file():
        raise SourceFileNotFoundError(f"File '{source_file}' not found")

    echo("🔍 Analyzing new kubeconfig file...")
    cluster_name, server_url = read_cluster_info(source, yaml_accessor)

    echo("📋 Found cluster information:")
    echo(f"   Name: {cluster_name}")
    echo(f"   Server: {server_url}")
    echo("")

    logger.debug(f"Validating server URL: {server_url!r} (length {len(server_url)})")
    if not validate_server_url(server_url):
        raise InvalidURLError(
            f"Server URL validation failed for: '{server_url}'. "
            "Expected format: https://server-address[:port][/path]"
        )

    echo("🏷️  Cluster naming:")
    custom_name = asker(
        f"Enter custom name for this cluster (or press Enter to use '{cluster_name}'): "
    ).strip()
    if custom_name:
        cluster_name = custom_name
        echo(f"✅ Using custom name: {cluster_name}")
    else:
        echo(f"✅ Using original name: {cluster_name}")

    echo("")
    echo("🌐 Server validation:")
    echo(f"   Server URL: {server_url}")
    if not confirm("Is this server URL correct?", asker):
        new_server_url = asker("Enter correct server URL: ").strip()
        if not validate_server_url(new_server_url):
            raise InvalidURLError(
                f"Invalid server URL format: '{new_server_url}'. "
                "Expected format: https://server-address[:port][/path]"
            )
        server_url = new_server_url
        echo(f"✅ Updated server URL: {server_url}")

    if kubeconfig.exists() and cluster_name in kube.get_clusters(kubeconfig):
        echo("")
        echo(f"⚠️  Warning: Cluster '{cluster_name}' already exists in kubeconfig")
        if not confirm("Do you want to overwrite it?", asker):
            raise UserCancelledError()

    backup = create_backup(kubeconfig)
    if backup:
        echo(f"💾 Backup created: {backup}")

    echo("")
    echo("🔄 Merging configurations...")
    with tempfile.TemporaryDirectory(prefix="kubeadd-") as tmp_dir:
        temp_config = Path(tmp_dir) / "kubeconfig.yaml"
        shutil.copyfile(source, temp_config)

        echo("🔧 Updating cluster configuration...")
        rewrite_names(temp_config, cluster_name, server_url, yaml_accessor)

        sources = [p for p in (kubeconfig, temp_config) if p.exists()]
        merged = kube.merge(sources)
        write_merged(kubeconfig, merged)
    logger.debug(f"Wrote merged kubeconfig to {kubeconfig}")

    verify_active_context(kubeconfig, cluster_name)

    echo(f"✅ Successfully added cluster '{cluster_name}' to kubeconfig")
    echo(f"🎯 You can now switch to it with: kubectl config use-context {cluster_name}")
    return cluster_name
