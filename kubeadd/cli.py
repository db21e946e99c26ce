import logging
import sys
from typing import List, NoReturn, Optional

import click
import typer

from kubeadd.config import Config
from kubeadd.errors import KubeaddError, UserCancelledError
from kubeadd.logging import setup_logger
from kubeadd.modules import add_cluster, delete_cluster
from kubeadd.utils import check_dependencies
from kubeadd.utils.kube import KubectlConfig, is_local_kubeconfig, resolve_kubeconfig
from kubeadd.utils.yq import YqAccessor

HELP_TEXT = """kubeadd - Kubernetes cluster configuration manager

Usage:
  kubeadd -f <new_kubeconfig_file>  Add new cluster from kubeconfig file
  kubeadd -d                        Delete existing cluster
  kubeadd -h                        Show this help

Options:
  --debug                           Print diagnostic output

Examples:
  kubeadd -f ~/Downloads/new-cluster.yaml
  kubeadd -d"""

app = typer.Typer(add_completion=False)

logger = logging.getLogger("kubeadd")

# Global debug flag
debug_mode = False

# Configure logging
def setup_logging(debug: bool = False) -> None:
    """Configure the kubeadd logger based on debug mode."""
    level = logging.DEBUG if debug else getattr(logging, Config.LOG_LEVEL, logging.INFO)
    setup_logger("kubeadd", level)
    if debug:
        logger.debug("Debug mode enabled")


def show_help() -> None:
    typer.echo(HELP_TEXT)


def fail(message: str) -> NoReturn:
    typer.echo(f"❌ {message}", err=True)
    raise typer.Exit(code=1)


@app.command(
    context_settings={
        "help_option_names": [],
        "ignore_unknown_options": True,
        "allow_extra_args": True,
    }
)
def run(
    ctx: typer.Context,
    file: Optional[str] = typer.Option(None, "-f", help="Add new cluster from kubeconfig file"),
    delete: bool = typer.Option(False, "-d", help="Delete existing cluster"),
    show_help_flag: bool = typer.Option(False, "-h", "--help", help="Show this help"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """kubeadd - Kubernetes cluster configuration manager."""
    global debug_mode
    debug_mode = debug
    setup_logging(debug)

    if ctx.args:
        typer.echo(f"❌ Invalid option: {ctx.args[0]}", err=True)
        show_help()
        raise typer.Exit(code=1)

    if show_help_flag:
        show_help()
        raise typer.Exit()

    if file is None and not delete:
        show_help()
        raise typer.Exit(code=1)

    try:
        check_dependencies()

        kubeconfig = resolve_kubeconfig()
        if is_local_kubeconfig(kubeconfig):
            typer.echo(f"📁 Using local config file: {kubeconfig}")
        else:
            typer.echo(f"📁 Using global config file: {kubeconfig}")

        if file is not None:
            add_cluster(file, kubeconfig, YqAccessor(), KubectlConfig())
        else:
            delete_cluster(kubeconfig, KubectlConfig())
    except UserCancelledError:
        fail("Operation cancelled")
    except KubeaddError as e:
        if debug_mode:
            logger.debug("Operation failed", exc_info=True)
        fail(f"Error: {e}")


def main(argv: Optional[List[str]] = None) -> None:
    """Console entry point."""
    try:
        code = app(args=argv, prog_name="kubeadd", standalone_mode=False)
    except click.UsageError as e:
        # e.g. "-f" given without a path
        typer.echo(f"❌ Invalid option: {e.format_message()}", err=True)
        show_help()
        sys.exit(1)
    except typer.Abort:
        typer.echo("", err=True)
        typer.echo("❌ Operation cancelled", err=True)
        sys.exit(1)
    sys.exit(code or 0)


if __name__ == "__main__":
    main()
