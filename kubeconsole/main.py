"""Command-line entry point for kubeconsole."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from kubeconsole.constants.values import APP_TITLE, APP_VERSION
from kubeconsole.models.cache.data_cache import DataCache
from kubeconsole.models.state.config_manager import AppSettings, ConfigError, ConfigManager
from kubeconsole.utils.logging_setup import configure_logging

app = typer.Typer(help="Terminal dashboard for Kubernetes and Volcano clusters.", no_args_is_help=True)
console = Console(stderr=True)
logger = logging.getLogger(__name__)


def apply_overrides(
    settings: AppSettings,
    *,
    kubeconfig: Optional[str] = None,
    context: Optional[str] = None,
    namespace: Optional[str] = None,
    verbose: bool = False,
    locale: Optional[str] = None,
    refresh: Optional[float] = None,
    no_color: bool = False,
    insecure_kubelet: bool = False,
    max_concurrent: Optional[int] = None,
    snapshot: Optional[Path] = None,
) -> AppSettings:
    """Return ``settings`` with command-line flags applied on top."""
    updated = settings.model_copy(deep=True)
    if kubeconfig is not None:
        updated.cluster.kubeconfig = kubeconfig
    if context is not None:
        updated.cluster.context = context
    if namespace is not None:
        updated.cluster.namespace = namespace
    if locale is not None:
        updated.ui.locale = locale
    if refresh is not None:
        updated.refresh.interval = refresh
    if no_color:
        updated.ui.no_color = True
    if insecure_kubelet:
        updated.kubelet.insecure = True
    if max_concurrent is not None:
        updated.refresh.max_concurrent = max_concurrent
    if snapshot is not None:
        updated.snapshot_path = str(snapshot)
    updated.verbose = verbose
    return updated


@app.command("console")
def console_command(
    config: Optional[Path] = typer.Option(None, "--config", help="Path to a config.yaml file"),
    kubeconfig: Optional[str] = typer.Option(None, "--kubeconfig", "-k", help="Path to kubeconfig"),
    context: Optional[str] = typer.Option(None, "--context", "-c", help="Kubernetes context"),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n", help="Namespace to watch"),
    verbose: bool = typer.Option(False, "--verbose", help="Log at debug level"),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="UI locale"),
    refresh: Optional[float] = typer.Option(None, "--refresh", "-r", help="Refresh interval in seconds"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colors"),
    insecure_kubelet: bool = typer.Option(
        False, "--insecure-kubelet", help="Skip kubelet TLS verification"
    ),
    max_concurrent: Optional[int] = typer.Option(
        None, "--max-concurrent", "-m", help="Maximum concurrent API requests"
    ),
    snapshot: Optional[Path] = typer.Option(
        None, "--snapshot", help="YAML cluster snapshot to display"
    ),
) -> None:
    """Open the dashboard."""
    from kubeconsole.app import KubeConsoleApp
    from kubeconsole.providers import FileSnapshotProvider

    try:
        settings = ConfigManager.load(config)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    settings = apply_overrides(
        settings,
        kubeconfig=kubeconfig,
        context=context,
        namespace=namespace,
        verbose=verbose,
        locale=locale,
        refresh=refresh,
        no_color=no_color,
        insecure_kubelet=insecure_kubelet,
        max_concurrent=max_concurrent,
        snapshot=snapshot,
    )
    configure_logging(settings.logging, verbose=settings.verbose)

    if not settings.snapshot_path:
        console.print("[red]Error:[/red] no data source configured; pass --snapshot FILE")
        raise typer.Exit(2)

    cache = DataCache(ttl_seconds=settings.cache.ttl, max_entries=settings.cache.max_entries)
    provider = FileSnapshotProvider(settings.snapshot_path, cache=cache)
    logger.info("Starting %s %s with snapshot %s", APP_TITLE, APP_VERSION, settings.snapshot_path)
    KubeConsoleApp(provider, settings).run()


@app.command("init-config")
def init_config(
    path: Optional[Path] = typer.Option(None, "--path", help="Where to write the file"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write a config file with the default settings."""
    target = path or ConfigManager.search_paths()[1]
    if target.exists() and not force:
        console.print(f"[yellow]{target} already exists; use --force to overwrite[/yellow]")
        raise typer.Exit(1)
    try:
        written = ConfigManager.save(AppSettings(), target)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    typer.echo(f"Wrote {written}")


@app.command("version")
def version() -> None:
    """Show the kubeconsole version."""
    typer.echo(f"{APP_TITLE} version {APP_VERSION}")


if __name__ == "__main__":
    app()
