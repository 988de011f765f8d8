"""Click command for kubectl-unmount.

Flags override KUBECTL_UNMOUNT_* environment variables; options left unset
keep the environment (or built-in) value. Identifiers of affected targets go
to stdout, progress lines to stderr.
"""

from __future__ import annotations

import asyncio
import dataclasses
import sys
from typing import Any

import click
from click.core import ParameterSource
from kubernetes_asyncio.config import ConfigException

from kubeunmount import __version__
from kubeunmount.app import run_plugin
from kubeunmount.config import load_config, validate_log_format, validate_log_level
from kubeunmount.errors import UnmountError
from kubeunmount.models.config import LogConfig, UnmountConfig
from kubeunmount.models.targets import Target
from kubeunmount.observability.logging import setup_logging


def _prompt(targets: list[Target]) -> bool:
    return click.confirm(f"Scale down {len(targets)} targets?", default=False, err=True)


def build_config(base: UnmountConfig, **overrides: Any) -> UnmountConfig:
    """Apply CLI overrides that were actually given (not None) to *base*."""
    log_level = overrides.pop("log_level", None)
    log_format = overrides.pop("log_format", None)
    changes = {key: value for key, value in overrides.items() if value is not None}
    log = LogConfig(
        level=validate_log_level(log_level) if log_level else base.log.level,
        format=validate_log_format(log_format) if log_format else base.log.format,
    )
    return dataclasses.replace(base, log=log, **changes)


@click.command(name="kubectl-unmount", context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("pvc_name", required=False)
@click.option("-n", "--namespace", default=None, help="Namespace to operate in (default: 'default').")
@click.option("-A", "--all-namespaces", "all_namespaces", is_flag=True, default=None, help="Operate across all namespaces.")
@click.option("--storage-class", default=None, help="Only consider claims of this StorageClass.")
@click.option("--dry-run/--no-dry-run", "dry_run", default=None, help="Only report what would be scaled down (default).")
@click.option("-y", "--yes", "confirmed", is_flag=True, default=None, help="Do not ask for confirmation.")
@click.option("--wait/--no-wait", "wait", default=None, help="Wait for affected Pods to terminate.")
@click.option("--timeout", "wait_timeout_seconds", type=click.IntRange(min=0), default=None, help="Seconds to wait for Pods to terminate.")
@click.option("--max-depth", "max_owner_depth", type=click.IntRange(min=1), default=None, help="Maximum owner-reference hops.")
@click.option("--kubeconfig", default=None, help="Path to the kubeconfig file.")
@click.option("--context", default=None, help="Kubeconfig context to use.")
@click.option("--log-level", default=None, type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False))
@click.option("--log-format", default=None, type=click.Choice(["console", "json"], case_sensitive=False))
@click.version_option(__version__, prog_name="kubectl-unmount")
def cli(pvc_name: str | None, **options: Any) -> None:
    """Scale down every workload mounting PVC_NAME (or any PVC) so it can be detached."""
    ctx = click.get_current_context()
    given = {key: value for key, value in options.items() if ctx.get_parameter_source(key) != ParameterSource.DEFAULT}
    try:
        config = build_config(load_config(), pvc_name=pvc_name, **given)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    setup_logging(config.log.level, config.log.format)
    interactive = sys.stdin.isatty() and not config.confirmed
    out = click.get_text_stream("stdout")
    err = click.get_text_stream("stderr")

    try:
        asyncio.run(run_plugin(config, out, err, confirm=_prompt if interactive else None))
    except ConfigException as exc:
        click.echo(f"Missing or invalid kube config: {exc}", err=True)
        raise SystemExit(1) from exc
    except UnmountError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc
