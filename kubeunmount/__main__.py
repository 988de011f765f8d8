"""Entry point for `python -m kubeunmount`.

Usage:
    python -m kubeunmount my-pvc -n my-namespace
    uv run python -m kubeunmount --no-dry-run --yes my-pvc
"""

from __future__ import annotations

from kubeunmount.cli import cli

cli()
