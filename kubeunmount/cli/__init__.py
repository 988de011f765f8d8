"""kubectl-unmount command-line interface.

Exposes:
    cli -- Click command entry point (registered as ``kubectl-unmount`` script).
"""

from kubeunmount.cli.main import cli

__all__ = ["cli"]
