"""Logging and run reporting."""

from kubeunmount.observability.logging import build_logger, get_logger, setup_logging
from kubeunmount.observability.reporter import Reporter

__all__ = ["Reporter", "build_logger", "get_logger", "setup_logging"]
