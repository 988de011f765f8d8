"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    format: str = "console"  # "console" or "json"


@dataclass
class UnmountConfig:
    """Top-level configuration for a single unmount run.

    ``dry_run`` defaults to True so that an unconfigured invocation never
    mutates the cluster.
    """

    namespace: str = ""
    all_namespaces: bool = False
    pvc_name: str = ""
    storage_class: str = ""
    dry_run: bool = True
    confirmed: bool = False
    wait: bool = True
    wait_timeout_seconds: int = 300
    poll_interval_seconds: float = 2.0
    max_owner_depth: int = 10
    kubeconfig: str = ""
    context: str = ""
    log: LogConfig = field(default_factory=LogConfig)

    @property
    def scope(self) -> str | None:
        """Namespace to operate in, or None for every namespace."""
        if self.all_namespaces:
            return None
        return self.namespace or "default"
