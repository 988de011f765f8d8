"""kubectl-unmount: scale down every workload mounting a PersistentVolumeClaim."""

__version__ = "0.1.0"
