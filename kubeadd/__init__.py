"""kubeadd - Kubernetes cluster configuration manager."""

__version__ = "0.1.0"
