"""Count live Kubernetes resources per kind and namespace."""

__version__ = "0.1.0"
