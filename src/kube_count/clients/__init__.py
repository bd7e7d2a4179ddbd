"""Kubernetes client access."""

from kube_count.clients.base import K8sClient

__all__ = ["K8sClient"]
