"""Utility functions and helpers for kube-count."""

from kube_count.utils.errors import (
    CatalogError,
    ConfigurationError,
    EmptyResultError,
    KubeCountError,
    RenderError,
    ResolutionError,
    SyncFailure,
)

__all__ = [
    "KubeCountError",
    "CatalogError",
    "ConfigurationError",
    "EmptyResultError",
    "RenderError",
    "ResolutionError",
    "SyncFailure",
]
