"""Error types for kube-count."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kube_count.domains.catalog.models import ResourceTypeIdentity


class KubeCountError(Exception):
    """Base exception for all kube-count errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(KubeCountError):
    """Invalid or contradictory configuration."""

    pass


class CatalogError(KubeCountError):
    """The resource type catalog could not be read from the cluster."""

    pass


class ResolutionError(KubeCountError):
    """No resource type tokens could be resolved."""

    pass


class SyncFailure(KubeCountError):
    """A watch stream never completed its initial list."""

    def __init__(self, identity: ResourceTypeIdentity, reason: str = "timed out") -> None:
        self.identity = identity
        super().__init__(
            f"failed to sync {identity} cache: {reason}",
            {"kind": identity.kind, "group_version": identity.group_version},
        )


class EmptyResultError(KubeCountError):
    """Aggregation produced no records."""

    def __init__(self, message: str = "no resources found") -> None:
        super().__init__(message)


class RenderError(KubeCountError):
    """Records could not be serialized to the requested output format."""

    def __init__(self, output_format: str, cause: Exception) -> None:
        self.output_format = output_format
        super().__init__(f"failed to marshal {output_format} data: {cause}")
