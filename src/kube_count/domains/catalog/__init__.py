"""Resource type catalog domain."""

from kube_count.domains.catalog.client import DiscoveryCatalogClient, TypeCatalog
from kube_count.domains.catalog.models import ResourceTypeDescriptor, ResourceTypeIdentity

__all__ = [
    "DiscoveryCatalogClient",
    "ResourceTypeDescriptor",
    "ResourceTypeIdentity",
    "TypeCatalog",
]
