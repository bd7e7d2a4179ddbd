"""Resource type catalog backed by the API server's discovery endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from kubernetes.client import ApiException  # type: ignore[import-untyped]

from kube_count.domains.catalog.models import ResourceTypeDescriptor
from kube_count.utils.errors import CatalogError

if TYPE_CHECKING:
    from kube_count.clients.base import K8sClient

logger = logging.getLogger(__name__)


class TypeCatalog(Protocol):
    """Anything that can list the resource types known to a cluster."""

    def lookup(self) -> list[ResourceTypeDescriptor]: ...


def _split_group_version(group_version: str) -> tuple[str, str]:
    """Split "apps/v1" into ("apps", "v1") and "v1" into ("", "v1")."""
    if "/" not in group_version:
        return "", group_version
    group, version = group_version.split("/", 1)
    return group, version


def descriptors_from_resource_list(resource_list: Any) -> list[ResourceTypeDescriptor]:
    """Convert a V1APIResourceList into watchable catalog entries.

    Subresources such as pods/log and types without list/watch support are
    dropped since they cannot be counted.
    """
    group, version = _split_group_version(resource_list.group_version)
    descriptors: list[ResourceTypeDescriptor] = []
    for r in resource_list.resources or []:
        descriptor = ResourceTypeDescriptor(
            kind=r.kind,
            group=group,
            version=version,
            plural=r.name,
            singular=r.singular_name or "",
            short_names=list(r.short_names or []),
            namespaced=bool(r.namespaced),
            verbs=list(r.verbs or []),
        )
        if descriptor.is_watchable:
            descriptors.append(descriptor)
    return descriptors


class DiscoveryCatalogClient:
    """Lists the cluster's preferred resource types.

    Each resource of an API group is reported once, under the group's
    preferred version when it is served there and under the first version
    that serves it otherwise. Kinds served by different groups stay separate
    entries.
    """

    def __init__(self, k8s: K8sClient) -> None:
        self._k8s = k8s

    def lookup(self) -> list[ResourceTypeDescriptor]:
        """Read every preferred resource type from discovery.

        Returns:
            Descriptors in discovery order, core group first.

        Raises:
            CatalogError: If the core group or the group list cannot be read.
        """
        try:
            core = self._k8s.core_v1.get_api_resources()
            group_list = self._k8s.apis.get_api_versions()
        except ApiException as e:
            raise CatalogError(f"Failed to discover API resources: {e.reason}") from e
        except Exception as e:
            raise CatalogError(f"Failed to discover API resources: {e}") from e

        descriptors = descriptors_from_resource_list(core)
        for group in group_list.groups or []:
            descriptors.extend(self._preferred_group_resources(group))

        logger.debug(f"Discovered {len(descriptors)} watchable resource types")
        return descriptors

    def _preferred_group_resources(self, group: Any) -> list[ResourceTypeDescriptor]:
        """Pick one version per resource of an API group."""
        preferred = group.preferred_version.version if group.preferred_version else None
        chosen: dict[str, ResourceTypeDescriptor] = {}

        for group_version in group.versions or []:
            try:
                resource_list = self._fetch_group_version(group_version.group_version)
            except Exception as e:
                # Aggregated APIs are often unavailable; discovery stays partial.
                logger.warning(f"Skipping API group version {group_version.group_version}: {e}")
                continue

            for descriptor in descriptors_from_resource_list(resource_list):
                current = chosen.get(descriptor.plural)
                if current is None or (
                    descriptor.version == preferred and current.version != preferred
                ):
                    chosen[descriptor.plural] = descriptor

        return list(chosen.values())

    def _fetch_group_version(self, group_version: str) -> Any:
        """GET /apis/<group>/<version> as a V1APIResourceList."""
        return self._k8s.api_client.call_api(
            f"/apis/{group_version}",
            "GET",
            header_params={"Accept": "application/json"},
            response_type="V1APIResourceList",
            auth_settings=["BearerToken"],
            _return_http_data_only=True,
        )
