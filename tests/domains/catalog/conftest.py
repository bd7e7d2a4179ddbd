"""Pytest fixtures for catalog tests."""

from unittest.mock import MagicMock

import pytest


def make_api_resource(
    name: str,
    kind: str,
    singular_name: str = "",
    short_names: list[str] | None = None,
    namespaced: bool = True,
    verbs: list[str] | None = None,
) -> MagicMock:
    """Create a mock V1APIResource."""
    resource = MagicMock()
    resource.name = name
    resource.kind = kind
    resource.singular_name = singular_name
    resource.short_names = short_names
    resource.namespaced = namespaced
    resource.verbs = ["get", "list", "watch"] if verbs is None else verbs
    return resource


def make_resource_list(group_version: str, resources: list[MagicMock]) -> MagicMock:
    """Create a mock V1APIResourceList."""
    resource_list = MagicMock()
    resource_list.group_version = group_version
    resource_list.resources = resources
    return resource_list


def make_api_group(name: str, versions: list[str], preferred: str) -> MagicMock:
    """Create a mock V1APIGroup."""
    group = MagicMock()
    group.name = name
    group.versions = [
        MagicMock(group_version=f"{name}/{v}", version=v) for v in versions
    ]
    group.preferred_version = MagicMock(group_version=f"{name}/{preferred}", version=preferred)
    return group


@pytest.fixture
def core_resources() -> MagicMock:
    """Core group discovery response with a subresource and a non-watchable type."""
    return make_resource_list(
        "v1",
        [
            make_api_resource("pods", "Pod", "pod", ["po"]),
            make_api_resource("pods/log", "Pod", verbs=["get"]),
            make_api_resource("nodes", "Node", "node", ["no"], namespaced=False),
            make_api_resource("bindings", "Binding", verbs=["create"]),
        ],
    )


@pytest.fixture
def apps_v1_resources() -> MagicMock:
    return make_resource_list(
        "apps/v1",
        [
            make_api_resource("deployments", "Deployment", "deployment", ["deploy"]),
            make_api_resource("daemonsets", "DaemonSet", "daemonset", ["ds"]),
        ],
    )


@pytest.fixture
def autoscaling_resources() -> dict[str, MagicMock]:
    """autoscaling/v1 and autoscaling/v2 both serve HorizontalPodAutoscaler."""
    return {
        "autoscaling/v1": make_resource_list(
            "autoscaling/v1",
            [make_api_resource("horizontalpodautoscalers", "HorizontalPodAutoscaler",
                               "horizontalpodautoscaler", ["hpa"])],
        ),
        "autoscaling/v2": make_resource_list(
            "autoscaling/v2",
            [make_api_resource("horizontalpodautoscalers", "HorizontalPodAutoscaler",
                               "horizontalpodautoscaler", ["hpa"])],
        ),
    }
