"""Shared fixtures: catalog entries, identities and in-memory watch streams."""

from __future__ import annotations

import pytest

from kube_count.config import CountConfig
from kube_count.domains.catalog.models import ResourceTypeDescriptor, ResourceTypeIdentity
from tests.fakes import FakeCatalog, FakeStreamSource

WATCH_VERBS = ["get", "list", "watch"]


@pytest.fixture
def pod_descriptor() -> ResourceTypeDescriptor:
    return ResourceTypeDescriptor(
        kind="Pod",
        group="",
        version="v1",
        plural="pods",
        singular="pod",
        short_names=["po"],
        verbs=WATCH_VERBS,
    )


@pytest.fixture
def deployment_descriptor() -> ResourceTypeDescriptor:
    return ResourceTypeDescriptor(
        kind="Deployment",
        group="apps",
        version="v1",
        plural="deployments",
        singular="deployment",
        short_names=["deploy"],
        verbs=WATCH_VERBS,
    )


@pytest.fixture
def node_descriptor() -> ResourceTypeDescriptor:
    return ResourceTypeDescriptor(
        kind="Node",
        group="",
        version="v1",
        plural="nodes",
        singular="node",
        short_names=["no"],
        namespaced=False,
        verbs=WATCH_VERBS,
    )


@pytest.fixture
def hpa_descriptors() -> list[ResourceTypeDescriptor]:
    """The same kind served by two versions of the autoscaling group."""
    return [
        ResourceTypeDescriptor(
            kind="HorizontalPodAutoscaler",
            group="autoscaling",
            version=version,
            plural="horizontalpodautoscalers",
            singular="horizontalpodautoscaler",
            short_names=["hpa"],
            verbs=WATCH_VERBS,
        )
        for version in ("v1", "v2")
    ]


@pytest.fixture
def descriptors(
    pod_descriptor: ResourceTypeDescriptor,
    deployment_descriptor: ResourceTypeDescriptor,
    node_descriptor: ResourceTypeDescriptor,
    hpa_descriptors: list[ResourceTypeDescriptor],
) -> list[ResourceTypeDescriptor]:
    return [pod_descriptor, deployment_descriptor, node_descriptor, *hpa_descriptors]


@pytest.fixture
def pod(pod_descriptor: ResourceTypeDescriptor) -> ResourceTypeIdentity:
    return pod_descriptor.identity


@pytest.fixture
def deployment(deployment_descriptor: ResourceTypeDescriptor) -> ResourceTypeIdentity:
    return deployment_descriptor.identity


@pytest.fixture
def hpa_v1(hpa_descriptors: list[ResourceTypeDescriptor]) -> ResourceTypeIdentity:
    return hpa_descriptors[0].identity


@pytest.fixture
def hpa_v2(hpa_descriptors: list[ResourceTypeDescriptor]) -> ResourceTypeIdentity:
    return hpa_descriptors[1].identity


@pytest.fixture
def catalog(descriptors: list[ResourceTypeDescriptor]) -> FakeCatalog:
    return FakeCatalog(descriptors)


@pytest.fixture
def source() -> FakeStreamSource:
    return FakeStreamSource()


@pytest.fixture
def config() -> CountConfig:
    """Config with short timeouts, independent of the environment."""
    return CountConfig(
        _env_file=None,
        sync_timeout_seconds=2.0,
        sync_poll_interval_seconds=0.01,
        shutdown_timeout_seconds=1.0,
    )
