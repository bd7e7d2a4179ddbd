"""Data models for counting results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from kube_count.domains.catalog.models import ResourceTypeIdentity


class SortOrder(str, Enum):
    """Direction for sorting counts within one resource type."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: str | None) -> SortOrder:
        """Parse a flag value; "desc" or "d" sort descending, anything else ascending."""
        if value and value.strip().lower() in ("desc", "d"):
            return cls.DESC
        return cls.ASC


@dataclass(frozen=True)
class ResolutionResult:
    """Resource types resolved from a token list.

    ``order`` keeps one entry per match in the order tokens were resolved,
    including repeats when the same token is given twice. ``identities`` is
    the same sequence without repeats.
    """

    identities: tuple[ResourceTypeIdentity, ...]
    order: tuple[ResourceTypeIdentity, ...]


@dataclass(frozen=True)
class Record:
    """Object count for one resource type in one namespace.

    The namespace is empty for cluster-scoped objects and for totals
    collapsed across namespaces.
    """

    namespace: str
    identity: ResourceTypeIdentity
    count: int

    @property
    def kind(self) -> str:
        return self.identity.kind

    @property
    def group_version(self) -> str:
        return self.identity.group_version

    def to_dict(self) -> dict[str, Any]:
        """Serializable form used for JSON and YAML output."""
        return {
            "namespace": self.namespace,
            "kind": self.kind,
            "groupVersion": self.group_version,
            "count": self.count,
        }
