"""Models for the resource type catalog."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class ResourceTypeIdentity:
    """A concrete resource type served by the cluster.

    Kinds served under several group/versions are distinct identities.
    """

    kind: str
    group: str
    version: str
    plural: str

    @property
    def group_version(self) -> str:
        """Group/version string, e.g. "v1" for core or "apps/v1"."""
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"

    def __str__(self) -> str:
        return f"{self.kind} ({self.group_version})"


class ResourceTypeDescriptor(BaseModel):
    """Catalog entry for one resource type, with every name it answers to."""

    kind: str = Field(..., description="Resource kind, e.g. Deployment")
    group: str = Field("", description="API group, empty for the core group")
    version: str = Field(..., description="API version within the group")
    plural: str = Field(..., description="Plural resource name, e.g. deployments")
    singular: str = Field("", description="Singular resource name")
    short_names: list[str] = Field(default_factory=list, description="Short aliases")
    namespaced: bool = Field(True, description="Whether objects live in namespaces")
    verbs: list[str] = Field(default_factory=list, description="Supported API verbs")

    @property
    def identity(self) -> ResourceTypeIdentity:
        return ResourceTypeIdentity(
            kind=self.kind,
            group=self.group,
            version=self.version,
            plural=self.plural,
        )

    def alias_keys(self) -> list[str]:
        """Every lookup key this type is indexed under, without duplicates."""
        keys = [self.plural, self.kind.lower(), f"{self.plural}.{self.group}"]
        keys.extend(self.short_names)
        if self.singular:
            keys.append(self.singular)
        return list(dict.fromkeys(keys))

    @property
    def is_watchable(self) -> bool:
        """True for top-level resources that support both list and watch."""
        if "/" in self.plural:
            return False
        return "list" in self.verbs and "watch" in self.verbs
