"""Resolve user supplied type tokens to concrete resource types."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from kube_count.domains.catalog.models import ResourceTypeDescriptor, ResourceTypeIdentity
from kube_count.domains.counting.models import ResolutionResult
from kube_count.utils.errors import ResolutionError

logger = logging.getLogger(__name__)


def split_tokens(raw: str) -> list[str]:
    """Split a comma-separated token list, trimming whitespace and dropping blanks."""
    tokens = []
    for part in raw.split(","):
        part = part.strip()
        if part:
            tokens.append(part)
    return tokens


def build_alias_index(
    descriptors: Iterable[ResourceTypeDescriptor],
) -> dict[str, list[ResourceTypeIdentity]]:
    """Index every catalog entry under each name it answers to.

    A key may map to several identities, e.g. "hpa" for the same kind served
    by two API versions. Identities keep catalog order under each key.
    """
    index: dict[str, list[ResourceTypeIdentity]] = {}
    for descriptor in descriptors:
        identity = descriptor.identity
        for key in descriptor.alias_keys():
            matches = index.setdefault(key, [])
            if identity not in matches:
                matches.append(identity)
    return index


class ResourceTypeResolver:
    """Maps tokens such as "po", "deploy" or "ingresses.networking.k8s.io" to identities."""

    def __init__(self, descriptors: Iterable[ResourceTypeDescriptor]) -> None:
        self._index = build_alias_index(descriptors)

    def lookup(self, token: str) -> list[ResourceTypeIdentity]:
        """Identities matching a single token, possibly empty."""
        return list(self._index.get(token, []))

    def resolve(self, raw: str) -> ResolutionResult:
        """Resolve a comma-separated token list.

        Tokens that match nothing are skipped. Repeated tokens are kept and
        produce repeated entries in the resolution order.

        Raises:
            ResolutionError: If no tokens are given or none of them match.
        """
        tokens = split_tokens(raw)
        if not tokens:
            raise ResolutionError(f"invalid input kind name: '{raw}'")

        order: list[ResourceTypeIdentity] = []
        for token in tokens:
            matches = self.lookup(token)
            if not matches:
                logger.debug(f"No resource type matches '{token}'")
                continue
            if len(matches) > 1:
                logger.debug(
                    f"'{token}' matches {len(matches)} resource types: "
                    + ", ".join(str(m) for m in matches)
                )
            order.extend(matches)

        if not order:
            raise ResolutionError(f"no matching resource types for '{raw}'")

        identities = tuple(dict.fromkeys(order))
        return ResolutionResult(identities=identities, order=tuple(order))
