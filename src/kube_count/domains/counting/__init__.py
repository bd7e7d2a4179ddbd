"""Counting domain: token resolution, the shared counter and aggregation."""

from kube_count.domains.counting.aggregator import aggregate
from kube_count.domains.counting.models import Record, ResolutionResult, SortOrder
from kube_count.domains.counting.resolver import ResourceTypeResolver, split_tokens
from kube_count.domains.counting.store import CounterStore

__all__ = [
    "CounterStore",
    "Record",
    "ResolutionResult",
    "ResourceTypeResolver",
    "SortOrder",
    "aggregate",
    "split_tokens",
]
