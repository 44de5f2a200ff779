from collections import defaultdict
from typing import NamedTuple


class AggregateRecord(NamedTuple):
    key: str
    memory_usage: int
    memory_quota: int

    def as_dict(self) -> dict:
        return {
            "Key": self.key,
            "MemoryUsage": self.memory_usage,
            "MemoryQuota": self.memory_quota,
        }


def prefixes(path: tuple):
    """Every prefix of path joined by '/', from the root ("") to the full path."""
    for i in range(len(path) + 1):
        yield "/".join(path[:i])


def aggregate(leaves) -> list:
    """
    Sum usage and quota for every distinct path prefix across all leaves.

    A leaf contributes to each of its prefixes, including its own full path
    and the empty root key. Records come back ordered by key so the result
    doesn't depend on the order leaves were discovered in.
    """
    usage, quota = defaultdict(int), defaultdict(int)
    for leaf in leaves:
        for key in prefixes(leaf.path):
            usage[key] += leaf.memory_usage
            quota[key] += leaf.memory_quota

    return [AggregateRecord(key, usage[key], quota[key]) for key in sorted(quota)]
