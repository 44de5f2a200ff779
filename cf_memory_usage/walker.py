"""
Walk orgs -> spaces -> apps -> instance stats and collect one usage record
per running instance.

The walk is sequential and fail-fast: the first fetch error propagates out
of `walk` and nothing collected so far is returned.
"""

import logging
from typing import NamedTuple, Tuple

from cf_memory_usage.errors import MalformedResourceError

log = logging.getLogger(__name__)

STOPPED = "STOPPED"


class LeafUsageRecord(NamedTuple):
    path: Tuple[str, ...]
    memory_usage: int
    memory_quota: int

    @property
    def key(self) -> str:
        return "/".join(self.path)


def no_slash(name) -> str:
    if name is None:
        return ""
    return str(name).replace("/", "-")


def field(resource: dict, section: str, name: str):
    try:
        return resource[section][name]
    except (KeyError, TypeError):
        raise MalformedResourceError(f"{section}.{name}", resource)


def enabled_buildpacks(client) -> set:
    """
    Names of the enabled buildpacks on the platform.

    Usage records are not joined against this set; a report run fetches it
    once and only logs the count.
    """
    return {
        field(bp, "entity", "name")
        for bp in client.list("/v2/buildpacks")
        if bp.get("entity", {}).get("enabled")
    }


def instance_records(path: tuple, stats: dict):
    """
    Yield a leaf per entry of an app's stats, keyed by instance index.

    DOWN and CRASHED instances come back without a `stats` object and count
    as zero usage and zero quota.
    """
    for index, instance in stats.items():
        if not isinstance(instance, dict):
            raise MalformedResourceError("stats", {index: instance})
        s = instance.get("stats") or {}
        usage = (s.get("usage") or {}).get("mem") or 0
        quota = s.get("mem_quota") or 0
        yield LeafUsageRecord(
            path=path + (no_slash(index),),
            memory_usage=int(usage),
            memory_quota=int(quota),
        )


def iter_leaves(client):
    for org in client.list("/v2/organizations"):
        org_name = no_slash(field(org, "entity", "name"))
        for space in client.list(field(org, "entity", "spaces_url")):
            space_name = no_slash(field(space, "entity", "name"))
            for app in client.list(field(space, "entity", "apps_url")):
                app_name = no_slash(field(app, "entity", "name"))
                if app["entity"].get("state") == STOPPED:
                    log.debug("skipping stopped app %s/%s/%s", org_name, space_name, app_name)
                    continue
                stats = client.get(field(app, "metadata", "url") + "/stats")
                yield from instance_records((org_name, space_name, app_name), stats)


def walk(client) -> list:
    leaves = list(iter_leaves(client))
    log.info("found %d running instances", len(leaves))
    return leaves
