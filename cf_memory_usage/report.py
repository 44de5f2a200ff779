import logging

from cf_memory_usage.aggregate import aggregate
from cf_memory_usage.render import render
from cf_memory_usage.walker import enabled_buildpacks, walk

log = logging.getLogger(__name__)


def report_memory_usage(client, output_json: bool = False) -> str:
    """
    Walk the whole installation and return the rendered report.

    Any fetch error propagates before anything is rendered, so callers never
    see a partial report.
    """
    buildpacks = enabled_buildpacks(client)
    log.info("%d enabled buildpacks", len(buildpacks))

    leaves = walk(client)
    records = aggregate(leaves)
    log.info("aggregated %d instances into %d rows", len(leaves), len(records))
    return render(records, output_json=output_json)
