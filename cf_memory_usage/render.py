import json

from tabulate import tabulate

UNITS = ["B", "KB", "MB", "GB", "TB", "PB", "EB"]
HEADERS = ["Key", "Usage", "Quota", "Percent"]


def to_human_size(b: int) -> str:
    for unit in UNITS[:-1]:
        if b < 1024:
            return f"{b} {unit}"
        b //= 1024
    return f"{b} {UNITS[-1]}"


def to_percent(num: int, denom: int) -> str:
    if denom == 0:
        return "NaN"
    return f"{num * 100 // denom}%"


def render_json(records) -> str:
    ordered = sorted(records, key=lambda r: r.key)
    return json.dumps([r.as_dict() for r in ordered]) + "\n"


def render_table(records) -> str:
    # sorted() is stable, ties keep the aggregator's key order
    ordered = sorted(records, key=lambda r: r.memory_quota, reverse=True)
    rows = [
        [
            f"/{r.key}",
            to_human_size(r.memory_usage),
            to_human_size(r.memory_quota),
            to_percent(r.memory_usage, r.memory_quota),
        ]
        for r in ordered
    ]
    return tabulate(rows, headers=HEADERS, tablefmt="grid", disable_numparse=True) + "\n"


def render(records, output_json: bool = False) -> str:
    if output_json:
        return render_json(records)
    return render_table(records)
