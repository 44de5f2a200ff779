import json
import unittest

from cf_memory_usage.aggregate import AggregateRecord
from cf_memory_usage.render import render, to_human_size, to_percent

GB = 1024 ** 3


class TestHumanSize(unittest.TestCase):
    def test_sizes(self):
        cases = {
            0: "0 B",
            1023: "1023 B",
            1024: "1 KB",
            1536: "1 KB",
            1024 * 1024 - 1: "1023 KB",
            512 * 1024 * 1024: "512 MB",
            GB: "1 GB",
            1024 ** 6: "1 EB",
        }
        for value, expected in cases.items():
            self.assertEqual(to_human_size(value), expected, value)

    def test_beyond_largest_unit_stays_in_eb(self):
        self.assertEqual(to_human_size(2048 * 1024 ** 6), "2048 EB")


class TestPercent(unittest.TestCase):
    def test_rounds_down(self):
        self.assertEqual(to_percent(50, 200), "25%")
        self.assertEqual(to_percent(1, 3), "33%")
        self.assertEqual(to_percent(2, 3), "66%")

    def test_zero_quota(self):
        self.assertEqual(to_percent(0, 0), "NaN")
        self.assertEqual(to_percent(10, 0), "NaN")

    def test_over_quota_not_capped(self):
        self.assertEqual(to_percent(200, 100), "200%")


RECORDS = [
    AggregateRecord("", 3 * GB, 6 * GB),
    AggregateRecord("a", GB, 2 * GB),
    AggregateRecord("b", 2 * GB, 4 * GB),
    AggregateRecord("c", 0, 0),
]


class TestRender(unittest.TestCase):
    def test_json(self):
        out = render(list(reversed(RECORDS)), output_json=True)
        self.assertTrue(out.endswith("\n"))
        data = json.loads(out)
        self.assertEqual([d["Key"] for d in data], ["", "a", "b", "c"])
        self.assertEqual(data[1], {"Key": "a", "MemoryUsage": GB, "MemoryQuota": 2 * GB})

    def test_table_sorted_by_quota_descending(self):
        out = render(RECORDS)
        lines = out.splitlines()
        rows = [l for l in lines if l.startswith("| /")]
        self.assertEqual(len(rows), 4)
        self.assertIn("/ ", rows[0])
        self.assertIn("/b", rows[1])
        self.assertIn("/a", rows[2])
        self.assertIn("/c", rows[3])

    def test_table_columns(self):
        out = render(RECORDS)
        for header in ("Key", "Usage", "Quota", "Percent"):
            self.assertIn(header, out)
        row = next(l for l in out.splitlines() if "/b" in l)
        self.assertIn("2 GB", row)
        self.assertIn("4 GB", row)
        self.assertIn("50%", row)
        row = next(l for l in out.splitlines() if "/c" in l)
        self.assertIn("NaN", row)

    def test_table_ties_keep_input_order(self):
        ties = [AggregateRecord("x", 1, 10), AggregateRecord("y", 2, 10), AggregateRecord("z", 3, 10)]
        rows = [l for l in render(ties).splitlines() if l.startswith("| /")]
        self.assertEqual([r.split()[1] for r in rows], ["/x", "/y", "/z"])


if __name__ == "__main__":
    unittest.main()
