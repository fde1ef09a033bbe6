from __future__ import annotations

import re

"""SUMMARY line format contract."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+invoices=([0-9]+)\s+items=([0-9]+)\s+po_qty=(-?[0-9]+)\s+"
    r"stock_in=(-?[0-9]+)\s+remaining=(-?[0-9]+)\s+rework=(-?[0-9]+)\s+"
    r"inventory=(-?[0-9]+)\s+ratio=(-?[0-9]+(?:\.[0-9])?)$"
)


def test_summary_pattern_example_line():
    line = (
        "SUMMARY invoices=2 items=1 po_qty=1000 stock_in=800 remaining=200 "
        "rework=15 inventory=300 ratio=80"
    )
    assert SUMMARY_PATTERN.match(line), "SUMMARY line should match contract regex"


def test_summary_pattern_rejects_thousands_separators():
    line = (
        "SUMMARY invoices=2 items=1 po_qty=1,000 stock_in=800 remaining=200 "
        "rework=15 inventory=300 ratio=80"
    )
    assert SUMMARY_PATTERN.match(line) is None
