# Shared pytest fixtures
from __future__ import annotations

import csv
import io
import tempfile
from pathlib import Path

import pytest

from ppic_dashboard.logging.init import reset_logging

SHEET_WIDTH = 16  # columns A..P before the invoice block


def item_row(
    po_no: str = "",
    wo_no: str = "",
    part_no: str = "",
    customer: str = "",
    item_type: str = "",
    size: str = "",
    color: str = "",
    po_qty: str = "",
    stock_in: str = "",
    remaining: str = "",
    used: str = "",
    ready: str = "",
    rework: str = "",
    inventory: str = "",
    invoice_qtys: list[str] | None = None,
) -> list[str]:
    row = [po_no, wo_no, part_no, customer, item_type, size, "", color,
           po_qty, stock_in, remaining, used, ready, rework, inventory, ""]
    return row + list(invoice_qtys or [])


def metadata_rows(invoices: list[tuple[str, str, str, str, str]]) -> list[list[str]]:
    """Rows 1-5: (brand, export_date, total_qty, container, title) per invoice."""
    rows = []
    for field_index in range(5):
        row = [""] * SHEET_WIDTH
        row.extend(inv[field_index] for inv in invoices)
        rows.append(row)
    return rows


def to_csv(rows: list[list[str]], line_terminator: str = "\n") -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator=line_terminator)
    writer.writerows(rows)
    return buf.getvalue()


SAMPLE_INVOICES = [
    ("ACME", "05/03/2025", "1,200", "1x40HQ", "INV-250001"),
    ("NORTHWIND", "2025-03-12", "800", "1x20GP", "INV-250002"),
]


@pytest.fixture()
def sample_rows() -> list[list[str]]:
    rows = metadata_rows(SAMPLE_INVOICES)
    rows.append(item_row("PO-1", "WO-1", "P-100", "Acme Corp", "Bag", "L", "Black",
                         "1,000", "800", "200", "500", "300", "15", "300", ["500", "300"]))
    rows.append(item_row("PO-2", "WO-2", "P-200", "Northwind", "Box", "M", "Red",
                         "400", "400", "0", "400", "0", "", "0", ["", "400"]))
    rows.append(item_row())  # stray blank row
    rows.append(item_row("PO-3", "WO-3", "P-300", "Acme Corp", "Bag", "S", "Blue",
                         "2,500", "1,000", "1,500", "0", "1,000", "40", "1,000", ["700"]))
    rows.append(["LIMIT"] + [""] * 15)
    rows.append(item_row("PO-9", "WO-9", "P-900", "Ghost", "Bag", "S", "Blue",
                         "9,999", "9,999", "0", "0", "0", "99", "9,999", ["1", "1"]))
    return rows


@pytest.fixture()
def sample_csv(sample_rows: list[list[str]]) -> str:
    return to_csv(sample_rows)


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """sheet:
  url: https://example.com/sheet/export?format=csv
  timeout_seconds: 5
insights:
  model: gemini-2.0-flash
  max_tokens: 256
  top_items: 3
refresh_interval_seconds: 60
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "dashboard.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def write_sheet(temp_workdir: Path, sample_csv: str) -> Path:
    path = temp_workdir / "data" / "sheet.csv"
    path.write_text(sample_csv, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in ("PPIC_SHEET_URL", "GEMINI_API_KEY", "API_KEY", "OPENAI_API_KEY"):
        monkeypatch.delenv(name, raising=False)
