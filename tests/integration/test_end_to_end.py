from __future__ import annotations

from ppic_dashboard import parse_dashboard
from ppic_dashboard.models import SummaryTotals
from ppic_dashboard.services.breakdown import invoice_allocations
from ppic_dashboard.services.insights import InsightAdvisor, MockLLMAdapter, split_insights
from ppic_dashboard.services.refresh import DashboardState
from tests.conftest import item_row, metadata_rows, to_csv

"""End-to-end: CSV text -> DashboardModel -> totals / breakdowns / insights."""


def _synthetic_sheet() -> str:
    rows = metadata_rows([
        ("ACME", "01/02/2025", "1,000", "1x40HQ", "INV-1"),
        ("GLOBEX", "2025-02-15", "500", "LCL", "INV-2"),
    ])
    rows.append(item_row("PO-1", "WO-1", "P-1", "Acme", "Bag", "L", "Red",
                         "1,234", "1,000", "234", "600", "400", "12", "400", ["600", "0"]))
    rows.append(item_row(customer="Acme", rework="50", inventory="7"))  # blank key
    limit_row = item_row("PO-2", "WO-2", "P-2", "Globex", "Box", "S", "Blue",
                         "900", "900", "0", "0", "900", "3", "900", ["0", "500"])
    limit_row[15] = "LIMIT"  # column P
    rows.append(limit_row)
    return to_csv(rows, "\r\n")


def test_end_to_end_scenario():
    model = parse_dashboard(_synthetic_sheet())

    assert len(model.invoices) == 2
    assert [inv.brand for inv in model.invoices] == ["ACME", "GLOBEX"]
    assert model.invoices[0].total_qty == 1000

    assert len(model.items) == 1
    item = model.items[0]
    assert item.po_qty == 1234
    assert item.invoice_qtys == (600, 0)
    assert model.summary == SummaryTotals(
        total_po_qty=item.po_qty,
        total_stock_in=item.stock_in,
        total_remaining=item.remaining,
        total_rework=item.rework_qty,
        total_inventory=item.finished_goods_inventory,
    )
    assert [qty for _, qty in invoice_allocations(model)] == [600, 0]


def test_end_to_end_quoted_cells_with_line_breaks():
    rows = metadata_rows([("ACME", "", "10", "line one\nline two", "INV-1")])
    rows.append(item_row("PO-1", "WO-1", "P-1", "Acme, Inc.", po_qty="10", invoice_qtys=["10"]))
    model = parse_dashboard(to_csv(rows))
    assert model.invoices[0].container_info == "line one\nline two"
    assert model.items[0].customer == "Acme, Inc."
    assert model.items[0].invoice_qtys == (10,)


def test_refresh_then_insights(sample_csv):
    state = DashboardState(lambda: sample_csv)
    model = state.refresh()
    lines = split_insights(InsightAdvisor(MockLLMAdapter("- a\n\n- b")).generate(model))
    assert lines == ["- a", "- b"]
