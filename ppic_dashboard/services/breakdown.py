from __future__ import annotations

from dataclasses import asdict

import pandas as pd

from ..models.dashboard import DashboardModel
from ..models.invoice import InvoiceRecord
from ..models.line_item import ProductionLineItem

"""Per-entity breakdowns over a parsed DashboardModel.

Plain-data views for the rendering side: customer ranking by PO quantity,
rework ranking, per-invoice allocated quantity, and a flat item table.
"""

__all__ = [
    "ITEM_COLUMNS",
    "items_frame",
    "top_customers",
    "top_rework_items",
    "invoice_allocations",
]

ITEM_COLUMNS = [
    "po_no",
    "wo_no",
    "part_no",
    "customer",
    "item_type",
    "size",
    "color",
    "po_qty",
    "stock_in",
    "remaining",
    "used_for_shipment",
    "ready_for_shipment",
    "rework_qty",
    "finished_goods_inventory",
    "completion_percent",
]


def items_frame(model: DashboardModel) -> pd.DataFrame:
    """One row per line item (sheet order), scalar fields only."""
    records = []
    for item in model.items:
        rec = asdict(item)
        rec.pop("invoice_qtys")
        rec["completion_percent"] = item.completion_percent
        records.append(rec)
    return pd.DataFrame.from_records(records, columns=ITEM_COLUMNS)


def top_customers(model: DashboardModel, limit: int = 5) -> list[tuple[str, int]]:
    """Customers ranked by summed PO quantity, largest first.

    Ties keep first-appearance order in the sheet.
    """
    df = items_frame(model)
    if df.empty:
        return []
    totals = df.groupby("customer", sort=False)["po_qty"].sum()
    ranked = totals.sort_values(ascending=False, kind="stable").head(limit)
    return [(str(customer), int(qty)) for customer, qty in ranked.items()]


def top_rework_items(model: DashboardModel, limit: int = 5) -> list[ProductionLineItem]:
    """Items with rework, largest rework quantity first."""
    df = items_frame(model)
    if df.empty:
        return []
    with_rework = df[df["rework_qty"] > 0]
    ranked = with_rework.sort_values("rework_qty", ascending=False, kind="stable").head(limit)
    return [model.items[i] for i in ranked.index]


def invoice_allocations(model: DashboardModel) -> list[tuple[InvoiceRecord, int]]:
    """Each invoice with the quantity allocated to it across all items."""
    if not model.invoices:
        return []
    matrix = pd.DataFrame(
        [item.invoice_qtys for item in model.items],
        columns=range(len(model.invoices)),
    )
    sums = matrix.sum(axis=0) if not matrix.empty else pd.Series(0, index=matrix.columns)
    return [(invoice, int(sums[k])) for k, invoice in enumerate(model.invoices)]
