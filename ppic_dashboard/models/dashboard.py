from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import reduce

from .invoice import InvoiceRecord
from .line_item import ProductionLineItem

"""Dashboard aggregate models.

SummaryTotals is an immutable fold result over accepted line items, and
DashboardModel is the top-level parse result handed to renderers and to the
insight advisor. Both are created fresh per parse and never mutated.
"""

__all__ = [
    "SummaryTotals",
    "DashboardModel",
]


@dataclass(frozen=True)
class SummaryTotals:
    """Scalar sums across all accepted ProductionLineItems."""
    total_po_qty: int = 0
    total_stock_in: int = 0
    total_remaining: int = 0
    total_rework: int = 0
    total_inventory: int = 0

    def add(self, item: ProductionLineItem) -> SummaryTotals:
        """Return a new SummaryTotals including ``item``."""
        return SummaryTotals(
            total_po_qty=self.total_po_qty + item.po_qty,
            total_stock_in=self.total_stock_in + item.stock_in,
            total_remaining=self.total_remaining + item.remaining,
            total_rework=self.total_rework + item.rework_qty,
            total_inventory=self.total_inventory + item.finished_goods_inventory,
        )

    @classmethod
    def of(cls, items: Iterable[ProductionLineItem]) -> SummaryTotals:
        return reduce(lambda acc, item: acc.add(item), items, cls())

    @property
    def production_ratio(self) -> float:
        """Overall stock-in vs PO quantity in percent (0 when nothing ordered)."""
        if self.total_po_qty == 0:
            return 0.0
        return self.total_stock_in / self.total_po_qty * 100


@dataclass(frozen=True)
class DashboardModel:
    """Parse result: invoices, line items and their totals.

    ``invoices`` and every item's ``invoice_qtys`` share the same column order.
    """
    invoices: tuple[InvoiceRecord, ...] = ()
    items: tuple[ProductionLineItem, ...] = ()
    summary: SummaryTotals = field(default_factory=SummaryTotals)
