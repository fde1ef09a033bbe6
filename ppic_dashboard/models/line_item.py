from __future__ import annotations

from dataclasses import dataclass

"""ProductionLineItem model for the PPIC dashboard.

A ProductionLineItem is one accepted row of the production / inventory ledger
(sheet row 6 onwards). Identifying fields default to "" and quantity fields
to 0 when the sheet cell is missing or unparsable.
"""

__all__ = [
    "ProductionLineItem",
]


@dataclass(frozen=True)
class ProductionLineItem:
    """One line of the production ledger.

    ``invoice_qtys[k]`` is the quantity of this item allocated to the k-th
    InvoiceRecord of the same DashboardModel.
    """
    po_no: str = ""
    wo_no: str = ""
    part_no: str = ""
    customer: str = ""
    item_type: str = ""
    size: str = ""
    color: str = ""
    po_qty: int = 0  # 受注数
    stock_in: int = 0  # 入庫数
    remaining: int = 0  # 残数
    used_for_shipment: int = 0
    ready_for_shipment: int = 0
    rework_qty: int = 0  # 不良 / 手直し
    finished_goods_inventory: int = 0  # 完成品在庫
    invoice_qtys: tuple[int, ...] = ()

    def qty_for_invoice(self, index: int) -> int:
        """Quantity allocated to invoice ``index``; 0 when the column is absent."""
        if 0 <= index < len(self.invoice_qtys):
            return self.invoice_qtys[index]
        return 0

    @property
    def completion_percent(self) -> float:
        """Stock-in progress against the PO quantity, capped at 100."""
        if self.po_qty <= 0:
            return 0.0
        return min(self.stock_in / self.po_qty * 100, 100.0)
