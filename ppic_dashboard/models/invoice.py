from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..sheet.dates import parse_export_date

"""InvoiceRecord model for the PPIC dashboard.

One outbound shipment / invoice column of the production sheet. Invoices are
read from the metadata block (rows 1-5) starting at column Q, one invoice per
column, and keep the same column order as the invoice quantities of every
line item.
"""

__all__ = [
    "InvoiceRecord",
]


@dataclass(frozen=True)
class InvoiceRecord:
    """Outbound shipment descriptor taken from one invoice column.

    Attributes:
        brand: Brand label from row 1 (not unique across invoices)
        export_date: Export date text from row 2, format not normalized
        total_qty: Total shipped quantity from row 3
        container_info: Container description from row 4
        invoice_title: Invoice identifier from row 5 (display / search key)
    """
    brand: str
    export_date: str = ""
    total_qty: int = 0
    container_info: str = ""
    invoice_title: str = ""

    @property
    def export_day(self) -> date | None:
        """Export date parsed through the date parser chain (None if unknown)."""
        return parse_export_date(self.export_date)
