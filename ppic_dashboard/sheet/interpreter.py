from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from enum import Enum

from ..models.dashboard import DashboardModel, SummaryTotals
from ..models.invoice import InvoiceRecord
from ..models.line_item import ProductionLineItem
from .layout import (
    INVOICE_COL_START,
    ITEM_ROW_START,
    KEY_COLUMNS,
    LIMIT_SENTINEL,
    METADATA_ROW_COUNT,
    QUANTITY_COLUMNS,
    TEXT_COLUMNS,
    MetadataRow,
)
from .tokenizer import tokenize

"""Sheet interpreter: tokenized rows -> DashboardModel.

Two passes over the same row/column space:
1. invoice metadata block (rows 0-4) read column-wise from INVOICE_COL_START
   until the first empty brand cell
2. line items from ITEM_ROW_START until a LIMIT sentinel row or end of input;
   stray rows with empty key columns are skipped

Data-quality problems never raise: missing text cells become "" and
missing / unparsable quantities become 0. Totals are folded only over the
accepted items.
"""

__all__ = [
    "ScanSignal",
    "interpret",
    "parse_dashboard",
    "parse_invoices",
    "parse_line_item",
    "parse_quantity",
    "is_blank_key_row",
    "scan_signal",
]

logger = logging.getLogger(__name__)

# 先頭の符号付き整数のみ採用 ("12.5" -> 12, "12pcs" -> 12)
_LEADING_INT = re.compile(r"[+-]?\d+")


class ScanSignal(Enum):
    """Result of the per-row sentinel check."""
    CONTINUE = "continue"
    STOP = "stop"


def _cell(row: Sequence[str], index: int) -> str:
    if index < len(row):
        return row[index]
    return ""


def parse_quantity(raw: str) -> int:
    """Parse a sheet numeral such as ``"1,234"``.

    Commas (thousands separators) are removed, then the leading signed integer
    is read. Empty or non-numeric text yields 0. The sign is kept as-is.
    """
    cleaned = raw.replace(",", "").strip()
    match = _LEADING_INT.match(cleaned)
    if match is None:
        return 0
    return int(match.group(0))


def scan_signal(row: Sequence[str]) -> ScanSignal:
    """STOP when any field is the LIMIT sentinel (case-insensitive, trimmed)."""
    sentinel = LIMIT_SENTINEL.casefold()
    for value in row:
        # upper() は "ı" -> "I" のような非 ASCII も一致させるため casefold で比較
        if value.strip().casefold() == sentinel:
            return ScanSignal.STOP
    return ScanSignal.CONTINUE


def is_blank_key_row(row: Sequence[str]) -> bool:
    """True when PO No, WO No, Part No and PO Qty are all empty."""
    return all(not _cell(row, col.value).strip() for col in KEY_COLUMNS)


def parse_invoices(rows: Sequence[Sequence[str]]) -> list[InvoiceRecord]:
    """Read the invoice metadata block.

    The block ends at the first empty brand cell; a real invoice with a blank
    brand therefore truncates every invoice after it.
    """
    if len(rows) < METADATA_ROW_COUNT:
        return []

    def meta(kind: MetadataRow, col: int) -> str:
        return _cell(rows[kind.value], col)

    invoices: list[InvoiceRecord] = []
    brand_row = rows[MetadataRow.BRAND.value]
    for col in range(INVOICE_COL_START, len(brand_row)):
        brand = brand_row[col]
        if not brand:
            break
        invoices.append(
            InvoiceRecord(
                brand=brand,
                export_date=meta(MetadataRow.EXPORT_DATE, col),
                total_qty=parse_quantity(meta(MetadataRow.TOTAL_QTY, col)),
                container_info=meta(MetadataRow.CONTAINER_INFO, col),
                invoice_title=meta(MetadataRow.INVOICE_TITLE, col),
            )
        )
    return invoices


def parse_line_item(row: Sequence[str], invoice_count: int) -> ProductionLineItem:
    """Map one accepted row to a ProductionLineItem.

    ``invoice_qtys`` is aligned with the invoice block: exactly
    ``invoice_count`` entries read from INVOICE_COL_START, missing cells as 0.
    """
    values: dict[str, object] = {}
    for col in TEXT_COLUMNS:
        values[col.field_name] = _cell(row, col.value)
    for col in QUANTITY_COLUMNS:
        values[col.field_name] = parse_quantity(_cell(row, col.value))
    values["invoice_qtys"] = tuple(
        parse_quantity(_cell(row, INVOICE_COL_START + k)) for k in range(invoice_count)
    )
    return ProductionLineItem(**values)  # type: ignore[arg-type]


def interpret(rows: Sequence[Sequence[str]]) -> DashboardModel:
    """Apply the sheet layout conventions to tokenized ``rows``."""
    invoices = parse_invoices(rows)

    items: list[ProductionLineItem] = []
    skipped = 0
    stopped_at: int | None = None
    for index in range(ITEM_ROW_START, len(rows)):
        row = rows[index]
        if scan_signal(row) is ScanSignal.STOP:
            stopped_at = index
            break
        if is_blank_key_row(row):
            skipped += 1
            continue
        items.append(parse_line_item(row, len(invoices)))

    if stopped_at is not None:
        logger.debug(f"{LIMIT_SENTINEL} sentinel at row {stopped_at + 1}; remaining rows ignored")
    if skipped:
        logger.debug(f"skipped {skipped} blank key rows")

    summary = SummaryTotals.of(items)
    logger.info(f"parsed invoices={len(invoices)} items={len(items)}")
    return DashboardModel(invoices=tuple(invoices), items=tuple(items), summary=summary)


def parse_dashboard(text: str) -> DashboardModel:
    """Tokenize CSV ``text`` and interpret it as the production sheet."""
    return interpret(tokenize(text))
