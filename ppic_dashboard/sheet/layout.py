from __future__ import annotations

from enum import Enum

"""Fixed positional layout of the production sheet (PPIC ledger).

All row / column indices used by the interpreter live here (0-based):

Metadata block (rows 1-5 in the sheet), one invoice per column from column Q:
    row 0 brand / row 1 export date / row 2 total qty / row 3 container / row 4 invoice title

Line items (row 6 onwards), by column:
    A PO No / B WO No / C Part No / D Customer / E Type / F Size / H Color
    I PO Qty / J Stock In / K Remaining / L Used for shipment / M Ready for shipment
    N Rework / O Finished goods inventory / Q.. invoice quantities

Column G (index 6) and P (index 15) are not read.
"""

__all__ = [
    "INVOICE_COL_START",
    "ITEM_ROW_START",
    "METADATA_ROW_COUNT",
    "LIMIT_SENTINEL",
    "MetadataRow",
    "ItemColumn",
    "TEXT_COLUMNS",
    "QUANTITY_COLUMNS",
    "KEY_COLUMNS",
]

INVOICE_COL_START = 16  # Column Q
METADATA_ROW_COUNT = 5
ITEM_ROW_START = METADATA_ROW_COUNT  # sheet row 6
LIMIT_SENTINEL = "LIMIT"  # シート管理者が有効データ末尾に置く行


class MetadataRow(Enum):
    """Row index of each invoice attribute in the metadata block."""
    BRAND = 0
    EXPORT_DATE = 1
    TOTAL_QTY = 2
    CONTAINER_INFO = 3
    INVOICE_TITLE = 4


class ItemColumn(Enum):
    """Column index of each line item attribute.

    Member names match ProductionLineItem field names (lower-cased).
    """
    PO_NO = 0
    WO_NO = 1
    PART_NO = 2
    CUSTOMER = 3
    ITEM_TYPE = 4
    SIZE = 5
    COLOR = 7
    PO_QTY = 8
    STOCK_IN = 9
    REMAINING = 10
    USED_FOR_SHIPMENT = 11
    READY_FOR_SHIPMENT = 12
    REWORK_QTY = 13
    FINISHED_GOODS_INVENTORY = 14

    @property
    def field_name(self) -> str:
        return self.name.lower()


TEXT_COLUMNS: tuple[ItemColumn, ...] = (
    ItemColumn.PO_NO,
    ItemColumn.WO_NO,
    ItemColumn.PART_NO,
    ItemColumn.CUSTOMER,
    ItemColumn.ITEM_TYPE,
    ItemColumn.SIZE,
    ItemColumn.COLOR,
)

QUANTITY_COLUMNS: tuple[ItemColumn, ...] = (
    ItemColumn.PO_QTY,
    ItemColumn.STOCK_IN,
    ItemColumn.REMAINING,
    ItemColumn.USED_FOR_SHIPMENT,
    ItemColumn.READY_FOR_SHIPMENT,
    ItemColumn.REWORK_QTY,
    ItemColumn.FINISHED_GOODS_INVENTORY,
)

# A row with all of these empty is a stray blank row
KEY_COLUMNS: tuple[ItemColumn, ...] = (
    ItemColumn.PO_NO,
    ItemColumn.WO_NO,
    ItemColumn.PART_NO,
    ItemColumn.PO_QTY,
)
