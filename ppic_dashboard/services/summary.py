from __future__ import annotations

from ..models.dashboard import DashboardModel

"""SUMMARY line rendering.

Format:
SUMMARY invoices={n} items={n} po_qty={n} stock_in={n} remaining={n}
rework={n} inventory={n} ratio={pct}
"""


def _format_ratio(value: float) -> str:
    rounded = round(value, 1)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.1f}"


def render_summary_line(model: DashboardModel) -> str:
    """Render the SUMMARY line for a parsed model.

    ``ratio`` is total stock-in over total PO quantity in percent, one decimal
    place, integers without a decimal point.

    Examples:
        >>> from ppic_dashboard.models import DashboardModel, SummaryTotals
        >>> model = DashboardModel(summary=SummaryTotals(total_po_qty=200, total_stock_in=150))
        >>> render_summary_line(model)
        'SUMMARY invoices=0 items=0 po_qty=200 stock_in=150 remaining=0 rework=0 inventory=0 ratio=75'
    """
    s = model.summary
    return (
        f"SUMMARY invoices={len(model.invoices)} "
        f"items={len(model.items)} "
        f"po_qty={s.total_po_qty} "
        f"stock_in={s.total_stock_in} "
        f"remaining={s.total_remaining} "
        f"rework={s.total_rework} "
        f"inventory={s.total_inventory} "
        f"ratio={_format_ratio(s.production_ratio)}"
    )
