"""Domain models for the PPIC production dashboard.

Invoice / line item / totals models produced by the sheet interpreter, plus the
configuration dataclasses filled by the config loader.
"""

from .config_models import DashboardConfig, InsightConfig, SheetSourceConfig
from .dashboard import DashboardModel, SummaryTotals
from .invoice import InvoiceRecord
from .line_item import ProductionLineItem

__all__ = [
    # Configuration models
    "DashboardConfig",
    "InsightConfig",
    "SheetSourceConfig",
    # Parse result models
    "DashboardModel",
    "InvoiceRecord",
    "ProductionLineItem",
    "SummaryTotals",
]
