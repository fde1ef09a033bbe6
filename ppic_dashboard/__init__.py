"""PPIC production dashboard core.

Parses the production / shipment ledger sheet (CSV export) into a
DashboardModel and derives totals, breakdowns and LLM insights from it.
"""

from .sheet.interpreter import parse_dashboard

__all__ = ["parse_dashboard"]
