from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from pathlib import Path

from dotenv import load_dotenv

from ppic_dashboard.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config, resolve_api_key
from ppic_dashboard.logging.init import log_summary, setup_logging
from ppic_dashboard.models.config_models import DashboardConfig, InsightConfig, SheetSourceConfig
from ppic_dashboard.models.dashboard import DashboardModel
from ppic_dashboard.services.breakdown import invoice_allocations, items_frame, top_customers, top_rework_items
from ppic_dashboard.services.fetch import SheetFetchError, fetch_sheet_csv, read_sheet_file
from ppic_dashboard.services.insights import InsightAdvisor, MockLLMAdapter, OpenAILLMAdapter, split_insights
from ppic_dashboard.services.refresh import DashboardState, RefreshInProgressError, run_watch
from ppic_dashboard.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then config/dashboard.yml (optional when --source is given)
- Fetch the sheet CSV (or read --source) and parse it
- Log breakdowns and the SUMMARY line; optionally ask the LLM advisor
- --watch repeats the cycle every refresh_interval_seconds
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

INSPECT_ROWS = 10


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env so that its values take precedence over the process env."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="PPIC production dashboard (sheet CSV -> metrics)")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to dashboard.yml")
    p.add_argument("--source", type=Path, default=None, help="Parse a saved CSV export instead of fetching")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print invoices & first item rows then exit")
    p.add_argument("--insights", action="store_true", help="Ask the LLM advisor for insights")
    p.add_argument("--offline", action="store_true", help="Use the canned advisor instead of the LLM API")
    p.add_argument("--watch", action="store_true", help="Refresh every refresh_interval_seconds")
    p.add_argument("--cycles", type=int, default=None, help="Number of refresh cycles in --watch mode")
    return p.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> DashboardConfig:
    # --source 指定時は設定ファイルなしでも動かす
    if args.source is not None and not args.config.exists():
        return DashboardConfig(
            sheet=SheetSourceConfig(url=""),
            insights=InsightConfig(api_key=resolve_api_key()),
        )
    return load_config(args.config)


def _make_loader(args: argparse.Namespace, cfg: DashboardConfig) -> Callable[[], str]:
    if args.source is not None:
        source: Path = args.source
        return lambda: read_sheet_file(source)
    return lambda: fetch_sheet_csv(cfg.sheet.url, timeout=cfg.sheet.timeout_seconds)


def _inspect_data(model: DashboardModel) -> None:
    print(f"INVOICES: {len(model.invoices)}")
    for k, inv in enumerate(model.invoices):
        day = inv.export_day
        print(
            f"  [{k}] {inv.invoice_title or '-'} brand={inv.brand} date={inv.export_date}"
            f" ({day.isoformat() if day else 'unparsed'}) qty={inv.total_qty} container={inv.container_info}"
        )
    print(f"ITEMS: {len(model.items)}")
    if model.items:
        print(items_frame(model).head(INSPECT_ROWS).to_string(index=False))


def _report(model: DashboardModel, logger) -> None:
    for customer, qty in top_customers(model):
        logger.info(f"customer {customer or '-'} po_qty={qty:,}")
    for item in top_rework_items(model):
        logger.info(
            f"rework {item.part_no} ({item.customer}) rework={item.rework_qty:,} po_qty={item.po_qty:,}"
        )
    for inv, allocated in invoice_allocations(model):
        logger.info(f"invoice {inv.invoice_title or inv.brand} total={inv.total_qty:,} allocated={allocated:,}")


def _run_insights(model: DashboardModel, cfg: DashboardConfig, offline: bool, logger) -> None:
    if offline:
        adapter = MockLLMAdapter()
    else:
        if not cfg.insights.api_key:
            logger.warning("insights: no API key (GEMINI_API_KEY / API_KEY / OPENAI_API_KEY); skipped")
            return
        adapter = OpenAILLMAdapter.from_config(cfg.insights)
    advisor = InsightAdvisor(adapter, top_items=cfg.insights.top_items)
    for line in split_insights(advisor.generate(model)):
        logger.info(f"insight {line}")


def _emit_summary(model: DashboardModel) -> None:
    # log_summary が "SUMMARY " を付与するので除去
    log_summary(render_summary_line(model)[len("SUMMARY "):])


def main(argv: list[str] | None = None) -> int:
    # [] が渡された場合に sys.argv を読まないよう None のときのみ参照
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    if args.debug:
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = _resolve_config(args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.source is not None and not args.source.exists():
        logger.error(f"source not found: {args.source}")
        return EXIT_FATAL

    state = DashboardState(_make_loader(args, cfg))

    if args.watch:
        ignored = [opt for opt, on in (("--inspect-data", args.inspect_data), ("--insights", args.insights)) if on]
        if ignored:
            logger.warning(f"watch mode ignores {' '.join(ignored)}")
        logger.info(f"watch mode interval={cfg.refresh_interval_seconds}s cycles={args.cycles or 'unbounded'}")
        try:
            run_watch(state, cfg.refresh_interval_seconds, cycles=args.cycles, on_update=_emit_summary)
        except KeyboardInterrupt:
            logger.info("watch stopped")
        return EXIT_SUCCESS if state.current is not None else EXIT_FATAL

    try:
        model = state.refresh()
    except SheetFetchError as e:
        logger.error(f"fetch: {e}")
        logger.info("retry: run the command again, or pass --source with a saved CSV export")
        return EXIT_FATAL
    except RefreshInProgressError as e:  # pragma: no cover (single-threaded CLI)
        logger.error(f"refresh: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        _inspect_data(model)
        return EXIT_SUCCESS

    _report(model, logger)
    if args.insights:
        _run_insights(model, cfg, args.offline, logger)

    _emit_summary(model)
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
