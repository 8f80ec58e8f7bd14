"""Main CLI entry point."""

import argparse
import json
import logging
import math
import sys
from datetime import datetime
from pathlib import Path

import httpx


def main() -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(
        prog="refi-radar",
        description="Mortgage opportunity scoring and rate monitoring",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress at INFO level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # payment
    payment_parser = subparsers.add_parser("payment", help="Monthly payment and refinance math")
    payment_parser.add_argument("--principal", type=float, required=True, help="Loan amount")
    payment_parser.add_argument("--rate", type=float, required=True, help="Annual rate, percent")
    payment_parser.add_argument("--term", type=int, default=30, help="Term in years (default: 30)")
    payment_parser.add_argument(
        "--new-rate",
        type=float,
        default=None,
        help="Compare against this rate and report savings",
    )

    # score
    score_parser = subparsers.add_parser("score", help="Rank clients by call opportunity")
    score_parser.add_argument(
        "--clients",
        type=Path,
        required=True,
        help="JSON file with a list of client records",
    )
    score_parser.add_argument(
        "--market-rate",
        type=float,
        default=None,
        help="Current market rate, percent (alternative to --db)",
    )
    score_parser.add_argument(
        "--db",
        type=Path,
        default=Path("refi_radar.db"),
        help="Read the latest 30yr conventional rate from this store",
    )
    score_parser.add_argument("--top", type=int, default=10, help="Max results (default: 10)")
    score_parser.add_argument("--config", type=Path, default=None, help="Scoring config YAML")
    score_parser.add_argument(
        "--stats",
        action="store_true",
        help="Show count per urgency tier",
    )
    score_parser.add_argument("--output", type=Path, default=None, help="Write results to file")

    # insights
    insights_parser = subparsers.add_parser("insights", help="Pipeline and rate-monitor buckets")
    insights_parser.add_argument(
        "kind",
        choices=["pipeline", "monitor"],
        help="pipeline: client buckets; monitor: mortgage buckets",
    )
    insights_parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="JSON file with clients (pipeline) or mortgages (monitor)",
    )
    insights_parser.add_argument(
        "--market-rate",
        type=float,
        default=None,
        help="Market rate for monitor insights (default: per-mortgage or 6.5)",
    )
    insights_parser.add_argument(
        "--show-explanations",
        action="store_true",
        help="Include per-client rule explanations (pipeline)",
    )
    insights_parser.add_argument("--output", type=Path, default=None, help="Write results to file")

    # rates
    rates_parser = subparsers.add_parser("rates", help="Ingest and query benchmark rates")
    rates_parser.add_argument(
        "action",
        choices=["ingest", "history", "current", "alerts"],
        help="Ingest from FRED, show history/current rates, or check client alerts",
    )
    rates_parser.add_argument(
        "--db",
        type=Path,
        default=Path("refi_radar.db"),
        help="Path to SQLite database",
    )
    rates_parser.add_argument(
        "--series",
        action="append",
        default=None,
        help="Loan type series (repeatable): conventional, 15yr_conventional, fha, va, jumbo",
    )
    rates_parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Read <SERIES_ID>.csv files from this directory instead of downloading",
    )
    rates_parser.add_argument(
        "--since",
        type=str,
        default=None,
        help="Only ingest observations on/after this date (YYYY-MM-DD)",
    )
    rates_parser.add_argument("--term", type=int, default=30, help="Term for history (default: 30)")
    rates_parser.add_argument("--days", type=int, default=30, help="History window (default: 30)")
    rates_parser.add_argument("--clients", type=Path, default=None, help="Client JSON (for alerts)")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "payment":
            _run_payment(args)
        elif args.command == "score":
            _run_score(args)
        elif args.command == "insights":
            _run_insights(args)
        elif args.command == "rates":
            _run_rates(args)
        else:
            parser.print_help()
    except (ValueError, FileNotFoundError, httpx.HTTPError) as e:
        raise SystemExit(str(e))


def _emit(data, output: Path | None, summary: str) -> None:
    text = json.dumps(data, indent=2, default=str)
    if output:
        output.write_text(text, encoding="utf-8")
        print(f"{summary} (wrote to {output})")
    else:
        print(text)


def _load_records(path: Path, model) -> list:
    data = json.loads(path.read_text())
    if isinstance(data, dict):
        data = [data]
    return [model.model_validate(item) for item in data]


def _run_payment(args: argparse.Namespace) -> None:
    """Run payment command."""
    from refi_radar.mortgage_math import (
        break_even_months,
        estimate_closing_costs,
        monthly_payment,
        monthly_savings,
        total_interest,
    )

    result = {
        "monthly_payment": round(monthly_payment(args.principal, args.rate, args.term), 2),
        "total_interest": round(total_interest(args.principal, args.rate, args.term), 2),
    }
    if args.new_rate is not None:
        savings = monthly_savings(args.principal, args.rate, args.new_rate, args.term)
        closing = estimate_closing_costs(args.principal)
        months = break_even_months(closing, savings)
        result.update(
            {
                "new_monthly_payment": round(monthly_payment(args.principal, args.new_rate, args.term), 2),
                "monthly_savings": round(savings, 2),
                "estimated_closing_costs": closing,
                "break_even_months": None if math.isinf(months) else months,
            }
        )
    print(json.dumps(result, indent=2, default=str))


def _run_score(args: argparse.Namespace) -> None:
    """Run score command. Without --market-rate, reads the rate from the store."""
    from refi_radar.formatting import format_percent
    from refi_radar.models.client import ClientRecord
    from refi_radar.models.profile import ScoringConfig
    from refi_radar.pipeline import current_market_rate
    from refi_radar.scoring import opportunity_stats, score_clients

    config = ScoringConfig.from_yaml(args.config) if args.config else ScoringConfig()
    clients = _load_records(args.clients, ClientRecord)
    if not clients:
        print("No clients to score.", file=sys.stderr)
        raise SystemExit(1)

    market_rate = args.market_rate
    if market_rate is None:
        market_rate = current_market_rate(args.db)

    scored = score_clients(clients, market_rate, config=config)
    if args.stats:
        stats = opportunity_stats(scored)
        print(
            f"\n--- Opportunities at {format_percent(market_rate, 3)}: {stats.total} scored ---\n"
            f"  critical: {stats.critical}  high: {stats.high}  "
            f"medium: {stats.medium}  low: {stats.low}\n",
            file=sys.stderr,
        )
    top = scored[: max(0, args.top)]
    _emit(
        [s.model_dump(mode="json") for s in top],
        args.output,
        f"Scored {len(scored)} clients, top {len(top)}",
    )


def _run_insights(args: argparse.Namespace) -> None:
    """Run insights command."""
    from refi_radar.formatting import format_compact_currency
    from refi_radar.insights import analyze_pipeline, analyze_rate_monitoring
    from refi_radar.models.client import ClientRecord
    from refi_radar.models.mortgage import MortgageRecord

    if args.kind == "pipeline":
        clients = _load_records(args.input, ClientRecord)
        insights = analyze_pipeline(clients)
        exclude = None if args.show_explanations else {"explanations"}
        data = insights.model_dump(mode="json", exclude=exclude)
        summary = (
            f"Analyzed {len(clients)} clients, pipeline value "
            f"{format_compact_currency(insights.total_pipeline_value)}"
        )
    else:
        mortgages = _load_records(args.input, MortgageRecord)
        insights = analyze_rate_monitoring(mortgages, market_rate=args.market_rate)
        data = insights.model_dump(mode="json")
        summary = f"Analyzed {len(mortgages)} mortgages"
    _emit(data, args.output, summary)


def _run_rates(args: argparse.Namespace) -> None:
    """Run rates command."""
    from refi_radar.store import RateStore

    if args.action == "ingest":
        from refi_radar.connectors.fred import FredConnector
        from refi_radar.pipeline import ingest_rates

        since = None
        if args.since:
            try:
                since = datetime.strptime(args.since, "%Y-%m-%d").date()
            except ValueError:
                raise SystemExit("Invalid --since format. Use YYYY-MM-DD.")
        connector = FredConnector(data_dir=args.data_dir)
        run = ingest_rates(connector, db_path=args.db, series=args.series, since=since)
        print(
            f"Store: {run.items_fetched} fetched, {run.items_new} new, {run.items_updated} updated"
        )
    elif args.action == "history":
        loan_type = (args.series or ["conventional"])[0]
        trends = RateStore(args.db).history(loan_type, term_years=args.term, days=args.days)
        print(json.dumps([t.model_dump(mode="json") for t in trends], indent=2))
    elif args.action == "current":
        rates = RateStore(args.db).current_rates()
        print(json.dumps({k: v.model_dump(mode="json") for k, v in rates.items()}, indent=2))
    elif args.action == "alerts":
        from refi_radar.models.client import ClientRecord
        from refi_radar.pipeline import check_rate_alerts

        if not args.clients:
            raise SystemExit("rates alerts requires --clients")
        clients = _load_records(args.clients, ClientRecord)
        alerts = check_rate_alerts(clients, db_path=args.db)
        print(json.dumps([a.model_dump(mode="json") for a in alerts], indent=2))


if __name__ == "__main__":
    main()
