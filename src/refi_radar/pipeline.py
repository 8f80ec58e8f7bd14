"""Pipeline orchestration: ingest rates -> store -> score and alert."""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from refi_radar.connectors.base import BaseRateConnector
from refi_radar.insights.alerts import RateAlert, rate_alerts
from refi_radar.models.client import ClientRecord
from refi_radar.models.profile import ScoringConfig
from refi_radar.scoring import OpportunityScore, score_clients
from refi_radar.store import RateStore, RunRecord

logger = logging.getLogger(__name__)

# Benchmark used for ranking: 30-year fixed conventional
MARKET_SERIES = "conventional"
MARKET_TERM_YEARS = 30


def ingest_rates(
    connector: BaseRateConnector,
    *,
    db_path: Path,
    series: Optional[list[str]] = None,
    since: Optional[date] = None,
) -> RunRecord:
    """
    Fetch rate series from a connector and upsert them into the store.
    series=None fetches everything the connector publishes.
    """
    store = RateStore(db_path)
    run = store.start_run(connector.source_id)
    try:
        if series:
            points = []
            for loan_type in series:
                points.extend(connector.fetch_incremental(loan_type, since=since))
        else:
            points = connector.fetch_all()
            if since is not None:
                points = [p for p in points if p.rate_date >= since]
        new, updated = store.upsert_many(points)
    except Exception:
        store.finish_run(run.id, items_fetched=0, items_new=0, items_updated=0, status="failed")
        raise

    store.finish_run(run.id, items_fetched=len(points), items_new=new, items_updated=updated)
    run.status = "completed"
    run.items_fetched = len(points)
    run.items_new = new
    run.items_updated = updated
    return run


def current_market_rate(db_path: Path) -> float:
    """Latest 30-year conventional rate from the store."""
    latest = RateStore(db_path).latest_rate(MARKET_SERIES, MARKET_TERM_YEARS)
    if latest is None:
        raise ValueError("No market rate data available.")
    logger.info("Using market rate %.3f%% from %s", latest.rate_value, latest.rate_date)
    return latest.rate_value


def rank_opportunities(
    clients: list[ClientRecord],
    *,
    db_path: Path,
    limit: Optional[int] = 10,
    config: Optional[ScoringConfig] = None,
    as_of: Optional[datetime] = None,
) -> list[OpportunityScore]:
    """
    Score clients against the stored market rate. Returns top `limit`, best first.
    """
    if not clients:
        return []
    market_rate = current_market_rate(db_path)
    return score_clients(clients, market_rate, limit=limit, config=config, as_of=as_of)


def check_rate_alerts(clients: list[ClientRecord], *, db_path: Path) -> list[RateAlert]:
    """Clients whose target the latest stored rates have reached."""
    alerts = rate_alerts(clients, RateStore(db_path).current_rates())
    if alerts:
        logger.info("Rate alerts triggered for %d clients", len(alerts))
    return alerts
