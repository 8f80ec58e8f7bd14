"""SQLite-backed rate history store with upsert and ingest run tracking."""

import logging
import sqlite3
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from refi_radar.models.rate import RatePoint, RateTrend, build_trends

logger = logging.getLogger(__name__)


class RunRecord:
    """Record of a rate ingest run."""

    def __init__(
        self,
        id: int,
        source: str,
        started_at: datetime,
        finished_at: Optional[datetime],
        status: str,
        items_fetched: int,
        items_new: int,
        items_updated: int,
    ):
        self.id = id
        self.source = source
        self.started_at = started_at
        self.finished_at = finished_at
        self.status = status
        self.items_fetched = items_fetched
        self.items_new = items_new
        self.items_updated = items_updated


class RateStore:
    """
    SQLite store for benchmark rate observations.
    (rate_date, loan_type, term_years) identifies an observation; re-ingesting
    a date overwrites its value.
    """

    def __init__(self, db_path: str | Path = "refi_radar.db"):
        self._db_path = Path(db_path)
        self._ensure_schema()

    def _connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        schema_path = Path(__file__).parent / "schema.sql"
        with self._connection() as conn:
            conn.executescript(schema_path.read_text())

    def _row_to_point(self, row: sqlite3.Row) -> RatePoint:
        return RatePoint(
            rate_date=date.fromisoformat(row["rate_date"]),
            loan_type=row["loan_type"],
            term_years=row["term_years"],
            rate_value=row["rate_value"],
            rate_type=row["rate_type"],
            source=row["source"],
        )

    def upsert(self, point: RatePoint) -> tuple[bool, bool]:
        """
        Insert or update one observation. Returns (was_new, was_updated);
        was_updated is True only when an existing value changed.
        """
        now = datetime.now(timezone.utc).isoformat()
        key = (point.rate_date.isoformat(), point.loan_type, point.term_years)
        with self._connection() as conn:
            existing = conn.execute(
                "SELECT rate_value FROM rate_history WHERE rate_date = ? AND loan_type = ? AND term_years = ?",
                key,
            ).fetchone()
            if existing is None:
                conn.execute(
                    """
                    INSERT INTO rate_history (rate_date, loan_type, term_years, rate_value, rate_type, source, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (*key, point.rate_value, point.rate_type, point.source, now),
                )
                conn.commit()
                return True, False
            if existing["rate_value"] != point.rate_value:
                conn.execute(
                    """
                    UPDATE rate_history SET rate_value = ?, rate_type = ?, source = ?
                    WHERE rate_date = ? AND loan_type = ? AND term_years = ?
                    """,
                    (point.rate_value, point.rate_type, point.source, *key),
                )
                conn.commit()
                return False, True
        return False, False

    def upsert_many(self, points: list[RatePoint]) -> tuple[int, int]:
        """Upsert each point. Returns (new_count, updated_count)."""
        new = updated = 0
        for point in points:
            was_new, was_updated = self.upsert(point)
            new += was_new
            updated += was_updated
        return new, updated

    def get_all(self, loan_type: Optional[str] = None) -> list[RatePoint]:
        """All observations, oldest first; optionally one series."""
        with self._connection() as conn:
            if loan_type:
                rows = conn.execute(
                    "SELECT * FROM rate_history WHERE loan_type = ? ORDER BY rate_date ASC",
                    (loan_type,),
                ).fetchall()
            else:
                rows = conn.execute(
                    "SELECT * FROM rate_history ORDER BY rate_date ASC, loan_type ASC"
                ).fetchall()
        return [self._row_to_point(r) for r in rows]

    def latest_rate(self, loan_type: str = "conventional", term_years: int = 30) -> Optional[RatePoint]:
        """Most recent observation for a series, or None if the series is empty."""
        with self._connection() as conn:
            row = conn.execute(
                """
                SELECT * FROM rate_history WHERE loan_type = ? AND term_years = ?
                ORDER BY rate_date DESC LIMIT 1
                """,
                (loan_type, term_years),
            ).fetchone()
        return self._row_to_point(row) if row else None

    def current_rates(self) -> dict[str, RatePoint]:
        """Latest observation per loan type."""
        with self._connection() as conn:
            rows = conn.execute(
                """
                SELECT h.* FROM rate_history h
                JOIN (
                    SELECT loan_type, MAX(rate_date) AS max_date FROM rate_history GROUP BY loan_type
                ) latest ON h.loan_type = latest.loan_type AND h.rate_date = latest.max_date
                ORDER BY h.loan_type
                """
            ).fetchall()
        return {r["loan_type"]: self._row_to_point(r) for r in rows}

    def history(
        self,
        loan_type: str = "conventional",
        term_years: int = 30,
        days: int = 30,
        as_of: Optional[date] = None,
    ) -> list[RateTrend]:
        """Observations in the last `days` days (through as_of), with changes."""
        end = as_of or datetime.now(timezone.utc).date()
        start = end - timedelta(days=days)
        with self._connection() as conn:
            rows = conn.execute(
                """
                SELECT * FROM rate_history
                WHERE loan_type = ? AND term_years = ? AND rate_date >= ? AND rate_date <= ?
                ORDER BY rate_date ASC
                """,
                (loan_type, term_years, start.isoformat(), end.isoformat()),
            ).fetchall()
        return build_trends([self._row_to_point(r) for r in rows])

    def start_run(self, source: str) -> RunRecord:
        """Record start of an ingest run. Returns RunRecord with id."""
        now = datetime.now(timezone.utc).isoformat()
        with self._connection() as conn:
            cursor = conn.execute(
                "INSERT INTO runs (source, started_at, status, items_fetched, items_new, items_updated) VALUES (?, ?, 'running', 0, 0, 0)",
                (source, now),
            )
            conn.commit()
            run_id = cursor.lastrowid
        return RunRecord(
            id=run_id or 0,
            source=source,
            started_at=datetime.fromisoformat(now),
            finished_at=None,
            status="running",
            items_fetched=0,
            items_new=0,
            items_updated=0,
        )

    def finish_run(
        self,
        run_id: int,
        items_fetched: int,
        items_new: int,
        items_updated: int,
        status: str = "completed",
    ) -> None:
        """Record completion of an ingest run."""
        now = datetime.now(timezone.utc).isoformat()
        with self._connection() as conn:
            conn.execute(
                """
                UPDATE runs SET finished_at = ?, status = ?, items_fetched = ?, items_new = ?, items_updated = ?
                WHERE id = ?
                """,
                (now, status, items_fetched, items_new, items_updated, run_id),
            )
            conn.commit()
        logger.info(
            "Run %d %s: %d fetched, %d new, %d updated",
            run_id, status, items_fetched, items_new, items_updated,
        )
