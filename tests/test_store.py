"""Unit tests for RateStore."""

import sqlite3
from datetime import date
from pathlib import Path

import pytest

from refi_radar.models import RatePoint
from refi_radar.store import RateStore, RunRecord


def _make_point(
    rate_date: date = date(2026, 1, 15),
    rate_value: float = 6.85,
    loan_type: str = "conventional",
    term_years: int = 30,
) -> RatePoint:
    return RatePoint(
        rate_date=rate_date,
        loan_type=loan_type,
        term_years=term_years,
        rate_value=rate_value,
        source="fred",
    )


@pytest.fixture
def store(temp_db: Path) -> RateStore:
    """RateStore with temporary database."""
    return RateStore(temp_db)


class TestRateStoreUpsert:
    """Tests for upsert."""

    def test_upsert_new(self, store: RateStore) -> None:
        """First upsert returns (was_new=True, was_updated=False)."""
        assert store.upsert(_make_point()) == (True, False)

    def test_upsert_same_value(self, store: RateStore) -> None:
        """Re-ingesting an unchanged observation is a no-op."""
        store.upsert(_make_point())
        assert store.upsert(_make_point()) == (False, False)

    def test_upsert_revised_value(self, store: RateStore) -> None:
        """A revised value for the same date overwrites the old one."""
        store.upsert(_make_point(rate_value=6.85))
        assert store.upsert(_make_point(rate_value=6.87)) == (False, True)
        points = store.get_all()
        assert len(points) == 1
        assert points[0].rate_value == 6.87

    def test_same_date_different_series_are_distinct(self, store: RateStore) -> None:
        store.upsert(_make_point(loan_type="conventional"))
        store.upsert(_make_point(loan_type="15yr_conventional", term_years=15))
        assert len(store.get_all()) == 2
        assert len(store.get_all("conventional")) == 1

    def test_upsert_many_counts(self, store: RateStore) -> None:
        store.upsert(_make_point(date(2026, 1, 1), 6.91))
        new, updated = store.upsert_many(
            [
                _make_point(date(2026, 1, 1), 6.90),
                _make_point(date(2026, 1, 8), 6.88),
                _make_point(date(2026, 1, 15), 6.85),
            ]
        )
        assert (new, updated) == (2, 1)

    def test_get_all_oldest_first(self, store: RateStore) -> None:
        store.upsert_many([_make_point(date(2026, 1, 15)), _make_point(date(2026, 1, 1))])
        assert [p.rate_date for p in store.get_all()] == [date(2026, 1, 1), date(2026, 1, 15)]


class TestRateStoreQueries:
    """Tests for latest_rate, current_rates and history."""

    def test_latest_rate_empty(self, store: RateStore) -> None:
        assert store.latest_rate() is None

    def test_latest_rate(self, store: RateStore) -> None:
        store.upsert_many(
            [
                _make_point(date(2026, 1, 1), 6.91),
                _make_point(date(2026, 1, 22), 6.72),
                _make_point(date(2026, 1, 15), 6.85),
            ]
        )
        latest = store.latest_rate("conventional", 30)
        assert latest is not None
        assert latest.rate_date == date(2026, 1, 22)
        assert latest.rate_value == 6.72

    def test_latest_rate_respects_term(self, store: RateStore) -> None:
        store.upsert(_make_point(loan_type="conventional", term_years=30))
        assert store.latest_rate("conventional", 15) is None

    def test_current_rates_per_loan_type(self, store: RateStore) -> None:
        store.upsert_many(
            [
                _make_point(date(2026, 1, 15), 6.85),
                _make_point(date(2026, 1, 22), 6.72),
                _make_point(date(2026, 1, 22), 5.98, loan_type="15yr_conventional", term_years=15),
                _make_point(date(2026, 1, 8), 6.40, loan_type="fha"),
            ]
        )
        current = store.current_rates()
        assert set(current) == {"conventional", "15yr_conventional", "fha"}
        assert current["conventional"].rate_value == 6.72
        assert current["15yr_conventional"].rate_value == 5.98
        assert current["fha"].rate_date == date(2026, 1, 8)

    def test_history_window_and_changes(self, store: RateStore) -> None:
        store.upsert_many(
            [
                _make_point(date(2025, 11, 1), 7.10),
                _make_point(date(2026, 1, 1), 6.90),
                _make_point(date(2026, 1, 8), 6.80),
                _make_point(date(2026, 1, 15), 6.85),
            ]
        )
        trends = store.history("conventional", 30, days=30, as_of=date(2026, 1, 20))
        assert [t.date for t in trends] == [date(2026, 1, 1), date(2026, 1, 8), date(2026, 1, 15)]
        assert trends[0].change is None
        assert trends[1].change == pytest.approx(-0.1)
        assert trends[2].change == pytest.approx(0.05)

    def test_history_empty(self, store: RateStore) -> None:
        assert store.history(days=7, as_of=date(2026, 1, 20)) == []


class TestRateStoreRuns:
    """Tests for ingest run tracking."""

    def test_start_run(self, store: RateStore) -> None:
        run = store.start_run("fred")
        assert isinstance(run, RunRecord)
        assert run.id > 0
        assert run.status == "running"
        assert run.finished_at is None

    def test_finish_run_persists_counts(self, store: RateStore, temp_db: Path) -> None:
        run = store.start_run("fred")
        store.finish_run(run.id, items_fetched=10, items_new=7, items_updated=1)

        conn = sqlite3.connect(temp_db)
        row = conn.execute(
            "SELECT status, items_fetched, items_new, items_updated, finished_at FROM runs WHERE id = ?",
            (run.id,),
        ).fetchone()
        conn.close()
        assert row[:4] == ("completed", 10, 7, 1)
        assert row[4] is not None
