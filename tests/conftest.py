"""Pytest fixtures for refi-radar tests."""

import tempfile
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture
def as_of() -> datetime:
    """Fixed reference time so recency math is deterministic."""
    return datetime(2026, 1, 31, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_fred_csv() -> str:
    """FRED fredgraph.csv download for MORTGAGE30US, with one missing week."""
    return (
        "observation_date,MORTGAGE30US\n"
        "2026-01-01,6.91\n"
        "2026-01-08,.\n"
        "2026-01-15,6.85\n"
        "2026-01-22,6.72\n"
    )


@pytest.fixture
def temp_db() -> Path:
    """Temporary database path for isolated tests."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = Path(f.name)
    yield path
    path.unlink(missing_ok=True)


@pytest.fixture
def fred_connector_patched(sample_fred_csv: str):
    """Context manager that patches FredConnector._fetch_csv with sample data."""
    return patch(
        "refi_radar.connectors.fred.connector.FredConnector._fetch_csv",
        return_value=sample_fred_csv,
    )
