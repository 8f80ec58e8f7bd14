"""FRED connector for published weekly mortgage rates."""

import logging
from pathlib import Path
from typing import Optional

import httpx

from refi_radar.connectors.base import BaseRateConnector
from refi_radar.models.rate import RatePoint

from .constants import SERIES, SeriesInfo
from .parsers import parse_series_csv

logger = logging.getLogger(__name__)


class FredConnector(BaseRateConnector):
    """
    Connector for FRED (St. Louis Fed) mortgage-rate series.
    Fetches the public fredgraph CSV download, or reads the same CSV from a
    local directory when data_dir is set (files named <SERIES_ID>.csv).
    """

    source_id = "fred"

    CSV_URL = "https://fred.stlouisfed.org/graph/fredgraph.csv"

    DEFAULT_HEADERS = {
        "User-Agent": "refi-radar/0.1 (mortgage rate monitor)",
        "Accept": "text/csv, text/plain, */*",
    }

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        data_dir: Optional[Path] = None,
    ):
        self._client = client or httpx.Client(
            timeout=60.0,
            follow_redirects=True,
            headers=self.DEFAULT_HEADERS,
        )
        self._data_dir = Path(data_dir) if data_dir is not None else None

    def available_series(self) -> list[str]:
        return list(SERIES.keys())

    def _series_info(self, loan_type: str) -> SeriesInfo:
        info = SERIES.get(loan_type.lower())
        if info is None:
            raise ValueError(f"Unknown rate series: {loan_type}. Available: {self.available_series()}")
        return info

    def _fetch_csv(self, series_id: str) -> str:
        """Fetch CSV content for one series."""
        response = self._client.get(self.CSV_URL, params={"id": series_id})
        response.raise_for_status()
        return response.text

    def _read_csv(self, series_id: str) -> str:
        path = self._data_dir / f"{series_id}.csv"
        return path.read_text(encoding="utf-8")

    def fetch_series(self, loan_type: str) -> list[RatePoint]:
        info = self._series_info(loan_type)
        if self._data_dir is not None:
            content = self._read_csv(info.series_id)
        else:
            content = self._fetch_csv(info.series_id)
        points = parse_series_csv(content, loan_type.lower(), info, source=self.source_id)
        logger.info("Parsed %d %s observations (%s)", len(points), loan_type, info.series_id)
        return points

    def fetch_all(self) -> list[RatePoint]:
        """
        Fetch every series. In data_dir mode, series without a local file are
        skipped with a warning rather than failing the whole import.
        """
        points: list[RatePoint] = []
        for loan_type, info in SERIES.items():
            if self._data_dir is not None and not (self._data_dir / f"{info.series_id}.csv").exists():
                logger.warning("File not found: %s.csv - skipping %s", info.series_id, loan_type)
                continue
            points.extend(self.fetch_series(loan_type))
        return points
