"""Abstract base class for benchmark rate sources."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from refi_radar.models.rate import RatePoint


class BaseRateConnector(ABC):
    """
    Standard interface for rate sources.
    Connectors list the series they publish and fetch observations for one series.
    """

    source_id: str = ""

    @abstractmethod
    def available_series(self) -> list[str]:
        """Loan-type keys this source can fetch (e.g. 'conventional', 'fha')."""
        pass

    @abstractmethod
    def fetch_series(self, loan_type: str) -> list[RatePoint]:
        """Fetch every published observation for one series."""
        pass

    def fetch_all(self) -> list[RatePoint]:
        """Fetch every available series. Override for sources with a bulk endpoint."""
        points: list[RatePoint] = []
        for loan_type in self.available_series():
            points.extend(self.fetch_series(loan_type))
        return points

    def fetch_incremental(self, loan_type: str, since: Optional[date] = None) -> list[RatePoint]:
        """
        Observations on/after since. Default: fetch the full series and filter client-side.
        """
        points = self.fetch_series(loan_type)
        if since is None:
            return points
        return [p for p in points if p.rate_date >= since]
