"""Target-rate alerts: clients whose target the current market has reached."""

from pydantic import BaseModel

from refi_radar.models.client import ClientRecord
from refi_radar.models.rate import RatePoint

DEFAULT_SERIES = "conventional"

# Client loan types whose benchmark is the 15-year conventional series
_FIFTEEN_YEAR_TYPES = {"15yr", "15yr_conventional"}


class RateAlert(BaseModel):
    client_id: str
    client_name: str
    loan_type: str
    target_rate: float
    current_rate: float


def benchmark_series(loan_type: str) -> str:
    """Rate series a client's loan type is compared against."""
    if (loan_type or "").lower() in _FIFTEEN_YEAR_TYPES:
        return "15yr_conventional"
    return DEFAULT_SERIES


def rate_alerts(
    clients: list[ClientRecord],
    current_rates: dict[str, RatePoint],
) -> list[RateAlert]:
    """
    One alert per client whose benchmark rate is at or below their target.
    current_rates maps series (loan_type) -> latest RatePoint; clients with no
    matching series are skipped.
    """
    alerts: list[RateAlert] = []
    for client in clients:
        latest = current_rates.get(benchmark_series(client.loan_type))
        if latest is None:
            continue
        if latest.rate_value <= client.target_rate:
            alerts.append(
                RateAlert(
                    client_id=client.id,
                    client_name=client.display_name,
                    loan_type=client.loan_type,
                    target_rate=client.target_rate,
                    current_rate=latest.rate_value,
                )
            )
    return alerts
