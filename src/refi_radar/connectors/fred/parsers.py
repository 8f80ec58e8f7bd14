"""Parsing utilities for FRED CSV downloads."""

import csv
import logging
from datetime import date, datetime
from io import StringIO
from typing import Optional

from refi_radar.models.rate import RatePoint

from .constants import DATE_COLUMNS, MISSING_VALUE, SeriesInfo

logger = logging.getLogger(__name__)

DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%Y/%m/%d")


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse an observation date; None if empty or unrecognized."""
    if not value or not value.strip():
        return None
    value = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value[:10], fmt).date()
        except (ValueError, TypeError):
            continue
    return None


def parse_rate(value: Optional[str]) -> Optional[float]:
    """Parse a percent value; None for blanks and FRED's '.' placeholder."""
    if value is None:
        return None
    value = value.strip()
    if not value or value == MISSING_VALUE:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _pick_date_column(fieldnames: list[str]) -> Optional[str]:
    for name in DATE_COLUMNS:
        if name in fieldnames:
            return name
    return fieldnames[0] if fieldnames else None


def _pick_value_column(fieldnames: list[str], series_id: str, date_column: Optional[str]) -> Optional[str]:
    if series_id in fieldnames:
        return series_id
    others = [f for f in fieldnames if f != date_column]
    return others[0] if others else None


def parse_series_csv(
    csv_content: str,
    loan_type: str,
    series: SeriesInfo,
    *,
    source: str = "fred",
) -> list[RatePoint]:
    """
    Convert a two-column FRED CSV (date, value) into RatePoints.
    Rows with a missing date or value are skipped.
    """
    reader = csv.DictReader(StringIO(csv_content.strip()))
    fieldnames = [f.strip() for f in (reader.fieldnames or [])]
    reader.fieldnames = fieldnames
    date_col = _pick_date_column(fieldnames)
    value_col = _pick_value_column(fieldnames, series.series_id, date_col)
    if date_col is None or value_col is None:
        logger.warning("CSV for %s has no usable columns: %s", series.series_id, fieldnames)
        return []

    points: list[RatePoint] = []
    skipped = 0
    for row in reader:
        rate_date = parse_date(row.get(date_col))
        rate_value = parse_rate(row.get(value_col))
        if rate_date is None or rate_value is None:
            skipped += 1
            continue
        points.append(
            RatePoint(
                rate_date=rate_date,
                loan_type=loan_type,
                term_years=series.term_years,
                rate_value=rate_value,
                source=source,
            )
        )
    if skipped:
        logger.warning("Skipped %d rows without a date or value in %s", skipped, series.series_id)
    return points
