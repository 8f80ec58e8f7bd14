"""FRED mortgage-rate series identifiers and CSV column names."""

from typing import NamedTuple


class SeriesInfo(NamedTuple):
    series_id: str
    term_years: int
    description: str


# loan_type -> FRED series
SERIES: dict[str, SeriesInfo] = {
    "conventional": SeriesInfo("MORTGAGE30US", 30, "30yr Conventional (Freddie Mac)"),
    "15yr_conventional": SeriesInfo("MORTGAGE15US", 15, "15yr Conventional (Freddie Mac)"),
    "fha": SeriesInfo("OBMMIFHA30YF", 30, "30yr FHA (Optimal Blue)"),
    "va": SeriesInfo("OBMMIVA30YF", 30, "30yr VA (Optimal Blue)"),
    "jumbo": SeriesInfo("OBMMIJUMBO30YF", 30, "30yr Jumbo (Optimal Blue)"),
}

# Date column: older downloads use DATE, current fredgraph.csv uses observation_date
DATE_COLUMNS = ("observation_date", "DATE", "date")

# FRED marks a missing observation with a single dot
MISSING_VALUE = "."
