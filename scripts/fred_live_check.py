#!/usr/bin/env python3
"""Quick live check of the FRED CSV download + parse flow.

Run:
  poetry run python scripts/fred_live_check.py                 # 30yr conventional
  poetry run python scripts/fred_live_check.py fha             # one series
  poetry run python scripts/fred_live_check.py all             # every series
"""

import sys

from refi_radar.connectors.fred import FredConnector


def main() -> None:
    series_arg = sys.argv[1] if len(sys.argv) > 1 else "conventional"
    connector = FredConnector()
    series = connector.available_series() if series_arg == "all" else [series_arg]

    for loan_type in series:
        print(f"Fetching {loan_type}...")
        points = connector.fetch_series(loan_type)
        print(f"  Got {len(points)} observations")
        for p in points[-3:]:
            print(f"    {p.rate_date}  {p.rate_value:.2f}%")
        if not points:
            print("  No data returned. Check logs for redirect/error.")


if __name__ == "__main__":
    main()
