"""FRED mortgage-rate connector."""

from refi_radar.connectors.fred.connector import FredConnector

__all__ = ["FredConnector"]
