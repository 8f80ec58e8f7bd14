"""Benchmark rate sources."""

from refi_radar.connectors.base import BaseRateConnector
from refi_radar.connectors.fred import FredConnector

__all__ = ["BaseRateConnector", "FredConnector"]
