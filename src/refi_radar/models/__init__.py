"""Data models for clients, mortgages, rates and scoring config."""

from refi_radar.models.client import ClientRecord, PipelineStage
from refi_radar.models.mortgage import MortgageRecord
from refi_radar.models.profile import ScoringConfig
from refi_radar.models.rate import RatePoint, RateTrend, build_trends

__all__ = [
    "ClientRecord",
    "MortgageRecord",
    "PipelineStage",
    "RatePoint",
    "RateTrend",
    "ScoringConfig",
    "build_trends",
]
