"""Pipeline and rate-monitoring insight buckets."""

from refi_radar.insights.alerts import RateAlert, benchmark_series, rate_alerts
from refi_radar.insights.engine import (
    PipelineInsightEngine,
    PipelineInsights,
    RateMonitorEngine,
    RateMonitorInsights,
    analyze_pipeline,
    analyze_rate_monitoring,
)
from refi_radar.insights.rules import PIPELINE_RULES, BucketRule, MonitorThresholds

__all__ = [
    "PIPELINE_RULES",
    "BucketRule",
    "MonitorThresholds",
    "PipelineInsightEngine",
    "PipelineInsights",
    "RateAlert",
    "RateMonitorEngine",
    "RateMonitorInsights",
    "analyze_pipeline",
    "analyze_rate_monitoring",
    "benchmark_series",
    "rate_alerts",
]
