"""Opportunity scoring, pipeline insights and rate monitoring for mortgage brokers."""

__version__ = "0.1.0"
