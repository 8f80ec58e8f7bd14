"""Local storage for benchmark rates and ingest run history."""

from refi_radar.store.sqlite_store import RateStore, RunRecord

__all__ = ["RateStore", "RunRecord"]
