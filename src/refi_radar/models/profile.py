"""Scoring configuration: thresholds and defaults, loadable from YAML."""

from pathlib import Path

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for config loading. Run: poetry install"
    ) from e
from pydantic import BaseModel, Field, field_validator

from refi_radar.models.client import PipelineStage

# (minimum value, points) rows; first row whose minimum is met wins
ThresholdTable = list[tuple[float, float]]


def _descending(table: ThresholdTable) -> ThresholdTable:
    return sorted(table, key=lambda row: row[0], reverse=True)


class ScoringConfig(BaseModel):
    """Knobs for opportunity scoring. Defaults reproduce the production weights."""

    assumed_rate_spread_when_missing: float = Field(
        default=1.0,
        description="current_rate = target_rate + spread when the client has no rate on file",
    )
    require_current_rate: bool = Field(
        default=False,
        description="Raise MissingRateError instead of assuming a rate",
    )
    default_term_years: int = Field(default=30, gt=0)
    near_target_margin: float = Field(
        default=0.125,
        description="Market within this many points above target earns the partial bonus",
    )
    never_contacted_days: int = 999

    financial_points: ThresholdTable = Field(
        default_factory=lambda: [
            (500, 50),
            (400, 45),
            (300, 40),
            (200, 35),
            (150, 30),
            (100, 25),
            (75, 20),
            (50, 15),
        ]
    )
    financial_fallback_divisor: float = 5.0
    urgency_points: ThresholdTable = Field(
        default_factory=lambda: [(30, 25), (21, 20), (14, 15), (7, 10), (3, 5)]
    )
    loan_multipliers: ThresholdTable = Field(
        default_factory=lambda: [(750_000, 1.3), (500_000, 1.2), (300_000, 1.1)]
    )
    urgency_tiers: list[tuple[float, str]] = Field(
        default_factory=lambda: [(80, "critical"), (60, "high"), (40, "medium")]
    )
    stage_points: dict[str, int] = Field(
        default_factory=lambda: {
            "application": 15,
            "qualified": 12,
            "contacted": 8,
            "new": 5,
            "nurture": 3,
            "closed": 2,
            "lost": 0,
        }
    )
    unknown_stage_points: int = 5
    target_hit_points: int = 10
    near_target_points: int = 5

    @field_validator("financial_points", "urgency_points", "loan_multipliers", "urgency_tiers")
    @classmethod
    def _sort_tables(cls, table):
        return _descending(table)

    @field_validator("stage_points")
    @classmethod
    def _parse_stage_keys(cls, points: dict[str, int]) -> dict[str, int]:
        parsed = {}
        for key, value in points.items():
            stage = PipelineStage.parse(key)
            if stage is None:
                raise ValueError("stage_points keys must be non-empty stage names")
            parsed[stage.value] = value
        return parsed

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ScoringConfig":
        """Load config from YAML. Supports a nested `scoring:` section or flat keys."""
        data = yaml.safe_load(Path(path).read_text()) or {}
        section = data.get("scoring", data)
        return cls.model_validate(section)
