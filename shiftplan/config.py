"""Scheduler configuration loaded from YAML or JSON."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

SEQUENCING_POLICIES = ("quantity", "priority")
DEPENDENCY_STRICTNESS = ("loose", "strict")


@dataclass
class SchedulerConfig:
    """Business rules for a scheduling run."""

    # Fallback anchors when production areas define none
    preparation_start: str = "06:00"
    filling_end: str = "17:00"

    sequencing_policy: str = "quantity"
    dependency_strictness: str = "loose"
    enforce_availability: bool = True
    per_area_clocks: bool = False

    # Recommendation thresholds
    utilization_low: float = 0.70
    utilization_high: float = 0.95
    long_task_minutes: float = 240.0

    # Optional post-processing stages
    generate_recommendations: bool = True
    persist: bool = True
    replace_existing: bool = True
    raise_alerts: bool = False

    def __post_init__(self) -> None:
        # Unquoted 17:00 in YAML loads as a base-60 integer
        for name in ("preparation_start", "filling_end"):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"{name} must be a quoted 'HH:MM' string")
        if self.sequencing_policy not in SEQUENCING_POLICIES:
            raise ValueError(
                f"sequencing_policy must be one of {SEQUENCING_POLICIES}, got {self.sequencing_policy!r}"
            )
        if self.dependency_strictness not in DEPENDENCY_STRICTNESS:
            raise ValueError(
                f"dependency_strictness must be one of {DEPENDENCY_STRICTNESS}, "
                f"got {self.dependency_strictness!r}"
            )
        if self.utilization_low > self.utilization_high:
            raise ValueError("utilization_low must not exceed utilization_high")


def load_config(path: str | Path | None = None) -> SchedulerConfig:
    """
    Load a SchedulerConfig from a YAML or JSON file.

    Args:
        path: Path to a .yaml/.yml or .json file. None returns the defaults.

    Returns:
        SchedulerConfig

    Raises:
        ValueError: On unknown keys or invalid values
    """
    if path is None:
        return SchedulerConfig()

    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        raw = json.loads(text)
    else:
        raw = yaml.safe_load(text)
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    known = {f.name for f in fields(SchedulerConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    return SchedulerConfig(**raw)
