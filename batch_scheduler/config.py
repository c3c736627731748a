"""Scheduler configuration: defaults, YAML/JSON loading and validation."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml


DEFAULT_SYNONYM_GROUPS: Tuple[Tuple[str, ...], ...] = (
    ("js", "javascript", "ecmascript"),
    ("react", "reactjs", "react.js"),
    ("python", "py"),
    ("html", "html5"),
    ("css", "css3"),
    ("node", "nodejs", "node.js"),
    ("db", "database", "sql", "nosql"),
    ("design", "ui", "ux", "graphic"),
    ("marketing", "digital marketing", "seo", "sem"),
)

EXPERTISE_STRATEGIES = ("substring", "synonym")


class ConfigError(ValueError):
    """Raised when a configuration file is structurally invalid."""


@dataclass
class TimeSlotDefaults:
    online: str = "09:00-12:00"
    weekend: str = "10:00-16:00"
    weekday: str = "09:00-17:00"


@dataclass
class SchedulerConfig:
    """Business rules for the scheduling engine."""

    online_daily_session_cap: int = 3
    end_date_buffer_days: int = 5
    default_time_slots: TimeSlotDefaults = field(default_factory=TimeSlotDefaults)
    synonym_groups: Tuple[Tuple[str, ...], ...] = DEFAULT_SYNONYM_GROUPS
    # Subject display names are not available to the optimizer, so it matches
    # expertise against subject ids unless told otherwise.
    optimizer_expertise: str = "substring"
    include_inactive_trainers: bool = False
    optimize_after_generate: bool = True

    def validate(self) -> None:
        if self.online_daily_session_cap < 1:
            raise ConfigError("online_daily_session_cap must be >= 1")
        if self.end_date_buffer_days < 0:
            raise ConfigError("end_date_buffer_days must be >= 0")
        if self.optimizer_expertise not in EXPERTISE_STRATEGIES:
            raise ConfigError(
                f"optimizer_expertise must be one of {EXPERTISE_STRATEGIES}, "
                f"got {self.optimizer_expertise!r}"
            )
        for name in ("online", "weekend", "weekday"):
            slot = getattr(self.default_time_slots, name)
            if "-" not in slot:
                raise ConfigError(f"default_time_slots.{name} must look like HH:MM-HH:MM, got {slot!r}")


def _as_dict(obj: Any, ctx: str) -> Dict[str, Any]:
    if not isinstance(obj, dict):
        raise ConfigError(f"Expected a mapping in {ctx}, got {type(obj).__name__}")
    return obj


def config_from_dict(raw: Dict[str, Any]) -> SchedulerConfig:
    """Build a validated SchedulerConfig from a plain mapping."""
    raw = _as_dict(raw, "root")
    slots_raw = _as_dict(raw.get("default_time_slots", {}), "default_time_slots")
    defaults = TimeSlotDefaults()

    groups_raw = raw.get("synonym_groups")
    if groups_raw is None:
        groups = DEFAULT_SYNONYM_GROUPS
    else:
        if not isinstance(groups_raw, list):
            raise ConfigError("synonym_groups must be a list of lists")
        groups = tuple(tuple(str(x).lower() for x in group) for group in groups_raw)

    cfg = SchedulerConfig(
        online_daily_session_cap=int(raw.get("online_daily_session_cap", 3)),
        end_date_buffer_days=int(raw.get("end_date_buffer_days", 5)),
        default_time_slots=TimeSlotDefaults(
            online=str(slots_raw.get("online", defaults.online)),
            weekend=str(slots_raw.get("weekend", defaults.weekend)),
            weekday=str(slots_raw.get("weekday", defaults.weekday)),
        ),
        synonym_groups=groups,
        optimizer_expertise=str(raw.get("optimizer_expertise", "substring")).lower(),
        include_inactive_trainers=bool(raw.get("include_inactive_trainers", False)),
        optimize_after_generate=bool(raw.get("optimize_after_generate", True)),
    )
    cfg.validate()
    return cfg


def load_config(path: str | Path) -> SchedulerConfig:
    """Load configuration from a YAML (.yaml/.yml) or JSON file."""
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        if p.suffix.lower() in (".yaml", ".yml"):
            raw = yaml.safe_load(f) or {}
        else:
            raw = json.load(f)
    return config_from_dict(raw)
