"""Trainer batch scheduler.

Modules:
- config: load and validate configuration (YAML or JSON)
- domain: value types, SQLAlchemy records and repositories
- services: calendar, eligibility, selection, conflict detection, reporting
- engine: schedule generation, optimization, end dates, orchestration
- io: CSV import/export
- cli: command-line interface entrypoints
"""

from batch_scheduler.engine import (
    calculate_batch_end_date,
    generate_schedule,
    optimize_schedule,
)
from batch_scheduler.services import detect_conflicts

__all__ = [
    "calculate_batch_end_date",
    "detect_conflicts",
    "generate_schedule",
    "optimize_schedule",
]
