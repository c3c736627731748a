"""Service layer: calendar, eligibility, selection, conflicts and reporting."""

from .calendar import (
    InvalidDate,
    add_business_days,
    day_of_week,
    format_date,
    is_holiday,
    is_weekend,
    is_working_day,
    parse_date,
)
from .conflicts import detect_conflicts
from .eligibility import SlotRequest, diagnose_unassigned, is_eligible
from .expertise import ExpertiseMatcher, SubstringExpertiseMatcher, SynonymExpertiseMatcher
from .selection import select_trainer

__all__ = [
    "InvalidDate",
    "add_business_days",
    "day_of_week",
    "format_date",
    "is_holiday",
    "is_weekend",
    "is_working_day",
    "parse_date",
    "detect_conflicts",
    "SlotRequest",
    "diagnose_unassigned",
    "is_eligible",
    "ExpertiseMatcher",
    "SubstringExpertiseMatcher",
    "SynonymExpertiseMatcher",
    "select_trainer",
]
