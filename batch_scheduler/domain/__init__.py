"""Domain value types and data access layer."""

from .models import (
    Batch,
    Cadence,
    Conflict,
    ConflictReason,
    Course,
    Holiday,
    Leave,
    LeaveStatus,
    Priority,
    ScheduleSession,
    SessionKind,
    SessionStatus,
    Subject,
    Trainer,
    TrainerStatus,
    Weekday,
    WeeklyAvailability,
)
from .records import Base
from .repositories import (
    BatchRepository,
    CourseRepository,
    HolidayRepository,
    ScheduleRepository,
    SubjectRepository,
    TrainerRepository,
)

__all__ = [
    "Batch",
    "Cadence",
    "Conflict",
    "ConflictReason",
    "Course",
    "Holiday",
    "Leave",
    "LeaveStatus",
    "Priority",
    "ScheduleSession",
    "SessionKind",
    "SessionStatus",
    "Subject",
    "Trainer",
    "TrainerStatus",
    "Weekday",
    "WeeklyAvailability",
    "Base",
    "BatchRepository",
    "CourseRepository",
    "HolidayRepository",
    "ScheduleRepository",
    "SubjectRepository",
    "TrainerRepository",
]
