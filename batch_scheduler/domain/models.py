"""Immutable value types consumed and produced by the scheduling engine."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from datetime import date
from enum import Enum
from typing import Mapping, Optional, Tuple


ONLINE_LOCATIONS = ("online", "remote")


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def of(cls, day: date) -> "Weekday":
        # date.weekday(): Monday == 0
        return list(cls)[day.weekday()]


class Cadence(str, Enum):
    WEEKDAY = "weekday"
    WEEKEND = "weekend"

    @classmethod
    def parse(cls, value: "str | Cadence | None") -> "Cadence":
        if value is None or value == "":
            return cls.WEEKDAY
        return cls(str(value.value if isinstance(value, Cadence) else value).lower())


class Priority(str, Enum):
    SENIOR = "Senior"
    CORE = "Core"
    JUNIOR = "Junior"

    @property
    def rank(self) -> int:
        return {"Senior": 3, "Core": 2, "Junior": 1}[self.value]

    @classmethod
    def parse(cls, value: "str | Priority") -> "Priority":
        if isinstance(value, Priority):
            return value
        return cls(str(value).strip().capitalize())


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TrainerStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class SessionStatus(str, Enum):
    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"


class SessionKind(str, Enum):
    REGULAR = "regular"
    COMMUNICATION = "communication"


class ConflictReason(str, Enum):
    """Diagnostic codes, listed in the order generation checks them."""

    NO_EXPERTISE_MATCH = "NoExpertiseMatch"
    NO_LOCATION_MATCH = "NoLocationMatch"
    NO_DAY_AVAILABILITY = "NoDayAvailability"
    ALL_ON_APPROVED_LEAVE = "AllOnApprovedLeave"
    SCHEDULING_OR_WORKLOAD_CONFLICT = "SchedulingOrWorkloadConflict"
    UNKNOWN_CONFLICT = "UnknownConflict"
    # Raised by the post-hoc detector
    TRAINER_ON_LEAVE = "TrainerOnLeave"
    DOUBLE_BOOKED = "DoubleBooked"


@dataclass(frozen=True)
class Conflict:
    reason: ConflictReason
    message: str

    def __str__(self) -> str:
        return f"{self.reason.value}: {self.message}"


@dataclass(frozen=True)
class WeeklyAvailability:
    """Per-weekday availability flags."""

    monday: bool = False
    tuesday: bool = False
    wednesday: bool = False
    thursday: bool = False
    friday: bool = False
    saturday: bool = False
    sunday: bool = False

    def is_available(self, weekday: Weekday) -> bool:
        return getattr(self, weekday.value)

    @classmethod
    def from_mapping(cls, flags: Mapping[str, bool]) -> "WeeklyAvailability":
        known = {f.name for f in fields(cls)}
        return cls(**{str(k).lower(): bool(v) for k, v in flags.items() if str(k).lower() in known})

    @classmethod
    def from_days(cls, days) -> "WeeklyAvailability":
        return cls.from_mapping({str(d).strip(): True for d in days if str(d).strip()})

    @classmethod
    def weekdays(cls) -> "WeeklyAvailability":
        return cls(monday=True, tuesday=True, wednesday=True, thursday=True, friday=True)

    @classmethod
    def every_day(cls) -> "WeeklyAvailability":
        return cls(**{f.name: True for f in fields(cls)})

    def days(self) -> Tuple[Weekday, ...]:
        return tuple(day for day in Weekday if self.is_available(day))


@dataclass(frozen=True)
class Leave:
    start_date: date
    end_date: date
    status: LeaveStatus = LeaveStatus.PENDING
    reason: str = ""

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def blocks(self, day: date) -> bool:
        """Only approved leave blocks scheduling."""
        return self.status == LeaveStatus.APPROVED and self.covers(day)


@dataclass(frozen=True)
class Trainer:
    id: str
    name: str
    locations: Tuple[str, ...] = ()
    expertise: Tuple[str, ...] = ()
    priority: Priority = Priority.JUNIOR
    start_time: str = "09:00"
    end_time: str = "18:00"
    availability: WeeklyAvailability = field(default_factory=WeeklyAvailability.weekdays)
    leaves: Tuple[Leave, ...] = ()
    status: TrainerStatus = TrainerStatus.ACTIVE
    email: str = ""

    @property
    def is_active(self) -> bool:
        return self.status == TrainerStatus.ACTIVE

    def on_approved_leave(self, day: date) -> bool:
        return any(leave.blocks(day) for leave in self.leaves)


@dataclass(frozen=True)
class Subject:
    id: str
    name: str
    duration: int


@dataclass(frozen=True)
class Course:
    id: str
    subject_ids: Tuple[str, ...] = ()
    name: str = ""


@dataclass(frozen=True)
class Batch:
    id: str
    course_id: str
    location: str
    start_date: date
    cadence: Cadence = Cadence.WEEKDAY
    end_date: Optional[date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    time_slot: Optional[str] = None
    name: str = ""

    @property
    def is_online(self) -> bool:
        return self.location.strip().lower() in ONLINE_LOCATIONS


@dataclass(frozen=True)
class Holiday:
    date: date
    name: str = ""


@dataclass(frozen=True)
class ScheduleSession:
    """One day's teaching unit. A trainer id is present iff the session is assigned."""

    date: date
    subject_id: str
    time_slot: str
    status: SessionStatus = SessionStatus.UNASSIGNED
    trainer_id: Optional[str] = None
    conflicts: Optional[Tuple[Conflict, ...]] = None
    kind: SessionKind = SessionKind.REGULAR
    batch_id: Optional[str] = None

    def __post_init__(self):
        if (self.trainer_id is not None) != (self.status == SessionStatus.ASSIGNED):
            raise ValueError(
                f"Session on {self.date} for {self.subject_id}: trainer_id={self.trainer_id!r} "
                f"inconsistent with status {self.status.value}"
            )

    @property
    def is_assigned(self) -> bool:
        return self.status == SessionStatus.ASSIGNED

    def assigned_to(self, trainer_id: str) -> "ScheduleSession":
        return replace(self, trainer_id=trainer_id, status=SessionStatus.ASSIGNED, conflicts=None)

    def with_conflicts(self, conflicts) -> "ScheduleSession":
        conflicts = tuple(conflicts)
        return replace(self, conflicts=conflicts or None)

    def moved_to(self, day: date) -> "ScheduleSession":
        return replace(self, date=day)
