"""Trainer eligibility filter and unassigned-session diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Collection, Iterable, List, Optional, Sequence

from batch_scheduler.domain.models import (
    ONLINE_LOCATIONS,
    Conflict,
    ConflictReason,
    ScheduleSession,
    Trainer,
    Weekday,
)

from .expertise import ExpertiseMatcher
from .timeslots import fits_within, overlaps_any

ANY_LOCATION = "anywhere"
ANY_PHYSICAL_LOCATION = "physical"


@dataclass(frozen=True)
class SlotRequest:
    """What a candidate session needs from a trainer on one day."""

    day: date
    subject_label: str
    time_slot: str
    location: Optional[str] = None  # None: location unknown, not checked
    online: bool = False


def has_location(trainer: Trainer, location: str) -> bool:
    """Exact (case-insensitive) match; online/remote interchangeable; wildcards for physical sites."""
    wanted = location.strip().lower()
    offered = {loc.strip().lower() for loc in trainer.locations}
    if wanted in offered:
        return True
    if wanted in ONLINE_LOCATIONS:
        return bool(offered & {*ONLINE_LOCATIONS, ANY_LOCATION})
    return bool(offered & {ANY_LOCATION, ANY_PHYSICAL_LOCATION})


def works_on(trainer: Trainer, day: date) -> bool:
    return trainer.availability.is_available(Weekday.of(day))


def sessions_on(trainer_id: str, day: date, schedule: Iterable[ScheduleSession]) -> List[ScheduleSession]:
    return [s for s in schedule if s.date == day and s.trainer_id == trainer_id]


def has_booking_capacity(trainer: Trainer, request: SlotRequest, schedule: Sequence[ScheduleSession], cfg) -> bool:
    """
    Double-booking rules.

    Physical sessions allow one session per trainer per day. Online sessions
    allow up to ``cfg.online_daily_session_cap`` per day as long as time slots
    do not overlap and the slot fits the trainer's working hours.
    """
    existing = sessions_on(trainer.id, request.day, schedule)
    if not request.online:
        return not existing
    if len(existing) >= cfg.online_daily_session_cap:
        return False
    if overlaps_any(request.time_slot, existing):
        return False
    return fits_within(request.time_slot, trainer.start_time, trainer.end_time)


def is_eligible(
    trainer: Trainer,
    request: SlotRequest,
    schedule: Sequence[ScheduleSession],
    matcher: ExpertiseMatcher,
    cfg,
) -> bool:
    """Single predicate used by generation, block feasibility and optimization."""
    if not matcher.matches(trainer, request.subject_label):
        return False
    if request.location is not None and not has_location(trainer, request.location):
        return False
    if not works_on(trainer, request.day):
        return False
    if trainer.on_approved_leave(request.day):
        return False
    return has_booking_capacity(trainer, request, schedule, cfg)


def eligible_trainers(
    trainers: Iterable[Trainer],
    request: SlotRequest,
    schedule: Sequence[ScheduleSession],
    matcher: ExpertiseMatcher,
    cfg,
) -> List[Trainer]:
    """Filter preserving input order."""
    return [t for t in trainers if is_eligible(t, request, schedule, matcher, cfg)]


def can_cover_block(
    trainer: Trainer,
    requests: Sequence[SlotRequest],
    schedule: Sequence[ScheduleSession],
    matcher: ExpertiseMatcher,
    cfg,
) -> bool:
    """True when the trainer passes the per-day test on every day of a subject block."""
    return all(is_eligible(trainer, r, schedule, matcher, cfg) for r in requests)


def diagnose_unassigned(
    trainers: Sequence[Trainer],
    request: SlotRequest,
    schedule: Sequence[ScheduleSession],
    matcher: ExpertiseMatcher,
    cfg,
    block_feasible_ids: Optional[Collection[str]] = None,
) -> Conflict:
    """
    Explain why no trainer could take a session; the first failing stage wins.

    Args:
        trainers: Candidate trainers
        request: The session being filled
        schedule: Sessions accumulated so far
        matcher: Expertise strategy used for generation
        cfg: SchedulerConfig
        block_feasible_ids: Trainers that passed the whole-block check, if one was made

    Returns:
        A single Conflict describing the first unmet constraint
    """
    label = request.subject_label
    pool = [t for t in trainers if matcher.matches(t, label)]
    if not pool:
        return Conflict(ConflictReason.NO_EXPERTISE_MATCH, f"No trainer available with {label} expertise")

    if request.location is not None:
        pool = [t for t in pool if has_location(t, request.location)]
        if not pool:
            return Conflict(
                ConflictReason.NO_LOCATION_MATCH,
                f"No trainer with {label} expertise available in {request.location}",
            )

    weekday = Weekday.of(request.day).value
    pool = [t for t in pool if works_on(t, request.day)]
    if not pool:
        return Conflict(ConflictReason.NO_DAY_AVAILABILITY, f"No trainer available on {weekday}")

    pool = [t for t in pool if not t.on_approved_leave(request.day)]
    if not pool:
        return Conflict(ConflictReason.ALL_ON_APPROVED_LEAVE, "All eligible trainers are on approved leave")

    pool = [t for t in pool if has_booking_capacity(t, request, schedule, cfg)]
    if block_feasible_ids is not None:
        pool = [t for t in pool if t.id in block_feasible_ids]
    if not pool:
        return Conflict(
            ConflictReason.SCHEDULING_OR_WORKLOAD_CONFLICT,
            "All eligible trainers have scheduling conflicts or workload issues",
        )

    return Conflict(ConflictReason.UNKNOWN_CONFLICT, "Unknown scheduling conflict - please investigate")
