"""Post-hoc conflict detection over a complete schedule snapshot."""

from __future__ import annotations

from collections import Counter
from typing import List, Sequence

from batch_scheduler.domain.models import Conflict, ConflictReason, ScheduleSession, Trainer

TRAINER_ON_LEAVE = Conflict(ConflictReason.TRAINER_ON_LEAVE, "Trainer is on approved leave")
DOUBLE_BOOKED = Conflict(ConflictReason.DOUBLE_BOOKED, "Trainer has multiple sessions on the same day")


def detect_conflicts(schedule: Sequence[ScheduleSession], trainers: Sequence[Trainer]) -> List[ScheduleSession]:
    """
    Annotate assigned sessions whose trainer is on approved leave or double-booked.

    Existing conflicts are kept and a finding is never added twice, so the
    pass is idempotent. Output order and length match the input.
    """
    trainer_by_id = {t.id: t for t in trainers}
    bookings = Counter((s.trainer_id, s.date) for s in schedule if s.trainer_id is not None)

    annotated: List[ScheduleSession] = []
    for session in schedule:
        conflicts = list(session.conflicts or ())
        trainer = trainer_by_id.get(session.trainer_id) if session.trainer_id else None
        if trainer is not None:
            found = []
            if trainer.on_approved_leave(session.date):
                found.append(TRAINER_ON_LEAVE)
            if bookings[(trainer.id, session.date)] > 1:
                found.append(DOUBLE_BOOKED)
            conflicts.extend(c for c in found if c not in conflicts)
        annotated.append(session.with_conflicts(conflicts))
    return annotated


def has_conflicts(schedule: Sequence[ScheduleSession]) -> bool:
    return any(s.conflicts for s in schedule)
