"""Session builder: one ScheduleSession per teaching day."""

from __future__ import annotations

from datetime import date
from typing import Optional

from batch_scheduler.domain.models import Batch, Conflict, ScheduleSession, SessionKind, SessionStatus, Subject, Trainer


def build_session(
    day: date,
    subject: Subject,
    batch: Batch,
    time_slot: str,
    trainer: Optional[Trainer] = None,
    conflict: Optional[Conflict] = None,
) -> ScheduleSession:
    if trainer is not None:
        return ScheduleSession(
            date=day,
            subject_id=subject.id,
            time_slot=time_slot,
            status=SessionStatus.ASSIGNED,
            trainer_id=trainer.id,
            kind=SessionKind.REGULAR,
            batch_id=batch.id,
        )
    return ScheduleSession(
        date=day,
        subject_id=subject.id,
        time_slot=time_slot,
        status=SessionStatus.UNASSIGNED,
        conflicts=(conflict,) if conflict is not None else None,
        kind=SessionKind.REGULAR,
        batch_id=batch.id,
    )
