"""Manual schedule edits. Each returns a new collection; run detect_conflicts afterwards."""

from __future__ import annotations

from datetime import date
from typing import List, Sequence

from batch_scheduler.domain.models import ScheduleSession


def reassign_subject_trainer(
    schedule: Sequence[ScheduleSession],
    subject_id: str,
    trainer_id: str,
) -> List[ScheduleSession]:
    """Give every session of ``subject_id`` to ``trainer_id``."""
    return [s.assigned_to(trainer_id) if s.subject_id == subject_id else s for s in schedule]


def reschedule_session(schedule: Sequence[ScheduleSession], index: int, new_date: date) -> List[ScheduleSession]:
    """Move the session at ``index`` to ``new_date``, keeping date order."""
    if not 0 <= index < len(schedule):
        raise IndexError(f"No session at index {index} (schedule has {len(schedule)})")
    moved = [s.moved_to(new_date) if i == index else s for i, s in enumerate(schedule)]
    return sorted(moved, key=lambda s: s.date)
