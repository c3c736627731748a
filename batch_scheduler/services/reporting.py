"""Schedule summaries: per-subject assignments, trainer workload, batch progress."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence

import pandas as pd

from batch_scheduler.domain.models import Course, ScheduleSession, SessionStatus, Subject, Trainer

from .calendar import format_date


@dataclass(frozen=True)
class SubjectAssignment:
    subject_id: str
    subject_name: str
    trainer_id: Optional[str]
    trainer_name: str
    start_date: Optional[date]
    end_date: Optional[date]
    sessions_count: int
    status: SessionStatus


@dataclass(frozen=True)
class BatchProgress:
    completed: int
    total: int

    @property
    def percentage(self) -> int:
        return round(self.completed * 100 / self.total) if self.total else 0


def schedule_frame(schedule: Sequence[ScheduleSession]) -> pd.DataFrame:
    """Tabular view of a schedule, one row per session."""
    columns = ["batch_id", "date", "subject_id", "trainer_id", "status", "time_slot", "session_type", "conflicts"]
    rows = [
        {
            "batch_id": s.batch_id,
            "date": format_date(s.date),
            "subject_id": s.subject_id,
            "trainer_id": s.trainer_id,
            "status": s.status.value,
            "time_slot": s.time_slot,
            "session_type": s.kind.value,
            "conflicts": ";".join(str(c) for c in s.conflicts) if s.conflicts else None,
        }
        for s in schedule
    ]
    return pd.DataFrame(rows, columns=columns)


def summarize_subject_assignments(
    course: Course,
    subjects: Sequence[Subject],
    trainers: Sequence[Trainer],
    schedule: Sequence[ScheduleSession],
) -> List[SubjectAssignment]:
    """One row per curriculum subject, trainer taken from its first assigned session."""
    subject_by_id = {s.id: s for s in subjects}
    trainer_by_id = {t.id: t for t in trainers}
    rows: List[SubjectAssignment] = []
    for subject_id in course.subject_ids:
        subject = subject_by_id.get(subject_id)
        sessions = sorted((s for s in schedule if s.subject_id == subject_id), key=lambda s: s.date)
        trainer_id = next((s.trainer_id for s in sessions if s.trainer_id), None)
        trainer = trainer_by_id.get(trainer_id) if trainer_id else None
        rows.append(
            SubjectAssignment(
                subject_id=subject_id,
                subject_name=subject.name if subject else "Unknown Subject",
                trainer_id=trainer_id,
                trainer_name=trainer.name if trainer else "Unassigned",
                start_date=sessions[0].date if sessions else None,
                end_date=sessions[-1].date if sessions else None,
                sessions_count=len(sessions),
                status=SessionStatus.ASSIGNED if trainer_id else SessionStatus.UNASSIGNED,
            )
        )
    return rows


def trainer_workload(schedule: Sequence[ScheduleSession]) -> pd.Series:
    """Assigned sessions per trainer, busiest first."""
    df = schedule_frame(schedule)
    assigned = df[df["status"] == SessionStatus.ASSIGNED.value]
    if assigned.empty:
        return pd.Series(dtype="int64", name="sessions")
    counts = assigned.groupby("trainer_id").size().rename("sessions")
    # stable sort keeps trainer id order among equal counts
    return counts.sort_values(ascending=False, kind="stable")


def primary_trainer(schedule: Sequence[ScheduleSession]) -> Optional[str]:
    """Trainer id with the most assigned sessions, or None."""
    load = trainer_workload(schedule)
    if load.empty:
        return None
    return str(load.index[0])


def batch_progress(schedule: Sequence[ScheduleSession], as_of: date) -> BatchProgress:
    """Sessions dated before ``as_of`` count as completed."""
    completed = sum(1 for s in schedule if s.date < as_of)
    return BatchProgress(completed=completed, total=len(schedule))


def unassigned_count(schedule: Sequence[ScheduleSession]) -> int:
    return sum(1 for s in schedule if s.status == SessionStatus.UNASSIGNED)


def summarize_schedule(schedule: Sequence[ScheduleSession]) -> str:
    """Plain-text report: sessions per subject and status, workload, open conflicts."""
    if not schedule:
        return "No sessions."
    df = schedule_frame(schedule)

    coverage = df.groupby(["subject_id", "status"], sort=False).size().unstack(fill_value=0)
    spans: Dict[str, str] = {}
    for subject_id, group in df.groupby("subject_id", sort=False):
        spans[subject_id] = f"{group['date'].min()}..{group['date'].max()}"
    coverage["span"] = pd.Series(spans)

    lines = ["Sessions per subject:"]
    lines.append(coverage.to_string())
    lines.append("")
    lines.append("Sessions per trainer:")
    load = trainer_workload(schedule)
    lines.append(load.to_string() if not load.empty else "(none assigned)")

    flagged = df[df["conflicts"].notna()]
    if not flagged.empty:
        lines.append("")
        lines.append("Conflicts:")
        lines.append(flagged[["date", "subject_id", "trainer_id", "conflicts"]].to_string(index=False))
    return "\n".join(lines)
