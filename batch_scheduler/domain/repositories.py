"""Repository classes: read collaborators from the store and replace generated schedules."""

from __future__ import annotations

from typing import List, Optional, Sequence

from sqlalchemy.orm import Session, selectinload

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
    WeeklyAvailability,
)
from .records import (
    BatchRecord,
    CourseRecord,
    HolidayRecord,
    LeaveRecord,
    SessionRecord,
    SubjectRecord,
    TrainerRecord,
)


def trainer_from_record(record: TrainerRecord) -> Trainer:
    return Trainer(
        id=record.id,
        name=record.name,
        email=record.email or "",
        locations=tuple(record.locations or ()),
        expertise=tuple(record.expertise or ()),
        priority=Priority.parse(record.priority),
        start_time=record.start_time,
        end_time=record.end_time,
        availability=WeeklyAvailability.from_mapping(record.availability or {}),
        leaves=tuple(
            Leave(
                start_date=leave.start_date,
                end_date=leave.end_date,
                status=LeaveStatus(leave.status),
                reason=leave.reason or "",
            )
            for leave in record.leaves
        ),
        status=TrainerStatus(record.status),
    )


def trainer_to_record(trainer: Trainer) -> TrainerRecord:
    return TrainerRecord(
        id=trainer.id,
        name=trainer.name,
        email=trainer.email or None,
        locations=list(trainer.locations),
        expertise=list(trainer.expertise),
        priority=trainer.priority.value,
        start_time=trainer.start_time,
        end_time=trainer.end_time,
        availability={day.value: True for day in trainer.availability.days()},
        status=trainer.status.value,
        leaves=[
            LeaveRecord(
                start_date=leave.start_date,
                end_date=leave.end_date,
                status=leave.status.value,
                reason=leave.reason or None,
            )
            for leave in trainer.leaves
        ],
    )


def batch_from_record(record: BatchRecord) -> Batch:
    return Batch(
        id=record.id,
        name=record.name or "",
        course_id=record.course_id,
        location=record.location,
        cadence=Cadence.parse(record.cadence),
        start_date=record.start_date,
        end_date=record.end_date,
        start_time=record.start_time,
        end_time=record.end_time,
        time_slot=record.time_slot,
    )


def session_from_record(record: SessionRecord) -> ScheduleSession:
    conflicts = None
    if record.conflicts:
        conflicts = tuple(Conflict(ConflictReason(c["reason"]), c["message"]) for c in record.conflicts)
    return ScheduleSession(
        date=record.date,
        subject_id=record.subject_id,
        trainer_id=record.trainer_id,
        status=SessionStatus(record.status),
        time_slot=record.time_slot,
        conflicts=conflicts,
        kind=SessionKind(record.session_type),
        batch_id=record.batch_id,
    )


def session_to_record(batch_id: str, session: ScheduleSession) -> SessionRecord:
    return SessionRecord(
        batch_id=batch_id,
        date=session.date,
        subject_id=session.subject_id,
        trainer_id=session.trainer_id,
        status=session.status.value,
        time_slot=session.time_slot,
        session_type=session.kind.value,
        conflicts=(
            [{"reason": c.reason.value, "message": c.message} for c in session.conflicts]
            if session.conflicts
            else None
        ),
    )


class TrainerRepository:
    """Repository for trainer data access."""

    @staticmethod
    def get_all(session: Session) -> List[Trainer]:
        """Get all trainers in insertion-stable id order."""
        records = (
            session.query(TrainerRecord)
            .options(selectinload(TrainerRecord.leaves))
            .order_by(TrainerRecord.id)
            .all()
        )
        return [trainer_from_record(r) for r in records]

    @staticmethod
    def get_by_id(session: Session, trainer_id: str) -> Optional[Trainer]:
        record = session.get(TrainerRecord, trainer_id)
        return trainer_from_record(record) if record else None

    @staticmethod
    def bulk_create(session: Session, trainers: Sequence[Trainer]) -> None:
        session.add_all([trainer_to_record(t) for t in trainers])
        session.commit()

    @staticmethod
    def add_leave(session: Session, trainer_id: str, leave: Leave) -> None:
        """Attach a leave interval to an existing trainer."""
        record = session.get(TrainerRecord, trainer_id)
        if record is None:
            raise LookupError(f"Unknown trainer id {trainer_id!r}")
        record.leaves.append(
            LeaveRecord(
                start_date=leave.start_date,
                end_date=leave.end_date,
                status=leave.status.value,
                reason=leave.reason or None,
            )
        )
        session.commit()


class SubjectRepository:
    """Repository for subject data access."""

    @staticmethod
    def get_all(session: Session) -> List[Subject]:
        return [
            Subject(id=r.id, name=r.name, duration=int(r.duration))
            for r in session.query(SubjectRecord).order_by(SubjectRecord.id).all()
        ]

    @staticmethod
    def bulk_create(session: Session, subjects: Sequence[Subject]) -> None:
        session.add_all([SubjectRecord(id=s.id, name=s.name, duration=s.duration) for s in subjects])
        session.commit()


class CourseRepository:
    """Repository for course data access."""

    @staticmethod
    def get_by_id(session: Session, course_id: str) -> Optional[Course]:
        record = session.get(CourseRecord, course_id)
        if record is None:
            return None
        return Course(id=record.id, name=record.name or "", subject_ids=tuple(record.subject_ids or ()))

    @staticmethod
    def bulk_create(session: Session, courses: Sequence[Course]) -> None:
        session.add_all(
            [CourseRecord(id=c.id, name=c.name or None, subject_ids=list(c.subject_ids)) for c in courses]
        )
        session.commit()


class BatchRepository:
    """Repository for batch data access."""

    @staticmethod
    def get_all(session: Session) -> List[Batch]:
        return [batch_from_record(r) for r in session.query(BatchRecord).order_by(BatchRecord.id).all()]

    @staticmethod
    def get_by_id(session: Session, batch_id: str) -> Optional[Batch]:
        record = session.get(BatchRecord, batch_id)
        return batch_from_record(record) if record else None

    @staticmethod
    def bulk_create(session: Session, batches: Sequence[Batch]) -> None:
        session.add_all(
            [
                BatchRecord(
                    id=b.id,
                    name=b.name or None,
                    course_id=b.course_id,
                    location=b.location,
                    cadence=b.cadence.value,
                    start_date=b.start_date,
                    end_date=b.end_date,
                    start_time=b.start_time,
                    end_time=b.end_time,
                    time_slot=b.time_slot,
                )
                for b in batches
            ]
        )
        session.commit()

    @staticmethod
    def set_end_date(session: Session, batch_id: str, end_date) -> None:
        record = session.get(BatchRecord, batch_id)
        if record is None:
            raise LookupError(f"Unknown batch id {batch_id!r}")
        record.end_date = end_date
        session.commit()


class HolidayRepository:
    """Repository for holiday data access."""

    @staticmethod
    def get_all(session: Session) -> List[Holiday]:
        return [
            Holiday(date=r.date, name=r.name or "")
            for r in session.query(HolidayRecord).order_by(HolidayRecord.date).all()
        ]

    @staticmethod
    def bulk_create(session: Session, holidays: Sequence[Holiday]) -> None:
        session.add_all([HolidayRecord(date=h.date, name=h.name or None) for h in holidays])
        session.commit()


class ScheduleRepository:
    """Repository for generated schedule sessions."""

    @staticmethod
    def get_by_batch(session: Session, batch_id: str) -> List[ScheduleSession]:
        records = (
            session.query(SessionRecord)
            .filter(SessionRecord.batch_id == batch_id)
            .order_by(SessionRecord.date, SessionRecord.id)
            .all()
        )
        return [session_from_record(r) for r in records]

    @staticmethod
    def get_other_batches(session: Session, batch_id: str) -> List[ScheduleSession]:
        """Sessions of every batch except ``batch_id``, used for cross-batch booking checks."""
        records = (
            session.query(SessionRecord)
            .filter(SessionRecord.batch_id != batch_id)
            .order_by(SessionRecord.date, SessionRecord.id)
            .all()
        )
        return [session_from_record(r) for r in records]

    @staticmethod
    def get_all(session: Session) -> List[ScheduleSession]:
        records = session.query(SessionRecord).order_by(SessionRecord.date, SessionRecord.id).all()
        return [session_from_record(r) for r in records]

    @staticmethod
    def replace_for_batch(session: Session, batch_id: str, sessions: Sequence[ScheduleSession]) -> int:
        """Replace a batch's schedule wholesale. Returns the number of deleted rows."""
        deleted = (
            session.query(SessionRecord)
            .filter(SessionRecord.batch_id == batch_id)
            .delete(synchronize_session=False)
        )
        session.add_all([session_to_record(batch_id, s) for s in sessions])
        session.commit()
        return deleted
