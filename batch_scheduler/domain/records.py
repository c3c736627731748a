"""SQLAlchemy records backing the trainer scheduling store."""

from __future__ import annotations

from sqlalchemy import JSON, Column, Date, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, relationship


class Base(DeclarativeBase):
    """Base class for all records."""
    pass


class TrainerRecord(Base):
    """Trainer with locations, expertise tags and weekly availability."""

    __tablename__ = "trainers"

    id = Column(String(64), primary_key=True)
    name = Column(String(200), nullable=False)
    email = Column(String(200), nullable=True)
    locations = Column(JSON, nullable=False, default=list)
    expertise = Column(JSON, nullable=False, default=list)
    priority = Column(String(10), nullable=False, default="Junior")  # Senior, Core, Junior
    start_time = Column(String(5), nullable=False, default="09:00")
    end_time = Column(String(5), nullable=False, default="18:00")
    availability = Column(JSON, nullable=False, default=dict)  # weekday name -> bool
    status = Column(String(10), nullable=False, default="active")

    leaves = relationship(
        "LeaveRecord",
        back_populates="trainer",
        cascade="all, delete-orphan",
        order_by="LeaveRecord.start_date",
    )

    def __repr__(self) -> str:
        return f"<TrainerRecord(id={self.id}, name='{self.name}', priority='{self.priority}')>"


class LeaveRecord(Base):
    __tablename__ = "leaves"

    id = Column(Integer, primary_key=True, autoincrement=True)
    trainer_id = Column(String(64), ForeignKey("trainers.id"), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(String(10), nullable=False, default="pending")
    reason = Column(String(500), nullable=True)

    trainer = relationship("TrainerRecord", back_populates="leaves")

    def __repr__(self) -> str:
        return f"<LeaveRecord(trainer={self.trainer_id}, {self.start_date}..{self.end_date}, {self.status})>"


class SubjectRecord(Base):
    __tablename__ = "subjects"

    id = Column(String(64), primary_key=True)
    name = Column(String(200), nullable=False)
    duration = Column(Integer, nullable=False)  # working days

    def __repr__(self) -> str:
        return f"<SubjectRecord(id={self.id}, name='{self.name}', duration={self.duration})>"


class CourseRecord(Base):
    """Course with its curriculum; subject_ids order is authoritative."""

    __tablename__ = "courses"

    id = Column(String(64), primary_key=True)
    name = Column(String(200), nullable=True)
    subject_ids = Column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<CourseRecord(id={self.id}, subjects={self.subject_ids})>"


class BatchRecord(Base):
    __tablename__ = "batches"

    id = Column(String(64), primary_key=True)
    name = Column(String(200), nullable=True)
    course_id = Column(String(64), ForeignKey("courses.id"), nullable=False)
    location = Column(String(100), nullable=False)
    cadence = Column(String(10), nullable=False, default="weekday")  # weekday, weekend
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    start_time = Column(String(5), nullable=True)
    end_time = Column(String(5), nullable=True)
    time_slot = Column(String(11), nullable=True)  # e.g. 18:00-20:00 for online batches

    sessions = relationship("SessionRecord", back_populates="batch", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<BatchRecord(id={self.id}, course={self.course_id}, location='{self.location}')>"


class HolidayRecord(Base):
    __tablename__ = "holidays"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False, unique=True)
    name = Column(String(200), nullable=True)

    def __repr__(self) -> str:
        return f"<HolidayRecord(date={self.date}, name='{self.name}')>"


class SessionRecord(Base):
    """Persisted schedule session, replaced wholesale per batch on regeneration."""

    __tablename__ = "schedule_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    batch_id = Column(String(64), ForeignKey("batches.id"), nullable=False)
    date = Column(Date, nullable=False)
    subject_id = Column(String(64), nullable=False)
    trainer_id = Column(String(64), ForeignKey("trainers.id"), nullable=True)
    status = Column(String(12), nullable=False, default="unassigned")
    time_slot = Column(String(11), nullable=False)
    session_type = Column(String(20), nullable=False, default="regular")
    conflicts = Column(JSON, nullable=True)  # list of {"reason": ..., "message": ...}

    batch = relationship("BatchRecord", back_populates="sessions")

    def __repr__(self) -> str:
        return f"<SessionRecord(batch={self.batch_id}, date={self.date}, subject={self.subject_id}, trainer={self.trainer_id})>"
