"""CSV import utilities to load store data into the database."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import pandas as pd
from sqlalchemy.orm import Session

from batch_scheduler.domain.models import (
    Batch,
    Cadence,
    Course,
    Holiday,
    Leave,
    LeaveStatus,
    Priority,
    Subject,
    Trainer,
    TrainerStatus,
    WeeklyAvailability,
)
from batch_scheduler.domain.repositories import (
    BatchRepository,
    CourseRepository,
    HolidayRepository,
    SubjectRepository,
    TrainerRepository,
)
from batch_scheduler.services.calendar import parse_date

logger = logging.getLogger(__name__)


def _read(csv_path: str | Path) -> pd.DataFrame:
    # Everything as text; blanks stay empty strings
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    df.columns = df.columns.str.lower().str.strip()
    return df.apply(lambda col: col.str.strip())


def _cell(row: pd.Series, key: str):
    """Cell value, or None when the column is missing or the cell is blank."""
    value = row.get(key)
    if value is None or pd.isna(value) or value == "":
        return None
    return value


def _split(cell) -> List[str]:
    """Semicolon-separated cell -> list of non-empty items."""
    if cell is None:
        return []
    return [part.strip() for part in str(cell).split(";") if part.strip()]


def import_trainers_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import trainers from CSV into database.

    Args:
        session: Database session
        csv_path: CSV with id,name,email,locations,expertise,priority,start_time,end_time,availability,status

    Returns:
        Number of trainers imported
    """
    df = _read(csv_path)
    trainers = []
    for _, row in df.iterrows():
        trainers.append(
            Trainer(
                id=str(row["id"]),
                name=str(row["name"]),
                email=_cell(row, "email") or "",
                locations=tuple(_split(_cell(row, "locations"))),
                expertise=tuple(_split(_cell(row, "expertise"))),
                priority=Priority.parse(_cell(row, "priority") or "Junior"),
                start_time=_cell(row, "start_time") or "09:00",
                end_time=_cell(row, "end_time") or "18:00",
                availability=WeeklyAvailability.from_days(_split(_cell(row, "availability"))),
                status=TrainerStatus((_cell(row, "status") or "active").lower()),
            )
        )
    TrainerRepository.bulk_create(session, trainers)
    logger.info("Imported %d trainers from %s", len(trainers), csv_path)
    return len(trainers)


def import_leaves_csv(session: Session, csv_path: str | Path) -> int:
    """Import leave intervals (trainer_id,start_date,end_date,status,reason) for existing trainers."""
    df = _read(csv_path)
    for _, row in df.iterrows():
        TrainerRepository.add_leave(
            session,
            str(row["trainer_id"]),
            Leave(
                start_date=parse_date(row["start_date"]),
                end_date=parse_date(row["end_date"]),
                status=LeaveStatus((_cell(row, "status") or "pending").lower()),
                reason=_cell(row, "reason") or "",
            ),
        )
    logger.info("Imported %d leaves from %s", len(df), csv_path)
    return len(df)


def import_subjects_csv(session: Session, csv_path: str | Path) -> int:
    df = _read(csv_path)
    subjects = [
        Subject(id=str(row["id"]), name=str(row["name"]), duration=int(row["duration"]))
        for _, row in df.iterrows()
    ]
    SubjectRepository.bulk_create(session, subjects)
    logger.info("Imported %d subjects from %s", len(subjects), csv_path)
    return len(subjects)


def import_courses_csv(session: Session, csv_path: str | Path) -> int:
    """Import courses; the ``subjects`` cell lists subject ids in curriculum order."""
    df = _read(csv_path)
    courses = [
        Course(id=str(row["id"]), name=_cell(row, "name") or "", subject_ids=tuple(_split(_cell(row, "subjects"))))
        for _, row in df.iterrows()
    ]
    CourseRepository.bulk_create(session, courses)
    logger.info("Imported %d courses from %s", len(courses), csv_path)
    return len(courses)


def import_batches_csv(session: Session, csv_path: str | Path) -> int:
    df = _read(csv_path)
    batches = []
    for _, row in df.iterrows():
        end_date = _cell(row, "end_date")
        batches.append(
            Batch(
                id=str(row["id"]),
                name=_cell(row, "name") or "",
                course_id=str(row["course_id"]),
                location=str(row["location"]),
                cadence=Cadence.parse(_cell(row, "cadence")),
                start_date=parse_date(row["start_date"]),
                end_date=parse_date(end_date) if end_date else None,
                start_time=_cell(row, "start_time"),
                end_time=_cell(row, "end_time"),
                time_slot=_cell(row, "time_slot"),
            )
        )
    BatchRepository.bulk_create(session, batches)
    logger.info("Imported %d batches from %s", len(batches), csv_path)
    return len(batches)


def import_holidays_csv(session: Session, csv_path: str | Path) -> int:
    df = _read(csv_path)
    # Deduplicate on date, keep the last label
    df = df.drop_duplicates(subset=["date"], keep="last")
    holidays = [Holiday(date=parse_date(row["date"]), name=_cell(row, "name") or "") for _, row in df.iterrows()]
    HolidayRepository.bulk_create(session, holidays)
    logger.info("Imported %d holidays from %s", len(holidays), csv_path)
    return len(holidays)
