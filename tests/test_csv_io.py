"""Tests for CSV import/export functionality."""

from datetime import date

import pandas as pd
import pytest

from batch_scheduler.domain.models import Cadence, LeaveStatus, Priority, TrainerStatus, WeeklyAvailability
from batch_scheduler.domain.repositories import (
    BatchRepository,
    CourseRepository,
    HolidayRepository,
    SubjectRepository,
    TrainerRepository,
)
from batch_scheduler.engine.orchestrator import build_batch_schedule
from batch_scheduler.io.export_csv import export_schedule_csv
from batch_scheduler.io.import_csv import (
    import_batches_csv,
    import_courses_csv,
    import_holidays_csv,
    import_leaves_csv,
    import_subjects_csv,
    import_trainers_csv,
)
from batch_scheduler.services.calendar import InvalidDate


def _write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content)
    return path


def _import_all(db_session, tmp_path):
    import_trainers_csv(
        db_session,
        _write(
            tmp_path,
            "trainers.csv",
            """id,name,email,locations,expertise,priority,start_time,end_time,availability,status
t1,Asha,asha@example.com,Kochi;online,Python;SQL,senior,09:00,18:00,monday;tuesday;wednesday;thursday;friday,active
t2,Ravi,,online,Python,Core,,,monday;wednesday;friday,
t3,Old Timer,,Kochi,Python,Junior,,,monday,inactive
""",
        ),
    )
    import_subjects_csv(db_session, _write(tmp_path, "subjects.csv", "id,name,duration\ns-py,Python,3\ns-sql,Database,2\n"))
    import_courses_csv(db_session, _write(tmp_path, "courses.csv", "id,name,subjects\nc1,Full Stack,s-py;s-sql\n"))
    import_batches_csv(
        db_session,
        _write(
            tmp_path,
            "batches.csv",
            """id,name,course_id,location,cadence,start_date,end_date,start_time,end_time,time_slot
b1,Kochi Jan,c1,Kochi,weekday,2024-01-01,,,,
b2,Weekend Online,c1,online,Weekend,2024-01-06,2024-03-01,,,18:00-20:00
""",
        ),
    )


def test_import_trainers_csv(db_session, tmp_path):
    _import_all(db_session, tmp_path)

    trainers = TrainerRepository.get_all(db_session)
    assert [t.id for t in trainers] == ["t1", "t2", "t3"]

    asha = trainers[0]
    assert asha.locations == ("Kochi", "online")
    assert asha.expertise == ("Python", "SQL")
    assert asha.priority == Priority.SENIOR
    assert asha.availability == WeeklyAvailability.weekdays()

    ravi = trainers[1]
    assert ravi.email == ""
    assert ravi.start_time == "09:00"
    assert ravi.end_time == "18:00"
    assert ravi.status == TrainerStatus.ACTIVE
    assert ravi.availability == WeeklyAvailability(monday=True, wednesday=True, friday=True)

    assert trainers[2].status == TrainerStatus.INACTIVE


def test_import_leaves_csv(db_session, tmp_path):
    _import_all(db_session, tmp_path)
    count = import_leaves_csv(
        db_session,
        _write(
            tmp_path,
            "leaves.csv",
            "trainer_id,start_date,end_date,status,reason\nt1,2024-01-02,2024-01-02,approved,Medical\nt2,2024-01-03,2024-01-05,,\n",
        ),
    )
    assert count == 2
    assert TrainerRepository.get_by_id(db_session, "t1").leaves[0].status == LeaveStatus.APPROVED
    assert TrainerRepository.get_by_id(db_session, "t2").leaves[0].status == LeaveStatus.PENDING


def test_import_leaves_for_unknown_trainer(db_session, tmp_path):
    path = _write(tmp_path, "leaves.csv", "trainer_id,start_date,end_date\nghost,2024-01-02,2024-01-02\n")
    with pytest.raises(LookupError):
        import_leaves_csv(db_session, path)


def test_import_courses_and_batches(db_session, tmp_path):
    _import_all(db_session, tmp_path)

    assert CourseRepository.get_by_id(db_session, "c1").subject_ids == ("s-py", "s-sql")
    assert [s.duration for s in SubjectRepository.get_all(db_session)] == [3, 2]

    b1 = BatchRepository.get_by_id(db_session, "b1")
    assert b1.end_date is None
    assert b1.time_slot is None
    b2 = BatchRepository.get_by_id(db_session, "b2")
    assert b2.cadence == Cadence.WEEKEND
    assert b2.end_date == date(2024, 3, 1)
    assert b2.time_slot == "18:00-20:00"


def test_import_holidays_dedupes_dates(db_session, tmp_path):
    path = _write(tmp_path, "holidays.csv", "date,name\n2024-01-26,Republic Day\n2024-01-15,Pongal\n2024-01-26,Republic Day (observed)\n")
    assert import_holidays_csv(db_session, path) == 2
    holidays = HolidayRepository.get_all(db_session)
    assert [h.date for h in holidays] == [date(2024, 1, 15), date(2024, 1, 26)]
    assert holidays[1].name == "Republic Day (observed)"


def test_import_rejects_bad_dates(db_session, tmp_path):
    path = _write(tmp_path, "holidays.csv", "date,name\n26/01/2024,Republic Day\n")
    with pytest.raises(InvalidDate):
        import_holidays_csv(db_session, path)


@pytest.mark.integration
def test_export_schedule_csv(db_session, tmp_path):
    _import_all(db_session, tmp_path)
    build_batch_schedule(db_session, "b1")

    out = tmp_path / "schedule.csv"
    count = export_schedule_csv(db_session, out, batch_id="b1")
    assert count == 5

    df = pd.read_csv(out, dtype=str, keep_default_na=False)
    assert list(df["date"]) == ["2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04", "2024-01-05"]
    assert list(df["subject_id"]) == ["s-py"] * 3 + ["s-sql"] * 2
    assert set(df["trainer_id"]) == {"t1"}
    assert set(df["status"]) == {"assigned"}

    assert export_schedule_csv(db_session, tmp_path / "all.csv") == 5
