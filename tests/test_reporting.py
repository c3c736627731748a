"""Tests for schedule reporting."""

from datetime import date

from batch_scheduler.domain.models import (
    Conflict,
    ConflictReason,
    Course,
    ScheduleSession,
    SessionStatus,
    Subject,
    Trainer,
)
from batch_scheduler.services.reporting import (
    batch_progress,
    primary_trainer,
    schedule_frame,
    summarize_schedule,
    summarize_subject_assignments,
    trainer_workload,
    unassigned_count,
)

NO_MATCH = Conflict(ConflictReason.NO_EXPERTISE_MATCH, "No trainer available with Database expertise")


def _schedule():
    def assigned(day, subject_id, trainer_id):
        return ScheduleSession(
            date(2024, 1, day), subject_id, "09:00-17:00", SessionStatus.ASSIGNED, trainer_id, batch_id="b1"
        )

    return [
        assigned(1, "s1", "t1"),
        assigned(2, "s1", "t1"),
        assigned(3, "s1", "t2"),
        ScheduleSession(date(2024, 1, 4), "s2", "09:00-17:00", conflicts=(NO_MATCH,), batch_id="b1"),
    ]


def test_schedule_frame_columns():
    df = schedule_frame(_schedule())
    assert list(df.columns) == [
        "batch_id", "date", "subject_id", "trainer_id", "status", "time_slot", "session_type", "conflicts"
    ]
    assert len(df) == 4
    assert df.iloc[0]["date"] == "2024-01-01"
    assert df.iloc[3]["conflicts"] == "NoExpertiseMatch: No trainer available with Database expertise"


def test_trainer_workload_and_primary():
    load = trainer_workload(_schedule())
    assert load.to_dict() == {"t1": 2, "t2": 1}
    assert primary_trainer(_schedule()) == "t1"
    assert primary_trainer([]) is None


def test_subject_assignment_summary():
    course = Course(id="c1", subject_ids=("s1", "s2", "s3"))
    subjects = [Subject("s1", "Python", 3), Subject("s2", "Database", 1)]
    trainers = [Trainer(id="t1", name="Asha"), Trainer(id="t2", name="Ravi")]
    rows = summarize_subject_assignments(course, subjects, trainers, _schedule())

    assert [r.subject_id for r in rows] == ["s1", "s2", "s3"]
    assert rows[0].trainer_name == "Asha"
    assert rows[0].start_date == date(2024, 1, 1)
    assert rows[0].end_date == date(2024, 1, 3)
    assert rows[0].sessions_count == 3
    assert rows[1].status == SessionStatus.UNASSIGNED
    assert rows[1].trainer_name == "Unassigned"
    assert rows[2].subject_name == "Unknown Subject"
    assert rows[2].sessions_count == 0


def test_batch_progress():
    progress = batch_progress(_schedule(), as_of=date(2024, 1, 3))
    assert progress.completed == 2
    assert progress.total == 4
    assert progress.percentage == 50
    assert batch_progress([], date(2024, 1, 1)).percentage == 0


def test_summaries():
    assert unassigned_count(_schedule()) == 1
    assert summarize_schedule([]) == "No sessions."
    text = summarize_schedule(_schedule())
    assert "Sessions per subject:" in text
    assert "Sessions per trainer:" in text
    assert "NoExpertiseMatch" in text
