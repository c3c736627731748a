"""End-to-end tests for the command-line interface."""

from datetime import date

import pytest

from batch_scheduler.cli import main
from batch_scheduler.domain.db import get_session
from batch_scheduler.domain.models import (
    Batch,
    ConflictReason,
    Course,
    ScheduleSession,
    SessionStatus,
    Trainer,
)
from batch_scheduler.domain.repositories import (
    BatchRepository,
    CourseRepository,
    ScheduleRepository,
    TrainerRepository,
)


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'cli.db'}"


@pytest.fixture
def csv_dir(tmp_path):
    (tmp_path / "trainers.csv").write_text(
        "id,name,locations,expertise,priority,availability\n"
        "t1,Asha,Kochi,Python,Senior,monday;tuesday;wednesday;thursday;friday\n"
    )
    (tmp_path / "subjects.csv").write_text("id,name,duration\ns-py,Python,5\n")
    (tmp_path / "courses.csv").write_text("id,name,subjects\nc1,Python Basics,s-py\n")
    (tmp_path / "batches.csv").write_text("id,course_id,location,start_date\nb1,c1,Kochi,2024-01-01\n")
    (tmp_path / "holidays.csv").write_text("date,name\n2024-01-03,Festival\n")
    return tmp_path


@pytest.mark.integration
def test_cli_workflow(db_url, csv_dir, capsys):
    main(["--db", db_url, "init-db"])
    main(
        [
            "--db", db_url, "import-csv",
            "--trainers", str(csv_dir / "trainers.csv"),
            "--subjects", str(csv_dir / "subjects.csv"),
            "--courses", str(csv_dir / "courses.csv"),
            "--batches", str(csv_dir / "batches.csv"),
            "--holidays", str(csv_dir / "holidays.csv"),
        ]
    )
    out_csv = csv_dir / "schedule.csv"
    main(["--db", db_url, "generate", "--batch", "b1", "--out", str(out_csv)])
    main(["--db", db_url, "conflicts", "--batch", "b1"])
    main(["--db", db_url, "end-date", "--start", "2024-01-01", "--course", "c1"])
    main(["--db", db_url, "summary", "--batch", "b1"])

    output = capsys.readouterr().out
    assert "[OK] Database initialized" in output
    assert "[OK] Imported 1 trainers" in output
    assert "[OK] Generated 5 sessions for batch b1 (0 unassigned)" in output
    assert "[OK] 0 of 5 sessions have conflicts" in output
    assert "2024-01-15" in output
    assert "Asha" in output
    assert out_csv.exists()


def test_cli_generate_unknown_batch(db_url, capsys):
    main(["--db", db_url, "init-db"])
    with pytest.raises(LookupError):
        main(["--db", db_url, "generate", "--batch", "missing"])
    assert "[ERROR] Generation failed" in capsys.readouterr().out


def test_cli_requires_command():
    with pytest.raises(SystemExit):
        main([])


def test_cli_conflicts_span_batches(db_url, capsys):
    """A trainer booked by two batches on one day is reported and saved for the requested batch only."""
    main(["--db", db_url, "init-db"])
    session = get_session(db_url)
    try:
        TrainerRepository.bulk_create(session, [Trainer(id="t1", name="Asha", locations=("Kochi",))])
        CourseRepository.bulk_create(session, [Course(id="c1", subject_ids=("python",))])
        BatchRepository.bulk_create(
            session,
            [
                Batch(id=batch_id, course_id="c1", location="Kochi", start_date=date(2024, 1, 1))
                for batch_id in ("b1", "b2")
            ],
        )
        for batch_id in ("b1", "b2"):
            ScheduleRepository.replace_for_batch(
                session,
                batch_id,
                [
                    ScheduleSession(
                        date(2024, 1, 1), "python", "09:00-17:00", SessionStatus.ASSIGNED, "t1", batch_id=batch_id
                    )
                ],
            )
    finally:
        session.close()

    main(["--db", db_url, "conflicts", "--batch", "b2", "--save"])
    output = capsys.readouterr().out
    assert "[WARN] 2024-01-01 python trainer=t1: DoubleBooked" in output
    assert "[OK] 1 of 1 sessions have conflicts" in output

    session = get_session(db_url)
    try:
        saved = ScheduleRepository.get_by_batch(session, "b2")
        assert [c.reason for c in saved[0].conflicts] == [ConflictReason.DOUBLE_BOOKED]
        assert ScheduleRepository.get_by_batch(session, "b1")[0].conflicts is None
    finally:
        session.close()
