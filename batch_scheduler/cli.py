"""Command-line interface for the trainer batch scheduler."""

from __future__ import annotations

import argparse
import logging

from batch_scheduler.config import SchedulerConfig, load_config
from batch_scheduler.domain.db import DEFAULT_DB_URL, get_session, init_database
from batch_scheduler.domain.repositories import (
    BatchRepository,
    CourseRepository,
    HolidayRepository,
    ScheduleRepository,
    SubjectRepository,
    TrainerRepository,
)
from batch_scheduler.engine.end_date import calculate_batch_end_date
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
from batch_scheduler.services.conflicts import detect_conflicts
from batch_scheduler.services.reporting import summarize_schedule, summarize_subject_assignments


def _config(args: argparse.Namespace) -> SchedulerConfig:
    return load_config(args.config) if getattr(args, "config", None) else SchedulerConfig()


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database."""
    init_database(args.db)
    print(f"[OK] Database initialized: {args.db}")


def _cmd_import_csv(args: argparse.Namespace) -> None:
    """Import CSV data into database (trainers before leaves, courses before batches)."""
    session = get_session(args.db)
    steps = [
        ("trainers", import_trainers_csv),
        ("leaves", import_leaves_csv),
        ("subjects", import_subjects_csv),
        ("courses", import_courses_csv),
        ("batches", import_batches_csv),
        ("holidays", import_holidays_csv),
    ]
    try:
        for name, importer in steps:
            path = getattr(args, name)
            if path:
                count = importer(session, path)
                print(f"[OK] Imported {count} {name}")
        print("[OK] CSV import complete")
    except Exception as e:
        session.rollback()
        print(f"[ERROR] Import failed: {e}")
        raise
    finally:
        session.close()


def _cmd_generate(args: argparse.Namespace) -> None:
    """Generate, optimize and persist a batch schedule."""
    session = get_session(args.db)
    try:
        cfg = _config(args)
        if args.no_optimize:
            cfg.optimize_after_generate = False
        schedule = build_batch_schedule(session, args.batch, cfg, persist=True)
        if args.out:
            export_schedule_csv(session, args.out, batch_id=args.batch)
            print(f"[INFO] Schedule written to {args.out}")
        unassigned = sum(1 for s in schedule if not s.is_assigned)
        print(f"[OK] Generated {len(schedule)} sessions for batch {args.batch} ({unassigned} unassigned)")
    except Exception as e:
        session.rollback()
        print(f"[ERROR] Generation failed: {e}")
        raise
    finally:
        session.close()


def _cmd_conflicts(args: argparse.Namespace) -> None:
    """Re-run conflict detection on a stored schedule and optionally save the annotations."""
    session = get_session(args.db)
    try:
        # Detect over every batch, report only this one
        store = detect_conflicts(ScheduleRepository.get_all(session), TrainerRepository.get_all(session))
        checked = [s for s in store if s.batch_id == args.batch]
        flagged = [s for s in checked if s.conflicts]
        for s in flagged:
            reasons = "; ".join(str(c) for c in s.conflicts)
            print(f"[WARN] {s.date} {s.subject_id} trainer={s.trainer_id or '-'}: {reasons}")
        if args.save:
            ScheduleRepository.replace_for_batch(session, args.batch, checked)
        print(f"[OK] {len(flagged)} of {len(checked)} sessions have conflicts")
    except Exception as e:
        session.rollback()
        print(f"[ERROR] Conflict check failed: {e}")
        raise
    finally:
        session.close()


def _cmd_end_date(args: argparse.Namespace) -> None:
    """Compute a batch end date for a course starting on a given date."""
    session = get_session(args.db)
    try:
        course = CourseRepository.get_by_id(session, args.course)
        if course is None:
            raise LookupError(f"Unknown course id {args.course!r}")
        end = calculate_batch_end_date(
            args.start,
            course,
            SubjectRepository.get_all(session),
            args.cadence,
            HolidayRepository.get_all(session),
            _config(args),
        )
        print(end)
    finally:
        session.close()


def _cmd_summary(args: argparse.Namespace) -> None:
    """Print a stored batch schedule summary."""
    session = get_session(args.db)
    try:
        batch = BatchRepository.get_by_id(session, args.batch)
        if batch is None:
            raise LookupError(f"Unknown batch id {args.batch!r}")
        schedule = ScheduleRepository.get_by_batch(session, args.batch)
        course = CourseRepository.get_by_id(session, batch.course_id)
        if course is not None:
            rows = summarize_subject_assignments(
                course, SubjectRepository.get_all(session), TrainerRepository.get_all(session), schedule
            )
            for row in rows:
                span = f"{row.start_date}..{row.end_date}" if row.start_date else "-"
                print(f"{row.subject_name:<30} {row.trainer_name:<25} {span:<24} {row.sessions_count:>3} {row.status.value}")
            print("")
        print(summarize_schedule(schedule))
    finally:
        session.close()


def _cmd_export(args: argparse.Namespace) -> None:
    """Export stored sessions to CSV."""
    session = get_session(args.db)
    try:
        count = export_schedule_csv(session, args.out, batch_id=args.batch)
        print(f"[OK] Exported {count} sessions to {args.out}")
    except Exception as e:
        print(f"[ERROR] Export failed: {e}")
        raise
    finally:
        session.close()


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="batch-scheduler",
        description="Trainer assignment scheduler for training batches",
    )

    # Global options
    parser.add_argument("--db", default=DEFAULT_DB_URL, help=f"Database URL (default: {DEFAULT_DB_URL})")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for info logs, -vv for debug")

    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init-db", help="Initialize database")
    init.set_defaults(func=_cmd_init_db)

    imp = sub.add_parser("import-csv", help="Import CSV data into database")
    imp.add_argument("--trainers", help="Path to trainers CSV")
    imp.add_argument("--leaves", help="Path to leaves CSV")
    imp.add_argument("--subjects", help="Path to subjects CSV")
    imp.add_argument("--courses", help="Path to courses CSV")
    imp.add_argument("--batches", help="Path to batches CSV")
    imp.add_argument("--holidays", help="Path to holidays CSV")
    imp.set_defaults(func=_cmd_import_csv)

    gen = sub.add_parser("generate", help="Generate schedule for a batch")
    gen.add_argument("--batch", required=True, help="Batch id")
    gen.add_argument("--config", help="Path to config YAML/JSON")
    gen.add_argument("--no-optimize", action="store_true", help="Skip the optimization pass")
    gen.add_argument("--out", help="Optional: export sessions to CSV")
    gen.set_defaults(func=_cmd_generate)

    con = sub.add_parser("conflicts", help="Detect conflicts in a stored batch schedule")
    con.add_argument("--batch", required=True, help="Batch id")
    con.add_argument("--save", action="store_true", help="Persist conflict annotations")
    con.set_defaults(func=_cmd_conflicts)

    end = sub.add_parser("end-date", help="Calculate a batch end date")
    end.add_argument("--start", required=True, help="Start date (YYYY-MM-DD)")
    end.add_argument("--course", required=True, help="Course id")
    end.add_argument("--cadence", choices=["weekday", "weekend"], default="weekday")
    end.add_argument("--config", help="Path to config YAML/JSON")
    end.set_defaults(func=_cmd_end_date)

    summ = sub.add_parser("summary", help="Summarize a stored batch schedule")
    summ.add_argument("--batch", required=True, help="Batch id")
    summ.set_defaults(func=_cmd_summary)

    exp = sub.add_parser("export", help="Export sessions to CSV")
    exp.add_argument("--out", required=True, help="Path to output CSV")
    exp.add_argument("--batch", help="Batch id to filter (optional)")
    exp.set_defaults(func=_cmd_export)

    args = parser.parse_args(argv)
    level = logging.DEBUG if args.verbose > 1 else logging.INFO if args.verbose == 1 else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(name)s: %(message)s")
    args.func(args)


if __name__ == "__main__":
    main()
