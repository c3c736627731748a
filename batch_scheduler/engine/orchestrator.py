"""Orchestrator - loads a batch from the store, runs every pass and persists the schedule."""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from batch_scheduler.config import SchedulerConfig
from batch_scheduler.domain.models import ScheduleSession
from batch_scheduler.domain.repositories import (
    BatchRepository,
    CourseRepository,
    HolidayRepository,
    ScheduleRepository,
    SubjectRepository,
    TrainerRepository,
)
from batch_scheduler.services.calendar import parse_date
from batch_scheduler.services.conflicts import detect_conflicts

from .end_date import calculate_batch_end_date
from .generator import ScheduleGenerator
from .optimizer import optimize_schedule

logger = logging.getLogger(__name__)


class Orchestrator:
    """
    Orchestrator runs generation, optimization and conflict detection for a batch.

    Sessions already stored for other batches are passed to the generator and
    the optimizer so a trainer is not double-booked across batches, and to
    conflict detection so clashes with them are flagged.
    """

    def __init__(self, cfg: Optional[SchedulerConfig] = None):
        self.cfg = cfg or SchedulerConfig()
        self.generator = ScheduleGenerator(self.cfg)

    def build_schedule(self, session: Session, batch_id: str) -> List[ScheduleSession]:
        """
        Build the complete schedule for one batch.

        Args:
            session: Database session
            batch_id: Batch identifier

        Returns:
            Sessions for the batch, ascending by date

        Raises:
            LookupError: If the batch or its course does not exist
        """
        batch = BatchRepository.get_by_id(session, batch_id)
        if batch is None:
            raise LookupError(f"Unknown batch id {batch_id!r}")
        course = CourseRepository.get_by_id(session, batch.course_id)
        if course is None:
            raise LookupError(f"Batch {batch_id!r} references unknown course {batch.course_id!r}")

        subjects = SubjectRepository.get_all(session)
        trainers = TrainerRepository.get_all(session)
        holidays = HolidayRepository.get_all(session)
        others = ScheduleRepository.get_other_batches(session, batch_id)

        schedule = self.generator.make_schedule(
            batch, course, subjects, trainers, holidays, existing_sessions=others
        )
        if self.cfg.optimize_after_generate:
            schedule = optimize_schedule(schedule, trainers, self.cfg, existing_sessions=others)
        # Check against the whole store, keep only this batch's sessions
        checked = detect_conflicts(list(others) + list(schedule), trainers)
        return checked[len(others):]


def build_batch_schedule(
    session: Session,
    batch_id: str,
    cfg: Optional[SchedulerConfig] = None,
    persist: bool = True,
) -> List[ScheduleSession]:
    """
    Convenience function to build (and by default persist) a batch schedule.

    When persisting, the batch's previous sessions are replaced and a missing
    end date is filled in from the course length.
    """
    cfg = cfg or SchedulerConfig()
    schedule = Orchestrator(cfg).build_schedule(session, batch_id)

    if persist:
        deleted = ScheduleRepository.replace_for_batch(session, batch_id, schedule)
        if deleted > 0:
            logger.info("Replaced %d existing sessions for batch %s", deleted, batch_id)
        logger.info("Persisted %d sessions for batch %s", len(schedule), batch_id)

        batch = BatchRepository.get_by_id(session, batch_id)
        if batch.end_date is None:
            course = CourseRepository.get_by_id(session, batch.course_id)
            end = calculate_batch_end_date(
                batch.start_date,
                course,
                SubjectRepository.get_all(session),
                batch.cadence,
                HolidayRepository.get_all(session),
                cfg,
            )
            BatchRepository.set_end_date(session, batch_id, parse_date(end))

    return schedule
