"""Schedule generation: sequence subjects onto teaching days and assign trainers greedily."""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional, Sequence

from batch_scheduler.config import SchedulerConfig
from batch_scheduler.domain.models import Batch, Course, Holiday, ScheduleSession, Subject, Trainer
from batch_scheduler.services.eligibility import (
    SlotRequest,
    can_cover_block,
    diagnose_unassigned,
    is_eligible,
)
from batch_scheduler.services.expertise import ExpertiseMatcher, SynonymExpertiseMatcher
from batch_scheduler.services.selection import select_trainer, workload
from batch_scheduler.services.timeslots import session_time_slot

from .builder import build_session
from .sequencer import SubjectBlock, resolve_curriculum, sequence_blocks

logger = logging.getLogger(__name__)


class ScheduleGenerator:
    """
    Greedy, calendar-aware generator for one batch.

    For each subject block the trainers that can teach every day of the block
    are found first; each day then picks among those still eligible that day
    (priority tiers, or round-robin for online cohorts). Days with no
    candidate are emitted unassigned with a diagnostic.
    """

    def __init__(self, cfg: Optional[SchedulerConfig] = None, matcher: Optional[ExpertiseMatcher] = None):
        self.cfg = cfg or SchedulerConfig()
        self.matcher = matcher or SynonymExpertiseMatcher(self.cfg.synonym_groups)

    def _candidates(self, trainers: Iterable[Trainer]) -> List[Trainer]:
        if self.cfg.include_inactive_trainers:
            return list(trainers)
        return [t for t in trainers if t.is_active]

    @staticmethod
    def _request(day: date, subject: Subject, batch: Batch, time_slot: str) -> SlotRequest:
        return SlotRequest(
            day=day,
            subject_label=subject.name,
            time_slot=time_slot,
            location=batch.location,
            online=batch.is_online,
        )

    def make_schedule(
        self,
        batch: Batch,
        course: Course,
        subjects: Sequence[Subject],
        trainers: Sequence[Trainer],
        holidays: Sequence[Holiday],
        existing_sessions: Sequence[ScheduleSession] = (),
    ) -> List[ScheduleSession]:
        """
        Generate the batch's sessions.

        Args:
            batch: Batch being scheduled
            course: The batch's course (curriculum order is authoritative)
            subjects: Subject records; unknown curriculum ids are dropped
            trainers: Trainer pool, in tie-break order
            holidays: Holidays skipped regardless of cadence
            existing_sessions: Other batches' sessions, checked for double-booking but not returned

        Returns:
            One session per teaching day, ascending by date
        """
        candidates = self._candidates(trainers)
        curriculum = resolve_curriculum(course, subjects)
        blocks = sequence_blocks(batch, curriculum, holidays)
        time_slot = session_time_slot(batch, self.cfg)

        logger.info(
            "Generating schedule for batch %s: %d subjects, %d trainers, cadence=%s, location=%s",
            batch.id, len(curriculum), len(candidates), batch.cadence.value, batch.location,
        )

        booked: List[ScheduleSession] = list(existing_sessions)
        load = workload(booked)
        generated: List[ScheduleSession] = []

        for block in blocks:
            generated.extend(self._fill_block(block, batch, candidates, time_slot, booked, load))

        generated.sort(key=lambda s: s.date)
        assigned = sum(1 for s in generated if s.is_assigned)
        logger.info(
            "Batch %s: %d sessions generated, %d assigned, %d unassigned",
            batch.id, len(generated), assigned, len(generated) - assigned,
        )
        return generated

    def _fill_block(self, block: SubjectBlock, batch, candidates, time_slot, booked, load) -> List[ScheduleSession]:
        """Emit the sessions of one subject block, appending each to ``booked`` as it goes."""
        requests = [self._request(day, block.subject, batch, time_slot) for day in block.days]
        feasible = [t for t in candidates if can_cover_block(t, requests, booked, self.matcher, self.cfg)]
        feasible_ids = {t.id for t in feasible}
        logger.debug(
            "Subject %s (%d days): block-feasible trainers %s",
            block.subject.id, len(block.days), [t.id for t in feasible],
        )

        sessions: List[ScheduleSession] = []
        for request in requests:
            day_candidates = [t for t in feasible if is_eligible(t, request, booked, self.matcher, self.cfg)]
            trainer = select_trainer(day_candidates, load, batch.is_online)
            if trainer is not None:
                load[trainer.id] += 1
                session = build_session(request.day, block.subject, batch, time_slot, trainer=trainer)
            else:
                conflict = diagnose_unassigned(
                    candidates, request, booked, self.matcher, self.cfg, block_feasible_ids=feasible_ids
                )
                logger.debug("No trainer for %s on %s: %s", block.subject.id, request.day, conflict)
                session = build_session(request.day, block.subject, batch, time_slot, conflict=conflict)
            booked.append(session)
            sessions.append(session)
        return sessions


def generate_schedule(
    batch: Batch,
    course: Course,
    subjects: Sequence[Subject],
    trainers: Sequence[Trainer],
    holidays: Sequence[Holiday],
    existing_sessions: Sequence[ScheduleSession] = (),
    cfg: Optional[SchedulerConfig] = None,
) -> List[ScheduleSession]:
    """Convenience wrapper around ScheduleGenerator.make_schedule."""
    return ScheduleGenerator(cfg).make_schedule(
        batch, course, subjects, trainers, holidays, existing_sessions=existing_sessions
    )
