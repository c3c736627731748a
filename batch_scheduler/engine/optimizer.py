"""Second pass that tries to fill sessions generation left unassigned."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from batch_scheduler.config import SchedulerConfig
from batch_scheduler.domain.models import ScheduleSession, Trainer
from batch_scheduler.services.eligibility import SlotRequest, eligible_trainers
from batch_scheduler.services.expertise import ExpertiseMatcher, matcher_for
from batch_scheduler.services.selection import select_round_robin, workload

logger = logging.getLogger(__name__)


def optimize_schedule(
    schedule: Sequence[ScheduleSession],
    trainers: Sequence[Trainer],
    cfg: Optional[SchedulerConfig] = None,
    matcher: Optional[ExpertiseMatcher] = None,
    existing_sessions: Sequence[ScheduleSession] = (),
) -> List[ScheduleSession]:
    """
    Assign trainers to unassigned sessions, balancing workload.

    Assigned sessions pass through untouched. For an unassigned session a
    trainer must match expertise (by default a substring test on the subject
    id, see ``SchedulerConfig.optimizer_expertise``), work that weekday, not
    be on approved leave and have no session that day among the sessions
    already emitted by this pass or in ``existing_sessions`` (other batches,
    counted for booking and workload but not returned). Location is not
    checked here.
    """
    cfg = cfg or SchedulerConfig()
    matcher = matcher or matcher_for(cfg.optimizer_expertise, cfg)
    pool = list(trainers) if cfg.include_inactive_trainers else [t for t in trainers if t.is_active]

    booked: List[ScheduleSession] = list(existing_sessions)
    load = workload(booked + list(schedule))
    optimized: List[ScheduleSession] = []
    filled = 0

    for session in schedule:
        if session.is_assigned:
            booked.append(session)
            optimized.append(session)
            continue

        request = SlotRequest(day=session.date, subject_label=session.subject_id, time_slot=session.time_slot)
        candidates = eligible_trainers(pool, request, booked, matcher, cfg)
        chosen = select_round_robin(candidates, load)
        if chosen is None:
            booked.append(session)
            optimized.append(session)
            continue

        load[chosen.id] += 1
        filled += 1
        logger.debug("Optimizer assigned %s to %s on %s", chosen.id, session.subject_id, session.date)
        session = session.assigned_to(chosen.id)
        booked.append(session)
        optimized.append(session)

    logger.info("Optimization filled %d of %d unassigned sessions", filled, sum(1 for s in schedule if not s.is_assigned))
    return optimized
