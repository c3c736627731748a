"""Trainer selection: priority tiers and round-robin workload balancing."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Mapping, Optional, Sequence

from batch_scheduler.domain.models import ScheduleSession, Trainer


def workload(sessions: Iterable[ScheduleSession]) -> Counter:
    """Assigned session count per trainer id."""
    return Counter(s.trainer_id for s in sessions if s.trainer_id is not None)


def select_by_priority(candidates: Sequence[Trainer]) -> Optional[Trainer]:
    """Highest tier first; ties keep candidate order (sorted() is stable)."""
    if not candidates:
        return None
    return sorted(candidates, key=lambda t: -t.priority.rank)[0]


def select_round_robin(candidates: Sequence[Trainer], load: Mapping[str, int]) -> Optional[Trainer]:
    """Least-loaded trainer; ties broken by tier, then candidate order."""
    if not candidates:
        return None
    lowest = min(load.get(t.id, 0) for t in candidates)
    least_loaded = [t for t in candidates if load.get(t.id, 0) == lowest]
    return select_by_priority(least_loaded)


def select_trainer(
    candidates: Sequence[Trainer],
    load: Mapping[str, int],
    online: bool,
) -> Optional[Trainer]:
    """Round-robin for online cohorts with more than one candidate, priority otherwise."""
    if online and len(candidates) > 1:
        return select_round_robin(candidates, load)
    return select_by_priority(candidates)
