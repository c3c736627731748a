"""Subject sequencer: lays a course's curriculum onto the batch's teaching days."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from itertools import islice
from typing import Iterable, List, Sequence, Tuple

from batch_scheduler.domain.models import Batch, Course, Holiday, Subject
from batch_scheduler.services.calendar import iter_teaching_days

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubjectBlock:
    """A subject and the contiguous run of teaching days it occupies."""

    subject: Subject
    first_index: int
    days: Tuple[date, ...]


def resolve_curriculum(course: Course, subjects: Iterable[Subject]) -> List[Subject]:
    """Course subjects in curriculum order; unknown ids are dropped."""
    subject_by_id = {s.id: s for s in subjects}
    resolved = []
    for subject_id in course.subject_ids:
        subject = subject_by_id.get(subject_id)
        if subject is None:
            logger.warning("Course %s references unknown subject %s, skipping", course.id, subject_id)
            continue
        resolved.append(subject)
    return resolved


def total_working_days(curriculum: Sequence[Subject]) -> int:
    return sum(max(0, s.duration) for s in curriculum)


def sequence_blocks(
    batch: Batch,
    curriculum: Sequence[Subject],
    holidays: Sequence[Holiday],
) -> List[SubjectBlock]:
    """
    Map each counted teaching day to exactly one subject.

    Block i covers teaching-day indices [sum(d_j, j<i), sum(d_j, j<=i)).
    Days outside the batch cadence and holidays are skipped. Zero-length
    subjects produce no block.
    """
    needed = total_working_days(curriculum)
    days = list(islice(iter_teaching_days(batch.start_date, batch.cadence, holidays), needed))

    blocks: List[SubjectBlock] = []
    cursor = 0
    for subject in curriculum:
        length = max(0, subject.duration)
        if length == 0:
            continue
        blocks.append(SubjectBlock(subject=subject, first_index=cursor, days=tuple(days[cursor:cursor + length])))
        cursor += length
    return blocks
