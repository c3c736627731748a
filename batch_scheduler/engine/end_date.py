"""Batch end-date calculation from curriculum length plus a buffer."""

from __future__ import annotations

import logging
from datetime import date
from itertools import islice
from typing import Optional, Sequence

from batch_scheduler.config import SchedulerConfig
from batch_scheduler.domain.models import Cadence, Course, Holiday, Subject
from batch_scheduler.services.calendar import format_date, iter_teaching_days, parse_date

from .sequencer import resolve_curriculum, total_working_days

logger = logging.getLogger(__name__)


def calculate_batch_end_date(
    start_date: str | date,
    course: Course,
    subjects: Sequence[Subject],
    cadence: Cadence | str = Cadence.WEEKDAY,
    holidays: Sequence[Holiday] = (),
    cfg: Optional[SchedulerConfig] = None,
) -> str:
    """
    Date of the last working day needed for the course plus the buffer, as ISO text.

    The start date counts when it is a working day. Holidays are skipped only
    when passed in; with none the result depends on the cadence alone.
    """
    cfg = cfg or SchedulerConfig()
    start = parse_date(start_date) if isinstance(start_date, str) else start_date
    needed = total_working_days(resolve_curriculum(course, subjects)) + cfg.end_date_buffer_days
    if needed <= 0:
        return format_date(start)

    last = next(islice(iter_teaching_days(start, cadence, holidays), needed - 1, None))
    logger.info("Batch starting %s needs %d working days, ends %s", format_date(start), needed, format_date(last))
    return format_date(last)
