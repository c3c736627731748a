"""Tests for batch end-date calculation."""

from datetime import date

import pytest

from batch_scheduler.config import SchedulerConfig
from batch_scheduler.domain.models import Cadence, Course, Holiday, Subject
from batch_scheduler.engine.end_date import calculate_batch_end_date
from batch_scheduler.services.calendar import InvalidDate

SUBJECTS = [Subject("s1", "Python", 6), Subject("s2", "Database", 4), Subject("s3", "Soft Skills", 1)]
TEN_DAYS = Course(id="c1", subject_ids=("s1", "s2"))


def test_weekday_course_with_buffer():
    """10 days plus 5 buffer from Monday 1 Jan lands on Friday 19 Jan."""
    assert calculate_batch_end_date("2024-01-01", TEN_DAYS, SUBJECTS, "weekday") == "2024-01-19"


def test_accepts_date_objects():
    assert calculate_batch_end_date(date(2024, 1, 1), TEN_DAYS, SUBJECTS) == "2024-01-19"


def test_weekend_cadence():
    course = Course(id="c2", subject_ids=("s3",))
    # 1 + 5 weekend days: 6, 7, 13, 14, 20, 21 Jan
    assert calculate_batch_end_date("2024-01-01", course, SUBJECTS, Cadence.WEEKEND) == "2024-01-21"


def test_holidays_extend_end_date():
    holidays = [Holiday(date(2024, 1, 15), "Pongal")]
    assert calculate_batch_end_date("2024-01-01", TEN_DAYS, SUBJECTS, holidays=holidays) == "2024-01-22"


def test_buffer_is_configurable():
    cfg = SchedulerConfig(end_date_buffer_days=0)
    assert calculate_batch_end_date("2024-01-01", TEN_DAYS, SUBJECTS, cfg=cfg) == "2024-01-12"


def test_empty_course_without_buffer_returns_start():
    cfg = SchedulerConfig(end_date_buffer_days=0)
    empty = Course(id="c0", subject_ids=("unknown",))
    assert calculate_batch_end_date("2024-01-03", empty, SUBJECTS, cfg=cfg) == "2024-01-03"


def test_rejects_malformed_start():
    with pytest.raises(InvalidDate):
        calculate_batch_end_date("01-01-2024", TEN_DAYS, SUBJECTS)
