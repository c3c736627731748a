"""Scheduling engine: generation, optimization, end dates and orchestration."""

from .edits import reassign_subject_trainer, reschedule_session
from .end_date import calculate_batch_end_date
from .generator import ScheduleGenerator, generate_schedule
from .optimizer import optimize_schedule
from .orchestrator import Orchestrator, build_batch_schedule

__all__ = [
    "ScheduleGenerator",
    "generate_schedule",
    "optimize_schedule",
    "calculate_batch_end_date",
    "reassign_subject_trainer",
    "reschedule_session",
    "Orchestrator",
    "build_batch_schedule",
]
