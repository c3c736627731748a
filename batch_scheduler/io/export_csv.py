"""CSV export utilities for generated schedules."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from sqlalchemy.orm import Session

from batch_scheduler.domain.repositories import ScheduleRepository
from batch_scheduler.services.reporting import schedule_frame

logger = logging.getLogger(__name__)


def export_schedule_csv(session: Session, csv_path: str | Path, batch_id: Optional[str] = None) -> int:
    """
    Export stored sessions to CSV.

    Args:
        session: Database session
        csv_path: Output path
        batch_id: Optional batch filter; all batches when omitted

    Returns:
        Number of sessions exported
    """
    sessions = (
        ScheduleRepository.get_by_batch(session, batch_id)
        if batch_id is not None
        else ScheduleRepository.get_all(session)
    )
    df = schedule_frame(sessions)
    df.to_csv(csv_path, index=False)
    logger.info("Exported %d sessions to %s", len(df), csv_path)
    return len(df)
