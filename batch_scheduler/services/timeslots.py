"""Time-slot parsing and arithmetic for ``HH:MM-HH:MM`` strings."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from batch_scheduler.domain.models import Batch, Cadence, ScheduleSession


def parse_time_to_minutes(value: str) -> int:
    """``"09:30"`` -> 570. Missing or non-numeric parts count as zero."""
    if not value:
        return 0
    parts = value.strip().split(":")
    hours = int(parts[0]) if parts[0].strip().isdigit() else 0
    minutes = int(parts[1]) if len(parts) > 1 and parts[1].strip().isdigit() else 0
    return hours * 60 + minutes


def parse_time_slot(slot: Optional[str]) -> Optional[Tuple[int, int]]:
    """Return (start, end) minutes, or None for an empty/unstructured slot."""
    if not slot or "-" not in slot:
        return None
    start, end = slot.split("-", 1)
    return parse_time_to_minutes(start), parse_time_to_minutes(end)


def slots_overlap(a: Optional[str], b: Optional[str]) -> bool:
    first, second = parse_time_slot(a), parse_time_slot(b)
    if first is None or second is None:
        return False
    return not (first[1] <= second[0] or first[0] >= second[1])


def overlaps_any(slot: Optional[str], sessions: Iterable[ScheduleSession]) -> bool:
    return any(slots_overlap(slot, s.time_slot) for s in sessions)


def fits_within(slot: Optional[str], window_start: str, window_end: str) -> bool:
    """True when ``slot`` lies entirely inside the [window_start, window_end] window."""
    parsed = parse_time_slot(slot)
    if parsed is None:
        return True
    return parsed[0] >= parse_time_to_minutes(window_start) and parsed[1] <= parse_time_to_minutes(window_end)


def session_time_slot(batch: Batch, cfg) -> str:
    """Daily slot for a batch's sessions: explicit window, then explicit slot, then defaults."""
    if batch.start_time and batch.end_time:
        return f"{batch.start_time}-{batch.end_time}"
    if batch.time_slot:
        return batch.time_slot
    defaults = cfg.default_time_slots
    if batch.is_online:
        return defaults.online
    if batch.cadence == Cadence.WEEKEND:
        return defaults.weekend
    return defaults.weekday
