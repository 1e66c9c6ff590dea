"""Normalize the upstream absence log and split it into authorized/unauthorized buckets."""

import logging
from typing import Any, Dict, Iterable, List

from backend.app.schemas.student_view import (
    AbsenceBucketSummary,
    AbsenceOverlap,
    AbsenceRecord,
    MonthWindow,
)
from backend.app.services.intervals import overlap, seconds_to_hours, to_epoch

logger = logging.getLogger(__name__)

UNAUTHORIZED_TOKEN = "unauthorized"


def is_unauthorized(row: dict) -> bool:
    """
    Apply the legacy tagging rules; any one of them marks the row unauthorized.

    Upstream records use ``unauthorized: 1``, ``type: "unauthorized"`` or
    ``reason: "unauthorized"`` interchangeably. The flag must be numerically 1
    (booleans and strings do not count) and the string match is case-sensitive.
    """
    flag = row.get("unauthorized")
    if isinstance(flag, (int, float)) and not isinstance(flag, bool) and flag == 1:
        return True
    return row.get("type") == UNAUTHORIZED_TOKEN or row.get("reason") == UNAUTHORIZED_TOKEN


def _to_record(row: Any, authorized: bool | None = None) -> AbsenceRecord | None:
    if not isinstance(row, dict):
        return None
    start = to_epoch(row.get("start_time"))
    end = to_epoch(row.get("end_time"))
    if start is None or end is None:
        return None
    if authorized is None:
        authorized = not is_unauthorized(row)
    return AbsenceRecord(
        start_time=start,
        end_time=end,
        authorized=authorized,
        reason=str(row.get("reason") or ""),
        note=str(row.get("note") or ""),
    )


def _is_bucketed(raw: dict) -> bool:
    return isinstance(raw.get("authorized"), list) or isinstance(raw.get("unauthorized"), list)


def normalize_absence_log(raw: Any) -> List[AbsenceRecord]:
    """Accept a list, a keyed object, or pre-split buckets and return strict records."""
    if not raw:
        return []

    candidates: Iterable[tuple[Any, bool | None]]
    if isinstance(raw, list):
        candidates = ((row, None) for row in raw)
    elif isinstance(raw, dict) and _is_bucketed(raw):
        authorized_rows = raw.get("authorized") if isinstance(raw.get("authorized"), list) else []
        unauthorized_rows = raw.get("unauthorized") if isinstance(raw.get("unauthorized"), list) else []
        candidates = [(row, True) for row in authorized_rows] + [(row, False) for row in unauthorized_rows]
    elif isinstance(raw, dict):
        candidates = ((row, None) for row in raw.values())
    else:
        logger.debug("Ignoring absence log of unsupported type %s", type(raw).__name__)
        return []

    records: List[AbsenceRecord] = []
    dropped = 0
    for row, authorized in candidates:
        record = _to_record(row, authorized)
        if record is None:
            dropped += 1
            continue
        records.append(record)

    if dropped:
        logger.debug("Dropped %d absence rows without usable time bounds", dropped)
    return records


def summarize_absences(records: List[AbsenceRecord], window: MonthWindow) -> Dict[str, AbsenceBucketSummary]:
    buckets: Dict[str, List[AbsenceOverlap]] = {"authorized": [], "unauthorized": []}
    for record in records:
        seconds = overlap(record.start_time, record.end_time, window.start_epoch, window.end_epoch)
        if seconds <= 0:
            continue
        key = "authorized" if record.authorized else "unauthorized"
        buckets[key].append(
            AbsenceOverlap(
                **record.model_dump(),
                overlap_seconds=seconds,
                overlap_hours=seconds_to_hours(seconds),
            )
        )

    summaries = {}
    for key, rows in buckets.items():
        rows.sort(key=lambda row: row.start_time)
        summaries[key] = AbsenceBucketSummary(
            count=len(rows),
            total_hours=seconds_to_hours(sum(row.overlap_seconds for row in rows)),
            records=rows,
        )
    return summaries
