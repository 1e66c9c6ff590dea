"""Teacher feedback ingestion, rolling-window selection and per-subject grouping."""

import logging
import math
from datetime import UTC, datetime, tzinfo
from typing import Any, Dict, List, Optional

from backend.app.schemas.student_view import FeedbackEntry, FeedbackSubjectGroup

logger = logging.getLogger(__name__)

MILLIS_PER_DAY = 24 * 60 * 60 * 1000
DEFAULT_WINDOW_DAYS = 30

# Fields tried in order when deriving an entry's timestamp
TIMESTAMP_FIELDS = ("timestamp", "updated_at", "time_range_end", "time_range_start", "created_at")

LOOSE_DATE_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M", "%Y-%m-%d")


def _epoch_number_to_ms(number: float) -> Optional[int]:
    if not math.isfinite(number):
        return None
    if number > 1e12:
        return int(number)
    if number > 1e9:
        return int(number * 1000)
    return None


def _parse_datetime(text: str, tz: tzinfo) -> Optional[datetime]:
    dashed = text.replace("/", "-")
    moment = None
    for candidate in (text, dashed):
        try:
            moment = datetime.fromisoformat(candidate)
            break
        except ValueError:
            continue
    if moment is None:
        # strptime tolerates unpadded fields such as "2024-1-5 9:00"
        for fmt in LOOSE_DATE_FORMATS:
            try:
                moment = datetime.strptime(dashed, fmt)
                break
            except ValueError:
                continue
    if moment is None:
        return None
    return moment if moment.tzinfo else moment.replace(tzinfo=tz)


def parse_timestamp_ms(value: Any, tz: tzinfo = UTC) -> Optional[int]:
    """
    Convert an upstream date value to epoch milliseconds.

    Numbers above 1e12 are taken as milliseconds and numbers above 1e9 as
    seconds; anything smaller is rejected. Strings may hold such a number or
    an ISO-like date, which is read in ``tz`` when it carries no offset.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _epoch_number_to_ms(value)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    try:
        return _epoch_number_to_ms(float(text))
    except ValueError:
        pass

    moment = _parse_datetime(text, tz)
    if moment is None:
        return None
    return int(moment.timestamp() * 1000)


def _feedback_timestamp(row: dict, tz: tzinfo) -> Optional[int]:
    for field in TIMESTAMP_FIELDS:
        parsed = parse_timestamp_ms(row.get(field), tz)
        if parsed is not None:
            return parsed
    return None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _rating(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def normalize_feedback(raw: Any, tz: tzinfo = UTC) -> List[FeedbackEntry]:
    if not isinstance(raw, list):
        return []

    entries = []
    for row in raw:
        if not isinstance(row, dict):
            logger.debug("Skipping feedback row of type %s", type(row).__name__)
            continue
        entries.append(
            FeedbackEntry(
                id=row.get("id"),
                teacher=_text(row.get("teacher")),
                topic_name=_text(row.get("topic_name")),
                subject_id=_text(row.get("subject_id")),
                subject_name=_text(row.get("subject_name")),
                topic_id=_text(row.get("topic_id")),
                time_range_start=_text(row.get("time_range_start")),
                time_range_end=_text(row.get("time_range_end")),
                timestamp=_feedback_timestamp(row, tz),
                note=_text(row.get("note")),
                student_attendance=_rating(row.get("student_attendance")),
                student_behaviour=_rating(row.get("student_behaviour")),
                student_homework_completion=_rating(row.get("student_homework_completion")),
            )
        )
    return entries


def get_recent_feedback(
    entries: List[FeedbackEntry],
    *,
    now_ms: int,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> List[FeedbackEntry]:
    """Entries stamped within ``window_days`` before ``now_ms``, newest first."""
    window_ms = window_days * MILLIS_PER_DAY
    recent = [
        entry
        for entry in entries
        if entry.timestamp is not None and now_ms - entry.timestamp <= window_ms
    ]
    recent.sort(key=lambda entry: entry.timestamp, reverse=True)
    return recent


def group_feedback_by_subject(
    entries: List[FeedbackEntry],
    class_topics: Any = None,
) -> List[FeedbackSubjectGroup]:
    topics = {str(k): v for k, v in class_topics.items()} if isinstance(class_topics, dict) else {}
    groups: Dict[str, Dict[str, Any]] = {}
    for entry in entries:
        group_id = entry.subject_id or entry.topic_id or entry.topic_name or "unknown"
        if group_id not in groups:
            name = (
                entry.subject_name
                or entry.topic_name
                or _text(topics.get(entry.topic_id))
                or f"Subject {group_id}"
            )
            groups[group_id] = {"name": name, "items": []}
        groups[group_id]["items"].append(entry)

    result = [
        FeedbackSubjectGroup(id=group_id, name=group["name"], items=group["items"])
        for group_id, group in groups.items()
    ]
    result.sort(key=lambda group: group.name)
    return result
