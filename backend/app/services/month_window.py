"""Calendar-month windows and the lesson/absence totals that fall inside them."""

from datetime import UTC, datetime, tzinfo
from typing import List, Optional, Tuple

from backend.app.schemas.student_view import (
    AbsenceRecord,
    Lesson,
    MonthLesson,
    MonthSummary,
    MonthWindow,
)
from backend.app.services.absence_classifier import summarize_absences
from backend.app.services.intervals import overlap, seconds_to_hours


def get_month_window(year: int, month: int, tz: tzinfo = UTC) -> MonthWindow:
    """Return the half-open [first midnight, next month's first midnight) range in ``tz``."""
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    if not 1 <= year <= 9998:
        raise ValueError(f"year must be between 1 and 9998, got {year}")
    next_year, next_month = (year + 1, 1) if month == 12 else (year, month + 1)
    start = datetime(year, month, 1, tzinfo=tz)
    end = datetime(next_year, next_month, 1, tzinfo=tz)
    return MonthWindow(
        year=year,
        month=month,
        start_epoch=int(start.timestamp()),
        end_epoch=int(end.timestamp()),
    )


def parse_month_key(key: str) -> Tuple[int, int]:
    """Split a ``YYYY-MM`` key into (year, month)."""
    try:
        year_part, month_part = key.split("-", 1)
        return int(year_part), int(month_part)
    except ValueError as exc:
        raise ValueError(f"Invalid month key: {key!r}") from exc


def month_key_for(epoch: int, tz: tzinfo = UTC) -> str:
    moment = datetime.fromtimestamp(epoch, tz)
    return f"{moment.year:04d}-{moment.month:02d}"


def list_available_months(lessons: List[Lesson], tz: tzinfo = UTC) -> List[str]:
    return sorted({month_key_for(lesson.start_time, tz) for lesson in lessons})


def default_month(lessons: List[Lesson], tz: tzinfo = UTC) -> Optional[str]:
    months = list_available_months(lessons, tz)
    return months[-1] if months else None


def get_month_lessons(lessons: List[Lesson], window: MonthWindow) -> List[MonthLesson]:
    month_lessons = []
    for lesson in lessons:
        seconds = overlap(lesson.start_time, lesson.end_time, window.start_epoch, window.end_epoch)
        if seconds > 0:
            month_lessons.append(MonthLesson(**lesson.model_dump(), overlap_seconds=seconds))
    month_lessons.sort(key=lambda lesson: lesson.start_time)
    return month_lessons


def get_month_summary(
    lessons: List[Lesson],
    absences: List[AbsenceRecord],
    window: MonthWindow,
    *,
    month_lessons: Optional[List[MonthLesson]] = None,
) -> MonthSummary:
    if month_lessons is None:
        month_lessons = get_month_lessons(lessons, window)
    buckets = summarize_absences(absences, window)
    total_seconds = sum(lesson.overlap_seconds for lesson in month_lessons)
    has_data = bool(month_lessons) or buckets["authorized"].count > 0 or buckets["unauthorized"].count > 0

    return MonthSummary(
        month=window.key,
        start_epoch=window.start_epoch,
        end_epoch=window.end_epoch,
        has_data=has_data,
        lesson_count=len(month_lessons),
        total_hours=seconds_to_hours(total_seconds),
        authorized=buckets["authorized"],
        unauthorized=buckets["unauthorized"],
    )
