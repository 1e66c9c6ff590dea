"""Student view analytics report built from one upstream payload."""

import logging
from typing import Any, List, Optional

from backend.app.core.time import resolve_timezone
from backend.app.schemas.student_view import (
    AbsenceRecord,
    Lesson,
    MonthlyDistribution,
    MonthWindow,
    StudentViewPayload,
    StudentViewReport,
)
from backend.app.services.absence_classifier import normalize_absence_log
from backend.app.services.class_distribution import get_class_distribution
from backend.app.services.feedback_window import (
    DEFAULT_WINDOW_DAYS,
    get_recent_feedback,
    group_feedback_by_subject,
    normalize_feedback,
)
from backend.app.services.month_window import (
    get_month_lessons,
    get_month_summary,
    get_month_window,
    list_available_months,
    parse_month_key,
)
from backend.app.services.schedule_flattener import flatten_schedule
from backend.app.services.subject_progress import get_subject_progress

logger = logging.getLogger(__name__)


def unwrap_payload(body: Any) -> StudentViewPayload:
    """Accept either the bare ``data`` object or the full ``{status, message, data}`` envelope."""
    if isinstance(body, StudentViewPayload):
        return body
    if not isinstance(body, dict):
        return StudentViewPayload()
    data = body.get("data")
    if isinstance(data, dict) and ("status" in body or "message" in body):
        body = data
    return StudentViewPayload.model_validate(body)


def get_monthly_distribution(
    lessons: List[Lesson],
    absences: List[AbsenceRecord],
    window: MonthWindow,
) -> MonthlyDistribution:
    month_lessons = get_month_lessons(lessons, window)
    return MonthlyDistribution(
        summary=get_month_summary(lessons, absences, window, month_lessons=month_lessons),
        lessons=month_lessons,
        classes=get_class_distribution(month_lessons),
    )


def get_student_view_report(
    payload: StudentViewPayload,
    *,
    now: int,
    now_ms: Optional[int] = None,
    year: Optional[int] = None,
    month: Optional[int] = None,
    timezone: str = "UTC",
    feedback_window_days: int = DEFAULT_WINDOW_DAYS,
) -> StudentViewReport:
    tz = resolve_timezone(timezone)
    effective_now_ms = now_ms if now_ms is not None else now * 1000

    # Flatten and normalize everything before any aggregation runs
    lessons = flatten_schedule(payload.lesson_data, payload.class_topics)
    absences = normalize_absence_log(payload.absence_info)
    feedback = normalize_feedback(payload.feedback, tz)

    available_months = list_available_months(lessons, tz)
    if year is not None and month is not None:
        window: Optional[MonthWindow] = get_month_window(year, month, tz)
    elif available_months:
        window = get_month_window(*parse_month_key(available_months[-1]), tz)
    else:
        window = None

    monthly = get_monthly_distribution(lessons, absences, window) if window else None
    recent_feedback = get_recent_feedback(feedback, now_ms=effective_now_ms, window_days=feedback_window_days)

    logger.info(
        "Student view report: %d lessons, %d absences, %d feedback (%d recent), month=%s",
        len(lessons),
        len(absences),
        len(feedback),
        len(recent_feedback),
        window.key if window else None,
    )

    return StudentViewReport(
        as_of=now,
        timezone=timezone,
        student=payload.student_data if isinstance(payload.student_data, dict) else None,
        available_months=available_months,
        selected_month=window.key if window else None,
        progress=get_subject_progress(lessons, now=now),
        monthly=monthly,
        recent_feedback=recent_feedback,
        feedback_by_subject=group_feedback_by_subject(feedback, payload.class_topics),
    )
