"""Student view analytics endpoints."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, HTTPException, Query, status

from backend.app.core.settings import get_settings
from backend.app.core.time import now_epoch_millis, now_epoch_seconds, resolve_timezone
from backend.app.schemas.student_view import (
    AvailableMonths,
    ColorAssignment,
    FeedbackEntry,
    MonthlyDistribution,
    StudentViewReport,
    SubjectProgress,
)
from backend.app.services.absence_classifier import normalize_absence_log
from backend.app.services.color_assignment import color_for, color_index
from backend.app.services.feedback_window import get_recent_feedback, normalize_feedback
from backend.app.services.month_window import (
    default_month,
    get_month_window,
    list_available_months,
    parse_month_key,
)
from backend.app.services.schedule_flattener import flatten_schedule
from backend.app.services.student_view_reporting import (
    get_monthly_distribution,
    get_student_view_report,
    unwrap_payload,
)
from backend.app.services.subject_progress import get_subject_progress

router = APIRouter(prefix="/students/view", tags=["student-view"])

# December of MAX_YEAR still needs a representable next-month boundary
MIN_YEAR = 1
MAX_YEAR = 9998


def _timezone_name(tz: Optional[str]) -> str:
    name = tz or get_settings().viewer_timezone
    try:
        resolve_timezone(name)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return name


def _check_month_pair(year: Optional[int], month: Optional[int]) -> None:
    if (year is None) != (month is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="year and month must be provided together",
        )


@router.post("/report", response_model=StudentViewReport)
async def student_view_report(
    body: Dict[str, Any] = Body(...),
    year: Optional[int] = Query(None, ge=MIN_YEAR, le=MAX_YEAR),
    month: Optional[int] = Query(None, ge=1, le=12),
    now: Optional[int] = None,
    tz: Optional[str] = None,
):
    _check_month_pair(year, month)
    settings = get_settings()
    effective_now = now if now is not None else now_epoch_seconds()
    return get_student_view_report(
        unwrap_payload(body),
        now=effective_now,
        now_ms=None if now is not None else now_epoch_millis(),
        year=year,
        month=month,
        timezone=_timezone_name(tz),
        feedback_window_days=settings.feedback_window_days,
    )


@router.post("/months", response_model=AvailableMonths)
async def available_months(body: Dict[str, Any] = Body(...), tz: Optional[str] = None):
    payload = unwrap_payload(body)
    zone = resolve_timezone(_timezone_name(tz))
    lessons = flatten_schedule(payload.lesson_data, payload.class_topics)
    return AvailableMonths(
        months=list_available_months(lessons, zone),
        default=default_month(lessons, zone),
    )


@router.post("/progress", response_model=List[SubjectProgress])
async def subject_progress(body: Dict[str, Any] = Body(...), now: Optional[int] = None):
    payload = unwrap_payload(body)
    lessons = flatten_schedule(payload.lesson_data, payload.class_topics)
    return get_subject_progress(lessons, now=now if now is not None else now_epoch_seconds())


@router.post("/monthly", response_model=Optional[MonthlyDistribution])
async def monthly_distribution(
    body: Dict[str, Any] = Body(...),
    year: Optional[int] = Query(None, ge=MIN_YEAR, le=MAX_YEAR),
    month: Optional[int] = Query(None, ge=1, le=12),
    tz: Optional[str] = None,
):
    _check_month_pair(year, month)
    payload = unwrap_payload(body)
    zone = resolve_timezone(_timezone_name(tz))
    lessons = flatten_schedule(payload.lesson_data, payload.class_topics)
    absences = normalize_absence_log(payload.absence_info)

    if year is None:
        latest = default_month(lessons, zone)
        if latest is None:
            return None
        year, month = parse_month_key(latest)
    return get_monthly_distribution(lessons, absences, get_month_window(year, month, zone))


@router.post("/feedback/recent", response_model=List[FeedbackEntry])
async def recent_feedback(
    body: Dict[str, Any] = Body(...),
    now_ms: Optional[int] = None,
    days: Optional[int] = Query(None, ge=0),
    tz: Optional[str] = None,
):
    payload = unwrap_payload(body)
    zone = resolve_timezone(_timezone_name(tz))
    entries = normalize_feedback(payload.feedback, zone)
    return get_recent_feedback(
        entries,
        now_ms=now_ms if now_ms is not None else now_epoch_millis(),
        window_days=days if days is not None else get_settings().feedback_window_days,
    )


@router.get("/colors/{identifier}", response_model=ColorAssignment)
async def identifier_color(identifier: str):
    return ColorAssignment(identifier=identifier, index=color_index(identifier), color=color_for(identifier))
