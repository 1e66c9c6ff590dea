"""Per-subject progress of scheduled lesson time against a reference instant."""

from typing import Dict, List

from backend.app.schemas.student_view import Lesson, SubjectProgress
from backend.app.services.color_assignment import color_for
from backend.app.services.intervals import overlap, percent_of, seconds_to_hours


def get_subject_progress(lessons: List[Lesson], *, now: int) -> List[SubjectProgress]:
    """
    Aggregate scheduled and elapsed seconds per subject.

    ``now`` is epoch seconds. Only the part of each lesson at or before
    ``now`` counts as elapsed, so a lesson in progress contributes a fraction.
    """
    totals: Dict[str, dict] = {}
    for lesson in lessons:
        entry = totals.setdefault(
            lesson.subject_id,
            {"subject_name": lesson.subject_name, "total": 0, "elapsed": 0, "count": 0},
        )
        entry["total"] += lesson.duration_seconds
        entry["elapsed"] += overlap(lesson.start_time, lesson.end_time, lesson.start_time, now)
        entry["count"] += 1

    rows = [
        SubjectProgress(
            subject_id=subject_id,
            subject_name=vals["subject_name"],
            total_seconds=vals["total"],
            elapsed_seconds=vals["elapsed"],
            lesson_count=vals["count"],
            percent_complete=percent_of(vals["elapsed"], vals["total"]),
            total_hours=seconds_to_hours(vals["total"]),
            elapsed_hours=seconds_to_hours(vals["elapsed"]),
            color=color_for(subject_id),
        )
        for subject_id, vals in totals.items()
    ]
    rows.sort(key=lambda row: (row.subject_name, row.subject_id))
    return rows
