"""Per-class lesson load within a selected month."""

from typing import Dict, List

from backend.app.schemas.student_view import ClassDistributionRow, MonthLesson
from backend.app.services.color_assignment import color_for
from backend.app.services.intervals import percent_of, seconds_to_hours

UNKNOWN_CLASS = "Unknown Class"


def get_class_distribution(month_lessons: List[MonthLesson]) -> List[ClassDistributionRow]:
    # dicts keep insertion order, so rows come out in first-seen order
    by_class: Dict[str, List[MonthLesson]] = {}
    for lesson in month_lessons:
        by_class.setdefault(lesson.class_name or UNKNOWN_CLASS, []).append(lesson)

    max_count = max((len(group) for group in by_class.values()), default=0) or 1

    rows = []
    for class_name, group in by_class.items():
        group.sort(key=lambda lesson: lesson.start_time)
        rows.append(
            ClassDistributionRow(
                class_name=class_name,
                lesson_count=len(group),
                relative_load=percent_of(len(group), max_count),
                hours=seconds_to_hours(sum(lesson.overlap_seconds for lesson in group)),
                color=color_for(class_name),
                lessons=group,
            )
        )
    return rows
