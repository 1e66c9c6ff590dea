"""Flatten the nested class -> subject -> lesson schedule into lesson records."""

import logging
from typing import Any, Dict, List, Optional, Tuple

from backend.app.schemas.student_view import Lesson
from backend.app.services.intervals import to_epoch

logger = logging.getLogger(__name__)


def _resolve_subject_name(subject: dict, class_topics: Dict[str, str]) -> str:
    topic_id = subject.get("topic_id")
    if topic_id is not None:
        name = class_topics.get(str(topic_id))
        if name:
            return str(name)
    return str(subject.get("topic_name") or "")


def _to_count(value) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _keyed_items(section: Any) -> List[Tuple[str, Any]]:
    # Keyed objects keep their keys; arrays are keyed by position
    if isinstance(section, dict):
        return [(str(key), value) for key, value in section.items()]
    if isinstance(section, list):
        return [(str(index), value) for index, value in enumerate(section)]
    return []


def _topic_lookup(class_topics: Any) -> Dict[str, Any]:
    """``class_topics`` as a string-keyed dict; any other shape is treated as empty."""
    if not isinstance(class_topics, dict):
        return {}
    return {str(k): v for k, v in class_topics.items()}


def flatten_schedule(lesson_data: Any, class_topics: Any = None) -> List[Lesson]:
    topics = _topic_lookup(class_topics)
    lessons: List[Lesson] = []
    dropped = 0

    for class_key, class_entry in _keyed_items(lesson_data):
        if not isinstance(class_entry, dict):
            dropped += 1
            continue
        class_name = str(class_entry.get("class_name") or class_key)
        student_count = _to_count(class_entry.get("student_num"))

        subjects = class_entry.get("subjects") or {}
        if not isinstance(subjects, (dict, list)):
            dropped += 1
            continue

        for subject_id, subject in _keyed_items(subjects):
            if not isinstance(subject, dict):
                dropped += 1
                continue
            subject_name = _resolve_subject_name(subject, topics)
            teacher_id = subject.get("teacher_id")
            teacher = "" if teacher_id is None else str(teacher_id)

            for raw in subject.get("lessons") or []:
                start = to_epoch(raw.get("start_time")) if isinstance(raw, dict) else None
                end = to_epoch(raw.get("end_time")) if isinstance(raw, dict) else None
                if start is None or end is None:
                    dropped += 1
                    continue
                lessons.append(
                    Lesson(
                        subject_id=str(subject_id),
                        subject_name=subject_name,
                        class_name=class_name,
                        teacher_id=teacher,
                        student_count=student_count,
                        start_time=start,
                        end_time=end,
                    )
                )

    if dropped:
        logger.debug("Dropped %d schedule entries without usable time bounds", dropped)

    # sorted() is stable, so lessons sharing a start keep payload order
    return sorted(lessons, key=lambda lesson: lesson.start_time)


def group_lessons_by_subject(lessons: List[Lesson]) -> Dict[str, List[Lesson]]:
    grouped: Dict[str, List[Lesson]] = {}
    for lesson in lessons:
        grouped.setdefault(lesson.subject_id, []).append(lesson)
    for subject_lessons in grouped.values():
        subject_lessons.sort(key=lambda lesson: lesson.start_time)
    return grouped
