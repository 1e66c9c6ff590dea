from backend.app.services.schedule_flattener import flatten_schedule, group_lessons_by_subject


def build_lesson_data():
    return {
        "101": {
            "class_name": "Year 10 A",
            "student_num": 18,
            "subjects": {
                "7": {
                    "topic_id": 3,
                    "topic_name": "Maths (legacy)",
                    "teacher_id": 42,
                    "lessons": [
                        {"start_time": 1700010000, "end_time": 1700013600},
                        {"start_time": 1700000000, "end_time": 1700003600},
                    ],
                },
                "8": {
                    "topic_id": 99,
                    "topic_name": "Chemistry",
                    "teacher_id": None,
                    "lessons": [{"start_time": 1700005000, "end_time": 1700008600}],
                },
            },
        },
        "102": {
            "class_name": "IELTS",
            "student_num": 6,
            "subjects": {
                "9": {
                    "topic_id": 4,
                    "topic_name": "Reading",
                    "teacher_id": "t-9",
                    "lessons": [{"start_time": 1699990000, "end_time": 1699993600}],
                },
            },
        },
    }


CLASS_TOPICS = {"3": "Mathematics", "4": "Academic Reading"}


def test_flatten_sorts_by_start_time():
    lessons = flatten_schedule(build_lesson_data(), CLASS_TOPICS)
    assert [lesson.start_time for lesson in lessons] == [
        1699990000,
        1700000000,
        1700005000,
        1700010000,
    ]


def test_flatten_carries_class_and_subject_fields():
    lessons = flatten_schedule(build_lesson_data(), CLASS_TOPICS)
    first = lessons[0]
    assert first.subject_id == "9"
    assert first.class_name == "IELTS"
    assert first.teacher_id == "t-9"
    assert first.student_count == 6

    chemistry = lessons[2]
    assert chemistry.subject_id == "8"
    assert chemistry.teacher_id == ""
    assert chemistry.student_count == 18


def test_subject_name_prefers_topic_lookup_then_falls_back():
    lessons = flatten_schedule(build_lesson_data(), CLASS_TOPICS)
    names = {lesson.subject_id: lesson.subject_name for lesson in lessons}
    assert names["7"] == "Mathematics"
    assert names["9"] == "Academic Reading"
    # topic 99 is not in the lookup table
    assert names["8"] == "Chemistry"


def test_degenerate_lessons_are_kept_with_zero_duration():
    data = {
        "1": {
            "class_name": "A",
            "subjects": {
                "s": {
                    "topic_name": "Art",
                    "lessons": [
                        {"start_time": 1700003600, "end_time": 1700000000},
                        {"start_time": 1700010000, "end_time": 1700010000},
                    ],
                }
            },
        }
    }
    lessons = flatten_schedule(data, {})
    assert len(lessons) == 2
    assert all(lesson.duration_seconds == 0 for lesson in lessons)


def test_lessons_missing_bounds_are_dropped():
    data = {
        "1": {
            "class_name": "A",
            "subjects": {
                "s": {
                    "topic_name": "Art",
                    "lessons": [
                        {"start_time": 1700000000},
                        {"end_time": 1700003600},
                        "not-a-lesson",
                        {"start_time": 1700000000, "end_time": 1700003600},
                    ],
                }
            },
        }
    }
    lessons = flatten_schedule(data, None)
    assert len(lessons) == 1


def test_class_key_used_when_class_name_missing():
    data = {"Evening Group": {"subjects": {"s": {"topic_name": "Art", "lessons": [{"start_time": 1700000000, "end_time": 1700003600}]}}}}
    lessons = flatten_schedule(data, {})
    assert lessons[0].class_name == "Evening Group"
    assert lessons[0].student_count is None


def test_empty_lesson_data():
    assert flatten_schedule(None, None) == []
    assert flatten_schedule({}, {}) == []
    assert flatten_schedule([], []) == []
    assert flatten_schedule("none", "none") == []


def test_array_sections_are_read_by_position():
    data = [
        {
            "class_name": "IELTS",
            "subjects": [
                {"topic_id": 4, "topic_name": "Reading", "lessons": [{"start_time": 1700000000, "end_time": 1700003600}]},
            ],
        },
        {"subjects": {"9": {"topic_name": "Art", "lessons": [{"start_time": 1699990000, "end_time": 1699993600}]}}},
    ]
    lessons = flatten_schedule(data, [])
    assert [(lesson.class_name, lesson.subject_id, lesson.subject_name) for lesson in lessons] == [
        ("1", "9", "Art"),
        ("IELTS", "0", "Reading"),
    ]


def test_subject_names_ignore_non_mapping_topics():
    lessons = flatten_schedule(build_lesson_data(), ["Mathematics"])
    assert {lesson.subject_name for lesson in lessons} == {"Maths (legacy)", "Chemistry", "Reading"}


def test_group_lessons_by_subject():
    lessons = flatten_schedule(build_lesson_data(), CLASS_TOPICS)
    grouped = group_lessons_by_subject(lessons)
    assert set(grouped) == {"7", "8", "9"}
    assert [lesson.start_time for lesson in grouped["7"]] == [1700000000, 1700010000]
