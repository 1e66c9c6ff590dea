"""Schemas for the student view payload and its analytics aggregates."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class StudentViewPayload(BaseModel):
    """
    Decoded upstream ``student-view`` response data.

    Upstream serializes an empty section as ``[]`` as readily as ``{}``, so
    sections stay untyped here and the services normalize them on read.
    """

    student_data: Any = None
    lesson_data: Any = None
    student_class: Any = None
    class_topics: Any = None
    feedback: Any = None
    dormitory_data: Any = None
    absence_info: Any = None

    model_config = ConfigDict(extra="allow")


class Lesson(BaseModel):
    subject_id: str
    subject_name: str
    class_name: str
    teacher_id: str = ""
    student_count: Optional[int] = None
    start_time: int
    end_time: int

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @property
    def duration_seconds(self) -> int:
        return max(0, self.end_time - self.start_time)


class MonthLesson(Lesson):
    overlap_seconds: int


class AbsenceRecord(BaseModel):
    start_time: int
    end_time: int
    authorized: bool
    reason: str = ""
    note: str = ""

    model_config = ConfigDict(frozen=True, from_attributes=True)


class AbsenceOverlap(AbsenceRecord):
    overlap_seconds: int
    overlap_hours: float


class AbsenceBucketSummary(BaseModel):
    count: int = 0
    total_hours: float = 0.0
    records: List[AbsenceOverlap] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class FeedbackEntry(BaseModel):
    id: Optional[Any] = None
    teacher: str = ""
    topic_name: str = ""
    subject_id: str = ""
    subject_name: str = ""
    topic_id: str = ""
    time_range_start: str = ""
    time_range_end: str = ""
    timestamp: Optional[int] = None
    note: str = ""
    student_attendance: Optional[int] = None
    student_behaviour: Optional[int] = None
    student_homework_completion: Optional[int] = None

    model_config = ConfigDict(frozen=True, from_attributes=True)


class FeedbackSubjectGroup(BaseModel):
    id: str
    name: str
    items: List[FeedbackEntry]


class MonthWindow(BaseModel):
    year: int
    month: int
    start_epoch: int
    end_epoch: int

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


class SubjectProgress(BaseModel):
    subject_id: str
    subject_name: str
    total_seconds: int
    elapsed_seconds: int
    lesson_count: int
    percent_complete: int
    total_hours: float
    elapsed_hours: float
    color: str

    model_config = ConfigDict(from_attributes=True)


class ClassDistributionRow(BaseModel):
    class_name: str
    lesson_count: int
    relative_load: int
    hours: float
    color: str
    lessons: List[MonthLesson]

    model_config = ConfigDict(from_attributes=True)


class MonthSummary(BaseModel):
    month: str
    start_epoch: int
    end_epoch: int
    has_data: bool
    lesson_count: int
    total_hours: float
    authorized: AbsenceBucketSummary
    unauthorized: AbsenceBucketSummary

    model_config = ConfigDict(from_attributes=True)


class MonthlyDistribution(BaseModel):
    summary: MonthSummary
    lessons: List[MonthLesson]
    classes: List[ClassDistributionRow]

    model_config = ConfigDict(from_attributes=True)


class AvailableMonths(BaseModel):
    months: List[str]
    default: Optional[str] = None


class ColorAssignment(BaseModel):
    identifier: str
    index: int
    color: str


class StudentViewReport(BaseModel):
    as_of: int
    timezone: str
    student: Optional[dict] = None
    available_months: List[str]
    selected_month: Optional[str] = None
    progress: List[SubjectProgress]
    monthly: Optional[MonthlyDistribution] = None
    recent_feedback: List[FeedbackEntry]
    feedback_by_subject: List[FeedbackSubjectGroup]

    model_config = ConfigDict(from_attributes=True)
