from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.datetime_utils import UTCDatetime
from app.progress.models import LessonProgressStatus


class StartLessonRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: UUID = Field(..., alias="userId")


class CompleteLessonRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: UUID = Field(..., alias="userId")
    quiz_score: float | None = Field(default=None, alias="quizScore", ge=0, le=100)


class LessonProgressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: UUID
    lesson_id: UUID
    status: LessonProgressStatus
    quiz_score: float | None = None
    is_completed: bool
    started_at: UTCDatetime | None = None
    completed_at: UTCDatetime | None = None
    updated_at: UTCDatetime


class TopicProgressItem(BaseModel):
    topic_id: str
    title: str
    percent_complete: int = 0
    updated_at: UTCDatetime | None = None


class SubjectProgressBreakdown(BaseModel):
    course_id: str
    title: str
    percent_complete: int
    topics: list[TopicProgressItem] = []
