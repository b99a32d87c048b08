from app.progress.schemas.progress import (
    CompleteLessonRequest,
    LessonProgressResponse,
    StartLessonRequest,
    SubjectProgressBreakdown,
    TopicProgressItem,
)

__all__ = [
    "CompleteLessonRequest",
    "LessonProgressResponse",
    "StartLessonRequest",
    "SubjectProgressBreakdown",
    "TopicProgressItem",
]
