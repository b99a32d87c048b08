"""Progress models."""

from app.progress.models.progress import (
    LessonProgress,
    LessonProgressStatus,
    SubjectProgress,
    TopicProgress,
)

__all__ = [
    "LessonProgress",
    "LessonProgressStatus",
    "TopicProgress",
    "SubjectProgress",
]
