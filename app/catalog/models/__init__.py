"""Curriculum catalog models."""

from app.catalog.models.course import AccessTier, Course, Lesson, Topic

__all__ = [
    "AccessTier",
    "Course",
    "Topic",
    "Lesson",
]
