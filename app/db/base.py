"""
Database base module - imports all models for Alembic migration detection.

This module imports all SQLAlchemy models to ensure they are registered
with Alembic for automatic migration generation. While the imports appear
unused, they are essential for the migration system to work properly.
"""

from app.auth.models.user import User
from app.catalog.models.course import Course, Lesson, Topic
from app.db.session import Base
from app.progress.models.progress import LessonProgress, SubjectProgress, TopicProgress

# Export all models for Alembic
__all__ = [
    "Base",
    "User",
    "Course",
    "Topic",
    "Lesson",
    "LessonProgress",
    "TopicProgress",
    "SubjectProgress",
]
