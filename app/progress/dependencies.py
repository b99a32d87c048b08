from uuid import UUID

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from app.auth.models.user import User
from app.auth.services.user_service import UserService
from app.catalog.models import Lesson
from app.core.exceptions import NotFoundError
from app.db.session import get_db
from app.progress.services import ProgressService


def get_progress_service(db: Session = Depends(get_db)) -> ProgressService:
    return ProgressService(db)


def ensure_user_exists(user_id: UUID, db: Session) -> User:
    """Raise 404 unless the user exists."""
    user = UserService.get_user_by_id(user_id, db)
    if not user:
        raise NotFoundError("User not found", resource="user")
    return user


def require_query_user(
    user_id: UUID = Query(..., alias="userId"),
    db: Session = Depends(get_db),
) -> User:
    return ensure_user_exists(user_id, db)


def require_lesson(lesson_id: UUID, db: Session = Depends(get_db)) -> Lesson:
    lesson = db.query(Lesson).filter(Lesson.id == lesson_id).first()
    if not lesson:
        raise NotFoundError("Lesson not found", resource="lesson")
    return lesson
