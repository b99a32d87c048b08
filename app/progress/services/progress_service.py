import logging
from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.catalog.models import Course, Topic
from app.core.datetime_utils import utcnow
from app.core.exceptions import NotFoundError, ProgressAggregationError, StoreError
from app.progress.models import (
    LessonProgress,
    LessonProgressStatus,
    SubjectProgress,
    TopicProgress,
)
from app.progress.services.aggregation_service import ProgressAggregator, RollupResult

logger = logging.getLogger(__name__)


class ProgressService:
    """Lesson progress writes and the dashboard read model for one request."""

    def __init__(self, db: Session, aggregator: ProgressAggregator | None = None) -> None:
        self.db = db
        self.aggregator = aggregator or ProgressAggregator(db)

    def start_lesson(self, user_id: UUID, lesson_id: UUID) -> None:
        """Mark a lesson as started. Does nothing if a progress row already exists."""
        stmt = (
            insert(LessonProgress)
            .values(
                user_id=user_id,
                lesson_id=lesson_id,
                status=LessonProgressStatus.STARTED,
                started_at=utcnow(),
                updated_at=utcnow(),
            )
            .on_conflict_do_nothing(constraint="uq_user_lesson_progress")
        )
        try:
            self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Error starting lesson %s for user %s", lesson_id, user_id)
            raise StoreError("Failed to start lesson", operation="start_lesson") from exc

    def complete_lesson(
        self, user_id: UUID, lesson_id: UUID, quiz_score: float | None = None
    ) -> RollupResult | None:
        """Record a lesson completion, then roll it up into topic and subject totals.

        The completion is committed before the rollup runs. A failed rollup
        is undone on its own savepoint and reported as ProgressAggregationError,
        leaving the completion in place; calling this again retries it.
        """
        now = utcnow()
        stmt = insert(LessonProgress).values(
            user_id=user_id,
            lesson_id=lesson_id,
            status=LessonProgressStatus.COMPLETED,
            quiz_score=quiz_score,
            started_at=now,
            completed_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            constraint="uq_user_lesson_progress",
            set_={
                "status": stmt.excluded.status,
                "quiz_score": func.coalesce(stmt.excluded.quiz_score, LessonProgress.quiz_score),
                "completed_at": stmt.excluded.completed_at,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        try:
            self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Error completing lesson %s for user %s", lesson_id, user_id)
            raise StoreError("Failed to complete lesson", operation="complete_lesson") from exc

        try:
            with self.db.begin_nested():
                rollup = self.aggregator.recalculate(user_id, lesson_id)
            self.db.commit()
        except SQLAlchemyError as exc:
            logger.exception(
                "Lesson %s completed for user %s but progress rollup failed", lesson_id, user_id
            )
            raise ProgressAggregationError(lesson_id=str(lesson_id)) from exc

        return rollup

    def get_dashboard_progress(self, user_id: UUID) -> dict[str, int]:
        """Map of subject id to percent complete; empty when nothing is recorded yet."""
        try:
            rows = self.db.execute(
                select(SubjectProgress.course_id, SubjectProgress.percent_complete).where(
                    SubjectProgress.user_id == user_id
                )
            ).all()
        except SQLAlchemyError as exc:
            logger.exception("Error fetching dashboard progress for user %s", user_id)
            raise StoreError(
                "Failed to load dashboard progress", operation="get_dashboard_progress"
            ) from exc

        return {str(course_id): percent for course_id, percent in rows}

    def get_lesson_progress(self, user_id: UUID, lesson_id: UUID) -> LessonProgress:
        try:
            progress = (
                self.db.query(LessonProgress)
                .filter(LessonProgress.user_id == user_id, LessonProgress.lesson_id == lesson_id)
                .first()
            )
        except SQLAlchemyError as exc:
            logger.exception("Error fetching progress of lesson %s for user %s", lesson_id, user_id)
            raise StoreError(
                "Failed to load lesson progress", operation="get_lesson_progress"
            ) from exc

        if not progress:
            raise NotFoundError("Progress not found", resource="lesson_progress")
        return progress

    def get_subject_breakdown(self, user_id: UUID, course_id: UUID) -> dict[str, Any]:
        """Subject percent with every topic's materialized percent, in syllabus order."""
        try:
            course = self.db.query(Course).filter(Course.id == course_id).first()
            if course:
                subject_row = (
                    self.db.query(SubjectProgress.percent_complete)
                    .filter(
                        SubjectProgress.user_id == user_id,
                        SubjectProgress.course_id == course_id,
                    )
                    .first()
                )
                topic_rows = (
                    self.db.query(
                        Topic.id,
                        Topic.title,
                        func.coalesce(TopicProgress.percent_complete, 0),
                        TopicProgress.updated_at,
                    )
                    .select_from(Topic)
                    .outerjoin(
                        TopicProgress,
                        (TopicProgress.topic_id == Topic.id) & (TopicProgress.user_id == user_id),
                    )
                    .filter(Topic.course_id == course_id)
                    .order_by(Topic.sort_order, Topic.title)
                    .all()
                )
        except SQLAlchemyError as exc:
            logger.exception("Error fetching subject %s breakdown for user %s", course_id, user_id)
            raise StoreError(
                "Failed to load subject progress", operation="get_subject_breakdown"
            ) from exc

        if not course:
            raise NotFoundError("Subject not found", resource="course")

        return {
            "course_id": str(course.id),
            "title": course.title,
            "percent_complete": subject_row[0] if subject_row else 0,
            "topics": [
                {
                    "topic_id": str(topic_id),
                    "title": title,
                    "percent_complete": percent,
                    "updated_at": updated_at,
                }
                for topic_id, title, percent, updated_at in topic_rows
            ],
        }
