"""Bottom-up recomputation of topic and subject completion percentages."""

import logging
import math
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from app.catalog.models import Lesson, Topic
from app.core.datetime_utils import utcnow
from app.progress.models import LessonProgress, SubjectProgress, TopicProgress

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negative input."""
    return int(math.floor(value + 0.5))


def topic_percent(completed: int, total: int) -> int:
    """Percent of completed lessons; a topic without lessons is 0%."""
    return round_half_up(100 * completed / max(total, 1))


def subject_percent(topic_percents: list[int]) -> int:
    """Mean of topic percentages; a subject without topics is 0%."""
    if not topic_percents:
        return 0
    return round_half_up(sum(topic_percents) / len(topic_percents))


@dataclass(frozen=True)
class RollupResult:
    topic_id: UUID
    topic_percent: int
    course_id: UUID
    subject_percent: int


class ProgressAggregator:
    """Recomputes derived progress rows after a lesson completion.

    The topic value is always recomputed from lesson progress rows. The
    subject value is the average of the materialized topic values, read
    after the topic upsert so it sees the fresh number.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def recalculate(self, user_id: UUID, lesson_id: UUID) -> RollupResult | None:
        owner = self.db.execute(
            select(Topic.id, Topic.course_id)
            .join(Lesson, Lesson.topic_id == Topic.id)
            .where(Lesson.id == lesson_id)
        ).first()
        if owner is None:
            logger.warning(
                "Skipping progress rollup: lesson %s has no topic/subject (user %s)",
                lesson_id,
                user_id,
            )
            return None

        topic_id, course_id = owner
        new_topic_percent = self._recalculate_topic(user_id, topic_id)
        new_subject_percent = self._recalculate_subject(user_id, course_id)

        logger.info(
            "Progress rollup for user %s: topic %s=%d%%, subject %s=%d%%",
            user_id,
            topic_id,
            new_topic_percent,
            course_id,
            new_subject_percent,
        )
        return RollupResult(
            topic_id=topic_id,
            topic_percent=new_topic_percent,
            course_id=course_id,
            subject_percent=new_subject_percent,
        )

    def _recalculate_topic(self, user_id: UUID, topic_id: UUID) -> int:
        total, completed = self.db.execute(
            select(func.count(Lesson.id), func.count(LessonProgress.completed_at))
            .select_from(Lesson)
            .outerjoin(
                LessonProgress,
                (LessonProgress.lesson_id == Lesson.id) & (LessonProgress.user_id == user_id),
            )
            .where(Lesson.topic_id == topic_id)
        ).one()

        percent = topic_percent(completed or 0, total or 0)

        stmt = insert(TopicProgress).values(
            user_id=user_id, topic_id=topic_id, percent_complete=percent, updated_at=utcnow()
        )
        self.db.execute(
            stmt.on_conflict_do_update(
                constraint="uq_user_topic_progress",
                set_={
                    "percent_complete": stmt.excluded.percent_complete,
                    "updated_at": stmt.excluded.updated_at,
                },
            )
        )
        return percent

    def _recalculate_subject(self, user_id: UUID, course_id: UUID) -> int:
        rows = self.db.execute(
            select(func.coalesce(TopicProgress.percent_complete, 0))
            .select_from(Topic)
            .outerjoin(
                TopicProgress,
                (TopicProgress.topic_id == Topic.id) & (TopicProgress.user_id == user_id),
            )
            .where(Topic.course_id == course_id)
        ).scalars()

        percent = subject_percent(list(rows))

        stmt = insert(SubjectProgress).values(
            user_id=user_id, course_id=course_id, percent_complete=percent, updated_at=utcnow()
        )
        self.db.execute(
            stmt.on_conflict_do_update(
                constraint="uq_user_subject_progress",
                set_={
                    "percent_complete": stmt.excluded.percent_complete,
                    "updated_at": stmt.excluded.updated_at,
                },
            )
        )
        return percent
