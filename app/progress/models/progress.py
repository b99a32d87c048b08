import enum
import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.datetime_utils import utcnow
from app.db.session import Base


class LessonProgressStatus(str, enum.Enum):
    NOT_STARTED = "not_started"
    STARTED = "started"
    COMPLETED = "completed"


class LessonProgress(Base):
    __tablename__ = "lesson_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "lesson_id", name="uq_user_lesson_progress"),
        CheckConstraint(
            "quiz_score IS NULL OR (quiz_score >= 0 AND quiz_score <= 100)",
            name="ck_lesson_progress_quiz_score_range",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    lesson_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("lessons.id", ondelete="CASCADE"), index=True
    )
    status: Mapped[LessonProgressStatus] = mapped_column(
        Enum(
            LessonProgressStatus,
            name="lesson_progress_status",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        default=LessonProgressStatus.NOT_STARTED,
    )
    quiz_score: Mapped[float | None] = mapped_column(default=None)
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    user = relationship("User", backref="lesson_progress")
    lesson = relationship("Lesson", back_populates="progress_records")

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    def __repr__(self) -> str:
        return f"<LessonProgress(user_id={self.user_id}, lesson_id={self.lesson_id}, status={self.status})>"  # noqa: E501


class TopicProgress(Base):
    """Materialized percent of a topic's lessons the user has completed."""

    __tablename__ = "topic_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "topic_id", name="uq_user_topic_progress"),
        CheckConstraint(
            "percent_complete >= 0 AND percent_complete <= 100",
            name="ck_topic_progress_percent_range",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    topic_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("topics.id", ondelete="CASCADE"), index=True
    )
    percent_complete: Mapped[int] = mapped_column(default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    def __repr__(self) -> str:
        return f"<TopicProgress(user_id={self.user_id}, topic_id={self.topic_id}, percent={self.percent_complete})>"  # noqa: E501


class SubjectProgress(Base):
    """Materialized average of a subject's topic percentages for one user."""

    __tablename__ = "subject_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="uq_user_subject_progress"),
        CheckConstraint(
            "percent_complete >= 0 AND percent_complete <= 100",
            name="ck_subject_progress_percent_range",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    course_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), index=True
    )
    percent_complete: Mapped[int] = mapped_column(default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    def __repr__(self) -> str:
        return f"<SubjectProgress(user_id={self.user_id}, course_id={self.course_id}, percent={self.percent_complete})>"  # noqa: E501
