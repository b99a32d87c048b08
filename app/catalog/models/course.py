import enum
import uuid
from datetime import datetime

from sqlalchemy import Enum, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base


class AccessTier(str, enum.Enum):
    STUDY_HELP = "study_help"
    STANDARD = "standard"
    PREMIUM = "premium"


_tier_enum = Enum(
    AccessTier, name="access_tier", values_callable=lambda obj: [e.value for e in obj]
)


class Course(Base):
    """A subject for one grade, e.g. Grade 10 Mathematics."""

    __tablename__ = "courses"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    title: Mapped[str] = mapped_column()
    description: Mapped[str] = mapped_column(default="")
    grade: Mapped[int] = mapped_column(index=True)
    subject: Mapped[str] = mapped_column(index=True)
    curriculum: Mapped[str] = mapped_column(default="CAPS")
    phase: Mapped[str | None] = mapped_column(default=None)
    access_tier: Mapped[AccessTier] = mapped_column(_tier_enum, default=AccessTier.STANDARD)
    is_active: Mapped[bool] = mapped_column(default=True)
    thumbnail_url: Mapped[str | None] = mapped_column(default=None)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    topics = relationship("Topic", back_populates="course", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, title={self.title}, grade={self.grade})>"


class Topic(Base):
    __tablename__ = "topics"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    course_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), index=True
    )
    title: Mapped[str] = mapped_column()
    description: Mapped[str | None] = mapped_column(default=None)
    sort_order: Mapped[int] = mapped_column(default=0)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    course = relationship("Course", back_populates="topics")
    lessons = relationship("Lesson", back_populates="topic", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Topic(id={self.id}, title={self.title}, course_id={self.course_id})>"


class Lesson(Base):
    __tablename__ = "lessons"
    __table_args__ = (Index("ix_lessons_topic_sort", "topic_id", "sort_order"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    topic_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("topics.id", ondelete="CASCADE"), index=True
    )
    # Denormalized from the topic for catalog listings
    course_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), index=True
    )
    title: Mapped[str] = mapped_column()
    description: Mapped[str | None] = mapped_column(default=None)
    content: Mapped[str | None] = mapped_column(default=None)
    video_url: Mapped[str | None] = mapped_column(default=None)
    video_duration_seconds: Mapped[int] = mapped_column(default=0)
    access_tier: Mapped[AccessTier] = mapped_column(_tier_enum, default=AccessTier.STANDARD)
    sort_order: Mapped[int] = mapped_column(default=0)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    topic = relationship("Topic", back_populates="lessons")
    progress_records = relationship(
        "LessonProgress", back_populates="lesson", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Lesson(id={self.id}, title={self.title}, topic_id={self.topic_id})>"
