"""
Test fixtures for progress tests.
"""

from dataclasses import dataclass

import pytest
from sqlalchemy.orm import Session

from app.catalog.models import Course, Lesson, Topic
from tests.utils.factories import create_course_factory, create_topic_factory


@dataclass
class SubjectTree:
    course: Course
    topics: list[Topic]
    lessons: list[list[Lesson]]


@pytest.fixture
def small_subject(db_session: Session) -> SubjectTree:
    """Subject S1 with topic T1 (lessons L1, L2) and topic T2 (lesson L3)."""
    course = create_course_factory(db_session, title="Mathematics")
    t1, t1_lessons = create_topic_factory(db_session, course, lesson_count=2, sort_order=1)
    t2, t2_lessons = create_topic_factory(db_session, course, lesson_count=1, sort_order=2)
    return SubjectTree(course=course, topics=[t1, t2], lessons=[t1_lessons, t2_lessons])


@pytest.fixture
def three_topic_subject(db_session: Session) -> SubjectTree:
    """Topics with 1, 2 and 1 lessons."""
    course = create_course_factory(db_session, title="Life Sciences")
    built = [
        create_topic_factory(db_session, course, lesson_count=count, sort_order=i)
        for i, count in enumerate([1, 2, 1])
    ]
    return SubjectTree(
        course=course,
        topics=[topic for topic, _ in built],
        lessons=[lessons for _, lessons in built],
    )


@pytest.fixture
def four_lesson_topic(db_session: Session) -> SubjectTree:
    course = create_course_factory(db_session, title="Physical Sciences")
    topic, lessons = create_topic_factory(db_session, course, lesson_count=4)
    return SubjectTree(course=course, topics=[topic], lessons=[lessons])
