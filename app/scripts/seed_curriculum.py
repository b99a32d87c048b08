"""
Seed script for a demo CAPS curriculum.

Creates FET phase subjects with their topics and two placeholder lessons per
topic, so the progress endpoints have something to roll up.
Can be run multiple times - skips subjects that already exist.

Usage:
    python -m app.scripts.seed_curriculum
    python -m app.scripts.seed_curriculum --grades 10 11
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from sqlalchemy.orm import Session  # noqa: E402

from app.catalog.models import AccessTier, Course, Lesson, Topic  # noqa: E402
from app.db import base as _models  # noqa: E402, F401
from app.db.session import SessionLocal  # noqa: E402

FET_SUBJECTS: dict[str, list[str]] = {
    "Mathematics": [
        "Functions",
        "Trigonometry",
        "Analytical Geometry",
        "Probability",
        "Calculus (introductory)",
    ],
    "Physical Sciences": [
        "Physics (Mechanics, Waves, Electricity)",
        "Chemistry (Matter, Reactions, Acids & Bases)",
    ],
    "Life Sciences": ["Cell Biology", "Genetics", "Evolution", "Human Physiology"],
    "Accounting": ["Financial Statements", "Cost Accounting"],
}

LESSON_TEMPLATES = ["Introduction to {topic}", "Practice: {topic}"]


def seed_subject(db: Session, name: str, grade: int, topics: list[str]) -> bool:
    """Create one subject tree. Returns False when the subject already exists."""
    existing = (
        db.query(Course)
        .filter(Course.title == name, Course.grade == grade, Course.curriculum == "CAPS")
        .first()
    )
    if existing:
        print(f"⏭️  {name} (Grade {grade}) already exists. Skipping.")
        return False

    course = Course(
        title=name,
        description=f"CAPS Grade {grade} {name}",
        grade=grade,
        subject=name,
        curriculum="CAPS",
        phase="FET",
        access_tier=AccessTier.STANDARD,
    )
    db.add(course)
    db.flush()

    for topic_order, topic_title in enumerate(topics, start=1):
        topic = Topic(course_id=course.id, title=topic_title, sort_order=topic_order)
        db.add(topic)
        db.flush()

        for lesson_order, template in enumerate(LESSON_TEMPLATES, start=1):
            db.add(
                Lesson(
                    topic_id=topic.id,
                    course_id=course.id,
                    title=template.format(topic=topic_title),
                    access_tier=AccessTier.STANDARD,
                    sort_order=lesson_order,
                )
            )

    print(f"✅ Created {name} (Grade {grade}) with {len(topics)} topics")
    return True


def seed_curriculum(db: Session, grades: list[int]) -> int:
    created = 0
    for grade in grades:
        for name, topics in FET_SUBJECTS.items():
            if seed_subject(db, name, grade, topics):
                created += 1
    db.commit()
    return created


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo CAPS curriculum")
    parser.add_argument("--grades", type=int, nargs="+", default=[10, 11, 12])
    args = parser.parse_args()

    db = SessionLocal()
    try:
        created = seed_curriculum(db, args.grades)
        print(f"🎉 Seeding complete: {created} subjects created")
    except Exception as e:
        db.rollback()
        print(f"❌ Seeding failed: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
