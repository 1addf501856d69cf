"""
Baseline courses inserted into an empty catalog
"""
from datetime import datetime, timezone
from typing import List, Dict, Any

from ..models.course import CourseCreate, CourseLevel


def _seed(created: datetime, **fields) -> Dict[str, Any]:
    document = CourseCreate(**fields).to_document()
    document["createdAt"] = created
    document["updatedAt"] = created
    return document


def initial_course_documents() -> List[Dict[str, Any]]:
    """Fresh copies of the seed documents, with their historical timestamps"""
    return [
        _seed(
            datetime(2024, 1, 15, tzinfo=timezone.utc),
            title="Introduction to React",
            description="Learn the fundamentals of React including components, state, and props.",
            instructor="John Smith",
            duration=20,
            level=CourseLevel.BEGINNER,
            category="Web Development",
            price=99.99,
            rating=4.5,
            enrolled_students=1250,
            tags=["React", "JavaScript", "Frontend"],
        ),
        _seed(
            datetime(2024, 2, 1, tzinfo=timezone.utc),
            title="Advanced Node.js",
            description="Master backend development with Node.js, Express, and MongoDB.",
            instructor="Sarah Johnson",
            duration=35,
            level=CourseLevel.ADVANCED,
            category="Backend Development",
            price=149.99,
            rating=4.8,
            enrolled_students=890,
            tags=["Node.js", "Express", "MongoDB", "Backend"],
        ),
        _seed(
            datetime(2024, 1, 20, tzinfo=timezone.utc),
            title="Python for Data Science",
            description="Comprehensive guide to data analysis and machine learning with Python.",
            instructor="Dr. Michael Chen",
            duration=45,
            level=CourseLevel.INTERMEDIATE,
            category="Data Science",
            price=199.99,
            rating=4.7,
            enrolled_students=2100,
            tags=["Python", "Data Science", "Machine Learning"],
        ),
    ]
