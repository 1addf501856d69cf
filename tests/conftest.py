import os
from datetime import datetime, timedelta, timezone

# Settings are read at import time, so pick the testing profile first
os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
from fastapi.testclient import TestClient

from course_catalog.core.dependencies import get_course_repository
from course_catalog.main import app
from course_catalog.models.course import Course, CourseCreate, CourseLevel
from course_catalog.repositories.course_repository import CourseRepository
from course_catalog.repositories.memory_record_store import MemoryRecordStore


@pytest.fixture
def store():
    """Empty in-memory record store"""
    return MemoryRecordStore()


@pytest.fixture
def repository(store):
    """Course repository over the in-memory store"""
    return CourseRepository(store)


@pytest.fixture
def client(repository):
    """FastAPI test client wired to a fresh repository."""
    app.dependency_overrides[get_course_repository] = lambda: repository
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def course_input():
    """Factory for valid create payloads"""

    def _make(**overrides) -> CourseCreate:
        fields = {
            "title": "Intro to React",
            "description": "Components, hooks and state management.",
            "instructor": "Ada Lovelace",
            "duration": 12,
            "level": CourseLevel.BEGINNER,
            "category": "Web Development",
            "price": 49.5,
            "rating": 4.2,
            "enrolledStudents": 300,
            "tags": ["React", "JavaScript"],
        }
        fields.update(overrides)
        return CourseCreate(**fields)

    return _make


@pytest.fixture
def course_factory():
    """Factory for stored courses, as returned by the repository"""
    counter = {"value": 0}
    base_time = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _make(**overrides) -> Course:
        counter["value"] += 1
        created = base_time + timedelta(days=counter["value"])
        fields = {
            "_id": f"course-{counter['value']}",
            "title": f"Course {counter['value']}",
            "description": "A course description",
            "instructor": "Grace Hopper",
            "duration": 10,
            "level": CourseLevel.BEGINNER,
            "category": "General",
            "price": 20,
            "rating": 4.0,
            "enrolledStudents": 100,
            "tags": [],
            "createdAt": created,
            "updatedAt": created,
        }
        fields.update(overrides)
        return Course.from_document(fields)

    return _make
