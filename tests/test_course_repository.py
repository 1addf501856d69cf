import asyncio
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from course_catalog.models.course import CourseCreate, CourseLevel, CourseUpdate


class TestCreateAndFind:
    """Test create, find_all, find_by_id and find_by_category."""

    async def test_create_then_find_by_id(self, repository, course_input):
        """A created course reads back as the input plus id and timestamps."""
        payload = course_input()

        created = await repository.create(payload)
        found = await repository.find_by_id(created.id)

        assert found == created
        assert found.id
        assert found.created_at == found.updated_at
        assert found.title == payload.title
        assert found.enrolled_students == payload.enrolled_students
        assert found.tags == payload.tags
        assert found.level == CourseLevel.BEGINNER

    async def test_find_all_empty(self, repository):
        """An empty collection is an empty list, not an error."""
        assert await repository.find_all() == []

    async def test_find_all_keeps_store_order(self, repository, course_input):
        for title in ["Zeta", "Alpha", "Mu"]:
            await repository.create(course_input(title=title))

        courses = await repository.find_all()
        assert [course.title for course in courses] == ["Zeta", "Alpha", "Mu"]

    @pytest.mark.parametrize("course_id", ["missing", "", "not a valid id!"])
    async def test_find_by_id_not_found(self, repository, course_id):
        """Absent or malformed identifiers are reported as not found."""
        assert await repository.find_by_id(course_id) is None

    async def test_find_by_category_is_case_insensitive_substring(
        self, repository, course_input
    ):
        await repository.create(course_input(title="A", category="Web Development"))
        await repository.create(course_input(title="B", category="Backend Development"))
        await repository.create(course_input(title="C", category="Data Science"))

        courses = await repository.find_by_category("DEVELOPMENT")
        assert [course.title for course in courses] == ["A", "B"]


class TestUpdate:
    """Test partial updates."""

    async def test_update_changes_only_given_fields(self, repository, course_input):
        created = await repository.create(course_input())

        updated = await repository.update_by_id(created.id, CourseUpdate(price=79.0))

        assert updated.price == 79.0
        assert updated.title == created.title
        assert updated.tags == created.tags
        assert updated.rating == created.rating
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at

    async def test_updated_at_strictly_increases(self, repository, course_input):
        """Back-to-back updates still move updatedAt forward."""
        created = await repository.create(course_input())

        first = await repository.update_by_id(created.id, CourseUpdate(rating=3))
        second = await repository.update_by_id(created.id, CourseUpdate(rating=4))

        assert created.updated_at < first.updated_at < second.updated_at
        assert (await repository.find_by_id(created.id)).rating == 4

    async def test_update_ignores_identifier_and_created_at(
        self, repository, course_input
    ):
        created = await repository.create(course_input())
        updates = CourseUpdate.model_validate(
            {
                "_id": "another-id",
                "createdAt": datetime(2000, 1, 1, tzinfo=timezone.utc),
                "title": "Renamed",
            }
        )

        updated = await repository.update_by_id(created.id, updates)

        assert updated.id == created.id
        assert updated.created_at == created.created_at
        assert updated.title == "Renamed"

    async def test_update_unknown_id(self, repository):
        assert await repository.update_by_id("missing", CourseUpdate(title="x")) is None


class TestDelete:
    """Test deletes."""

    async def test_delete_then_find(self, repository, course_input):
        created = await repository.create(course_input())

        assert await repository.delete_by_id(created.id) is True
        assert await repository.find_by_id(created.id) is None
        assert await repository.delete_by_id(created.id) is False


class TestSeeding:
    """Test one-time seeding of the baseline catalog."""

    async def test_seed_twice_inserts_three(self, repository):
        assert await repository.seed_initial_data() == 3
        assert await repository.seed_initial_data() == 0

        courses = await repository.find_all()
        assert [course.title for course in courses] == [
            "Introduction to React",
            "Advanced Node.js",
            "Python for Data Science",
        ]

    async def test_seed_keeps_historical_timestamps(self, repository):
        await repository.seed_initial_data()

        react = (await repository.find_all())[0]
        assert react.created_at == datetime(2024, 1, 15, tzinfo=timezone.utc)
        assert react.updated_at == react.created_at
        assert react.price == 99.99
        assert react.tags == ["React", "JavaScript", "Frontend"]

    async def test_seed_skips_non_empty_collection(self, repository, course_input):
        await repository.create(course_input())

        assert await repository.seed_initial_data() == 0
        assert len(await repository.find_all()) == 1

    async def test_concurrent_seeding_does_not_duplicate(self, repository):
        results = await asyncio.gather(
            *[repository.seed_initial_data() for _ in range(5)]
        )

        assert sorted(results) == [0, 0, 0, 0, 3]
        assert len(await repository.find_all()) == 3


class TestValidation:
    """Test that invalid payloads never reach the store."""

    @pytest.mark.parametrize(
        "overrides",
        [
            {"rating": 5.1},
            {"rating": -1},
            {"price": -0.01},
            {"duration": 0},
            {"enrolledStudents": -1},
            {"title": "   "},
            {"level": "Expert"},
            {"tags": ["ok", " "]},
        ],
    )
    def test_rejects_invalid_create(self, course_input, overrides):
        with pytest.raises(ValidationError):
            course_input(**overrides)

    def test_tags_are_deduplicated(self, course_input):
        payload = course_input(tags=["React", " React ", "react", "JS"])

        assert payload.tags == ["React", "react", "JS"]

    def test_update_rejects_out_of_range_rating(self):
        with pytest.raises(ValidationError):
            CourseUpdate(rating=7)

    def test_update_only_reports_set_fields(self):
        assert CourseUpdate(enrolled_students=5).to_document() == {"enrolledStudents": 5}

    def test_create_document_uses_camel_case(self, course_input):
        document = course_input().to_document()

        assert document["enrolledStudents"] == 300
        assert document["level"] == "Beginner"
        assert "enrolled_students" not in document
