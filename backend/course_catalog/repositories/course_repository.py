"""
Course repository - domain operations over an injected record store
"""
import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, List

from .interfaces.record_store import RecordStoreInterface
from .seed_data import initial_course_documents
from ..models.course import Course, CourseCreate, CourseUpdate
from ..models.query import RecordQuery

logger = logging.getLogger(__name__)

# Fields a partial update may never touch
IMMUTABLE_FIELDS = ("_id", "id", "createdAt", "created_at")


def utcnow() -> datetime:
    """Current UTC time at millisecond precision (what MongoDB stores)"""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class CourseRepository:
    """CRUD, category search, recommendations and seeding for courses"""

    def __init__(self, store: RecordStoreInterface):
        self.store = store
        self._seed_lock = asyncio.Lock()

    async def create(self, course: CourseCreate) -> Course:
        """Create a new course; the store assigns its identifier"""
        now = utcnow()
        document = course.to_document()
        document["createdAt"] = now
        document["updatedAt"] = now

        record_id = await self.store.insert_one(document)
        document["_id"] = record_id
        return Course.from_document(document)

    async def find_all(self) -> List[Course]:
        """Every course, in store order"""
        documents = await self.store.find()
        return [Course.from_document(doc) for doc in documents]

    async def find_by_id(self, course_id: str) -> Optional[Course]:
        """Get a course by identifier; unknown or malformed ids give None"""
        document = await self.store.find_one(course_id)
        return Course.from_document(document) if document else None

    async def find_by_category(self, category: str) -> List[Course]:
        """Courses whose category contains the text, ignoring case"""
        documents = await self.store.find(RecordQuery(contains={"category": category}))
        return [Course.from_document(doc) for doc in documents]

    async def update_by_id(
        self, course_id: str, updates: CourseUpdate
    ) -> Optional[Course]:
        """Merge the provided fields into a course and refresh updatedAt"""
        existing = await self.store.find_one(course_id)
        if existing is None:
            return None

        fields = {
            field: value
            for field, value in updates.to_document().items()
            if field not in IMMUTABLE_FIELDS
        }

        # updatedAt must move forward even for back-to-back updates
        now = utcnow()
        previous = existing.get("updatedAt")
        if previous is not None:
            if previous.tzinfo is None:
                previous = previous.replace(tzinfo=timezone.utc)
            if now <= previous:
                now = previous + timedelta(milliseconds=1)
        fields["updatedAt"] = now

        document = await self.store.update_one(course_id, fields)
        return Course.from_document(document) if document else None

    async def delete_by_id(self, course_id: str) -> bool:
        """Delete a course permanently"""
        return await self.store.delete_one(course_id)

    async def get_recommendations(self, query: RecordQuery) -> List[Course]:
        """Run a recommendation query against the store"""
        documents = await self.store.find(query)
        return [Course.from_document(doc) for doc in documents]

    async def seed_initial_data(self) -> int:
        """
        Insert the baseline courses when the collection is empty.

        Calls within this process are serialized, so repeated or concurrent
        calls never duplicate the seed. Separate processes starting against
        the same empty collection can still both seed.
        """
        async with self._seed_lock:
            count = await self.store.count()
            if count != 0:
                return 0

            documents = initial_course_documents()
            await self.store.insert_many(documents)
            logger.info(f"Seeded {len(documents)} initial courses")
            return len(documents)
