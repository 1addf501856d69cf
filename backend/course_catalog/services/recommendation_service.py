"""
Recommendation engine - ranks courses by rating and enrollment
"""
import time
from typing import List, Optional
import logging

from ..models.course import Course, RecommendationPreferences
from ..models.query import RecordQuery, SortDirection
from ..repositories.course_repository import CourseRepository

logger = logging.getLogger(__name__)

DEFAULT_RECOMMENDATION_LIMIT = 3

RECOMMENDATION_ORDER = [
    ("rating", SortDirection.DESCENDING),
    ("enrolledStudents", SortDirection.DESCENDING),
]


def recommendation_query(
    preferences: Optional[RecommendationPreferences] = None,
    limit: int = DEFAULT_RECOMMENDATION_LIMIT,
) -> RecordQuery:
    """Translate user preferences into a store query"""
    query = RecordQuery(sort=list(RECOMMENDATION_ORDER), limit=limit)

    if preferences is None:
        return query

    if preferences.level is not None:
        query.equals["level"] = preferences.level
    if preferences.category:
        query.contains["category"] = preferences.category
    if preferences.max_price is not None:
        query.at_most["price"] = preferences.max_price

    return query


def recommend(
    courses: List[Course],
    preferences: Optional[RecommendationPreferences] = None,
    limit: int = DEFAULT_RECOMMENDATION_LIMIT,
) -> List[Course]:
    """
    Pick the most recommendable courses from an in-memory snapshot.

    Same courses and preferences always give the same result; courses tied
    on both rating and enrollment keep their input order.
    """
    query = recommendation_query(preferences, limit)
    documents = query.apply([course.model_dump(by_alias=True) for course in courses])
    return [Course.from_document(document) for document in documents]


class RecommendationService:
    """Serves recommendations from the course repository"""

    def __init__(
        self,
        course_repository: CourseRepository,
        limit: int = DEFAULT_RECOMMENDATION_LIMIT,
        seed_on_request: bool = True,
    ):
        self.course_repository = course_repository
        self.limit = limit
        self.seed_on_request = seed_on_request

    async def get_recommendations(
        self, preferences: Optional[RecommendationPreferences] = None
    ) -> List[Course]:
        """Get the top courses matching the preferences"""
        start_time = time.time()

        if self.seed_on_request:
            await self.course_repository.seed_initial_data()

        courses = await self.course_repository.get_recommendations(
            recommendation_query(preferences, self.limit)
        )

        logger.info(
            f"Recommended {len(courses)} courses in {time.time() - start_time:.3f}s"
        )
        return courses
