"""
Search, filter and sort over an in-memory list of courses
"""
from typing import Any, Callable, Dict, List, Optional
from enum import Enum

from pydantic import BaseModel

from ..models.course import Course, CourseLevel


class PriceRange(str, Enum):
    ALL = "all"
    FREE = "free"
    UNDER_50 = "under50"
    FROM_50_TO_100 = "50to100"
    OVER_100 = "over100"


class SortKey(str, Enum):
    TITLE = "title"
    RATING = "rating"
    PRICE = "price"
    ENROLLED_STUDENTS = "enrolledStudents"
    CREATED_AT = "createdAt"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


PRICE_RANGES: Dict[PriceRange, Callable[[float], bool]] = {
    PriceRange.ALL: lambda price: True,
    PriceRange.FREE: lambda price: price == 0,
    PriceRange.UNDER_50: lambda price: 0 < price < 50,
    PriceRange.FROM_50_TO_100: lambda price: 50 <= price <= 100,
    PriceRange.OVER_100: lambda price: price > 100,
}

SORT_KEYS: Dict[SortKey, Callable[[Course], Any]] = {
    SortKey.TITLE: lambda course: course.title.lower(),
    SortKey.RATING: lambda course: course.rating,
    SortKey.PRICE: lambda course: course.price,
    SortKey.ENROLLED_STUDENTS: lambda course: course.enrolled_students,
    SortKey.CREATED_AT: lambda course: course.created_at,
}


class CourseSearchParams(BaseModel):
    """Search, filter and sort settings; None means no filter"""

    search_term: str = ""
    level: Optional[CourseLevel] = None
    category: Optional[str] = None
    price_range: PriceRange = PriceRange.ALL
    sort_by: SortKey = SortKey.TITLE
    sort_order: SortOrder = SortOrder.ASC


def matches_search(course: Course, term: str) -> bool:
    """Case-insensitive match on title, description, instructor or any tag"""
    term = term.lower()
    fields = [course.title, course.description, course.instructor, *course.tags]
    return any(term in value.lower() for value in fields)


def filter_courses(courses: List[Course], params: CourseSearchParams) -> List[Course]:
    """
    Apply every filter, then sort.

    Always works from the complete list it is given, so changing one
    setting never compounds with an earlier result. Sorting is stable:
    courses with equal keys keep their input order in both directions.
    """
    term = params.search_term.strip()
    in_price_range = PRICE_RANGES[params.price_range]

    filtered = [
        course
        for course in courses
        if (not term or matches_search(course, term))
        and (params.level is None or course.level == params.level)
        and (params.category is None or course.category == params.category)
        and in_price_range(course.price)
    ]

    return sorted(
        filtered,
        key=SORT_KEYS[params.sort_by],
        reverse=params.sort_order == SortOrder.DESC,
    )


def available_categories(courses: List[Course]) -> List[str]:
    """Distinct categories in first-seen order"""
    return list(dict.fromkeys(course.category for course in courses))


def has_active_filters(params: CourseSearchParams) -> bool:
    """Whether any filter (sorting aside) narrows the list"""
    return bool(
        params.search_term.strip()
        or params.level is not None
        or params.category is not None
        or params.price_range != PriceRange.ALL
    )
