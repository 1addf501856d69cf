# api/v1/courses.py
"""
Course CRUD and search endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List, Optional
import logging

from ...core.config import BaseSettings
from ...core.dependencies import get_course_repository, get_app_settings, get_request_id
from ...models.course import Course, CourseCreate, CourseUpdate, CourseLevel
from ...models.requests import CategoriesResponse, MessageResponse
from ...repositories.course_repository import CourseRepository
from ...services.course_filter_service import (
    CourseSearchParams,
    PriceRange,
    SortKey,
    SortOrder,
    available_categories,
    filter_courses,
)

router = APIRouter()
logger = logging.getLogger(__name__)

COURSE_NOT_FOUND = "Course not found"


@router.get("", response_model=List[Course])
async def list_courses(
    course_repository: CourseRepository = Depends(get_course_repository),
    settings: BaseSettings = Depends(get_app_settings),
):
    """List every course, seeding the baseline catalog when it is empty"""
    try:
        if settings.seed_on_request:
            await course_repository.seed_initial_data()
        return await course_repository.find_all()

    except Exception as e:
        logger.error(f"Error listing courses: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch courses",
        )


@router.post("", response_model=Course, status_code=status.HTTP_201_CREATED)
async def create_course(
    course: CourseCreate,
    course_repository: CourseRepository = Depends(get_course_repository),
    request_id: str = Depends(get_request_id),
):
    """Create a new course"""
    try:
        created = await course_repository.create(course)
        logger.info(f"Request {request_id}: created course {created.id}")
        return created

    except Exception as e:
        logger.error(f"Request {request_id}: error creating course: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create course",
        )


@router.get("/search", response_model=List[Course])
async def search_courses(
    q: str = Query("", description="Matches title, description, instructor or tags"),
    level: Optional[CourseLevel] = Query(None),
    category: Optional[str] = Query(None),
    price_range: PriceRange = Query(PriceRange.ALL),
    sort_by: SortKey = Query(SortKey.TITLE),
    sort_order: SortOrder = Query(SortOrder.ASC),
    course_repository: CourseRepository = Depends(get_course_repository),
):
    """
    Search, filter and sort the catalog

    - **q**: case-insensitive search term
    - **level**: Beginner, Intermediate or Advanced
    - **category**: exact category name
    - **price_range**: all, free, under50, 50to100 or over100
    - **sort_by**: title, rating, price, enrolledStudents or createdAt
    - **sort_order**: asc or desc
    """
    params = CourseSearchParams(
        search_term=q,
        level=level,
        category=category or None,
        price_range=price_range,
        sort_by=sort_by,
        sort_order=sort_order,
    )

    try:
        courses = await course_repository.find_all()
    except Exception as e:
        logger.error(f"Error searching courses: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to search courses",
        )

    return filter_courses(courses, params)


@router.get("/categories", response_model=CategoriesResponse)
async def list_categories(
    course_repository: CourseRepository = Depends(get_course_repository),
):
    """Distinct categories present in the catalog"""
    try:
        courses = await course_repository.find_all()
        return CategoriesResponse(categories=available_categories(courses))

    except Exception as e:
        logger.error(f"Error listing categories: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch categories",
        )


@router.get("/category/{category}", response_model=List[Course])
async def get_courses_by_category(
    category: str,
    course_repository: CourseRepository = Depends(get_course_repository),
):
    """Courses whose category contains the given text"""
    try:
        return await course_repository.find_by_category(category)

    except Exception as e:
        logger.error(f"Error fetching courses in category {category}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch courses",
        )


@router.get("/{course_id}", response_model=Course)
async def get_course(
    course_id: str,
    course_repository: CourseRepository = Depends(get_course_repository),
):
    """Get a single course"""
    try:
        course = await course_repository.find_by_id(course_id)

        if not course:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=COURSE_NOT_FOUND
            )

        return course

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching course {course_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch course",
        )


@router.put("/{course_id}", response_model=Course)
async def update_course(
    course_id: str,
    updates: CourseUpdate,
    course_repository: CourseRepository = Depends(get_course_repository),
    request_id: str = Depends(get_request_id),
):
    """Update the provided fields of a course"""
    try:
        course = await course_repository.update_by_id(course_id, updates)

        if not course:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=COURSE_NOT_FOUND
            )

        logger.info(f"Request {request_id}: updated course {course_id}")
        return course

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Request {request_id}: error updating course {course_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update course",
        )


@router.delete("/{course_id}", response_model=MessageResponse)
async def delete_course(
    course_id: str,
    course_repository: CourseRepository = Depends(get_course_repository),
    request_id: str = Depends(get_request_id),
):
    """Delete a course permanently"""
    try:
        deleted = await course_repository.delete_by_id(course_id)

        if not deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=COURSE_NOT_FOUND
            )

        logger.info(f"Request {request_id}: deleted course {course_id}")
        return MessageResponse(message="Course deleted successfully")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Request {request_id}: error deleting course {course_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete course",
        )
