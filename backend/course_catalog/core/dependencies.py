"""
Dependency injection setup for the course catalog
Manages store lifecycle and provides clean dependency injection
"""

from functools import lru_cache
from typing import Optional
from uuid import uuid4
import logging

from fastapi import Depends, Request

from .config import get_settings, BaseSettings, StorageBackend
from .database import DatabaseHandle
from ..repositories.interfaces import RecordStoreInterface
from ..repositories.memory_record_store import MemoryRecordStore
from ..repositories.course_repository import CourseRepository
from ..services.recommendation_service import RecommendationService

logger = logging.getLogger(__name__)


# Database Dependencies
@lru_cache()
def get_database_handle() -> Optional[DatabaseHandle]:
    """Get the process-wide MongoDB handle (None for in-memory storage)"""
    settings = get_settings()
    if settings.storage_backend == StorageBackend.MONGODB:
        return DatabaseHandle(settings)
    return None


@lru_cache()
def get_record_store() -> RecordStoreInterface:
    """Get record store instance"""
    handle = get_database_handle()
    if handle is not None:
        from ..repositories.mongo_record_store import MongoRecordStore

        return MongoRecordStore(handle)

    logger.info("Using in-memory record store")
    return MemoryRecordStore()


# Repository Dependencies
@lru_cache()
def get_course_repository() -> CourseRepository:
    """Get course repository instance"""
    return CourseRepository(get_record_store())


# Service Dependencies
def get_recommendation_service(
    course_repository: CourseRepository = Depends(get_course_repository),
) -> RecommendationService:
    """Get the recommendation service with its dependencies"""
    settings = get_settings()
    return RecommendationService(
        course_repository=course_repository,
        limit=settings.recommendation_limit,
        seed_on_request=settings.seed_on_request,
    )


# Health Check Dependencies
async def get_service_health() -> dict:
    """Get health status of all services"""
    health_status = {"storage": "unknown"}

    try:
        store = get_record_store()
        await store.ping()
        health_status["storage"] = "healthy"
    except Exception as e:
        health_status["storage"] = f"unhealthy: {str(e)}"

    return health_status


# Cleanup function for application shutdown
async def cleanup_resources():
    """Cleanup resources on application shutdown"""
    try:
        await get_record_store().close()
        handle = get_database_handle()
        if handle:
            await handle.close()
    except Exception as e:
        logger.error(f"Error closing record store: {e}")

    # Clear caches
    get_database_handle.cache_clear()
    get_record_store.cache_clear()
    get_course_repository.cache_clear()


# Settings dependency
def get_app_settings() -> BaseSettings:
    """Get application settings"""
    return get_settings()


async def get_request_id(request: Request) -> str:
    """Request ID assigned by the logging middleware"""
    request_id = getattr(request.state, "request_id", None)
    if not request_id:
        request_id = str(uuid4())
    return request_id
