# api/v1/recommendations.py
"""
Recommendation API endpoints
"""
from fastapi import APIRouter, Body, Depends, HTTPException, status
from typing import Optional, List
import logging

from ...core.dependencies import get_recommendation_service
from ...models.course import Course, RecommendationPreferences
from ...services.recommendation_service import RecommendationService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=List[Course])
async def get_recommendations(
    preferences: Optional[RecommendationPreferences] = Body(None),
    recommendation_service: RecommendationService = Depends(get_recommendation_service),
):
    """
    Get the top-rated courses matching optional preferences

    - **level**: only courses at exactly this level
    - **category**: only categories containing this text (case-insensitive)
    - **maxPrice**: only courses priced at or below this value
    """
    try:
        return await recommendation_service.get_recommendations(preferences)

    except Exception as e:
        logger.error(f"Error in get_recommendations: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get recommendations",
        )
