# models/requests.py
"""
API request and response models
"""
from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any
from datetime import datetime, timezone


class MessageResponse(BaseModel):
    """Plain confirmation message"""

    message: str


class CategoriesResponse(BaseModel):
    """Distinct course categories"""

    categories: List[str]


class HealthCheckResponse(BaseModel):
    """Health check response"""

    status: str = "healthy"
    version: str
    environment: str
    services: Dict[str, str]  # service_name -> status
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ErrorResponse(BaseModel):
    """Standard error response"""

    error: str
    details: Optional[List[Dict[str, Any]]] = None
