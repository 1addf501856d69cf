"""
Course-related data models
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional, Dict, Any
from datetime import datetime
from enum import Enum


class CourseLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


def _normalize_tags(tags: Optional[List[str]]) -> Optional[List[str]]:
    """Trim tags and drop repeats, keeping the first occurrence"""
    if tags is None:
        return None

    unique: List[str] = []
    for tag in tags:
        tag = tag.strip()
        if not tag:
            raise ValueError("tags must be non-empty strings")
        if tag not in unique:
            unique.append(tag)
    return unique


class CourseCreate(BaseModel):
    """Payload accepted when creating a course"""

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    instructor: str = Field(..., min_length=1)
    duration: float = Field(..., gt=0, description="Length in hours")
    level: CourseLevel
    category: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    rating: float = Field(0, ge=0, le=5)
    enrolled_students: int = Field(0, ge=0, alias="enrolledStudents")
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def unique_tags(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return _normalize_tags(value)

    @field_validator("title", "description", "instructor", "category")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    def to_document(self) -> Dict[str, Any]:
        """Persisted representation (camelCase keys)"""
        return self.model_dump(by_alias=True)


class CourseUpdate(BaseModel):
    """Partial course update; only the fields provided are applied"""

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    instructor: Optional[str] = Field(None, min_length=1)
    duration: Optional[float] = Field(None, gt=0)
    level: Optional[CourseLevel] = None
    category: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    rating: Optional[float] = Field(None, ge=0, le=5)
    enrolled_students: Optional[int] = Field(None, ge=0, alias="enrolledStudents")
    tags: Optional[List[str]] = None

    @field_validator("tags")
    @classmethod
    def unique_tags(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return _normalize_tags(value)

    @field_validator("title", "description", "instructor", "category")
    @classmethod
    def not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("must not be blank")
        return value

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    def to_document(self) -> Dict[str, Any]:
        """Only the fields the caller actually supplied"""
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)


class Course(BaseModel):
    """Core course model"""

    id: str = Field(..., alias="_id")
    title: str
    description: str
    instructor: str
    duration: float
    level: CourseLevel
    category: str
    price: float
    rating: float
    enrolled_students: int = Field(..., alias="enrolledStudents")
    tags: List[str] = Field(default_factory=list)

    # Metadata
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Course":
        """Build a course from a store document"""
        return cls.model_validate(document)


class RecommendationPreferences(BaseModel):
    """Optional filters narrowing the recommendation query"""

    # Matched exactly against the stored level, so unknown levels match nothing
    level: Optional[str] = None
    category: Optional[str] = None
    max_price: Optional[float] = Field(None, alias="maxPrice")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("level", mode="before")
    @classmethod
    def level_as_stored(cls, value: Any) -> Any:
        if isinstance(value, CourseLevel):
            return value.value
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("category")
    @classmethod
    def empty_category_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value
