"""Pydantic request/response schemas for classes and students."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.enums import Rotation


def _clean_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError('Name must not be blank')
    return v


class ClassCreate(BaseModel):
    name: str = Field(..., max_length=255)

    @field_validator('name')
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        return _clean_name(v)


class StudentCreate(BaseModel):
    name: str = Field(..., max_length=255)

    @field_validator('name')
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        return _clean_name(v)


class StudentUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    exclude: Optional[bool] = None
    rotation: Optional[Rotation] = None

    @field_validator('name')
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _clean_name(v)


class StudentResponse(BaseModel):
    id: str
    name: str
    class_id: str
    exclude: bool
    rotation: Rotation

    model_config = ConfigDict(from_attributes=True)


class ClassResponse(BaseModel):
    id: str
    name: str
    teacher_id: str
    rotation: Rotation
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ClassDetail(ClassResponse):
    students: List[StudentResponse] = []


class PickResponse(BaseModel):
    student: StudentResponse
    class_rotation: Rotation
    class_flipped: bool
