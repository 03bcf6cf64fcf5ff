"""SQLAlchemy models for the cold-call service."""

from .enums import Rotation
from .classroom import Classroom
from .student import Student

__all__ = [
    "Rotation",
    "Classroom",
    "Student",
]
