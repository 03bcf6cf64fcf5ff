"""Classroom model."""

from sqlalchemy import Column, String, DateTime, Integer, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from ..database import Base
from .enums import Rotation


class Classroom(Base):
    """A teacher's class and its active rotation token."""
    __tablename__ = "classes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    teacher_id = Column(String(255), nullable=False, index=True)
    rotation = Column(SQLEnum(Rotation, name="rotation"), nullable=False, default=Rotation.A)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    students = relationship(
        "Student",
        back_populates="classroom",
        cascade="all, delete-orphan",
        order_by="Student.name",
    )

    # Every UPDATE checks and bumps version, so concurrent picks on one class conflict
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<Classroom(id={self.id}, name='{self.name}')>"

    @property
    def student_count(self):
        """Get count of students in this class."""
        return len(self.students)

    def owned_by(self, teacher_id: str) -> bool:
        return self.teacher_id == teacher_id
