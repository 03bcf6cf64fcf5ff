"""Roster service: teacher-scoped class/student storage around the selector."""
import logging
from datetime import datetime, UTC
from typing import List, Optional

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from ..config import PICK_MAX_ATTEMPTS
from ..exceptions import (
    ColdCallError, NoEligibleStudents, NotClassTeacher, PickConflict,
    RosterMismatch, UnknownClass, UnknownStudent,
)
from ..models import Classroom, Rotation, Student
from ..selection import Pick, RotationSelector

logger = logging.getLogger(__name__)


class RosterService:
    """
    Reads and writes classes and students on behalf of one requesting teacher.

    Every operation takes the requesting ``teacher_id`` and checks ownership
    before touching the roster, so the selector only ever sees data the
    teacher is allowed to act on.

    Args:
        db: SQLAlchemy session the service reads and commits through.
        selector: Selection engine; a default unseeded one is created if omitted.
        max_attempts: Pick retries after losing a concurrent write.
    """

    def __init__(self, db: Session, selector: Optional[RotationSelector] = None,
                 max_attempts: int = PICK_MAX_ATTEMPTS):
        self.db = db
        self.selector = selector or RotationSelector()
        self.max_attempts = max_attempts

    # Classes

    def list_classes(self, teacher_id: str) -> List[Classroom]:
        return (
            self.db.query(Classroom)
            .filter(Classroom.teacher_id == teacher_id)
            .order_by(Classroom.created_at.desc())
            .all()
        )

    def get_class(self, class_id: str, teacher_id: str, for_update: bool = False) -> Classroom:
        """Load a class the teacher owns."""
        query = self.db.query(Classroom).filter(Classroom.id == class_id)
        if for_update:
            query = query.with_for_update()
        classroom = query.first()
        if classroom is None:
            raise UnknownClass(class_id)
        if not classroom.owned_by(teacher_id):
            raise NotClassTeacher(class_id, teacher_id)
        return classroom

    def create_class(self, name: str, teacher_id: str) -> Classroom:
        classroom = Classroom(name=name, teacher_id=teacher_id, rotation=Rotation.A)
        self.db.add(classroom)
        self.db.commit()
        self.db.refresh(classroom)
        logger.info(f"Teacher {teacher_id} created class {classroom.id}")
        return classroom

    def delete_class(self, class_id: str, teacher_id: str) -> None:
        classroom = self.get_class(class_id, teacher_id)
        self.db.delete(classroom)
        self.db.commit()
        logger.info(f"Teacher {teacher_id} deleted class {class_id}")

    # Students

    def list_students(self, class_id: str, teacher_id: str) -> List[Student]:
        """Whole roster of a class, sorted by name."""
        self.get_class(class_id, teacher_id)
        return (
            self.db.query(Student)
            .filter(Student.class_id == class_id)
            .order_by(Student.name)
            .all()
        )

    def get_student(self, student_id: str, teacher_id: str) -> Student:
        student = self.db.query(Student).filter(Student.id == student_id).first()
        if student is None:
            raise UnknownStudent(student_id)
        if not student.classroom.owned_by(teacher_id):
            raise NotClassTeacher(student.class_id, teacher_id)
        return student

    def create_student(self, class_id: str, name: str, teacher_id: str) -> Student:
        """Add a student to the half of the rotation that is currently active."""
        classroom = self.get_class(class_id, teacher_id, for_update=True)
        student = Student(
            name=name,
            class_id=classroom.id,
            exclude=False,
            rotation=classroom.rotation,
        )
        self.db.add(student)
        self._touch(classroom)
        self.db.commit()
        self.db.refresh(student)
        return student

    def update_student(self, student_id: str, teacher_id: str, name: Optional[str] = None,
                       exclude: Optional[bool] = None, rotation: Optional[Rotation] = None) -> Student:
        """Apply a partial edit; ``None`` leaves a field unchanged."""
        student = self.get_student(student_id, teacher_id)
        if name is not None:
            student.name = name
        if exclude is not None:
            student.exclude = exclude
        if rotation is not None:
            student.rotation = Rotation(rotation)
        self._touch(student.classroom)
        self.db.commit()
        self.db.refresh(student)
        return student

    def delete_student(self, student_id: str, teacher_id: str) -> None:
        student = self.get_student(student_id, teacher_id)
        self.db.delete(student)
        self.db.commit()

    def _touch(self, classroom: Classroom) -> None:
        # Writing the class row bumps its version, so roster edits and picks on
        # the same class cannot commit over each other unnoticed
        classroom.updated_at = datetime.now(UTC)

    # Selection

    def available_students(self, class_id: str, teacher_id: str) -> List[Student]:
        """Students that could be picked right now. Never flips anything."""
        classroom = self.get_class(class_id, teacher_id)
        return self.selector.list_eligible(classroom.rotation, classroom.students)

    def pick_random(self, class_id: str, teacher_id: str) -> Pick:
        """
        Pick a student and commit the rotation flips as one unit.

        Raises:
            NoEligibleStudents: Nobody can be picked; nothing is committed.
            PickConflict: Concurrent picks kept winning the race on this class.
            ColdCallError: Any other domain error; the transaction is rolled back
                and the class row lock released before it propagates.
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                return self._pick_once(class_id, teacher_id)
            except StaleDataError:
                self.db.rollback()
                logger.warning(
                    f"Concurrent update on class {class_id}, retrying pick "
                    f"({attempt}/{self.max_attempts})"
                )
            except ColdCallError as e:
                self.db.rollback()
                logger.info(f"Pick aborted for class {class_id}: {e}")
                raise
        raise PickConflict(class_id, self.max_attempts)

    def _pick_once(self, class_id: str, teacher_id: str) -> Pick:
        classroom = self.get_class(class_id, teacher_id, for_update=True)
        roster = list(classroom.students)
        for student in roster:
            if student.class_id != classroom.id:
                raise RosterMismatch(classroom.id, student.id)

        try:
            pick = self.selector.pick_one(classroom.rotation, roster)
        except NoEligibleStudents:
            raise NoEligibleStudents(class_id) from None

        if pick.class_flipped:
            logger.info(f"Class {class_id} rotation flipped to {pick.class_rotation.value}")
            classroom.rotation = pick.class_rotation
        pick.student.rotation = pick.student_rotation
        self._touch(classroom)

        self.db.commit()
        self.db.refresh(pick.student)
        logger.info(f"Picked student {pick.student.id} in class {class_id}")
        return pick
