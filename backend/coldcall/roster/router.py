"""Roster router for class, student and cold-call endpoints."""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from ..auth import get_current_teacher_id
from ..database import get_db
from ..exceptions import (
    ColdCallError, NoEligibleStudents, NotClassTeacher, PickConflict,
    UnknownClass, UnknownStudent,
)
from .schemas import (
    ClassCreate, ClassDetail, ClassResponse, PickResponse,
    StudentCreate, StudentResponse, StudentUpdate,
)
from .service import RosterService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Roster"])


def get_roster_service(db: Session = Depends(get_db)) -> RosterService:
    """Dependency to get an instance of RosterService."""
    return RosterService(db)


def to_http_error(exc: ColdCallError) -> HTTPException:
    """Translate a domain error into the matching HTTP response."""
    if isinstance(exc, (UnknownClass, UnknownStudent)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, NotClassTeacher):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    if isinstance(exc, (NoEligibleStudents, PickConflict)):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    # Corrupt roster data: invalid rotation tokens, students from another class
    logger.error(f"Roster integrity error: {exc}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get("/classes", response_model=List[ClassResponse])
async def list_classes(
    teacher_id: str = Depends(get_current_teacher_id),
    service: RosterService = Depends(get_roster_service)
):
    """List the requesting teacher's classes."""
    return service.list_classes(teacher_id)


@router.post("/classes", response_model=ClassResponse, status_code=status.HTTP_201_CREATED)
async def create_class(
    class_data: ClassCreate,
    teacher_id: str = Depends(get_current_teacher_id),
    service: RosterService = Depends(get_roster_service)
):
    """Create a class starting on rotation A."""
    return service.create_class(class_data.name, teacher_id)


@router.get("/classes/{class_id}", response_model=ClassDetail)
async def get_class(
    class_id: str,
    teacher_id: str = Depends(get_current_teacher_id),
    service: RosterService = Depends(get_roster_service)
):
    """Get a class with its roster."""
    try:
        return ClassDetail.model_validate(service.get_class(class_id, teacher_id))
    except ColdCallError as e:
        raise to_http_error(e)


@router.delete("/classes/{class_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_class(
    class_id: str,
    teacher_id: str = Depends(get_current_teacher_id),
    service: RosterService = Depends(get_roster_service)
):
    """Delete a class and all of its students."""
    try:
        service.delete_class(class_id, teacher_id)
    except ColdCallError as e:
        raise to_http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/classes/{class_id}/students", response_model=List[StudentResponse])
async def list_students(
    class_id: str,
    teacher_id: str = Depends(get_current_teacher_id),
    service: RosterService = Depends(get_roster_service)
):
    """List every student in a class."""
    try:
        return service.list_students(class_id, teacher_id)
    except ColdCallError as e:
        raise to_http_error(e)


@router.post("/classes/{class_id}/students", response_model=StudentResponse,
             status_code=status.HTTP_201_CREATED)
async def create_student(
    class_id: str,
    student_data: StudentCreate,
    teacher_id: str = Depends(get_current_teacher_id),
    service: RosterService = Depends(get_roster_service)
):
    """Add a student to a class."""
    try:
        return service.create_student(class_id, student_data.name, teacher_id)
    except ColdCallError as e:
        raise to_http_error(e)


@router.get("/classes/{class_id}/students/available", response_model=List[StudentResponse])
async def available_students(
    class_id: str,
    teacher_id: str = Depends(get_current_teacher_id),
    service: RosterService = Depends(get_roster_service)
):
    """List the students that can currently be picked, without picking."""
    try:
        return service.available_students(class_id, teacher_id)
    except ColdCallError as e:
        raise to_http_error(e)


@router.post("/classes/{class_id}/pick", response_model=PickResponse)
async def pick_student(
    class_id: str,
    teacher_id: str = Depends(get_current_teacher_id),
    service: RosterService = Depends(get_roster_service)
):
    """Cold-call a random eligible student."""
    try:
        pick = service.pick_random(class_id, teacher_id)
    except ColdCallError as e:
        raise to_http_error(e)
    return PickResponse(
        student=StudentResponse.model_validate(pick.student),
        class_rotation=pick.class_rotation,
        class_flipped=pick.class_flipped,
    )


@router.get("/students/{student_id}", response_model=StudentResponse)
async def get_student(
    student_id: str,
    teacher_id: str = Depends(get_current_teacher_id),
    service: RosterService = Depends(get_roster_service)
):
    try:
        return service.get_student(student_id, teacher_id)
    except ColdCallError as e:
        raise to_http_error(e)


@router.patch("/students/{student_id}", response_model=StudentResponse)
async def update_student(
    student_id: str,
    student_data: StudentUpdate,
    teacher_id: str = Depends(get_current_teacher_id),
    service: RosterService = Depends(get_roster_service)
):
    """Rename, exclude/include or move a student to the other rotation."""
    try:
        return service.update_student(
            student_id,
            teacher_id,
            name=student_data.name,
            exclude=student_data.exclude,
            rotation=student_data.rotation,
        )
    except ColdCallError as e:
        raise to_http_error(e)


@router.delete("/students/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(
    student_id: str,
    teacher_id: str = Depends(get_current_teacher_id),
    service: RosterService = Depends(get_roster_service)
):
    try:
        service.delete_student(student_id, teacher_id)
    except ColdCallError as e:
        raise to_http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
