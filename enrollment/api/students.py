from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from enrollment.api.deps import get_engine, get_store, require_admin
from enrollment.schemas.enrollment import Student, StudentCreate, StudentStatus, StudentUpdate
from enrollment.services.enrollment_store import EnrollmentStore
from enrollment.services.form_engine import FormConfigurationEngine
from enrollment.services.step_validation import blanked_required_fields, validate_submission

router = APIRouter(prefix="/students")
admin_router = APIRouter(prefix="/admin/students", dependencies=[Depends(require_admin)])


@router.post("", response_model=Student, status_code=201)
async def create_student(
    payload: StudentCreate,
    engine: FormConfigurationEngine = Depends(get_engine),
    store: EnrollmentStore = Depends(get_store),
):
    """Register a student after every section's required fields are filled."""
    incomplete = validate_submission(engine, payload.data)
    if incomplete is not None:
        raise HTTPException(
            status_code=400,
            detail=f"Missing required fields in {incomplete.section.value}: {', '.join(incomplete.missing)}",
        )
    return store.create_student(payload.data, payload.status)


@router.get("/{student_id}", response_model=Student)
async def get_student(student_id: int, store: EnrollmentStore = Depends(get_store)):
    student = store.students.get(student_id)
    if student is None:
        raise HTTPException(status_code=404, detail=f"Student {student_id} not found")
    return student


@router.put("/{student_id}", response_model=Student)
async def update_student(
    student_id: int,
    payload: StudentUpdate,
    engine: FormConfigurationEngine = Depends(get_engine),
    store: EnrollmentStore = Depends(get_store),
):
    blanked = blanked_required_fields(engine, payload.data or {})
    if blanked:
        raise HTTPException(status_code=400, detail=f"Required fields cannot be emptied: {', '.join(blanked)}")
    updated = store.update_student(student_id, payload.data, payload.status)
    if updated is None:
        raise HTTPException(status_code=404, detail=f"Student {student_id} not found")
    return updated


@admin_router.get("", response_model=list[Student])
async def list_students(
    status: Optional[StudentStatus] = None,
    store: EnrollmentStore = Depends(get_store),
):
    students = store.students.all()
    if status is not None:
        students = [s for s in students if s.status == status]
    return students
