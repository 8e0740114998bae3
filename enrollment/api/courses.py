from fastapi import APIRouter, Depends, HTTPException, Response

from enrollment.api.deps import get_store, require_admin
from enrollment.schemas.enrollment import (
    Course,
    CourseCreate,
    CourseModality,
    CourseModalityCreate,
    CourseModalityUpdate,
    CourseShift,
    CourseShiftCreate,
    CourseShiftUpdate,
    CourseUpdate,
)
from enrollment.services.enrollment_store import EnrollmentStore

router = APIRouter(prefix="/courses")
admin_router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])


def _get_course(store: EnrollmentStore, course_id: int) -> Course:
    course = store.courses.get(course_id)
    if course is None:
        raise HTTPException(status_code=404, detail=f"Course {course_id} not found")
    return course


@router.get("", response_model=list[Course])
async def list_courses(store: EnrollmentStore = Depends(get_store)):
    return store.courses.all()


@router.get("/{course_id}", response_model=Course)
async def get_course(course_id: int, store: EnrollmentStore = Depends(get_store)):
    return _get_course(store, course_id)


@router.get("/{course_id}/shifts", response_model=list[CourseShift])
async def list_course_shifts(course_id: int, store: EnrollmentStore = Depends(get_store)):
    return store.shifts_for_course(course_id)


@router.get("/{course_id}/modalities", response_model=list[CourseModality])
async def list_course_modalities(course_id: int, store: EnrollmentStore = Depends(get_store)):
    return store.modalities_for_course(course_id)


# ----- Courses -----

@admin_router.post("/courses", response_model=Course, status_code=201)
async def create_course(payload: CourseCreate, store: EnrollmentStore = Depends(get_store)):
    return store.create_course(payload.model_dump())


@admin_router.put("/courses/{course_id}", response_model=Course)
async def update_course(course_id: int, payload: CourseUpdate, store: EnrollmentStore = Depends(get_store)):
    updated = store.courses.update(course_id, payload.model_dump(exclude_unset=True, exclude_none=True))
    if updated is None:
        raise HTTPException(status_code=404, detail=f"Course {course_id} not found")
    return updated


@admin_router.delete("/courses/{course_id}", status_code=204)
async def delete_course(course_id: int, store: EnrollmentStore = Depends(get_store)):
    """Delete a course together with its shifts and modalities."""
    store.delete_course(course_id)
    return Response(status_code=204)


# ----- Shifts -----

@admin_router.post("/course-shifts", response_model=CourseShift, status_code=201)
async def create_course_shift(payload: CourseShiftCreate, store: EnrollmentStore = Depends(get_store)):
    _get_course(store, payload.course_id)
    return store.course_shifts.insert(payload.model_dump())


@admin_router.put("/course-shifts/{shift_id}", response_model=CourseShift)
async def update_course_shift(shift_id: int, payload: CourseShiftUpdate, store: EnrollmentStore = Depends(get_store)):
    updated = store.course_shifts.update(shift_id, payload.model_dump(exclude_unset=True, exclude_none=True))
    if updated is None:
        raise HTTPException(status_code=404, detail=f"Shift {shift_id} not found")
    return updated


@admin_router.delete("/course-shifts/{shift_id}", status_code=204)
async def delete_course_shift(shift_id: int, store: EnrollmentStore = Depends(get_store)):
    store.course_shifts.delete(shift_id)
    return Response(status_code=204)


# ----- Modalities -----

@admin_router.post("/course-modalities", response_model=CourseModality, status_code=201)
async def create_course_modality(payload: CourseModalityCreate, store: EnrollmentStore = Depends(get_store)):
    _get_course(store, payload.course_id)
    return store.course_modalities.insert(payload.model_dump())


@admin_router.put("/course-modalities/{modality_id}", response_model=CourseModality)
async def update_course_modality(
    modality_id: int,
    payload: CourseModalityUpdate,
    store: EnrollmentStore = Depends(get_store),
):
    updated = store.course_modalities.update(modality_id, payload.model_dump(exclude_unset=True, exclude_none=True))
    if updated is None:
        raise HTTPException(status_code=404, detail=f"Modality {modality_id} not found")
    return updated


@admin_router.delete("/course-modalities/{modality_id}", status_code=204)
async def delete_course_modality(modality_id: int, store: EnrollmentStore = Depends(get_store)):
    store.course_modalities.delete(modality_id)
    return Response(status_code=204)
