from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import ValidationError

from enrollment.api.deps import get_engine, require_admin
from enrollment.api.errors import bad_request
from enrollment.schemas.definitions import (
    DocumentRequirement,
    DocumentRequirementCreate,
    DocumentRequirementUpdate,
    RequirementMoveRequest,
    SequenceRequest,
)
from enrollment.services.form_engine import (
    DuplicateDefinitionName,
    FormConfigurationEngine,
    InvalidSequence,
)

router = APIRouter(prefix="/document-requirements")
admin_router = APIRouter(prefix="/admin/document-requirements", dependencies=[Depends(require_admin)])


@router.get("", response_model=list[DocumentRequirement])
async def list_document_requirements(
    active: Optional[bool] = None,
    engine: FormConfigurationEngine = Depends(get_engine),
):
    if active is True:
        return engine.active_requirements()
    requirements = engine.list_requirements()
    if active is False:
        requirements = [r for r in requirements if not r.active]
    return requirements


@router.get("/{requirement_id}", response_model=DocumentRequirement)
async def get_document_requirement(requirement_id: int, engine: FormConfigurationEngine = Depends(get_engine)):
    requirement = engine.get_requirement(requirement_id)
    if requirement is None:
        raise HTTPException(status_code=404, detail=f"Document requirement {requirement_id} not found")
    return requirement


@admin_router.post("", response_model=DocumentRequirement, status_code=201)
async def create_document_requirement(
    payload: DocumentRequirementCreate,
    engine: FormConfigurationEngine = Depends(get_engine),
):
    try:
        return engine.create_requirement(payload)
    except DuplicateDefinitionName as e:
        raise HTTPException(status_code=409, detail=str(e))


@admin_router.put("/sequence", response_model=list[DocumentRequirement])
async def set_document_requirement_sequence(
    request: SequenceRequest,
    engine: FormConfigurationEngine = Depends(get_engine),
):
    if len(set(request.ids)) != len(request.ids):
        raise HTTPException(status_code=400, detail="Duplicate ids in sequence")
    try:
        reordered = engine.set_requirement_sequence(request.ids)
    except InvalidSequence as e:
        raise HTTPException(status_code=400, detail=str(e))
    if reordered is None:
        raise HTTPException(status_code=404, detail="Sequence references unknown document requirements")
    return reordered


@admin_router.post("/move", response_model=list[DocumentRequirement])
async def move_document_requirement(
    request: RequirementMoveRequest,
    engine: FormConfigurationEngine = Depends(get_engine),
):
    try:
        reordered = engine.move_requirement(request.source_index, request.destination_index)
    except IndexError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InvalidSequence:
        reordered = None
    if reordered is None:
        raise HTTPException(status_code=409, detail="Document requirements changed during reorder, reload and retry")
    return reordered


@admin_router.put("/{requirement_id}", response_model=DocumentRequirement)
async def update_document_requirement(
    requirement_id: int,
    payload: DocumentRequirementUpdate,
    engine: FormConfigurationEngine = Depends(get_engine),
):
    try:
        updated = engine.update_requirement(requirement_id, payload)
    except ValidationError as e:
        raise bad_request(e)
    except DuplicateDefinitionName as e:
        raise HTTPException(status_code=409, detail=str(e))
    if updated is None:
        raise HTTPException(status_code=404, detail=f"Document requirement {requirement_id} not found")
    return updated


@admin_router.delete("/{requirement_id}", status_code=204)
async def delete_document_requirement(requirement_id: int, engine: FormConfigurationEngine = Depends(get_engine)):
    engine.delete_requirement(requirement_id)
    return Response(status_code=204)
