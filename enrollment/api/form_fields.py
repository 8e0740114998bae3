"""Form field definitions: public listing and admin CRUD/reorder."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import ValidationError

from enrollment.api.deps import get_engine, require_admin
from enrollment.api.errors import bad_request
from enrollment.schemas.definitions import (
    FieldMoveRequest,
    FormField,
    FormFieldCreate,
    FormFieldUpdate,
    Section,
    SequenceRequest,
)
from enrollment.services.form_engine import (
    DuplicateDefinitionName,
    FormConfigurationEngine,
    InvalidSequence,
)

router = APIRouter(prefix="/form-fields")
admin_router = APIRouter(prefix="/admin/form-fields", dependencies=[Depends(require_admin)])


@router.get("", response_model=list[FormField])
async def list_form_fields(
    section: Optional[Section] = None,
    active: Optional[bool] = None,
    engine: FormConfigurationEngine = Depends(get_engine),
):
    """All definitions in ``(order, id)`` order, optionally narrowed."""
    if section is not None and active is True:
        return engine.active_fields_for_section(section)
    fields = engine.list_fields()
    if section is not None:
        fields = [f for f in fields if f.section == section]
    if active is not None:
        fields = [f for f in fields if f.active == active]
    return fields


@router.get("/{field_id}", response_model=FormField)
async def get_form_field(field_id: int, engine: FormConfigurationEngine = Depends(get_engine)):
    field = engine.get_field(field_id)
    if field is None:
        raise HTTPException(status_code=404, detail=f"Form field {field_id} not found")
    return field


@admin_router.post("", response_model=FormField, status_code=201)
async def create_form_field(payload: FormFieldCreate, engine: FormConfigurationEngine = Depends(get_engine)):
    try:
        return engine.create_field(payload)
    except DuplicateDefinitionName as e:
        raise HTTPException(status_code=409, detail=str(e))


@admin_router.put("/sequence", response_model=list[FormField])
async def set_form_field_sequence(request: SequenceRequest, engine: FormConfigurationEngine = Depends(get_engine)):
    """Renumber one whole section in the given order; nothing is written on failure."""
    if len(set(request.ids)) != len(request.ids):
        raise HTTPException(status_code=400, detail="Duplicate ids in sequence")
    try:
        reordered = engine.set_field_sequence(request.ids)
    except InvalidSequence as e:
        raise HTTPException(status_code=400, detail=str(e))
    if reordered is None:
        raise HTTPException(status_code=404, detail="Sequence references unknown form fields")
    return reordered


@admin_router.post("/move", response_model=list[FormField])
async def move_form_field(request: FieldMoveRequest, engine: FormConfigurationEngine = Depends(get_engine)):
    try:
        reordered = engine.move_field(request.section, request.source_index, request.destination_index)
    except IndexError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InvalidSequence:
        reordered = None
    if reordered is None:
        raise HTTPException(status_code=409, detail="Form fields changed during reorder, reload and retry")
    return reordered


@admin_router.put("/{field_id}", response_model=FormField)
async def update_form_field(
    field_id: int,
    payload: FormFieldUpdate,
    engine: FormConfigurationEngine = Depends(get_engine),
):
    try:
        updated = engine.update_field(field_id, payload)
    except ValidationError as e:
        raise bad_request(e)
    except DuplicateDefinitionName as e:
        raise HTTPException(status_code=409, detail=str(e))
    if updated is None:
        raise HTTPException(status_code=404, detail=f"Form field {field_id} not found")
    return updated


@admin_router.delete("/{field_id}", status_code=204)
async def delete_form_field(field_id: int, engine: FormConfigurationEngine = Depends(get_engine)):
    # Deleting an unknown id is treated as already done
    engine.delete_field(field_id)
    return Response(status_code=204)
