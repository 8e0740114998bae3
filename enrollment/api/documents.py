"""Student document uploads, one per document requirement slot."""

import base64
import binascii
import logging

from botocore.exceptions import ClientError
from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from enrollment.api.deps import get_engine, get_store, require_admin
from enrollment.schemas.definitions import DocumentRequirement
from enrollment.schemas.enrollment import Document, DocumentCreate
from enrollment.services.document_storage import DocumentStorage
from enrollment.services.enrollment_store import EnrollmentStore
from enrollment.services.form_engine import FormConfigurationEngine

router = APIRouter()
admin_router = APIRouter(prefix="/admin/documents", dependencies=[Depends(require_admin)])
logger = logging.getLogger(__name__)


class ChecklistItem(BaseModel):
    requirement: DocumentRequirement
    uploaded: bool


def get_document_storage() -> DocumentStorage:
    return DocumentStorage.get_instance()


def _require_student(store: EnrollmentStore, student_id: int):
    if store.students.get(student_id) is None:
        raise HTTPException(status_code=404, detail=f"Student {student_id} not found")


@router.post("/documents", response_model=Document, status_code=201)
async def upload_document(
    payload: DocumentCreate,
    engine: FormConfigurationEngine = Depends(get_engine),
    store: EnrollmentStore = Depends(get_store),
    storage: DocumentStorage = Depends(get_document_storage),
):
    if store.students.get(payload.student_id) is None:
        raise HTTPException(status_code=400, detail=f"Student {payload.student_id} does not exist")
    slots = {r.name for r in engine.active_requirements()}
    if payload.type not in slots:
        raise HTTPException(status_code=400, detail=f"'{payload.type}' is not an active document requirement")
    try:
        content = base64.b64decode(payload.file_data, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=400, detail="file_data is not valid base64")

    try:
        key = storage.upload_document(
            content, payload.student_id, payload.type, payload.file_name, payload.mime_type
        )
    except ClientError as e:
        logger.error(f"Upload failed for student {payload.student_id}: {e}")
        raise HTTPException(status_code=502, detail="Document storage unavailable")

    return store.create_document(
        student_id=payload.student_id,
        type=payload.type,
        file_name=payload.file_name,
        mime_type=payload.mime_type,
        size=len(content),
        storage_key=key,
    )


@router.get("/students/{student_id}/documents", response_model=list[Document])
async def list_student_documents(student_id: int, store: EnrollmentStore = Depends(get_store)):
    _require_student(store, student_id)
    return store.documents_for_student(student_id)


@router.get("/students/{student_id}/document-checklist", response_model=list[ChecklistItem])
async def document_checklist(
    student_id: int,
    engine: FormConfigurationEngine = Depends(get_engine),
    store: EnrollmentStore = Depends(get_store),
):
    """Active requirements in display order, marked with whether a file was uploaded."""
    _require_student(store, student_id)
    uploaded = {d.type for d in store.documents_for_student(student_id)}
    return [
        ChecklistItem(requirement=r, uploaded=r.name in uploaded)
        for r in engine.active_requirements()
    ]


@router.get("/documents/{document_id}/download")
async def document_download_url(
    document_id: int,
    store: EnrollmentStore = Depends(get_store),
    storage: DocumentStorage = Depends(get_document_storage),
):
    document = store.documents.get(document_id)
    if document is None:
        raise HTTPException(status_code=404, detail=f"Document {document_id} not found")
    return {"document_id": document_id, "url": storage.download_url(document.storage_key)}


@admin_router.delete("/{document_id}", status_code=204)
async def delete_document(
    document_id: int,
    store: EnrollmentStore = Depends(get_store),
    storage: DocumentStorage = Depends(get_document_storage),
):
    document = store.documents.get(document_id)
    if document is not None:
        # The record outlives a failed object removal so the admin can retry
        if not storage.delete_document(document.storage_key):
            raise HTTPException(status_code=502, detail="Document storage unavailable")
        store.documents.delete(document_id)
    return Response(status_code=204)
