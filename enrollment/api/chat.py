from fastapi import APIRouter, Depends, HTTPException

from enrollment.api.deps import get_store
from enrollment.schemas.enrollment import ChatMessage, ChatMessageCreate
from enrollment.services.enrollment_store import EnrollmentStore

router = APIRouter()


@router.post("/chat-messages", response_model=ChatMessage, status_code=201)
async def create_chat_message(payload: ChatMessageCreate, store: EnrollmentStore = Depends(get_store)):
    # Onboarding chat starts before a student record exists
    if payload.student_id is not None and store.students.get(payload.student_id) is None:
        raise HTTPException(status_code=400, detail=f"Student {payload.student_id} does not exist")
    return store.create_chat_message(payload.student_id, payload.sender, payload.message)


@router.get("/students/{student_id}/chat-messages", response_model=list[ChatMessage])
async def list_chat_messages(student_id: int, store: EnrollmentStore = Depends(get_store)):
    return store.chat_messages_for_student(student_id)
