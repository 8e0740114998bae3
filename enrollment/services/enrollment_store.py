"""In-memory keyed tables for students, documents, chat messages, courses and users."""

import logging
import threading
from datetime import UTC, datetime
from typing import Callable, Generic, Optional, TypeVar

from pydantic import BaseModel

from enrollment.schemas.enrollment import (
    ChatMessage,
    Course,
    CourseModality,
    CourseShift,
    Document,
    Student,
    User,
)
from enrollment.services import defaults

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)


class _Table(Generic[R]):
    def __init__(self, record_type: type[R]):
        self._record_type = record_type
        self._rows: dict[int, R] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def insert(self, data: dict) -> R:
        with self._lock:
            record = self._record_type.model_validate({**data, "id": self._next_id})
            self._rows[record.id] = record
            self._next_id += 1
            return record

    def get(self, row_id: int) -> Optional[R]:
        return self._rows.get(row_id)

    def all(self) -> list[R]:
        return list(self._rows.values())

    def where(self, predicate: Callable[[R], bool]) -> list[R]:
        return [r for r in self.all() if predicate(r)]

    def update(self, row_id: int, changes: dict) -> Optional[R]:
        with self._lock:
            existing = self._rows.get(row_id)
            if existing is None:
                return None
            merged = {**existing.model_dump(), **changes, "id": row_id}
            updated = self._record_type.model_validate(merged)
            self._rows[row_id] = updated
            return updated

    def delete(self, row_id: int) -> bool:
        with self._lock:
            return self._rows.pop(row_id, None) is not None

    def __len__(self) -> int:
        return len(self._rows)


def _now() -> datetime:
    return datetime.now(UTC)


class EnrollmentStore:
    """Singleton process-lifetime store for everything that is not form configuration."""

    _instance: Optional["EnrollmentStore"] = None

    def __init__(self):
        self.users: _Table[User] = _Table(User)
        self.students: _Table[Student] = _Table(Student)
        self.documents: _Table[Document] = _Table(Document)
        self.chat_messages: _Table[ChatMessage] = _Table(ChatMessage)
        self.courses: _Table[Course] = _Table(Course)
        self.course_shifts: _Table[CourseShift] = _Table(CourseShift)
        self.course_modalities: _Table[CourseModality] = _Table(CourseModality)
        self.revoked_tokens: set[str] = set()

    @classmethod
    def get_instance(cls) -> "EnrollmentStore":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    # Users

    def get_user_by_username(self, username: str) -> Optional[User]:
        matches = self.users.where(lambda u: u.username == username)
        return matches[0] if matches else None

    def create_user(self, username: str, password_hash: str, is_admin: bool = False) -> User:
        return self.users.insert(
            {"username": username, "password_hash": password_hash, "is_admin": is_admin}
        )

    def revoke_token(self, token: str, is_live: Callable[[str], bool]) -> None:
        """Revoke *token*, dropping revocations whose token no longer decodes anyway."""
        expired = {t for t in self.revoked_tokens if not is_live(t)}
        self.revoked_tokens -= expired
        self.revoked_tokens.add(token)
        if expired:
            logger.debug(f"Pruned {len(expired)} expired revoked tokens")

    # Students

    def create_student(self, data: dict, status: str = "pending") -> Student:
        return self.students.insert(
            {"data": data, "status": status, "registration_date": _now()}
        )

    def update_student(self, student_id: int, data: Optional[dict], status: Optional[str]) -> Optional[Student]:
        existing = self.students.get(student_id)
        if existing is None:
            return None
        changes = {}
        if data is not None:
            changes["data"] = {**existing.data, **data}
        if status is not None:
            changes["status"] = status
        return self.students.update(student_id, changes)

    # Documents

    def create_document(self, **fields) -> Document:
        return self.documents.insert({**fields, "upload_date": _now()})

    def documents_for_student(self, student_id: int) -> list[Document]:
        return self.documents.where(lambda d: d.student_id == student_id)

    # Chat messages

    def create_chat_message(self, student_id: Optional[int], sender: str, message: str) -> ChatMessage:
        return self.chat_messages.insert(
            {"student_id": student_id, "sender": sender, "message": message, "timestamp": _now()}
        )

    def chat_messages_for_student(self, student_id: int) -> list[ChatMessage]:
        messages = self.chat_messages.where(lambda m: m.student_id == student_id)
        return sorted(messages, key=lambda m: (m.timestamp, m.id))

    # Courses

    def create_course(self, data: dict) -> Course:
        return self.courses.insert({**data, "created_at": _now()})

    def delete_course(self, course_id: int) -> bool:
        deleted = self.courses.delete(course_id)
        for shift in self.shifts_for_course(course_id):
            self.course_shifts.delete(shift.id)
        for modality in self.modalities_for_course(course_id):
            self.course_modalities.delete(modality.id)
        return deleted

    def shifts_for_course(self, course_id: int) -> list[CourseShift]:
        return self.course_shifts.where(lambda s: s.course_id == course_id)

    def modalities_for_course(self, course_id: int) -> list[CourseModality]:
        return self.course_modalities.where(lambda m: m.course_id == course_id)

    def seed_default_courses(self) -> int:
        if len(self.courses):
            return 0
        for data in defaults.DEFAULT_COURSES:
            course = self.create_course(data)
            for shift in defaults.DEFAULT_COURSE_SHIFTS:
                self.course_shifts.insert({**shift, "course_id": course.id, "active": True})
            for modality in defaults.DEFAULT_COURSE_MODALITIES:
                self.course_modalities.insert({**modality, "course_id": course.id, "active": True})
        logger.info(f"Seeded {len(defaults.DEFAULT_COURSES)} default courses")
        return len(defaults.DEFAULT_COURSES)
