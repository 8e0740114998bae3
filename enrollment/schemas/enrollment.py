from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

StudentStatus = Literal["pending", "complete", "approved", "rejected"]


# ----- Users ---------------------------------------------------------------

class User(BaseModel):
    id: int
    username: str
    password_hash: str
    is_admin: bool = False


class UserPublic(BaseModel):
    id: int
    username: str
    is_admin: bool


class Credentials(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    token: str
    user: UserPublic


# ----- Students ------------------------------------------------------------

class StudentCreate(BaseModel):
    data: dict[str, Any]
    status: StudentStatus = "pending"


class StudentUpdate(BaseModel):
    data: Optional[dict[str, Any]] = None
    status: Optional[StudentStatus] = None


class Student(BaseModel):
    id: int
    # Keyed by form field ``name``; no link to the definition ids
    data: dict[str, Any]
    status: StudentStatus = "pending"
    registration_date: datetime


# ----- Documents -----------------------------------------------------------

class DocumentCreate(BaseModel):
    student_id: int
    type: str = Field(min_length=1)
    file_name: str = Field(min_length=1)
    file_data: str = Field(min_length=1, description="Base64-encoded file content")
    mime_type: str = Field(min_length=1)


class Document(BaseModel):
    id: int
    student_id: int
    type: str
    file_name: str
    mime_type: str
    size: int
    storage_key: str
    upload_date: datetime


# ----- Chat messages -------------------------------------------------------

class ChatMessageCreate(BaseModel):
    student_id: Optional[int] = None
    sender: Literal["student", "system"]
    message: str = Field(min_length=1)


class ChatMessage(BaseModel):
    id: int
    student_id: Optional[int] = None
    sender: Literal["student", "system"]
    message: str
    timestamp: datetime


# ----- Courses -------------------------------------------------------------

class CourseCreate(BaseModel):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1)
    description: Optional[str] = None
    duration: int = Field(gt=0, description="Duration in months")
    coordinator: Optional[str] = None
    price: float = Field(ge=0)
    active: bool = True


class CourseUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    code: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    duration: Optional[int] = Field(default=None, gt=0)
    coordinator: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    active: Optional[bool] = None


class Course(CourseCreate):
    id: int
    created_at: datetime


class CourseShiftCreate(BaseModel):
    course_id: int
    name: str = Field(min_length=1)
    start_time: str = Field(pattern=r"^\d{2}:\d{2}$")
    end_time: str = Field(pattern=r"^\d{2}:\d{2}$")
    weekdays: str = "seg,ter,qua,qui,sex"
    active: bool = True


class CourseShiftUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    start_time: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    end_time: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    weekdays: Optional[str] = None
    active: Optional[bool] = None


class CourseShift(CourseShiftCreate):
    id: int


class CourseModalityCreate(BaseModel):
    course_id: int
    name: str = Field(min_length=1)
    description: Optional[str] = None
    active: bool = True


class CourseModalityUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    active: Optional[bool] = None


class CourseModality(CourseModalityCreate):
    id: int
