"""Definition records for the admin-configurable enrollment form.

A form field definition describes one input of the student wizard; a document
requirement describes one slot of the upload checklist. Both carry an
``order`` and an ``active`` flag that drive what students see.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Section(str, Enum):
    PERSONAL = "personal"
    CONTACT = "contact"
    COURSE = "course"


# Wizard steps in display order; "documents" comes from document requirements.
WIZARD_STEPS = ("personal", "contact", "course", "documents")


class FieldType(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    TEL = "tel"
    DATE = "date"
    SELECT = "select"
    RADIO = "radio"
    TEXTAREA = "textarea"


OPTION_FIELD_TYPES = frozenset({FieldType.SELECT, FieldType.RADIO})


class FieldOption(BaseModel):
    value: str = Field(min_length=1)
    label: str = Field(min_length=1)


def _check_options(field_type: FieldType, options: Optional[list[FieldOption]]) -> None:
    if field_type in OPTION_FIELD_TYPES:
        if not options:
            raise ValueError(f"'{field_type.value}' fields need at least one option")
        values = [o.value for o in options]
        if len(values) != len(set(values)):
            raise ValueError("option values must be unique")
    elif options:
        raise ValueError(f"'{field_type.value}' fields do not take options")


class FormFieldCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    label: str = Field(min_length=1, max_length=255)
    type: FieldType
    required: bool = False
    section: Section
    order: Optional[int] = None
    active: bool = True
    options: Optional[list[FieldOption]] = None

    @model_validator(mode="after")
    def _options_match_type(self):
        _check_options(self.type, self.options)
        return self


class FormFieldUpdate(BaseModel):
    """Partial update; unknown keys (including ``id``) are ignored."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    label: Optional[str] = Field(default=None, min_length=1, max_length=255)
    type: Optional[FieldType] = None
    required: Optional[bool] = None
    section: Optional[Section] = None
    order: Optional[int] = None
    active: Optional[bool] = None
    options: Optional[list[FieldOption]] = None

    def changes(self) -> dict:
        # ``options: null`` is meaningful (clearing options when switching to text)
        data = self.model_dump(exclude_unset=True, mode="json")
        return {k: v for k, v in data.items() if v is not None or k == "options"}


class FormField(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    label: str
    type: FieldType
    required: bool = False
    section: Section
    order: int
    active: bool = True
    options: Optional[list[FieldOption]] = None

    @model_validator(mode="after")
    def _options_match_type(self):
        _check_options(self.type, self.options)
        return self


class DocumentRequirementCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    required: bool = False
    active: bool = True
    order: Optional[int] = None


class DocumentRequirementUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    required: Optional[bool] = None
    active: Optional[bool] = None
    order: Optional[int] = None

    def changes(self) -> dict:
        data = self.model_dump(exclude_unset=True, mode="json")
        return {k: v for k, v in data.items() if v is not None or k == "description"}


class DocumentRequirement(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    required: bool = False
    active: bool = True
    order: int


class SequenceRequest(BaseModel):
    ids: list[int] = Field(min_length=1)


class FieldMoveRequest(BaseModel):
    section: Section
    source_index: int = Field(ge=0)
    destination_index: int = Field(ge=0)


class RequirementMoveRequest(BaseModel):
    source_index: int = Field(ge=0)
    destination_index: int = Field(ge=0)


class FormStep(BaseModel):
    step: str
    fields: list[FormField] = []
    requirements: list[DocumentRequirement] = []


class StepValidationRequest(BaseModel):
    values: dict = {}


class StepValidationResult(BaseModel):
    section: Section
    valid: bool
    missing: list[str]
