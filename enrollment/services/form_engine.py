"""Form Configuration Engine.

Owns the form field and document requirement collections. Routers talk to the
engine only; the engine talks to whatever repository backend it was built
with. Missing ids come back as ``None``/``False``; invalid merged records raise
pydantic's ``ValidationError``; name clashes raise ``DuplicateDefinitionName``; a
sequence that is not one whole section (or the whole requirement list)
raises ``InvalidSequence``.
"""

import logging
from typing import Callable, Optional

from enrollment.config import settings
from enrollment.schemas.definitions import (
    DocumentRequirement,
    DocumentRequirementCreate,
    DocumentRequirementUpdate,
    FormField,
    FormFieldCreate,
    FormFieldUpdate,
    FormStep,
    Section,
)
from enrollment.services import defaults
from enrollment.services.broadcaster import Broadcaster
from enrollment.services.definition_repository import (
    DefinitionRepository,
    InMemoryDefinitionRepository,
)
from enrollment.services.form_view import (
    active_fields_for_section,
    active_requirements,
    build_form_steps,
    ordered,
)
from enrollment.services.reorder import move

logger = logging.getLogger(__name__)


class DuplicateDefinitionName(ValueError):
    def __init__(self, collection: str, name: str):
        self.collection = collection
        self.name = name
        super().__init__(f"A {collection} named '{name}' already exists")


class InvalidSequence(ValueError):
    """A sequence that is not exactly one complete reorder group."""


class _DefinitionCollection:
    """CRUD + reorder for one collection, with name uniqueness and change events."""

    def __init__(
        self,
        label: str,
        event: str,
        repository: DefinitionRepository,
        broadcaster: Broadcaster,
        same_scope: Callable = lambda a, b: True,
        scope_label: str = "the collection",
    ):
        self.label = label
        self.event = event
        self.repository = repository
        self.broadcaster = broadcaster
        self._same_scope = same_scope
        self.scope_label = scope_label

    def _notify(self, action: str, ids):
        self.broadcaster.trigger_configuration(self.event, action, ids)

    def _assert_name_free(self, name: str, exclude_id: Optional[int] = None):
        for existing in self.repository.list():
            if existing.name == name and existing.id != exclude_id:
                raise DuplicateDefinitionName(self.label, name)

    def _next_order(self, data: dict) -> int:
        orders = [d.order for d in self.repository.list() if self._same_scope(d, data)]
        return max(orders, default=0) + 1

    def create(self, payload) -> object:
        data = payload.model_dump(mode="json")
        self._assert_name_free(data["name"])
        if data.get("order") is None:
            data["order"] = self._next_order(data)
        created = self.repository.create(data)
        logger.info(f"Created {self.label} {created.id} ({created.name})")
        self._notify("created", [created.id])
        return created

    def update(self, definition_id: int, payload) -> Optional[object]:
        existing = self.repository.get(definition_id)
        if existing is None:
            return None
        changes = payload.changes()
        # Reject an invalid merged record before anything is written
        type(existing).model_validate({**existing.model_dump(mode="json"), **changes})
        if "name" in changes:
            self._assert_name_free(changes["name"], exclude_id=definition_id)
        updated = self.repository.update(definition_id, changes)
        if updated is not None:
            logger.info(f"Updated {self.label} {definition_id}: {sorted(changes)}")
            self._notify("updated", [definition_id])
        return updated

    def delete(self, definition_id: int) -> bool:
        deleted = self.repository.delete(definition_id)
        if deleted:
            logger.info(f"Deleted {self.label} {definition_id}")
            self._notify("deleted", [definition_id])
        else:
            logger.info(f"Delete of unknown {self.label} {definition_id} ignored")
        return deleted

    def _check_sequence(self, ids: list[int], records: dict) -> None:
        if not ids:
            raise InvalidSequence(f"A {self.label} sequence needs at least one id")
        anchor = records[ids[0]].model_dump(mode="json")
        group = {d.id for d in records.values() if self._same_scope(d, anchor)}
        if len(ids) != len(set(ids)) or set(ids) != group:
            raise InvalidSequence(
                f"A {self.label} sequence must list every {self.label} of "
                f"{self.scope_label} exactly once"
            )

    def set_sequence(self, ids: list[int]) -> Optional[list]:
        """Renumber one whole group as dense ``1..N``.

        Returns None when an id is unknown; raises ``InvalidSequence`` when the
        ids are known but do not cover exactly one group.
        """
        records = {d.id: d for d in self.repository.list()}
        if any(i not in records for i in ids):
            return None
        self._check_sequence(ids, records)
        reordered = self.repository.set_sequence(ids)
        if reordered is not None:
            self._notify("reordered", ids)
        return reordered

    def move(self, members: list, source_index: int, destination_index: int) -> Optional[list]:
        """Move within *members* (already in admin display order) and persist dense orders."""
        sequence = move(members, source_index, destination_index)
        return self.set_sequence([d.id for d in sequence])


class FormConfigurationEngine:
    _instance: Optional["FormConfigurationEngine"] = None

    def __init__(
        self,
        fields: DefinitionRepository[FormField],
        requirements: DefinitionRepository[DocumentRequirement],
        broadcaster: Optional[Broadcaster] = None,
    ):
        broadcaster = broadcaster or Broadcaster.get_instance()
        self.fields = _DefinitionCollection(
            "form field",
            "FormFieldsChanged",
            fields,
            broadcaster,
            same_scope=lambda d, data: d.section == Section(data["section"]),
            scope_label="one section",
        )
        self.requirements = _DefinitionCollection(
            "document requirement",
            "DocumentRequirementsChanged",
            requirements,
            broadcaster,
        )

    @classmethod
    def get_instance(cls) -> "FormConfigurationEngine":
        if cls._instance is None:
            cls._instance = cls.from_settings()
        return cls._instance

    @classmethod
    def in_memory(cls, broadcaster: Optional[Broadcaster] = None) -> "FormConfigurationEngine":
        return cls(
            InMemoryDefinitionRepository(FormField, defaults.DEFAULT_FORM_FIELDS),
            InMemoryDefinitionRepository(DocumentRequirement, defaults.DEFAULT_DOCUMENT_REQUIREMENTS),
            broadcaster,
        )

    @classmethod
    def from_settings(cls) -> "FormConfigurationEngine":
        if settings.storage_backend == "memory":
            return cls.in_memory()
        if settings.storage_backend == "database":
            from enrollment.database import SessionLocal, init_db
            from enrollment.models.document_requirement import DocumentRequirementRow
            from enrollment.models.form_field import FormFieldRow
            from enrollment.services.sql_definition_repository import SqlAlchemyDefinitionRepository

            init_db()
            return cls(
                SqlAlchemyDefinitionRepository(
                    SessionLocal, FormFieldRow, FormField, defaults.DEFAULT_FORM_FIELDS
                ),
                SqlAlchemyDefinitionRepository(
                    SessionLocal,
                    DocumentRequirementRow,
                    DocumentRequirement,
                    defaults.DEFAULT_DOCUMENT_REQUIREMENTS,
                ),
            )
        raise ValueError(f"Unknown storage backend: {settings.storage_backend}")

    # -- form fields --------------------------------------------------------

    def list_fields(self) -> list[FormField]:
        return ordered(self.fields.repository.list())

    def get_field(self, field_id: int) -> Optional[FormField]:
        return self.fields.repository.get(field_id)

    def create_field(self, payload: FormFieldCreate) -> FormField:
        return self.fields.create(payload)

    def update_field(self, field_id: int, payload: FormFieldUpdate) -> Optional[FormField]:
        return self.fields.update(field_id, payload)

    def delete_field(self, field_id: int) -> bool:
        return self.fields.delete(field_id)

    def set_field_sequence(self, ids: list[int]) -> Optional[list[FormField]]:
        return self.fields.set_sequence(ids)

    def section_fields(self, section) -> list[FormField]:
        """All fields of a section, inactive included, in admin display order."""
        section = Section(section)
        return ordered(f for f in self.fields.repository.list() if f.section == section)

    def move_field(self, section, source_index: int, destination_index: int) -> Optional[list[FormField]]:
        return self.fields.move(self.section_fields(section), source_index, destination_index)

    def active_fields_for_section(self, section) -> list[FormField]:
        return active_fields_for_section(self.fields.repository.list(), section)

    # -- document requirements ---------------------------------------------

    def list_requirements(self) -> list[DocumentRequirement]:
        return ordered(self.requirements.repository.list())

    def get_requirement(self, requirement_id: int) -> Optional[DocumentRequirement]:
        return self.requirements.repository.get(requirement_id)

    def create_requirement(self, payload: DocumentRequirementCreate) -> DocumentRequirement:
        return self.requirements.create(payload)

    def update_requirement(
        self, requirement_id: int, payload: DocumentRequirementUpdate
    ) -> Optional[DocumentRequirement]:
        return self.requirements.update(requirement_id, payload)

    def delete_requirement(self, requirement_id: int) -> bool:
        return self.requirements.delete(requirement_id)

    def set_requirement_sequence(self, ids: list[int]) -> Optional[list[DocumentRequirement]]:
        return self.requirements.set_sequence(ids)

    def move_requirement(self, source_index: int, destination_index: int) -> Optional[list[DocumentRequirement]]:
        return self.requirements.move(self.list_requirements(), source_index, destination_index)

    def active_requirements(self) -> list[DocumentRequirement]:
        return active_requirements(self.requirements.repository.list())

    # -- renderer view and bootstrap ----------------------------------------

    def form_steps(self) -> list[FormStep]:
        return build_form_steps(self.fields.repository.list(), self.requirements.repository.list())

    def is_empty(self) -> bool:
        return self.fields.repository.is_empty() or self.requirements.repository.is_empty()

    def seed_defaults(self) -> dict:
        """Populate whichever collection is empty; populated ones are left alone."""
        return {
            "form_fields": self.fields.repository.seed_defaults(),
            "document_requirements": self.requirements.repository.seed_defaults(),
        }
