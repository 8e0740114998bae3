"""Read views consumed by the student-facing form renderer.

Everything here is recomputed from the given definitions on each call; no
result is cached between calls.
"""

from typing import Iterable, TypeVar, Union

from enrollment.schemas.definitions import (
    WIZARD_STEPS,
    DocumentRequirement,
    FormField,
    FormStep,
    Section,
)

Definition = TypeVar("Definition", FormField, DocumentRequirement)


def display_key(definition: Union[FormField, DocumentRequirement]) -> tuple[int, int]:
    # Equal orders can appear transiently after concurrent admin edits
    return (definition.order, definition.id)


def ordered(definitions: Iterable[Definition]) -> list[Definition]:
    return sorted(definitions, key=display_key)


def active_fields_for_section(fields: Iterable[FormField], section) -> list[FormField]:
    section = Section(section)
    return ordered(f for f in fields if f.active and f.section == section)


def active_requirements(requirements: Iterable[DocumentRequirement]) -> list[DocumentRequirement]:
    return ordered(r for r in requirements if r.active)


def build_form_steps(
    fields: Iterable[FormField],
    requirements: Iterable[DocumentRequirement],
) -> list[FormStep]:
    """Return the four wizard steps, each holding its active definitions in display order."""
    fields = list(fields)
    steps = []
    for step in WIZARD_STEPS:
        if step == "documents":
            steps.append(FormStep(step=step, requirements=active_requirements(requirements)))
        else:
            steps.append(FormStep(step=step, fields=active_fields_for_section(fields, step)))
    return steps
