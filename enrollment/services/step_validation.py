"""Step-advancement checks for an in-progress registration.

The engine only answers "which fields must be filled for this section"; the
checks below apply that answer to a concrete submission.
"""

from typing import Any, Iterable, Mapping, Optional

from enrollment.schemas.definitions import FormField, Section, StepValidationResult


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def missing_required_fields(fields: Iterable[FormField], submission: Mapping[str, Any]) -> list[str]:
    """Names of required fields, in display order, whose value is empty."""
    return [f.name for f in fields if f.required and is_blank(submission.get(f.name))]


def validate_step(engine, section, submission: Mapping[str, Any]) -> StepValidationResult:
    section = Section(section)
    missing = missing_required_fields(engine.active_fields_for_section(section), submission)
    return StepValidationResult(section=section, valid=not missing, missing=missing)


def validate_submission(engine, submission: Mapping[str, Any]) -> Optional[StepValidationResult]:
    """Return the first incomplete section in wizard order, or None when all pass."""
    for section in Section:
        result = validate_step(engine, section, submission)
        if not result.valid:
            return result
    return None


def blanked_required_fields(engine, changes: Mapping[str, Any]) -> list[str]:
    """Names of active required fields that *changes* would empty."""
    return [
        f.name
        for section in Section
        for f in engine.active_fields_for_section(section)
        if f.required and f.name in changes and is_blank(changes[f.name])
    ]
