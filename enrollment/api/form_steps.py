"""Renderer-facing view of the four-step enrollment wizard."""

from fastapi import APIRouter, Depends

from enrollment.api.deps import get_engine
from enrollment.schemas.definitions import (
    FormStep,
    Section,
    StepValidationRequest,
    StepValidationResult,
)
from enrollment.services.form_engine import FormConfigurationEngine
from enrollment.services.step_validation import validate_step

router = APIRouter(prefix="/form-steps")


@router.get("", response_model=list[FormStep])
async def get_form_steps(engine: FormConfigurationEngine = Depends(get_engine)):
    return engine.form_steps()


@router.post("/{section}/validate", response_model=StepValidationResult)
async def validate_form_step(
    section: Section,
    request: StepValidationRequest,
    engine: FormConfigurationEngine = Depends(get_engine),
):
    """Check whether the student may advance past *section*."""
    return validate_step(engine, section, request.values)
