from typing import Any

from fastapi import APIRouter, BackgroundTasks, Body, Depends

from leadintake.core.deps import get_intake_service, get_intake_type
from leadintake.schemas.intake import SubmitResponse
from leadintake.services.intake_service import IntakeService
from leadintake.services.intake_types import COURIER, WAITLIST, IntakeDefinition

router = APIRouter(tags=["intake"])


@router.post("/intake/{intake_type}", response_model=SubmitResponse)
def submit(
    background_tasks: BackgroundTasks,
    payload: Any = Body(default=None),
    definition: IntakeDefinition = Depends(get_intake_type),
    service: IntakeService = Depends(get_intake_service),
):
    """Store a public form submission and return its id."""
    result = service.submit(definition, payload, background_tasks)
    return SubmitResponse(id=result["id"])


# Older site builds post straight to /waitlist and /courier
@router.post("/waitlist", response_model=SubmitResponse, include_in_schema=False)
def submit_waitlist(
    background_tasks: BackgroundTasks,
    payload: Any = Body(default=None),
    service: IntakeService = Depends(get_intake_service),
):
    return SubmitResponse(id=service.submit(WAITLIST, payload, background_tasks)["id"])


@router.post("/courier", response_model=SubmitResponse, include_in_schema=False)
def submit_courier(
    background_tasks: BackgroundTasks,
    payload: Any = Body(default=None),
    service: IntakeService = Depends(get_intake_service),
):
    return SubmitResponse(id=service.submit(COURIER, payload, background_tasks)["id"])
