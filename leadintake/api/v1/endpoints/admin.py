from typing import Optional

from fastapi import APIRouter, Depends, Query

from leadintake.core.deps import get_admin_key, get_intake_type, get_moderation_service
from leadintake.schemas.intake import DeletedResponse, ItemsResponse, UpdatedResponse
from leadintake.services.intake_types import IntakeDefinition
from leadintake.services.moderation_service import ModerationService


def require_admin_key(
    admin_key: Optional[str] = Depends(get_admin_key),
    service: ModerationService = Depends(get_moderation_service),
) -> Optional[str]:
    """Reject the request before any path parsing or store access."""
    service.authorize(admin_key)
    return admin_key


router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin_key)])


@router.get("/{intake_type}", response_model=ItemsResponse)
def list_entries(
    definition: IntakeDefinition = Depends(get_intake_type),
    limit: Optional[int] = Query(default=None),
    admin_key: Optional[str] = Depends(get_admin_key),
    service: ModerationService = Depends(get_moderation_service),
):
    """Newest submissions first (admin only)"""
    rows = service.list_entries(admin_key, definition, limit)
    items = [definition.out_schema.model_validate(row).model_dump(mode="json") for row in rows]
    return ItemsResponse(items=items)


@router.patch("/{intake_type}/{record_id}/accept", response_model=UpdatedResponse)
def accept_entry(
    record_id: int,
    definition: IntakeDefinition = Depends(get_intake_type),
    admin_key: Optional[str] = Depends(get_admin_key),
    service: ModerationService = Depends(get_moderation_service),
):
    return UpdatedResponse(**service.accept(admin_key, definition, record_id))


@router.patch("/{intake_type}/{record_id}/reject", response_model=UpdatedResponse)
def reject_entry(
    record_id: int,
    definition: IntakeDefinition = Depends(get_intake_type),
    admin_key: Optional[str] = Depends(get_admin_key),
    service: ModerationService = Depends(get_moderation_service),
):
    return UpdatedResponse(**service.reject(admin_key, definition, record_id))


@router.delete("/{intake_type}/{record_id}", response_model=DeletedResponse)
def delete_entry(
    record_id: int,
    definition: IntakeDefinition = Depends(get_intake_type),
    admin_key: Optional[str] = Depends(get_admin_key),
    service: ModerationService = Depends(get_moderation_service),
):
    """Permanently delete a submission. The UI asks for confirmation first."""
    return DeletedResponse(**service.remove(admin_key, definition, record_id))
