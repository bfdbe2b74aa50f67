from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status

from portal.schemas.shifts import ShiftCreateRequest, AssignShiftRequest
from portal.services.container import professional_service, shift_service, email_service
from portal.services.professional_service import public_view
from portal.utils.api_key import require_api_key
from portal.utils.exceptions import NotFoundError, ConflictError
from portal.utils.logger import get_logger

logger = get_logger(__name__)

# Back-office operations, authenticated with the X-API-Key header
router = APIRouter(prefix="/api/admin", tags=["Admin"], dependencies=[Depends(require_api_key)])


@router.post("/professionals/{professional_id}/approve")
async def approve_professional(professional_id: str, background_tasks: BackgroundTasks):
    """Activate a reviewed professional and notify them by email."""
    professional = professional_service.get_by_id(professional_id)
    if not professional:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Professional not found")

    try:
        updated = professional_service.update(professional_id, {"status": "active", "is_verified": True})
    except Exception as e:
        logger.error(f"[API] Error approving professional {professional_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to approve professional"
        )

    name = f"{updated.get('first_name', '')} {updated.get('last_name', '')}".strip()
    background_tasks.add_task(email_service.send_account_approved, updated["email"], name)
    logger.info(f"[API] ✅ Professional approved: {professional_id}")
    return {"success": True, "message": "Professional approved", "data": public_view(updated)}


@router.post("/shifts", status_code=status.HTTP_201_CREATED)
async def create_shift(body: ShiftCreateRequest):
    try:
        shift = shift_service.create_shift(body.model_dump(by_alias=True))
        return {"success": True, "data": shift}
    except Exception as e:
        logger.error(f"[API] Error creating shift: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create shift"
        )


@router.post("/shifts/{shift_id}/assign")
async def assign_shift(shift_id: int, body: AssignShiftRequest):
    if not professional_service.get_by_id(body.professional_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Professional not found")
    try:
        assignment = shift_service.assign(shift_id, body.professional_id)
        return {"success": True, "message": "Shift assigned", "data": assignment}
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except Exception as e:
        logger.error(f"[API] Error assigning shift {shift_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to assign shift"
        )
