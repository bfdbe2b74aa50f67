from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from portal.schemas.shifts import AcceptOfferRequest, PharmacistOfferRequest
from portal.services.container import shift_service, selection_service
from portal.services.shift_service import MY_SHIFT_FILTERS
from portal.utils.auth_dependencies import get_current_professional
from portal.utils.datetime_utils import parse_date_filter
from portal.utils.exceptions import PortalError, NotFoundError, ConflictError
from portal.utils.logger import get_logger

logger = get_logger(__name__)

# Shift browsing and booking for the signed-in professional
router = APIRouter(prefix="/api/shifts", tags=["Shifts"])


def _http_error(error: PortalError) -> HTTPException:
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=error.message)


@router.get("")
async def shift_feed(
    price: Optional[str] = Query(None, pattern="^(high|low)$"),
    date: Optional[str] = Query(None, description="DD-MM-YYYY"),
    from_: Optional[str] = Query(None, alias="from", description="DD-MM-YYYY"),
    paginate: Optional[int] = Query(None, ge=1, le=100),
    professional: Dict[str, Any] = Depends(get_current_professional),
):
    """Open shifts grouped by date."""
    on_date = parse_date_filter(date, "date")
    from_date = parse_date_filter(from_, "from")
    try:
        grouped = shift_service.feed(
            professional["id"],
            price=price,
            on_date=on_date,
            from_date=from_date,
            paginate=paginate,
        )
        return {"success": True, "data": grouped}
    except Exception as e:
        logger.error(f"[API] Error fetching shifts: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch shifts"
        )


@router.get("/my-shifts")
async def my_shifts(
    status_filter: str = Query("all", alias="status"),
    professional: Dict[str, Any] = Depends(get_current_professional),
):
    if status_filter not in MY_SHIFT_FILTERS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid status, expected one of: {', '.join(MY_SHIFT_FILTERS)}"
        )
    try:
        shifts = shift_service.my_shifts(professional["id"], status_filter)
        return {"success": True, "data": shifts, "count": len(shifts)}
    except Exception as e:
        logger.error(f"[API] Error fetching shifts by status: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch shifts"
        )


@router.post("/accept-pharmacy-offer")
async def accept_pharmacy_offer(
    body: AcceptOfferRequest,
    professional: Dict[str, Any] = Depends(get_current_professional),
):
    """Apply for a shift on the pharmacy's posted terms."""
    if not body.order_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="order_id is required")
    try:
        offer = shift_service.send_offer(professional["id"], body.order_id, "accept")
        return {"success": True, "message": offer["applied_msg"], "data": offer}
    except (NotFoundError, ConflictError) as e:
        raise _http_error(e)
    except Exception as e:
        logger.error(f"[API] Error accepting pharmacy offer: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to accept offer"
        )


@router.post("/send-pharmacist-offer")
async def send_pharmacist_offer(
    body: PharmacistOfferRequest,
    professional: Dict[str, Any] = Depends(get_current_professional),
):
    """Apply for a shift with the professional's own terms."""
    if not body.order_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="order_id is required")
    terms = body.model_dump(exclude={"order_id"}, exclude_none=True)
    try:
        offer = shift_service.send_offer(professional["id"], body.order_id, "counter", terms)
        return {"success": True, "message": offer["applied_msg"], "data": offer}
    except (NotFoundError, ConflictError) as e:
        raise _http_error(e)
    except Exception as e:
        logger.error(f"[API] Error sending pharmacist offer: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send offer"
        )


@router.get("/{shift_id}")
async def shift_details(
    shift_id: int,
    professional: Dict[str, Any] = Depends(get_current_professional),
):
    try:
        selections = selection_service.get_all_selections(professional["id"])
        details = shift_service.get_details(shift_id, professional["id"], selections)
    except Exception as e:
        logger.error(f"[API] Error fetching shift {shift_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch shift"
        )
    if not details:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shift not found")
    return {"success": True, "data": details}


@router.post("/{shift_id}/accept")
async def accept_assigned_shift(
    shift_id: int,
    professional: Dict[str, Any] = Depends(get_current_professional),
):
    """Confirm a shift the back-office assigned to the caller."""
    try:
        assignment = shift_service.accept_assigned(professional["id"], shift_id)
        return {"success": True, "message": "Shift accepted", "data": assignment}
    except (NotFoundError, ConflictError) as e:
        raise _http_error(e)
    except Exception as e:
        logger.error(f"[API] Error accepting shift {shift_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to accept shift"
        )


@router.post("/{shift_id}/cancel")
async def cancel_shift(
    shift_id: int,
    professional: Dict[str, Any] = Depends(get_current_professional),
):
    try:
        assignment = shift_service.cancel(professional["id"], shift_id)
        return {"success": True, "message": "Shift cancelled", "data": assignment}
    except (NotFoundError, ConflictError) as e:
        raise _http_error(e)
    except Exception as e:
        logger.error(f"[API] Error cancelling shift {shift_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to cancel shift"
        )
