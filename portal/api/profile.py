from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from portal.schemas.profile import (
    ProfileUpdateRequest,
    PasswordChangeRequest,
    BankAccountRequest,
)
from portal.schemas.registration import SelectionRequest
from portal.services.container import (
    auth_service,
    professional_service,
    selection_service,
    bank_account_service,
)
from portal.services.selection_service import SELECTION_KINDS
from portal.utils.auth_dependencies import get_current_professional
from portal.utils.logger import get_logger
from portal.utils.validators import validate_password_change, validate_bank_account

logger = get_logger(__name__)

# Signed-in professional's own account
router = APIRouter(prefix="/api/user", tags=["Profile"])

IMAGE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}
MAX_PICTURE_BYTES = 5 * 1024 * 1024


@router.get("/profile")
async def get_profile(professional: Dict[str, Any] = Depends(get_current_professional)):
    try:
        selections = selection_service.get_all_selections(professional["id"])
        return {
            "success": True,
            "message": "Profile loaded successfully",
            "data": professional_service.build_profile(professional, selections),
        }
    except Exception as e:
        logger.error(f"[API] Error fetching profile: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error while fetching profile"
        )


@router.patch("/profile")
async def update_profile(
    body: ProfileUpdateRequest,
    professional: Dict[str, Any] = Depends(get_current_professional),
):
    """
    Partial profile update. Personal fields change only when non-empty;
    business fields change whenever they are sent.
    """
    updates = professional_service.profile_updates(body.model_dump(exclude_unset=True))

    if updates.get("email") and updates["email"] != professional.get("email"):
        if professional_service.is_taken("email", updates["email"], exclude_id=professional["id"]):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email is already taken")
    if updates.get("phone") and updates["phone"] != professional.get("phone"):
        if professional_service.is_taken("phone", updates["phone"], exclude_id=professional["id"]):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Phone number is already taken")

    try:
        updated = professional_service.update(professional["id"], updates) if updates else professional
        selections = selection_service.get_all_selections(professional["id"])
        logger.info(f"[API] Profile updated for {professional['id']}: {sorted(updates)}")
        return {
            "success": True,
            "message": "Profile updated successfully",
            "data": professional_service.build_profile(updated, selections),
        }
    except Exception as e:
        logger.error(f"[API] Error updating profile: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error while updating profile"
        )


@router.post("/profile/picture")
async def upload_picture(
    file: Optional[UploadFile] = File(None),
    professional: Dict[str, Any] = Depends(get_current_professional),
):
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    extension = IMAGE_EXTENSIONS.get(file.content_type or "")
    if not extension:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only JPEG, PNG, WebP or GIF images are allowed"
        )

    content = await file.read()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Uploaded file is empty")
    if len(content) > MAX_PICTURE_BYTES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Image must be 5MB or smaller"
        )

    try:
        url = professional_service.upload_picture(professional["id"], content, file.content_type, extension)
        return {"success": True, "message": "Profile picture updated successfully", "url": url}
    except Exception as e:
        logger.error(f"[API] Error uploading profile picture: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload profile picture"
        )


@router.patch("/password")
async def change_password(
    body: PasswordChangeRequest,
    professional: Dict[str, Any] = Depends(get_current_professional),
):
    errors = validate_password_change(body.old_password, body.password, body.password_confirmation)
    if errors:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Please fix the errors below", "errors": errors}
        )

    if not auth_service.change_password(professional, body.old_password, body.password):
        logger.warning(f"[API] Password change failed for {professional['id']}: wrong current password")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect"
        )

    logger.info(f"[API] ✅ Password changed successfully for {professional['id']}")
    return {"success": True, "message": "Password updated successfully"}


@router.delete("/account")
async def delete_account(professional: Dict[str, Any] = Depends(get_current_professional)):
    try:
        professional_service.delete(professional["id"])
        return {"success": True, "message": "Account deleted successfully"}
    except Exception as e:
        logger.error(f"[API] Error deleting account: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete account"
        )


@router.get("/settings/{kind}")
async def get_settings(kind: str, professional: Dict[str, Any] = Depends(get_current_professional)):
    if kind not in SELECTION_KINDS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    try:
        return {"success": True, "data": selection_service.get_selection(professional["id"], kind)}
    except Exception as e:
        logger.error(f"[API] Error fetching {kind}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch {kind}"
        )


@router.post("/settings/{kind}")
async def update_settings(
    kind: str,
    body: SelectionRequest,
    professional: Dict[str, Any] = Depends(get_current_professional),
):
    """Replace the caller's saved list; custom names are allowed."""
    if kind not in SELECTION_KINDS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")

    names = getattr(body, kind)
    if names is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{kind.capitalize()} must be an array"
        )

    try:
        saved = selection_service.set_selection(professional["id"], kind, names)
        return {
            "success": True,
            "message": f"{kind.capitalize()} updated successfully",
            "data": saved,
        }
    except Exception as e:
        logger.error(f"[API] Error updating {kind}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update {kind}"
        )


@router.get("/bank-account")
async def get_bank_account(professional: Dict[str, Any] = Depends(get_current_professional)):
    account = bank_account_service.get(professional["id"])
    if not account:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No bank account on file")
    return {"success": True, "data": account}


@router.post("/bank-account")
async def update_bank_account(
    body: BankAccountRequest,
    professional: Dict[str, Any] = Depends(get_current_professional),
):
    details = body.model_dump()
    errors = validate_bank_account(**details)
    if errors:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Please fix the errors below", "errors": errors}
        )

    try:
        saved = bank_account_service.save(professional["id"], details)
        return {"success": True, "message": "Bank account updated successfully", "data": saved}
    except Exception as e:
        logger.error(f"[API] Error saving bank account: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save bank account"
        )
