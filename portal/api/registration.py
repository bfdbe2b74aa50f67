from typing import Any, Dict, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, status

from portal.schemas.registration import (
    RegisterRequest,
    AnswersRequest,
    SelectionRequest,
)
from portal.services.container import (
    auth_service,
    professional_service,
    question_service,
    district_service,
    selection_service,
    email_service,
)
from portal.utils.auth_dependencies import get_current_professional, get_optional_professional
from portal.utils.logger import get_logger
from portal.utils.limiter import limiter
from portal.utils.metrics import REGISTRATIONS
from portal.utils.validators import password_rule_error

logger = get_logger(__name__)

# Sign-up flow: registration form, screening questions and catalog pickers
router = APIRouter(tags=["Registration"])

PERSONAL_REQUIRED = ("first_name", "last_name", "email", "phone", "password")
BUSINESS_REQUIRED = (
    "address", "city", "district_id", "postcode", "position",
    "licence", "province", "business_name", "gst",
)

# URL segment -> (selection kind, body key)
REGISTRATION_KINDS = {
    "languages": ("languages", "languages"),
    "skills": ("skills", "skills"),
    "software": ("softwares", "softwares"),
}


@router.post("/api/healthcare/register")
@limiter.limit("10/minute")
async def register(request: Request, body: RegisterRequest, background_tasks: BackgroundTasks):
    """
    Register a healthcare professional. The account starts as pending review.
    """
    data = body.model_dump()

    if any(not data.get(name) for name in PERSONAL_REQUIRED):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required personal information"
        )
    if any(not data.get(name) for name in BUSINESS_REQUIRED):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required business information"
        )

    rule_error = password_rule_error(data["password"])
    if rule_error:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Invalid password", "errors": {"password": rule_error}}
        )

    try:
        if professional_service.is_taken("email", data["email"]) or professional_service.is_taken("phone", data["phone"]):
            logger.warning(f"[API] Registration rejected, duplicate email/phone: {data['email']}")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User with this email or phone already exists"
            )

        password_hash = auth_service.hash_password(data["password"])
        professional = professional_service.create(data, password_hash)
        REGISTRATIONS.inc()

        name = f"{professional['first_name']} {professional['last_name']}"
        background_tasks.add_task(email_service.send_registration_received, professional["email"], name)

        return {
            "success": True,
            "message": "Registration successful",
            "professional": professional,
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[API] Registration error: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )


@router.get("/api/districts")
async def list_districts():
    try:
        return {"success": True, "data": district_service.list_districts()}
    except Exception as e:
        logger.error(f"[API] Error listing districts: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch districts"
        )


@router.get("/api/healthcare/questions")
async def list_questions():
    try:
        return {"success": True, "data": question_service.list_questions()}
    except Exception as e:
        logger.error(f"[API] Error fetching questions: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch questions"
        )


@router.post("/api/healthcare/questions")
async def submit_answers(
    body: AnswersRequest,
    professional: Dict[str, Any] = Depends(get_current_professional),
):
    """Replace the caller's answers to the screening questions."""
    if body.answers is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid request data"
        )

    answers = []
    for item in body.answers:
        # bool is a subclass of int, so True must not pass as a question id
        valid = (
            isinstance(item, dict)
            and isinstance(item.get("id"), int)
            and not isinstance(item.get("id"), bool)
            and item["id"] > 0
            and isinstance(item.get("answer"), bool)
        )
        if not valid:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid answer format"
            )
        answers.append({"id": item["id"], "answer": item["answer"]})

    try:
        saved = question_service.replace_answers(professional["id"], answers)
        return {"success": True, "message": "Answers submitted successfully", "answers": saved}
    except Exception as e:
        logger.error(f"[API] Error submitting answers: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit answers"
        )


@router.get("/api/registration/{segment}")
async def registration_options(
    segment: str,
    professional: Optional[Dict[str, Any]] = Depends(get_optional_professional),
):
    """Catalog for a registration picker, marked with the caller's saved picks."""
    if segment not in REGISTRATION_KINDS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    kind, _ = REGISTRATION_KINDS[segment]

    try:
        selected = selection_service.get_selection(professional["id"], kind) if professional else []
        return {"success": True, "data": selection_service.catalog(kind, selected)}
    except Exception as e:
        logger.error(f"[API] Error fetching {kind}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch {kind}"
        )


@router.post("/api/registration/{segment}")
async def registration_select(
    segment: str,
    body: SelectionRequest,
    professional: Optional[Dict[str, Any]] = Depends(get_optional_professional),
):
    """Mark catalog entries as selected; saved for the caller when signed in."""
    if segment not in REGISTRATION_KINDS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    kind, key = REGISTRATION_KINDS[segment]

    titles = getattr(body, key)
    if titles is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{key.capitalize()} must be an array"
        )

    try:
        if professional:
            titles = selection_service.set_selection(professional["id"], kind, titles)
        return {
            "success": True,
            "message": f"{key.capitalize()} updated successfully",
            "data": selection_service.catalog(kind, titles),
        }
    except Exception as e:
        logger.error(f"[API] Error updating {kind}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update {kind}"
        )
