from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request, status

from portal.schemas.auth import (
    SendOTPRequest,
    VerifyOTPRequest,
    LoginRequest,
    TokenResponse,
)
from portal.services.container import (
    auth_service,
    otp_service,
    sms_service,
    professional_service,
    config,
)
from portal.services.professional_service import public_view
from portal.utils.auth_dependencies import get_token_payload
from portal.utils.logger import get_logger
from portal.utils.limiter import limiter
from portal.utils.metrics import OTP_SENT, LOGINS

logger = get_logger(__name__)

# Phone OTP and password login, plus logout
router = APIRouter(tags=["Auth"])


def _token_response(professional: Dict[str, Any], message: str) -> TokenResponse:
    token = auth_service.generate_token(professional["id"], phone=professional.get("phone"))
    return TokenResponse(
        message=message,
        access_token=token,
        expires_in=auth_service.token_ttl_seconds,
        phone_verified=bool(professional.get("phone_verified")),
        completed=bool(professional.get("completed")),
        status=professional.get("status") or "pending",
        professional=public_view(professional),
    )


@router.post("/api/auth/send-otp")
@limiter.limit("5/minute")
async def send_otp(request: Request, body: SendOTPRequest):
    """
    Issue a one-time login code and deliver it by SMS.
    Rate limited to 5 requests per minute per IP.
    """
    phone = (body.phone or "").strip()
    if not phone:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Phone number is required"
        )

    try:
        professional = professional_service.get_by_phone(phone)
        if not professional:
            logger.warning(f"[API] OTP requested for unknown phone {phone}")
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Professional not found"
            )

        code = otp_service.issue(professional["id"])
        sent, error = await sms_service.send_otp(phone, code)
        OTP_SENT.labels(outcome="sent" if sent else "not_sent").inc()
        if not sent:
            logger.warning(f"[API] OTP for {professional['id']} not delivered: {error}")
            # Development echoes the code below, so delivery is optional there
            if not config.is_development:
                raise HTTPException(
                    status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                    detail="Could not deliver OTP, please try again later"
                )

        response = {"success": True, "message": "OTP sent successfully"}
        if config.is_development:
            response["otp"] = code
        return response

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[API] Error sending OTP: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send OTP"
        )


@router.post("/api/auth/verify-otp", response_model=TokenResponse)
@limiter.limit("10/minute")
async def verify_otp(request: Request, body: VerifyOTPRequest):
    """Exchange a valid one-time code for an access token."""
    phone = (body.phone or "").strip()
    code = (body.otp or "").strip()
    if not phone or not code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Phone number and OTP are required"
        )

    try:
        professional = professional_service.get_by_phone(phone)
        if not professional:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Professional not found"
            )

        if not otp_service.verify(professional["id"], code):
            LOGINS.labels(method="otp", outcome="failed").inc()
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid or expired OTP"
            )

        professional["phone_verified"] = True
        LOGINS.labels(method="otp", outcome="success").inc()
        logger.info(f"[API] ✅ OTP login successful: {professional['id']}")
        return _token_response(professional, "OTP verified successfully")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"[API] Error verifying OTP: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to verify OTP"
        )


@router.post("/api/auth/login", response_model=TokenResponse)
@limiter.limit("15/minute")
async def login(request: Request, body: LoginRequest):
    """
    Email and password login.
    Rate limited to 15 requests per minute per IP.
    """
    logger.info(f"[API] Login attempt: {body.email}")
    professional = auth_service.authenticate(body.email, body.password)
    if not professional:
        LOGINS.labels(method="password", outcome="failed").inc()
        logger.warning(f"[API] Login failed: {body.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    LOGINS.labels(method="password", outcome="success").inc()
    return _token_response(professional, "Login successful")


@router.post("/api/user/logout")
async def logout(payload: Dict[str, Any] = Depends(get_token_payload)):
    """Revoke the presented token."""
    try:
        auth_service.revoke_token(payload)
        return {"success": True, "message": "Logged out successfully"}
    except Exception as e:
        logger.error(f"[API] Logout failed: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to log out"
        )
