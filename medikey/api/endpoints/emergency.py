from typing import Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from medikey import crud, models, schemas
from medikey.api import deps
from medikey.core import security
from medikey.utils.timezone import calculate_age

router = APIRouter()


def emergency_card(user: models.User) -> schemas.EmergencyCard:
    return schemas.EmergencyCard(
        full_name=user.full_name,
        age=calculate_age(user.date_of_birth),
        date_of_birth=user.date_of_birth,
        blood_type=user.blood_type,
        allergies=user.allergies,
        chronic_conditions=user.chronic_conditions,
        emergency_contact_name=user.emergency_contact_name,
        emergency_contact_phone=user.emergency_contact_phone,
    )


@router.get("/qr-code", response_model=schemas.EmergencyQRCode)
def read_qr_code(
    request: Request,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    """
    Time-limited link to the public emergency card of the current user.
    """
    token = security.create_emergency_token(current_user.id)
    payload = security.decode_token(token, expected_type=security.EMERGENCY_TOKEN_TYPE)
    url = str(request.url_for("read_emergency_access", token=token))
    return {
        "url": url,
        "token": token,
        "user_id": current_user.id,
        "expires_at": payload["exp"],
    }


@router.get("/info", response_model=schemas.EmergencyCard)
def read_emergency_info(current_user: models.User = Depends(deps.get_current_user)) -> Any:
    return emergency_card(current_user)


@router.get("/access/{token}", response_model=schemas.EmergencyCard)
def read_emergency_access(
    *,
    db: Session = Depends(deps.get_db),
    token: str,
) -> Any:
    """
    Public endpoint opened from the QR code; no login required.
    """
    try:
        payload = security.decode_token(token, expected_type=security.EMERGENCY_TOKEN_TYPE)
        user_id = int(payload["sub"])
    except (security.TokenError, ValueError):
        raise deps.credentials_exception("Invalid or expired emergency link")
    user = crud.user.get(db, id=user_id)
    if not user:
        raise deps.credentials_exception("Invalid or expired emergency link")
    return emergency_card(user)
