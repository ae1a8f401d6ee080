from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from medikey import crud, models, schemas
from medikey.api import deps

router = APIRouter()


@router.get("/profile", response_model=schemas.User)
def read_profile(current_user: models.User = Depends(deps.get_current_user)) -> Any:
    return current_user


@router.patch("/profile", response_model=schemas.User)
def update_profile(
    *,
    db: Session = Depends(deps.get_db),
    profile_in: schemas.UserUpdate,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    """
    Update profile fields of the current user. Username and password are not changed here.
    """
    if profile_in.email is not None and profile_in.email != current_user.email:
        existing = crud.user.get_by_email(db, email=profile_in.email)
        if existing and existing.id != current_user.id:
            raise HTTPException(status_code=400, detail="Email already registered")
    return crud.user.update(db, db_obj=current_user, obj_in=profile_in)


@router.patch("/emergency-info", response_model=schemas.User)
def update_emergency_info(
    *,
    db: Session = Depends(deps.get_db),
    info_in: schemas.EmergencyInfoUpdate,
    current_user: models.User = Depends(deps.get_current_user),
) -> Any:
    return crud.user.update(db, db_obj=current_user, obj_in=info_in)
