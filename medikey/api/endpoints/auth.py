import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from medikey import crud, models, schemas
from medikey.api import deps
from medikey.core import security
from medikey.core.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=schemas.RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    *,
    db: Session = Depends(deps.get_db),
    user_in: schemas.UserCreate,
) -> Any:
    """
    Create new user.
    """
    if crud.user.get_by_username(db, username=user_in.username):
        raise HTTPException(status_code=400, detail="Username already exists")
    if crud.user.get_by_email(db, email=user_in.email):
        raise HTTPException(status_code=400, detail="Email already registered")
    user = crud.user.create(db, obj_in=user_in)
    logger.info(f"Registered user {user.id} ({user.username})")
    return {"message": "User created successfully", "id": user.id}


@router.post("/login", response_model=schemas.LoginResponse)
def login(
    *,
    db: Session = Depends(deps.get_db),
    credentials: schemas.LoginRequest,
) -> Any:
    """
    Check username and password, return an access token for future requests.
    """
    user = crud.user.authenticate(db, username=credentials.username, password=credentials.password)
    if not user:
        raise deps.credentials_exception("Invalid credentials")
    return {
        "message": "Login successful",
        "user": {"id": user.id, "username": user.username},
        "access_token": security.create_access_token(user.id),
        "token_type": "bearer",
        "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    }


@router.post("/token", response_model=schemas.Token)
def login_access_token(
    db: Session = Depends(deps.get_db),
    form_data: OAuth2PasswordRequestForm = Depends(),
) -> Any:
    """
    OAuth2 compatible token login, used by the interactive API docs.
    """
    user = crud.user.authenticate(db, username=form_data.username, password=form_data.password)
    if not user:
        raise deps.credentials_exception("Invalid credentials")
    return {"access_token": security.create_access_token(user.id), "token_type": "bearer"}


@router.post("/logout", response_model=schemas.Message)
def logout() -> Any:
    # Tokens are stateless; the client discards its copy
    return {"message": "Logout successful"}


@router.get("/me", response_model=schemas.User)
def read_me(current_user: models.User = Depends(deps.get_current_user)) -> Any:
    return current_user
