from typing import Generator, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from medikey import crud, models
from medikey.core import security
from medikey.core.config import settings
from medikey.db.session import SessionLocal

reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/auth/token"
)


def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def credentials_exception(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_user_from_token(db: Session, token: str) -> Optional[models.User]:
    """Resolve an access token to its user; None when the token is invalid"""
    try:
        payload = security.decode_token(token)
        user_id = int(payload["sub"])
    except (security.TokenError, ValueError):
        return None
    return crud.user.get(db, id=user_id)


def get_current_user(
    db: Session = Depends(get_db), token: str = Depends(reusable_oauth2)
) -> models.User:
    try:
        payload = security.decode_token(token)
        user_id = int(payload["sub"])
    except (security.TokenError, ValueError):
        raise credentials_exception()
    user = crud.user.get(db, id=user_id)
    if not user:
        raise credentials_exception()
    return user


def ensure_owner(obj, current_user: models.User, name: str):
    """404 when the row is missing, 403 when it belongs to someone else"""
    if obj is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{name} not found")
    if obj.user_id != current_user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
    return obj
