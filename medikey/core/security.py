from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union
from jose import jwt, JWTError
from passlib.context import CryptContext
from medikey.core.config import settings

# Export the algorithm constant for use in other modules
ALGORITHM = settings.ALGORITHM

ACCESS_TOKEN_TYPE = "access"
EMERGENCY_TOKEN_TYPE = "emergency"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class TokenError(Exception):
    """Raised when a token cannot be decoded or is of the wrong type"""


def _create_token(subject: Union[str, Any], token_type: str, expires_delta: timedelta) -> str:
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {"exp": expire, "sub": str(subject), "type": token_type}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def create_access_token(subject: Union[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _create_token(subject, ACCESS_TOKEN_TYPE, expires_delta)


def create_emergency_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a token that grants read access to one user's emergency card
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.EMERGENCY_ACCESS_EXPIRE_MINUTES)
    return _create_token(user_id, EMERGENCY_TOKEN_TYPE, expires_delta)


def decode_token(token: str, expected_type: str = ACCESS_TOKEN_TYPE) -> Dict[str, Any]:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        raise TokenError(str(e)) from e
    if payload.get("type") != expected_type:
        raise TokenError("Invalid token type")
    if not payload.get("sub"):
        raise TokenError("Token has no subject")
    return payload


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)
