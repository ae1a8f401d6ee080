from pydantic import BaseModel
from medikey.schemas.base import ApiModel
from medikey.schemas.user import UserSummary


class LoginRequest(ApiModel):
    username: str
    password: str


class RegisterResponse(ApiModel):
    message: str
    id: int


class LoginResponse(ApiModel):
    message: str
    user: UserSummary
    access_token: str
    token_type: str = "bearer"
    expires_in: int


# OAuth2 token endpoint keeps the snake_case names of the OAuth2 password flow
class Token(BaseModel):
    access_token: str
    token_type: str
