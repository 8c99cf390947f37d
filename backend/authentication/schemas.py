from pydantic import BaseModel, EmailStr, Field

ROLE_PATTERN = "^(admin|employee)$"


class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    role: str = Field("admin", pattern=ROLE_PATTERN)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str
    role: str
    email: EmailStr


class UserResponse(BaseModel):
    email: EmailStr
    role: str
    is_active: bool
