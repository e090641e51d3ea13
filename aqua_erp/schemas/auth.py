from pydantic import BaseModel, EmailStr, Field
from aqua_erp.models.user import UserRole
from aqua_erp.schemas.user import UserResponse


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=4)
    role: UserRole


class LoginResponse(BaseModel):
    message: str = "Login successful"
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class Logout(BaseModel):
    message: str
