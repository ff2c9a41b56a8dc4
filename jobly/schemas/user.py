"""
Pydantic schemas for users, registration and tokens.
"""

from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional

from jobly.schemas.base import CamelModel


class UserRegisterRequest(CamelModel):
    """Request schema for self-registration."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(
        ...,
        min_length=5,
        max_length=72,  # bcrypt limit
    )
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr

    class Config:
        extra = "forbid"


class UserCreateRequest(UserRegisterRequest):
    """Admin-only creation; may create other admins."""
    is_admin: bool = False


class UserUpdateRequest(CamelModel):
    """Partial update of a user's own profile."""
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    first_name: Optional[str] = Field(None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, min_length=1, max_length=30)
    email: Optional[EmailStr] = None

    class Config:
        extra = "forbid"


class UserLoginRequest(BaseModel):
    """Request schema for getting a token."""
    username: str
    password: str


class TokenResponse(BaseModel):
    """JWT token response."""
    access_token: str
    token_type: str = "bearer"


class UserResponse(CamelModel):
    """User profile response (no sensitive data)."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserDetailResponse(UserResponse):
    """User profile plus the ids of jobs applied to."""
    jobs: List[int] = []


class UserCreatedResponse(BaseModel):
    """New user and a token for them."""
    user: UserResponse
    access_token: str
    token_type: str = "bearer"


class ApplicationResponse(BaseModel):
    applied: int
