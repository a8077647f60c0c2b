"""
Pydantic schemas for user registration and login.
"""

from pydantic import EmailStr, Field

from app.schemas.base import CamelModel, StrictCamelModel


class UserRegisterRequest(StrictCamelModel):
    """Request schema for user registration."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(
        ...,
        min_length=5,
        max_length=72,  # bcrypt limit
        description="Password must be 5-72 characters"
    )
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr


class UserLoginRequest(StrictCamelModel):
    """Request schema for requesting a token."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)


class TokenResponse(CamelModel):
    """JWT token response."""
    token: str
