"""Account request and response schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    email: str = Field(..., description="Email address")
    password: str = Field(..., min_length=8, max_length=72, description="Password (min 8 characters)")
    display_name: str = Field(..., description="Display name")

    model_config = {
        "extra": "forbid",
        "json_schema_extra": {
            "examples": [{"email": "alice@example.com", "password": "securepass", "display_name": "Alice"}]
        },
    }


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str
    password: str


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    display_name: str
    email: Optional[str] = None
    role: str
    is_active: bool


class LoginResponse(BaseModel):
    token: str
    user: UserResponse
