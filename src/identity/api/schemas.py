"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

PHONE = r"^[0-9]{10}$"

# --- Request Schemas ---


class RegisterUserRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "fullname": "Nguyễn Văn An",
                    "phone": "0901234567",
                    "password": "secret123",
                    "email": "an@example.com",
                    "address": "12 Lê Lợi, Quận 1",
                }
            ]
        },
    )

    full_name: str = Field(..., alias="fullname", min_length=3, max_length=100)
    phone: str = Field(..., pattern=PHONE)
    password: str = Field(..., min_length=6, max_length=128)
    email: str | None = Field(None, max_length=254)
    address: str | None = None


class LoginRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"phone": "0901234567", "password": "secret123"}]}}

    phone: str = Field(..., pattern=PHONE)
    password: str = Field(..., min_length=6, max_length=128)


class UpdateProfileRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: str | None = Field(None, alias="fullname", min_length=3, max_length=100)
    email: str | None = Field(None, max_length=254)
    address: str | None = None


class UserStatusRequest(BaseModel):
    status: int


# --- Response Schemas ---


class UserResponse(BaseModel):
    id: str
    fullname: str
    phone: str
    email: str
    address: str
    userType: str
    status: int
    createdAt: str | None = None


class AuthResponse(BaseModel):
    message: str
    user: UserResponse
    token: str


class UserDetailResponse(BaseModel):
    user: UserResponse


class UserMessageResponse(BaseModel):
    message: str
    user: UserResponse


class PaginationResponse(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class UserListResponse(BaseModel):
    users: list[UserResponse]
    pagination: PaginationResponse
