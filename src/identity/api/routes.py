"""FastAPI endpoints for the Identity domain."""

from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from identity.api.schemas import (
    AuthResponse,
    LoginRequest,
    RegisterUserRequest,
    UpdateProfileRequest,
    UserDetailResponse,
    UserListResponse,
    UserMessageResponse,
    UserStatusRequest,
)
from identity.user.account import ChangeUserStatus
from identity.user.authentication import authenticate, token_for
from identity.user.profile import UpdateProfile
from identity.user.registration import RegisterUser
from identity.user.user import User
from shared.errors import NotFoundError
from shared.web import admin_claims, pagination, token_claims

router = APIRouter(prefix="/users", tags=["users"])


def _load_user(user_id: str) -> User:
    try:
        return current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError as exc:
        raise NotFoundError("User not found", user_id=user_id) from exc


@router.post("/register", status_code=201, response_model=AuthResponse)
async def register(body: RegisterUserRequest) -> AuthResponse:
    command = RegisterUser(
        phone=body.phone,
        password=body.password,
        full_name=body.full_name,
        email=body.email,
        address=body.address,
    )
    user = _load_user(current_domain.process(command, asynchronous=False))
    return AuthResponse(message="User created successfully", user=user.to_dict(), token=token_for(user))


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest) -> AuthResponse:
    user, token = authenticate(body.phone, body.password)
    return AuthResponse(message="Login successful", user=user.to_dict(), token=token)


@router.get("/profile", response_model=UserDetailResponse)
async def get_profile(claims: dict = Depends(token_claims)) -> UserDetailResponse:
    return UserDetailResponse(user=_load_user(claims["id"]).to_dict())


@router.put("/profile", response_model=UserMessageResponse)
async def update_profile(body: UpdateProfileRequest, claims: dict = Depends(token_claims)) -> UserMessageResponse:
    _load_user(claims["id"])
    command = UpdateProfile(
        user_id=claims["id"],
        full_name=body.full_name,
        email=body.email,
        address=body.address,
    )
    current_domain.process(command, asynchronous=False)
    return UserMessageResponse(message="Profile updated successfully", user=_load_user(claims["id"]).to_dict())


# --- Admin endpoints ---


@router.get("", response_model=UserListResponse)
async def list_users(
    status: str | None = None,
    search: str | None = None,
    page: int = 1,
    limit: int = 10,
    claims: dict = Depends(admin_claims),
) -> UserListResponse:
    page, limit = max(page, 1), max(limit, 1)
    is_active = None if status in (None, "", "2") else status == "1"
    users, total = current_domain.repository_for(User).customers(
        is_active=is_active, text=search, page=page, limit=limit
    )
    return UserListResponse(users=[user.to_dict() for user in users], pagination=pagination(page, limit, total))


@router.put("/{user_id}/status", response_model=UserMessageResponse)
async def change_status(
    user_id: str, body: UserStatusRequest, claims: dict = Depends(admin_claims)
) -> UserMessageResponse:
    _load_user(user_id)
    current_domain.process(ChangeUserStatus(user_id=user_id, status=body.status), asynchronous=False)
    return UserMessageResponse(message="User status updated successfully", user=_load_user(user_id).to_dict())
