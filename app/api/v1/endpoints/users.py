"""User API: profile read and account deletion for the authenticated user."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_auth_service, get_current_user
from app.application.dtos.user import UserResult
from app.application.services.auth_service import AuthService
from app.schemas.user import UserProfileResponse

router = APIRouter()


@router.get("/profile", response_model=UserProfileResponse)
async def get_profile(
    current_user: Annotated[UserResult, Depends(get_current_user)],
):
    """Return the current user's profile. Requires Authorization."""
    return UserProfileResponse.model_validate(current_user)


@router.delete("/account", status_code=204)
async def delete_account(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> None:
    """Delete the current user and any pending reset token."""
    await auth_service.delete_account(current_user.id)
