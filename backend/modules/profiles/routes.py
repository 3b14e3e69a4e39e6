"""
Profile API endpoints.

All endpoints act on the signed-in user.
"""

from fastapi import APIRouter, Depends, status

from api.middleware.auth import get_current_user
from api.dependencies import get_profile_service
from modules.accounts.models import MessageResponse
from shared.models import AuthenticatedUser

from .interfaces import IProfileService
from .models import ProfileDoneResponse, UpdateProfileRequest, UserData

router = APIRouter()


@router.post("/get-user-data", response_model=UserData)
async def get_user_data(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProfileService = Depends(get_profile_service),
) -> UserData:
    """Get the caller's name and email."""
    return await service.get_user_data(user.id)


@router.post("/update-user-profile", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def update_user_profile(
    request: UpdateProfileRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Update the profile fields present in the body."""
    await service.update_profile(user.id, request)
    return MessageResponse(message="Profile updated")


@router.post("/is-profile-done", response_model=ProfileDoneResponse)
async def is_profile_done(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IProfileService = Depends(get_profile_service),
) -> ProfileDoneResponse:
    """Whether the caller's profile is complete."""
    return ProfileDoneResponse(profile_done=await service.is_profile_done(user.id))
