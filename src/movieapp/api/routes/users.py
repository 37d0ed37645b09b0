"""Current-user profile endpoints."""

from fastapi import APIRouter, Depends

from movieapp.api.deps import get_current_user, get_identity_resolver
from movieapp.models.user import User
from movieapp.schemas import ProfileUpdate, UserResponse
from movieapp.services.identity import IdentityResolver

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user)) -> UserResponse:
    """The caller's profile, created on first authenticated request."""
    return UserResponse.model_validate(user)


@router.patch("/me", response_model=UserResponse)
async def update_me(
    payload: ProfileUpdate,
    user: User = Depends(get_current_user),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> UserResponse:
    updated = await resolver.update_profile(user.id, payload)
    return UserResponse.model_validate(updated)
