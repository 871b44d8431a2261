"""
User-related endpoints.
"""

from fastapi import APIRouter, Depends

from modules.users.models import User
from ..middleware.access import get_current_user

router = APIRouter()


@router.get("/me", response_model=User)
async def get_current_user_profile(
    user: User = Depends(get_current_user),
) -> User:
    """
    Get the current user's local record.

    Requires authentication. The record is created on the first call.
    """
    return user
