from fastapi import APIRouter, Depends
from typing import Optional

from storefront.services.auth import get_current_user
from storefront.models.user import User
from storefront.schemas.user import UserResponse

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/me", response_model=Optional[UserResponse])
async def me(user: Optional[User] = Depends(get_current_user)):
    return user
