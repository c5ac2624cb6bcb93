from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from src.medinote_mock.api.deps import get_user_service
from src.medinote_mock.security import get_current_user
from src.medinote_mock.services.users.service import UserService


router = APIRouter(
    prefix="/api/users",
    tags=["users"],
    dependencies=[Depends(get_current_user)],
)


# The path segment is what the frontend was built against; keep it verbatim.
@router.get("/asd3fd2faec")
async def find_user_id_by_email(
    email: Optional[str] = None,
    users: UserService = Depends(get_user_service),
) -> dict:
    """Resolve a user id from an email address."""
    user = users.find_by_email(email)
    return {"id": user.id}
