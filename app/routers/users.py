"""User profile API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import CurrentSession, get_current_session
from app.schemas.user import UserResponse
from app.services.user import get_user_service

router = APIRouter(prefix="/user", tags=["User"])


@router.get("", response_model=UserResponse)
def get_user(
    current: CurrentSession = Depends(get_current_session),
    db: Session = Depends(get_db),
) -> UserResponse:
    """Return the signed-in user's profile."""
    service = get_user_service()
    return UserResponse.model_validate(service.get_user(db, current.user_id))
