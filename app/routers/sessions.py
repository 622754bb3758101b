"""Session management API endpoints."""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import CurrentSession, clear_auth_cookies, get_current_session
from app.schemas.auth import MessageResponse
from app.schemas.session import SessionResponse
from app.services.session import get_session_service

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get("", response_model=list[SessionResponse])
def list_sessions(
    current: CurrentSession = Depends(get_current_session),
    db: Session = Depends(get_db),
) -> list[SessionResponse]:
    """List live sessions of the caller, flagging the one making this request."""
    service = get_session_service()
    sessions = service.get_active_sessions(db, current.user_id)
    return [
        SessionResponse.model_validate(s).model_copy(update={"current_session": s.id == current.session_id})
        for s in sessions
    ]


@router.delete("/{session_id}", response_model=MessageResponse)
def delete_session(
    session_id: str,
    response: Response,
    current: CurrentSession = Depends(get_current_session),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Sign out one device. Ending the current session also clears its cookies."""
    service = get_session_service()
    service.revoke_session(db, current.user_id, session_id)

    if session_id == current.session_id:
        clear_auth_cookies(response)
        return MessageResponse(message="Current session ended and cookies cleared.")
    return MessageResponse(message="Device logged out successfully.")
