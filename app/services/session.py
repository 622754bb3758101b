"""Listing and revoking a user's signed-in devices."""

from sqlalchemy.orm import Session

from app.errors import app_assert
from app.models.session import Session as LoginSession
from app.utils.dates import utcnow


class SessionService:
    """Read and revoke sessions on behalf of their owner."""

    def get_active_sessions(self, db: Session, user_id: str) -> list[LoginSession]:
        """Live sessions for a user, newest first."""
        sessions = (
            db.query(LoginSession)
            .filter(LoginSession.user_id == user_id, LoginSession.expires_at > utcnow())
            .order_by(LoginSession.created_at.desc())
            .all()
        )
        app_assert(sessions, 404, "Session not found")
        return sessions

    def revoke_session(self, db: Session, user_id: str, session_id: str) -> None:
        """Delete one of the user's sessions. Sessions of other users are reported as missing."""
        deleted = (
            db.query(LoginSession).filter(LoginSession.id == session_id, LoginSession.user_id == user_id).delete()
        )
        db.commit()
        app_assert(deleted, 404, "Session not found")


_session_service: SessionService | None = None


def get_session_service() -> SessionService:
    """Get singleton session service instance."""
    global _session_service
    if _session_service is None:
        _session_service = SessionService()
    return _session_service
