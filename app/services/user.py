"""User profile lookups."""

from sqlalchemy.orm import Session

from app.errors import app_assert
from app.models.user import User


class UserService:
    """Service for reading user profiles."""

    def get_user(self, db: Session, user_id: str) -> User:
        """Return the user or raise 404."""
        user = db.get(User, user_id)
        app_assert(user, 404, "User not found")
        return user


_user_service: UserService | None = None


def get_user_service() -> UserService:
    """Get singleton user service instance."""
    global _user_service
    if _user_service is None:
        _user_service = UserService()
    return _user_service
