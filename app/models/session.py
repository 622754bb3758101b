"""Login session model."""

from sqlalchemy import Column, DateTime, ForeignKey, String

from app.database import Base
from app.models.user import new_id
from app.utils.dates import thirty_days_from_now, utcnow


class Session(Base):
    """One signed-in device. Rows past ``expires_at`` are treated as absent."""

    __tablename__ = "session"

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(32), ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    user_agent = Column(String(512), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    expires_at = Column(DateTime, nullable=False, default=thirty_days_from_now, index=True)
