"""Single-use verification code model."""

from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, String

from app.database import Base
from app.models.user import new_id
from app.utils.dates import utcnow


class VerificationCodeType(str, Enum):
    EMAIL_VERIFICATION = "email_verification"
    PASSWORD_RESET = "password_reset"


class VerificationCode(Base):
    """Out-of-band code for email confirmation or password reset."""

    __tablename__ = "verification_code"

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(32), ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(32), nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
