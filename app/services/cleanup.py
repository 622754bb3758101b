"""Removal of expired sessions and verification codes."""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.models.session import Session as LoginSession
from app.models.verification_code import VerificationCode
from app.utils.dates import utcnow

logger = logging.getLogger("session_auth")


@dataclass
class PurgeResult:
    sessions: int
    verification_codes: int


def purge_expired_records(db: Session) -> PurgeResult:
    """Delete every session and verification code whose expiry has passed.

    Reads already ignore expired rows; this only keeps the tables small.
    """
    now = utcnow()
    sessions = db.query(LoginSession).filter(LoginSession.expires_at <= now).delete()
    codes = db.query(VerificationCode).filter(VerificationCode.expires_at <= now).delete()
    db.commit()
    if sessions or codes:
        logger.info("Purged %d expired session(s) and %d expired verification code(s)", sessions, codes)
    return PurgeResult(sessions=sessions, verification_codes=codes)
