"""Authentication service: registration, login, token rotation and verification flows."""

import logging
from dataclasses import dataclass

import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.errors import AppError, app_assert, app_fail
from app.models.session import Session as LoginSession
from app.models.user import User
from app.models.verification_code import VerificationCode, VerificationCodeType
from app.services.email import get_email_service
from app.services.email_templates import get_password_reset_template, get_verify_email_template
from app.services.jwt import TokenKind, get_jwt_service
from app.utils.dates import ONE_DAY, one_hour_from_now, one_year_from_now, thirty_days_from_now, utcnow

logger = logging.getLogger("session_auth")

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_VERIFICATION_LINK = "Invalid or expired verification link."
INVALID_RESET_CODE = "Invalid or expired verification code"
PASSWORD_RESET_SENT = "If an account exists with that email, a reset link has been sent."

# bcrypt only looks at the first 72 bytes and newer releases reject longer input.
_BCRYPT_MAX_BYTES = 72

_dummy_hash: bytes | None = None


def _encode_password(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a plaintext password. Every password write goes through here."""
    salt = bcrypt.gensalt(rounds=get_settings().BCRYPT_ROUNDS)
    return bcrypt.hashpw(_encode_password(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_encode_password(password), password_hash.encode("utf-8"))
    except ValueError:
        return False


def _burn_password_check(password: str) -> None:
    """Spend the same bcrypt work as a real comparison for unknown accounts."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password("not-a-real-password").encode("utf-8")
    bcrypt.checkpw(_encode_password(password), _dummy_hash)


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass
class TokenPair:
    """Access and refresh tokens bound to one session."""

    access_token: str
    refresh_token: str


@dataclass
class RegisterResult:
    user: User
    tokens: TokenPair


class AuthService:
    """Handles the session lifecycle and one-time verification codes."""

    def _find_user_by_email(self, db: Session, email: str) -> User | None:
        return db.query(User).filter(User.email == normalize_email(email)).first()

    def _issue_tokens(self, user_id: str, session_id: str) -> TokenPair:
        jwt_service = get_jwt_service()
        return TokenPair(
            access_token=jwt_service.sign_access_token(user_id, session_id),
            refresh_token=jwt_service.sign_refresh_token(session_id),
        )

    def _start_session(self, db: Session, user: User, user_agent: str | None) -> TokenPair:
        session = LoginSession(user_id=user.id, user_agent=user_agent)
        db.add(session)
        db.commit()
        db.refresh(session)
        return self._issue_tokens(user.id, session.id)

    def _send(self, to: str, template: dict[str, str], purpose: str) -> None:
        result = get_email_service().send(to=to, **template)
        if result.error:
            logger.error("%s email failed to send: %s", purpose, result.error)

    # --- Session lifecycle ---

    def register(self, db: Session, email: str, password: str, user_agent: str | None = None) -> RegisterResult:
        """Create an account, email a verification link and sign the user in."""
        email = normalize_email(email)
        app_assert(self._find_user_by_email(db, email) is None, 409, "Email is already registered.")

        user = User(email=email, password_hash=hash_password(password), user_agent=user_agent)
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise AppError(409, "Email is already registered.") from None
        db.refresh(user)

        code = VerificationCode(
            user_id=user.id,
            type=VerificationCodeType.EMAIL_VERIFICATION.value,
            expires_at=one_year_from_now(),
        )
        db.add(code)
        db.commit()

        url = f"{get_settings().APP_ORIGIN}/auth/email/verify/{code.id}"
        self._send(user.email, get_verify_email_template(url), "Registration")

        tokens = self._start_session(db, user, user_agent)
        logger.info("Registered user %s", user.id)
        return RegisterResult(user=user, tokens=tokens)

    def login(self, db: Session, email: str, password: str, user_agent: str | None = None) -> TokenPair:
        """Check credentials and open a new session. Prior sessions stay valid."""
        user = self._find_user_by_email(db, email)
        if user is None:
            _burn_password_check(password)
            app_fail(401, INVALID_CREDENTIALS)
        app_assert(verify_password(password, user.password_hash), 401, INVALID_CREDENTIALS)

        if user_agent:
            user.user_agent = user_agent
        return self._start_session(db, user, user_agent)

    def logout(self, db: Session, access_token: str | None) -> bool:
        """Delete the session behind a valid access token.

        Returns whether a session row was removed. Invalid or missing tokens are
        not an error; the session row then simply runs out on its own.
        """
        payload = get_jwt_service().verify(TokenKind.ACCESS, access_token)
        if payload is None:
            return False
        deleted = db.query(LoginSession).filter(LoginSession.id == payload["sessionId"]).delete()
        db.commit()
        return deleted > 0

    def refresh(self, db: Session, refresh_token: str | None) -> TokenPair:
        """Rotate the token pair, sliding the session forward when it is close to expiry."""
        app_assert(refresh_token, 401, "Missing refresh token")
        payload = get_jwt_service().verify(TokenKind.REFRESH, refresh_token)
        app_assert(payload, 401, "Invalid or expired refresh token")

        now = utcnow()
        session = db.get(LoginSession, payload["sessionId"])
        app_assert(session is not None and session.expires_at > now, 401, "Session expired or not found")

        if session.expires_at - now < ONE_DAY:
            session.expires_at = thirty_days_from_now()
            db.commit()

        # New tokens every time so the refresh cookie's own expiry keeps pace with the session.
        return self._issue_tokens(session.user_id, session.id)

    # --- Verification codes ---

    def verify_email(self, db: Session, code: str) -> User:
        """Redeem an email-verification code."""
        record = (
            db.query(VerificationCode)
            .filter(
                VerificationCode.id == code,
                VerificationCode.type == VerificationCodeType.EMAIL_VERIFICATION.value,
            )
            .first()
        )
        app_assert(record, 404, INVALID_VERIFICATION_LINK)

        if record.expires_at < utcnow():
            db.delete(record)
            db.commit()
            app_fail(401, INVALID_VERIFICATION_LINK)

        user = db.get(User, record.user_id)
        app_assert(user, 404, "User not found")

        user.verified = True
        db.delete(record)
        db.commit()
        db.refresh(user)
        return user

    def send_password_reset(self, db: Session, email: str) -> str | None:
        """Issue a password-reset code and email it.

        Returns the reset URL when a code was issued, None otherwise. Callers
        must respond identically in both cases.
        """
        user = self._find_user_by_email(db, email)
        if user is None:
            return None

        db.query(VerificationCode).filter(
            VerificationCode.user_id == user.id,
            VerificationCode.type == VerificationCodeType.PASSWORD_RESET.value,
        ).delete()

        code = VerificationCode(
            user_id=user.id,
            type=VerificationCodeType.PASSWORD_RESET.value,
            expires_at=one_hour_from_now(),
        )
        db.add(code)
        db.commit()

        # Only the opaque code id travels in the link.
        url = f"{get_settings().APP_ORIGIN}/auth/password/reset?code={code.id}"
        self._send(user.email, get_password_reset_template(url), "Password reset")
        return url

    def reset_password(self, db: Session, code: str, new_password: str) -> User:
        """Redeem a reset code, replace the password and sign out every device."""
        record = (
            db.query(VerificationCode)
            .filter(
                VerificationCode.id == code,
                VerificationCode.type == VerificationCodeType.PASSWORD_RESET.value,
            )
            .first()
        )
        app_assert(record is not None and record.expires_at > utcnow(), 401, INVALID_RESET_CODE)

        user = db.get(User, record.user_id)
        app_assert(user, 404, "User not found")

        user.password_hash = hash_password(new_password)
        revoked = db.query(LoginSession).filter(LoginSession.user_id == user.id).delete()
        db.delete(record)
        db.commit()
        db.refresh(user)

        logger.info("Password reset for user %s, revoked %d session(s)", user.id, revoked)
        return user


_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Get singleton auth service instance."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service
