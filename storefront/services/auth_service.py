# storefront/services/auth_service.py
import secrets
from datetime import datetime, timedelta, timezone

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.data.models.user_session import UserSessionModel
from storefront.domain.schemas import UserCreate
from storefront.repos.user_repo import UserRepo
from storefront.utils.settings import SESSION_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


class AuthService:
    """
    Users and cookie-backed sessions.
    The cookie only carries the session id; the row in user_sessions
    decides whether it is still valid.
    """

    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, payload: UserCreate) -> UserModel:
        if self.repo.get_user_by_username(payload.username):
            raise ValueError("Username already exists")

        if payload.email and self.repo.get_user_by_email(payload.email):
            raise ValueError("Email already registered")

        user = UserModel(
            username=payload.username,
            password=hash_password(payload.password),
            email=payload.email,
            full_name=payload.full_name,
            is_admin=False,
        )
        try:
            created = self.repo.create_user(user)
        except IntegrityError:
            # rownolegla rejestracja z tym samym username/email wygrala
            self.repo.rollback()
            raise ValueError("Username or email already exists")

        logger.info(f"Registered user {created.id} ({created.username})")
        return created

    def authenticate(self, username: str, password: str) -> UserModel | None:
        user = self.repo.get_user_by_username(username)
        if not user or not verify_password(password, user.password):
            logger.info(f"Failed login for {username}")
            return None
        return user

    def open_session(self, user_id: int) -> UserSessionModel:
        now = datetime.now(timezone.utc)
        session = UserSessionModel(
            id=secrets.token_urlsafe(32),
            user_id=user_id,
            created_at=now,
            expires_at=now + timedelta(seconds=SESSION_TTL_SECONDS),
        )
        return self.repo.create_session(session)

    def user_for_session(self, session_id: str | None) -> UserModel | None:
        if not session_id:
            return None

        session = self.repo.get_active_session(session_id, datetime.now(timezone.utc))
        if not session:
            return None

        return self.repo.get_user(session.user_id)

    def close_session(self, session_id: str | None) -> None:
        if session_id:
            self.repo.delete_session(session_id)

    def purge_expired_sessions(self) -> int:
        removed = self.repo.delete_expired_sessions(datetime.now(timezone.utc))
        logger.info(f"Purged {removed} expired sessions")
        return removed
