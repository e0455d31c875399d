# storefront/repos/user_repo.py
from datetime import datetime
from sqlalchemy import delete, select
from sqlalchemy.orm import Session
from storefront.data.models.user import UserModel
from storefront.data.models.user_session import UserSessionModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_user_by_username(self, username: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.username == username)
        ).scalar_one_or_none()

    def get_user_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.email == email)
        ).scalar_one_or_none()

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    # sesje
    def create_session(self, session: UserSessionModel) -> UserSessionModel:
        self.db.add(session)
        self.db.commit()
        return session

    def get_active_session(self, session_id: str, now: datetime) -> UserSessionModel | None:
        return self.db.execute(
            select(UserSessionModel).where(
                UserSessionModel.id == session_id,
                UserSessionModel.expires_at > now,
            )
        ).scalar_one_or_none()

    def delete_session(self, session_id: str) -> None:
        self.db.execute(delete(UserSessionModel).where(UserSessionModel.id == session_id))
        self.db.commit()

    def delete_expired_sessions(self, now: datetime) -> int:
        result = self.db.execute(
            delete(UserSessionModel).where(UserSessionModel.expires_at <= now)
        )
        self.db.commit()
        return result.rowcount

    def rollback(self):
        self.db.rollback()
