# storefront/api/deps.py
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.services.auth_service import AuthService
from storefront.services.lock_service import LockService
from storefront.utils.settings import SESSION_COOKIE_NAME


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_lock_service(request: Request) -> LockService:
    return request.app.state.lock_service


def get_current_user(request: Request, db: Session = Depends(get_db)) -> UserModel:
    user = AuthService(db).user_for_session(request.cookies.get(SESSION_COOKIE_NAME))
    if not user:
        raise HTTPException(status_code=401)
    return user


def require_admin(user: UserModel = Depends(get_current_user)) -> UserModel:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
