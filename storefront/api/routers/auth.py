# storefront/api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user, get_db
from storefront.data.models.user import UserModel
from storefront.domain.schemas import UserCreate, UserLogin, UserRead
from storefront.services.auth_service import AuthService
from storefront.utils.settings import (
    SESSION_COOKIE_NAME,
    SESSION_COOKIE_SECURE,
    SESSION_TTL_SECONDS,
)

router = APIRouter(tags=["auth"])


def set_session_cookie(response: Response, session_id: str):
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session_id,
        max_age=SESSION_TTL_SECONDS,
        httponly=True,
        samesite="lax",
        secure=SESSION_COOKIE_SECURE,
    )


@router.post("/register", response_model=UserRead, status_code=201)
def register(payload: UserCreate, response: Response, db: Session = Depends(get_db)):
    svc = AuthService(db)
    try:
        user = svc.register(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    set_session_cookie(response, svc.open_session(user.id).id)
    return user


@router.post("/login", response_model=UserRead)
def login(payload: UserLogin, response: Response, db: Session = Depends(get_db)):
    svc = AuthService(db)
    user = svc.authenticate(payload.username, payload.password)
    if not user:
        raise HTTPException(status_code=401)

    set_session_cookie(response, svc.open_session(user.id).id)
    return user


@router.post("/logout", status_code=204)
def logout(request: Request, db: Session = Depends(get_db)):
    AuthService(db).close_session(request.cookies.get(SESSION_COOKIE_NAME))
    response = Response(status_code=204)
    response.delete_cookie(SESSION_COOKIE_NAME)
    return response


@router.get("/user", response_model=UserRead)
def current_user(user: UserModel = Depends(get_current_user)):
    return user
