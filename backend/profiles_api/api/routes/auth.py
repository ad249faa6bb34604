from fastapi import APIRouter, Depends, Response
from sqlmodel import Session

from profiles_api.api.deps import get_current_user_id, get_session_id, get_settings
from profiles_api.core.config import Settings
from profiles_api.core.database import get_session
from profiles_api.core.security import create_session_token
from profiles_api.schemas.auth import MessageOut, SignInIn, SignUpIn
from profiles_api.services.accounts import authenticate, close_session, open_session, register_user


router = APIRouter(tags=["auth"])


@router.post("/sign-up", response_model=MessageOut, status_code=201)
def sign_up(payload: SignUpIn, session: Session = Depends(get_session)):
    register_user(session, payload)
    return MessageOut(message="Sign-up completed")


@router.post("/sign-in", response_model=MessageOut)
def sign_in(
    payload: SignInIn,
    response: Response,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    user = authenticate(session, payload.email, payload.password)
    auth_session = open_session(session, user.id, settings.session_ttl_minutes)

    token = create_session_token(
        auth_session.id,
        settings.session_secret,
        expires_minutes=settings.session_ttl_minutes,
    )
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return MessageOut(message="Signed in")


@router.post("/sign-out", response_model=MessageOut)
def sign_out(
    response: Response,
    user_id: int = Depends(get_current_user_id),
    session_id: str = Depends(get_session_id),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    close_session(session, session_id)
    response.delete_cookie(settings.session_cookie_name)
    return MessageOut(message="Signed out")
