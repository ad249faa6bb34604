from fastapi import Depends, Request
from sqlmodel import Session

from profiles_api.core.config import Settings
from profiles_api.core.database import get_session
from profiles_api.core.errors import UnauthorizedError
from profiles_api.core.security import InvalidSessionToken, decode_session_token
from profiles_api.services.accounts import resolve_session


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_id(request: Request, settings: Settings = Depends(get_settings)) -> str:
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise UnauthorizedError("Not authenticated")
    try:
        return decode_session_token(token, settings.session_secret)
    except InvalidSessionToken:
        raise UnauthorizedError("Invalid session")


def get_current_user_id(
    session_id: str = Depends(get_session_id),
    session: Session = Depends(get_session),
) -> int:
    return resolve_session(session, session_id)
