from datetime import datetime, timedelta, timezone
import secrets

from jose import JWTError, jwt
from passlib.context import CryptContext

# Use Argon2 instead of bcrypt (more reliable on Python 3.13)
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

ALGORITHM = "HS256"


class InvalidSessionToken(Exception):
    pass


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


def create_session_token(session_id: str, secret: str, expires_minutes: int) -> str:
    """Sign the opaque session id so the cookie cannot be forged or altered."""
    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=expires_minutes)

    payload = {
        "sid": session_id,
        "iat": now,
        "exp": exp,
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_session_token(token: str, secret: str) -> str:
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise InvalidSessionToken(str(exc)) from exc

    session_id = payload.get("sid")
    if not session_id or not isinstance(session_id, str):
        raise InvalidSessionToken("Missing sid")
    return session_id
