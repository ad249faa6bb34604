"""
Account operations behind the HTTP routes.

Every function takes the request's SQLModel ``Session`` and the caller's
identity explicitly; none of them reads request state. Writes that span
several rows commit together or roll back together.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, delete

from profiles_api.core.errors import ConflictError, NotFoundError, UnauthorizedError
from profiles_api.core.security import hash_password, new_session_id, verify_password
from profiles_api.models import AuthSession, HistoryEntry, Profile, User
from profiles_api.schemas.auth import SignUpIn

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def stringify(value: Any) -> Optional[str]:
    """Render a column value the way it is stored in the history table."""
    if value is None:
        return None
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


# ----------------------------
# Sign-up / sign-in
# ----------------------------

def register_user(session: Session, payload: SignUpIn) -> User:
    existing = session.exec(select(User).where(User.email == payload.email)).first()
    if existing:
        raise ConflictError("Email already exists")

    user = User(email=payload.email, password_hash=hash_password(payload.password))
    try:
        session.add(user)
        session.flush()

        profile = Profile(
            user_id=user.id,
            name=payload.name,
            age=payload.age,
            gender=payload.gender,
            profile_image=payload.profile_image,
        )
        session.add(profile)
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        # Lost a race against a concurrent sign-up with the same email
        raise ConflictError("Email already exists") from exc
    except Exception:
        session.rollback()
        raise

    session.refresh(user)
    logger.info("Registered user id=%s", user.id)
    return user


def authenticate(session: Session, email: str, password: str) -> User:
    user = session.exec(select(User).where(User.email == email)).first()
    if not user:
        logger.info("Sign-in rejected: unknown email")
        raise UnauthorizedError("Email does not exist")
    if not verify_password(password, user.password_hash):
        logger.info("Sign-in rejected: bad password for user id=%s", user.id)
        raise UnauthorizedError("Password does not match")
    return user


# ----------------------------
# Sessions
# ----------------------------

def purge_expired_sessions(session: Session, *, at: Optional[datetime] = None) -> None:
    cutoff = at or _now()
    session.exec(
        delete(AuthSession)
        .where(AuthSession.expires_at <= cutoff)
        .execution_options(synchronize_session=False)
    )


def open_session(session: Session, user_id: int, ttl_minutes: int) -> AuthSession:
    now = _now()
    auth_session = AuthSession(
        id=new_session_id(),
        user_id=user_id,
        created_at=now,
        expires_at=now + timedelta(minutes=ttl_minutes),
    )
    try:
        purge_expired_sessions(session, at=now)
        session.add(auth_session)
        session.commit()
    except Exception:
        session.rollback()
        raise

    session.refresh(auth_session)
    logger.info("Opened session for user id=%s", user_id)
    return auth_session


def resolve_session(session: Session, session_id: str) -> int:
    auth_session = session.get(AuthSession, session_id)
    if not auth_session or auth_session.is_expired():
        raise UnauthorizedError("Session expired")
    return auth_session.user_id


def close_session(session: Session, session_id: str) -> None:
    auth_session = session.get(AuthSession, session_id)
    if not auth_session:
        return
    session.delete(auth_session)
    session.commit()
    logger.info("Closed session for user id=%s", auth_session.user_id)


# ----------------------------
# Profile
# ----------------------------

def get_user_with_profile(session: Session, user_id: int) -> Tuple[User, Profile]:
    row = session.exec(
        select(User, Profile)
        .join(Profile, Profile.user_id == User.id)
        .where(User.id == user_id)
    ).first()
    if not row:
        raise NotFoundError("User not found")
    return row


def update_profile(session: Session, user_id: int, changes: Dict[str, Any]) -> List[HistoryEntry]:
    """
    Apply ``changes`` to the user's profile and record one history row per
    field whose stored value actually changed.

    The profile is read with ``SELECT ... FOR UPDATE`` in the same
    transaction that writes it, so the recorded old values are the ones
    being overwritten. Nothing is persisted if any step fails.
    """
    try:
        profile = session.exec(
            select(Profile).where(Profile.user_id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).first()
        if not profile:
            raise NotFoundError("Profile not found")

        entries: List[HistoryEntry] = []
        for field, new_value in changes.items():
            old_value = getattr(profile, field)
            if stringify(old_value) == stringify(new_value):
                continue
            setattr(profile, field, new_value)
            entries.append(
                HistoryEntry(
                    user_id=user_id,
                    changed_field=field,
                    old_value=stringify(old_value),
                    new_value=stringify(new_value),
                )
            )

        if entries:
            profile.updated_at = _now()
            session.add(profile)
            session.add_all(entries)
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info("Updated profile for user id=%s (%d field(s) changed)", user_id, len(entries))
    return entries
