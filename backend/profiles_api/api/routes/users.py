from fastapi import APIRouter, Depends
from sqlmodel import Session

from profiles_api.api.deps import get_current_user_id
from profiles_api.core.database import get_session
from profiles_api.schemas.auth import MessageOut
from profiles_api.schemas.user import ProfileOut, ProfileUpdate, UserEnvelope, UserOut
from profiles_api.services.accounts import get_user_with_profile, update_profile

router = APIRouter(tags=["users"])

@router.get("/users", response_model=UserEnvelope)
def read_me(user_id: int = Depends(get_current_user_id), session: Session = Depends(get_session)):
    user, profile = get_user_with_profile(session, user_id)
    return UserEnvelope(
        data=UserOut(
            user_id=user.id,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
            profile=ProfileOut.model_validate(profile),
        )
    )

@router.patch("/users/", response_model=MessageOut)
def update_me(data: ProfileUpdate, user_id: int = Depends(get_current_user_id), session: Session = Depends(get_session)):
    update_profile(session, user_id, data.changes())
    return MessageOut(message="Profile updated")
