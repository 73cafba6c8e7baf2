from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from pokedex_bff.api.deps import get_current_user, get_db
from pokedex_bff.api.schemas import UserSummary
from pokedex_bff.db import store
from pokedex_bff.models.user import User

router = APIRouter()


class FriendAddIn(BaseModel):
    code: str | None = None


class FriendsOut(BaseModel):
    friends: list[UserSummary]


def _friends_out(db: Session, user_id: int) -> FriendsOut:
    return FriendsOut(
        friends=[UserSummary.model_validate(f) for f in store.get_friends(db, user_id)]
    )


@router.get("/friends", response_model=FriendsOut)
def list_friends(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return _friends_out(db, user.id)


@router.post("/friends/add", response_model=FriendsOut)
def add_friend(
    payload: FriendAddIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    code = (payload.code or "").strip()
    if not code:
        raise HTTPException(status_code=400, detail="code required")

    friend = store.get_user_by_code(db, code)
    if not friend:
        raise HTTPException(status_code=404, detail="No user with that code")
    if friend.id == user.id:
        raise HTTPException(status_code=400, detail="Cannot add yourself")

    store.add_friend(db, user.id, friend.id)
    return _friends_out(db, user.id)
