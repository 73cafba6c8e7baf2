"""
Data access for users, favorites, teams and friends.

Functions here take a session plus plain values and hand back rows. They do
not raise for "not found": absence comes back as None, an empty list or
False, and callers decide what that means. Writes commit before returning.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pokedex_bff.models.favorite import Favorite
from pokedex_bff.models.friend import Friend
from pokedex_bff.models.team import Team
from pokedex_bff.models.user import User

_UPDATABLE_USER_FIELDS = ("email", "name", "password", "code")


# ============ USERS ============


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == email)).scalars().one_or_none()


def get_user_by_code(db: Session, code: str) -> User | None:
    return db.execute(select(User).where(User.code == code)).scalars().one_or_none()


def create_user(db: Session, *, email: str, name: str, password: str, code: str) -> User:
    """Insert a user. A duplicate email or code raises IntegrityError."""
    user = User(email=email, name=name or "", password=password or "", code=code)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    db.refresh(user)
    return user


def update_user(db: Session, email: str, /, **patch: Any) -> User | None:
    """Patch the user found by ``email``. A patch may change the email itself."""
    user = get_user_by_email(db, email)
    if not user:
        return None
    for field, value in patch.items():
        if field not in _UPDATABLE_USER_FIELDS:
            raise ValueError(f"Unknown user field: {field}")
        setattr(user, field, value)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    db.refresh(user)
    return user


# ============ FAVORITES ============


def get_favorites(db: Session, user_id: int) -> list[Favorite]:
    return list(
        db.execute(
            select(Favorite)
            .where(Favorite.user_id == user_id)
            .order_by(Favorite.created_at.desc(), Favorite.id.desc())
        ).scalars().all()
    )


def _favorite_exists(db: Session, user_id: int, pokemon_id: int) -> bool:
    return (
        db.execute(
            select(Favorite.id).where(Favorite.user_id == user_id, Favorite.pokemon_id == pokemon_id)
        ).first()
        is not None
    )


def add_favorite(db: Session, user_id: int, pokemon: dict) -> Favorite | None:
    """Returns None when the pokemon is already a favorite."""
    pokemon_id = int(pokemon["id"])
    if _favorite_exists(db, user_id, pokemon_id):
        return None

    fav = Favorite(
        user_id=user_id,
        pokemon_id=pokemon_id,
        pokemon_name=pokemon.get("name") or "",
        pokemon_sprite=pokemon.get("sprite"),
        pokemon_types=list(pokemon.get("types") or []),
    )
    db.add(fav)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent insert of the same favorite.
        db.rollback()
        return None
    db.refresh(fav)
    return fav


def remove_favorite(db: Session, user_id: int, pokemon_id: int) -> bool:
    result = db.execute(
        delete(Favorite).where(Favorite.user_id == user_id, Favorite.pokemon_id == pokemon_id)
    )
    db.commit()
    return result.rowcount > 0


# ============ TEAMS ============


def _teams_query(user_id: int):
    # Newest first. The id breaks ties between rows created in the same instant.
    return (
        select(Team)
        .where(Team.user_id == user_id)
        .order_by(Team.created_at.desc(), Team.id.desc())
    )


def get_teams(db: Session, user_id: int) -> list[Team]:
    return list(db.execute(_teams_query(user_id)).scalars().all())


def add_team(db: Session, user_id: int, name: str, pokemons: list[dict] | None = None) -> Team:
    team = Team(user_id=user_id, team_name=name or "", pokemons=list(pokemons or []))
    db.add(team)
    db.commit()
    db.refresh(team)
    return team


def _team_at(db: Session, user_id: int, index: int) -> Team | None:
    if index < 0:
        return None
    return db.execute(_teams_query(user_id).offset(index).limit(1)).scalars().first()


def _team_by_id(db: Session, user_id: int, team_id: int) -> Team | None:
    return db.execute(
        select(Team).where(Team.id == team_id, Team.user_id == user_id)
    ).scalars().one_or_none()


def _apply_team_update(
    db: Session, team: Team, name: str | None, pokemons: list[dict] | None
) -> Team:
    if name is not None:
        team.team_name = name
    if pokemons is not None:
        team.pokemons = list(pokemons)
    db.commit()
    db.refresh(team)
    return team


def update_team(
    db: Session,
    user_id: int,
    index: int,
    *,
    name: str | None = None,
    pokemons: list[dict] | None = None,
) -> Team | None:
    """Update the team at ``index`` in ``get_teams`` order."""
    team = _team_at(db, user_id, index)
    if not team:
        return None
    return _apply_team_update(db, team, name, pokemons)


def delete_team(db: Session, user_id: int, index: int) -> bool:
    """Delete the team at ``index`` in ``get_teams`` order."""
    team = _team_at(db, user_id, index)
    if not team:
        return False
    db.delete(team)
    db.commit()
    return True


def update_team_by_id(
    db: Session,
    user_id: int,
    team_id: int,
    *,
    name: str | None = None,
    pokemons: list[dict] | None = None,
) -> Team | None:
    team = _team_by_id(db, user_id, team_id)
    if not team:
        return None
    return _apply_team_update(db, team, name, pokemons)


def delete_team_by_id(db: Session, user_id: int, team_id: int) -> bool:
    team = _team_by_id(db, user_id, team_id)
    if not team:
        return False
    db.delete(team)
    db.commit()
    return True


# ============ FRIENDS ============


def get_friends(db: Session, user_id: int) -> list[User]:
    return list(
        db.execute(
            select(User)
            .join(Friend, Friend.friend_id == User.id)
            .where(Friend.user_id == user_id)
            .order_by(Friend.created_at.desc(), Friend.id.desc())
        ).scalars().all()
    )


def _add_friend_edge(db: Session, user_id: int, friend_id: int) -> bool:
    exists = db.execute(
        select(Friend.id).where(Friend.user_id == user_id, Friend.friend_id == friend_id)
    ).first()
    if exists:
        return False

    db.add(Friend(user_id=user_id, friend_id=friend_id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return False
    return True


def add_friend(db: Session, user_id: int, friend_id: int) -> None:
    """Record the friendship in both directions. Safe to repeat."""
    _add_friend_edge(db, user_id, friend_id)
    _add_friend_edge(db, friend_id, user_id)
