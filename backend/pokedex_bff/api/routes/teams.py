from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from pokedex_bff.api.deps import get_current_user, get_db
from pokedex_bff.db import store
from pokedex_bff.models.team import Team
from pokedex_bff.models.user import User

router = APIRouter()


class TeamData(BaseModel):
    name: str | None = None
    # Species records are stored exactly as the client sends them.
    pokemons: list[dict[str, Any]] | None = None


class TeamIn(BaseModel):
    team: TeamData | None = None


class TeamOut(BaseModel):
    id: int
    name: str
    pokemons: list[dict[str, Any]]
    created_at: datetime


class TeamsOut(BaseModel):
    teams: list[TeamOut]


def _name(data: TeamData) -> str | None:
    return data.name.strip() if data.name is not None else None


def _require_team(payload: TeamIn) -> TeamData:
    if payload.team is None:
        raise HTTPException(status_code=400, detail="team required")
    return payload.team


def _teams_out(db: Session, user_id: int) -> TeamsOut:
    rows: list[Team] = store.get_teams(db, user_id)
    return TeamsOut(
        teams=[
            TeamOut(id=t.id, name=t.team_name, pokemons=t.pokemons, created_at=t.created_at)
            for t in rows
        ]
    )


@router.get("/teams", response_model=TeamsOut)
def list_teams(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return _teams_out(db, user.id)


@router.post("/teams", response_model=TeamsOut)
def create_team(
    payload: TeamIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    data = _require_team(payload)
    store.add_team(db, user.id, _name(data) or "", data.pokemons or [])
    return _teams_out(db, user.id)


# Stable-id routes. Declared before the positional ones so "by-id" is never
# read as an index.


@router.put("/teams/by-id/{team_id}", response_model=TeamsOut)
def update_team_by_id(
    team_id: int,
    payload: TeamIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    data = _require_team(payload)
    team = store.update_team_by_id(db, user.id, team_id, name=_name(data), pokemons=data.pokemons)
    if not team:
        raise HTTPException(status_code=404, detail="Team not found")
    return _teams_out(db, user.id)


@router.delete("/teams/by-id/{team_id}", response_model=TeamsOut)
def delete_team_by_id(
    team_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not store.delete_team_by_id(db, user.id, team_id):
        raise HTTPException(status_code=404, detail="Team not found")
    return _teams_out(db, user.id)


# Positional routes: ``idx`` is the team's position in the GET /teams list
# (newest first).


@router.put("/teams/{idx}", response_model=TeamsOut)
def update_team(
    idx: int,
    payload: TeamIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    data = _require_team(payload)
    team = store.update_team(db, user.id, idx, name=_name(data), pokemons=data.pokemons)
    if not team:
        raise HTTPException(status_code=404, detail="Team not found")
    return _teams_out(db, user.id)


@router.delete("/teams/{idx}", response_model=TeamsOut)
def delete_team(
    idx: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not store.delete_team(db, user.id, idx):
        raise HTTPException(status_code=404, detail="Team not found")
    return _teams_out(db, user.id)
