from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from pokedex_bff.api.deps import get_current_user, get_db
from pokedex_bff.api.schemas import PokemonIn
from pokedex_bff.db import store
from pokedex_bff.models.favorite import Favorite
from pokedex_bff.models.user import User

router = APIRouter()


class FavoriteIn(BaseModel):
    pokemon: PokemonIn | None = None


class FavoriteOut(BaseModel):
    pokemon_id: int
    name: str
    sprite: str | None
    types: list[str]
    created_at: datetime


class FavoritesOut(BaseModel):
    favorites: list[FavoriteOut]


def _favorites_out(rows: list[Favorite]) -> FavoritesOut:
    return FavoritesOut(
        favorites=[
            FavoriteOut(
                pokemon_id=f.pokemon_id,
                name=f.pokemon_name,
                sprite=f.pokemon_sprite,
                types=f.pokemon_types,
                created_at=f.created_at,
            )
            for f in rows
        ]
    )


@router.get("/favorites", response_model=FavoritesOut)
def list_favorites(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return _favorites_out(store.get_favorites(db, user.id))


@router.post("/favorites", response_model=FavoritesOut)
def add_favorite(
    payload: FavoriteIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if payload.pokemon is None:
        raise HTTPException(status_code=400, detail="pokemon required")

    # Already-favorited is not an error; the list simply comes back unchanged.
    store.add_favorite(db, user.id, payload.pokemon.model_dump())
    return _favorites_out(store.get_favorites(db, user.id))
