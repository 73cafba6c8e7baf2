from __future__ import annotations

from pydantic import BaseModel


class UserSummary(BaseModel):
    email: str
    name: str
    code: str

    class Config:
        from_attributes = True


class PokemonIn(BaseModel):
    """A species record as the frontend sends it. Extra keys are kept."""

    id: int
    name: str = ""
    sprite: str | None = None
    types: list[str] = []

    class Config:
        extra = "allow"
