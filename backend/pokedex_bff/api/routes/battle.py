from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from pokedex_bff.api.deps import get_current_claims
from pokedex_bff.services import battle

router = APIRouter()


class Stats(BaseModel):
    hp: float | None = None
    attack: float | None = None
    defense: float | None = None

    class Config:
        extra = "allow"


class Combatant(BaseModel):
    # Echoed back as-is when this side wins.
    pokemon: Any = None
    stats: Stats | None = None


class BattleIn(BaseModel):
    attacker: Combatant | None = None
    defender: Combatant | None = None


class BattleOut(BaseModel):
    winner: Any
    aScore: float
    dScore: float


def _stats(c: Combatant) -> dict | None:
    return c.stats.model_dump() if c.stats else None


@router.post("/battle/simulate", response_model=BattleOut)
def simulate_battle(payload: BattleIn, _claims: dict = Depends(get_current_claims)):
    if payload.attacker is None or payload.defender is None:
        raise HTTPException(status_code=400, detail="attacker and defender required")

    result = battle.simulate(
        payload.attacker.pokemon,
        _stats(payload.attacker),
        payload.defender.pokemon,
        _stats(payload.defender),
    )
    return BattleOut(winner=result.winner, aScore=result.attacker_score, dScore=result.defender_score)
