from __future__ import annotations

from dataclasses import dataclass
import random
from typing import Any

DEFAULT_STAT = 50
HP_WEIGHT = 1.0
ATTACK_WEIGHT = 1.2
DEFENSE_WEIGHT = 0.8
MIN_ROLL = 0.8
ROLL_SPREAD = 0.8


@dataclass
class BattleResult:
    winner: Any
    attacker_score: float
    defender_score: float


def _stat(stats: dict | None, key: str) -> float:
    # Missing, null and zero stats all count as the default.
    value = (stats or {}).get(key)
    return value or DEFAULT_STAT


def power(stats: dict | None) -> float:
    return (
        HP_WEIGHT * _stat(stats, "hp")
        + ATTACK_WEIGHT * _stat(stats, "attack")
        + DEFENSE_WEIGHT * _stat(stats, "defense")
    )


def roll(rng: random.Random | None = None) -> float:
    """Uniform factor in [0.8, 1.6)."""
    r = rng or random
    return MIN_ROLL + r.random() * ROLL_SPREAD


def simulate(
    attacker: Any,
    attacker_stats: dict | None,
    defender: Any,
    defender_stats: dict | None,
    rng: random.Random | None = None,
) -> BattleResult:
    a_score = power(attacker_stats) * roll(rng)
    d_score = power(defender_stats) * roll(rng)
    winner = attacker if a_score > d_score else defender
    return BattleResult(winner=winner, attacker_score=a_score, defender_score=d_score)
