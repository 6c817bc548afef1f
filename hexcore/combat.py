from dataclasses import dataclass
from typing import Protocol

from loguru import logger

from .model import Unit
from .registry import ObjectTypes

# Draws are uniform integers in [ROLL_LOW, ROLL_HIGH)
ROLL_LOW = -5
ROLL_HIGH = 5

class RandomSource(Protocol):
    def randint(self, low: int, high: int) -> int: ...

@dataclass(frozen=True)
class AttackTargets:
    """Target numbers for the three tests; a draw must be strictly below each."""
    hit: int
    pierce: int
    wound: int

def attack_targets(object_types: ObjectTypes, attacker: Unit, defender: Unit) -> AttackTargets:
    attacker_type = object_types.unit_type(attacker.type_id)
    defender_type = object_types.unit_type(defender.type_id)
    weapon = object_types.weapon_type(attacker_type.weapon_type_id)
    return AttackTargets(
        hit=-15 + defender_type.size + weapon.accuracy + attacker_type.weapon_skill,
        pierce=5 - defender_type.armor + weapon.ap,
        wound=-defender_type.toughness + weapon.damage,
    )

def _pass_chance(needed: int) -> float:
    passing = min(max(needed - ROLL_LOW, 0), ROLL_HIGH - ROLL_LOW)
    return passing / (ROLL_HIGH - ROLL_LOW)

def kill_chance(object_types: ObjectTypes, attacker: Unit, defender: Unit) -> float:
    """Probability that a single attack kills the defender."""
    t = attack_targets(object_types, attacker, defender)
    return _pass_chance(t.hit) * _pass_chance(t.pierce) * _pass_chance(t.wound)

class CombatResolver:
    """Stateless hit / penetration / wound resolution."""

    def __init__(self, object_types: ObjectTypes, rng: RandomSource):
        self.object_types = object_types
        self._rng = rng

    def _test(self, name: str, needed: int) -> bool:
        real = self._rng.randint(ROLL_LOW, ROLL_HIGH)
        result = real < needed
        logger.debug("{} test: real:{} < needed:{} = {}", name, real, needed, result)
        return result

    def resolve(self, attacker: Unit, defender: Unit) -> bool:
        """Return True if the attack kills the defender. Range is the caller's concern."""
        t = attack_targets(self.object_types, attacker, defender)
        logger.debug("Unit {} attacks unit {}: {}", attacker.id, defender.id, t)
        return (self._test("hit", t.hit)
                and self._test("pierce", t.pierce)
                and self._test("wound", t.wound))
