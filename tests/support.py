"""Shared builders for engine tests."""
from typing import Sequence, Tuple

from hexcore.combat import CombatResolver
from hexcore.engine import CommandResolver
from hexcore.geometry import MapPos
from hexcore.model import CreateUnitEvent
from hexcore.registry import ObjectTypes
from hexcore.state import WorldState

Placement = Tuple[str, MapPos, int]  # (type name, position, player)


class FixedRolls:
    """Random source returning a fixed sequence of draws, cycled."""

    def __init__(self, *values: int):
        self.values = list(values)
        self.calls = 0

    def randint(self, low: int, high: int) -> int:
        v = self.values[self.calls % len(self.values)]
        self.calls += 1
        assert low <= v < high
        return v


def make_state(placements: Sequence[Placement]) -> WorldState:
    """State with one unit per placement; ids follow list order from 0."""
    types = ObjectTypes.builtin()
    state = WorldState(types)
    for uid, (name, pos, player) in enumerate(placements):
        state.apply(CreateUnitEvent(uid, pos, types.type_id_by_name(name), player))
    return state


def make_resolver(state: WorldState, *rolls: int) -> CommandResolver:
    """Resolver over `state` whose combat draws are `rolls`."""
    types = state.object_types
    return CommandResolver(state, types, CombatResolver(types, FixedRolls(*rolls)),
                           default_type_id=types.type_id_by_name("soldier"))
