from typing import Dict, Iterable, List

from loguru import logger

from .errors import InvalidReference
from .model import (
    AttackUnitEvent,
    CoreEvent,
    CreateUnitEvent,
    EndTurnEvent,
    MoveEvent,
    PlayerId,
    Unit,
    UnitId,
)
from .registry import ObjectTypes

class WorldState:
    """Canonical unit table. Mutated only by apply()."""

    def __init__(self, object_types: ObjectTypes, log_level: str = "INFO"):
        self.object_types = object_types
        self.log_level = log_level  # Mirrors kept by policies log below INFO
        self.units: Dict[UnitId, Unit] = {}  # Insertion order is registry order
        self._last_id: UnitId = -1

    @classmethod
    def replay(cls, object_types: ObjectTypes, events: Iterable[CoreEvent]) -> "WorldState":
        """Rebuild state from an ordered event log."""
        state = cls(object_types)
        for e in events:
            state.apply(e)
        return state

    def unit(self, unit_id: UnitId) -> Unit:
        try:
            return self.units[unit_id]
        except KeyError as e:
            raise InvalidReference(f"No unit with id = {unit_id}") from e

    def player_units(self, player_id: PlayerId) -> List[Unit]:
        return [u for u in self.units.values() if u.player_id == player_id]

    def enemy_units(self, player_id: PlayerId) -> List[Unit]:
        return [u for u in self.units.values() if u.player_id != player_id]

    def new_unit_id(self) -> UnitId:
        # Highest id ever created, so ids of removed units are never reused
        return self._last_id + 1

    def apply(self, event: CoreEvent) -> None:
        """Apply one event to canonical state."""
        if isinstance(event, MoveEvent):
            self._apply_move(event)
        elif isinstance(event, EndTurnEvent):
            self._apply_end_turn(event)
        elif isinstance(event, CreateUnitEvent):
            self._apply_create_unit(event)
        elif isinstance(event, AttackUnitEvent):
            self._apply_attack_unit(event)
        else:
            raise TypeError(f"Unsupported event: {event!r}")

    def _apply_move(self, event: MoveEvent) -> None:
        unit = self.unit(event.unit_id)
        unit.pos = event.path.destination
        # Towed units travel with their carrier
        if unit.attached_unit_id is not None and unit.attached_unit_id in self.units:
            self.units[unit.attached_unit_id].pos = unit.pos

    def _apply_end_turn(self, event: EndTurnEvent) -> None:
        for u in self.player_units(event.new_id):
            u.attack_points = self.object_types.unit_type(u.type_id).attack_points

    def _apply_create_unit(self, event: CreateUnitEvent) -> None:
        if event.unit_id in self.units:
            raise InvalidReference(f"Unit id {event.unit_id} already in use")
        unit_type = self.object_types.unit_type(event.type_id)
        self.units[event.unit_id] = Unit(
            id=event.unit_id,
            pos=event.pos,
            type_id=event.type_id,
            player_id=event.player_id,
            count=unit_type.count,
            attack_points=unit_type.attack_points,
            attached_unit_id=event.attached_unit_id,
        )
        self._last_id = max(self._last_id, event.unit_id)
        logger.log(self.log_level, "Unit {} ({}) created at {} for player {}",
                    event.unit_id, unit_type.name, event.pos, event.player_id)

    def _apply_attack_unit(self, event: AttackUnitEvent) -> None:
        attacker = self.unit(event.attacker_id)
        defender = self.unit(event.defender_id)
        attacker.attack_points = max(0, attacker.attack_points - 1)
        if event.killed:
            defender.count = 0
        if defender.count <= 0:
            self._remove_unit(defender.id)

    def _remove_unit(self, unit_id: UnitId) -> None:
        unit = self.units.pop(unit_id)
        logger.log(self.log_level, "Unit {} removed", unit_id)
        if unit.attached_unit_id is not None and unit.attached_unit_id in self.units:
            self._remove_unit(unit.attached_unit_id)
