from typing import List, Optional

from .combat import CombatResolver
from .geometry import DistanceFn, MapPos, hex_distance
from .model import (
    AttackUnit,
    AttackUnitEvent,
    Command,
    CoreEvent,
    CreateUnit,
    CreateUnitEvent,
    EndTurn,
    EndTurnEvent,
    FireMode,
    Move,
    MoveEvent,
    PlayerId,
    UnitId,
    UnitTypeId,
)
from .reaction import ReactionFire
from .registry import ObjectTypes
from .state import WorldState

class CommandResolver:
    """Translates one command into ordered core events. Reads state only."""

    def __init__(self, state: WorldState, object_types: ObjectTypes, combat: CombatResolver,
                 player_count: int = 2, default_type_id: UnitTypeId = 0,
                 distance: DistanceFn = hex_distance):
        self.state = state
        self.object_types = object_types
        self.combat = combat
        self.player_count = player_count
        self.default_type_id = default_type_id
        self.distance = distance
        self.reaction = ReactionFire(state, object_types, distance, self.attack_events)

    def attack_events(self, attacker_id: UnitId, defender_id: UnitId,
                      pos: MapPos, mode: FireMode) -> List[AttackUnitEvent]:
        """Zero or one attack event against the defender standing at `pos`."""
        attacker = self.state.unit(attacker_id)
        defender = self.state.unit(defender_id)
        if self.distance(attacker.pos, pos) > self.object_types.max_attack_distance(attacker):
            return []
        killed = self.combat.resolve(attacker, defender)
        return [AttackUnitEvent(attacker_id, defender_id, mode, killed)]

    def rejection_reason(self, command: Command, player_id: PlayerId) -> Optional[str]:
        """Why `command` cannot be played by `player_id`, or None."""
        if isinstance(command, Move):
            unit = self.state.unit(command.unit_id)
            if unit.player_id != player_id:
                return f"unit {unit.id} belongs to player {unit.player_id}"
            if len(command.path) == 0:
                return "empty path"
            if command.path.origin != unit.pos:
                return f"path starts at {command.path.origin}, unit {unit.id} is at {unit.pos}"
        elif isinstance(command, AttackUnit):
            attacker = self.state.unit(command.attacker_id)
            defender = self.state.unit(command.defender_id)
            if attacker.player_id != player_id:
                return f"unit {attacker.id} belongs to player {attacker.player_id}"
            if defender.player_id == player_id:
                return f"unit {defender.id} is a friendly unit"
            if attacker.attack_points <= 0:
                return f"unit {attacker.id} has no attack points left"
            max_distance = self.object_types.max_attack_distance(attacker)
            if self.distance(attacker.pos, defender.pos) > max_distance:
                return f"unit {defender.id} is out of range ({max_distance})"
        return None

    def resolve(self, command: Command, player_id: PlayerId) -> List[CoreEvent]:
        """Events for `command`; an empty list means the command is rejected."""
        if self.rejection_reason(command, player_id) is not None:
            return []
        return self.events_for(command, player_id)

    def events_for(self, command: Command, player_id: PlayerId) -> List[CoreEvent]:
        """Events for a command already cleared by rejection_reason()."""
        evts: List[CoreEvent] = []
        if isinstance(command, EndTurn):
            evts.append(EndTurnEvent(player_id, (player_id + 1) % self.player_count))
        elif isinstance(command, CreateUnit):
            evts.append(CreateUnitEvent(
                unit_id=self.state.new_unit_id(),
                pos=command.pos,
                type_id=self.default_type_id,
                player_id=player_id,
            ))
        elif isinstance(command, Move):
            e = self.reaction.along_path(player_id, command.path, command.unit_id)
            if e:
                evts.extend(e)
            else:
                evts.append(MoveEvent(command.unit_id, command.path))
        elif isinstance(command, AttackUnit):
            defender_pos = self.state.unit(command.defender_id).pos
            e = self.attack_events(command.attacker_id, command.defender_id,
                                   defender_pos, FireMode.ACTIVE)
            evts.extend(e)
            if e and not e[0].killed:
                attacker_pos = self.state.unit(command.attacker_id).pos
                evts.extend(self.reaction.at_position(player_id, command.attacker_id, attacker_pos))
        else:
            raise TypeError(f"Unsupported command: {command!r}")
        return evts
