from typing import Callable, List

from loguru import logger

from .geometry import DistanceFn, MapPath, MapPos
from .model import AttackUnitEvent, CoreEvent, FireMode, MoveEvent, PlayerId, UnitId
from .registry import ObjectTypes
from .state import WorldState

AttackPipeline = Callable[[UnitId, UnitId, MapPos, FireMode], List[AttackUnitEvent]]

class ReactionFire:
    """Interrupt fire from idle hostile units. Reads state, never mutates it."""

    def __init__(self, state: WorldState, object_types: ObjectTypes,
                 distance: DistanceFn, attack: AttackPipeline):
        self.state = state
        self.object_types = object_types
        self.distance = distance
        self._attack = attack

    def at_position(self, acting_player: PlayerId, unit_id: UnitId, pos: MapPos) -> List[CoreEvent]:
        """Reactive attacks against `unit_id` standing at `pos`."""
        evts: List[CoreEvent] = []
        for enemy in self.state.units.values():
            if enemy.player_id == acting_player:
                continue
            if enemy.attack_points <= 0:
                continue
            if self.distance(enemy.pos, pos) > self.object_types.max_attack_distance(enemy):
                continue
            e = self._attack(enemy.id, unit_id, pos, FireMode.REACTIVE)
            evts.extend(e)
            if not e:
                continue
            logger.debug("Reaction fire: unit {} fires at unit {} at {}", enemy.id, unit_id, pos)
            if e[0].killed:
                break
        return evts

    def along_path(self, acting_player: PlayerId, path: MapPath, unit_id: UnitId) -> List[CoreEvent]:
        """Truncated move plus reactive attacks at the first waypoint that draws fire."""
        for i in range(1, len(path)):
            e = self.at_position(acting_player, unit_id, path.nodes[i])
            if e:
                logger.debug("Move of unit {} interrupted at waypoint {} {}", unit_id, i, path.nodes[i])
                return [MoveEvent(unit_id, path.truncated(i))] + e
        return []
