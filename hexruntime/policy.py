from typing import Optional, Protocol, Set

from hexcore.combat import kill_chance
from hexcore.geometry import DistanceFn, MapPath, MapPos, hex_distance
from hexcore.model import AttackUnit, Command, CoreEvent, EndTurn, EndTurnEvent, Move, PlayerId, UnitId
from hexcore.registry import ObjectTypes
from hexcore.state import WorldState

class Pathfinder(Protocol):
    def find_path(self, from_pos: MapPos, to_pos: MapPos) -> MapPath: ...

class ScriptedPolicy(Protocol):
    """
    Decision policy of a scripted player.

    observe() is called for every event the player may see, in order, before
    each next_command() call. Policies keep their own mirror of the world and
    never touch canonical state.
    """

    def observe(self, object_types: ObjectTypes, event: CoreEvent) -> None: ...

    def next_command(self, object_types: ObjectTypes) -> Command: ...

class GreedyPolicy:
    """Fire at the most killable enemy in range, close in once per unit, then end the turn."""

    def __init__(self, player_id: PlayerId, pathfinder: Optional[Pathfinder] = None,
                 distance: DistanceFn = hex_distance):
        self.player_id = player_id
        self.pathfinder = pathfinder
        self.distance = distance
        self.state: Optional[WorldState] = None
        self._moved: Set[UnitId] = set()

    def observe(self, object_types: ObjectTypes, event: CoreEvent) -> None:
        if self.state is None:
            self.state = WorldState(object_types, log_level="TRACE")
        self.state.apply(event)
        if isinstance(event, EndTurnEvent) and event.new_id == self.player_id:
            self._moved.clear()

    def _attack(self, object_types: ObjectTypes) -> Optional[Command]:
        best = None
        best_p = 0.0
        for u in self.state.player_units(self.player_id):
            if u.attack_points <= 0:
                continue
            max_distance = object_types.max_attack_distance(u)
            for t in self.state.enemy_units(self.player_id):
                if self.distance(u.pos, t.pos) > max_distance:
                    continue
                p = kill_chance(object_types, u, t)
                if p > best_p:
                    best = AttackUnit(u.id, t.id)
                    best_p = p
        return best

    def _advance(self, object_types: ObjectTypes) -> Optional[Command]:
        enemies = self.state.enemy_units(self.player_id)
        if self.pathfinder is None or not enemies:
            return None
        for u in self.state.player_units(self.player_id):
            if u.id in self._moved:
                continue
            self._moved.add(u.id)
            target = min(enemies, key=lambda t: self.distance(u.pos, t.pos))
            path = self.pathfinder.find_path(u.pos, target.pos)
            # Stop next to the target, within the unit's move budget
            steps = min(object_types.unit_type(u.type_id).move_points, len(path) - 2)
            if steps > 0:
                return Move(u.id, path.truncated(steps))
        return None

    def next_command(self, object_types: ObjectTypes) -> Command:
        if self.state is None:
            return EndTurn()
        return self._attack(object_types) or self._advance(object_types) or EndTurn()
