from typing import List, Mapping, Optional

from loguru import logger

from hexcore.combat import CombatResolver, RandomSource
from hexcore.engine import CommandResolver
from hexcore.geometry import DistanceFn, hex_distance
from hexcore.model import (
    Command,
    CommandResult,
    CoreEvent,
    CreateUnitEvent,
    Player,
    PlayerId,
    Unit,
    UnitId,
)
from hexcore.registry import ObjectTypes
from hexcore.rng import DRNG
from hexcore.state import WorldState
from .config import GameConfig, UnitPlacement
from .distributor import EventDistributor, Redactor, broadcast_all
from .eventlog import EventLog
from .policy import GreedyPolicy, Pathfinder, ScriptedPolicy
from .turns import TurnController

class Game:
    """
    Entry point of the simulation core.

    Owns canonical state, the replay log, the per-player queues and the turn
    controller. One submit() call resolves, applies and publishes a whole
    command, including any scripted turns it hands over to.
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 object_types: Optional[ObjectTypes] = None,
                 rng: Optional[RandomSource] = None,
                 policies: Optional[Mapping[PlayerId, ScriptedPolicy]] = None,
                 distance: DistanceFn = hex_distance,
                 redact: Redactor = broadcast_all,
                 pathfinder: Optional[Pathfinder] = None):
        self.config = config if config is not None else GameConfig()
        self.object_types = object_types if object_types is not None else ObjectTypes.builtin()
        self.rng = rng if rng is not None else DRNG(self.config.seed)
        self.players = [Player(i, p.scripted) for i, p in enumerate(self.config.players)]
        self.state = WorldState(self.object_types)
        self.resolver = CommandResolver(
            self.state,
            self.object_types,
            CombatResolver(self.object_types, self.rng),
            player_count=len(self.players),
            default_type_id=self.object_types.type_id_by_name(self.config.default_unit_type),
            distance=distance,
        )
        self.log = EventLog()
        self.distributor = EventDistributor([p.id for p in self.players], redact)
        all_policies = dict(policies or {})
        for p in self.players:
            if p.is_scripted and p.id not in all_policies:
                all_policies[p.id] = GreedyPolicy(p.id, pathfinder=pathfinder, distance=distance)
        self.turns = TurnController(
            self.players,
            self.distributor,
            self.object_types,
            all_policies,
            max_scripted_commands=self.config.max_scripted_commands,
            max_scripted_turns=self.config.max_scripted_turns,
        )
        self._started = False

    @property
    def current_player(self) -> PlayerId:
        return self.turns.current_id

    def units(self) -> List[Unit]:
        return list(self.state.units.values())

    def unit(self, unit_id: UnitId) -> Unit:
        return self.state.unit(unit_id)

    def start(self) -> None:
        """Place the scenario's units and play scripted turns if a scripted player opens."""
        if self._started:
            return
        self._started = True
        for placement in self.config.scenario:
            self._place(placement)
        self.turns.play_scripted(self._execute)

    def _place(self, placement: UnitPlacement) -> None:
        attached_id = None
        if placement.attached is not None:
            attached_id = self.state.new_unit_id()
            self._apply(CreateUnitEvent(
                unit_id=attached_id,
                pos=placement.pos,
                type_id=self.object_types.type_id_by_name(placement.attached),
                player_id=placement.player,
            ))
        self._apply(CreateUnitEvent(
            unit_id=self.state.new_unit_id(),
            pos=placement.pos,
            type_id=self.object_types.type_id_by_name(placement.type),
            player_id=placement.player,
            attached_unit_id=attached_id,
        ))

    def submit(self, command: Command) -> CommandResult:
        """Play one command for the current player."""
        if not self._started:
            raise RuntimeError("Game not started")
        result = self._execute(command)
        if result.ok:
            self.turns.play_scripted(self._execute)
        return result

    def take(self, player_id: PlayerId) -> Optional[CoreEvent]:
        """Oldest unconsumed event for `player_id`, or None."""
        return self.distributor.take(player_id)

    def replay(self) -> WorldState:
        """Canonical state rebuilt from the event log."""
        return WorldState.replay(self.object_types, self.log.all())

    def _execute(self, command: Command) -> CommandResult:
        player_id = self.turns.current_id
        reason = self.resolver.rejection_reason(command, player_id)
        evts = [] if reason is not None else self.resolver.events_for(command, player_id)
        if not evts:
            reason = reason or "command produced no events"
            logger.warning("BAD COMMAND from player {}: {!r} ({})", player_id, command, reason)
            return CommandResult.rejected(command, reason)
        for e in evts:
            self._apply(e)
        return CommandResult.accepted(command, evts)

    def _apply(self, event: CoreEvent) -> None:
        self.state.apply(event)
        self.log.append(event)
        self.distributor.publish(event)
        self.turns.on_event(event)
