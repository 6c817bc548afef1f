from typing import Callable, Dict, List, Mapping

from loguru import logger

from hexcore.errors import InvalidReference, ScriptedPolicyError
from hexcore.model import Command, CommandResult, CoreEvent, EndTurn, EndTurnEvent, Player, PlayerId
from hexcore.registry import ObjectTypes
from .distributor import EventDistributor
from .policy import ScriptedPolicy

Executor = Callable[[Command], CommandResult]

class TurnController:
    """Tracks whose turn it is and plays scripted turns to completion."""

    def __init__(self, players: List[Player], distributor: EventDistributor,
                 object_types: ObjectTypes, policies: Mapping[PlayerId, ScriptedPolicy],
                 max_scripted_commands: int = 1000, max_scripted_turns: int = 100):
        for p in players:
            if p.is_scripted and p.id not in policies:
                raise ValueError(f"Scripted player {p.id} has no policy")
        self.players = players
        self.distributor = distributor
        self.object_types = object_types
        self.policies: Dict[PlayerId, ScriptedPolicy] = dict(policies)
        self.max_scripted_commands = max_scripted_commands
        self.max_scripted_turns = max_scripted_turns
        self.current_id: PlayerId = players[0].id

    @property
    def current(self) -> Player:
        return self.player(self.current_id)

    def player(self, player_id: PlayerId) -> Player:
        for p in self.players:
            if p.id == player_id:
                return p
        raise InvalidReference(f"No player with id = {player_id}")

    def on_event(self, event: CoreEvent) -> None:
        """Follow applied events; only EndTurn changes the current player."""
        if isinstance(event, EndTurnEvent) and event.old_id == self.current_id:
            self.current_id = self.player(event.new_id).id
            logger.info("Turn passes from player {} to player {}", event.old_id, event.new_id)

    def play_scripted(self, execute: Executor) -> None:
        """Play scripted turns until a human player is to move."""
        turns = 0
        while self.current.is_scripted:
            if turns >= self.max_scripted_turns:
                logger.warning("Stopping after {} consecutive scripted turns", turns)
                return
            self._play_turn(self.current, execute)
            turns += 1

    def _play_turn(self, player: Player, execute: Executor) -> None:
        policy = self.policies[player.id]
        logger.info("Scripted turn of player {} begins", player.id)
        for _ in range(self.max_scripted_commands):
            for event in self.distributor.drain(player.id):
                policy.observe(self.object_types, event)
            command = policy.next_command(self.object_types)
            result = execute(command)
            if result.ok and isinstance(command, EndTurn):
                logger.info("Scripted turn of player {} ends", player.id)
                return
        raise ScriptedPolicyError(
            f"Player {player.id} issued {self.max_scripted_commands} commands without ending the turn")
