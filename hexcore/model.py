from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .errors import RejectedCommand
from .geometry import MapPath, MapPos

PlayerId = int
UnitId = int
UnitTypeId = int
WeaponTypeId = int

class UnitClass(Enum):
    """Unit classification"""
    VEHICLE = "vehicle"
    INFANTRY = "infantry"

class FireMode(Enum):
    """Who initiated an attack"""
    ACTIVE = "active"      # Attacker-initiated
    REACTIVE = "reactive"  # Interrupt fire from an idle hostile unit

@dataclass(frozen=True)
class WeaponType:
    """Template defining a weapon system"""
    name: str
    damage: int
    ap: int  # Armor penetration
    accuracy: int
    max_distance: int  # In hexes

@dataclass(frozen=True)
class UnitType:
    """Template defining characteristics of a unit type"""
    name: str
    unit_class: UnitClass
    size: int
    count: int  # Models in a fresh stack
    armor: int
    toughness: int
    weapon_skill: int
    weapon_type_id: WeaponTypeId
    move_points: int
    attack_points: int

@dataclass
class Unit:
    id: UnitId
    pos: MapPos
    type_id: UnitTypeId
    player_id: PlayerId
    count: int
    attack_points: int
    attached_unit_id: Optional[UnitId] = None

@dataclass(frozen=True)
class Player:
    id: PlayerId
    is_scripted: bool = False

# --- Commands (player intent) ---

@dataclass(frozen=True)
class EndTurn:
    pass

@dataclass(frozen=True)
class CreateUnit:
    pos: MapPos

@dataclass(frozen=True)
class Move:
    unit_id: UnitId
    path: MapPath

@dataclass(frozen=True)
class AttackUnit:
    attacker_id: UnitId
    defender_id: UnitId

Command = Union[EndTurn, CreateUnit, Move, AttackUnit]

# --- Core events (canonical facts) ---

@dataclass(frozen=True)
class MoveEvent:
    unit_id: UnitId
    path: MapPath

@dataclass(frozen=True)
class EndTurnEvent:
    old_id: PlayerId
    new_id: PlayerId

@dataclass(frozen=True)
class CreateUnitEvent:
    unit_id: UnitId
    pos: MapPos
    type_id: UnitTypeId
    player_id: PlayerId
    attached_unit_id: Optional[UnitId] = None

@dataclass(frozen=True)
class AttackUnitEvent:
    attacker_id: UnitId
    defender_id: UnitId
    mode: FireMode
    killed: bool

CoreEvent = Union[MoveEvent, EndTurnEvent, CreateUnitEvent, AttackUnitEvent]

class CommandStatus(Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"

@dataclass
class CommandResult:
    """Outcome of submitting one command"""
    command: Command
    status: CommandStatus
    events: List[CoreEvent] = field(default_factory=list)
    reason: Optional[str] = None

    @classmethod
    def accepted(cls, command: Command, events: List[CoreEvent]) -> "CommandResult":
        return cls(command, CommandStatus.ACCEPTED, list(events))

    @classmethod
    def rejected(cls, command: Command, reason: str) -> "CommandResult":
        return cls(command, CommandStatus.REJECTED, [], reason)

    @property
    def ok(self) -> bool:
        return self.status == CommandStatus.ACCEPTED

    def raise_for_status(self) -> None:
        """Raise RejectedCommand if the command produced no events."""
        if not self.ok:
            raise RejectedCommand(self.command, self.reason or "rejected")
