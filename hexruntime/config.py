from pathlib import Path
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, Field, model_validator

class PlayerConfig(BaseModel):
    """Player slot schema. Slot index is the player id."""
    scripted: bool = False

class UnitPlacement(BaseModel):
    """Initial unit schema."""
    type: str
    pos: Tuple[int, int]
    player: int = Field(ge=0)
    attached: Optional[str] = None  # Type name of a towed unit created alongside

def _default_scenario() -> List[UnitPlacement]:
    """Two mirrored lines of tanks and soldiers on a 10x8 map."""
    line = ["tank", "soldier", "soldier", "soldier", "tank", "tank"]
    placements = []
    for player, col in ((0, 0), (1, 9)):
        for row, name in enumerate(line, start=1):
            placements.append(UnitPlacement(type=name, pos=(col, row), player=player))
    return placements

class GameConfig(BaseModel):
    """Game setup schema."""
    seed: Optional[int] = None
    players: List[PlayerConfig] = Field(
        default_factory=lambda: [PlayerConfig(), PlayerConfig(scripted=True)])
    default_unit_type: str = "soldier"
    scenario: List[UnitPlacement] = Field(default_factory=_default_scenario)
    max_scripted_commands: int = Field(default=1000, ge=1)
    max_scripted_turns: int = Field(default=100, ge=1)

    @model_validator(mode="after")
    def _check_players(self) -> "GameConfig":
        if len(self.players) < 2:
            raise ValueError("at least two players are required")
        for p in self.scenario:
            if p.player >= len(self.players):
                raise ValueError(f"scenario places a unit for unknown player {p.player}")
        return self

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "GameConfig":
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))
