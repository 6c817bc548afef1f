from typing import List, Literal
from pydantic import BaseModel, Field

class WeaponTypeSchema(BaseModel):
    """Weapon record schema."""
    name: str
    damage: int
    ap: int
    accuracy: int
    max_distance: int = Field(ge=0)

class UnitTypeSchema(BaseModel):
    """Unit type record schema. `weapon` names a weapon record."""
    name: str
    unit_class: Literal["vehicle", "infantry"]
    size: int
    count: int = Field(ge=1)
    armor: int
    toughness: int
    weapon_skill: int
    weapon: str
    move_points: int = Field(ge=0)
    attack_points: int = Field(ge=0)

class ObjectTypesSchema(BaseModel):
    """Unit and weapon statistics file schema."""
    weapon_types: List[WeaponTypeSchema]
    unit_types: List[UnitTypeSchema]
