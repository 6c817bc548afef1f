from pathlib import Path
from typing import List, Union

from .errors import InvalidReference, NotFound
from .model import Unit, UnitClass, UnitType, UnitTypeId, WeaponType, WeaponTypeId
from .schemas import ObjectTypesSchema

# Built-in statistics
BUILTIN_OBJECT_TYPES = {
    "weapon_types": [
        {"name": "cannon", "damage": 9, "ap": 9, "accuracy": 5, "max_distance": 5},
        {"name": "rifle", "damage": 2, "ap": 1, "accuracy": 5, "max_distance": 3},
    ],
    "unit_types": [
        {
            "name": "tank",
            "unit_class": "vehicle",
            "size": 6,
            "count": 1,
            "armor": 11,
            "toughness": 9,
            "weapon_skill": 5,
            "weapon": "cannon",
            "move_points": 5,
            "attack_points": 2,
        },
        {
            "name": "soldier",
            "unit_class": "infantry",
            "size": 4,
            "count": 4,
            "armor": 1,
            "toughness": 2,
            "weapon_skill": 5,
            "weapon": "rifle",
            "move_points": 3,
            "attack_points": 2,
        },
    ],
}

class ObjectTypes:
    """Read-only lookup of unit and weapon statistics."""

    def __init__(self, schema: ObjectTypesSchema):
        self._weapon_types: List[WeaponType] = [
            WeaponType(name=w.name, damage=w.damage, ap=w.ap,
                       accuracy=w.accuracy, max_distance=w.max_distance)
            for w in schema.weapon_types
        ]
        self._unit_types: List[UnitType] = [
            UnitType(
                name=u.name,
                unit_class=UnitClass(u.unit_class),
                size=u.size,
                count=u.count,
                armor=u.armor,
                toughness=u.toughness,
                weapon_skill=u.weapon_skill,
                weapon_type_id=self.weapon_type_id_by_name(u.weapon),
                move_points=u.move_points,
                attack_points=u.attack_points,
            )
            for u in schema.unit_types
        ]

    @classmethod
    def builtin(cls) -> "ObjectTypes":
        return cls(ObjectTypesSchema.model_validate(BUILTIN_OBJECT_TYPES))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ObjectTypes":
        """Load statistics from a JSON file shaped like BUILTIN_OBJECT_TYPES."""
        return cls(ObjectTypesSchema.model_validate_json(Path(path).read_text(encoding="utf-8")))

    def unit_type(self, type_id: UnitTypeId) -> UnitType:
        if not 0 <= type_id < len(self._unit_types):
            raise InvalidReference(f"No unit type with id = {type_id}")
        return self._unit_types[type_id]

    def weapon_type(self, weapon_type_id: WeaponTypeId) -> WeaponType:
        if not 0 <= weapon_type_id < len(self._weapon_types):
            raise InvalidReference(f"No weapon type with id = {weapon_type_id}")
        return self._weapon_types[weapon_type_id]

    def type_id_by_name(self, name: str) -> UnitTypeId:
        for type_id, unit_type in enumerate(self._unit_types):
            if unit_type.name == name:
                return type_id
        raise NotFound(f"No unit type with name: {name!r}")

    def weapon_type_id_by_name(self, name: str) -> WeaponTypeId:
        for weapon_type_id, weapon_type in enumerate(self._weapon_types):
            if weapon_type.name == name:
                return weapon_type_id
        raise NotFound(f"No weapon type with name: {name!r}")

    def unit_weapon(self, unit: Unit) -> WeaponType:
        return self.weapon_type(self.unit_type(unit.type_id).weapon_type_id)

    def max_attack_distance(self, unit: Unit) -> int:
        return self.unit_weapon(unit).max_distance
