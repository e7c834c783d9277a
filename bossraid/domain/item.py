"""Items that characters carry and equip."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any


class ItemType(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"


class WeaponType(str, Enum):
    LONGSWORD = "longsword"
    DAGGER = "dagger"
    BOW = "bow"
    AXE = "axe"


class ArmorType(str, Enum):
    LEATHER = "leather"


@dataclass
class ItemStats:
    """Combat statistics of an item."""

    defense: int = 0
    damage: int = 0
    attack_speed: timedelta = timedelta(0)
    weapon_type: WeaponType | None = None
    armor_type: ArmorType | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON form; the attack speed is given in nanoseconds."""
        result: dict[str, Any] = {
            "defense": self.defense,
            "damage": self.damage,
            "attackSpeed": (self.attack_speed // timedelta(microseconds=1)) * 1000,
        }
        if self.weapon_type:
            result["weaponType"] = WeaponType(self.weapon_type).value
        if self.armor_type:
            result["armorType"] = ArmorType(self.armor_type).value
        return result


@dataclass
class Item:
    """An item in the game."""

    id: str
    name: str
    description: str
    type: ItemType
    stats: ItemStats = field(default_factory=ItemStats)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": ItemType(self.type).value,
            "stats": self.stats.to_dict(),
        }