"""Player characters, their inventory, equipment and stats."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from bossraid.domain.item import Item, ItemType

BASE_HEALTH = 100
BASE_ATTACK = 10
BASE_DEFENSE = 5
DEFAULT_ATTACK_SPEED_MS = 1000


class CharacterError(Exception):
    """A character operation could not be carried out."""


@dataclass
class Equipment:
    """The items a character has equipped."""

    weapon: Item | None = None
    armor: Item | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "weapon": self.weapon.to_dict() if self.weapon else None,
            "armor": self.armor.to_dict() if self.armor else None,
        }


@dataclass
class CharacterStats:
    """Health, attack and defense of a character."""

    health: int = BASE_HEALTH
    attack: int = BASE_ATTACK
    defense: int = BASE_DEFENSE

    def to_dict(self) -> dict[str, Any]:
        return {"health": self.health, "attack": self.attack, "defense": self.defense}


@dataclass
class Character:
    """A player character."""

    id: str
    name: str
    inventory: dict[str, Item] = field(default_factory=dict)
    equipment: Equipment = field(default_factory=Equipment)
    stats: CharacterStats = field(default_factory=CharacterStats)

    def add_item_to_inventory(self, item: Item) -> None:
        self.inventory[item.id] = item

    def remove_item_from_inventory(self, item_id: str) -> None:
        if item_id not in self.inventory:
            raise CharacterError("item not found in inventory")
        del self.inventory[item_id]

    def _inventory_item(self, item_id: str) -> Item:
        try:
            return self.inventory[item_id]
        except KeyError:
            raise CharacterError("item not found in inventory") from None

    def equip_weapon(self, item_id: str) -> None:
        """Equip a weapon from the inventory and recompute stats."""
        item = self._inventory_item(item_id)
        if item.type != ItemType.WEAPON:
            raise CharacterError("item is not a weapon")
        self.equipment.weapon = item
        self.update_stats()

    def equip_armor(self, item_id: str) -> None:
        """Equip armor from the inventory and recompute stats."""
        item = self._inventory_item(item_id)
        if item.type != ItemType.ARMOR:
            raise CharacterError("item is not armor")
        self.equipment.armor = item
        self.update_stats()

    def unequip_weapon(self) -> None:
        self.equipment.weapon = None
        self.update_stats()

    def unequip_armor(self) -> None:
        self.equipment.armor = None
        self.update_stats()

    def update_stats(self) -> None:
        """Reset to base stats and add the bonuses of equipped items."""
        self.stats.health = BASE_HEALTH
        self.stats.attack = BASE_ATTACK
        self.stats.defense = BASE_DEFENSE
        if self.equipment.weapon is not None:
            self.stats.attack += self.equipment.weapon.stats.damage
        if self.equipment.armor is not None:
            self.stats.defense += self.equipment.armor.stats.defense

    def attack_speed(self) -> int:
        """Milliseconds between attacks, set by the equipped weapon."""
        if self.equipment.weapon is None:
            return DEFAULT_ATTACK_SPEED_MS
        return self.equipment.weapon.stats.attack_speed // timedelta(milliseconds=1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "inventory": {key: item.to_dict() for key, item in self.inventory.items()},
            "equipment": self.equipment.to_dict(),
            "stats": self.stats.to_dict(),
        }