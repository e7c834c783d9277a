"""Character creation, equipment and inventory management."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from bossraid.domain.character import Character
from bossraid.domain.item import Item, ItemType
from bossraid.repository.memory import RepositoryError


class CharacterUseCaseError(Exception):
    """A character request could not be carried out."""


def _items_or_empty(fetch: Callable[[], list[Item]]) -> list[Item]:
    try:
        return list(fetch())
    except RepositoryError:
        return []


class CharacterUseCase:
    """Works on characters through a character and an item repository."""

    def __init__(self, character_repo: Any, item_repo: Any) -> None:
        self._character_repo = character_repo
        self._item_repo = item_repo

    def create(self, name: str, player_id: str) -> Character:
        """Create a character holding every catalogue item, with the first weapon
        and the first armor equipped."""
        character = Character(player_id, name)
        weapons = _items_or_empty(self._item_repo.get_all_weapons)
        armors = _items_or_empty(self._item_repo.get_all_armors)
        for item in [*weapons, *armors]:
            character.add_item_to_inventory(item)
        if weapons:
            character.equip_weapon(weapons[0].id)
        if armors:
            character.equip_armor(armors[0].id)
        self._character_repo.create(character)
        return character

    def get_by_id(self, id: str) -> Character:
        return self._character_repo.get_by_id(id)

    def equip_item(self, character_id: str, item_id: str) -> Character:
        """Equip an item from the character's inventory as weapon or armor."""
        character = self._character_repo.get_by_id(character_id)
        item = character.inventory.get(item_id)
        if item is None:
            raise CharacterUseCaseError("item not found in inventory")
        if item.type == ItemType.WEAPON:
            character.equip_weapon(item_id)
        elif item.type == ItemType.ARMOR:
            character.equip_armor(item_id)
        else:
            raise CharacterUseCaseError("item cannot be equipped")
        self._character_repo.update(character)
        return character

    def unequip_item(self, character_id: str, item_type: ItemType | str) -> Character:
        """Remove the equipped weapon or armor."""
        character = self._character_repo.get_by_id(character_id)
        if item_type == ItemType.WEAPON:
            character.unequip_weapon()
        elif item_type == ItemType.ARMOR:
            character.unequip_armor()
        else:
            raise CharacterUseCaseError("invalid item type")
        self._character_repo.update(character)
        return character

    def add_item_to_inventory(self, character_id: str, item_id: str) -> Character:
        """Put a catalogue item into the character's inventory."""
        character = self._character_repo.get_by_id(character_id)
        item = self._item_repo.get_by_id(item_id)
        character.add_item_to_inventory(item)
        self._character_repo.update(character)
        return character