"""In-memory repositories for characters, games, items and rooms."""

from __future__ import annotations

import threading
from datetime import timedelta

from bossraid.domain.character import Character
from bossraid.domain.game import Game
from bossraid.domain.item import ArmorType, Item, ItemStats, ItemType, WeaponType
from bossraid.domain.room import Room


class RepositoryError(Exception):
    """A record was missing or already present."""


class CharacterRepository:
    """Characters kept in memory, keyed by their identifier."""

    def __init__(self) -> None:
        self._characters: dict[str, Character] = {}
        self._lock = threading.RLock()

    def create(self, character: Character) -> None:
        with self._lock:
            if character.id in self._characters:
                raise RepositoryError("character already exists")
            self._characters[character.id] = character

    def get_by_id(self, id: str) -> Character:
        with self._lock:
            try:
                return self._characters[id]
            except KeyError:
                raise RepositoryError("character not found") from None

    def update(self, character: Character) -> None:
        with self._lock:
            if character.id not in self._characters:
                raise RepositoryError("character not found")
            self._characters[character.id] = character

    def delete(self, id: str) -> None:
        with self._lock:
            if id not in self._characters:
                raise RepositoryError("character not found")
            del self._characters[id]


class GameRepository:
    """Games kept in memory, keyed by their identifier."""

    def __init__(self) -> None:
        self._games: dict[str, Game] = {}
        self._lock = threading.RLock()

    def create(self, game: Game) -> None:
        with self._lock:
            if game.id in self._games:
                raise RepositoryError("game already exists")
            self._games[game.id] = game

    def get(self, id: str) -> Game:
        with self._lock:
            try:
                return self._games[id]
            except KeyError:
                raise RepositoryError("game not found") from None

    def update(self, game: Game) -> None:
        with self._lock:
            if game.id not in self._games:
                raise RepositoryError("game not found")
            self._games[game.id] = game

    def delete(self, id: str) -> None:
        with self._lock:
            if id not in self._games:
                raise RepositoryError("game not found")
            del self._games[id]

    def list(self) -> list[Game]:
        with self._lock:
            return list(self._games.values())


class ItemRepository:
    """A fixed catalogue of weapons and armor."""

    def __init__(self) -> None:
        self._items: dict[str, Item] = {}
        self._lock = threading.RLock()
        self._add_weapon("longsword", "Longsword", "A standard longsword", WeaponType.LONGSWORD, 15, 1500)
        self._add_weapon("dagger", "Dagger", "A quick dagger", WeaponType.DAGGER, 8, 800)
        self._add_weapon("bow", "Bow", "A ranged bow", WeaponType.BOW, 12, 1200)
        self._add_weapon("axe", "Battle Axe", "A heavy battle axe", WeaponType.AXE, 20, 2000)
        self._add_armor("leather_armor", "Leather Armor", "Basic leather armor", ArmorType.LEATHER, 10)

    def _add_weapon(
        self,
        id: str,
        name: str,
        description: str,
        weapon_type: WeaponType,
        damage: int,
        attack_speed_ms: int,
    ) -> None:
        stats = ItemStats(
            damage=damage,
            attack_speed=timedelta(milliseconds=attack_speed_ms),
            weapon_type=weapon_type,
        )
        with self._lock:
            self._items[id] = Item(id, name, description, ItemType.WEAPON, stats)

    def _add_armor(
        self, id: str, name: str, description: str, armor_type: ArmorType, defense: int
    ) -> None:
        stats = ItemStats(defense=defense, armor_type=armor_type)
        with self._lock:
            self._items[id] = Item(id, name, description, ItemType.ARMOR, stats)

    def get_by_id(self, id: str) -> Item:
        with self._lock:
            try:
                return self._items[id]
            except KeyError:
                raise RepositoryError("item not found") from None

    def get_all_weapons(self) -> list[Item]:
        return self.get_by_type(ItemType.WEAPON)

    def get_all_armors(self) -> list[Item]:
        return self.get_by_type(ItemType.ARMOR)

    def get_by_type(self, item_type: ItemType | str) -> list[Item]:
        with self._lock:
            return [item for item in self._items.values() if item.type == item_type]


class RoomRepository:
    """Rooms kept in memory, keyed by their identifier."""

    def __init__(self) -> None:
        self._rooms: dict[str, Room] = {}
        self._lock = threading.RLock()

    def create(self, room: Room) -> None:
        with self._lock:
            if room.id in self._rooms:
                raise RepositoryError("room already exists")
            self._rooms[room.id] = room

    def get(self, id: str) -> Room:
        with self._lock:
            try:
                return self._rooms[id]
            except KeyError:
                raise RepositoryError("room not found") from None

    def update(self, room: Room) -> None:
        with self._lock:
            if room.id not in self._rooms:
                raise RepositoryError("room not found")
            self._rooms[room.id] = room

    def delete(self, id: str) -> None:
        with self._lock:
            if id not in self._rooms:
                raise RepositoryError("room not found")
            del self._rooms[id]

    def list(self) -> list[Room]:
        with self._lock:
            return list(self._rooms.values())