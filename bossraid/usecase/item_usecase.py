"""Read access to the item catalogue."""

from __future__ import annotations

from typing import Any

from bossraid.domain.item import Item, ItemType


class ItemUseCase:
    """Looks up items through an item repository."""

    def __init__(self, item_repo: Any) -> None:
        self._item_repo = item_repo

    def get_by_id(self, id: str) -> Item:
        return self._item_repo.get_by_id(id)

    def get_all_weapons(self) -> list[Item]:
        return self._item_repo.get_all_weapons()

    def get_all_armors(self) -> list[Item]:
        return self._item_repo.get_all_armors()

    def get_by_type(self, item_type: ItemType | str) -> list[Item]:
        return self._item_repo.get_by_type(item_type)