import pytest

from bossraid.domain.character import BASE_ATTACK, BASE_DEFENSE, Character
from bossraid.domain.item import Item, ItemType
from bossraid.repository.memory import CharacterRepository, ItemRepository, RepositoryError
from bossraid.usecase.character_usecase import CharacterUseCase, CharacterUseCaseError


@pytest.fixture
def repos():
    return CharacterRepository(), ItemRepository()


@pytest.fixture
def uc(repos):
    return CharacterUseCase(*repos)


def test_create_fills_inventory_with_catalogue(uc, repos):
    _, items = repos
    character = uc.create("Aria", "p1")
    expected = {i.id for i in items.get_all_weapons() + items.get_all_armors()}
    assert set(character.inventory) == expected
    assert uc.get_by_id("p1") is character


def test_create_equips_first_weapon_and_armor(uc, repos):
    _, items = repos
    character = uc.create("Aria", "p1")
    weapon = items.get_all_weapons()[0]
    armor = items.get_all_armors()[0]
    assert character.equipment.weapon is weapon
    assert character.equipment.armor is armor
    assert character.stats.attack == BASE_ATTACK + weapon.stats.damage
    assert character.stats.defense == BASE_DEFENSE + armor.stats.defense


def test_create_twice_raises(uc):
    uc.create("Aria", "p1")
    with pytest.raises(RepositoryError, match="character already exists"):
        uc.create("Aria", "p1")


def test_create_without_items():
    class EmptyItems:
        def get_all_weapons(self):
            raise RepositoryError("item not found")

        def get_all_armors(self):
            return []

    uc = CharacterUseCase(CharacterRepository(), EmptyItems())
    character = uc.create("Bo", "p2")
    assert character.inventory == {}
    assert character.equipment.weapon is None
    assert character.stats.attack == BASE_ATTACK


def test_get_unknown_character(uc):
    with pytest.raises(RepositoryError, match="character not found"):
        uc.get_by_id("missing")


def test_equip_dagger(uc):
    uc.create("Aria", "p1")
    character = uc.equip_item("p1", "dagger")
    assert character.equipment.weapon.id == "dagger"
    assert character.attack_speed() == 800


def test_equip_item_not_in_inventory(uc):
    uc.create("Aria", "p1")
    with pytest.raises(CharacterUseCaseError, match="item not found in inventory"):
        uc.equip_item("p1", "nothing")


def test_equip_item_of_other_type(uc):
    character = uc.create("Aria", "p1")
    character.add_item_to_inventory(Item("potion", "Potion", "Heals", "potion"))
    with pytest.raises(CharacterUseCaseError, match="item cannot be equipped"):
        uc.equip_item("p1", "potion")


def test_unequip_weapon_and_armor(uc):
    uc.create("Aria", "p1")
    uc.unequip_item("p1", ItemType.WEAPON)
    character = uc.unequip_item("p1", "armor")
    assert character.equipment.weapon is None
    assert character.equipment.armor is None
    assert (character.stats.attack, character.stats.defense) == (BASE_ATTACK, BASE_DEFENSE)


def test_unequip_invalid_type(uc):
    uc.create("Aria", "p1")
    with pytest.raises(CharacterUseCaseError, match="invalid item type"):
        uc.unequip_item("p1", "potion")


def test_add_item_to_inventory(repos):
    characters, items = repos
    characters.create(Character("p3", "Cy"))
    uc = CharacterUseCase(characters, items)
    character = uc.add_item_to_inventory("p3", "bow")
    assert character.inventory["bow"] is items.get_by_id("bow")


def test_add_unknown_item(uc):
    uc.create("Aria", "p1")
    with pytest.raises(RepositoryError, match="item not found"):
        uc.add_item_to_inventory("p1", "unknown")