import pytest

from bossraid.domain.item import ItemType
from bossraid.repository.memory import ItemRepository, RepositoryError
from bossraid.usecase.item_usecase import ItemUseCase


@pytest.fixture
def repo():
    return ItemRepository()


@pytest.fixture
def usecase(repo):
    return ItemUseCase(repo)


def test_get_by_id_returns_repository_item(usecase, repo):
    assert usecase.get_by_id("dagger") is repo.get_by_id("dagger")
    assert usecase.get_by_id("dagger").name == "Dagger"


def test_get_by_id_missing_raises(usecase):
    with pytest.raises(RepositoryError, match="item not found"):
        usecase.get_by_id("missing")


def test_get_all_weapons(usecase):
    assert {w.id for w in usecase.get_all_weapons()} == {"longsword", "dagger", "bow", "axe"}


def test_get_all_armors(usecase):
    assert [a.name for a in usecase.get_all_armors()] == ["Leather Armor"]


def test_get_by_type(usecase):
    weapons = usecase.get_by_type(ItemType.WEAPON)
    assert weapons == usecase.get_all_weapons()
    assert usecase.get_by_type(ItemType.ARMOR) == usecase.get_all_armors()
    assert usecase.get_by_type("shield") == []