from datetime import timedelta

import pytest

from bossraid.domain.boss import (
    BossType,
    generate_random_id,
    new_boss,
    new_random_boss,
    random_boss_type,
)

NAMES = {"Ancient Dragon", "Giant Ogre", "Infernal Demon", "Lich King"}


def test_dragon_profile():
    boss = new_boss(BossType.DRAGON)
    assert boss.name == "Ancient Dragon"
    assert boss.max_health == 1000
    assert boss.health == boss.max_health
    assert boss.attack_speed == 3000
    assert boss.type is BossType.DRAGON


def test_boss_type_given_as_string():
    boss = new_boss("ogre")
    assert boss.type is BossType.OGRE
    assert boss.name == "Giant Ogre"
    assert boss.max_health == 800


@pytest.mark.parametrize("kind", list(BossType))
def test_every_type_starts_at_full_health(kind):
    boss = new_boss(kind)
    assert boss.name in NAMES
    assert boss.health == boss.max_health
    assert not boss.is_defeated()


def test_unknown_type_gets_generic_stats():
    boss = new_boss("slime")
    assert boss.name == "Unknown Boss"
    assert boss.max_health == 500
    assert boss.type == "slime"


def test_boss_id_prefix_and_length():
    boss = new_boss(BossType.DEMON)
    assert boss.id.startswith("boss_")
    assert len(boss.id) == len("boss_") + 8


def test_take_damage_minimum_one():
    boss = new_boss(BossType.DRAGON)
    dealt = boss.take_damage(0)
    assert dealt == 1
    assert boss.health == boss.max_health - dealt


def test_take_damage_reduced_by_defense():
    boss = new_boss(BossType.UNDEAD)
    dealt = boss.take_damage(boss.defense + 7)
    assert dealt == 7
    assert boss.health == boss.max_health - 7


def test_overkill_clamps_to_zero():
    boss = new_boss(BossType.OGRE)
    boss.take_damage(10**6)
    assert boss.health == 0
    assert boss.is_defeated()


def test_attack_within_variation_and_resets_cooldown():
    boss = new_boss(BossType.DEMON)
    boss.last_attack -= timedelta(seconds=60)
    assert boss.can_attack()
    for _ in range(100):
        damage = boss.attack()
        assert boss.attack_power * 0.8 - 1 < damage <= boss.attack_power * 1.2
    assert not boss.can_attack()


def test_fresh_boss_cannot_attack_immediately():
    assert not new_boss(BossType.DRAGON).can_attack()


def test_random_boss_type_covers_all_types():
    seen = {random_boss_type() for _ in range(400)}
    assert seen == set(BossType)


def test_new_random_boss_is_known_type():
    boss = new_random_boss()
    assert boss.type in set(BossType)
    assert boss.name in NAMES


def test_generate_random_id_is_alphanumeric():
    for _ in range(50):
        value = generate_random_id()
        assert len(value) == 8
        assert value.isalnum() and value.isascii()


def test_to_dict_fields():
    boss = new_boss(BossType.DRAGON)
    data = boss.to_dict()
    assert data["type"] == "dragon"
    assert data["maxHealth"] == boss.max_health
    assert data["name"] == "Ancient Dragon"
    assert data["lastAttack"] == boss.last_attack.isoformat()