"""Bosses fought in a raid."""

from __future__ import annotations

import random
import string
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, NamedTuple

_ID_CHARSET = string.ascii_lowercase + string.ascii_uppercase + string.digits


class BossType(str, Enum):
    DRAGON = "dragon"
    OGRE = "ogre"
    DEMON = "demon"
    UNDEAD = "undead"


class _Profile(NamedTuple):
    name: str
    health: int
    attack_power: int
    defense: int
    attack_speed: int


_PROFILES = {
    BossType.DRAGON: _Profile("Ancient Dragon", 1000, 30, 20, 3000),
    BossType.OGRE: _Profile("Giant Ogre", 800, 25, 15, 2500),
    BossType.DEMON: _Profile("Infernal Demon", 700, 35, 10, 2000),
    BossType.UNDEAD: _Profile("Lich King", 600, 40, 5, 1800),
}
_UNKNOWN_PROFILE = _Profile("Unknown Boss", 500, 20, 10, 2000)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Boss:
    """A boss with health, attack power and an attack cooldown in milliseconds."""

    id: str
    name: str
    type: BossType | str
    health: int
    max_health: int
    attack_power: int
    defense: int
    attack_speed: int
    last_attack: datetime = field(default_factory=_now)

    def take_damage(self, damage: int) -> int:
        """Apply damage reduced by defense (at least 1) and return what was dealt."""
        actual = max(damage - self.defense, 1)
        self.health = max(self.health - actual, 0)
        return actual

    def is_defeated(self) -> bool:
        return self.health <= 0

    def can_attack(self) -> bool:
        return _now() - self.last_attack >= timedelta(milliseconds=self.attack_speed)

    def attack(self) -> int:
        """Record the attack time and return damage within 20% of attack power."""
        self.last_attack = _now()
        variation = self.attack_power * 0.2
        low = self.attack_power - variation
        high = self.attack_power + variation
        return int(low + random.random() * (high - low))

    def to_dict(self) -> dict[str, Any]:
        boss_type = self.type.value if isinstance(self.type, BossType) else self.type
        return {
            "id": self.id,
            "name": self.name,
            "type": boss_type,
            "health": self.health,
            "maxHealth": self.max_health,
            "attackPower": self.attack_power,
            "defense": self.defense,
            "attackSpeed": self.attack_speed,
            "lastAttack": self.last_attack.isoformat(),
        }


def generate_random_id() -> str:
    """Return eight random alphanumeric characters."""
    return "".join(random.choices(_ID_CHARSET, k=8))


def new_boss(boss_type: BossType | str) -> Boss:
    """Create a boss of the given type; unknown types get generic stats."""
    try:
        kind: BossType | str = BossType(boss_type)
    except ValueError:
        kind = boss_type
    profile = _PROFILES.get(kind, _UNKNOWN_PROFILE)
    return Boss(
        id="boss_" + generate_random_id(),
        name=profile.name,
        type=kind,
        health=profile.health,
        max_health=profile.health,
        attack_power=profile.attack_power,
        defense=profile.defense,
        attack_speed=profile.attack_speed,
    )


def random_boss_type() -> BossType:
    return random.choice(list(BossType))


def new_random_boss() -> Boss:
    return new_boss(random_boss_type())