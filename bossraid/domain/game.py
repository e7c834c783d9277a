"""A boss raid game: players, the boss, the event log and rewards."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from bossraid.domain.boss import Boss, generate_random_id, new_boss, random_boss_type
from bossraid.domain.character import Character

MAX_PLAYERS = 3


class GameError(Exception):
    """A game operation could not be carried out."""


class GameState(str, Enum):
    WAITING = "waiting"
    READY = "ready"
    PLAYING = "playing"
    FINISHED = "finished"


class GameResult(str, Enum):
    NONE = "none"
    VICTORY = "victory"
    DEFEAT = "defeat"
    ABORT = "abort"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _jsonable(data: Any) -> Any:
    if hasattr(data, "to_dict"):
        return data.to_dict()
    if isinstance(data, dict):
        return {key: _jsonable(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [_jsonable(value) for value in data]
    if isinstance(data, Enum):
        return data.value
    if isinstance(data, datetime):
        return data.isoformat()
    return data


@dataclass
class Player:
    """A player taking part in a game."""

    id: str
    name: str
    ready: bool = False
    character: Character | None = None
    last_attack: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        if self.character is None:
            self.character = Character(self.id, self.name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "ready": self.ready,
            "character": self.character.to_dict() if self.character else None,
            "lastAttack": self.last_attack.isoformat(),
        }


@dataclass
class Reward:
    """A reward for defeating the boss."""

    id: str
    name: str
    description: str
    type: str
    value: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "value": self.value,
        }


@dataclass
class GameEvent:
    """An entry in the game's event log."""

    type: str
    description: str
    data: Any = None
    time: datetime = field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        result = {
            "time": self.time.isoformat(),
            "type": self.type,
            "description": self.description,
        }
        if self.data is not None:
            result["data"] = _jsonable(self.data)
        return result


def generate_random_rewards() -> list[Reward]:
    """Gold worth 100-999, and half the time a mystery item worth 50-249."""
    rewards = [
        Reward(
            id="reward_" + generate_random_id(),
            name="Gold",
            description="A pile of gold coins",
            type="gold",
            value=100 + random.randrange(900),
        )
    ]
    if random.random() < 0.5:
        item_type = random.choice(["weapon", "armor", "potion"])
        rewards.append(
            Reward(
                id="reward_" + generate_random_id(),
                name="Mystery " + item_type,
                description="A mysterious " + item_type,
                type=item_type,
                value=50 + random.randrange(200),
            )
        )
    return rewards


@dataclass
class Game:
    """A boss raid for up to three players."""

    id: str
    room_id: str
    state: GameState = GameState.WAITING
    result: GameResult = GameResult.NONE
    players: dict[str, Player] = field(default_factory=dict)
    boss: Boss | None = None
    rewards: dict[str, list[Reward]] = field(default_factory=dict)
    start_time: datetime | None = None
    end_time: datetime | None = None
    events: list[GameEvent] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    def _player(self, id: str) -> Player:
        try:
            return self.players[id]
        except KeyError:
            raise GameError("player not in game") from None

    def add_player(self, id: str, name: str) -> Player:
        """Add a new player with a fresh character."""
        if len(self.players) >= MAX_PLAYERS:
            raise GameError("game is full")
        if id in self.players:
            raise GameError("player already in game")
        player = Player(id, name)
        self.players[id] = player
        self.add_event("player_join", f"{name} joined the game", player)
        self.updated_at = _now()
        return player

    def remove_player(self, id: str) -> None:
        player = self._player(id)
        del self.players[id]
        self.add_event("player_leave", f"{player.name} left the game", None)
        self.updated_at = _now()

    def set_player_ready(self, id: str) -> None:
        """Mark the player ready; start once all three players are ready."""
        player = self._player(id)
        player.ready = True
        self.add_event("player_ready", f"{player.name} is ready", player)
        self.updated_at = _now()
        if len(self.players) == MAX_PLAYERS and all(p.ready for p in self.players.values()):
            self.start_game()

    def start_game(self) -> None:
        self.state = GameState.PLAYING
        self.start_time = _now()
        self.boss = new_boss(random_boss_type())
        self.add_event("game_start", f"The battle against {self.boss.name} has begun!", self.boss)
        self.updated_at = _now()

    def end_game(self, result: GameResult) -> None:
        """Finish the game; a victory hands out rewards."""
        self.state = GameState.FINISHED
        self.result = result
        self.end_time = _now()
        self.updated_at = _now()
        boss_name = self.boss.name if self.boss else ""
        if result == GameResult.VICTORY:
            self.generate_rewards()
            self.add_event("game_end", f"Victory! The {boss_name} has been defeated!", self.rewards)
        else:
            self.add_event(
                "game_end", f"Defeat! The party has been wiped out by the {boss_name}!", None
            )

    def generate_rewards(self) -> None:
        for player_id in self.players:
            self.rewards[player_id] = generate_random_rewards()

    def add_event(self, event_type: str, description: str, data: Any) -> None:
        self.events.append(GameEvent(event_type, description, data))

    def player_can_attack(self, player_id: str) -> bool:
        """True if the player's weapon cooldown has passed."""
        player = self.players.get(player_id)
        if player is None:
            return False
        cooldown = timedelta(milliseconds=player.character.attack_speed())
        return _now() - player.last_attack >= cooldown

    def player_attack(self, player_id: str) -> int:
        """Strike the boss and return the damage dealt."""
        if self.state != GameState.PLAYING:
            raise GameError("game is not in progress")
        player = self._player(player_id)
        if not self.player_can_attack(player_id):
            raise GameError("player cannot attack yet")
        player.last_attack = _now()
        damage = self.boss.take_damage(player.character.stats.attack)
        self.add_event(
            "player_attack",
            f"{player.name} attacked the {self.boss.name} for {damage} damage",
            {"playerID": player_id, "damage": damage},
        )
        if self.boss.is_defeated():
            self.end_game(GameResult.VICTORY)
        self.updated_at = _now()
        return damage

    def boss_attack(self) -> None:
        """Let the boss strike a random player if its cooldown has passed."""
        if self.state != GameState.PLAYING or self.boss is None or self.boss.is_defeated():
            return
        if not self.boss.can_attack() or not self.players:
            return
        target = random.choice(list(self.players.values()))
        stats = target.character.stats
        damage = max(self.boss.attack() - stats.defense, 1)
        stats.health -= damage
        self.add_event(
            "boss_attack",
            f"{self.boss.name} attacked {target.name} for {damage} damage",
            {"playerID": target.id, "damage": damage},
        )
        if stats.health <= 0:
            stats.health = 0
            self.add_event("player_defeated", f"{target.name} has been defeated!", target)
            if all(p.character.stats.health <= 0 for p in self.players.values()):
                self.end_game(GameResult.DEFEAT)
        self.updated_at = _now()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "roomId": self.room_id,
            "state": self.state.value,
            "result": self.result.value,
            "players": {key: p.to_dict() for key, p in self.players.items()},
            "boss": self.boss.to_dict() if self.boss else None,
            "rewards": _jsonable(self.rewards),
            "startTime": self.start_time.isoformat() if self.start_time else None,
            "endTime": self.end_time.isoformat() if self.end_time else None,
            "events": [event.to_dict() for event in self.events],
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }