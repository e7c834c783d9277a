"""Game flow: creating, joining, readying, attacking and boss turns."""

from __future__ import annotations

import random
import uuid
from datetime import datetime, timezone
from typing import Any, NamedTuple

from bossraid.domain.boss import new_random_boss
from bossraid.domain.character import CharacterError
from bossraid.domain.game import Game, GameError, GameResult, GameState, Player
from bossraid.domain.item import ItemType
from bossraid.repository.memory import RepositoryError

_FAILURES = (RepositoryError, GameError, CharacterError)


class GameUseCaseError(Exception):
    """A game request could not be carried out."""


class BossAction(NamedTuple):
    """The outcome of a boss turn: the game, the player struck and the damage."""

    game: Game
    target: Player
    damage: int


def _now() -> datetime:
    return datetime.now(timezone.utc)


class GameUseCase:
    """Runs games stored in a game repository."""

    def __init__(self, game_repo: Any) -> None:
        self._game_repo = game_repo

    def _load(self, game_id: str) -> Game:
        try:
            return self._game_repo.get(game_id)
        except _FAILURES as exc:
            raise GameUseCaseError(f"failed to get game: {exc}") from exc

    def _save(self, game: Game) -> None:
        game.updated_at = _now()
        try:
            self._game_repo.update(game)
        except _FAILURES as exc:
            raise GameUseCaseError(f"failed to update game: {exc}") from exc

    @staticmethod
    def _require_playing(game: Game) -> None:
        if game.state != GameState.PLAYING:
            raise GameUseCaseError("game is not in playing state")

    def create(self, room_id: str) -> Game:
        """Create a waiting game with a random boss for the room."""
        game = Game(str(uuid.uuid4()), room_id)
        game.boss = new_random_boss()
        try:
            self._game_repo.create(game)
        except _FAILURES as exc:
            raise GameUseCaseError(f"failed to create game: {exc}") from exc
        return game

    def get(self, id: str) -> Game:
        return self._game_repo.get(id)

    def list(self) -> list[Game]:
        return self._game_repo.list()

    def join(self, game_id: str, player_id: str, player_name: str) -> Game:
        game = self._load(game_id)
        if game.state != GameState.WAITING:
            raise GameUseCaseError("game is not in waiting state")
        try:
            game.add_player(player_id, player_name)
        except _FAILURES as exc:
            raise GameUseCaseError(f"failed to add player to game: {exc}") from exc
        self._save(game)
        return game

    def ready(self, game_id: str, player_id: str) -> Game:
        game = self._load(game_id)
        if game.state != GameState.WAITING:
            raise GameUseCaseError("game is not in waiting state")
        try:
            game.set_player_ready(player_id)
        except _FAILURES as exc:
            raise GameUseCaseError(f"failed to set player ready: {exc}") from exc
        self._save(game)
        return game

    def attack(self, game_id: str, player_id: str) -> Game:
        game = self._load(game_id)
        self._require_playing(game)
        if player_id not in game.players:
            raise GameUseCaseError("player not in game")
        try:
            game.player_attack(player_id)
        except _FAILURES as exc:
            raise GameUseCaseError(f"failed to perform attack: {exc}") from exc
        self._save(game)
        return game

    def process_boss_attack(self, game_id: str) -> Game:
        game = self._load(game_id)
        self._require_playing(game)
        game.boss_attack()
        self._save(game)
        return game

    def process_boss_action(self, game_id: str) -> BossAction:
        """Let the boss strike a random living player; a wipe ends the game."""
        game = self._load(game_id)
        self._require_playing(game)
        if not game.boss.can_attack():
            raise GameUseCaseError("boss cannot attack yet")
        alive = [p for p in game.players.values() if p.character.stats.health > 0]
        if not alive:
            raise GameUseCaseError("no alive players to attack")
        target = random.choice(alive)
        stats = target.character.stats
        damage = max(game.boss.attack() - stats.defense, 1)
        stats.health = max(stats.health - damage, 0)
        if all(p.character.stats.health <= 0 for p in game.players.values()):
            game.state = GameState.FINISHED
            game.result = GameResult.DEFEAT
            game.end_time = _now()
        self._save(game)
        return BossAction(game, target, damage)

    def equip_item(self, game_id: str, player_id: str, item_id: str) -> Game:
        game = self._load(game_id)
        player = game.players.get(player_id)
        if player is None:
            raise GameUseCaseError("player not in game")
        item = player.character.inventory.get(item_id)
        if item is None:
            raise GameUseCaseError("item not in inventory")
        try:
            if item.type == ItemType.WEAPON:
                player.character.equip_weapon(item_id)
            elif item.type == ItemType.ARMOR:
                player.character.equip_armor(item_id)
            else:
                raise GameUseCaseError("item cannot be equipped")
        except _FAILURES as exc:
            raise GameUseCaseError(f"failed to equip item: {exc}") from exc
        self._save(game)
        return game