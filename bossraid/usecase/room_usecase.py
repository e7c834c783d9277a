"""Rooms, each holding one game."""

from __future__ import annotations

import uuid
from typing import Any

from bossraid.domain.game import Game, GameError
from bossraid.domain.room import Room
from bossraid.repository.memory import RepositoryError
from bossraid.usecase.game_usecase import GameUseCaseError

_FAILURES = (RepositoryError, GameError, GameUseCaseError)


class RoomUseCaseError(Exception):
    """A room request could not be carried out."""


class RoomUseCase:
    """Manages rooms and forwards players to the room's game."""

    def __init__(self, room_repo: Any, game_uc: Any) -> None:
        self._room_repo = room_repo
        self._game_uc = game_uc

    def _load(self, id: str) -> Room:
        try:
            return self._room_repo.get(id)
        except _FAILURES as exc:
            raise RoomUseCaseError(f"failed to get room: {exc}") from exc

    def create(self, name: str) -> Room:
        """Create a room together with a new game for it."""
        room_id = str(uuid.uuid4())
        try:
            game = self._game_uc.create(room_id)
        except _FAILURES as exc:
            raise RoomUseCaseError(f"failed to create game: {exc}") from exc
        room = Room(id=room_id, name=name, game_id=game.id, state="", max_players=0)
        try:
            self._room_repo.create(room)
        except _FAILURES as exc:
            raise RoomUseCaseError(f"failed to create room: {exc}") from exc
        return room

    def get(self, id: str) -> Room:
        return self._room_repo.get(id)

    def list(self) -> list[Room]:
        return self._room_repo.list()

    def delete(self, id: str) -> None:
        self._load(id)
        try:
            self._room_repo.delete(id)
        except _FAILURES as exc:
            raise RoomUseCaseError(f"failed to delete room: {exc}") from exc

    def join(self, room_id: str, player_id: str, player_name: str) -> Game:
        """Add the player to the room's game and return the game."""
        room = self._load(room_id)
        try:
            return self._game_uc.join(room.game_id, player_id, player_name)
        except _FAILURES as exc:
            raise RoomUseCaseError(f"failed to join game: {exc}") from exc

    def leave(self, room_id: str, player_id: str) -> None:
        """Check that the room exists; the player stays in the game."""
        self._load(room_id)