"""Game rooms that players join."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class RoomError(Exception):
    """A room operation could not be carried out."""


class RoomState(str, Enum):
    WAITING = "waiting"
    READY = "ready"
    PLAYING = "playing"
    COMPLETED = "completed"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Room:
    """A room holding one boss raid game for up to three players."""

    id: str
    name: str
    game_id: str = ""
    state: RoomState | str = RoomState.WAITING
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    max_players: int = 3
    player_count: int = 0

    def set_game_id(self, game_id: str) -> None:
        self.game_id = game_id
        self.updated_at = _now()

    def update_state(self, state: RoomState) -> None:
        self.state = state
        self.updated_at = _now()

    def increment_player_count(self) -> None:
        if self.player_count >= self.max_players:
            raise RoomError("room is full")
        self.player_count += 1
        self.updated_at = _now()

    def decrement_player_count(self) -> None:
        if self.player_count > 0:
            self.player_count -= 1
            self.updated_at = _now()

    def is_full(self) -> bool:
        return self.player_count >= self.max_players

    def to_dict(self) -> dict[str, Any]:
        state = self.state.value if isinstance(self.state, RoomState) else self.state
        return {
            "id": self.id,
            "name": self.name,
            "gameId": self.game_id,
            "state": state,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
            "maxPlayers": self.max_players,
            "playerCount": self.player_count,
        }