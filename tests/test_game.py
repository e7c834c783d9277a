from datetime import datetime, timedelta, timezone

import pytest

from bossraid.domain.boss import BossType, new_boss
from bossraid.domain.game import (
    Game,
    GameError,
    GameResult,
    GameState,
    generate_random_rewards,
)


def _past():
    return datetime.now(timezone.utc) - timedelta(seconds=60)


def _full_game():
    game = Game("g1", "r1")
    for pid in ("a", "b", "c"):
        game.add_player(pid, pid.upper())
    return game


def _playing_single():
    game = Game("g1", "r1")
    player = game.add_player("a", "A")
    game.start_game()
    return game, player


def test_new_game_defaults():
    game = Game("g1", "r1")
    assert game.state == GameState.WAITING
    assert game.result == GameResult.NONE
    assert game.players == {} and game.events == []


def test_add_player_records_event_and_limits():
    game = _full_game()
    assert len(game.players) == 3
    assert [e.type for e in game.events] == ["player_join"] * 3
    assert game.events[0].description == "A joined the game"
    with pytest.raises(GameError, match="game is full"):
        game.add_player("d", "D")


def test_add_duplicate_player():
    game = Game("g1", "r1")
    game.add_player("a", "A")
    with pytest.raises(GameError, match="player already in game"):
        game.add_player("a", "A")


def test_remove_player():
    game = Game("g1", "r1")
    game.add_player("a", "A")
    game.remove_player("a")
    assert "a" not in game.players
    assert game.events[-1].type == "player_leave"
    with pytest.raises(GameError, match="player not in game"):
        game.remove_player("a")


def test_ready_starts_only_with_three_ready_players():
    game = _full_game()
    game.set_player_ready("a")
    game.set_player_ready("b")
    assert game.state == GameState.WAITING
    game.set_player_ready("c")
    assert game.state == GameState.PLAYING
    assert game.boss is not None
    assert game.events[-1].type == "game_start"


def test_ready_unknown_player():
    with pytest.raises(GameError, match="player not in game"):
        Game("g1", "r1").set_player_ready("x")


def test_player_attack_requires_playing_state():
    game = Game("g1", "r1")
    game.add_player("a", "A")
    with pytest.raises(GameError, match="game is not in progress"):
        game.player_attack("a")


def test_player_attack_cooldown():
    game, _ = _playing_single()
    assert not game.player_can_attack("a")
    assert not game.player_can_attack("missing")
    with pytest.raises(GameError, match="player cannot attack yet"):
        game.player_attack("a")


def test_player_attack_damages_boss():
    game, player = _playing_single()
    player.last_attack = _past()
    before = game.boss.health
    damage = game.player_attack("a")
    assert damage >= 1
    assert game.boss.health == before - damage
    assert game.events[-1].type == "player_attack"
    assert game.events[-1].data == {"playerID": "a", "damage": damage}


def test_defeating_boss_is_victory_with_rewards():
    game, player = _playing_single()
    game.boss = new_boss(BossType.UNDEAD)
    game.boss.health = 1
    player.last_attack = _past()
    game.player_attack("a")
    assert game.state == GameState.FINISHED
    assert game.result == GameResult.VICTORY
    assert set(game.rewards) == {"a"}
    assert game.rewards["a"][0].type == "gold"
    assert game.events[-1].description == "Victory! The Lich King has been defeated!"


def test_boss_attack_waits_for_cooldown():
    game, player = _playing_single()
    game.boss.last_attack = datetime.now(timezone.utc)
    game.boss_attack()
    assert player.character.stats.health == 100


def test_boss_attack_kills_last_player_is_defeat():
    game, player = _playing_single()
    game.boss.last_attack = _past()
    player.character.stats.health = 1
    game.boss_attack()
    assert player.character.stats.health == 0
    assert game.state == GameState.FINISHED
    assert game.result == GameResult.DEFEAT
    types = [e.type for e in game.events]
    assert types[-3:] == ["boss_attack", "player_defeated", "game_end"]


def test_boss_attack_reduces_health():
    game, player = _playing_single()
    game.boss.last_attack = _past()
    game.boss_attack()
    damage = game.events[-1].data["damage"]
    assert damage >= 1
    assert player.character.stats.health == 100 - damage
    assert game.state == GameState.PLAYING


def test_generate_random_rewards_ranges():
    for _ in range(50):
        rewards = generate_random_rewards()
        assert 1 <= len(rewards) <= 2
        gold = rewards[0]
        assert gold.name == "Gold" and 100 <= gold.value <= 999
        assert gold.id.startswith("reward_")
        if len(rewards) == 2:
            item = rewards[1]
            assert item.type in {"weapon", "armor", "potion"}
            assert item.name == "Mystery " + item.type
            assert 50 <= item.value <= 249


def test_to_dict_serialises_events():
    game, _ = _playing_single()
    data = game.to_dict()
    assert data["state"] == "playing"
    assert data["boss"]["id"] == game.boss.id
    assert data["events"][0]["data"]["id"] == "a"
    assert set(data["players"]) == {"a"}