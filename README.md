# bossraid

A cooperative boss raid game engine as a Python library. Up to three players
join a game, mark themselves ready, and once all three are ready they fight a
randomly chosen boss (dragon, ogre, demon or undead). Characters carry an
inventory of weapons and armor; the equipped weapon adds to attack power and
sets the time between attacks, the armor adds defense. A victory hands every
player gold (100–999) and, half the time, a mystery item.

The package also contains `bossraid.luvjson`, a small JSON CRDT document model
with last-write-wins values and objects, replicated growable strings, logical
timestamps and patch application.

It has no runtime dependencies beyond the standard library.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Layout

- `bossraid.domain.item` — `Item`, `ItemStats`, `ItemType`, `WeaponType`, `ArmorType`.
- `bossraid.domain.boss` — `Boss`, `BossType`, `new_boss`, `new_random_boss`,
  `random_boss_type`, `generate_random_id`.
- `bossraid.domain.character` — `Character`, `Equipment`, `CharacterStats`,
  `CharacterError`. A bare character has 100 health, 10 attack, 5 defense and
  attacks once per 1000 ms.
- `bossraid.domain.room` — `Room`, `RoomState`, `RoomError`.
- `bossraid.domain.game` — `Game`, `Player`, `Reward`, `GameEvent`, `GameState`,
  `GameResult`, `GameError`, `generate_random_rewards`. Each game keeps an
  event log in `Game.events`.
- `bossraid.repository.memory` — thread-safe in-memory stores:
  `CharacterRepository`, `GameRepository`, `ItemRepository`, `RoomRepository`,
  all raising `RepositoryError` for missing or duplicate records.
  `ItemRepository` comes preloaded with a longsword, a dagger, a bow, a battle
  axe and leather armor.
- `bossraid.usecase.item_usecase` — `ItemUseCase`.
- `bossraid.usecase.character_usecase` — `CharacterUseCase`,
  `CharacterUseCaseError`. `create` gives the new character every catalogue
  item and equips the first weapon and first armor found.
- `bossraid.usecase.game_usecase` — `GameUseCase`, `GameUseCaseError`,
  `BossAction` (the game, the player struck and the damage of a boss turn).
- `bossraid.usecase.room_usecase` — `RoomUseCase`, `RoomUseCaseError`.
  `create` makes a room together with a new game; `leave` only checks that
  the room exists.
- `bossraid.luvjson` — `errors`, `timestamps` (`SessionID`,
  `LogicalTimestamp`, `new_session_id`, `NodeType`, `OperationType`,
  `EncodingFormat`), `nodes` (`ConstantNode`, `LWWValueNode`,
  `LWWObjectNode`, `RGAStringNode`, `node_from_json`) and `document`
  (`Document`).

Most domain objects offer `to_dict()` for a JSON-ready representation.

## Example

```python
import time

from bossraid.repository.memory import GameRepository, RoomRepository
from bossraid.usecase.game_usecase import GameUseCase
from bossraid.usecase.room_usecase import RoomUseCase

games = GameUseCase(GameRepository())
rooms = RoomUseCase(RoomRepository(), games)

room = rooms.create("Dragon's Lair")
for player_id, name in [("p1", "Aria"), ("p2", "Borin"), ("p3", "Cass")]:
    rooms.join(room.id, player_id, name)
    games.ready(room.game_id, player_id)

time.sleep(1.0)  # a player without a weapon attacks once per second
game = games.attack(room.game_id, "p1")
print(game.state, game.boss.name, game.boss.health)
```

Failures are raised as exceptions, for example `GameUseCaseError` when a game
is not in the right state, a player is not part of it, or a cooldown has not
passed yet.

## CRDT documents

```python
from bossraid.luvjson.document import Document
from bossraid.luvjson.nodes import ConstantNode
from bossraid.luvjson.timestamps import new_session_id

doc = Document(new_session_id())
ts = doc.next_timestamp()
node = ConstantNode(ts, "hello")
doc.add_node(node)
doc.root.set_value(ts, node)
print(doc.view())        # "hello"
print(doc.to_json())
```

`Document.encode` and `Document.decode` accept the `verbose`, `compact` and
`binary` formats, but all three currently use the same verbose JSON form.
In patches given to `Document.apply_patch`, identifiers are `[session, counter]`
pairs; the numeric session part is mapped to the zero session, so only the
counter is kept.

## What this package does not do

It is a library only. There is no HTTP API, no server-sent event stream, no
web client, no command-line program and no persistent storage; games, rooms
and characters live in the in-memory repositories for as long as the process
runs.