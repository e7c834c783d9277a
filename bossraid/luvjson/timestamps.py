"""Session identifiers, logical timestamps and CRDT enumerations."""

from __future__ import annotations

import base64
import binascii
import json
import os
import threading
import time
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from bossraid.luvjson.errors import InvalidOperationError

_U64_MASK = (1 << 64) - 1

_v7_lock = threading.Lock()
_v7_last = 0


def _uuid7_bytes() -> bytes:
    """Build a time-ordered, monotonic version 7 UUID."""
    global _v7_last
    now = time.time_ns()
    millis, sub = divmod(now, 1_000_000)
    stamp = (millis << 12) | (sub * 4096 // 1_000_000)
    with _v7_lock:
        if stamp <= _v7_last:
            stamp = _v7_last + 1
        _v7_last = stamp
    millis, seq = stamp >> 12, stamp & 0xFFF
    tail = bytearray(os.urandom(8))
    tail[0] = (tail[0] & 0x3F) | 0x80
    head = (millis & 0xFFFFFFFFFFFF).to_bytes(6, "big")
    return head + bytes([0x70 | (seq >> 8), seq & 0xFF]) + bytes(tail)


@dataclass(frozen=True, order=True)
class SessionID:
    """A 16-byte session identifier; the default value is the zero UUID."""

    value: bytes = bytes(16)

    def __post_init__(self) -> None:
        if not isinstance(self.value, (bytes, bytearray)):
            raise TypeError("session id must be bytes")
        if len(self.value) != 16:
            raise ValueError(f"invalid UUID length: {len(self.value)}")
        object.__setattr__(self, "value", bytes(self.value))

    @property
    def uuid(self) -> uuid.UUID:
        return uuid.UUID(bytes=self.value)

    @property
    def is_zero(self) -> bool:
        return not any(self.value)

    def __str__(self) -> str:
        return str(self.uuid)

    def compare(self, other: SessionID) -> int:
        """Return -1, 0 or 1 comparing the bytes lexicographically."""
        return (self.value > other.value) - (self.value < other.value)

    def to_json(self) -> str:
        """Return the JSON form: the 16 bytes in standard base64."""
        return base64.b64encode(self.value).decode("ascii")

    @classmethod
    def from_text(cls, text: str | bytes) -> SessionID:
        """Parse the textual UUID form."""
        if isinstance(text, bytes):
            text = text.decode("utf-8", errors="replace")
        try:
            parsed = uuid.UUID(text)
        except (ValueError, TypeError) as exc:
            raise ValueError(f"invalid UUID format: {exc}") from exc
        return cls(parsed.bytes)

    @classmethod
    def from_json(cls, data: Any) -> SessionID:
        """Decode a base64 string, a UUID string or a list of byte values."""
        if isinstance(data, str):
            try:
                raw = base64.b64decode(data, validate=True)
            except (binascii.Error, ValueError):
                return cls.from_text(data)
        elif isinstance(data, list):
            if not all(
                isinstance(b, int) and not isinstance(b, bool) and 0 <= b <= 255
                for b in data
            ):
                raise ValueError("sid must be a byte array")
            raw = bytes(data)
        else:
            raise ValueError("sid must be a byte array")
        if len(raw) != 16:
            raise ValueError(f"invalid UUID length: {len(raw)}")
        return cls(raw)


def new_session_id() -> SessionID:
    """Create a fresh time-ordered session identifier (UUID v7)."""
    return SessionID(_uuid7_bytes())


@dataclass(frozen=True, order=True)
class LogicalTimestamp:
    """A session identifier paired with a sequence counter."""

    sid: SessionID = field(default_factory=SessionID)
    counter: int = 0

    def compare(self, other: LogicalTimestamp) -> int:
        """Return -1, 0 or 1, ordering by session first, then counter."""
        by_sid = self.sid.compare(other.sid)
        if by_sid:
            return by_sid
        return (self.counter > other.counter) - (self.counter < other.counter)

    def next(self) -> LogicalTimestamp:
        return self.increment(1)

    def increment(self, amount: int) -> LogicalTimestamp:
        return LogicalTimestamp(self.sid, (self.counter + amount) & _U64_MASK)

    def to_json(self) -> dict[str, Any]:
        return {"cnt": self.counter, "sid": self.sid.to_json()}

    def __str__(self) -> str:
        return json.dumps(self.to_json(), sort_keys=True, separators=(",", ":"))

    @classmethod
    def from_json(cls, data: Any) -> LogicalTimestamp:
        """Build a timestamp from its JSON object (or JSON text)."""
        if isinstance(data, (str, bytes, bytearray)):
            data = json.loads(data)
        if not isinstance(data, Mapping):
            raise InvalidOperationError("timestamp must be an object")
        if "sid" not in data:
            raise InvalidOperationError("missing sid field")
        if "cnt" not in data:
            raise InvalidOperationError("missing cnt field")
        try:
            sid = SessionID.from_json(data["sid"])
        except ValueError as exc:
            raise ValueError(f"failed to unmarshal sid: {exc}") from exc
        cnt = data["cnt"]
        if isinstance(cnt, bool) or not isinstance(cnt, (int, float)):
            raise InvalidOperationError("cnt must be a number")
        return cls(sid, int(cnt) & _U64_MASK)


class NodeType(str, Enum):
    """Kinds of CRDT node."""

    CON = "con"
    VAL = "val"
    OBJ = "obj"
    VEC = "vec"
    STR = "str"
    BIN = "bin"
    ARR = "arr"


class OperationType(str, Enum):
    """Kinds of patch operation."""

    NEW = "new"
    INS = "ins"
    DEL = "del"
    NOP = "nop"


class EncodingFormat(str, Enum):
    """Formats a document or patch may be encoded in."""

    VERBOSE = "verbose"
    COMPACT = "compact"
    BINARY = "binary"