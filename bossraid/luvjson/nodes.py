"""CRDT nodes: constants, last-write-wins registers and objects, RGA strings."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from bossraid.luvjson.errors import InvalidNodeError, InvalidNodeTypeError
from bossraid.luvjson.timestamps import LogicalTimestamp, NodeType


class Node(ABC):
    """A node of a JSON CRDT document, identified by a logical timestamp."""

    id: LogicalTimestamp
    type: ClassVar[NodeType]

    @abstractmethod
    def value(self) -> Any:
        """Return the value the node holds."""

    def is_root(self) -> bool:
        """True if the node carries the zero session and a zero counter."""
        return self.id.sid.is_zero and self.id.counter == 0

    @abstractmethod
    def to_json(self) -> dict[str, Any]:
        """Return the verbose JSON form of the node as a dictionary."""


def _timestamp(data: Mapping[str, Any], key: str) -> LogicalTimestamp:
    raw = data.get(key)
    if raw is None:
        return LogicalTimestamp()
    return LogicalTimestamp.from_json(raw)


@dataclass
class ConstantNode(Node):
    """An immutable value."""

    id: LogicalTimestamp
    payload: Any = None

    type = NodeType.CON

    def value(self) -> Any:
        return self.payload

    def to_json(self) -> dict[str, Any]:
        return {"type": self.type.value, "id": self.id.to_json(), "value": self.payload}

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> ConstantNode:
        return cls(_timestamp(data, "id"), data.get("value"))


@dataclass
class LWWValueNode(Node):
    """A register whose content is replaced only by a later write."""

    id: LogicalTimestamp
    timestamp: LogicalTimestamp
    value_node: Node | None = None

    type = NodeType.VAL

    def value(self) -> Node | None:
        return self.value_node

    def set_value(self, timestamp: LogicalTimestamp, value: Node | None) -> bool:
        """Store the value if the timestamp is newer than the current one."""
        if timestamp.compare(self.timestamp) > 0:
            self.timestamp = timestamp
            self.value_node = value
            return True
        return False

    def to_json(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "type": self.type.value,
            "id": self.id.to_json(),
            "timestamp": self.timestamp.to_json(),
        }
        if self.value_node is not None:
            result["value"] = self.value_node.to_json()
        return result

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> LWWValueNode:
        raw = data.get("value")
        inner = node_from_json(raw) if raw is not None else None
        return cls(_timestamp(data, "id"), _timestamp(data, "timestamp"), inner)


@dataclass
class LWWObjectField:
    """One field of an object: the write timestamp and the node written."""

    timestamp: LogicalTimestamp
    node: Node


@dataclass
class LWWObjectNode(Node):
    """A map whose fields are each last-write-wins."""

    id: LogicalTimestamp
    fields: dict[str, LWWObjectField] = field(default_factory=dict)

    type = NodeType.OBJ

    def value(self) -> dict[str, Any]:
        return {key: f.node.value() for key, f in self.fields.items()}

    def get(self, key: str) -> Node | None:
        found = self.fields.get(key)
        return found.node if found is not None else None

    def set(self, key: str, timestamp: LogicalTimestamp, value: Node) -> bool:
        """Write the field if it is absent or the timestamp is newer."""
        current = self.fields.get(key)
        if current is None or timestamp.compare(current.timestamp) > 0:
            self.fields[key] = LWWObjectField(timestamp, value)
            return True
        return False

    def delete(self, key: str, timestamp: LogicalTimestamp) -> bool:
        """Remove the field if it exists and the timestamp is newer."""
        current = self.fields.get(key)
        if current is not None and timestamp.compare(current.timestamp) > 0:
            del self.fields[key]
            return True
        return False

    def keys(self) -> list[str]:
        return list(self.fields)

    def to_json(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type.value, "id": self.id.to_json()}
        if self.fields:
            result["fields"] = {
                key: {"timestamp": f.timestamp.to_json(), "value": f.node.to_json()}
                for key, f in self.fields.items()
            }
        return result

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> LWWObjectNode:
        raw_fields = data.get("fields") or {}
        if not isinstance(raw_fields, Mapping):
            raise InvalidNodeError("object fields must be a JSON object")
        fields: dict[str, LWWObjectField] = {}
        for key, raw in raw_fields.items():
            if not isinstance(raw, Mapping):
                raise InvalidNodeError(f"field {key!r} must be a JSON object")
            fields[key] = LWWObjectField(
                _timestamp(raw, "timestamp"), node_from_json(raw.get("value"))
            )
        return cls(_timestamp(data, "id"), fields)


@dataclass
class RGAElement:
    """One character of an RGA string, possibly marked deleted."""

    id: LogicalTimestamp
    char: str
    deleted: bool = False


@dataclass
class RGAStringNode(Node):
    """A replicated growable array of characters."""

    id: LogicalTimestamp
    elements: list[RGAElement] = field(default_factory=list)

    type = NodeType.STR

    def value(self) -> str:
        return "".join(
            e.char for e in self.elements if not e.deleted and len(e.char) == 1
        )

    def insert(self, after_id: LogicalTimestamp, id: LogicalTimestamp, value: str) -> bool:
        """Insert the characters after the element with after_id.

        An unknown after_id inserts at the start only when its session or
        counter is zero; otherwise nothing is inserted.
        """
        pos = next((i for i, e in enumerate(self.elements) if e.id == after_id), None)
        if pos is None and not after_id.sid.is_zero and after_id.counter != 0:
            return False
        new = [RGAElement(id.increment(i), ch) for i, ch in enumerate(value)]
        at = 0 if pos is None else pos + 1
        self.elements[at:at] = new
        return True

    def delete(self, start_id: LogicalTimestamp, end_id: LogicalTimestamp) -> bool:
        """Mark the elements from start_id to end_id, inclusive, as deleted."""
        start = end = None
        for i, element in enumerate(self.elements):
            if element.id == start_id:
                start = i
            if element.id == end_id:
                end = i
            if start is not None and end is not None:
                break
        if start is None or end is None or start > end:
            return False
        for element in self.elements[start : end + 1]:
            element.deleted = True
        return True

    def to_json(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type.value, "id": self.id.to_json()}
        if self.elements:
            result["elements"] = [
                {"id": e.id.to_json(), "value": e.char, "deleted": e.deleted}
                for e in self.elements
            ]
        return result

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> RGAStringNode:
        elements = []
        for raw in data.get("elements") or []:
            if not isinstance(raw, Mapping):
                raise InvalidNodeError("string element must be a JSON object")
            char = raw.get("value", "")
            if not isinstance(char, str):
                raise InvalidNodeError("string element value must be a string")
            elements.append(
                RGAElement(_timestamp(raw, "id"), char, bool(raw.get("deleted", False)))
            )
        return cls(_timestamp(data, "id"), elements)


_NODE_CLASSES: dict[str, Any] = {
    NodeType.VAL.value: LWWValueNode,
    NodeType.OBJ.value: LWWObjectNode,
    NodeType.CON.value: ConstantNode,
    NodeType.STR.value: RGAStringNode,
}


def node_from_json(data: Any) -> Node:
    """Build a node from its JSON form (a dictionary or JSON text)."""
    if isinstance(data, (str, bytes, bytearray)):
        data = json.loads(data)
    if not isinstance(data, Mapping):
        raise InvalidNodeError("node must be a JSON object")
    kind = data.get("type", "")
    if not isinstance(kind, str) or kind not in _NODE_CLASSES:
        raise InvalidNodeTypeError(str(kind))
    return _NODE_CLASSES[kind]._from_dict(data)