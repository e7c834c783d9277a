"""A JSON CRDT document: a root register, a node index and a logical clock."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from bossraid.luvjson.errors import (
    InvalidEncodingError,
    InvalidNodeTypeError,
    InvalidOperationError,
    InvalidOperationTypeError,
    NodeNotFoundError,
)
from bossraid.luvjson.nodes import (
    ConstantNode,
    LWWObjectNode,
    LWWValueNode,
    Node,
    RGAStringNode,
    node_from_json,
)
from bossraid.luvjson.timestamps import (
    EncodingFormat,
    LogicalTimestamp,
    NodeType,
    OperationType,
    SessionID,
)

_ROOT_ID = LogicalTimestamp()
_U64_MAX = (1 << 64) - 1
_ROOT_TYPES = {NodeType.VAL.value, NodeType.OBJ.value, NodeType.CON.value, NodeType.STR.value}


def _load(data: Any) -> Any:
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8")
    if isinstance(data, str):
        return json.loads(data)
    return data


def _u64(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U64_MAX:
        raise ValueError(f"{name} must be an unsigned 64-bit integer")
    return value


def _u64_list(value: Any, name: str) -> list[int]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{name} must be an array of unsigned integers")
    return [_u64(v, name) for v in value]


def _optional_str(value: Any, name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string")
    return value


def _timestamp_from_pair(pair: list[int]) -> LogicalTimestamp:
    # The numeric session part of a patch id never forms a UUID, so it maps
    # to the zero session; only the counter is carried over.
    if len(pair) == 2:
        return LogicalTimestamp(SessionID(), pair[1])
    return LogicalTimestamp()


@dataclass
class _Operation:
    op: str
    id: LogicalTimestamp
    target: LogicalTimestamp
    node_type: str
    value: Any
    key: str
    start: LogicalTimestamp
    end: LogicalTimestamp
    length: int


def _parse_operation(raw: Any) -> _Operation:
    try:
        if not isinstance(raw, Mapping):
            raise ValueError("operation must be a JSON object")
        op = _optional_str(raw.get("op"), "op")
        length = raw.get("len")
        return _Operation(
            op=op,
            id=_timestamp_from_pair(_u64_list(raw.get("id"), "id")),
            target=_timestamp_from_pair(_u64_list(raw.get("target"), "target")),
            node_type=_optional_str(raw.get("type"), "type"),
            value=raw.get("value"),
            key=_optional_str(raw.get("key"), "key"),
            start=_timestamp_from_pair(_u64_list(raw.get("start"), "start")),
            end=_timestamp_from_pair(_u64_list(raw.get("end"), "end")),
            length=0 if length is None else _u64(length, "len"),
        )
    except ValueError as exc:
        raise ValueError(f"failed to unmarshal operation: {exc}") from exc


class Document:
    """A JSON CRDT document owned by a local session."""

    def __init__(self, session_id: SessionID) -> None:
        self.session_id = session_id
        self.clock: dict[str, int] = {}
        root = LWWValueNode(_ROOT_ID, _ROOT_ID, ConstantNode(_ROOT_ID, None))
        self.root: Node | None = root
        self.index: dict[LogicalTimestamp, Node] = {_ROOT_ID: root}

    @property
    def session_id_string(self) -> str:
        return str(self.session_id)

    def get_node(self, id: LogicalTimestamp) -> Node:
        """Return the node with the identifier; the zero identifier is the root."""
        if id.sid.is_zero and id.counter == 0:
            return self.root  # type: ignore[return-value]
        try:
            return self.index[id]
        except KeyError:
            raise NodeNotFoundError(id) from None

    def add_node(self, node: Node) -> None:
        """Index the node and advance the clock of its session."""
        self.index[node.id] = node
        key = str(node.id.sid)
        current = self.clock.get(key)
        if current is None or node.id.counter > current:
            self.clock[key] = node.id.counter

    def next_timestamp(self) -> LogicalTimestamp:
        """Advance and return the local session's clock."""
        key = str(self.session_id)
        counter = self.clock.get(key, 0) + 1
        self.clock[key] = counter
        return LogicalTimestamp(self.session_id, counter)

    def view(self) -> Any:
        """Return the plain value the document currently holds."""
        if self.root is None:
            return None
        if isinstance(self.root, LWWValueNode):
            if self.root.value_node is None:
                return None
            return self.root.value_node.value()
        return self.root.value()

    def to_json(self) -> dict[str, Any]:
        """Return the verbose JSON form of the document."""
        return {
            "time": dict(sorted(self.clock.items())),
            "root": None if self.root is None else self.root.to_json(),
        }

    def load_json(self, data: Any) -> None:
        """Replace clock, root and index from the verbose JSON form."""
        doc = _load(data)
        if not isinstance(doc, Mapping):
            raise ValueError("document must be a JSON object")
        raw_time = doc.get("time") or {}
        if not isinstance(raw_time, Mapping):
            raise ValueError("time must map session ids to counters")
        clock = {str(k): _u64(v, "time") for k, v in raw_time.items()}

        raw_root = doc.get("root")
        kind = raw_root.get("type", "") if isinstance(raw_root, Mapping) else ""
        if kind not in _ROOT_TYPES:
            raise InvalidNodeTypeError(str(kind))
        root = node_from_json(raw_root)

        self.clock = clock
        self.root = root
        self.index = {root.id: root}
        if isinstance(root, LWWValueNode) and root.value_node is not None:
            self.index[root.value_node.id] = root.value_node
            self._index_recursively(root.value_node)
        if isinstance(root, LWWObjectNode):
            self._index_fields(root)

    def _index_fields(self, node: LWWObjectNode) -> None:
        for key in node.keys():
            child = node.get(key)
            if child is not None:
                self.index[child.id] = child
                self._index_recursively(child)

    def _index_recursively(self, node: Node | None) -> None:
        if node is None or node.is_root():
            return
        if isinstance(node, LWWValueNode):
            if node.value_node is not None:
                self.index[node.value_node.id] = node.value_node
                self._index_recursively(node.value_node)
        elif isinstance(node, LWWObjectNode):
            self._index_fields(node)

    def encode(self, format: EncodingFormat | str = EncodingFormat.VERBOSE) -> bytes:
        """Serialise the document; every format currently uses the verbose form."""
        self._check_format(format)
        return json.dumps(self.to_json(), separators=(",", ":")).encode("utf-8")

    def decode(self, data: Any, format: EncodingFormat | str = EncodingFormat.VERBOSE) -> None:
        """Load the document from data in the given format."""
        self._check_format(format)
        self.load_json(data)

    @staticmethod
    def _check_format(format: EncodingFormat | str) -> None:
        try:
            EncodingFormat(format)
        except ValueError:
            raise InvalidEncodingError(str(format)) from None

    def apply_patch(self, patch_data: Any) -> None:
        """Apply every operation of a JSON CRDT patch in order."""
        try:
            patch = _load(patch_data)
            if not isinstance(patch, Mapping):
                raise ValueError("patch must be a JSON object")
            _u64_list(patch.get("id"), "id")
            meta = patch.get("meta")
            if meta is not None and not isinstance(meta, Mapping):
                raise ValueError("meta must be a JSON object")
            ops = patch.get("ops") or []
            if not isinstance(ops, list):
                raise ValueError("ops must be an array")
        except ValueError as exc:
            raise ValueError(f"failed to unmarshal patch: {exc}") from exc

        for raw in ops:
            self._apply_operation(_parse_operation(raw))

    def _apply_operation(self, op: _Operation) -> None:
        try:
            kind = OperationType(op.op)
        except ValueError:
            raise InvalidOperationTypeError(op.op) from None

        if kind is OperationType.NEW:
            self.add_node(self._new_node(op))
        elif kind is OperationType.INS:
            self._insert(op)
        elif kind is OperationType.DEL:
            target = self.get_node(op.target)
            if isinstance(target, LWWObjectNode):
                target.delete(op.key, op.id)
            elif isinstance(target, RGAStringNode):
                target.delete(op.start, op.end)
            else:
                raise InvalidOperationError("unsupported node type for 'del' operation")

    @staticmethod
    def _new_node(op: _Operation) -> Node:
        if op.node_type == NodeType.CON.value:
            return ConstantNode(op.id, op.value)
        if op.node_type == NodeType.VAL.value:
            return LWWValueNode(op.id, op.id, ConstantNode(op.id, None))
        if op.node_type == NodeType.OBJ.value:
            return LWWObjectNode(op.id)
        if op.node_type == NodeType.STR.value:
            return RGAStringNode(op.id)
        raise InvalidNodeTypeError(op.node_type)

    def _insert(self, op: _Operation) -> None:
        target = self.get_node(op.target)
        if isinstance(target, LWWValueNode):
            constant = ConstantNode(op.id, op.value)
            target.set_value(op.id, constant)
            self.add_node(constant)
        elif isinstance(target, LWWObjectNode):
            if isinstance(op.value, Mapping):
                for key, val in op.value.items():
                    constant = ConstantNode(op.id, val)
                    target.set(key, op.id, constant)
                    self.add_node(constant)
            elif op.key:
                constant = ConstantNode(op.id, op.value)
                target.set(op.key, op.id, constant)
                self.add_node(constant)
        elif isinstance(target, RGAStringNode):
            if isinstance(op.value, str):
                target.insert(op.target, op.id, op.value)
        else:
            raise InvalidOperationError("unsupported node type for 'ins' operation")