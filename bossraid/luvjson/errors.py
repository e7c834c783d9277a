"""Exceptions raised by the JSON CRDT layer."""

from __future__ import annotations

from typing import Any


class CrdtError(Exception):
    """Base class for all CRDT errors."""


class InvalidNodeTypeError(CrdtError):
    """An unknown node type was encountered."""

    def __init__(self, node_type: str) -> None:
        self.node_type = node_type
        super().__init__(f"invalid node type: {node_type}")


class InvalidOperationTypeError(CrdtError):
    """An unknown patch operation type was encountered."""

    def __init__(self, operation_type: str) -> None:
        self.operation_type = operation_type
        super().__init__(f"invalid operation type: {operation_type}")


class InvalidEncodingError(CrdtError):
    """An unknown encoding format was requested."""

    def __init__(self, format: str) -> None:
        self.format = format
        super().__init__(f"invalid encoding format: {format}")


class NodeNotFoundError(CrdtError):
    """No node with the given identifier exists in the document."""

    def __init__(self, id: Any) -> None:
        self.id = id
        super().__init__(f"node not found: {id}")


class InvalidOperationError(CrdtError):
    """An operation could not be carried out."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"invalid operation: {message}")


class InvalidNodeError(CrdtError):
    """A node is malformed."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"invalid node: {message}")