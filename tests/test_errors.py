import pytest

from bossraid.luvjson.errors import (
    CrdtError,
    InvalidEncodingError,
    InvalidNodeError,
    InvalidNodeTypeError,
    InvalidOperationError,
    InvalidOperationTypeError,
    NodeNotFoundError,
)
from bossraid.luvjson.timestamps import LogicalTimestamp, new_session_id


def test_node_not_found_message():
    ts = LogicalTimestamp(new_session_id(), 2)
    err = NodeNotFoundError(ts)
    assert "node not found" in str(err)
    assert err.id == ts


def test_node_not_found_mentions_timestamp_fields():
    err = NodeNotFoundError(LogicalTimestamp(new_session_id(), 2))
    assert "sid" in str(err)
    assert "cnt" in str(err)


def test_invalid_encoding_message():
    assert str(InvalidEncodingError("invalid")) == "invalid encoding format: invalid"


def test_invalid_operation_message():
    assert str(InvalidOperationError("test error")) == "invalid operation: test error"


def test_invalid_node_type_message():
    assert str(InvalidNodeTypeError("invalid")) == "invalid node type: invalid"


def test_invalid_operation_type_message():
    assert str(InvalidOperationTypeError("invalid")) == "invalid operation type: invalid"


def test_invalid_node_message():
    assert str(InvalidNodeError("test error")) == "invalid node: test error"


@pytest.mark.parametrize(
    "exc, prefix",
    [
        (InvalidNodeTypeError("x"), "invalid node type: "),
        (InvalidOperationTypeError("x"), "invalid operation type: "),
        (InvalidEncodingError("x"), "invalid encoding format: "),
        (NodeNotFoundError("x"), "node not found: "),
        (InvalidOperationError("x"), "invalid operation: "),
        (InvalidNodeError("x"), "invalid node: "),
    ],
)
def test_all_errors_are_caught_as_crdt_errors(exc, prefix):
    with pytest.raises(CrdtError) as info:
        raise exc
    assert info.value is exc
    assert str(info.value).startswith(prefix)