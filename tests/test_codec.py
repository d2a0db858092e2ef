import json
import logging

import pytest

from taskboard.codec import decode_lists, encode_lists


LISTS = [
    {
        "id": "list1",
        "title": "To do",
        "tasks": [
            {"id": "t1", "title": "Write", "description": "", "completed": False},
            {"id": "t2", "title": "Ship", "description": "soon", "completed": True},
        ],
    },
    {"id": "list2", "title": "Done", "tasks": []},
]


def test_decode_returns_stored_tree():
    assert decode_lists(encode_lists(LISTS)) == LISTS


@pytest.mark.parametrize("raw", [None, "", b""])
def test_decode_absent_is_empty(raw):
    assert decode_lists(raw) == []


@pytest.mark.parametrize("raw", ["{not json", "[1, 2", "null", '{"id": "x"}', "42", '"text"'])
def test_decode_repairs_to_empty(raw):
    assert decode_lists(raw) == []


def test_decode_logs_corruption_to_given_logger(caplog):
    log = logging.getLogger("tests.codec")
    with caplog.at_level(logging.WARNING, logger="tests.codec"):
        assert decode_lists("{oops", log=log) == []
    assert [r.name for r in caplog.records] == ["tests.codec"]


def test_decode_passes_through_native_list():
    assert decode_lists(LISTS) is LISTS


@pytest.mark.parametrize("value", [None, {"id": "x"}, "[]", 7, [object()]])
def test_encode_falls_back_to_empty_array(value):
    assert encode_lists(value) == "[]"


def test_encode_circular_tree_is_empty_array():
    lists = [{"id": "a", "tasks": []}]
    lists[0]["tasks"].append(lists[0])
    assert encode_lists(lists) == "[]"


def test_encode_keeps_field_names_and_order():
    raw = encode_lists(LISTS)
    assert json.loads(raw) == LISTS
    assert raw.index('"list1"') < raw.index('"list2"')


@pytest.mark.parametrize("value", [None, "garbage", LISTS, [{"id": "x", "extra": 1}], (1, 2)])
def test_second_round_trip_is_stable(value):
    once = decode_lists(encode_lists(value))
    assert once == decode_lists(encode_lists(once))


@pytest.mark.parametrize("number", [float("nan"), float("inf"), float("-inf")])
def test_encode_non_finite_number_is_empty_array(number):
    raw = encode_lists([{"id": "l", "x": number}])
    assert raw == "[]"
    assert json.loads(raw) == []
