"""Tests for the console's query-string routing."""

from __future__ import annotations

import pytest

from backend.hookpress.entries import (
    AddFormRoute,
    DeleteRoute,
    EditFormRoute,
    ListRoute,
    parse_route,
)


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        ({}, ListRoute()),
        ({"action": "add"}, AddFormRoute()),
        ({"action": "ADD"}, AddFormRoute()),
        ({"action": "edit", "id": "7"}, EditFormRoute(7)),
        ({"action": "delete", "id": "3"}, DeleteRoute(3)),
        ({"action": "edit"}, ListRoute()),
        ({"action": "delete", "id": "abc"}, ListRoute()),
        ({"action": "delete", "id": "-4"}, ListRoute()),
        ({"action": "publish", "id": "2"}, ListRoute()),
    ],
)
def test_parse_route(args, expected):
    assert parse_route(args) == expected
