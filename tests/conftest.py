"""Shared fixtures: deterministic id generation for tree tests."""

from __future__ import annotations

import itertools

import pytest


class SequentialIds:
    """Id factory producing "f1", "f2", ... so tests can predict ids."""

    def __init__(self, prefix: str = "f") -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)

    def __call__(self) -> str:
        return f"{self._prefix}{next(self._counter)}"


@pytest.fixture
def ids() -> SequentialIds:
    """A fresh sequential id factory per test."""
    return SequentialIds()
