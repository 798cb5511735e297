"""Shared fixtures for amendment tests."""

from collections.abc import Callable
from typing import Any

import pytest


class ScriptedParser:
    """Statement parser that replays prepared fragments keyed by offset."""

    def __init__(self, fragments: dict[int, tuple[Any, int]]) -> None:
        self.fragments = fragments
        self.calls: list[tuple[int, str]] = []

    def parse_statement(self, text: str, pos: int, version: str) -> tuple[Any, int]:
        self.calls.append((pos, version))
        if pos in self.fragments:
            return self.fragments[pos]
        return None, len(text)


@pytest.fixture
def scripted_parser() -> Callable[[dict[int, tuple[Any, int]]], ScriptedParser]:
    return ScriptedParser

