from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
PYTHON_DIR = ROOT / "python"
sys.path.insert(0, str(PYTHON_DIR))

from liquefied import Liquefied  # noqa: E402


class Greeter:
    """Sample value with a keyword-taking finalizer and a self-typed method."""

    def __init__(self, name: str) -> None:
        self.name = name

    def greet(self, greeting: str = "hello", punctuation: str = "!") -> str:
        return f"{greeting} {self.name}{punctuation}"

    def renamed(self, name: str) -> "Greeter":
        return Greeter(name)

    def __eq__(self, other):
        return isinstance(other, Greeter) and other.name == self.name


@pytest.fixture
def greeter() -> Greeter:
    return Greeter("alice")


@pytest.fixture
def price() -> Liquefied:
    return Liquefied(12.333, ".2f", method="__format__")


@pytest.fixture
def numbers() -> Liquefied:
    return Liquefied([1, 2, 3])
