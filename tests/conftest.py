import os
import sys
from datetime import datetime, timedelta

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from dicterm.services import dictionary_store


class FakeClock:
    """Callable clock the tests can move forward by hand."""

    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 4, 9, 0, 0))


@pytest.fixture
def fruit_store():
    return dictionary_store.load("fruit", [
        {"word": "banana", "definition": "A long yellow fruit."},
        {"word": "apple", "definition": "A round fruit."},
        {"word": "application", "definition": "A formal request."},
    ])


@pytest.fixture
def colour_store():
    return dictionary_store.load("colour", [
        ("Blue", "The colour of the sky."),
        ("azure", "Bright blue."),
        ("apricot", "Pale orange."),
    ])


@pytest.fixture
def big_store():
    return dictionary_store.load(
        "numbers", [(f"word{i:03d}", f"definition {i}") for i in range(50)]
    )
