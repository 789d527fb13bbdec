"""
Pytest Configuration and Fixtures

This module provides shared fixtures and configuration for all tests.
"""

from dataclasses import dataclass
from typing import Callable, List

import pytest

from redismock.config import settings, setup_logging
from redismock.mock import AsyncMockConn, MockConn


# ============================================================================
# Code under test
# ============================================================================

@dataclass
class Person:
    """Record decoded from a flattened HGETALL reply."""
    name: str
    age: int


def scan_person(values: list) -> Person:
    """Decode ``[key, value, ...]`` into a Person, like a reply scanner would."""
    fields = dict(zip(values[0::2], values[1::2]))
    return Person(name=fields["name"], age=int(fields["age"]))


def retrieve_person(conn: MockConn, person_id: str) -> Person:
    """Fetch one person with a synchronous round trip."""
    return scan_person(conn.do("HGETALL", f"person:{person_id}"))


def retrieve_people(conn: MockConn, ids: List[str]) -> List[Person]:
    """Fetch several people with one pipelined batch."""
    for person_id in ids:
        conn.send("HGETALL", f"person:{person_id}")
    conn.flush()

    return [scan_person(conn.receive()) for _ in ids]


# ============================================================================
# Connection Fixtures
# ============================================================================

@pytest.fixture
def conn() -> MockConn:
    """Create a fresh MockConn with default settings."""
    return MockConn()


@pytest.fixture
def bytes_conn() -> MockConn:
    """Create a MockConn returning raw bytes replies."""
    return MockConn(decode_responses=False)


@pytest.fixture
def wait_conn() -> MockConn:
    """Create a MockConn whose receive() waits on its gate."""
    return MockConn(receive_wait=True)


@pytest.fixture
def async_conn() -> AsyncMockConn:
    """Create a fresh AsyncMockConn."""
    return AsyncMockConn()


@pytest.fixture
def johnson() -> dict:
    """Reply fields for person:1."""
    return {"name": "Mr. Johson", "age": "42"}


@pytest.fixture
def jennifer() -> dict:
    """Reply fields for person:2."""
    return {"name": "Ms. Jennifer", "age": "28"}


# ============================================================================
# Code-under-test Fixtures
# ============================================================================

@pytest.fixture
def person_retriever() -> Callable[[MockConn, str], Person]:
    """Provide the single-person lookup under test."""
    return retrieve_person


@pytest.fixture
def people_retriever() -> Callable[[MockConn, List[str]], List[Person]]:
    """Provide the pipelined people lookup under test."""
    return retrieve_people


@pytest.fixture
def person_scanner() -> Callable[[list], Person]:
    """Provide the flattened-reply decoder."""
    return scan_person


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure custom pytest markers and logging."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "concurrency: marks tests that drive several threads or tasks"
    )
    setup_logging(debug=settings.DEBUG)
