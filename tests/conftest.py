"""Pytest configuration and fixtures."""

import pytest
import json
from jqr.models.value import Value


@pytest.fixture
def user_json():
    """The single-user document used in the end-to-end scenarios."""
    return '{"user":{"name":"Alice","age":30}}'


@pytest.fixture
def user_yaml():
    """YAML spelling of ``user_json``."""
    return "user:\n  name: Alice\n  age: 30"


@pytest.fixture
def store_data():
    """Bookstore document for query tests."""
    return {
        "store": {
            "book": [
                {"category": "reference", "author": "Nigel Rees",
                 "title": "Sayings of the Century", "price": 8.95},
                {"category": "fiction", "author": "Evelyn Waugh",
                 "title": "Sword of Honour", "price": 12.99},
                {"category": "fiction", "author": "Herman Melville",
                 "title": "Moby Dick", "isbn": "0-553-21311-3", "price": 8.99},
                {"category": "fiction", "author": "J. R. R. Tolkien",
                 "title": "The Lord of the Rings", "isbn": "0-395-19395-8", "price": 22.99}
            ],
            "bicycle": {"color": "red", "price": 19.95}
        },
        "expensive": 10
    }


@pytest.fixture
def store(store_data):
    """Bookstore document as a Value."""
    return Value.from_python(store_data)


@pytest.fixture
def store_json(store_data):
    """Bookstore document as JSON text."""
    return json.dumps(store_data)


@pytest.fixture
def sample_mixed_yaml():
    """YAML document exercising the narrowing rules."""
    return (
        "metadata:\n"
        "  version: '1.0'\n"
        "  created: 2024-01-01\n"
        "  enabled: yes\n"
        "  missing: ~\n"
        "  empty:\n"
        "items:\n"
        "  - 1\n"
        "  - 2.5\n"
        "  - text\n"
        "1: numeric key\n"
    )
