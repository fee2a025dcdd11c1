"""
Test data generators for the jtree benchmarks.

Creates JSON documents of different shapes for codec performance testing:
- Flat objects of different sizes
- Mixed-kind arrays
- Deeply nested trees
- String-heavy content with escape sequences and non-ASCII text

Every generator draws from a seeded ``random.Random`` so repeated runs
time identical documents.
"""

import json
import random
import string
from typing import Any

DATA_TYPES = (
    "small_object",
    "large_object",
    "mixed_array",
    "nested_structure",
    "string_heavy",
)

_SEED = 20240115
_ESCAPE_PROBABILITY = 0.3
_ESCAPES = ('\\"', "\\\\", "\\/", "\\b", "\\f", "\\n", "\\r", "\\t")
_NON_ASCII = "éüß€漢字\U0001f600"


def generate_test_data(data_type: str) -> str:
    """Generates a JSON document of the named shape."""
    generators = {
        "small_object": _small_object,
        "large_object": _large_object,
        "mixed_array": _mixed_array,
        "nested_structure": _nested_structure,
        "string_heavy": _string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return generators[data_type](random.Random(_SEED))


def top_level_type(data_type: str) -> type:
    """Python type ``json.loads`` returns for the named shape."""
    return list if data_type == "mixed_array" else dict


def _word(rng: random.Random, length: int) -> str:
    return "".join(rng.choices(string.ascii_letters, k=length))


def _timestamp(rng: random.Random) -> str:
    return (
        f"2024-{rng.randint(1, 12):02d}-{rng.randint(1, 28):02d}"
        f"T{rng.randint(0, 23):02d}:{rng.randint(0, 59):02d}:00Z"
    )


def _small_object(rng: random.Random) -> str:
    """Under 1KB of basic key-value pairs."""
    data = {
        "id": 12345,
        "name": "Alice Johnson",
        "active": True,
        "balance": 1234.56,
        "tags": ["alpha", "beta"],
        "parent": None,
        "metadata": {"created": _timestamp(rng), "source": "api"},
    }
    return json.dumps(data)


def _large_object(rng: random.Random) -> str:
    """Over 10KB: a profile with transaction and activity lists."""
    data = {
        "user_id": rng.randint(1000000, 9999999),
        "profile": {
            "first_name": _word(rng, 10),
            "last_name": _word(rng, 12),
            "address": {
                "street": f"{rng.randint(1, 9999)} {_word(rng, 8)} St",
                "zip": f"{rng.randint(10000, 99999)}",
                "country": "US",
            },
            "notifications": {
                channel: rng.choice([True, False])
                for channel in ("email", "sms", "push")
            },
        },
        "transactions": [
            {
                "id": f"txn_{i:06d}",
                "amount": round(rng.uniform(1.0, 1000.0), 2),
                "currency": rng.choice(["USD", "EUR", "GBP", "JPY"]),
                "timestamp": _timestamp(rng),
                "status": rng.choice(["completed", "pending", "failed"]),
            }
            for i in range(50)
        ],
        "activity_log": [
            {
                "timestamp": _timestamp(rng),
                "action": rng.choice(["login", "logout", "purchase", "view"]),
                "user_agent": f"Mozilla/5.0 ({_word(rng, 20)})",
            }
            for _ in range(30)
        ],
    }
    return json.dumps(data)


def _mixed_array(rng: random.Random) -> str:
    """200 elements covering every value kind."""
    makers = (
        lambda i: rng.randint(-1000, 1000),
        lambda i: round(rng.uniform(-100.0, 100.0), 3),
        lambda i: _word(rng, rng.randint(5, 30)),
        lambda i: rng.choice([True, False]),
        lambda i: None,
        lambda i: {"index": i, "score": round(rng.uniform(0, 100), 2)},
    )
    array: list[Any] = [rng.choice(makers)(i) for i in range(200)]
    return json.dumps(array)


def _nested_structure(rng: random.Random) -> str:
    """Eight levels of objects, each holding a list of subtrees."""

    def subtree(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _word(rng, 10)}
        return {
            "level": depth,
            "items": [subtree(depth - 1) for _ in range(3)],
            "nested": subtree(depth - 1),
        }

    return json.dumps(subtree(8))


def _string_heavy(rng: random.Random) -> str:
    """Strings dense with escapes, \\u sequences and raw non-ASCII text."""

    def escaped_string() -> str:
        chars = []
        for _ in range(50):
            if rng.random() < _ESCAPE_PROBABILITY:
                chars.append(rng.choice(_ESCAPES))
            else:
                chars.append(rng.choice(string.ascii_letters + " "))
        return "".join(chars)

    data = {
        "strings": [escaped_string() for _ in range(100)],
        "unicode": [
            f"Unicode: \\u{rng.randint(0x00A0, 0xD7FF):04x}"
            for _ in range(50)
        ],
        "raw": ["".join(rng.choices(_NON_ASCII, k=20)) for _ in range(50)],
    }
    # Keep the raw text raw instead of \u-escaping it
    return json.dumps(data, ensure_ascii=False)
