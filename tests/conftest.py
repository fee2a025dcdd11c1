"""
Pytest configuration and shared fixtures for jtree tests.

Provides immutable test data fixtures: the json.org JSON_checker documents
with the failure category each malformed one must report, plus a small
tree builder used across the structural tests.
"""

from dataclasses import dataclass
from typing import Any

import pytest

import jtree
from jtree import ErrorCode


@dataclass(frozen=True)
class JsonTestCase:
    """
    Immutable container for JSON test case data.

    Holds test input and expected behavior for consistent test execution.
    """

    description: str
    input_data: str
    should_fail: bool = False
    expected_output: Any = None
    skip_reason: str = ""


# (document, error code) pairs from https://json.org/JSON_checker/test/
_FAIL_DOCS: list[tuple[str, ErrorCode | None]] = [
    # fail1.json
    (
        '"A JSON payload should be an object or array, not a string."',
        ErrorCode.EXPECTED_STRUCTURE,
    ),
    # fail2.json
    ('["Unclosed array"', ErrorCode.UNEXPECTED_END),
    # fail3.json
    ('{unquoted_key: "keys must be quoted"}', ErrorCode.EXPECTED_KEY),
    # fail4.json
    ('["extra comma",]', ErrorCode.UNKNOWN_LITERAL),
    # fail5.json
    ('["double extra comma",,]', ErrorCode.UNKNOWN_LITERAL),
    # fail6.json
    ('[   , "<-- missing value"]', ErrorCode.UNKNOWN_LITERAL),
    # fail7.json
    ('["Comma after the close"],', ErrorCode.TRAILING_DATA),
    # fail8.json
    ('["Extra close"]]', ErrorCode.TRAILING_DATA),
    # fail9.json
    ('{"Extra comma": true,}', ErrorCode.EXPECTED_KEY),
    # fail10.json
    (
        '{"Extra value after close": true} "misplaced quoted value"',
        ErrorCode.TRAILING_DATA,
    ),
    # fail11.json
    ('{"Illegal expression": 1 + 2}', ErrorCode.EXPECTED_DELIMITER),
    # fail12.json
    ('{"Illegal invocation": alert()}', ErrorCode.UNKNOWN_LITERAL),
    # fail13.json
    ('{"Numbers cannot have leading zeroes": 013}', ErrorCode.UNKNOWN_LITERAL),
    # fail14.json
    ('{"Numbers cannot be hex": 0x14}', ErrorCode.UNKNOWN_LITERAL),
    # fail15.json
    ('["Illegal backslash escape: \\x15"]', ErrorCode.INVALID_ESCAPE),
    # fail16.json
    ("[\\naked]", ErrorCode.UNKNOWN_LITERAL),
    # fail17.json
    ('["Illegal backslash escape: \\017"]', ErrorCode.INVALID_ESCAPE),
    # fail18.json - nesting limit is configurable, see DecodeConfig
    ('[[[[[[[[[[[[[[[[[[[["Too deep"]]]]]]]]]]]]]]]]]]]]', None),
    # fail19.json
    ('{"Missing colon" null}', ErrorCode.EXPECTED_COLON),
    # fail20.json
    ('{"Double colon":: null}', ErrorCode.UNKNOWN_LITERAL),
    # fail21.json
    ('{"Comma instead of colon", null}', ErrorCode.EXPECTED_COLON),
    # fail22.json
    ('["Colon instead of comma": false]', ErrorCode.EXPECTED_DELIMITER),
    # fail23.json
    ('["Bad value", truth]', ErrorCode.UNKNOWN_LITERAL),
    # fail24.json
    ("['single quote']", ErrorCode.UNKNOWN_LITERAL),
    # fail25.json
    ('["\ttab\tcharacter\tin\tstring\t"]', ErrorCode.INVALID_STRING),
    # fail26.json
    (
        '["tab\\   character\\   in\\  string\\  "]',
        ErrorCode.INVALID_ESCAPE,
    ),
    # fail27.json
    ('["line\nbreak"]', ErrorCode.INVALID_STRING),
    # fail28.json
    ('["line\\\nbreak"]', ErrorCode.INVALID_ESCAPE),
    # fail29.json
    ("[0e]", ErrorCode.UNKNOWN_LITERAL),
    # fail30.json
    ("[0e+]", ErrorCode.UNKNOWN_LITERAL),
    # fail31.json
    ("[0e+-1]", ErrorCode.UNKNOWN_LITERAL),
    # fail32.json
    ('{"Comma instead if closing brace": true,', ErrorCode.UNEXPECTED_END),
    # fail33.json
    ('["mismatch"}', ErrorCode.EXPECTED_DELIMITER),
    # https://code.google.com/archive/p/simplejson/issues/3
    ('["A\u001fZ control characters in string"]', ErrorCode.INVALID_STRING),
]

PASS1 = """[
    "JSON Test Pattern pass1",
    {"object with 1 member":["array with 1 element"]},
    {},
    [],
    -42,
    true,
    false,
    null,
    {
        "integer": 1234567890,
        "real": -9876.543210,
        "e": 0.123456789e-12,
        "E": 1.234567890E+34,
        "":  23456789012E66,
        "zero": 0,
        "one": 1,
        "space": " ",
        "quote": "\\"",
        "backslash": "\\\\",
        "controls": "\\b\\f\\n\\r\\t",
        "slash": "/ & \\/",
        "alpha": "abcdefghijklmnopqrstuvwyz",
        "ALPHA": "ABCDEFGHIJKLMNOPQRSTUVWYZ",
        "digit": "0123456789",
        "0123456789": "digit",
        "special": "`1~!@#$%^&*()_+-={':[,]}|;.</>?",
        "hex": "\\u0123\\u4567\\u89AB\\uCDEF\\uabcd\\uef4A",
        "true": true,
        "false": false,
        "null": null,
        "array":[  ],
        "object":{  },
        "address": "50 St. James Street",
        "url": "https://www.JSON.org/",
        "comment": "// /* <!-- --",
        "# -- --> */": " ",
        " s p a c e d " :[1,2 , 3

,

4 , 5        ,          6           ,7        ],"compact":[1,2,3,4,5,6,7],
        "jsontext": "{\\"object with 1 member\\":[\\"array with 1 element\\"]}"
    }
]"""


@pytest.fixture
def json_fail_cases() -> list[JsonTestCase]:
    """
    Provides JSON strings that must fail parsing per JSON specification.

    ``expected_output`` holds the ErrorCode each document must report.
    """
    return [
        JsonTestCase(
            description=f"fail{idx + 1}.json",
            input_data=doc,
            should_fail=True,
            expected_output=code,
            skip_reason="" if code else "nesting limit is configurable",
        )
        for idx, (doc, code) in enumerate(_FAIL_DOCS)
    ]


@pytest.fixture
def json_pass_cases() -> list[JsonTestCase]:
    """
    Provides JSON strings that must parse successfully per JSON specification.
    """
    return [
        JsonTestCase(
            description="pass1.json - complex nested structure",
            input_data=PASS1,
        ),
        JsonTestCase(
            description="pass2.json - deep nesting",
            input_data='[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]',
        ),
        JsonTestCase(
            description="pass3.json - simple object",
            input_data='{"JSON Test Pattern pass3": {"The outermost value": "must be an object or array.", "In this test": "It is an object."}}',
        ),
    ]


@pytest.fixture
def basic_json_values() -> list[JsonTestCase]:
    """
    Provides single-value documents for every stored kind.

    Each document wraps the value in an array; ``expected_output`` is the
    (kind, value) pair element 0 must hold.
    """
    return [
        JsonTestCase("null", "[null]", False, (jtree.JSONType.NULL, None)),
        JsonTestCase("true", "[true]", False, (jtree.JSONType.BOOL, True)),
        JsonTestCase("false", "[false]", False, (jtree.JSONType.BOOL, False)),
        JsonTestCase("integer", "[42]", False, (jtree.JSONType.INT, 42)),
        JsonTestCase("negative", "[-17]", False, (jtree.JSONType.INT, -17)),
        JsonTestCase("zero", "[0]", False, (jtree.JSONType.INT, 0)),
        JsonTestCase("float", "[3.14]", False, (jtree.JSONType.FLOAT, 3.14)),
        JsonTestCase(
            "exponent", "[1e3]", False, (jtree.JSONType.FLOAT, 1000.0)
        ),
        JsonTestCase(
            "negative exponent",
            "[-2.5E-2]",
            False,
            (jtree.JSONType.FLOAT, -0.025),
        ),
        JsonTestCase("empty string", '[""]', False, (jtree.JSONType.STRING, "")),
        JsonTestCase(
            "simple string", '["hello"]', False, (jtree.JSONType.STRING, "hello")
        ),
    ]


@pytest.fixture
def nested_tree() -> jtree.JSONObject:
    """
    Builds ``{"name": "root", "child": {"n": 1}, "list": [1, {"deep": true}]}``
    with owned children.
    """
    child = jtree.JSONObject()
    child.set_int("n", 1)

    deep = jtree.JSONObject()
    deep.set_bool("deep", True)
    items = jtree.JSONArray()
    items.push_int(1)
    items.push_object(deep)

    root = jtree.JSONObject()
    root.set_string("name", "root")
    root.set_object("child", child)
    root.set_object("list", items)
    return root
