"""
Value store tests for JSONObject: typed setters and getters, defaults,
metadata flags, iteration and equality.
"""

import pytest

import jtree
from jtree import JSONType


def test_typed_round_trip() -> None:
    """
    Each typed setter records its kind and the getter returns the value.
    """
    obj = jtree.JSONObject()
    child = jtree.JSONObject()

    assert obj.set_string("s", "text")
    assert obj.set_int("i", -3)
    assert obj.set_float("f", 1.25)
    assert obj.set_bool("b", False)
    assert obj.set_null("n")
    assert obj.set_object("o", child)

    assert obj.get_type("s") is JSONType.STRING
    assert obj.get_string("s") == "text"
    assert obj.get_int("i") == -3
    assert obj.get_float("f") == 1.25
    assert obj.get_bool("b") is False
    assert obj.is_null("n")
    assert obj.get_object("o") is child
    assert len(obj) == 6


def test_float_setter_widens_ints() -> None:
    """
    An int stored through set_float becomes a float entry.
    """
    obj = jtree.JSONObject()
    obj.set_float("f", 3)

    assert obj.get_type("f") is JSONType.FLOAT
    assert isinstance(obj.get_float("f"), float)
    assert jtree.dumps(obj) == '{"f":3.0}'


def test_getters_fall_back_to_defaults() -> None:
    """
    Missing keys and kind mismatches return the default, never raise.
    """
    obj = jtree.loads('{"i": 7, "s": "x"}')

    assert obj.get_type("missing") is JSONType.INVALID
    assert obj.get_string("missing") == ""
    assert obj.get_int("s") == 0
    assert obj.get_int("s", -1) == -1
    assert obj.get_float("i") == 0.0
    assert obj.get_bool("i", True) is True
    assert obj.get_object("i") is None
    assert obj.get("missing", "dflt") == "dflt"
    assert obj.get("i") == 7


def test_setter_type_checks() -> None:
    """
    Typed setters refuse Python values of another type.
    """
    obj = jtree.JSONObject()

    with pytest.raises(TypeError, match="expected a int value"):
        obj.set_int("k", "1")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        obj.set_int("k", True)
    with pytest.raises(TypeError):
        obj.set_string("k", 1)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        obj.set_object("k", {"plain": "dict"})  # type: ignore[arg-type]
    with pytest.raises(TypeError, match="not JSON serializable"):
        obj.set("k", object())  # type: ignore[arg-type]

    assert len(obj) == 0


def test_generic_set_infers_kind() -> None:
    """
    set picks the kind from the Python value, bool before int.
    """
    obj = jtree.JSONObject()
    obj.set("b", True)
    obj.set("i", 1)
    obj.set("n", None)
    obj.set("o", jtree.JSONArray())

    assert obj.get_type("b") is JSONType.BOOL
    assert obj.get_type("i") is JSONType.INT
    assert obj.get_type("n") is JSONType.NULL
    assert obj.get_type("o") is JSONType.OBJECT
    assert obj.set_object("null", None)
    assert obj.is_null("null")


def test_overwrite_changes_kind_keeps_hidden() -> None:
    """
    Overwriting a key replaces value and kind but keeps the hidden flag.
    """
    obj = jtree.JSONObject()
    obj.set_int("k", 1)
    obj.set_hidden("k", True)
    obj.set_string("k", "now a string")

    assert obj.get_type("k") is JSONType.STRING
    assert obj.is_hidden("k")
    assert len(obj) == 1


def test_string_length() -> None:
    """
    String entries cache their length; other kinds report -1.
    """
    obj = jtree.JSONObject()
    obj.set_string("s", "héllo")
    obj.set_int("i", 5)

    assert obj.get_string_length("s") == 5
    assert obj.get_string_length("i") == -1
    assert obj.get_string_length("missing") == -1


def test_hidden_flag() -> None:
    """
    set_hidden toggles visibility of existing keys only.
    """
    obj = jtree.loads('{"a": 1, "b": 2}')

    assert not obj.set_hidden("missing", True)
    assert obj.set_hidden("a", True)
    assert obj.is_hidden("a")
    assert obj.keys() == ["a", "b"]
    assert obj.keys(include_hidden=False) == ["b"]
    assert obj.to_python() == {"b": 2}
    assert obj.to_python(include_hidden=True) == {"a": 1, "b": 2}

    obj.set_hidden("a", False)
    assert jtree.dumps(obj) == '{"a":1,"b":2}'


def test_ownership_flag() -> None:
    """
    Nested Containers are owned unless attached as aliases.
    """
    obj = jtree.JSONObject()
    child = jtree.JSONObject()
    obj.set_object("owned", child)
    obj.set_object("alias", child, owned=False)
    obj.set_int("scalar", 1)

    assert obj.is_owned("owned")
    assert not obj.is_owned("alias")
    assert not obj.is_owned("scalar")
    assert not obj.is_owned("missing")


def test_remove_and_clear() -> None:
    """
    remove drops one key, clear drops them all.
    """
    obj = jtree.loads('{"a": 1, "b": {"c": 2}}')
    inner = obj.get_object("b")

    assert obj.remove("a")
    assert not obj.remove("a")
    assert not obj.has_key("a")

    obj.clear()
    assert len(obj) == 0
    # clear does not reach into children
    assert inner.get_int("c") == 2


def test_key_type_checked() -> None:
    """
    Object keys must be strings.
    """
    obj = jtree.JSONObject()

    with pytest.raises(TypeError, match="keys must be strings, not int"):
        obj.set_int(0, 1)  # type: ignore[arg-type]
    assert 0 not in obj
    assert "x" not in obj


def test_iteration_order() -> None:
    """
    Keys iterate in insertion order.
    """
    obj = jtree.loads('{"z": 1, "a": 2, "m": 3}')

    assert list(obj) == ["z", "a", "m"]
    assert obj.items() == [("z", 1), ("a", 2), ("m", 3)]
    assert [key for key, entry in obj.entries() if entry.value > 1] == [
        "a",
        "m",
    ]


def test_entries_snapshot_allows_mutation() -> None:
    """
    Removing keys while iterating entries() is safe.
    """
    obj = jtree.loads('{"a": 1, "b": 2, "c": 3}')
    for key, _ in obj.entries():
        obj.remove(key)
    assert len(obj) == 0


def test_equality() -> None:
    """
    Equality compares kinds and values structurally.
    """
    left = jtree.loads('{"a": [1, {"b": null}], "f": 1.0}')
    right = jtree.loads('{"a": [1, {"b": null}], "f": 1.0}')

    assert left == right
    right.set_int("f", 1)
    # same numeric value, different kind
    assert left != right
    assert jtree.JSONObject() != jtree.JSONArray()
    assert left != {"a": [1, {"b": None}], "f": 1.0}

    with pytest.raises(TypeError):
        hash(left)


def test_from_python() -> None:
    """
    from_python builds owned Container trees from plain structures.
    """
    tree = jtree.from_python({"a": [1, {"b": "c"}], "t": (1, 2)})

    assert isinstance(tree, jtree.JSONObject)
    assert tree.is_owned("a")
    assert isinstance(tree.get_object("t"), jtree.JSONArray)
    assert tree.to_python() == {"a": [1, {"b": "c"}], "t": [1, 2]}

    with pytest.raises(TypeError, match="not a JSON container"):
        jtree.from_python(5)


def test_get_entry(nested_tree: jtree.JSONObject) -> None:
    """
    get_entry exposes the stored record.
    """
    entry = nested_tree.get_entry("name")

    assert entry is not None
    assert entry.kind is JSONType.STRING
    assert entry.value == "root"
    assert entry.string_length == 4
    assert not entry.hidden
    assert nested_tree.get_entry("missing") is None
    assert repr(nested_tree) == "JSONObject(3 entries)"
