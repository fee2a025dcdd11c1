"""
Typed value store backing every JSON object and array.

A Container keeps one string-keyed map of ``Entry`` records. Each entry
carries its value together with the value's kind, the cached length of
string values, the hidden flag and whether a nested Container is owned by
this parent or merely aliased. Arrays translate integer indices into the
same map and keep their keys contiguous.
"""

import logging
from collections.abc import Iterator
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import replace
from enum import Enum
from operator import attrgetter
from typing import Any
from typing import ClassVar

logger = logging.getLogger(__name__)


class JSONType(Enum):
    """Kinds of value an entry can hold."""

    INVALID = "invalid"
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    OBJECT = "object"
    NULL = "null"


class ContainerKind(Enum):
    OBJECT = "object"
    ARRAY = "array"


class SortOrder(Enum):
    ASC = "asc"
    DESC = "desc"


type Value = str | int | float | bool | Container | None
type Key = str | int

_SORTABLE = frozenset(
    {JSONType.STRING, JSONType.INT, JSONType.FLOAT, JSONType.BOOL}
)


def kind_of(value: Any) -> JSONType:
    """Returns the JSONType a Python value would be stored as."""
    if value is None:
        return JSONType.NULL
    # bool before int, bool is an int subclass
    if isinstance(value, bool):
        return JSONType.BOOL
    if isinstance(value, int):
        return JSONType.INT
    if isinstance(value, float):
        return JSONType.FLOAT
    if isinstance(value, str):
        return JSONType.STRING
    if isinstance(value, Container):
        return JSONType.OBJECT
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def _require(value: Any, kind: JSONType) -> None:
    actual = kind_of(value)
    if actual is kind or (kind is JSONType.FLOAT and actual is JSONType.INT):
        return
    msg = f"expected a {kind.value} value, not {type(value).__name__}"
    raise TypeError(msg)


@dataclass
class Entry:
    """One stored value plus its per-key metadata."""

    kind: JSONType
    value: Value
    string_length: int = -1
    hidden: bool = False
    owned: bool = True

    @classmethod
    def create(
        cls, kind: JSONType, value: Value, owned: bool = True
    ) -> "Entry":
        if kind is JSONType.FLOAT:
            value = float(value)  # type: ignore[arg-type]
        length = -1
        if isinstance(value, str):
            length = len(value)
        return cls(kind, value, length, owned=owned)

    def alias(self) -> "Entry":
        """Copy of this entry that does not own a nested Container."""
        return replace(self, owned=self.kind is not JSONType.OBJECT)

    def same_as(self, other: "Entry") -> bool:
        """Structural comparison, ignoring ownership."""
        return (
            self.kind is other.kind
            and self.hidden == other.hidden
            and self.value == other.value
        )


class Container:
    """
    Shared storage and typed accessors for JSON objects and arrays.

    Subclasses decide how user keys map onto the underlying map and which
    writes they accept.
    """

    kind: ClassVar[ContainerKind]

    def __init__(self) -> None:
        self._entries: dict[str, Entry] = {}

    # Key translation, provided by the variants

    def _slot(self, key: Key) -> str:
        raise NotImplementedError

    def _write_slot(self, key: Key) -> str:
        raise NotImplementedError

    def _key(self, slot: str) -> Key:
        raise NotImplementedError

    def _accepts(self, kind: JSONType) -> bool:
        return True

    def _lookup(self, key: Key) -> Entry | None:
        return self._entries.get(self._slot(key))

    @property
    def is_array(self) -> bool:
        return self.kind is ContainerKind.ARRAY

    # Reading

    def get_type(self, key: Key) -> JSONType:
        """Returns the kind stored under ``key``, INVALID when absent."""
        entry = self._lookup(key)
        return entry.kind if entry is not None else JSONType.INVALID

    def _get(self, key: Key, kind: JSONType, default: Any) -> Any:
        entry = self._lookup(key)
        if entry is None or entry.kind is not kind:
            return default
        return entry.value

    def get(self, key: Key, default: Any = None) -> Any:
        """Returns the value under ``key`` whatever its kind."""
        entry = self._lookup(key)
        return default if entry is None else entry.value

    def get_string(self, key: Key, default: str = "") -> str:
        return self._get(key, JSONType.STRING, default)

    def get_int(self, key: Key, default: int = 0) -> int:
        return self._get(key, JSONType.INT, default)

    def get_float(self, key: Key, default: float = 0.0) -> float:
        return self._get(key, JSONType.FLOAT, default)

    def get_bool(self, key: Key, default: bool = False) -> bool:
        return self._get(key, JSONType.BOOL, default)

    def get_object(
        self, key: Key, default: "Container | None" = None
    ) -> "Container | None":
        return self._get(key, JSONType.OBJECT, default)

    def get_entry(self, key: Key) -> Entry | None:
        """Returns the stored record for ``key``; treat it as read-only."""
        return self._lookup(key)

    def is_null(self, key: Key) -> bool:
        return self.get_type(key) is JSONType.NULL

    def get_string_length(self, key: Key) -> int:
        """Cached length of the string under ``key``, -1 for other kinds."""
        entry = self._lookup(key)
        if entry is None or entry.kind is not JSONType.STRING:
            return -1
        return entry.string_length

    def is_hidden(self, key: Key) -> bool:
        entry = self._lookup(key)
        return entry is not None and entry.hidden

    def is_owned(self, key: Key) -> bool:
        """True when ``key`` holds a nested Container owned by this one."""
        entry = self._lookup(key)
        return (
            entry is not None
            and entry.kind is JSONType.OBJECT
            and entry.owned
        )

    # Writing

    def _set(
        self, key: Key, kind: JSONType, value: Value, owned: bool = True
    ) -> bool:
        slot = self._write_slot(key)
        if not self._accepts(kind):
            logger.debug(
                "Rejected %s value for %r in %s", kind.value, key, self
            )
            return False

        entry = Entry.create(kind, value, owned)
        previous = self._entries.get(slot)
        if previous is not None:
            entry.hidden = previous.hidden
        self._entries[slot] = entry
        return True

    def set_string(self, key: Key, value: str) -> bool:
        _require(value, JSONType.STRING)
        return self._set(key, JSONType.STRING, value)

    def set_int(self, key: Key, value: int) -> bool:
        _require(value, JSONType.INT)
        return self._set(key, JSONType.INT, value)

    def set_float(self, key: Key, value: float) -> bool:
        _require(value, JSONType.FLOAT)
        return self._set(key, JSONType.FLOAT, value)

    def set_bool(self, key: Key, value: bool) -> bool:
        _require(value, JSONType.BOOL)
        return self._set(key, JSONType.BOOL, value)

    def set_null(self, key: Key) -> bool:
        return self._set(key, JSONType.NULL, None)

    def set_object(
        self, key: Key, value: "Container | None", *, owned: bool = True
    ) -> bool:
        """
        Attaches a nested Container under ``key``.

        With ``owned`` the parent takes responsibility for cleaning the
        child up; otherwise the entry is a non-owning alias. ``None`` is
        stored as null.
        """
        if value is None:
            return self.set_null(key)
        _require(value, JSONType.OBJECT)
        return self._set(key, JSONType.OBJECT, value, owned)

    def set(self, key: Key, value: Value, *, owned: bool = True) -> bool:
        """Stores ``value`` under ``key`` with the kind inferred from it."""
        return self._set(key, kind_of(value), value, owned)

    def set_entry(self, key: Key, entry: Entry) -> bool:
        """Stores a copy of ``entry`` including its hidden and owned flags."""
        slot = self._write_slot(key)
        if not self._accepts(entry.kind):
            logger.debug(
                "Rejected %s value for %r in %s", entry.kind.value, key, self
            )
            return False
        self._entries[slot] = replace(entry)
        return True

    def set_hidden(self, key: Key, hidden: bool) -> bool:
        """Flags ``key`` as hidden from encoding; False if it is absent."""
        entry = self._lookup(key)
        if entry is None:
            return False
        entry.hidden = hidden
        return True

    def remove(self, key: Key) -> bool:
        return self._entries.pop(self._slot(key), None) is not None

    def clear(self) -> None:
        """Drops every entry without touching nested Containers."""
        self._entries.clear()

    # Iteration

    def entries(
        self, include_hidden: bool = True
    ) -> Iterator[tuple[Key, Entry]]:
        for slot, entry in list(self._entries.items()):
            if include_hidden or not entry.hidden:
                yield self._key(slot), entry

    def keys(self, include_hidden: bool = True) -> list[Key]:
        return [key for key, _ in self.entries(include_hidden)]

    def items(self, include_hidden: bool = True) -> list[tuple[Key, Value]]:
        return [
            (key, entry.value) for key, entry in self.entries(include_hidden)
        ]

    def __iter__(self) -> Iterator[Key]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        try:
            return self._lookup(key) is not None  # type: ignore[arg-type]
        except TypeError:
            return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Container) or other.kind is not self.kind:
            return NotImplemented
        if len(self._entries) != len(other._entries):
            return False
        for slot, entry in self._entries.items():
            theirs = other._entries.get(slot)
            if theirs is None or not entry.same_as(theirs):
                return False
        return True

    __hash__ = None  # type: ignore[assignment]

    def to_python(self, include_hidden: bool = False) -> Any:
        """Converts the tree into plain dicts and lists."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self._entries)} entries)"


def _python_value(entry: Entry, include_hidden: bool) -> Any:
    if entry.kind is JSONType.OBJECT:
        return entry.value.to_python(include_hidden)  # type: ignore[union-attr]
    return entry.value


class JSONObject(Container):
    """A JSON object: string keys mapped to typed entries."""

    kind = ContainerKind.OBJECT

    def _slot(self, key: Key) -> str:
        if not isinstance(key, str):
            msg = f"keys must be strings, not {type(key).__name__}"
            raise TypeError(msg)
        return key

    _write_slot = _slot

    def _key(self, slot: str) -> Key:
        return slot

    def has_key(self, key: str) -> bool:
        return self._lookup(key) is not None

    def to_python(self, include_hidden: bool = False) -> dict[str, Any]:
        return {
            key: _python_value(entry, include_hidden)  # type: ignore[misc]
            for key, entry in self.entries(include_hidden)
        }


class JSONArray(Container):
    """
    A JSON array: entries keyed by the contiguous indices ``0..len-1``.

    An array may enforce a single element kind; writes of any other kind
    are rejected without modifying the array.
    """

    kind = ContainerKind.ARRAY

    def __init__(self, enforced_type: JSONType | None = None) -> None:
        super().__init__()
        self._enforced_type: JSONType | None = None
        if enforced_type is not None:
            self.enforce_type(enforced_type)

    def _slot(self, key: Key) -> str:
        if not isinstance(key, int) or isinstance(key, bool):
            msg = f"array indices must be integers, not {type(key).__name__}"
            raise TypeError(msg)
        return str(key)

    def _write_slot(self, key: Key) -> str:
        slot = self._slot(key)
        if not self.has_index(key):  # type: ignore[arg-type]
            raise IndexError(f"array index {key} out of range")
        return slot

    def _key(self, slot: str) -> Key:
        return int(slot)

    def _accepts(self, kind: JSONType) -> bool:
        return self._enforced_type is None or kind is self._enforced_type

    def has_index(self, index: int) -> bool:
        self._slot(index)
        return 0 <= index < len(self._entries)

    def entries(
        self, include_hidden: bool = True
    ) -> Iterator[tuple[Key, Entry]]:
        for index in range(len(self._entries)):
            entry = self._entries[str(index)]
            if include_hidden or not entry.hidden:
                yield index, entry

    # Appending

    def _push_entry(self, entry: Entry) -> int:
        if not self._accepts(entry.kind):
            logger.debug(
                "Rejected %s push into array enforcing %s",
                entry.kind.value,
                self._enforced_type.value,  # type: ignore[union-attr]
            )
            return -1
        index = len(self._entries)
        self._entries[str(index)] = entry
        return index

    def push_string(self, value: str) -> int:
        _require(value, JSONType.STRING)
        return self._push_entry(Entry.create(JSONType.STRING, value))

    def push_int(self, value: int) -> int:
        _require(value, JSONType.INT)
        return self._push_entry(Entry.create(JSONType.INT, value))

    def push_float(self, value: float) -> int:
        _require(value, JSONType.FLOAT)
        return self._push_entry(Entry.create(JSONType.FLOAT, value))

    def push_bool(self, value: bool) -> int:
        _require(value, JSONType.BOOL)
        return self._push_entry(Entry.create(JSONType.BOOL, value))

    def push_null(self) -> int:
        return self._push_entry(Entry.create(JSONType.NULL, None))

    def push_object(
        self, value: Container | None, *, owned: bool = True
    ) -> int:
        if value is None:
            return self.push_null()
        _require(value, JSONType.OBJECT)
        return self._push_entry(Entry.create(JSONType.OBJECT, value, owned))

    def push(self, value: Value, *, owned: bool = True) -> int:
        """Appends ``value``; returns its index, or -1 if rejected."""
        return self._push_entry(Entry.create(kind_of(value), value, owned))

    def concat(self, other: "JSONArray") -> bool:
        """
        Appends every element of ``other``.

        Nested Containers are appended as aliases. Stops at the first
        element rejected by type enforcement and returns False; elements
        appended before it are kept.
        """
        if not isinstance(other, JSONArray):
            msg = f"can only concat a JSONArray, not {type(other).__name__}"
            raise TypeError(msg)
        for _, entry in list(other.entries()):
            if self._push_entry(entry.alias()) < 0:
                return False
        return True

    # Removal

    def remove(self, key: Key) -> bool:
        """Removes the element at ``key`` and shifts later elements down."""
        self._slot(key)
        if not self.has_index(key):  # type: ignore[arg-type]
            return False
        last = len(self._entries) - 1
        for index in range(key, last):  # type: ignore[arg-type]
            self._entries[str(index)] = self._entries[str(index + 1)]
        del self._entries[str(last)]
        return True

    # Type enforcement

    @property
    def enforced_type(self) -> JSONType | None:
        return self._enforced_type

    def can_use_type(self, kind: JSONType) -> bool:
        """True when every current element is of ``kind``."""
        return all(entry.kind is kind for entry in self._entries.values())

    def enforce_type(self, kind: JSONType | None) -> bool:
        """
        Restricts the array to ``kind``, or lifts the restriction on None.

        Fails without changes when an existing element is of another kind.
        """
        if kind is JSONType.INVALID:
            raise ValueError("cannot enforce the INVALID type")
        if kind is not None and not self.can_use_type(kind):
            return False
        self._enforced_type = kind
        return True

    # Searching

    def index_of(self, value: Value) -> int:
        """Index of the first element equal to ``value`` and of its kind."""
        kind = kind_of(value)
        for index, entry in self.entries():
            if entry.kind is not kind:
                continue
            if kind is JSONType.OBJECT:
                if entry.value is value:
                    return index  # type: ignore[return-value]
            elif entry.value == value:
                return index  # type: ignore[return-value]
        return -1

    def contains(self, value: Value) -> bool:
        return self.index_of(value) != -1

    def index_of_string(self, value: str) -> int:
        _require(value, JSONType.STRING)
        for index in range(len(self._entries)):
            entry = self._entries[str(index)]
            if entry.kind is JSONType.STRING and entry.value == value:
                return index
        return -1

    def contains_string(self, value: str) -> bool:
        return self.index_of_string(value) != -1

    def sort(self, order: SortOrder = SortOrder.ASC) -> bool:
        """
        Sorts a homogeneous array of strings, ints, floats or bools.

        Returns False, leaving the array untouched, when the elements are
        of mixed or unsortable kinds.
        """
        kinds = {entry.kind for entry in self._entries.values()}
        if len(kinds) > 1 or not kinds <= _SORTABLE:
            return False
        ordered = sorted(
            self._entries.values(),
            key=attrgetter("value"),
            reverse=order is SortOrder.DESC,
        )
        for index, entry in enumerate(ordered):
            self._entries[str(index)] = entry
        return True

    def to_python(self, include_hidden: bool = False) -> list[Any]:
        return [
            _python_value(entry, include_hidden)
            for _, entry in self.entries(include_hidden)
        ]


def _from_python_value(value: Any) -> Value:
    if isinstance(value, Mapping | list | tuple):
        return from_python(value)
    return value


def from_python(value: Any) -> Container:
    """
    Builds a Container tree from nested dicts, lists and tuples.

    Nested Containers are owned by their parents. Dict keys must be
    strings.
    """
    if isinstance(value, Mapping):
        obj = JSONObject()
        for key, item in value.items():
            obj.set(key, _from_python_value(item))
        return obj
    if isinstance(value, list | tuple):
        array = JSONArray()
        for item in value:
            array.push(_from_python_value(item))
        return array
    msg = f"Object of type {type(value).__name__} is not a JSON container"
    raise TypeError(msg)
