"""
Structural operations over Container trees: merge, copy, cleanup, rename.
"""

import dataclasses
import logging
from enum import IntFlag

from ._errors import ErrorCode
from ._profile import ProfileContext
from ._store import Container
from ._store import JSONArray
from ._store import JSONObject
from ._store import JSONType

logger = logging.getLogger(__name__)


class MergeOption(IntFlag):
    NONE = 0
    # Overwrite keys already present in the destination
    REPLACE = 1
    # With REPLACE, clean up owned Containers overwritten by another Container
    CLEANUP = 2


def merge(
    to: Container, frm: Container, options: MergeOption = MergeOption.REPLACE
) -> bool:
    """
    Merges the entries of ``frm`` into ``to``.

    Arrays are appended to arrays; objects are merged key by key, honouring
    ``MergeOption.REPLACE`` and ``MergeOption.CLEANUP``; the latter only
    cleans an old Container replaced by a different Container, never one
    replaced by a scalar. Nested Containers are attached as aliases, so
    ``to`` never takes ownership of children it shares with ``frm``. An
    array merged into itself is doubled.

    Returns False without touching ``to`` when one side is an array and the
    other an object. A write rejected by array type enforcement stops the
    merge and returns False; entries merged before it stay in place.
    """
    if to.kind is not frm.kind:
        logger.debug(
            "Refusing to merge %s into %s: %s",
            frm.kind.value,
            to.kind.value,
            ErrorCode.TYPE_MISMATCH.value,
        )
        return False

    if isinstance(to, JSONArray):
        # concat snapshots frm, so merging an array into itself doubles it
        return to.concat(frm)  # type: ignore[arg-type]

    if to is frm:
        return True

    with ProfileContext("merge", len(frm)):
        replace_existing = MergeOption.REPLACE in options
        cleanup_replaced = replace_existing and MergeOption.CLEANUP in options

        for key, entry in frm.entries():
            current = to.get_entry(key)
            if current is not None:
                if not replace_existing:
                    continue
                if (
                    cleanup_replaced
                    and current.kind is JSONType.OBJECT
                    and entry.kind is JSONType.OBJECT
                    and current.owned
                    and current.value is not entry.value
                ):
                    cleanup(current.value)  # type: ignore[arg-type]

            if not to.set_entry(key, entry.alias()):
                return False

    return True


def shallow_copy(container: Container) -> Container:
    """
    Copies ``container`` one level deep.

    Nested Containers are shared with the source as aliases, so mutating
    them through the copy is visible through the source.
    """
    copy: Container
    if isinstance(container, JSONArray):
        copy = JSONArray(container.enforced_type)
    else:
        copy = JSONObject()
    merge(copy, container, MergeOption.REPLACE)
    return copy


def _deep_copy(container: Container, memo: dict[int, Container]) -> Container:
    copy = shallow_copy(container)
    memo[id(container)] = copy

    for key, entry in copy.entries():
        if entry.kind is not JSONType.OBJECT:
            continue
        child = entry.value
        if id(child) in memo:
            # Already copied elsewhere in this tree, keep the sharing
            copy.set_entry(
                key,
                dataclasses.replace(entry, value=memo[id(child)], owned=False),
            )
        else:
            copy.set_entry(
                key,
                dataclasses.replace(
                    entry,
                    value=_deep_copy(child, memo),  # type: ignore[arg-type]
                    owned=True,
                ),
            )

    return copy


def deep_copy(container: Container) -> Container:
    """
    Copies ``container`` and every Container nested in it.

    The result shares nothing mutable with the source. A Container reached
    twice is copied once; the copy owns it at the first position reached
    and aliases it at the others.
    """
    with ProfileContext("deep_copy", len(container)):
        return _deep_copy(container, {})


def _cleanup(container: Container, seen: set[int]) -> None:
    seen.add(id(container))
    for _, entry in container.entries():
        if (
            entry.kind is JSONType.OBJECT
            and entry.owned
            and id(entry.value) not in seen
        ):
            _cleanup(entry.value, seen)  # type: ignore[arg-type]
    container.clear()


def cleanup(container: Container) -> None:
    """
    Recursively clears every owned Container below ``container``, then
    ``container`` itself.

    Aliased children are left alone; their owner is responsible for them.
    The top-level handle stays usable as an empty Container.
    """
    with ProfileContext("cleanup", len(container)):
        _cleanup(container, set())


def rename(
    container: Container, key: str, to_key: str, replace: bool = True
) -> bool:
    """
    Moves the entry under ``key`` to ``to_key``.

    The value keeps its kind, hidden flag and ownership. Returns False
    without changes when ``key`` is absent, equals ``to_key``, ``to_key``
    exists and ``replace`` is off, or ``container`` is an array.
    """
    if not isinstance(container, JSONObject):
        logger.debug(
            "Refusing to rename keys of %s: %s",
            container.kind.value,
            ErrorCode.TYPE_MISMATCH.value,
        )
        return False

    entry = container.get_entry(key)
    if entry is None or key == to_key:
        return False
    if not replace and container.has_key(to_key):
        return False

    container.set_entry(to_key, entry)
    container.remove(key)
    return True
