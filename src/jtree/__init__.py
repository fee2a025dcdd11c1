"""
Typed JSON value trees with a recursive-descent codec.

Parses JSON text into JSONObject/JSONArray containers whose entries record
their kind alongside their value, serializes trees back into (optionally
pretty-printed) JSON text, and provides merge, copy, cleanup and rename
operations over them.
"""

import os
from pathlib import Path
from typing import IO
from typing import Any

from ._decoder import DEFAULT_DECODE_CONFIG
from ._decoder import DecodeConfig
from ._decoder import DecodeOption
from ._decoder import JsonParser
from ._decoder import decode
from ._encoder import DEFAULT_ENCODE_CONFIG
from ._encoder import EncodeConfig
from ._encoder import EncodeOption
from ._encoder import encode
from ._encoder import encoded_size
from ._errors import ErrorCode
from ._errors import EscapeError
from ._errors import JSONDecodeError
from ._errors import JSONEncodeError
from ._escape import escape
from ._escape import unescape
from ._profile import HotPathStats
from ._profile import clear_hot_path_stats
from ._profile import get_hot_path_stats
from ._store import Container
from ._store import ContainerKind
from ._store import Entry
from ._store import JSONArray
from ._store import JSONObject
from ._store import JSONType
from ._store import SortOrder
from ._store import from_python
from ._structure import MergeOption
from ._structure import cleanup
from ._structure import deep_copy
from ._structure import merge
from ._structure import rename
from ._structure import shallow_copy
from ._utf8 import Utf8Error
from ._utf8 import decode_codepoint
from ._utf8 import encode_codepoint

__version__ = "0.1.0"

# Plain Python structures are converted on the way in
JsonSource = Container | dict[str, Any] | list[Any] | tuple[Any, ...]


def loads(
    s: str, options: DecodeOption = DecodeOption.NONE, **kwargs: Any
) -> Container:
    """
    Parses a JSON document into a Container tree.

    Keyword arguments build the DecodeConfig for this call.
    """
    config = DecodeConfig(**kwargs) if kwargs else DEFAULT_DECODE_CONFIG
    return decode(s, options, config)


def dumps(
    obj: JsonSource, options: EncodeOption = EncodeOption.NONE, **kwargs: Any
) -> str:
    """
    Serializes a Container tree, or plain dicts and lists, to JSON text.

    Keyword arguments build the EncodeConfig for this call.
    """
    if not isinstance(obj, Container):
        obj = from_python(obj)
    config = EncodeConfig(**kwargs) if kwargs else DEFAULT_ENCODE_CONFIG
    return encode(obj, options, config)


def load(
    fp: IO[str], options: DecodeOption = DecodeOption.NONE, **kwargs: Any
) -> Container:
    """
    Parses a JSON document read from a file-like object.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return loads(fp.read(), options, **kwargs)


def dump(
    obj: JsonSource,
    fp: IO[str],
    options: EncodeOption = EncodeOption.NONE,
    **kwargs: Any,
) -> None:
    """
    Serializes a tree to a file-like object.
    """
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    fp.write(dumps(obj, options, **kwargs))


def read_file(
    path: str | os.PathLike[str],
    options: DecodeOption = DecodeOption.NONE,
    **kwargs: Any,
) -> Container:
    """Parses the UTF-8 JSON file at ``path``."""
    return loads(Path(path).read_text(encoding="utf-8"), options, **kwargs)


def write_file(
    obj: JsonSource,
    path: str | os.PathLike[str],
    options: EncodeOption = EncodeOption.NONE,
    **kwargs: Any,
) -> None:
    """Writes ``obj`` as JSON to ``path``, replacing any existing file."""
    Path(path).write_text(dumps(obj, options, **kwargs), encoding="utf-8")


__all__ = [
    "DEFAULT_DECODE_CONFIG",
    "DEFAULT_ENCODE_CONFIG",
    "Container",
    "ContainerKind",
    "DecodeConfig",
    "DecodeOption",
    "EncodeConfig",
    "EncodeOption",
    "Entry",
    "ErrorCode",
    "EscapeError",
    "HotPathStats",
    "JSONArray",
    "JSONDecodeError",
    "JSONEncodeError",
    "JSONObject",
    "JSONType",
    "JsonParser",
    "MergeOption",
    "SortOrder",
    "Utf8Error",
    "cleanup",
    "clear_hot_path_stats",
    "decode",
    "decode_codepoint",
    "deep_copy",
    "dump",
    "dumps",
    "encode",
    "encode_codepoint",
    "encoded_size",
    "escape",
    "from_python",
    "get_hot_path_stats",
    "load",
    "loads",
    "merge",
    "read_file",
    "rename",
    "shallow_copy",
    "unescape",
    "write_file",
]
