import dataclasses
import enum
import io
import typing
from typing import Any, Iterator

import ijson

from flatjson.errors import TokenError

Source = str | bytes | typing.IO[bytes] | typing.IO[str]


class TokenKind(enum.Enum):
    OBJECT_START = "object_start"
    OBJECT_END = "object_end"
    ARRAY_START = "array_start"
    ARRAY_END = "array_end"
    KEY = "key"
    SCALAR = "scalar"


@dataclasses.dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Any = None


OBJECT_START = Token(TokenKind.OBJECT_START)
OBJECT_END = Token(TokenKind.OBJECT_END)
ARRAY_START = Token(TokenKind.ARRAY_START)
ARRAY_END = Token(TokenKind.ARRAY_END)

_DELIMITERS = {
    "start_map": OBJECT_START,
    "end_map": OBJECT_END,
    "start_array": ARRAY_START,
    "end_array": ARRAY_END,
}

_SCALAR_EVENTS = frozenset(("null", "boolean", "integer", "double", "number", "string"))


def key(name: str) -> Token:
    return Token(TokenKind.KEY, name)


def scalar(value: Any) -> Token:
    return Token(TokenKind.SCALAR, value)


def _as_stream(source: Source) -> typing.IO[Any]:
    if isinstance(source, str):
        return io.BytesIO(source.encode("utf-8"))
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(bytes(source))
    if isinstance(source, io.TextIOBase):
        # ijson reads bytes; hand it the binary layer under a text stream.
        buffer = getattr(source, "buffer", None)
        if buffer is not None:
            return buffer
        return io.BytesIO(source.read().encode("utf-8"))
    return source


def tokenize(source: Source, *, use_float: bool = True) -> Iterator[Token]:
    """
    Yield the tokens of one JSON document in document order.

    Args:
    source: JSON text as str or bytes, or a file object opened for reading.
    Text streams are read through their underlying binary buffer.
    use_float: If True, non-integer numbers are floats; otherwise ijson's
    decimal.Decimal values are passed through untouched.

    Raises:
    TokenError when the document is malformed or the source fails mid-read.
    """
    try:
        events = ijson.basic_parse(_as_stream(source), use_float=use_float)
        for event, value in events:
            delimiter = _DELIMITERS.get(event)
            if delimiter is not None:
                yield delimiter
            elif event == "map_key":
                yield key(value)
            elif event in _SCALAR_EVENTS:
                yield scalar(value)
            else:
                raise TokenError(f"Unexpected JSON event '{event}'")
    except TokenError:
        raise
    except (ijson.JSONError, ValueError, OSError) as exc:
        raise TokenError(f"Invalid JSON input: {exc}") from exc
