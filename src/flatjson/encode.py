import json
import typing
from typing import Any, Callable, Sequence

from flatjson.errors import EncodingError
from flatjson.flatten import parse
from flatjson.pair import Pair
from flatjson.tokens import Source


def to_map(pairs: Sequence[Pair]) -> dict[str, Any]:
    """Key -> value, in emission order. A repeated key keeps its last value."""
    return {pair.key: pair.value for pair in pairs}


def to_array(pairs: Sequence[Pair]) -> list[list[Any]]:
    """[key, value] entries in emission order."""
    return [[pair.key, pair.value] for pair in pairs]


Shape = Callable[[Sequence[Pair]], Any]

SHAPES: dict[str, Shape] = {
    "map": to_map,
    "array": to_array,
}


def _resolve_shape(shape: str | Shape) -> Shape:
    if callable(shape):
        return shape
    try:
        return SHAPES[shape]
    except KeyError:
        raise ValueError(
            f"Unknown output shape '{shape}', expected one of {sorted(SHAPES)}"
        ) from None


def _dumps(value: Any, indent: int | None = None) -> str:
    try:
        return json.dumps(value, indent=indent, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as exc:
        raise EncodingError(f"Cannot encode flattened JSON: {exc}") from exc


def render(pairs: Sequence[Pair], shape: str | Shape = "map", indent: int | None = None) -> str:
    return _dumps(_resolve_shape(shape)(pairs), indent=indent)


class Encoder:
    """
    Writes flat JSON documents to a text stream, one per call, each
    followed by a newline.
    """

    def __init__(
        self,
        stream: typing.TextIO,
        shape: str | Shape = "map",
        *,
        indent: int | None = None,
        use_float: bool = True,
    ) -> None:
        self.stream = stream
        self.shape = _resolve_shape(shape)
        self.indent = indent
        self.use_float = use_float

    def write_pairs(self, pairs: Sequence[Pair]) -> None:
        text = render(pairs, self.shape, indent=self.indent)
        self.stream.write(text)
        self.stream.write("\n")

    def convert(self, source: Source) -> None:
        """Flatten JSON read from `source` and write it out."""
        self.write_pairs(parse(source, use_float=self.use_float))

    def encode(self, obj: Any) -> None:
        """Serialize a Python value to JSON, then flatten and write it out."""
        self.write_pairs(parse(_dumps(obj), use_float=self.use_float))


def convert_map(source: Source) -> str:
    return render(parse(source), "map")


def convert_array(source: Source) -> str:
    return render(parse(source), "array")


def encode_map(obj: Any) -> str:
    return render(parse(_dumps(obj)), "map")


def encode_array(obj: Any) -> str:
    return render(parse(_dumps(obj)), "array")
