import dataclasses
from typing import Iterable, Iterator

from flatjson.errors import TokenError
from flatjson.pair import Pair
from flatjson.tokens import Source, Token, TokenKind, tokenize

PATH_SEPARATOR = "."


def index_segment(index: int) -> str:
    return f"[{index}]"


@dataclasses.dataclass
class _Frame:
    kind: TokenKind  # OBJECT_START or ARRAY_START
    empty: bool = True
    expecting_key: bool = False
    index: int = 0


class Flattener:
    """
    Single-pass walker turning a JSON token stream into path-qualified pairs.

    The path stack holds one segment per open container: the key or `[N]`
    index under which that container's current child sits. A pair's key is
    the stack joined with '.', so the root contributes no segment.

    Each instance owns its own state; use one per document.
    """

    def __init__(self) -> None:
        self._frames: list[_Frame] = []
        self._path: list[str] = []
        self._done = False

    @property
    def depth(self) -> int:
        return len(self._frames)

    def _current_key(self) -> str:
        return PATH_SEPARATOR.join(self._path)

    def _begin_value(self) -> None:
        if not self._frames:
            if self._done:
                raise TokenError("Unexpected value after the end of the document")
            return

        frame = self._frames[-1]
        if frame.kind is TokenKind.OBJECT_START:
            if frame.expecting_key:
                raise TokenError("Expected an object key, got a value")
        else:
            self._path[-1] = index_segment(frame.index)
            frame.index += 1
        frame.empty = False

    def _end_value(self) -> None:
        if not self._frames:
            self._done = True
            return
        frame = self._frames[-1]
        if frame.kind is TokenKind.OBJECT_START:
            frame.expecting_key = True

    def _open(self, kind: TokenKind) -> None:
        self._begin_value()
        self._frames.append(
            _Frame(kind=kind, expecting_key=kind is TokenKind.OBJECT_START)
        )
        self._path.append("")

    def _close(self, start: TokenKind) -> Pair | None:
        if not self._frames or self._frames[-1].kind is not start:
            raise TokenError(f"Unbalanced '{start.name.lower()}' close token")
        frame = self._frames.pop()
        if frame.kind is TokenKind.OBJECT_START and not frame.expecting_key:
            raise TokenError("Object closed after a key with no value")
        self._path.pop()

        pair = None
        # Empty containers collapse to a null leaf, except the document root.
        if frame.empty and self._frames:
            pair = Pair(self._current_key(), None)
        self._end_value()
        return pair

    def feed(self, token: Token) -> Pair | None:
        """Advance the walk by one token, returning the pair it completes, if any."""
        kind = token.kind
        if kind is TokenKind.OBJECT_START or kind is TokenKind.ARRAY_START:
            self._open(kind)
            return None
        if kind is TokenKind.OBJECT_END:
            return self._close(TokenKind.OBJECT_START)
        if kind is TokenKind.ARRAY_END:
            return self._close(TokenKind.ARRAY_START)
        if kind is TokenKind.KEY:
            frame = self._frames[-1] if self._frames else None
            if frame is None or not frame.expecting_key:
                raise TokenError(f"Unexpected object key '{token.value}'")
            self._path[-1] = token.value
            frame.expecting_key = False
            frame.empty = False
            return None
        if kind is TokenKind.SCALAR:
            self._begin_value()
            pair = Pair(self._current_key(), token.value)
            self._end_value()
            return pair
        raise TokenError(f"Unknown token kind {kind!r}")

    def close(self) -> None:
        """Check that the stream ended on a complete document."""
        if self._frames:
            raise TokenError(
                f"Unexpected end of input inside {len(self._frames)} open container(s)"
            )
        if not self._done:
            raise TokenError("Unexpected end of input: no JSON value")


def iter_pairs(tokens: Iterable[Token]) -> Iterator[Pair]:
    """
    Lazily yield pairs as tokens are pulled from `tokens`.

    Pairs already yielded stay with the caller if a later token fails;
    use flatten() for all-or-nothing results.
    """
    flattener = Flattener()
    for token in tokens:
        pair = flattener.feed(token)
        if pair is not None:
            yield pair
    flattener.close()


def flatten(tokens: Iterable[Token]) -> list[Pair]:
    """
    Flatten a complete token stream into an ordered list of pairs.

    Nothing is returned unless the whole stream is consumed without error.
    """
    return list(iter_pairs(tokens))


def parse(source: Source, *, use_float: bool = True) -> list[Pair]:
    """Tokenize a JSON document and flatten it."""
    return flatten(tokenize(source, use_float=use_float))
