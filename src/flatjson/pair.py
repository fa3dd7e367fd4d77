import dataclasses
import typing


@dataclasses.dataclass(frozen=True)
class Pair:
    key: str
    value: typing.Any | None

    def __iter__(self) -> typing.Iterator[typing.Any]:
        yield self.key
        yield self.value

    def __repr__(self):
        return f"Pair(key='{self.key}', value={self.value!r})"
