"""iriref.components
Validated component values. Each is a str, so it can go anywhere text can.
"""

from typing import Self
from urllib.parse import unquote_to_bytes

from iriref import grammar
from iriref import path as _path


class Component(str):
    """A piece of a reference that has been checked against its production."""

    production: str = ""

    def __new__(cls: type[Self], value: str | bytes, *, iri: bool = True) -> Self:
        return super().__new__(cls, grammar.check(cls.production, value, iri=iri))

    @classmethod
    def _trusted(cls: type[Self], text: str) -> Self:
        """For text sliced out of something that was already checked."""
        return str.__new__(cls, text)

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}({str(self)!r})"

    def decoded(self: Self) -> bytes:
        """The octets this component stands for, with pct-encoded triples decoded."""
        return unquote_to_bytes(str(self))


class Scheme(Component):
    production = "scheme"


class UserInfo(Component):
    production = "userinfo"

    @property
    def username(self: Self) -> str:
        return self.partition(":")[0]

    @property
    def password(self: Self) -> str | None:
        username, colon, password = self.partition(":")
        return password if colon else None


class Host(Component):
    production = "host"

    @property
    def kind(self: Self) -> grammar.HostKind:
        return grammar.classify_host(self)


class Port(Component):
    production = "port"

    def __new__(cls: type[Self], value: str | bytes | int, *, iri: bool = True) -> Self:
        if isinstance(value, int):
            value = str(value)
        return super().__new__(cls, value, iri=iri)

    @property
    def number(self: Self) -> int | None:
        """The port as an int; None for the empty port that "host:" spells."""
        if len(self) > 0:
            return int(self, base=10)
        return None


class Authority(Component):
    """userinfo@host:port"""

    production = "authority"

    def _split(self: Self) -> tuple[grammar.Span | None, grammar.Span, grammar.HostKind, grammar.Span | None]:
        return grammar.split_authority(self)

    @property
    def userinfo(self: Self) -> UserInfo | None:
        span: grammar.Span | None = self._split()[0]
        return None if span is None else UserInfo._trusted(self[span[0] : span[1]])

    @property
    def host(self: Self) -> Host:
        start, end = self._split()[1]
        return Host._trusted(self[start:end])

    @property
    def port(self: Self) -> Port | None:
        span: grammar.Span | None = self._split()[3]
        return None if span is None else Port._trusted(self[span[0] : span[1]])


class Segment(Component):
    production = "segment"

    @property
    def is_dot(self: Self) -> bool:
        return self in (_path.CURRENT_SEGMENT, _path.PARENT_SEGMENT)


class Path(Component):
    production = "path"

    @property
    def is_absolute(self: Self) -> bool:
        return _path.is_absolute(self)

    @property
    def is_empty(self: Self) -> bool:
        return _path.is_empty(self)

    def segments(self: Self) -> _path.Segments:
        return _path.Segments(self, wrap=Segment._trusted)

    def normalized(self: Self) -> "Path":
        return Path._trusted(_path.normalize(self))

    def directory(self: Self) -> "Path":
        return Path._trusted(_path.directory(self))

    def parent(self: Self) -> "Path | None":
        parent: str | None = _path.parent(self)
        return None if parent is None else Path._trusted(parent)

    def file_name(self: Self) -> Segment | None:
        name: str | None = _path.file_name(self)
        return None if name is None else Segment._trusted(name)

    def suffix(self: Self, prefix: str) -> "Path | None":
        rest: str | None = _path.suffix(self, prefix)
        return None if rest is None else Path._trusted(rest)


class Query(Component):
    production = "query"


class Fragment(Component):
    production = "fragment"
