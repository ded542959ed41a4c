"""iriref.buffer
Owned, editable references. Every edit splices new text into place and
re-checks the whole reference before anything is committed, so a buffer is
never observably invalid.
"""

from typing import Self

from iriref import grammar
from iriref import path as _path
from iriref import exceptions as exc
from iriref.components import Authority, Component, Fragment, Host, Path, Port, Query, Scheme, Segment, UserInfo
from iriref.reference import ComponentAccessor, Identifier, Reference
from iriref.utils import log


def _fit_path(path: str, *, scheme: bool, authority: bool) -> str:
    """Returns path adjusted so that it reads back as a path in its new surroundings.
    The adjustments only add dot-segments, so the path keeps its meaning.
    """
    if authority:
        # path-abempty
        if path and not path.startswith("/"):
            return "/" + path
        return path
    if path.startswith("//"):
        # would read as an authority
        return "/." + path
    if not scheme and ":" in path.partition("/")[0]:
        # would read as a scheme
        return "./" + path
    return path


class ReferenceBuffer(ComponentAccessor):
    """An editable URI-reference or IRI-reference."""

    _form: grammar.Form = grammar.Form.REFERENCE
    _view_class: type[Reference] = Reference

    __hash__ = None

    def __init__(self: Self, data: "str | bytes | ComponentAccessor", *, iri: bool = True) -> None:
        if isinstance(data, ComponentAccessor):
            data = str(data)
        self._text, self._offsets = grammar.parse(data, iri=iri, form=self._form)
        self._iri = iri

    @classmethod
    def parse(cls: type[Self], data: str | bytes, *, iri: bool = True) -> Self:
        return cls(data, iri=iri)

    @classmethod
    def _checked(cls: type[Self], text: str, offsets: grammar.Offsets, iri: bool) -> Self:
        buf: Self = cls.__new__(cls)
        buf._text = text
        buf._offsets = offsets
        buf._iri = iri
        return buf

    @classmethod
    def from_parts(
        cls: type[Self],
        *,
        scheme: str | bytes | None = None,
        authority: str | bytes | None = None,
        path: str | bytes = "",
        query: str | bytes | None = None,
        fragment: str | bytes | None = None,
        iri: bool = True,
    ) -> Self:
        """Builds a reference out of its components. The path is fitted to its surroundings."""
        text: str = ""
        if scheme is not None:
            text += f"{Scheme(scheme, iri=iri)}:"
        if authority is not None:
            text += f"//{Authority(authority, iri=iri)}"
        text += _fit_path(Path(path, iri=iri), scheme=scheme is not None, authority=authority is not None)
        if query is not None:
            text += f"?{Query(query, iri=iri)}"
        if fragment is not None:
            text += f"#{Fragment(fragment, iri=iri)}"
        return cls(text, iri=iri)

    def view(self: Self) -> Reference:
        """An immutable snapshot of the current text."""
        return self._view_class._checked(self._text, self._offsets, self._iri)

    def copy(self: Self) -> Self:
        return self._checked(self._text, self._offsets, self._iri)

    def _coerce(self: Self, cls: type[Component], value: str | bytes | int) -> Component:
        if isinstance(value, cls) and (self._iri or value.isascii()):
            return value
        return cls(value, iri=self._iri)

    def _splice(self: Self, start: int, end: int, replacement: str) -> None:
        text: str = self._text[:start] + replacement + self._text[end:]
        offsets: grammar.Offsets = grammar.parse(text, iri=self._iri, form=self._form)[1]
        log.debug(f"splice {self._text!r}[{start}:{end}] = {replacement!r} -> {text!r}")
        self._text, self._offsets = text, offsets

    def _fitted(self: Self, path: str, *, authority: bool | None = None) -> str:
        if authority is None:
            authority = self._offsets.authority is not None
        return _fit_path(path, scheme=self._offsets.scheme is not None, authority=authority)

    def _replace_path(self: Self, path: str) -> None:
        start, end = self._offsets.path
        self._splice(start, end, self._fitted(path))

    def set_scheme(self: Self, scheme: str | bytes | None) -> None:
        span: grammar.Span | None = self._offsets.scheme
        if scheme is None:
            if span is None:
                return
            if self._offsets.authority is not None:
                self._splice(0, span[1] + 1, "")
            else:
                path_start, path_end = self._offsets.path
                path: str = self._text[path_start:path_end]
                self._splice(0, path_end, _fit_path(path, scheme=False, authority=False))
            return
        scheme = self._coerce(Scheme, scheme)
        if span is None:
            self._splice(0, 0, f"{scheme}:")
        else:
            self._splice(span[0], span[1], scheme)

    def set_authority(self: Self, authority: str | bytes | None) -> None:
        span: grammar.Span | None = self._offsets.authority
        path_start, path_end = self._offsets.path
        path: str = self._text[path_start:path_end]
        if authority is None:
            if span is None:
                return
            # "//" authority path-abempty becomes a path that can't be read as an authority
            self._splice(span[0] - 2, path_end, self._fitted(path, authority=False))
            return
        authority = self._coerce(Authority, authority)
        if span is None:
            self._splice(path_start, path_end, f"//{authority}{self._fitted(path, authority=True)}")
        else:
            self._splice(span[0], span[1], authority)

    def set_userinfo(self: Self, userinfo: str | bytes | None) -> None:
        span: grammar.Span | None = self._offsets.userinfo
        if self._offsets.authority is None:
            if userinfo is not None:
                self.set_authority(f"{self._coerce(UserInfo, userinfo)}@")
            return
        if userinfo is None:
            if span is not None:
                self._splice(span[0], span[1] + 1, "")
            return
        userinfo = self._coerce(UserInfo, userinfo)
        if span is None:
            host_start: int = self._offsets.host[0]
            self._splice(host_start, host_start, f"{userinfo}@")
        else:
            self._splice(span[0], span[1], userinfo)

    def set_host(self: Self, host: str | bytes) -> None:
        host = self._coerce(Host, host)
        if self._offsets.authority is None:
            self.set_authority(host)
            return
        start, end = self._offsets.host
        self._splice(start, end, host)

    def set_port(self: Self, port: str | bytes | int | None) -> None:
        span: grammar.Span | None = self._offsets.port
        if self._offsets.authority is None:
            if port is not None:
                self.set_authority(f":{self._coerce(Port, port)}")
            return
        if port is None:
            if span is not None:
                self._splice(span[0] - 1, span[1], "")
            return
        port = self._coerce(Port, port)
        if span is None:
            host_end: int = self._offsets.host[1]
            self._splice(host_end, host_end, f":{port}")
        else:
            self._splice(span[0], span[1], port)

    def set_path(self: Self, path: str | bytes) -> None:
        self._replace_path(self._coerce(Path, path))

    def set_query(self: Self, query: str | bytes | None) -> None:
        span: grammar.Span | None = self._offsets.query
        if query is None:
            if span is not None:
                self._splice(span[0] - 1, span[1], "")
            return
        query = self._coerce(Query, query)
        if span is None:
            path_end: int = self._offsets.path[1]
            self._splice(path_end, path_end, f"?{query}")
        else:
            self._splice(span[0], span[1], query)

    def set_fragment(self: Self, fragment: str | bytes | None) -> None:
        span: grammar.Span | None = self._offsets.fragment
        if fragment is None:
            if span is not None:
                self._splice(span[0] - 1, span[1], "")
            return
        fragment = self._coerce(Fragment, fragment)
        if span is None:
            end: int = len(self._text)
            self._splice(end, end, f"#{fragment}")
        else:
            self._splice(span[0], span[1], fragment)

    def _rooted_path(self: Self) -> str:
        path: str = self.path
        if not path and self._offsets.authority is not None:
            # under an authority the empty path is already rooted
            return "/"
        return path

    def push_segment(self: Self, segment: str | bytes) -> None:
        """Appends a segment to the path. A trailing empty segment is consumed."""
        segment = self._coerce(Segment, segment)
        self._replace_path(_path.push(self._rooted_path(), segment))

    def symbolic_push(self: Self, segment: str | bytes) -> None:
        """Like push_segment, except that "." is ignored and ".." pops the last segment."""
        segment = self._coerce(Segment, segment)
        self._replace_path(_path.symbolic_push(self._rooted_path(), segment))

    def symbolic_append(self: Self, path: str | bytes) -> None:
        """Symbolically pushes every segment of path, as one edit."""
        path = self._coerce(Path, path)
        self._replace_path(_path.symbolic_append(self._rooted_path(), path))

    def pop_segment(self: Self) -> None:
        self._replace_path(_path.pop(self.path))

    def normalize_path(self: Self) -> None:
        self._replace_path(_path.normalize(self.path))

    def resolve(self: Self, base: "ComponentAccessor | str | bytes", strict: bool = True) -> None:
        """Resolves this reference against base, in place."""
        from iriref.resolve import resolve

        result: Identifier = resolve(base, self, strict=strict)
        self._text, self._offsets, self._iri = result._text, result._offsets, result._iri


class IdentifierBuffer(ReferenceBuffer):
    """An editable URI or IRI. The scheme can be replaced but not removed."""

    _form = grammar.Form.ABSOLUTE
    _view_class = Identifier

    @property
    def scheme(self: Self) -> Scheme:
        start, end = self._offsets.scheme
        return Scheme._trusted(self._text[start:end])

    def set_scheme(self: Self, scheme: str | bytes | None) -> None:
        if scheme is None:
            raise exc.NotAnIdentifierError(self._text, 0, "scheme")
        super().set_scheme(scheme)
