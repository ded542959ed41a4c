"""iriref.reference
Read-only views over checked URI and IRI references.
Shooting for compatibility with RFCs 3986 and 3987
"""

from typing import NamedTuple, Self

from iriref import grammar
from iriref import path as _path
from iriref import exceptions as exc
from iriref.components import Authority, Fragment, Host, Path, Port, Query, Scheme, UserInfo


class Parts(NamedTuple):
    scheme: Scheme | None
    authority: Authority | None
    path: Path
    query: Query | None
    fragment: Fragment | None


class ComponentAccessor:
    """Component lookup shared by views and buffers.
    Implementors keep the text they were checked against in _text, its
    offsets in _offsets and the grammar in _iri, and always replace the
    three together.
    """

    __slots__ = ()

    _text: str
    _offsets: grammar.Offsets
    _iri: bool

    def _slice(self: Self, span: grammar.Span | None) -> str | None:
        if span is None:
            return None
        return self._text[span[0] : span[1]]

    @property
    def iri(self: Self) -> bool:
        """Whether this was checked against the IRI grammar rather than the URI one."""
        return self._iri

    @property
    def scheme(self: Self) -> Scheme | None:
        text: str | None = self._slice(self._offsets.scheme)
        return None if text is None else Scheme._trusted(text)

    @property
    def authority(self: Self) -> Authority | None:
        text: str | None = self._slice(self._offsets.authority)
        return None if text is None else Authority._trusted(text)

    @property
    def userinfo(self: Self) -> UserInfo | None:
        text: str | None = self._slice(self._offsets.userinfo)
        return None if text is None else UserInfo._trusted(text)

    @property
    def host(self: Self) -> Host | None:
        text: str | None = self._slice(self._offsets.host)
        return None if text is None else Host._trusted(text)

    @property
    def host_kind(self: Self) -> grammar.HostKind | None:
        return self._offsets.host_kind

    @property
    def port(self: Self) -> Port | None:
        text: str | None = self._slice(self._offsets.port)
        return None if text is None else Port._trusted(text)

    @property
    def path(self: Self) -> Path:
        start, end = self._offsets.path
        return Path._trusted(self._text[start:end])

    @property
    def query(self: Self) -> Query | None:
        text: str | None = self._slice(self._offsets.query)
        return None if text is None else Query._trusted(text)

    @property
    def fragment(self: Self) -> Fragment | None:
        text: str | None = self._slice(self._offsets.fragment)
        return None if text is None else Fragment._trusted(text)

    def parts(self: Self) -> Parts:
        return Parts(self.scheme, self.authority, self.path, self.query, self.fragment)

    def render(self: Self) -> bytes:
        return self._text.encode(grammar.DEFAULT_ENCODING)

    def __str__(self: Self) -> str:
        return self._text

    def __bytes__(self: Self) -> bytes:
        return self.render()

    def __len__(self: Self) -> int:
        return len(self._text)

    def __eq__(self: Self, other: object) -> bool:
        if isinstance(other, ComponentAccessor):
            return self._text == other._text
        if isinstance(other, str):
            return self._text == other
        return NotImplemented

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}({self._text!r})"

    def equivalent(self: Self, other: "ComponentAccessor | str | bytes") -> bool:
        """Equality after normalization and percent-decoding."""
        from iriref.compare import equivalent

        return equivalent(self, other)

    def resolved(self: Self, base: "ComponentAccessor | str | bytes", strict: bool = True) -> "Identifier":
        """This reference resolved against base."""
        from iriref.resolve import resolve

        return resolve(base, self, strict=strict)

    def relative_to(self: Self, base: "ComponentAccessor | str | bytes") -> "Reference":
        """The reference that resolves against base back to this one."""
        from iriref.resolve import relative_to

        return relative_to(self, base)

    def base(self: Self) -> "Reference":
        """This reference cut back to the directory of its path, without query or fragment.
        e.g. https://example.org/a/b?q#f -> https://example.org/a/
        """
        start, end = self._offsets.path
        text: str = self._text[:start] + _path.directory(self._text[start:end])
        cls: type[Reference] = Reference if self._offsets.scheme is None else Identifier
        return cls(text, iri=self._iri)

    def suffix(
        self: Self, prefix: "ComponentAccessor | str | bytes"
    ) -> tuple[Path, Query | None, Fragment | None] | None:
        """The path leading from prefix to this reference, with this reference's query and fragment.
        None unless both have the same scheme and authority and prefix's path is a prefix of this path.
        """
        from iriref.compare import scheme_key, authority_key

        prefix = as_reference(prefix)
        if scheme_key(self.scheme) != scheme_key(prefix.scheme):
            return None
        if authority_key(self.authority) != authority_key(prefix.authority):
            return None
        rest: str | None = _path.suffix(self.path, prefix.path)
        if rest is None:
            return None
        return Path._trusted(rest), self.query, self.fragment


class Reference(ComponentAccessor):
    """A URI-reference or IRI-reference. Immutable; use a ReferenceBuffer to edit one."""

    __slots__ = ("_text", "_offsets", "_iri")

    _form: grammar.Form = grammar.Form.REFERENCE

    def __init__(self: Self, data: "str | bytes | ComponentAccessor", *, iri: bool = True) -> None:
        if isinstance(data, ComponentAccessor):
            data = str(data)
        self._text, self._offsets = grammar.parse(data, iri=iri, form=self._form)
        self._iri = iri

    @classmethod
    def _checked(cls: type[Self], text: str, offsets: grammar.Offsets, iri: bool) -> Self:
        """Wraps text whose offsets are already known to be right."""
        ref: Self = cls.__new__(cls)
        ref._text = text
        ref._offsets = offsets
        ref._iri = iri
        return ref

    def __hash__(self: Self) -> int:
        return hash(self._text)

    def to_identifier(self: Self) -> "Identifier":
        if self._offsets.scheme is None:
            raise exc.NotAnIdentifierError(self._text, 0, "scheme")
        return Identifier._checked(self._text, self._offsets, self._iri)

    def to_buffer(self: Self):
        from iriref.buffer import ReferenceBuffer

        return ReferenceBuffer._checked(self._text, self._offsets, self._iri)


class Identifier(Reference):
    """A URI or IRI: a reference with a scheme."""

    __slots__ = ()

    _form = grammar.Form.ABSOLUTE

    @property
    def scheme(self: Self) -> Scheme:
        start, end = self._offsets.scheme
        return Scheme._trusted(self._text[start:end])

    def to_identifier(self: Self) -> Self:
        return self

    def to_buffer(self: Self):
        from iriref.buffer import IdentifierBuffer

        return IdentifierBuffer._checked(self._text, self._offsets, self._iri)


def as_reference(value: "ComponentAccessor | str | bytes", *, iri: bool = True) -> Reference:
    """value as a Reference. Text is parsed as a reference; views pass through."""
    if isinstance(value, Reference):
        return value
    if isinstance(value, ComponentAccessor):
        return Reference._checked(value._text, value._offsets, value._iri)
    return Reference(value, iri=iri)


def parse_uri(data: str | bytes) -> Identifier:
    """Parses a URI.
    Raises a GrammarError on invalid input.
    """
    return Identifier(data, iri=False)


def parse_iri(data: str | bytes) -> Identifier:
    """Parses an IRI.
    Raises a GrammarError on invalid input.
    """
    return Identifier(data)


def parse_relative_ref(data: str | bytes) -> Reference:
    """Parses a relative-ref. The result never has a scheme."""
    text, offsets = grammar.parse(data, iri=False, form=grammar.Form.RELATIVE)
    return Reference._checked(text, offsets, False)


def parse_irelative_ref(data: str | bytes) -> Reference:
    """Parses an irelative-ref. The result never has a scheme."""
    text, offsets = grammar.parse(data, iri=True, form=grammar.Form.RELATIVE)
    return Reference._checked(text, offsets, True)


def parse_uri_reference(data: str | bytes) -> Reference:
    """Parses a URI-reference.
    Note that this is not the same as parsing a URI or a relative-ref; a
    URI-reference is whichever of the two the input turns out to be.
    """
    return Reference(data, iri=False)


def parse_iri_reference(data: str | bytes) -> Reference:
    """Parses an IRI-reference.
    Note that this is not the same as parsing an IRI or an irelative-ref; an
    IRI-reference is whichever of the two the input turns out to be.
    """
    return Reference(data)


def render(ref: ComponentAccessor) -> bytes:
    """The inverse of the parse functions: render(parse_iri_reference(b)) == b."""
    return ref.render()
