"""iriref.compare
Equivalence of references up to dot-segments, percent-encoding and scheme case.

Comparison is on decoded octets. No protocol knowledge is applied: default
ports are not elided and hosts are not case folded.
"""

from urllib.parse import unquote_to_bytes

from iriref import path as _path
from iriref.components import Authority, Host
from iriref.grammar import HostKind
from iriref.reference import ComponentAccessor, as_reference

# TODO fold reg-name hosts to lowercase (RFC 3986 section 6.2.2.1) once it
# can be done without treating IDNs differently from ASCII names


def _decoded(component: str | None) -> bytes | None:
    return None if component is None else unquote_to_bytes(component)


def _host_key(host: Host) -> tuple[str, bytes]:
    kind: HostKind = host.kind
    if kind is HostKind.REG_NAME or kind is HostKind.IPV4:
        # "%31.2.3.4" is a reg-name that names the same octets as 1.2.3.4
        return ("name", unquote_to_bytes(host))
    elif kind is HostKind.IPV6 or kind is HostKind.IPV_FUTURE:
        # only a zone identifier can hold percent-encodings
        return ("literal", unquote_to_bytes(host))
    raise ValueError(f"unknown host kind {kind!r}")


def scheme_key(scheme: str | None) -> str | None:
    return None if scheme is None else scheme.lower()


def authority_key(authority: Authority | None) -> tuple | None:
    if authority is None:
        return None
    port = authority.port
    return (
        _decoded(authority.userinfo),
        _host_key(authority.host),
        None if port is None else str(port),
    )


def _path_key(path: str) -> tuple[bool, tuple[bytes, ...]]:
    normalized: str = _path.normalize(path)
    return (
        _path.is_absolute(normalized),
        tuple(unquote_to_bytes(segment) for segment in _path.Segments(normalized)),
    )


def equivalence_key(value: ComponentAccessor | str | bytes) -> tuple:
    """The tuple that equivalent() compares. Usable as a dict key."""
    ref = as_reference(value)
    return (
        scheme_key(ref.scheme),
        authority_key(ref.authority),
        _path_key(ref.path),
        _decoded(ref.query),
        _decoded(ref.fragment),
    )


def equivalent(a: ComponentAccessor | str | bytes, b: ComponentAccessor | str | bytes) -> bool:
    return equivalence_key(a) == equivalence_key(b)
