"""iriref.resolve
Reference resolution, RFC 3986 section 5.2
"""

from urllib.parse import unquote_to_bytes

from iriref import path as _path
from iriref import exceptions as exc
from iriref.buffer import IdentifierBuffer, ReferenceBuffer
from iriref.compare import authority_key, scheme_key
from iriref.reference import ComponentAccessor, Identifier, Reference, as_reference
from iriref.utils import log


def _merge_paths(base: Reference, r: Reference) -> str:
    """Implementation of the "merge" routine defined in RFC 3986 section 5.2.3"""
    if base.authority is not None and len(base.path) == 0:
        return f"/{r.path}"
    if base.authority is None and not base.path.is_absolute:
        # nothing in a rootless base path can serve as a directory
        return r.path
    dirname, slash, _ = base.path.rpartition("/")
    return dirname + slash + r.path


def resolve(
    base: ComponentAccessor | str | bytes,
    reference: ComponentAccessor | str | bytes,
    strict: bool = True,
) -> Identifier:
    """Implementation of the "Transform References" algorithm from RFC 3986 section 5.2.2
    Dot-segments are removed with the Errata 4547 reading. With strict=False a
    reference whose scheme matches the base's is treated as if it had none.
    Raises a PreconditionError if base has no scheme.
    """
    base = as_reference(base)
    r: Reference = as_reference(reference)
    if base.scheme is None:
        raise exc.PreconditionError(f"cannot resolve against {str(base)!r}, it has no scheme")
    # URI text is always ASCII. A URI-only construct such as a zone
    # identifier must not be re-checked against the IRI grammar.
    iri: bool = (base.iri and r.iri) or not (str(base).isascii() and str(r).isascii())

    if len(r) == 0:
        # same-document reference
        log.debug(f"resolve {str(base)!r} + '' -> base")
        return base.to_identifier()

    scheme: str | None
    authority: str | None
    path: str
    query: str | None
    fragment: str | None

    # This follows the pseudocode in the RFC step by step so that the two
    # can be checked against each other.
    r_scheme: str | None = r.scheme
    if not strict and r_scheme is not None and r_scheme.lower() == base.scheme.lower():
        r_scheme = None
    if r_scheme is not None:
        case: str = "scheme"
        scheme = r_scheme
        authority = r.authority
        path = _path.normalize(r.path)
        query = r.query
    else:
        if r.authority is not None:
            case = "authority"
            authority = r.authority
            path = _path.normalize(r.path)
            query = r.query
        else:
            if len(r.path) == 0:
                case = "empty path"
                path = base.path
                if r.query is not None:
                    query = r.query
                else:
                    query = base.query
            else:
                if r.path.startswith("/"):
                    case = "absolute path"
                    path = _path.normalize(r.path)
                else:
                    case = "merged path"
                    path = _merge_paths(base, r)
                    path = _path.normalize(path)
                query = r.query
            authority = base.authority
        scheme = base.scheme
    fragment = r.fragment

    result: Identifier = IdentifierBuffer.from_parts(
        scheme=scheme,
        authority=authority,
        path=path,
        query=query,
        fragment=fragment,
        iri=iri,
    ).view()
    log.debug(f"resolve {str(base)!r} + {str(r)!r} ({case}) -> {str(result)!r}")
    return result


def _dir_segments(path: str) -> list[tuple[str, bool]]:
    """The normalized segments of path, each paired with whether a "/" follows it."""
    segments: list[str] = _path.normalized_segments(path)
    if segments and segments[-1] == "":
        # "a/" is the directory "a", not "a" followed by an empty name
        segments.pop()
        return [(segment, True) for segment in segments]
    return [(segment, i < len(segments) - 1) for i, segment in enumerate(segments)]


def _comparable(r: Reference, base: Reference) -> bool:
    """Whether a path relative to base can stand for r at all."""
    if r.scheme is not None and scheme_key(r.scheme) != scheme_key(base.scheme):
        return False
    if r.authority is not None and authority_key(r.authority) != authority_key(base.authority):
        return False
    if r.path.is_absolute != base.path.is_absolute:
        return False
    # a rootless base path has no directory to resolve against
    return base.scheme is None or base.authority is not None or base.path.is_absolute


def relative_to(reference: ComponentAccessor | str | bytes, base: ComponentAccessor | str | bytes) -> Reference:
    """The inverse of resolve: a reference that, resolved against base, gives back
    reference. When there is none, reference is returned as it is.
    e.g. relative_to("http://a/b/c/d", "http://a/b/e") -> "c/d"
    """
    r: Reference = as_reference(reference)
    base = as_reference(base)
    if not _comparable(r, base):
        return r

    ours: list[tuple[str, bool]] = _dir_segments(r.path)
    theirs: list[tuple[str, bool]] = _dir_segments(base.path)
    # the base's file name can only be matched when a query or fragment follows
    keep_name: bool = r.query is not None or r.fragment is not None
    common: int = 0
    for (name, is_dir), (other, other_is_dir) in zip(theirs, ours):
        if is_dir != other_is_dir or not (is_dir or keep_name):
            break
        if unquote_to_bytes(name) != unquote_to_bytes(other):
            break
        common += 1
    if any(name == _path.PARENT_SEGMENT for name, _ in theirs[common:]):
        # no segment undoes a ".." left in a relative base
        return r

    pieces: list[tuple[str, bool]] = [(_path.PARENT_SEGMENT, True) for _, is_dir in theirs[common:] if is_dir]
    pieces += ours[common:]
    path: str = "".join(name + "/" if is_dir else name for name, is_dir in pieces)
    if path.startswith("/"):
        # an empty first segment
        path = "./" + path
    elif not path:
        # an empty path stands for the base's whole path and, without a query, its query too
        leftover_name: bool = any(not is_dir for _, is_dir in theirs[common:])
        if leftover_name or (r.query is None and base.query is not None):
            path = ours[-1][0] if ours and not ours[-1][1] else _path.CURRENT_SEGMENT + "/"
    result: Reference = ReferenceBuffer.from_parts(path=path, query=r.query, fragment=r.fragment, iri=r.iri).view()
    log.debug(f"relative {str(r)!r} to {str(base)!r} -> {str(result)!r}")
    return result
