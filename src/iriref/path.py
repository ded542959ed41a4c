"""iriref.path
Segment-level algorithms over already checked path text.

Every function here takes and returns plain text and never fails on a
checked path. A path that begins with "/" is absolute; a trailing "/" is a
trailing empty segment and is significant.
"""

from collections.abc import Callable, Iterator
from urllib.parse import unquote_to_bytes

CURRENT_SEGMENT: str = "."
PARENT_SEGMENT: str = ".."


def is_absolute(path: str) -> bool:
    return path.startswith("/")


def is_empty(path: str) -> bool:
    """True for the paths with no segments at all, "" and "/"."""
    return path in ("", "/")


class Segments:
    """The segments of a path, left to right, empty ones included.
    Can be iterated any number of times, in either direction.
    """

    __slots__ = ("_path", "_wrap")

    def __init__(self, path: str, wrap: Callable[[str], str] = str) -> None:
        self._path = path
        self._wrap = wrap

    def _first(self) -> int:
        return 1 if is_absolute(self._path) else 0

    def __iter__(self) -> Iterator[str]:
        if is_empty(self._path):
            return
        start: int = self._first()
        while (stop := self._path.find("/", start)) != -1:
            yield self._wrap(self._path[start:stop])
            start = stop + 1
        yield self._wrap(self._path[start:])

    def __reversed__(self) -> Iterator[str]:
        if is_empty(self._path):
            return
        first: int = self._first()
        end: int = len(self._path)
        while (slash := self._path.rfind("/", first, end)) != -1:
            yield self._wrap(self._path[slash + 1 : end])
            end = slash
        yield self._wrap(self._path[first:end])

    def __len__(self) -> int:
        if is_empty(self._path):
            return 0
        return self._path.count("/", self._first()) + 1

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._path!r})"


def segments(path: str) -> Segments:
    return Segments(path)


def _join(output: list[str], absolute: bool) -> str:
    # A leading empty segment would turn a relative path absolute. In an
    # absolute path it is kept as is; fitting the path to its reference is
    # the buffer's job.
    if not absolute and len(output) > 1 and output[0] == "":
        output = [CURRENT_SEGMENT, *output]
    text: str = "/".join(output)
    return "/" + text if absolute else text


def normalized_segments(path: str) -> list[str]:
    """Implementation of the "remove_dot_segments" routine from RFC 3986 section 5.2.4,
    amended by Errata 4547: an unresolvable ".." survives in a relative path.
    """
    absolute: bool = is_absolute(path)
    raw: list[str] = list(Segments(path))
    output: list[str] = []
    for i, segment in enumerate(raw):
        if segment == CURRENT_SEGMENT:
            pass
        elif segment == PARENT_SEGMENT:
            if output and output[-1] != PARENT_SEGMENT:
                output.pop()
            elif not absolute:
                output.append(PARENT_SEGMENT)
        else:
            output.append(segment)
            continue
        # a dot-segment in last position still names a directory
        if i == len(raw) - 1:
            output.append("")
    return output


def normalize(path: str) -> str:
    """Removes dot-segments. Idempotent: normalize(normalize(p)) == normalize(p)."""
    return _join(normalized_segments(path), is_absolute(path))


def push(path: str, segment: str) -> str:
    """Appends segment, consuming a trailing empty segment if there is one."""
    if path == "":
        return segment if segment else CURRENT_SEGMENT + "/"
    if path.endswith("/"):
        return path + segment
    return f"{path}/{segment}"


def pop(path: str) -> str:
    """Drops the last segment. The paths without segments are returned as they are."""
    if is_empty(path):
        return path
    slash: int = path.rfind("/")
    if is_absolute(path):
        return path[: max(slash, 1)]
    return path[: max(slash, 0)]


def symbolic_push(path: str, segment: str) -> str:
    """Pushes segment, reading "." as staying put and ".." as popping.
    A ".." with nothing to pop is kept in a relative path and dropped in an
    absolute one. The segments already in path are not normalized.
    """
    if segment == CURRENT_SEGMENT:
        return path
    if segment != PARENT_SEGMENT:
        return push(path, segment)
    last: str | None = next(reversed(Segments(path)), None)
    if last is None or last == PARENT_SEGMENT:
        return path if is_absolute(path) else push(path, PARENT_SEGMENT)
    return pop(path)


def symbolic_append(path: str, other: str) -> str:
    for segment in Segments(other):
        path = symbolic_push(path, segment)
    return path


def directory(path: str) -> str:
    """The path up to and including its last "/"."""
    return path[: path.rfind("/") + 1]


def parent(path: str) -> str | None:
    if is_empty(path):
        return None
    slash: int = path.rfind("/")
    if slash == -1:
        return None
    if slash == 0:
        return "/"
    if slash == 1 and path.startswith("//"):
        return "/./"
    return path[:slash]


def file_name(path: str) -> str | None:
    """The last segment, unless it is empty."""
    last: str | None = next(reversed(Segments(path)), None)
    return last or None


def suffix(path: str, prefix: str) -> str | None:
    """Returns the relative path that leads from prefix to path, if path starts with prefix.
    Both sides are normalized first and their segments compared percent-decoded.
    """
    if is_absolute(path) != is_absolute(prefix):
        return None
    rest: list[str] = normalized_segments(path)
    expected_segments: list[str] = normalized_segments(prefix)
    # "/foo/" is the directory "/foo", not a path that ends in an empty name
    if expected_segments and expected_segments[-1] == "":
        expected_segments.pop()
    for expected in expected_segments:
        if not rest or unquote_to_bytes(rest[0]) != unquote_to_bytes(expected):
            return None
        rest.pop(0)
    return _join(rest, absolute=False)
