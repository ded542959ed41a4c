"""iriref.grammar
The ABNF productions of RFCs 3986 and 3987, and the cursor that checks them.
Checking a reference yields the offsets of its components; nothing is decoded or rewritten.
"""

import dataclasses
import enum
import re

from typing import Self

from iriref import exceptions as exc

DEFAULT_ENCODING: str = "utf-8"

# Each of these ABNF rules is from RFC 3986, 3987, 6874, or 5234.

# ALPHA = %x41-5A / %x61-7A
_ALPHA: str = r"[A-Za-z]"

# DIGIT = %x30-39
_DIGIT: str = r"[0-9]"

# HEXDIG = DIGIT / "A" / "B" / "C" / "D" / "E" / "F"
_HEXDIG: str = rf"(?:{_DIGIT}|[A-Fa-f])"

# ucschar = %xA0-D7FF / %xF900-FDCF / %xFDF0-FFEF
#         / %x10000-1FFFD / %x20000-2FFFD / %x30000-3FFFD
#         / %x40000-4FFFD / %x50000-5FFFD / %x60000-6FFFD
#         / %x70000-7FFFD / %x80000-8FFFD / %x90000-9FFFD
#         / %xA0000-AFFFD / %xB0000-BFFFD / %xC0000-CFFFD
#         / %xD0000-DFFFD / %xE1000-EFFFD
_UCSCHAR: str = "[\xa0-\ud7ff\uf900-\ufdcf\ufdf0-\uffef\U00010000-\U0001FFFD\U00020000-\U0002FFFD\U00030000-\U0003FFFD\U00040000-\U0004FFFD\U00050000-\U0005FFFD\U00060000-\U0006FFFD\U00070000-\U0007FFFD\U00080000-\U0008FFFD\U00090000-\U0009FFFD\U000A0000-\U000AFFFD\U000B0000-\U000BFFFD\U000C0000-\U000CFFFD\U000D0000-\U000DFFFD\U000E0000-\U000EFFFD]"

# iprivate = %xE000-F8FF / %xF0000-FFFFD / %x100000-10FFFD
_IPRIVATE: str = "[\ue000-\uf8ff\U000F0000-\U000FFFFD\U00100000-\U0010FFFD]"

# unreserved = ALPHA / DIGIT / "-" / "." / "_" / "~"
_UNRESERVED: str = rf"(?:{_ALPHA}|{_DIGIT}|[-._~])"

# iunreserved = ALPHA / DIGIT / "-" / "." / "_" / "~" / ucschar
_IUNRESERVED: str = rf"(?:{_ALPHA}|{_DIGIT}|[-._~]|{_UCSCHAR})"

# pct-encoded = "%" HEXDIG HEXDIG
_PCT_ENCODED: str = rf"%{_HEXDIG}{_HEXDIG}"

# sub-delims = "!" / "$" / "&" / "'" / "(" / ")" / "*" / "+" / "," / ";" / "="
_SUB_DELIMS: str = r"[!$&'()*+,;=]"

# pchar = unreserved / pct-encoded / sub-delims / ":" / "@"
_PCHAR: str = rf"(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS}|[:@])"

# ipchar = iunreserved / pct-encoded / sub-delims / ":" / "@"
_IPCHAR: str = rf"(?:{_IUNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS}|[:@])"

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME: str = rf"{_ALPHA}(?:{_ALPHA}|{_DIGIT}|[+\-.])*"

# dec-octet = DIGIT / %x31-39 DIGIT / "1" 2DIGIT / "2" %x30-34 DIGIT / "25" %x30-35
_DEC_OCTET: str = rf"(?:25[0-5]|2[0-4]{_DIGIT}|1{_DIGIT}{{2}}|[1-9]{_DIGIT}|{_DIGIT})"

# IPv4address = dec-octet "." dec-octet "." dec-octet "." dec-octet
_IPV4ADDRESS: str = rf"{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}"

# h16 = 1*4HEXDIG
_H16: str = rf"(?:{_HEXDIG}{{1,4}})"

# ls32 = ( h16 ":" h16 ) / IPv4address
_LS32: str = rf"(?:{_H16}:{_H16}|{_IPV4ADDRESS})"

# IPv6address =                                      6( h16 ":" ) ls32
#                       /                       "::" 5( h16 ":" ) ls32
#                       / [               h16 ] "::" 4( h16 ":" ) ls32
#                       / [ *1( h16 ":" ) h16 ] "::" 3( h16 ":" ) ls32
#                       / [ *2( h16 ":" ) h16 ] "::" 2( h16 ":" ) ls32
#                       / [ *3( h16 ":" ) h16 ] "::"    h16 ":"   ls32
#                       / [ *4( h16 ":" ) h16 ] "::"              ls32
#                       / [ *5( h16 ":" ) h16 ] "::"              h16
#                       / [ *6( h16 ":" ) h16 ] "::"
_IPV6ADDRESS: str = (
    "(?:"
    + r"|".join(
        (
                                           rf"(?:{_H16}:){{6}}{_LS32}",
                                         rf"::(?:{_H16}:){{5}}{_LS32}",
                              rf"(?:{_H16})?::(?:{_H16}:){{4}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,1}}{_H16})?::(?:{_H16}:){{3}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,2}}{_H16})?::(?:{_H16}:){{2}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,3}}{_H16})?::(?:{_H16}:){_LS32}",
            rf"(?:(?:{_H16}:){{0,4}}{_H16})?::{_LS32}",
            rf"(?:(?:{_H16}:){{0,5}}{_H16})?::{_H16}",
            rf"(?:(?:{_H16}:){{0,6}}{_H16})?::",
        )
    )
    + ")"
)

# ZoneID = 1*( unreserved / pct-encoded )
_ZONEID: str = rf"(?:{_UNRESERVED}|{_PCT_ENCODED})+"

# IPv6addrz = IPv6address "%25" ZoneID
_IPV6ADDRZ: str = rf"{_IPV6ADDRESS}%25{_ZONEID}"

# IPvFuture = "v" 1*HEXDIG "." 1*( unreserved / sub-delims / ":" )
_IPVFUTURE: str = rf"[vV]{_HEXDIG}+\.(?:{_UNRESERVED}|{_SUB_DELIMS}|:)+"

# Everything below is matched one unit at a time. A unit is a single character
# or a single pct-encoded triple, so a scan never backtracks.

# userinfo = *( unreserved / pct-encoded / sub-delims / ":" )
_USERINFO_UNIT: str = rf"(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS}|:)"

# iuserinfo = *( iunreserved / pct-encoded / sub-delims / ":" )
_IUSERINFO_UNIT: str = rf"(?:{_IUNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS}|:)"

# reg-name = *( unreserved / pct-encoded / sub-delims )
_REG_NAME_UNIT: str = rf"(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS})"

# ireg-name = *( iunreserved / pct-encoded / sub-delims )
_IREG_NAME_UNIT: str = rf"(?:{_IUNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS})"

# path-abempty / path-absolute / path-rootless share *( pchar / "/" ) once the
# first segment has been looked at.
_PATH_UNIT: str = rf"(?:{_PCHAR}|/)"
_IPATH_UNIT: str = rf"(?:{_IPCHAR}|/)"

# segment-nz-nc = 1*( unreserved / pct-encoded / sub-delims / "@" )
_SEGMENT_NZ_NC_UNIT: str = rf"(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS}|@)"

# isegment-nz-nc = 1*( iunreserved / pct-encoded / sub-delims / "@" )
_ISEGMENT_NZ_NC_UNIT: str = rf"(?:{_IUNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS}|@)"

# query = *( pchar / "/" / "?" )
_QUERY_UNIT: str = rf"(?:{_PCHAR}|[/?])"

# iquery = *( ipchar / iprivate / "/" / "?" )
_IQUERY_UNIT: str = rf"(?:{_IPCHAR}|{_IPRIVATE}|[/?])"

# fragment = *( pchar / "/" / "?" )
_FRAGMENT_UNIT: str = rf"(?:{_PCHAR}|[/?])"

# ifragment = *( ipchar / "/" / "?" )
_IFRAGMENT_UNIT: str = rf"(?:{_IPCHAR}|[/?])"

_SCHEME_PAT: re.Pattern[str] = re.compile(_SCHEME)
_IPV4_PAT: re.Pattern[str] = re.compile(_IPV4ADDRESS)
_IPVFUTURE_PAT: re.Pattern[str] = re.compile(_IPVFUTURE)
_PORT_PAT: re.Pattern[str] = re.compile(rf"{_DIGIT}*")
_AUTHORITY_END_PAT: re.Pattern[str] = re.compile(r"[^/?#]*")


def _star(unit: str) -> re.Pattern[str]:
    return re.compile(rf"(?:{unit})*")


class HostKind(enum.Enum):
    """The syntactic form of a host. Carries no network meaning."""

    REG_NAME = "reg-name"
    IPV4 = "IPv4address"
    IPV6 = "IPv6address"
    IPV_FUTURE = "IPvFuture"


class Form(enum.Enum):
    """Which top-level production a whole input is checked against."""

    ABSOLUTE = "absolute"  # URI / IRI
    REFERENCE = "reference"  # URI-reference / IRI-reference
    RELATIVE = "relative"  # relative-ref / irelative-ref


Span = tuple[int, int]


@dataclasses.dataclass(frozen=True)
class Offsets:
    """Component boundaries of a checked reference, as (start, end) spans without delimiters."""

    scheme: Span | None
    authority: Span | None
    userinfo: Span | None
    host: Span | None
    host_kind: HostKind | None
    port: Span | None
    path: Span
    query: Span | None
    fragment: Span | None


@dataclasses.dataclass(frozen=True)
class _Rules:
    iri: bool
    userinfo: re.Pattern[str]
    reg_name: re.Pattern[str]
    path: re.Pattern[str]
    segment_nz_nc: re.Pattern[str]
    segment: re.Pattern[str]
    query: re.Pattern[str]
    fragment: re.Pattern[str]
    ipv6: re.Pattern[str]

    def name(self: Self, production: str) -> str:
        return f"i{production}" if self.iri else production

    @classmethod
    def build(cls: type[Self], iri: bool) -> Self:
        if iri:
            return cls(
                iri=True,
                userinfo=_star(_IUSERINFO_UNIT),
                reg_name=_star(_IREG_NAME_UNIT),
                path=_star(_IPATH_UNIT),
                segment_nz_nc=_star(_ISEGMENT_NZ_NC_UNIT),
                segment=_star(_IPCHAR),
                query=_star(_IQUERY_UNIT),
                fragment=_star(_IFRAGMENT_UNIT),
                # IRIs don't support zone identifiers
                ipv6=re.compile(_IPV6ADDRESS),
            )
        return cls(
            iri=False,
            userinfo=_star(_USERINFO_UNIT),
            reg_name=_star(_REG_NAME_UNIT),
            path=_star(_PATH_UNIT),
            segment_nz_nc=_star(_SEGMENT_NZ_NC_UNIT),
            segment=_star(_PCHAR),
            query=_star(_QUERY_UNIT),
            fragment=_star(_FRAGMENT_UNIT),
            ipv6=re.compile(rf"{_IPV6ADDRESS}|{_IPV6ADDRZ}"),
        )


_URI_RULES: _Rules = _Rules.build(iri=False)
_IRI_RULES: _Rules = _Rules.build(iri=True)


def _rules(iri: bool) -> _Rules:
    return _IRI_RULES if iri else _URI_RULES


def _scan(rule: re.Pattern[str], data: str, pos: int, end: int) -> int:
    """Consume units of rule from pos, returning where the run stops.
    A run stopped by a lone "%" can only be a malformed pct-encoded triple.
    """
    stop: int = rule.match(data, pos, end).end()
    if stop < end and data[stop] == "%":
        raise exc.GrammarError(data, stop, "pct-encoded")
    return stop


def _parse_host(data: str, start: int, end: int, rules: _Rules) -> tuple[int, HostKind]:
    # host = IP-literal / IPv4address / reg-name
    if start < end and data[start] == "[":
        close: int = data.find("]", start, end)
        if close == -1:
            raise exc.GrammarError(data, end, "IP-literal")
        if data.startswith(("v", "V"), start + 1, close):
            if _IPVFUTURE_PAT.fullmatch(data, start + 1, close) is None:
                raise exc.GrammarError(data, start + 1, "IPvFuture")
            return close + 1, HostKind.IPV_FUTURE
        if rules.ipv6.fullmatch(data, start + 1, close) is None:
            raise exc.GrammarError(data, start + 1, "IPv6address")
        return close + 1, HostKind.IPV6

    stop: int = _scan(rules.reg_name, data, start, end)
    if _IPV4_PAT.fullmatch(data, start, stop) is not None:
        return stop, HostKind.IPV4
    return stop, HostKind.REG_NAME


def _parse_authority(
    data: str, start: int, end: int, rules: _Rules
) -> tuple[Span | None, Span, HostKind, Span | None]:
    # authority = [ userinfo "@" ] host [ ":" port ]
    userinfo: Span | None = None
    host_start: int = start
    at: int = data.find("@", start, end)
    if at != -1:
        stop: int = _scan(rules.userinfo, data, start, at)
        if stop != at:
            raise exc.GrammarError(data, stop, rules.name("userinfo"))
        userinfo = (start, at)
        host_start = at + 1

    host_end, kind = _parse_host(data, host_start, end, rules)

    port: Span | None = None
    if host_end < end:
        if data[host_end] != ":":
            raise exc.GrammarError(data, host_end, rules.name("host"))
        port_end: int = _PORT_PAT.match(data, host_end + 1, end).end()
        if port_end != end:
            raise exc.GrammarError(data, port_end, "port")
        port = (host_end + 1, end)

    return userinfo, (host_start, host_end), kind, port


def _parse(data: str, rules: _Rules, form: Form) -> Offsets:
    end: int = len(data)
    pos: int = 0

    # scheme ":"
    scheme: Span | None = None
    if form is not Form.RELATIVE:
        m: re.Match[str] | None = _SCHEME_PAT.match(data)
        if m is not None and m.end() < end and data[m.end()] == ":":
            scheme = (0, m.end())
            pos = m.end() + 1
        elif form is Form.ABSOLUTE:
            raise exc.NotAnIdentifierError(data, 0 if m is None else m.end(), "scheme")

    # "//" authority path-abempty / path-absolute / path-rootless / path-noscheme / path-empty
    authority: Span | None = None
    userinfo: Span | None = None
    host: Span | None = None
    host_kind: HostKind | None = None
    port: Span | None = None
    path_start: int
    if data.startswith("//", pos):
        authority_start: int = pos + 2
        authority_end: int = _AUTHORITY_END_PAT.match(data, authority_start).end()
        userinfo, host, host_kind, port = _parse_authority(data, authority_start, authority_end, rules)
        authority = (authority_start, authority_end)
        path_start = authority_end
        pos = _scan(rules.path, data, path_start, end)
    elif scheme is not None or data.startswith("/", pos):
        path_start = pos
        pos = _scan(rules.path, data, path_start, end)
    else:
        # The first segment of a schemeless relative path can't hold a colon,
        # or it would read as a scheme.
        path_start = pos
        pos = _scan(rules.segment_nz_nc, data, path_start, end)
        if pos < end and data[pos] == ":":
            raise exc.GrammarError(data, pos, rules.name("path-noscheme"))
        pos = _scan(rules.path, data, pos, end)
    path: Span = (path_start, pos)

    # [ "?" query ]
    query: Span | None = None
    if pos < end and data[pos] == "?":
        stop: int = _scan(rules.query, data, pos + 1, end)
        query = (pos + 1, stop)
        pos = stop

    # [ "#" fragment ]
    fragment: Span | None = None
    if pos < end and data[pos] == "#":
        stop = _scan(rules.fragment, data, pos + 1, end)
        fragment = (pos + 1, stop)
        pos = stop

    if pos != end:
        raise exc.IncompleteParseError(data, pos, _production(rules, form))

    return Offsets(
        scheme=scheme,
        authority=authority,
        userinfo=userinfo,
        host=host,
        host_kind=host_kind,
        port=port,
        path=path,
        query=query,
        fragment=fragment,
    )


def _production(rules: _Rules, form: Form) -> str:
    prefix: str = "IRI" if rules.iri else "URI"
    if form is Form.ABSOLUTE:
        return prefix
    if form is Form.REFERENCE:
        return f"{prefix}-reference"
    return rules.name("relative-ref")


def decode(data: str | bytes) -> str:
    """Returns data as text. Bytes must be well-formed UTF-8."""
    if isinstance(data, str):
        return data
    try:
        return bytes(data).decode(DEFAULT_ENCODING)
    except UnicodeDecodeError as e:
        raise exc.GrammarError(data, e.start, "UTF-8") from e


def _rebased(data: str | bytes, text: str, e: exc.GrammarError) -> exc.GrammarError:
    """Restates an error found in text in terms of the caller's original input."""
    if isinstance(data, str):
        return e
    return e.with_input(data, len(text[: e.offset].encode(DEFAULT_ENCODING)))


def parse(data: str | bytes, *, iri: bool = True, form: Form = Form.REFERENCE) -> tuple[str, Offsets]:
    """Checks a whole reference against the chosen production.
    Returns the text and its component offsets; the input is never rewritten.
    """
    text: str = decode(data)
    try:
        return text, _parse(text, _rules(iri), form)
    except exc.GrammarError as e:
        error: exc.GrammarError = _rebased(data, text, e)
        if error is e:
            raise
        raise error from None


def check(production: str, data: str | bytes, *, iri: bool = True) -> str:
    """Checks a single component against its production and returns it as text."""
    text: str = decode(data)
    rules: _Rules = _rules(iri)
    end: int = len(text)
    try:
        if production == "scheme":
            m: re.Match[str] | None = _SCHEME_PAT.match(text)
            stop: int = 0 if m is None else m.end()
            if stop == 0 or stop != end:
                raise exc.GrammarError(text, stop, "scheme")
        elif production == "authority":
            _parse_authority(text, 0, end, rules)
        elif production == "host":
            stop, _ = _parse_host(text, 0, end, rules)
            if stop != end:
                raise exc.GrammarError(text, stop, rules.name("host"))
        elif production == "port":
            stop = _PORT_PAT.match(text).end()
            if stop != end:
                raise exc.GrammarError(text, stop, "port")
        else:
            rule: re.Pattern[str] = {
                "userinfo": rules.userinfo,
                "path": rules.path,
                "segment": rules.segment,
                "query": rules.query,
                "fragment": rules.fragment,
            }[production]
            stop = _scan(rule, text, 0, end)
            if stop != end:
                raise exc.GrammarError(text, stop, rules.name(production))
    except exc.GrammarError as e:
        error: exc.GrammarError = _rebased(data, text, e)
        if error is e:
            raise
        raise error from None
    return text


def split_authority(text: str) -> tuple[Span | None, Span, HostKind, Span | None]:
    """Returns the userinfo, host, host kind and port of an already checked authority."""
    # ASCII text valid under either grammar is valid under the URI grammar,
    # which is the only one that admits zone identifiers.
    return _parse_authority(text, 0, len(text), _rules(not text.isascii()))


def classify_host(text: str) -> HostKind:
    """Returns the kind of an already checked host."""
    return _parse_host(text, 0, len(text), _rules(not text.isascii()))[1]
