import unittest

import pytest

import iriref
from iriref import exceptions as exc
from iriref import grammar
from iriref.components import Authority, Fragment, Host, Path, Port, Scheme, Segment, UserInfo


class TestParts(unittest.TestCase):
    # text, (scheme, authority, path, query, fragment)
    parts = [
        ("", (None, None, "", None, None)),
        ("scheme:", ("scheme", None, "", None, None)),
        ("//authority", (None, "authority", "", None, None)),
        ("path", (None, None, "path", None, None)),
        ("/path", (None, None, "/path", None, None)),
        ("/", (None, None, "/", None, None)),
        ("foo//bar", (None, None, "foo//bar", None, None)),
        ("?query", (None, None, "", "query", None)),
        ("#fragment", (None, None, "", None, "fragment")),
        ("scheme:?query", ("scheme", None, "", "query", None)),
        ("scheme://authority", ("scheme", "authority", "", None, None)),
        ("scheme:path", ("scheme", None, "path", None, None)),
        ("scheme:/path", ("scheme", None, "/path", None, None)),
        ("scheme:#fragment", ("scheme", None, "", None, "fragment")),
        ("//authority/path", (None, "authority", "/path", None, None)),
        ("//authority?query", (None, "authority", "", "query", None)),
        ("//authority#fragment", (None, "authority", "", None, "fragment")),
        ("path?query", (None, None, "path", "query", None)),
        ("/path?query", (None, None, "/path", "query", None)),
        ("path#fragment", (None, None, "path", None, "fragment")),
        ("?query#fragment", (None, None, "", "query", "fragment")),
        ("scheme://authority/path", ("scheme", "authority", "/path", None, None)),
        ("scheme://authority?query", ("scheme", "authority", "", "query", None)),
        ("scheme://authority#fragment", ("scheme", "authority", "", None, "fragment")),
        ("scheme:path?query", ("scheme", None, "path", "query", None)),
        ("scheme:path#fragment", ("scheme", None, "path", None, "fragment")),
        ("//authority/path?query", (None, "authority", "/path", "query", None)),
        ("//authority/path#fragment", (None, "authority", "/path", None, "fragment")),
        ("//authority?query#fragment", (None, "authority", "", "query", "fragment")),
        ("path?query#fragment", (None, None, "path", "query", "fragment")),
        ("scheme://authority/path?query", ("scheme", "authority", "/path", "query", None)),
        ("scheme://authority/path#fragment", ("scheme", "authority", "/path", None, "fragment")),
        ("scheme://authority?query#fragment", ("scheme", "authority", "", "query", "fragment")),
        ("scheme:path?query#fragment", ("scheme", None, "path", "query", "fragment")),
        ("//authority/path?query#fragment", (None, "authority", "/path", "query", "fragment")),
        ("scheme://authority/path?query#fragment", ("scheme", "authority", "/path", "query", "fragment")),
    ]

    def test_parts(self):
        for text, expected in self.parts:
            ref = iriref.parse_iri_reference(text)
            assert tuple(ref.parts()) == expected, text

    def test_round_trip(self):
        for text, _ in self.parts:
            for parse in (iriref.parse_uri_reference, iriref.parse_iri_reference):
                assert iriref.render(parse(text.encode())) == text.encode()
                assert str(parse(text)) == text

    def test_round_trip_keeps_spelling(self):
        # nothing is canonicalised on the way in
        for text in ("HTTP://Example.ORG/%7e/./a/../b?Q#%2F", "http://[FE80::1]:/", "s:/.//x"):
            assert str(iriref.parse_iri(text)) == text

    def test_empty_authority_is_not_no_authority(self):
        assert iriref.parse_iri("file:///etc").authority == ""
        assert iriref.parse_iri("file:/etc").authority is None


class TestGrammarErrors(unittest.TestCase):
    def test_consumed_length_postcondition(self):
        with pytest.raises(exc.IncompleteParseError) as e:
            iriref.parse_iri("http://a/b?q#f XYZ")
        assert e.value.offset == len("http://a/b?q#f")

    def test_bad_pct_encoding(self):
        for text in ("http://a/%zz", "http://a/%4", "http://a/%"):
            with pytest.raises(exc.GrammarError) as e:
                iriref.parse_uri(text)
            assert e.value.production == "pct-encoded"
            assert e.value.offset == 9

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            iriref.parse_iri("http://a b/")

    def test_byte_offsets_for_bytes_input(self):
        with pytest.raises(exc.IncompleteParseError) as e:
            iriref.parse_iri("http://é/ x".encode())
        assert e.value.offset == 10
        with pytest.raises(exc.IncompleteParseError) as e:
            iriref.parse_iri("http://é/ x")
        assert e.value.offset == 9

    def test_bad_utf8(self):
        with pytest.raises(exc.GrammarError) as e:
            iriref.parse_iri(b"http://a/\xff")
        assert e.value.offset == 9
        assert e.value.production == "UTF-8"

    def test_identifier_needs_a_scheme(self):
        with pytest.raises(exc.NotAnIdentifierError):
            iriref.parse_uri("foo/bar")
        with pytest.raises(exc.NotAnIdentifierError):
            iriref.parse_iri_reference("foo/bar").to_identifier()

    def test_relative_ref_has_no_scheme(self):
        with pytest.raises(exc.GrammarError) as e:
            iriref.parse_relative_ref("a:b")
        assert e.value.offset == 1
        with pytest.raises(exc.GrammarError):
            iriref.parse_irelative_ref("http://example.org/")
        assert iriref.parse_relative_ref("./a:b").path == "./a:b"
        assert iriref.parse_relative_ref("//a/b").authority == "a"

    def test_first_segment_colon(self):
        with pytest.raises(exc.GrammarError) as e:
            iriref.parse_iri_reference("1a:b")
        assert e.value.offset == 2

    def test_bad_authorities(self):
        bad = [
            "http://a:b@c:d/",
            "http://a:80:90/",
            "http://[::1/",
            "http://[::g]/",
            "http://[v.x]/",
            "http://a]/",
        ]
        for text in bad:
            with pytest.raises(exc.GrammarError):
                iriref.parse_uri(text)


class TestGrammars(unittest.TestCase):
    def test_iri_allows_ucschar(self):
        ref = iriref.parse_iri("http://例え.jp/引き?ü#ß")
        assert ref.host == "例え.jp"
        assert ref.iri
        with pytest.raises(exc.GrammarError) as e:
            iriref.parse_uri("http://例え.jp/")
        assert e.value.offset == 7

    def test_iprivate_only_in_query(self):
        iriref.parse_iri("http://a/?\ue000")
        with pytest.raises(exc.GrammarError):
            iriref.parse_iri("http://a/\ue000")

    def test_zone_ids_only_in_uris(self):
        ref = iriref.parse_uri("http://[fe80::1%25en0]/")
        assert ref.host_kind is grammar.HostKind.IPV6
        with pytest.raises(exc.GrammarError) as e:
            iriref.parse_iri("http://[fe80::1%25en0]/")
        assert e.value.production == "IPv6address"

    def test_host_kinds(self):
        kinds = [
            ("http://example.org/", grammar.HostKind.REG_NAME),
            ("http://127.0.0.1:8080/", grammar.HostKind.IPV4),
            ("http://256.0.0.1/", grammar.HostKind.REG_NAME),
            ("http://1.2.3/", grammar.HostKind.REG_NAME),
            ("http://[::1]/", grammar.HostKind.IPV6),
            ("http://[2001:db8::7]/", grammar.HostKind.IPV6),
            ("http://[::ffff:192.0.2.1]/", grammar.HostKind.IPV6),
            ("http://[v1.fe:ff]/", grammar.HostKind.IPV_FUTURE),
            ("http:///", grammar.HostKind.REG_NAME),
        ]
        for text, kind in kinds:
            ref = iriref.parse_iri(text)
            assert ref.host_kind is kind, text
            assert ref.host.kind is kind, text

    def test_authority_parts(self):
        ref = iriref.parse_iri("http://user:pw@example.org:8080/")
        assert ref.userinfo == "user:pw"
        assert ref.host == "example.org"
        assert ref.port == "8080"
        assert ref.port.number == 8080
        assert ref.authority.userinfo == "user:pw"
        assert ref.authority.host == "example.org"
        assert ref.authority.port == "8080"

    def test_empty_port(self):
        ref = iriref.parse_iri("http://example.org:/")
        assert ref.port == ""
        assert ref.port.number is None


class TestComponents(unittest.TestCase):
    good = [
        (Scheme, "git+ssh"),
        (Authority, "user@[::1]:22"),
        (Authority, ""),
        (UserInfo, "user:pw"),
        (Host, "example.org"),
        (Port, "80"),
        (Port, ""),
        (Path, "//a/b:c"),
        (Segment, "a:b@c"),
        (iriref.Query, "a=b?c/d"),
        (Fragment, "sec/1?x"),
    ]
    bad = [
        (Scheme, ""),
        (Scheme, "1http"),
        (Scheme, "ht tp"),
        (Authority, "a/b"),
        (UserInfo, "a@b"),
        (Host, "a:80"),
        (Port, "8o"),
        (Path, "a?b"),
        (Segment, "a/b"),
        (iriref.Query, "a#b"),
        (Fragment, "a#b"),
    ]

    def test_good(self):
        for cls, text in self.good:
            value = cls(text)
            assert value == text
            assert isinstance(value, str)

    def test_bad(self):
        for cls, text in self.bad:
            with pytest.raises(exc.GrammarError):
                cls(text)

    def test_port_from_int(self):
        assert Port(8080) == "8080"
        with pytest.raises(exc.GrammarError):
            Port(-1)

    def test_uri_components_are_ascii(self):
        Segment("é")
        with pytest.raises(exc.GrammarError):
            Segment("é", iri=False)

    def test_userinfo_fields(self):
        assert UserInfo("user:pw").username == "user"
        assert UserInfo("user:pw").password == "pw"
        assert UserInfo("user").password is None

    def test_decoded(self):
        assert Segment("caf%C3%A9").decoded() == "café".encode()

    def test_repr(self):
        assert repr(Host("example.org")) == "Host('example.org')"


class TestViews(unittest.TestCase):
    def test_textual_equality(self):
        a = iriref.parse_iri("http://example.org/")
        b = iriref.parse_iri_reference("http://example.org/")
        assert a == b
        assert a == "http://example.org/"
        assert a != iriref.parse_iri("HTTP://example.org/")
        assert len({a, b}) == 1

    def test_bytes(self):
        ref = iriref.parse_iri("http://example.org/é")
        assert bytes(ref) == "http://example.org/é".encode()

    def test_identifier_scheme(self):
        ref = iriref.parse_iri_reference("mailto:a@example.org").to_identifier()
        assert isinstance(ref, iriref.Identifier)
        assert ref.scheme == "mailto"
