import unittest

import iriref
from iriref.compare import equivalence_key, equivalent


class TestEquivalence(unittest.TestCase):
    same = [
        ("http://example.org", "http://exa%6dple.org"),
        ("a/b/c", "a/../a/./b/../b/c"),
        ("HTTP://example.org/", "http://example.org/"),
        ("http://example.org/~user", "http://example.org/%7euser"),
        ("http://example.org/~user", "http://example.org/%7Euser"),
        ("http://example.org/a/b/c/.", "http://example.org/a/b/c/"),
        ("http://example.org/a/b/../c", "http://example.org/a/c"),
        ("http://%31.2.3.4/", "http://1.2.3.4/"),
        ("http://us%65r@example.org/", "http://user@example.org/"),
        ("http://[::1]/", "http://[::1]/"),
        ("http://example.org/?%61=b#%63", "http://example.org/?a=b#c"),
        ("/a/..", "/"),
        ("a/..", ""),
        ("http://example.org/caf%C3%A9", "http://example.org/café"),
    ]
    different = [
        ("http://example.org", "http://example.org:80"),
        ("/foo/bar", "/foo/bar/"),
        ("http://Example.org/", "http://example.org/"),
        ("http://example.org/a", "http://example.org/A"),
        ("a/b", "/a/b"),
        ("http://example.org/b", "http://example.org/b?"),
        ("http://example.org/b", "http://example.org/b#"),
        ("http://example.org", "http://example.org/"),
        ("http:/a", "http:///a"),
        ("http://example.org/a%2Fb", "http://example.org/a/b"),
        ("http://[::1]/", "http://[0::1]/"),
        ("http://example.org:80/", "http://example.org:080/"),
        ("mailto:a", "http:a"),
    ]

    def test_same(self):
        for a, b in self.same:
            assert equivalent(a, b), (a, b)
            assert equivalent(b, a), (b, a)

    def test_different(self):
        for a, b in self.different:
            assert not equivalent(a, b), (a, b)
            assert not equivalent(b, a), (b, a)

    def test_reflexive(self):
        for a, b in self.same + self.different:
            assert equivalent(a, a)
            assert equivalent(b, b)

    def test_methods(self):
        a = iriref.parse_iri("http://example.org/a/./b")
        b = iriref.IdentifierBuffer.parse("http://example.org/a/b")
        assert a.equivalent(b)
        assert b.equivalent(a)
        assert a.equivalent("http://example.org/a/b")
        assert a != b

    def test_key_is_hashable(self):
        seen = {equivalence_key("http://example.org/a"): 1}
        assert equivalence_key("HTTP://example.org/./a") in seen

    def test_normalized_path_resolution_agree(self):
        # resolving and then comparing does not depend on how the reference was spelled
        base = "http://a/b/c/d;p?q"
        assert equivalent(iriref.resolve(base, "g/../h"), iriref.resolve(base, "./h"))

    def test_zone_identifier_is_decoded(self):
        # zone identifiers only exist in the URI grammar
        a = iriref.parse_uri("http://[fe80::1%25eth0]/")
        b = iriref.parse_uri("http://[fe80::1%25%65th0]/")
        assert equivalent(a, b)
        assert equivalence_key(a) == equivalence_key(b)
        assert not equivalent(a, iriref.parse_uri("http://[fe80::1%25eth1]/"))
