"""iriref.literals
Checked constants. Meant for module level, where a typo fails at import:

    HOME = literals.iri("https://example.org/")
"""

import functools

from iriref.reference import Identifier, Reference


@functools.lru_cache(maxsize=None)
def iri(text: str) -> Identifier:
    return Identifier(text)


@functools.lru_cache(maxsize=None)
def iri_ref(text: str) -> Reference:
    return Reference(text)


@functools.lru_cache(maxsize=None)
def uri(text: str) -> Identifier:
    return Identifier(text, iri=False)


@functools.lru_cache(maxsize=None)
def uri_ref(text: str) -> Reference:
    return Reference(text, iri=False)
