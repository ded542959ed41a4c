"""iriref.formats.json
References in JSON documents travel as plain strings.
"""

import json
from typing import Any, Self

from iriref.reference import ComponentAccessor, Identifier, Reference


class ReferenceEncoder(json.JSONEncoder):
    """Encodes views and buffers as their text."""

    def default(self: Self, o: Any) -> Any:
        if isinstance(o, ComponentAccessor):
            return str(o)
        return super().default(o)


def dumps(obj: Any, **kwargs: Any) -> str:
    return json.dumps(obj, cls=ReferenceEncoder, **kwargs)


def from_json(value: Any, *, reference: bool = False, iri: bool = True) -> Reference:
    """Parses a decoded JSON value.
    Raises TypeError unless value is a JSON string, and GrammarError unless
    that string is a valid identifier (a valid reference when reference=True).
    """
    if not isinstance(value, str):
        raise TypeError(f"expected a JSON string, got {type(value).__name__}")
    cls: type[Reference] = Reference if reference else Identifier
    return cls(value, iri=iri)


def loads(s: str | bytes, *, reference: bool = False, iri: bool = True) -> Reference:
    return from_json(json.loads(s), reference=reference, iri=iri)
