"""iriref.exceptions
Every error raised on purpose by iriref derives from IrirefError. The ones
about bad input also derive from ValueError.
"""

from typing import Self


class IrirefError(Exception):
    pass


class GrammarError(IrirefError, ValueError):
    """The input does not match a production of the URI or IRI grammar.
    offset is counted in the unit of the input: characters for str, bytes for bytes.
    """

    def __init__(self: Self, input: str | bytes, offset: int, production: str) -> None:
        self.input: str | bytes = input
        self.offset: int = offset
        self.production: str = production
        super().__init__(f"invalid {production} at offset {offset} in {input!r}")

    def with_input(self: Self, input: str | bytes, offset: int) -> Self:
        return self.__class__(input, offset, self.production)


class IncompleteParseError(GrammarError):
    """A valid prefix was consumed but input remains. offset is the first unconsumed position."""


class NotAnIdentifierError(GrammarError):
    """A scheme is required but there is none."""


class PreconditionError(IrirefError, ValueError):
    """An operation was asked of a value that can't support it,
    e.g. resolving against a base without a scheme.
    """


class InvalidDataUrlError(IrirefError, ValueError):
    pass
