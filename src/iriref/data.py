"""iriref.data
RFC 2397 data: URLs, read through the public accessors of an Identifier.

    dataurl    := "data:" [ mediatype ] [ ";base64" ] "," data
    mediatype  := [ type "/" subtype ] *( ";" parameter )
"""

from base64 import b64decode
import binascii
import dataclasses

from typing import Self
from urllib.parse import unquote_to_bytes

from iriref import exceptions as exc
from iriref.reference import Identifier, parse_uri

SCHEME: str = "data"
_BASE64_PARAMETER: str = "base64"


@dataclasses.dataclass(frozen=True)
class DataUrl:
    identifier: Identifier
    media_type: str | None
    base64: bool
    encoded_data: str

    @classmethod
    def parse(cls: type[Self], data: Identifier | str | bytes) -> Self:
        identifier: Identifier = data if isinstance(data, Identifier) else parse_uri(data)
        if identifier.scheme.lower() != SCHEME:
            raise exc.InvalidDataUrlError(f"not a data: URL {str(identifier)!r}")
        if identifier.authority is not None:
            raise exc.InvalidDataUrlError(f"data: URL with an authority {str(identifier)!r}")

        # the payload is everything up to the fragment, query included
        payload: str = identifier.path
        if identifier.query is not None:
            payload += f"?{identifier.query}"

        header, comma, encoded = payload.partition(",")
        if not comma:
            raise exc.InvalidDataUrlError(f"data: URL without a ',' {str(identifier)!r}")

        media_type, semicolon, last = header.rpartition(";")
        is_base64: bool = bool(semicolon) and last.lower() == _BASE64_PARAMETER
        if not is_base64:
            media_type = header

        return cls(
            identifier=identifier,
            media_type=media_type or None,
            base64=is_base64,
            encoded_data=encoded,
        )

    def decoded_data(self: Self) -> bytes:
        raw: bytes = unquote_to_bytes(self.encoded_data)
        if not self.base64:
            return raw
        try:
            return b64decode(raw, validate=True)
        except binascii.Error as e:
            raise exc.InvalidDataUrlError(f"bad base64 payload in {str(self.identifier)!r}") from e
