__version__ = "0.1"

from iriref import exceptions as exc
from iriref.grammar import DEFAULT_ENCODING, HostKind
from iriref.components import (Authority,
                               Fragment,
                               Host,
                               Path,
                               Port,
                               Query,
                               Scheme,
                               Segment,
                               UserInfo,)
from iriref.reference import (ComponentAccessor,
                              Identifier,
                              Parts,
                              Reference,
                              parse_iri,
                              parse_iri_reference,
                              parse_irelative_ref,
                              parse_relative_ref,
                              parse_uri,
                              parse_uri_reference,
                              render,)
from iriref.buffer import IdentifierBuffer, ReferenceBuffer
from iriref.resolve import relative_to, resolve
from iriref.compare import equivalence_key, equivalent
