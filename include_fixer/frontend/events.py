"""Front-end event stream.

A parser front-end reports the two callback kinds the engine reacts to as
JSON events. Offsets index into the primary file's source text.

Stream format:
    {
        "file": "main.cc",
        "events": [
            {"kind": "unresolved_identifier", "name": "Foo", "offset": 11,
             "scopes": [{"name": "b"}, {"name": "a"}]},
            {"kind": "incomplete_type", "type_name": "a::Bar", "offset": 40}
        ]
    }
"""

from pathlib import Path
from typing import Annotated, Optional, Union

import msgspec

from ..errors import IncludeFixerError

NonNegative = Annotated[int, msgspec.Meta(ge=0)]


class ScopeSpec(msgspec.Struct, omit_defaults=True):
    """Enclosing lexical scope of an event, e.g. ``namespace a``."""

    name: str = ""  # empty for anonymous scopes
    kind: str = "namespace"  # "namespace", "record", "function", "block"


class SpanSpec(msgspec.Struct):
    """Source span of an explicit qualifier such as ``a::b::``."""

    offset: NonNegative
    length: NonNegative


class UnresolvedIdentifierEvent(msgspec.Struct, tag_field="kind", tag="unresolved_identifier", omit_defaults=True):
    """Lookup of an identifier failed."""

    name: str
    offset: NonNegative
    length: Optional[NonNegative] = None  # defaults to len(name)
    in_main_file: bool = True
    scopes: list[ScopeSpec] = []  # innermost first
    qualifier: Optional[SpanSpec] = None
    is_identifier: bool = True  # False for operator and conversion names
    from_macro: bool = False
    sfinae: bool = False

    @property
    def token_length(self) -> int:
        return len(self.name) if self.length is None else self.length


class IncompleteTypeEvent(msgspec.Struct, tag_field="kind", tag="incomplete_type", omit_defaults=True):
    """A complete type was required but only a declaration is visible."""

    type_name: str
    offset: NonNegative = 0
    sfinae: bool = False


Event = Union[UnresolvedIdentifierEvent, IncompleteTypeEvent]


class EventStream(msgspec.Struct, omit_defaults=True):
    """All events recorded for one compilation unit."""

    file: str = ""
    events: list[Event] = []


_decoder = msgspec.json.Decoder(EventStream)


def decode_events(data: bytes | str) -> EventStream:
    """Decode an event stream payload.

    Raises:
        msgspec.DecodeError: If the payload is not valid JSON.
        msgspec.ValidationError: If an event doesn't match its schema.
    """
    return _decoder.decode(data)


def load_events(path: str | Path) -> EventStream:
    """Load an event stream from file.

    Raises:
        IncludeFixerError: If the file can't be read or decoded.
    """
    try:
        with open(path, "rb") as f:
            return decode_events(f.read())
    except OSError as e:
        raise IncludeFixerError(f"Cannot read events {path}: {e.strerror or e}") from e
    except (msgspec.DecodeError, msgspec.ValidationError) as e:
        raise IncludeFixerError(f"Invalid events {path}: {e}") from e
