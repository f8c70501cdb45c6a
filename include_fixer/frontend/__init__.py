"""Front-end adapters that feed parser events into the engine."""

from .events import (
    ScopeSpec,
    SpanSpec,
    UnresolvedIdentifierEvent,
    IncompleteTypeEvent,
    Event,
    EventStream,
    decode_events,
    load_events,
)

__all__ = [
    "ScopeSpec",
    "SpanSpec",
    "UnresolvedIdentifierEvent",
    "IncompleteTypeEvent",
    "Event",
    "EventStream",
    "decode_events",
    "load_events",
]
