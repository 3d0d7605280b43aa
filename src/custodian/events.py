"""Module events.

An ``EventHandle`` owns a GUID and a sequence counter. Each ``emit`` stores
one ``EmittedEvent`` with the next sequence number, so consumers can replay
a handle's stream in order and detect gaps.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .identity.address import AccountAddress


@dataclass(frozen=True)
class NamedAddressAdded:
    """A name was registered."""

    name: str
    address: AccountAddress


@dataclass(frozen=True)
class EmittedEvent:
    guid: str
    sequence_number: int
    payload: Any
    emitted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class EventHandle:
    """Ordered event stream owned by a single record."""

    def __init__(self, guid: str | None = None) -> None:
        self.guid = guid or str(uuid.uuid4())
        self._events: list[EmittedEvent] = []
        self._lock = threading.Lock()

    @property
    def counter(self) -> int:
        """Number of events emitted so far."""
        return len(self._events)

    def emit(self, payload: Any) -> EmittedEvent:
        with self._lock:
            event = EmittedEvent(
                guid=self.guid,
                sequence_number=len(self._events),
                payload=payload,
            )
            self._events.append(event)
        return event

    def events(self, since: int = 0) -> list[EmittedEvent]:
        """Events with ``sequence_number >= since``, oldest first."""
        with self._lock:
            return self._events[since:]
