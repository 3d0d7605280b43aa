"""Host resource storage.

Global storage keyed by ``(address, resource type)``. At most one record of
a given type lives at an address; publishing a second one is a storage
conflict (``AlreadyInitializedError``). Records are never removed.
"""

from __future__ import annotations

import threading
from typing import TypeVar

from .core.exceptions import AlreadyInitializedError, NotFoundError
from .identity.address import AccountAddress

T = TypeVar("T")


class ResourceStorage:
    """Process-wide record storage, passed explicitly to whoever needs it."""

    def __init__(self) -> None:
        self._records: dict[tuple[AccountAddress, type], object] = {}
        self._lock = threading.RLock()

    def move_to(self, address: AccountAddress, record: object) -> None:
        """Publish ``record`` at ``address``.

        Raises:
            AlreadyInitializedError: If a record of the same type is already there.
        """
        key = (address, type(record))
        with self._lock:
            if key in self._records:
                raise AlreadyInitializedError(address, type(record).__name__)
            self._records[key] = record

    def exists(self, address: AccountAddress, resource_type: type) -> bool:
        with self._lock:
            return (address, resource_type) in self._records

    def borrow(self, address: AccountAddress, resource_type: type[T]) -> T:
        """Get the record of ``resource_type`` at ``address``.

        Raises:
            NotFoundError: If no such record exists.
        """
        with self._lock:
            record = self._records.get((address, resource_type))
        if record is None:
            raise NotFoundError(resource_type.__name__, str(address))
        return record  # type: ignore[return-value]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
