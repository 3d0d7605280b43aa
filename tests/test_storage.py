"""Tests for host resource storage and module events."""

from __future__ import annotations

import pytest

from custodian.core.exceptions import AlreadyInitializedError, NotFoundError
from custodian.events import EventHandle, NamedAddressAdded
from custodian.identity.address import AccountAddress
from custodian.storage import ResourceStorage


class Marker:
    pass


class OtherMarker:
    pass


class TestResourceStorage:
    """One record per (address, type); never replaced."""

    def test_move_to_and_borrow(self, storage):
        address = AccountAddress.from_hex("0x1")
        record = Marker()

        storage.move_to(address, record)

        assert storage.exists(address, Marker)
        assert storage.borrow(address, Marker) is record

    def test_second_move_to_conflicts(self, storage):
        address = AccountAddress.from_hex("0x1")
        first = Marker()
        storage.move_to(address, first)

        with pytest.raises(AlreadyInitializedError) as exc_info:
            storage.move_to(address, Marker())

        assert exc_info.value.resource_type == "Marker"
        assert storage.borrow(address, Marker) is first
        assert len(storage) == 1

    def test_types_and_addresses_are_independent(self, storage):
        storage.move_to(AccountAddress.from_hex("0x1"), Marker())
        storage.move_to(AccountAddress.from_hex("0x1"), OtherMarker())
        storage.move_to(AccountAddress.from_hex("0x2"), Marker())

        assert len(storage) == 3

    def test_borrow_missing(self, storage):
        with pytest.raises(NotFoundError):
            storage.borrow(AccountAddress.from_hex("0x1"), Marker)


class TestEventHandle:
    """Sequence numbers increase by one per emit."""

    def test_emit_assigns_sequence_numbers(self):
        handle = EventHandle()
        address = AccountAddress.from_hex("0xAA")

        first = handle.emit(NamedAddressAdded("a", address))
        second = handle.emit(NamedAddressAdded("b", address))

        assert (first.sequence_number, second.sequence_number) == (0, 1)
        assert first.guid == second.guid == handle.guid
        assert handle.counter == 2

    def test_events_since(self):
        handle = EventHandle(guid="fixed")
        for n in range(3):
            handle.emit(n)

        assert [e.payload for e in handle.events()] == [0, 1, 2]
        assert [e.payload for e in handle.events(since=2)] == [2]
        assert handle.guid == "fixed"
