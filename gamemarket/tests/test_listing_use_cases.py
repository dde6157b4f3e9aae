from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from gamemarket.application.use_cases.listings.create_listing import CreateListingUseCase
from gamemarket.application.use_cases.listings.delete_listing import DeleteListingUseCase
from gamemarket.application.use_cases.listings.list_listings import ListListingsUseCase
from gamemarket.domain.listings.entities import (
    Listing,
    clean_fields,
    new_listing_id,
    parse_listing_id,
)
from gamemarket.domain.listings.exceptions import (
    InvalidListingIdError,
    InvalidListingPayloadError,
    ListingNotFoundError,
    ListingOwnershipError,
)
from gamemarket.domain.listings.repositories import ListingRepository


class InMemoryListingRepository(ListingRepository):
    def __init__(self) -> None:
        self._rows: dict[str, Listing] = {}
        self._clock = datetime(2025, 1, 1, tzinfo=UTC)
        self.deletes: list[str] = []

    def list_all(self) -> list[Listing]:
        return sorted(self._rows.values(), key=lambda row: row.created_at, reverse=True)

    def insert(self, fields: Mapping[str, Any], *, owner_id: int | None = None) -> str:
        self._clock += timedelta(seconds=1)
        listing = Listing(
            id=new_listing_id(),
            fields=clean_fields(fields),
            created_at=self._clock,
            owner_id=owner_id,
        )
        self._rows[listing.id] = listing
        return listing.id

    def find_by_id(self, listing_id: str) -> Listing | None:
        return self._rows.get(parse_listing_id(listing_id))

    def delete_by_id(self, listing_id: str) -> bool:
        key = parse_listing_id(listing_id)
        self.deletes.append(key)
        return self._rows.pop(key, None) is not None


@pytest.fixture()
def listings() -> InMemoryListingRepository:
    return InMemoryListingRepository()


def test_create_then_list_returns_newest_first(listings: InMemoryListingRepository) -> None:
    create = CreateListingUseCase(listings=listings)
    first = create.execute({"title": "Acct A", "price": 10})
    second = create.execute({"title": "Acct B", "price": 20})

    items = ListListingsUseCase(listings=listings).execute()

    assert [item["id"] for item in items] == [second, first]
    assert items[1]["title"] == "Acct A"
    assert items[1]["price"] == 10


def test_list_strips_credential_fields(listings: InMemoryListingRepository) -> None:
    CreateListingUseCase(listings=listings).execute(
        {"title": "Acct A", "password": "hunter2", "salt": "abc"}
    )

    (item,) = ListListingsUseCase(listings=listings).execute()

    assert "password" not in item
    assert "salt" not in item
    assert item["title"] == "Acct A"


@pytest.mark.parametrize("payload", [None, [], [{"title": "x"}], "text", 42, True])
def test_create_rejects_non_object_payload(
    listings: InMemoryListingRepository, payload: object
) -> None:
    with pytest.raises(InvalidListingPayloadError) as excinfo:
        CreateListingUseCase(listings=listings).execute(payload)

    assert excinfo.value.status == 400
    assert listings.list_all() == []


def test_create_records_owner(listings: InMemoryListingRepository) -> None:
    listing_id = CreateListingUseCase(listings=listings).execute({"title": "x"}, owner_id=5)

    assert listings.find_by_id(listing_id).owner_id == 5


def test_delete_removes_listing_then_reports_not_found(
    listings: InMemoryListingRepository,
) -> None:
    listing_id = listings.insert({"title": "x"})
    delete = DeleteListingUseCase(listings=listings)

    delete.execute(listing_id)

    assert listings.list_all() == []
    with pytest.raises(ListingNotFoundError):
        delete.execute(listing_id)


@pytest.mark.parametrize("enforce", [False, True])
def test_delete_malformed_id_never_reaches_store(
    listings: InMemoryListingRepository, enforce: bool
) -> None:
    delete = DeleteListingUseCase(listings=listings, enforce_ownership=enforce)

    with pytest.raises(InvalidListingIdError):
        delete.execute("not-a-valid-id")

    assert listings.deletes == []


def test_delete_by_anyone_when_ownership_not_enforced(
    listings: InMemoryListingRepository,
) -> None:
    listing_id = listings.insert({"title": "x"}, owner_id=1)

    DeleteListingUseCase(listings=listings).execute(listing_id, requester_id=2)

    assert listings.list_all() == []


def test_delete_enforces_ownership_when_enabled(listings: InMemoryListingRepository) -> None:
    listing_id = listings.insert({"title": "x"}, owner_id=1)
    delete = DeleteListingUseCase(listings=listings, enforce_ownership=True)

    with pytest.raises(ListingOwnershipError) as excinfo:
        delete.execute(listing_id, requester_id=2)
    assert excinfo.value.status == 403
    assert listings.deletes == []

    delete.execute(listing_id, requester_id=1)
    assert listings.list_all() == []


def test_delete_unknown_id_with_ownership_enforced(listings: InMemoryListingRepository) -> None:
    delete = DeleteListingUseCase(listings=listings, enforce_ownership=True)

    with pytest.raises(ListingNotFoundError):
        delete.execute(new_listing_id(), requester_id=1)
