# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from gamemarket.domain.listings.entities import parse_listing_id
from gamemarket.domain.listings.exceptions import (
    ListingNotFoundError,
    ListingOwnershipError,
)
from gamemarket.domain.listings.repositories import ListingRepository


class DeleteListingUseCase:
    """Delete one listing by id.

    Malformed ids raise ``InvalidListingIdError`` before the store is asked
    anything. With ``enforce_ownership`` on, a listing that has an owner can
    only be deleted by that owner; listings created without a session stay
    deletable by anyone allowed through the guard.
    """

    def __init__(self, *, listings: ListingRepository, enforce_ownership: bool = False) -> None:
        self._listings = listings
        self._enforce_ownership = enforce_ownership

    def execute(self, listing_id: str, *, requester_id: int | None = None) -> None:
        key = parse_listing_id(listing_id)

        if self._enforce_ownership:
            listing = self._listings.find_by_id(key)
            if listing is None:
                raise ListingNotFoundError(key)
            if not listing.is_owned_by(requester_id):
                raise ListingOwnershipError(context={"listing_id": key})

        if not self._listings.delete_by_id(key):
            raise ListingNotFoundError(key)
