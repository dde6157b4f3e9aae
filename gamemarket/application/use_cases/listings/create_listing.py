# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping

from gamemarket.domain.listings.exceptions import InvalidListingPayloadError
from gamemarket.domain.listings.repositories import ListingRepository


class CreateListingUseCase:
    def __init__(self, *, listings: ListingRepository) -> None:
        self._listings = listings

    def execute(self, payload: object, *, owner_id: int | None = None) -> str:
        if not isinstance(payload, Mapping):
            raise InvalidListingPayloadError(
                context={"expected": "object", "received": type(payload).__name__}
            )
        return self._listings.insert(payload, owner_id=owner_id)
