# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from gamemarket.domain.listings.repositories import ListingRepository


class ListListingsUseCase:
    """Newest-first listings, serialized without credential-shaped keys."""

    def __init__(self, *, listings: ListingRepository) -> None:
        self._listings = listings

    def execute(self) -> list[dict[str, Any]]:
        return [listing.to_dict(redact_credentials=True) for listing in self._listings.list_all()]
