# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from gamemarket.domain.listings.entities import Listing as DomainListing
from gamemarket.domain.listings.entities import (
    clean_fields,
    new_listing_id,
    parse_listing_id,
)
from gamemarket.domain.listings.repositories import ListingRepository
from gamemarket.infrastructure.db import Database
from gamemarket.infrastructure.db.models import Listing, as_utc
from gamemarket.shared.logging import logger


def _to_domain(row: Listing) -> DomainListing:
    return DomainListing(
        id=row.id,
        fields=dict(row.fields or {}),
        created_at=as_utc(row.created_at),
        owner_id=row.owner_id,
    )


class SqlAlchemyListingRepository(ListingRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    def list_all(self) -> list[DomainListing]:
        with self._db.session_scope() as session:
            rows = (
                session.query(Listing)
                .order_by(Listing.created_at.desc(), Listing.id.desc())
                .all()
            )
            return [_to_domain(row) for row in rows]

    def insert(self, fields: Mapping[str, Any], *, owner_id: int | None = None) -> str:
        listing_id = new_listing_id()
        with self._db.session_scope() as session:
            session.add(
                Listing(
                    id=listing_id,
                    fields=clean_fields(fields),
                    owner_id=owner_id,
                    created_at=datetime.now(UTC),
                )
            )
        logger.debug(f"listings.insert: id={listing_id} owner_id={owner_id}")
        return listing_id

    def find_by_id(self, listing_id: str) -> DomainListing | None:
        key = parse_listing_id(listing_id)
        with self._db.session_scope() as session:
            row = session.get(Listing, key)
            return _to_domain(row) if row else None

    def delete_by_id(self, listing_id: str) -> bool:
        key = parse_listing_id(listing_id)
        with self._db.session_scope() as session:
            deleted = session.query(Listing).filter(Listing.id == key).delete()
        return bool(deleted)


__all__ = ["SqlAlchemyListingRepository"]
