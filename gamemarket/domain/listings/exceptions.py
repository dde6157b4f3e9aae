# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from gamemarket.shared.errors.base import DomainError


class InvalidListingIdError(DomainError):
    code = "invalid_listing_id"
    status = HTTPStatus.BAD_REQUEST

    def __init__(self, listing_id: str) -> None:
        super().__init__(context={"listing_id": listing_id[:64]})


class ListingNotFoundError(DomainError):
    code = "listing_not_found"
    status = HTTPStatus.NOT_FOUND

    def __init__(self, listing_id: str) -> None:
        super().__init__(context={"listing_id": listing_id})


class ListingOwnershipError(DomainError):
    code = "listing_not_owned"
    status = HTTPStatus.FORBIDDEN


class InvalidListingPayloadError(DomainError):
    code = "invalid_listing_payload"
    status = HTTPStatus.BAD_REQUEST
