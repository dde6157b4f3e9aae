# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import (
    CREDENTIAL_FIELDS,
    RESERVED_FIELDS,
    Listing,
    clean_fields,
    is_credential_field,
    new_listing_id,
    parse_listing_id,
)
from .exceptions import (
    InvalidListingIdError,
    InvalidListingPayloadError,
    ListingNotFoundError,
    ListingOwnershipError,
)
from .repositories import ListingRepository

__all__ = [
    "CREDENTIAL_FIELDS",
    "RESERVED_FIELDS",
    "InvalidListingIdError",
    "InvalidListingPayloadError",
    "Listing",
    "ListingNotFoundError",
    "ListingOwnershipError",
    "ListingRepository",
    "clean_fields",
    "is_credential_field",
    "new_listing_id",
    "parse_listing_id",
]
