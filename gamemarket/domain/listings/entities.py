# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from gamemarket.domain.exceptions import InvariantViolation

from .exceptions import InvalidListingIdError

LISTING_ID_RE = re.compile(r"^[0-9a-f]{32}$")

# Keys owned by the store; a caller-supplied value is dropped on insert.
RESERVED_FIELDS = frozenset({"id", "_id", "created_at", "owner_id"})

# Compared after lower-casing and removing "-" and "_".
CREDENTIAL_FIELDS = frozenset(
    {"password", "passwordhash", "passwd", "pwd", "hash", "salt", "secret", "token"}
)


def new_listing_id() -> str:
    return uuid.uuid4().hex


def parse_listing_id(value: object) -> str:
    """Return the canonical form of a listing id or raise ``InvalidListingIdError``."""

    if not isinstance(value, str):
        raise InvalidListingIdError(str(value))
    candidate = value.strip().lower()
    if not LISTING_ID_RE.fullmatch(candidate):
        raise InvalidListingIdError(value)
    return candidate


def is_credential_field(name: str) -> bool:
    return name.lower().replace("_", "").replace("-", "") in CREDENTIAL_FIELDS


def clean_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {str(k): v for k, v in fields.items() if str(k) not in RESERVED_FIELDS}


@dataclass(slots=True, frozen=True)
class Listing:
    id: str
    fields: Mapping[str, Any]
    created_at: datetime
    owner_id: int | None = field(default=None)

    def __post_init__(self) -> None:
        if not LISTING_ID_RE.fullmatch(self.id):
            raise InvariantViolation("malformed listing id", field="id")
        if self.created_at.tzinfo is None:
            raise InvariantViolation("created_at must be timezone aware", field="created_at")

    def is_owned_by(self, user_id: int | None) -> bool:
        return self.owner_id is None or self.owner_id == user_id

    def to_dict(self, *, redact_credentials: bool = True) -> dict[str, Any]:
        payload: dict[str, Any] = {"id": self.id}
        for key, value in self.fields.items():
            if redact_credentials and is_credential_field(key):
                continue
            payload[key] = value
        payload["created_at"] = self.created_at.isoformat()
        payload["owner_id"] = self.owner_id
        return payload
